"""Application entry point and setup for the MashUp daily puzzle."""

import logging
import sys
from datetime import date

from PySide6.QtWidgets import QApplication

from mashup.core.engine import PuzzleEngine
from mashup.core.puzzles import PuzzleRepository
from mashup.core.storage import JsonFileStore
from mashup.ui.main_window import MainWindow
from mashup.ui.qt_scheduler import QtScheduler


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load today's puzzle and saved progress, then start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("MashUp")
    app.setApplicationDisplayName("MashUp")

    puzzles = PuzzleRepository()
    store = JsonFileStore()
    puzzle = puzzles.for_date(date.today())
    logging.info("Using store %s, puzzle %s", store.path, puzzle.key)

    engine = PuzzleEngine(puzzle, store, scheduler=QtScheduler(app))

    window = MainWindow(engine)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
