from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QGuiApplication
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from mashup.core.engine import PuzzleEngine
from mashup.core.models import SLOT_COUNT, Word
from mashup.ui.bridge import EngineBridge
from mashup.ui.colors import BoardColors, slot_color
from mashup.ui.models import build_slot_states


class MainWindow(QMainWindow):
    """Single-screen board: word pool, five pair rows, submit/share and statistics.

    Clicking a pool word drops it into the next free slot; clicking a filled
    slot sends its word back to the pool.
    """

    def __init__(self, engine: PuzzleEngine) -> None:
        super().__init__()
        self._engine = engine
        self._bridge = EngineBridge(engine, self)
        self._bridge.changed.connect(self._refresh)

        self._pool_layout: Optional[QHBoxLayout] = None
        self._slot_buttons: list[QPushButton] = []
        self._submit_button: Optional[QPushButton] = None
        self._share_button: Optional[QPushButton] = None
        self._message_label: Optional[QLabel] = None
        self._answers_label: Optional[QLabel] = None
        self._stats_label: Optional[QLabel] = None

        self.setWindowTitle(f"MashUp – {engine.puzzle.title}")
        self._build_ui()
        self._refresh()

    def _build_ui(self) -> None:
        root = QWidget()
        root.setStyleSheet(f"background: {BoardColors.BACKGROUND}; color: {BoardColors.TEXT_PRIMARY};")
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        self._pool_layout = QHBoxLayout()
        layout.addLayout(self._pool_layout)

        grid = QGridLayout()
        grid.setHorizontalSpacing(8)
        grid.setVerticalSpacing(8)
        for position in range(SLOT_COUNT):
            button = QPushButton()
            button.setMinimumSize(140, 44)
            button.clicked.connect(lambda _checked=False, p=position: self._engine.remove_word(p))
            grid.addWidget(button, position // 2, position % 2)
            self._slot_buttons.append(button)
        layout.addLayout(grid)

        actions = QHBoxLayout()
        self._submit_button = QPushButton("Submit")
        self._submit_button.clicked.connect(lambda _checked=False: self._engine.submit())
        self._share_button = QPushButton("Share")
        self._share_button.clicked.connect(self._copy_share_text)
        actions.addWidget(self._submit_button)
        actions.addWidget(self._share_button)
        layout.addLayout(actions)

        self._message_label = QLabel()
        self._message_label.setAlignment(Qt.AlignCenter)
        self._answers_label = QLabel()
        self._answers_label.setAlignment(Qt.AlignCenter)
        self._stats_label = QLabel()
        self._stats_label.setAlignment(Qt.AlignCenter)
        self._stats_label.setStyleSheet(f"color: {BoardColors.TEXT_MUTED};")
        layout.addWidget(self._message_label)
        layout.addWidget(self._answers_label)
        layout.addWidget(self._stats_label)

        self.setCentralWidget(root)

    def _refresh(self) -> None:
        engine = self._engine
        self._rebuild_pool()

        for state, button in zip(build_slot_states(engine), self._slot_buttons):
            button.setText(state.text or "")
            button.setEnabled(state.text is not None and not state.locked and not engine.game_completed)
            color = slot_color(state.text is not None, state.result)
            button.setStyleSheet(f"background: {color}; border-radius: 8px;")

        self._submit_button.setEnabled(
            engine.all_words_placed and not engine.game_completed and not engine.has_submitted
        )
        self._share_button.setVisible(engine.game_completed)
        self._message_label.setText(engine.results_message)

        if engine.showing_correct_answers:
            lines = [f"{first} + {second}" for first, second in engine.correct_answers]
            self._answers_label.setText("\n".join(lines))
        else:
            self._answers_label.setText("")

        stats = engine.statistics
        self._stats_label.setText(
            f"Played {stats.games_played} · Win {stats.win_percentage:.0f}% · "
            f"Streak {stats.current_streak} · Best {stats.max_streak}"
        )

    def _rebuild_pool(self) -> None:
        while self._pool_layout.count():
            item = self._pool_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        if self._engine.game_completed:
            return
        for word in self._engine.available_words:
            button = QPushButton(word.text)
            button.setStyleSheet(f"background: {BoardColors.WORD_CARD}; color: white; border-radius: 8px;")
            button.clicked.connect(lambda _checked=False, w=word: self._place_next(w))
            self._pool_layout.addWidget(button)

    def _place_next(self, word: Word) -> None:
        position = self._engine.find_next_available_slot()
        if position is not None:
            self._engine.place_word(word, position)

    def _copy_share_text(self) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is not None:
            clipboard.setText(self._engine.share_text())
            self._message_label.setText("Results copied to clipboard")

    def closeEvent(self, event: QCloseEvent) -> None:
        self._bridge.detach()
        self._engine.close()
        super().closeEvent(event)
