from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from mashup.core.engine import PuzzleEngine


class EngineBridge(QObject):
    """Re-emits engine state changes as a Qt signal so widgets can connect to them."""

    changed = Signal()

    def __init__(self, engine: PuzzleEngine, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._unsubscribe = engine.subscribe(lambda _engine: self.changed.emit())

    @property
    def engine(self) -> PuzzleEngine:
        return self._engine

    def detach(self) -> None:
        self._unsubscribe()
