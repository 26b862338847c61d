"""QTimer-backed scheduler for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtTimerHandle:
    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self._timer = timer
        self._callback = callback
        self._active = True
        timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._timer.stop()
        self._timer.deleteLater()

    def _on_timeout(self) -> None:
        if not self._active:
            return
        self._active = False
        self._timer.deleteLater()
        self._callback()


class QtScheduler:
    """Single-shot timers on the Qt event loop. Timers are parented to ``parent`` when given."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def call_later(self, delay: float, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer, callback)
        timer.start(max(int(delay * 1000), 0))
        return handle
