"""Cancellable delayed callbacks used for feedback clearing and answer reveal."""

from __future__ import annotations

from typing import Callable, List, Protocol


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def fire(self) -> None:
        if not self._active:
            return
        self._active = False
        self._callback()


class ManualScheduler:
    """Scheduler driven by an explicit clock. Nothing fires until ``advance`` is called."""

    def __init__(self) -> None:
        self._now = 0.0
        self._timers: List[ManualTimer] = []

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self._now + max(delay, 0.0), callback)
        self._timers.append(timer)
        return timer

    def pending(self) -> int:
        return sum(1 for t in self._timers if t.active)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in deadline order."""
        self._now += seconds
        while True:
            due = [t for t in self._timers if t.active and t.due <= self._now]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            timer.fire()
        self._timers = [t for t in self._timers if t.active]
