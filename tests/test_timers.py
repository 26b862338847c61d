"""Tests for mashup.core.timers – deterministic cancellable scheduler."""

from __future__ import annotations

from mashup.core.timers import ManualScheduler


class TestManualScheduler:
    def test_nothing_fires_without_advance(self):
        s = ManualScheduler()
        calls = []
        s.call_later(1.0, lambda: calls.append("a"))
        assert calls == []
        assert s.pending() == 1

    def test_fires_when_due(self):
        s = ManualScheduler()
        calls = []
        timer = s.call_later(1.0, lambda: calls.append("a"))
        s.advance(0.5)
        assert calls == []
        s.advance(0.5)
        assert calls == ["a"]
        assert not timer.active
        assert s.pending() == 0

    def test_fires_once(self):
        s = ManualScheduler()
        calls = []
        s.call_later(1.0, lambda: calls.append("a"))
        s.advance(2.0)
        s.advance(2.0)
        assert calls == ["a"]

    def test_deadline_order(self):
        s = ManualScheduler()
        calls = []
        s.call_later(2.0, lambda: calls.append("late"))
        s.call_later(1.0, lambda: calls.append("early"))
        s.advance(5.0)
        assert calls == ["early", "late"]

    def test_cancel(self):
        s = ManualScheduler()
        calls = []
        timer = s.call_later(1.0, lambda: calls.append("a"))
        timer.cancel()
        s.advance(5.0)
        assert calls == []

    def test_callback_can_schedule(self):
        s = ManualScheduler()
        calls = []
        s.call_later(1.0, lambda: s.call_later(0.0, lambda: calls.append("chained")))
        s.advance(1.0)
        assert calls == ["chained"]

    def test_negative_delay_is_immediate(self):
        s = ManualScheduler()
        calls = []
        s.call_later(-3.0, lambda: calls.append("a"))
        s.advance(0.0)
        assert calls == ["a"]
        assert s.now == 0.0
