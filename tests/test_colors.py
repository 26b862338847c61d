"""Tests for mashup.ui.colors – board palette."""

from __future__ import annotations

import pytest

from mashup.ui.colors import BoardColors, slot_color


class TestBoardColors:
    @pytest.mark.parametrize(
        "name",
        ["BACKGROUND", "TEXT_PRIMARY", "SLOT_EMPTY", "SLOT_FILLED", "PAIR_CORRECT", "PAIR_WRONG", "WORD_CARD"],
    )
    def test_is_hex(self, name: str):
        value = getattr(BoardColors, name)
        assert value.startswith("#")
        assert len(value) == 7


class TestSlotColor:
    def test_empty(self):
        assert slot_color(False, None) == BoardColors.SLOT_EMPTY

    def test_filled_without_feedback(self):
        assert slot_color(True, None) == BoardColors.SLOT_FILLED

    def test_correct_wins_over_fill(self):
        assert slot_color(True, True) == BoardColors.PAIR_CORRECT

    def test_wrong(self):
        assert slot_color(True, False) == BoardColors.PAIR_WRONG
