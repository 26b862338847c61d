"""Tests for mashup.core.models – words, slot geometry and snapshots."""

from __future__ import annotations

from datetime import date

import pytest

from mashup.core.models import (
    MAX_TRIES,
    PAIR_COUNT,
    SLOT_COUNT,
    SavedGameState,
    Word,
    pair_index,
    pair_slots,
)


# ===========================================================================
# Slot geometry
# ===========================================================================

class TestSlotGeometry:
    def test_constants(self):
        assert SLOT_COUNT == 10
        assert PAIR_COUNT == 5
        assert MAX_TRIES == 3

    @pytest.mark.parametrize("slot,expected", [(0, 0), (1, 0), (2, 1), (7, 3), (9, 4)])
    def test_pair_index(self, slot: int, expected: int):
        assert pair_index(slot) == expected

    def test_pair_slots(self):
        assert [pair_slots(i) for i in range(PAIR_COUNT)] == [(0, 1), (2, 3), (4, 5), (6, 7), (8, 9)]


# ===========================================================================
# Word
# ===========================================================================

class TestWord:
    def test_defaults(self):
        w = Word("Rock")
        assert w.text == "Rock"
        assert not w.is_paired
        assert w.id

    def test_ids_are_unique(self):
        assert Word("Rock").id != Word("Rock").id

    def test_to_dict(self):
        w = Word("Rock", id="abc", is_paired=True)
        assert w.to_dict() == {"id": "abc", "text": "Rock", "isPaired": True}

    def test_from_dict_defaults_is_paired(self):
        w = Word.from_dict({"id": "abc", "text": "Star"})
        assert w == Word("Star", id="abc")

    @pytest.mark.parametrize("payload", [None, "Rock", {"text": "Rock"}, {"id": "x"}])
    def test_from_dict_rejects_garbage(self, payload):
        with pytest.raises(ValueError):
            Word.from_dict(payload)


# ===========================================================================
# SavedGameState
# ===========================================================================

class TestSavedGameState:
    @pytest.fixture()
    def state(self) -> SavedGameState:
        second, hand = Word("Second", id="w1", is_paired=True), Word("Hand", id="w2", is_paired=True)
        rock = Word("Rock", id="w3")
        return SavedGameState(
            words=[second, hand, rock],
            active_words=[second, hand] + [None] * 8,
            results_message="Game over! You found 1 out of 5 pairs.",
            correct_pair_indices=frozenset({0}),
            tries_remaining=0,
            completion_date=date(2026, 10, 18),
        )

    def test_to_dict_keys(self, state: SavedGameState):
        data = state.to_dict()
        assert set(data) == {
            "words",
            "activeWords",
            "resultsMessage",
            "correctPairIndices",
            "triesRemaining",
            "completionDate",
        }
        assert data["activeWords"][2] is None
        assert data["correctPairIndices"] == [0]
        assert data["completionDate"] == "2026-10-18"

    def test_from_dict_restores(self, state: SavedGameState):
        assert SavedGameState.from_dict(state.to_dict()) == state

    def test_wrong_slot_count(self, state: SavedGameState):
        data = state.to_dict()
        data["activeWords"] = data["activeWords"][:4]
        with pytest.raises(ValueError):
            SavedGameState.from_dict(data)

    def test_pair_index_out_of_range(self, state: SavedGameState):
        data = state.to_dict()
        data["correctPairIndices"] = [7]
        with pytest.raises(ValueError):
            SavedGameState.from_dict(data)

    def test_tries_out_of_range(self, state: SavedGameState):
        data = state.to_dict()
        data["triesRemaining"] = 9
        with pytest.raises(ValueError):
            SavedGameState.from_dict(data)

    def test_bad_date(self, state: SavedGameState):
        data = state.to_dict()
        data["completionDate"] = "someday"
        with pytest.raises(ValueError):
            SavedGameState.from_dict(data)

    @pytest.mark.parametrize("missing", ["words", "activeWords", "triesRemaining", "completionDate"])
    def test_missing_key(self, state: SavedGameState, missing: str):
        data = state.to_dict()
        del data[missing]
        with pytest.raises(ValueError):
            SavedGameState.from_dict(data)
