"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from mashup.core.engine import PuzzleEngine
from mashup.core.models import pair_index


@dataclass
class SlotState:
    """UI state for a single slot: its word, owning pair, lock and feedback status."""

    position: int
    text: Optional[str]
    pair: int
    locked: bool
    result: Optional[bool] = None


def build_slot_states(engine: PuzzleEngine) -> List[SlotState]:
    states = []
    for position, word in enumerate(engine.active_words):
        pair = pair_index(position)
        states.append(
            SlotState(
                position=position,
                text=word.text if word is not None else None,
                pair=pair,
                locked=engine.is_word_in_correct_pair(position),
                result=engine.is_pair_correct(pair),
            )
        )
    return states
