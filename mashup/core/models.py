"""Board data model: words, slot geometry and the completed-game snapshot."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

SLOT_COUNT = 10
PAIR_COUNT = SLOT_COUNT // 2
MAX_TRIES = 3


def pair_index(slot: int) -> int:
    """Pair that owns a slot: slots 2i and 2i+1 belong to pair i."""
    return slot // 2


def pair_slots(index: int) -> Tuple[int, int]:
    return 2 * index, 2 * index + 1


def _new_word_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Word:
    """A draggable word card. Identity is ``id``; ``text`` never changes."""

    text: str
    id: str = field(default_factory=_new_word_id)
    is_paired: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "isPaired": self.is_paired}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Word":
        if not isinstance(data, dict):
            raise ValueError(f"word must be an object, got {data!r}")
        try:
            return cls(text=str(data["text"]), id=str(data["id"]), is_paired=bool(data.get("isPaired", False)))
        except KeyError as e:
            raise ValueError(f"word is missing {e}") from e


@dataclass
class SavedGameState:
    """Final board of a completed day, restored verbatim on reopen."""

    words: List[Word]
    active_words: List[Optional[Word]]
    results_message: str
    correct_pair_indices: FrozenSet[int]
    tries_remaining: int
    completion_date: date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "words": [w.to_dict() for w in self.words],
            "activeWords": [w.to_dict() if w is not None else None for w in self.active_words],
            "resultsMessage": self.results_message,
            "correctPairIndices": sorted(self.correct_pair_indices),
            "triesRemaining": self.tries_remaining,
            "completionDate": self.completion_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedGameState":
        """Parse a stored snapshot. Raises ValueError on anything malformed."""
        if not isinstance(data, dict):
            raise ValueError("snapshot must be an object")
        try:
            words = [Word.from_dict(item) for item in data["words"]]
            active_words = [
                Word.from_dict(item) if item is not None else None for item in data["activeWords"]
            ]
            indices = frozenset(int(i) for i in data["correctPairIndices"])
            tries = int(data["triesRemaining"])
            completion_date = date.fromisoformat(str(data["completionDate"]))
            message = str(data["resultsMessage"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed snapshot: {e}") from e

        if len(active_words) != SLOT_COUNT:
            raise ValueError(f"snapshot has {len(active_words)} slots, expected {SLOT_COUNT}")
        if any(i < 0 or i >= PAIR_COUNT for i in indices):
            raise ValueError(f"snapshot pair indices out of range: {sorted(indices)}")
        if not 0 <= tries <= MAX_TRIES:
            raise ValueError(f"snapshot tries out of range: {tries}")

        return cls(
            words=words,
            active_words=active_words,
            results_message=message,
            correct_pair_indices=indices,
            tries_remaining=tries,
            completion_date=completion_date,
        )
