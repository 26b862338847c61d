from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from mashup.core.models import MAX_TRIES, PAIR_COUNT
from mashup.core.storage import STATISTICS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

MAX_MISTAKES = MAX_TRIES


def _empty_distribution() -> Dict[int, int]:
    return {mistakes: 0 for mistakes in range(MAX_MISTAKES + 1)}


@dataclass
class GameStatistics:
    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    mistake_distribution: Dict[int, int] = field(default_factory=_empty_distribution)

    @property
    def win_percentage(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played * 100.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gamesPlayed": self.games_played,
            "gamesWon": self.games_won,
            "currentStreak": self.current_streak,
            "maxStreak": self.max_streak,
            # JSON object keys are strings
            "mistakeDistribution": {str(k): v for k, v in sorted(self.mistake_distribution.items())},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameStatistics":
        if not isinstance(data, dict):
            raise ValueError("statistics must be an object")
        distribution = _empty_distribution()
        raw_distribution = data.get("mistakeDistribution", {})
        if not isinstance(raw_distribution, dict):
            raise ValueError("mistakeDistribution must be an object")
        try:
            for key, count in raw_distribution.items():
                mistakes = int(key)
                if mistakes not in distribution:
                    logger.warning("Dropping out-of-range mistake count %r", key)
                    continue
                distribution[mistakes] = int(count)
            return cls(
                games_played=int(data.get("gamesPlayed", 0)),
                games_won=int(data.get("gamesWon", 0)),
                current_streak=int(data.get("currentStreak", 0)),
                max_streak=int(data.get("maxStreak", 0)),
                mistake_distribution=distribution,
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"malformed statistics: {e}") from e


class StatisticsTracker:
    """Historical outcomes across days. Survives daily rollover; saved after every update."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._statistics = self._load()

    @property
    def statistics(self) -> GameStatistics:
        return self._statistics

    def record_outcome(self, tries_remaining: int, correct_pair_count: int) -> GameStatistics:
        """Fold one finished game into the totals and persist them."""
        stats = self._statistics
        attempts_used = MAX_TRIES - tries_remaining
        # the first attempt is never a mistake
        mistakes = min(max(attempts_used - 1, 0), MAX_MISTAKES)

        stats.games_played += 1
        stats.mistake_distribution[mistakes] = stats.mistake_distribution.get(mistakes, 0) + 1

        if correct_pair_count == PAIR_COUNT:
            stats.games_won += 1
            stats.current_streak += 1
            stats.max_streak = max(stats.max_streak, stats.current_streak)
        else:
            stats.current_streak = 0

        logger.info(
            "Recorded game: won=%s mistakes=%d played=%d streak=%d",
            correct_pair_count == PAIR_COUNT,
            mistakes,
            stats.games_played,
            stats.current_streak,
        )
        self._save()
        return stats

    def reset(self) -> None:
        self._statistics = GameStatistics()
        self._save()

    def _load(self) -> GameStatistics:
        raw = self._store.get(STATISTICS_KEY)
        if raw is None:
            return GameStatistics()
        try:
            return GameStatistics.from_dict(raw)
        except ValueError as e:
            logger.warning("Could not load statistics: %s", e)
            return GameStatistics()

    def _save(self) -> None:
        self._store.set(STATISTICS_KEY, self._statistics.to_dict())
