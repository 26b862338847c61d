from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

PAIRS_PER_PUZZLE = 5

Pair = Tuple[str, str]


@dataclass(frozen=True)
class Puzzle:
    key: str
    title: str
    pairs: Tuple[Pair, ...]

    def words(self) -> List[str]:
        """All ten words, flattened in pair order (first, second, first, ...)."""
        return [text for pair in self.pairs for text in pair]


def _default_puzzles_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "puzzles"


class PuzzleRepository:
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or _default_puzzles_dir()
        self._puzzles = self._load_puzzles()

    def all(self) -> List[Puzzle]:
        return list(self._puzzles.values())

    def get(self, key: str) -> Puzzle:
        return self._puzzles[key]

    def for_date(self, day: date) -> Puzzle:
        """Pick the puzzle for a calendar day. Stable for a given day and file set."""
        puzzles = self.all()
        return puzzles[day.toordinal() % len(puzzles)]

    def _load_puzzles(self) -> Dict[str, Puzzle]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Puzzles directory not found: {base_dir}")

        puzzles: Dict[str, Puzzle] = {}

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^puzzle(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        for puzzle_path in sorted(base_dir.glob("puzzle*.yaml"), key=_sort_key):
            key = puzzle_path.stem
            raw = yaml.safe_load(puzzle_path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{puzzle_path.name}: expected YAML with 'title' and 'pairs'")
            title = raw.get("title")
            if not title or not isinstance(title, str):
                raise ValueError(f"{puzzle_path.name}: missing or invalid 'title'")
            pairs = _parse_pairs(puzzle_path.name, raw.get("pairs"))
            puzzles[key] = Puzzle(key=key, title=title.strip(), pairs=pairs)

        if not puzzles:
            raise ValueError("No puzzle files (puzzle*.yaml) found in data/puzzles")
        return puzzles


def _parse_pairs(name: str, raw_pairs: object) -> Tuple[Pair, ...]:
    if not isinstance(raw_pairs, list):
        raise ValueError(f"{name}: 'pairs' must be a list")
    if len(raw_pairs) != PAIRS_PER_PUZZLE:
        raise ValueError(f"{name}: expected {PAIRS_PER_PUZZLE} pairs, got {len(raw_pairs)}")

    pairs: List[Pair] = []
    for item in raw_pairs:
        if not isinstance(item, list) or len(item) != 2:
            raise ValueError(f"{name}: each pair must be a two-word list, got {item!r}")
        first, second = (str(text).strip() for text in item)
        if not first or not second:
            raise ValueError(f"{name}: empty word in pair {item!r}")
        pairs.append((first, second))

    words = [text for pair in pairs for text in pair]
    if len(set(words)) != len(words):
        # slot checks compare by text, so a repeated word would be ambiguous
        raise ValueError(f"{name}: words must be unique")
    return tuple(pairs)
