from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from mashup.core.models import SavedGameState

logger = logging.getLogger(__name__)

STATISTICS_KEY = "gameStatistics"
GAME_STATE_KEY = "savedGameState"
LAST_PLAYED_KEY = "lastPlayedDate"
LAST_COMPLETED_KEY = "lastCompletedDate"


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


def default_store_path() -> Path:
    return Path.home() / ".mashup" / "store.json"


class JsonFileStore:
    """Key-value store kept in a single JSON file. Every write goes to disk immediately.

    A corrupt or unreadable file is treated as empty. A failed write is logged and
    leaves the previous file untouched."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._file_path = path or default_store_path()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._file_path

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._save()

    def reset(self) -> None:
        """Forget everything, statistics included."""
        self._data = {}
        self._save()

    def _load(self) -> Dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load store from %s: %s", self._file_path, e)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring store %s: top level is not an object", self._file_path)
            return {}
        return payload

    def _save(self) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(self._data, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._file_path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save store to %s: %s", self._file_path, e)


def _parse_date(raw: Any) -> Optional[date]:
    if raw is None:
        return None
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        logger.warning("Ignoring unparsable stored date %r", raw)
        return None


class DailyGateStore:
    """Last-played and last-completed calendar days."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def last_played(self) -> Optional[date]:
        return _parse_date(self._store.get(LAST_PLAYED_KEY))

    @last_played.setter
    def last_played(self, day: Optional[date]) -> None:
        self._set(LAST_PLAYED_KEY, day)

    @property
    def last_completed(self) -> Optional[date]:
        return _parse_date(self._store.get(LAST_COMPLETED_KEY))

    @last_completed.setter
    def last_completed(self, day: Optional[date]) -> None:
        self._set(LAST_COMPLETED_KEY, day)

    def played_on(self, day: date) -> bool:
        return self.last_played == day

    def completed_on(self, day: date) -> bool:
        return self.last_completed == day

    def _set(self, key: str, day: Optional[date]) -> None:
        if day is None:
            self._store.remove(key)
        else:
            self._store.set(key, day.isoformat())


class SnapshotStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> Optional[SavedGameState]:
        raw = self._store.get(GAME_STATE_KEY)
        if raw is None:
            return None
        try:
            return SavedGameState.from_dict(raw)
        except ValueError as e:
            logger.warning("Discarding saved game state: %s", e)
            return None

    def save(self, state: SavedGameState) -> None:
        self._store.set(GAME_STATE_KEY, state.to_dict())

    def clear(self) -> None:
        self._store.remove(GAME_STATE_KEY)
