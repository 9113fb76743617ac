"""
player progress storage.

tracks "last played day" and per-day cached state. the store is passed in
by the caller; nothing here keeps module-level state.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

KEY_PREFIX = "worldofmaps_"
LAST_DAY_INDEX_KEY = KEY_PREFIX + "last_day_index"
LAST_PLAYED_DAY_KEY = KEY_PREFIX + "last_played_day"

# per-day keys that go stale when the day rolls over
DAILY_KEY_PREFIXES = (
    KEY_PREFIX + "daily_progress_",
    KEY_PREFIX + "global_avg_",
)


class PlayerProgressStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def clear(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryProgressStore:
    """dict-backed store, for tests and server-side callers."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def clear(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonProgressStore:
    """
    store backed by a single JSON object on disk.

    the file is re-read on every access and rewritten on every change,
    so two stores on the same path see each other's writes.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"progress file must hold a JSON object: {self.path}")
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def clear(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def keys(self) -> list[str]:
        return list(self._load())


def _read_int(store: PlayerProgressStore, key: str) -> int | None:
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring non-integer value for %s: %r", key, raw)
        return None


def has_played_today(store: PlayerProgressStore, day_index: int) -> bool:
    return _read_int(store, LAST_PLAYED_DAY_KEY) == day_index


def mark_today_as_played(store: PlayerProgressStore, day_index: int) -> None:
    store.set(LAST_PLAYED_DAY_KEY, str(day_index))


def roll_over(store: PlayerProgressStore, day_index: int) -> list[str]:
    """
    purge stale per-day keys once the day index changes.

    args:
        store: player progress store
        day_index: today's day index

    returns:
        keys that were removed
    """
    last_index = _read_int(store, LAST_DAY_INDEX_KEY)
    removed: list[str] = []

    if last_index is not None and last_index != day_index:
        for key in store.keys():
            if key.startswith(DAILY_KEY_PREFIXES):
                store.clear(key)
                removed.append(key)
        if removed:
            logger.info("day %d -> %d: purged %d stale progress keys", last_index, day_index, len(removed))

    store.set(LAST_DAY_INDEX_KEY, str(day_index))
    return removed


def daily_data_key(day_index: int) -> str:
    return f"{KEY_PREFIX}data_daily_{day_index}"


def force_refresh_today(store: PlayerProgressStore, day_index: int) -> None:
    """drop today's cached dataset so the next load refetches it."""
    store.clear(daily_data_key(day_index))
