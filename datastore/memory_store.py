from __future__ import annotations

from functools import lru_cache
from threading import Lock
from typing import Dict, Optional

from models.records import Reading


class ReadingStore:
    """In-memory map of composite key to the latest reading written under it."""

    def __init__(self) -> None:
        self._items: Dict[str, Reading] = {}
        self._lock = Lock()

    def add_reading(self, key: str, reading: Reading) -> Reading:
        with self._lock:
            self._items[key] = reading
        return reading

    def get(self, key: str) -> Optional[Reading]:
        with self._lock:
            return self._items.get(key)

    def values(self) -> list[Reading]:
        """Return a snapshot of all stored readings in insertion order."""

        with self._lock:
            return list(self._items.values())

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


@lru_cache
def build_default_store() -> ReadingStore:
    return ReadingStore()
