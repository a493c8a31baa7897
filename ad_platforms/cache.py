"""
Search result cache owned by the store.

Guarded by its own lock so lookups and inserts never need the store's
read/write lock. Entries are only valid for one dataset version; the store
clears the whole cache when it swaps datasets.
"""

from __future__ import annotations

import threading


class SearchCache:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, list[str]] = {}

    def get(self, location: str) -> list[str] | None:
        """Return a copy of the cached result, or None on a miss."""
        with self._lock:
            cached = self._entries.get(location)
        return list(cached) if cached is not None else None

    def add(self, location: str, platforms: list[str]) -> bool:
        """Insert unless an entry already exists. Returns True if stored."""
        with self._lock:
            if location in self._entries:
                return False
            self._entries[location] = list(platforms)
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
