"""Key to entry-handle index."""

from __future__ import annotations

import threading
from typing import Generic, Hashable, TypeVar

from alt_lru.entry import EntryArena

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Index(Generic[K, V]):
    """Maps each cached key to the handle of its entry.

    Lookups read the underlying dict without locking. Writes and snapshots
    go through a dedicated lock that is independent of the cache mutex, so
    concurrent writers never lose updates and snapshots never observe a
    dict that is being resized.

    Iteration order is insertion order; it carries no recency meaning.
    """

    def __init__(self, arena: EntryArena[K, V]) -> None:
        self._arena = arena
        self._handles: dict[K, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._handles)

    def lookup(self, key: K) -> int | None:
        return self._handles.get(key)

    def contains(self, key: K) -> bool:
        return key in self._handles

    def insert(self, key: K, handle: int) -> None:
        with self._lock:
            self._handles[key] = handle

    def remove(self, key: K) -> int | None:
        """Drop ``key`` and return the handle it pointed at, if any."""
        with self._lock:
            return self._handles.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._handles)

    def handles(self) -> list[int]:
        with self._lock:
            return list(self._handles.values())

    def items(self) -> list[tuple[K, int]]:
        with self._lock:
            return list(self._handles.items())

    def values(self) -> list[V]:
        """Project each indexed entry onto its value."""
        values = []
        for handle in self.handles():
            entry = self._arena[handle]
            with entry.lock:
                values.append(entry.value)
        return values
