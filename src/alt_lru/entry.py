"""Cache entries and the slot arena that owns them.

Entries live in a flat, pre-sized list and refer to their neighbours by
integer handle (slot position) instead of by object reference.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, TypeVar

from alt_lru.exceptions import InvariantViolationError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# Handle value meaning "no entry".
NIL = -1


@dataclass(slots=True, eq=False)
class Entry(Generic[K, V]):
    """One cached key/value pair and its position in recency order.

    ``key``, ``value`` and ``live`` are guarded by ``lock``; ``prev`` and
    ``next`` belong to the recency list and are guarded by the cache mutex.
    """

    key: K
    value: V
    prev: int = NIL
    next: int = NIL
    live: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def holds(self, key: Any) -> bool:
        """True if this entry is linked in and currently stores ``key``.

        Identity is checked before equality, matching dict lookup, so keys
        such as NaN that are unequal to themselves still match.
        """
        return self.live and (self.key is key or self.key == key)


class EntryArena(Generic[K, V]):
    """Fixed-size slot container for entries.

    Released slots go on a free list and are handed out again before any
    untouched slot. An Entry object, once created for a slot, stays in that
    slot for the lifetime of the arena, so its lock is stable.

    Not thread-safe; callers hold the cache mutex for allocate/release/reset.
    """

    def __init__(self, size: int) -> None:
        self._slots: list[Entry[K, V] | None] = [None] * size
        self._free: list[int] = []
        self._next_unused = 0

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, handle: int) -> Entry[K, V]:
        entry = self._slots[handle]
        if entry is None:
            raise IndexError(f"slot {handle} has never been allocated")
        return entry

    @property
    def allocated(self) -> int:
        """Number of slots currently handed out."""
        return self._next_unused - len(self._free)

    def allocate(self, key: K, value: V) -> int:
        """Store a new live entry and return its handle."""
        if self._free:
            handle = self._free.pop()
            entry = self._used(handle)
            with entry.lock:
                entry.key = key
                entry.value = value
                entry.live = True
            entry.prev = entry.next = NIL
            return handle

        if self._next_unused >= len(self._slots):
            raise InvariantViolationError("entry arena is full")
        handle = self._next_unused
        self._slots[handle] = Entry(key, value, live=True)
        self._next_unused += 1
        return handle

    def release(self, handle: int) -> None:
        """Mark the slot dead and make it available for reuse."""
        entry = self[handle]
        with entry.lock:
            entry.live = False
            # Drop the references so released values can be collected.
            entry.key = None  # type: ignore[assignment]
            entry.value = None  # type: ignore[assignment]
        entry.prev = entry.next = NIL
        self._free.append(handle)

    def reset(self) -> None:
        """Release every slot."""
        for handle in range(self._next_unused):
            entry = self._used(handle)
            with entry.lock:
                entry.live = False
                entry.key = None  # type: ignore[assignment]
                entry.value = None  # type: ignore[assignment]
            entry.prev = entry.next = NIL
        # Reversed so that slot 0 is handed out first again.
        self._free = list(range(self._next_unused - 1, -1, -1))

    def _used(self, handle: int) -> Entry[K, V]:
        """Entry for a slot that bookkeeping says was already handed out."""
        entry = self._slots[handle]
        if entry is None:
            raise InvariantViolationError(f"slot {handle} is tracked but was never allocated")
        return entry
