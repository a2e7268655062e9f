"""Doubly linked recency order over arena handles.

The list is intrusive: links are stored on the entries themselves as
handles, and the list only tracks the head (most recently used) and the
tail (least recently used). Every operation is O(1) except iteration.

None of the methods lock; the owning cache holds its mutex around them.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar

from alt_lru.entry import NIL, EntryArena
from alt_lru.exceptions import EmptyRecencyListError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class RecencyList(Generic[K, V]):
    """Most-recently-used to least-recently-used ordering of entries."""

    def __init__(self, arena: EntryArena[K, V]) -> None:
        self._arena = arena
        self._head = NIL
        self._tail = NIL

    def __repr__(self) -> str:
        return f"<RecencyList head={self._head} tail={self._tail}>"

    @property
    def head(self) -> int:
        return self._head

    @property
    def tail(self) -> int:
        return self._tail

    def is_empty(self) -> bool:
        return self._head == NIL

    def detach(self, handle: int) -> None:
        """Unlink ``handle`` from its neighbours, repairing head and tail."""
        entry = self._arena[handle]
        prev_handle, next_handle = entry.prev, entry.next

        if next_handle != NIL:
            self._arena[next_handle].prev = prev_handle
        if prev_handle != NIL:
            self._arena[prev_handle].next = next_handle

        if self._head == handle:
            self._head = next_handle
        if self._tail == handle:
            self._tail = prev_handle

        entry.prev = entry.next = NIL

    def insert_at_head(self, handle: int) -> None:
        """Make ``handle`` the most recently used entry."""
        entry = self._arena[handle]
        entry.prev = NIL
        entry.next = self._head

        if self._head != NIL:
            self._arena[self._head].prev = handle
        self._head = handle

        if self._tail == NIL:
            self._tail = handle

    def promote(self, handle: int) -> None:
        if handle == self._head:
            return
        self.detach(handle)
        self.insert_at_head(handle)

    def evict_tail(self) -> int:
        """Detach and return the least recently used handle.

        The caller is responsible for dropping the key from the index.
        """
        if self._tail == NIL:
            raise EmptyRecencyListError("cannot evict from an empty recency list")
        handle = self._tail
        self.detach(handle)
        return handle

    def clear(self) -> None:
        self._head = NIL
        self._tail = NIL

    def __iter__(self) -> Iterator[int]:
        """Yield handles from head to tail."""
        handle = self._head
        while handle != NIL:
            yield handle
            handle = self._arena[handle].next

    def __len__(self) -> int:
        return sum(1 for _ in self)
