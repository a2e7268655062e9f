"""Thread-safe least-recently-used cache.

Combines an Index (key -> entry handle) with a RecencyList (handles in
most- to least-recently-used order) over a fixed-size EntryArena.

Locking:
    * ``self._lock`` (one per cache) guards the recency links, the
      allocate-or-evict branch of ``put``, removal, ``clear`` and every
      snapshot. Index writes only ever happen while it is held.
    * Each entry's own lock guards its key, value and liveness, so a value
      update on one key does not wait on unrelated promotions.
    * Lock order is cache lock -> entry lock, never the reverse.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Generic, Hashable, Iterator, MutableSequence, TypeVar

from alt_lru.entry import NIL, EntryArena
from alt_lru.exceptions import (
    ArgumentNullError,
    ArgumentOutOfRangeError,
    InsufficientSpaceError,
    InvalidCapacityError,
    InvariantViolationError,
)
from alt_lru.index import Index
from alt_lru.recency import RecencyList

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Fixed-capacity key/value cache evicting the least recently used entry.

    Both reads and writes count as use. A missing key is a normal result:
    ``try_get`` reports it with a flag and ``cache[key]`` returns the
    ``default`` given at construction.

    Example:
        cache: LRUCache[int, int] = LRUCache(2, default=0)
        cache.put(1, 1)
        cache.put(2, 2)
        cache.try_get(1)   # (True, 1); key 2 is now least recently used
        cache.put(3, 3)    # evicts 2
        cache[2]           # 0
    """

    def __init__(self, capacity: int, default: V | None = None) -> None:
        """
        Initialize the cache.

        Args:
            capacity: Maximum number of entries. Must be > 0.
            default: Value returned by ``cache[key]`` for a missing key.

        Raises:
            InvalidCapacityError: If capacity is not a positive integer
        """
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise InvalidCapacityError("capacity")

        self._capacity = capacity
        self._default = default
        self._count = 0
        self._arena: EntryArena[K, V] = EntryArena(capacity)
        self._index: Index[K, V] = Index(self._arena)
        self._recency: RecencyList[K, V] = RecencyList(self._arena)
        self._lock = threading.Lock()

        logger.debug("LRUCache initialized", extra={"capacity": capacity})

    def __repr__(self) -> str:
        return f"<LRUCache count={self._count}/{self._capacity}>"

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    # Reads

    def try_get(self, key: K) -> tuple[bool, V | None]:
        """
        Look up ``key`` and mark it as most recently used.

        Returns:
            ``(True, value)`` on a hit, ``(False, None)`` on a miss.
            A miss has no side effects.
        """
        handle = self._index.lookup(key)
        if handle is None:
            return False, None

        # Already most recently used: nothing to relink, so skip the cache lock.
        if handle == self._recency.head:
            entry = self._arena[handle]
            with entry.lock:
                if entry.holds(key):
                    return True, entry.value

        with self._lock:
            # Re-read under the lock: the key may have been evicted or
            # moved to another slot since the unlocked check.
            handle = self._index.lookup(key)
            if handle is None:
                return False, None
            self._recency.promote(handle)
            return True, self._read_value(handle)

    def get(self, key: K, default: V | None = None) -> V | None:
        found, value = self.try_get(key)
        return value if found else default

    def __getitem__(self, key: K) -> V | None:
        found, value = self.try_get(key)
        return value if found else self._default

    def contains_key(self, key: K) -> bool:
        return self._index.contains(key)

    def __contains__(self, key: object) -> bool:
        return self._index.contains(key)  # type: ignore[arg-type]

    def contains(self, key: K, value: V) -> bool:
        """True if ``key`` is cached and its value equals ``value``."""
        handle = self._index.lookup(key)
        if handle is None:
            return False
        entry = self._arena[handle]
        with entry.lock:
            return entry.holds(key) and entry.value == value

    # Writes

    def put(self, key: K, value: V) -> None:
        """
        Insert or update ``key`` and mark it as most recently used.

        An existing key is updated in place. A new key takes a fresh slot
        while the cache is below capacity; at capacity it takes over the
        slot of the least recently used entry, which is evicted.
        """
        handle = self._index.lookup(key)
        if handle is not None and self._assign(handle, key, value):
            with self._lock:
                if self._index.lookup(key) == handle:
                    self._recency.promote(handle)
            return

        with self._lock:
            handle = self._index.lookup(key)
            if handle is None:
                self._insert(key, value)
                return
            if not self._assign(handle, key, value):
                raise InvariantViolationError(f"slot {handle} is indexed under {key!r} but holds another key")
            self._recency.promote(handle)

    def add(self, key: K, value: V) -> None:
        self.put(key, value)

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def remove(self, key: K) -> bool:
        """Remove ``key``. Returns False if it was not cached."""
        if not self._index.contains(key):
            return False

        with self._lock:
            handle = self._index.remove(key)
            if handle is None:
                return False
            self._recency.detach(handle)
            self._arena.release(handle)
            self._count -= 1
        return True

    def clear(self) -> None:
        with self._lock:
            evicted = self._count
            self._index.clear()
            self._recency.clear()
            self._arena.reset()
            self._count = 0
        logger.debug("LRUCache cleared", extra={"evicted": evicted})

    # Snapshots

    def keys(self) -> list[K]:
        with self._lock:
            return self._index.keys()

    def values(self) -> list[V]:
        with self._lock:
            return self._index.values()

    def items(self) -> list[tuple[K, V]]:
        """All ``(key, value)`` pairs in index order, not recency order."""
        with self._lock:
            return self._snapshot()

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def recency_keys(self) -> list[K]:
        """Keys from most to least recently used."""
        with self._lock:
            return [self._arena[handle].key for handle in self._recency]

    def copy_to(self, array: MutableSequence[Any] | None, array_index: int) -> None:
        """
        Copy every ``(key, value)`` pair into ``array`` starting at ``array_index``.

        Pairs are written in index order.

        Raises:
            ArgumentNullError: If array is None
            ArgumentOutOfRangeError: If array_index is outside [0, len(array)]
            InsufficientSpaceError: If fewer than ``count`` slots remain after array_index
        """
        if array is None:
            raise ArgumentNullError("array")
        if array_index < 0 or array_index > len(array):
            raise ArgumentOutOfRangeError("array_index")

        with self._lock:
            if len(array) - array_index < self._count:
                raise InsufficientSpaceError()
            for offset, pair in enumerate(self._snapshot()):
                array[array_index + offset] = pair

    def check_invariants(self) -> None:
        """
        Verify that the index, recency list and arena agree.

        Raises:
            InvariantViolationError: On the first inconsistency found
        """
        with self._lock:
            indexed = dict(self._index.items())
            if len(indexed) != self._count:
                raise InvariantViolationError(
                    f"index holds {len(indexed)} keys but count is {self._count}"
                )
            if self._count > self._capacity:
                raise InvariantViolationError(
                    f"count {self._count} exceeds capacity {self._capacity}"
                )
            if self._arena.allocated != self._count:
                raise InvariantViolationError(
                    f"arena holds {self._arena.allocated} entries but count is {self._count}"
                )
            if (self._recency.head == NIL) != (self._recency.tail == NIL):
                raise InvariantViolationError("only one of head and tail is set")

            seen: set[int] = set()
            prev = NIL
            handle = self._recency.head
            while handle != NIL:
                if handle in seen:
                    raise InvariantViolationError(f"cycle at slot {handle}")
                seen.add(handle)
                entry = self._arena[handle]
                if entry.prev != prev:
                    raise InvariantViolationError(f"slot {handle} has a broken back link")
                if not entry.live:
                    raise InvariantViolationError(f"slot {handle} is linked but not live")
                if indexed.get(entry.key) != handle:
                    raise InvariantViolationError(f"slot {handle} is not indexed under {entry.key!r}")
                prev = handle
                handle = entry.next

            if prev != self._recency.tail:
                raise InvariantViolationError("tail does not terminate the chain")
            if len(seen) != self._count:
                raise InvariantViolationError(
                    f"{len(seen)} entries reachable from head but count is {self._count}"
                )

    # Internals (cache lock held unless noted)

    def _assign(self, handle: int, key: K, value: V) -> bool:
        """Overwrite the value at ``handle`` if it still belongs to ``key``.

        Safe to call without the cache lock.
        """
        entry = self._arena[handle]
        with entry.lock:
            if not entry.holds(key):
                return False
            entry.value = value
            return True

    def _insert(self, key: K, value: V) -> None:
        if self._count < self._capacity:
            handle = self._arena.allocate(key, value)
            self._count += 1
        else:
            handle = self._recency.evict_tail()
            entry = self._arena[handle]
            with entry.lock:
                evicted_key = entry.key
                entry.key = key
                entry.value = value
            self._index.remove(evicted_key)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Evicted least recently used entry",
                    extra={"evicted_key": evicted_key, "slot": handle},
                )

        self._index.insert(key, handle)
        self._recency.insert_at_head(handle)

    def _read_value(self, handle: int) -> V:
        entry = self._arena[handle]
        with entry.lock:
            return entry.value

    def _snapshot(self) -> list[tuple[K, V]]:
        return [(key, self._read_value(handle)) for key, handle in self._index.items()]
