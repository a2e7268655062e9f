"""Tests for LRUCache.copy_to"""

from __future__ import annotations

import pytest

from alt_lru.exceptions import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    InsufficientSpaceError,
)


class TestCopyToErrors:
    """Argument validation"""

    def test_null_destination(self, make_cache) -> None:
        """None destination raises ArgumentNullError"""
        cache = make_cache(1, (1, 9))

        with pytest.raises(ArgumentNullError) as exc_info:
            cache.copy_to(None, 0)

        assert exc_info.value.param_name == "array"
        assert isinstance(exc_info.value, TypeError)

    @pytest.mark.parametrize("index", [-1, 2])
    def test_index_out_of_range(self, make_cache, index: int) -> None:
        """Negative or past-the-end start index raises ArgumentOutOfRangeError"""
        cache = make_cache(1, (1, 9))
        destination = [(1, 2)]

        with pytest.raises(ArgumentOutOfRangeError) as exc_info:
            cache.copy_to(destination, index)

        assert exc_info.value.param_name == "array_index"
        assert isinstance(exc_info.value, IndexError)
        assert destination == [(1, 2)]

    def test_not_enough_space(self, full_cache) -> None:
        """A destination too small for every pair raises with the exact message"""
        destination = [(1, 2)]

        with pytest.raises(InsufficientSpaceError) as exc_info:
            full_cache.copy_to(destination, 0)

        assert str(exc_info.value) == "Not enough elements after arrayIndex in the destination array."
        assert isinstance(exc_info.value, ArgumentError)
        assert isinstance(exc_info.value, ValueError)
        assert destination == [(1, 2)]

    def test_not_enough_space_after_offset(self, full_cache) -> None:
        """Space before the start index does not count"""
        destination = [None] * 5

        with pytest.raises(InsufficientSpaceError):
            full_cache.copy_to(destination, 2)

    def test_failure_leaves_cache_untouched(self, full_cache) -> None:
        """A rejected copy changes neither contents nor recency"""
        items, order = full_cache.items(), full_cache.recency_keys()

        with pytest.raises(InsufficientSpaceError):
            full_cache.copy_to([None], 0)

        assert full_cache.items() == items
        assert full_cache.recency_keys() == order


class TestCopyTo:
    """Successful copies"""

    def test_copies_every_pair(self, full_cache) -> None:
        """Every copied pair is present in the cache"""
        destination = [None] * 4

        full_cache.copy_to(destination, 0)

        keys, values = full_cache.keys(), full_cache.values()
        assert all(key in keys and value in values for key, value in destination)
        assert all(full_cache.contains(key, value) for key, value in destination)

    def test_copies_in_index_order_at_offset(self, full_cache) -> None:
        """Pairs land after the start index in index order"""
        full_cache.try_get(4)
        destination = ["x", "y", None, None, None, None]

        full_cache.copy_to(destination, 2)

        assert destination == ["x", "y", (1, 9), (2, 8), (3, 7), (4, 6)]

    def test_empty_cache_at_end_index(self, make_cache) -> None:
        """An empty cache may be copied at len(destination)"""
        cache = make_cache(3)
        destination = [(0, 0)]

        cache.copy_to(destination, 1)

        assert destination == [(0, 0)]
