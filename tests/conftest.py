"""Shared test fixtures."""

from __future__ import annotations

from typing import Callable

import pytest
import structlog

from alt_lru.cache import LRUCache
from alt_lru.config import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear the lru_cache on get_settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration made by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_cache() -> Callable[..., LRUCache[int, int]]:
    """Factory for integer caches, optionally pre-filled with (key, value) pairs."""

    def _make(capacity: int, *pairs: tuple[int, int], default: int | None = 0) -> LRUCache[int, int]:
        cache: LRUCache[int, int] = LRUCache(capacity, default=default)
        for key, value in pairs:
            cache.add(key, value)
        return cache

    return _make


@pytest.fixture
def full_cache(make_cache) -> LRUCache[int, int]:
    """Capacity-4 cache holding 1->9, 2->8, 3->7, 4->6 (4 most recent)."""
    return make_cache(4, (1, 9), (2, 8), (3, 7), (4, 6))
