"""Thread-safe fixed-capacity LRU cache.

Usage:
    from alt_lru import LRUCache

    cache: LRUCache[str, bytes] = LRUCache(128)
    cache.put("a", b"...")
    found, value = cache.try_get("a")
"""

from alt_lru.cache import LRUCache
from alt_lru.config import Settings, get_settings
from alt_lru.exceptions import (
    ArgumentError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    CacheError,
    EmptyRecencyListError,
    InsufficientSpaceError,
    InvalidCapacityError,
    InvariantViolationError,
)

__all__ = [
    "ArgumentError",
    "ArgumentNullError",
    "ArgumentOutOfRangeError",
    "CacheError",
    "EmptyRecencyListError",
    "InsufficientSpaceError",
    "InvalidCapacityError",
    "InvariantViolationError",
    "LRUCache",
    "Settings",
    "get_settings",
]
__version__ = "0.1.0"
