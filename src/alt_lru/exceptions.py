"""Custom exception classes.

Argument errors raised by the cache also subclass the matching builtin
(ValueError, TypeError, IndexError) so callers can catch either.
A missing key is never an error.
"""

from __future__ import annotations


class CacheError(Exception):
    """Base class for cache errors."""


class ArgumentError(CacheError):
    """An argument passed to a cache operation was rejected.

    When a parameter is named the message is suffixed with it, e.g.
    ``Must be greater than 0. (Parameter 'capacity')``.
    """

    def __init__(self, message: str, param_name: str | None = None) -> None:
        self.param_name = param_name
        if param_name:
            message = f"{message} (Parameter '{param_name}')"
        super().__init__(message)


class InvalidCapacityError(ArgumentError, ValueError):
    """Raised when a cache is constructed with a non-positive capacity."""

    def __init__(self, param_name: str = "capacity") -> None:
        super().__init__("Must be greater than 0.", param_name)


class ArgumentNullError(ArgumentError, TypeError):
    """Raised when a required argument is None."""

    def __init__(self, param_name: str) -> None:
        super().__init__("Value cannot be null.", param_name)


class ArgumentOutOfRangeError(ArgumentError, IndexError):
    """Raised when an index argument is outside the accepted range."""

    def __init__(self, param_name: str) -> None:
        super().__init__("Specified argument was out of the range of valid values.", param_name)


class InsufficientSpaceError(ArgumentError, ValueError):
    """Raised when a destination sequence cannot hold every cached pair."""

    def __init__(self) -> None:
        super().__init__("Not enough elements after arrayIndex in the destination array.")


class EmptyRecencyListError(CacheError, LookupError):
    """Raised when evicting from an empty recency list."""


class InvariantViolationError(CacheError):
    """Internal structures disagree with each other.

    Raised only by explicit consistency checks.
    """
