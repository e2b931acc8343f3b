"""
Custom exceptions for the sorted set containers.
"""

from typing import Any


class TreeInvariantError(Exception):
    """
    Raised when a tree breaks one of its structural invariants.

    This is a fail-fast error: on a tree maintained only through insert it
    indicates a bug or a value type whose ordering is not a total order.
    """

    def __init__(self, message: str, value: Any = None):
        """
        Initialize invariant error.

        Args:
            message: Description of the violated invariant.
            value: Value stored in the offending node, if known.
        """
        self.value = value
        if value is not None:
            message = f"{message} (at node {value!r})"
        super().__init__(message)


class SetModifiedError(RuntimeError):
    """Raised when a set is mutated while one of its iterators is live."""

    def __init__(self, expected_version: int, actual_version: int):
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"set changed during iteration: "
            f"version {expected_version} -> {actual_version}"
        )
