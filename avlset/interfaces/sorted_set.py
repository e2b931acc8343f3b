"""
SortedSet abstract base class for ordered, duplicate-free containers.
"""

from abc import abstractmethod
from typing import Any

from avlset.interfaces.range_iterable import RangeIterable


class SortedSet(RangeIterable):
    """
    Abstract base class for sorted set containers.

    Provides O(log N) insert and membership operations.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - AVLTreeSet: Height-balanced binary search tree
    """

    @abstractmethod
    def insert(self, value: Any) -> bool:
        """
        Insert a value if it is not already present.

        Args:
            value: The value to insert. Must be totally ordered with the
                values already stored.

        Returns:
            True if the value was inserted, False if an equal value was
            already present (the set is left unchanged).

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, value: Any) -> bool:
        """
        Check if a value is present.

        Args:
            value: The value to check.

        Returns:
            True if an equal value is stored, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored values.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def height(self) -> int:
        """
        Return the height of the underlying tree (0 when empty).

        Time complexity: O(1)
        """
        pass
