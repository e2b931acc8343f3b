"""
Abstract base classes for the sorted set containers.
"""

from avlset.interfaces.range_iterable import RangeIterable
from avlset.interfaces.sorted_set import SortedSet

__all__ = ["RangeIterable", "SortedSet"]
