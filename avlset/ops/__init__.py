"""
Operations over sorted sources.
"""

from avlset.ops.merge_iterator import KWayMergeIterator, merge_sorted

__all__ = ["KWayMergeIterator", "merge_sorted"]
