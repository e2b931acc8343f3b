"""
AVL tree based ordered set.

This package provides a self-balancing sorted set with:
- insert(value) - O(log N), returns False for values already present
- has(value) - O(log N) membership test
- Lazy in-order iteration - O(height) memory
- iterator(start, end) - Range iteration over [start, end)
- union(*others) - Merge with other sorted sources
"""

from avlset.models.sortedcontainers import AVLTreeSet

__all__ = ["AVLTreeSet"]
