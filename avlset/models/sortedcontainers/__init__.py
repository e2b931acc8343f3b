"""
Sorted container implementations.
"""

from avlset.models.sortedcontainers.avl_tree_set import AVLTreeSet, InOrderIterator

__all__ = ["AVLTreeSet", "InOrderIterator"]
