"""
Data models for the sorted set containers.
"""

from avlset.models.exceptions import SetModifiedError, TreeInvariantError
from avlset.models.node import AVLNode

__all__ = [
    "AVLNode",
    "SetModifiedError",
    "TreeInvariantError",
]
