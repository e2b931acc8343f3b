"""
AVL Tree Set implementation for ordered, duplicate-free storage.

Height-balanced, so insert and lookup stay O(log N) for any insertion order.
"""

import logging
import os
from collections.abc import AsyncIterator, Iterable, Iterator
from typing import Any

from avlset.interfaces.sorted_set import SortedSet
from avlset.models.exceptions import SetModifiedError, TreeInvariantError
from avlset.models.node import AVLNode
from avlset.ops.merge_iterator import KWayMergeIterator

logger = logging.getLogger(__name__)

CHECK_INVARIANTS_ENV = "AVLSET_CHECK_INVARIANTS"

_NO_BOUND = object()


def _check_invariants_default() -> bool:
    """Read the default for check_invariants from the environment."""
    flag = os.environ.get(CHECK_INVARIANTS_ENV, "")
    return flag.strip().lower() in ("1", "true", "yes")


class AVLTreeSet(SortedSet):
    """
    AVL Tree implementation of SortedSet.

    Properties maintained after every insert:
    1. BST order: left subtree values < node value < right subtree values
    2. Every node's cached height matches its subtree
    3. Child heights of every node differ by at most 1
    4. No two stored values compare equal

    The set must not be mutated while an iterator over it is live;
    iterators raise SetModifiedError if it is.
    """

    def __init__(
        self,
        iterable: Iterable[Any] | None = None,
        *,
        check_invariants: bool | None = None,
    ) -> None:
        """
        Initialize the set.

        Args:
            iterable: Optional values to insert in order. Later duplicates
                are dropped.
            check_invariants: Validate the whole tree after every successful
                insert. Defaults to the AVLSET_CHECK_INVARIANTS environment
                variable.
        """
        if check_invariants is None:
            check_invariants = _check_invariants_default()
        elif not isinstance(check_invariants, bool):
            raise TypeError(
                f"check_invariants must be a bool, got {type(check_invariants).__name__}"
            )

        self._root: AVLNode | None = None
        self._size: int = 0
        self._version: int = 0
        self._check_invariants = check_invariants

        if iterable is not None:
            for value in iterable:
                self.insert(value)

    @classmethod
    def from_iterable(cls, iterable: Iterable[Any], **kwargs: Any) -> "AVLTreeSet":
        return cls(iterable, **kwargs)

    @property
    def check_invariants(self) -> bool:
        return self._check_invariants

    def insert(self, value: Any) -> bool:
        """Insert a value unless already present. O(log N)"""
        # Find insertion point, remembering the path for the unwind
        path: list[AVLNode] = []
        current = self._root

        while current is not None:
            if value < current.value:
                path.append(current)
                current = current.left
            elif value > current.value:
                path.append(current)
                current = current.right
            else:
                return False

        new_node = AVLNode(value)
        if not path:
            self._root = new_node
        else:
            parent = path[-1]
            if value < parent.value:
                parent.left = new_node
            else:
                parent.right = new_node

        # Rotations keep each node as the root of its subtree, so the
        # recorded path stays valid while unwinding
        for node in reversed(path):
            node.update_height()
            node.rebalance()

        self._size += 1
        self._version += 1

        if self._check_invariants:
            self.validate()
        return True

    def has(self, value: Any) -> bool:
        return self._find_node(value) is not None

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        return self._root.height if self._root is not None else 0

    def min(self) -> Any:
        if self._root is None:
            raise ValueError("min() of an empty set")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.value

    def max(self) -> Any:
        if self._root is None:
            raise ValueError("max() of an empty set")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    def union(self, *others: Iterable[Any]) -> "AVLTreeSet":
        """
        Return a new set with the values of this set and all others.

        Args:
            others: Iterables of values comparable with this set's values.
                Other AVLTreeSets are merged as-is, anything else is sorted
                first.

        Returns:
            A new AVLTreeSet with the same check_invariants setting.
        """
        sources: list[Iterator[Any]] = [iter(self)]
        for other in others:
            if isinstance(other, AVLTreeSet):
                sources.append(iter(other))
            else:
                sources.append(iter(sorted(other)))

        result = AVLTreeSet(
            KWayMergeIterator(sources), check_invariants=self._check_invariants
        )
        logger.debug(f"Merged {len(sources)} sources into {result.size()} values")
        return result

    def validate(self) -> None:
        """
        Check every invariant over the whole tree. O(N)

        Raises:
            TreeInvariantError: On the first violation found.
        """
        _, count = self._validate_subtree(self._root, _NO_BOUND, _NO_BOUND)
        if count != self._size:
            self._fail(f"Tree holds {count} nodes but size is {self._size}")

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: Any) -> bool:
        return self.has(value)

    def __iter__(self) -> Iterator[Any]:
        return InOrderIterator(self)

    def iterator(self, start: Any = None, end: Any = None) -> Iterator[Any]:
        if start is not None and end is not None and start > end:
            raise ValueError(f"start {start!r} is greater than end {end!r}")
        return _RangeIterator(self, start, end)

    def __aiter__(self) -> AsyncIterator[Any]:
        return self.async_iterator()

    def async_iterator(self, start: Any = None, end: Any = None) -> AsyncIterator[Any]:
        return _AsyncRangeIterator(self.iterator(start, end))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AVLTreeSet):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    def __repr__(self) -> str:
        return f"AVLTreeSet({list(self)!r})"

    def _find_node(self, value: Any) -> AVLNode | None:
        """Find node by value."""
        current = self._root
        while current is not None:
            if value < current.value:
                current = current.left
            elif value > current.value:
                current = current.right
            else:
                return current
        return None

    def _validate_subtree(
        self, node: AVLNode | None, low: Any, high: Any
    ) -> tuple[int, int]:
        """Validate a subtree within (low, high). Returns (height, node count)."""
        if node is None:
            return 0, 0

        if low is not _NO_BOUND and not low < node.value:
            self._fail(f"BST order violated: not greater than {low!r}", node.value)
        if high is not _NO_BOUND and not node.value < high:
            self._fail(f"BST order violated: not less than {high!r}", node.value)

        left_height, left_count = self._validate_subtree(node.left, low, node.value)
        right_height, right_count = self._validate_subtree(node.right, node.value, high)

        height = 1 + max(left_height, right_height)
        if node.height != height:
            self._fail(f"Cached height {node.height} != actual height {height}", node.value)
        if abs(left_height - right_height) > 1:
            self._fail(
                f"Unbalanced: left height {left_height}, right height {right_height}",
                node.value,
            )

        return height, left_count + right_count + 1

    def _fail(self, message: str, value: Any = None) -> None:
        logger.error(f"Invariant check failed: {message}")
        raise TreeInvariantError(message, value)


class InOrderIterator(Iterator[Any]):
    """
    Lazy in-order traversal of an AVLTreeSet.

    Keeps a cursor subtree and a stack of ancestors whose value and right
    subtree are still pending, so memory is O(height). Not restartable.
    """

    def __init__(self, tree_set: AVLTreeSet) -> None:
        self._set = tree_set
        self._version = tree_set._version
        self._current: AVLNode | None = tree_set._root
        self._stack: list[AVLNode] = []
        self._exhausted = False

    def __iter__(self) -> "InOrderIterator":
        return self

    def __next__(self) -> Any:
        if self._exhausted:
            raise StopIteration
        if self._set._version != self._version:
            raise SetModifiedError(self._version, self._set._version)

        while True:
            node = self._current
            if node is not None:
                if node.left is not None:
                    self._stack.append(node)
                    self._current = node.left
                    continue

                # No left subtree: emit, then continue with the right one
                # (None for a leaf)
                self._current = node.right
                return node.value

            if not self._stack:
                self._exhausted = True
                raise StopIteration

            node = self._stack.pop()
            self._current = node.right
            return node.value


class _RangeIterator(Iterator[Any]):
    """Iterator for range queries on AVLTreeSet."""

    def __init__(self, tree_set: AVLTreeSet, start: Any, end: Any) -> None:
        self._set = tree_set
        self._version = tree_set._version
        self._stack: list[AVLNode] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(tree_set._root, start)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._stack:
            raise StopIteration
        if self._set._version != self._version:
            raise SetModifiedError(self._version, self._set._version)

        node = self._stack.pop()

        # Check end bound
        if self._end is not None and not node.value < self._end:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node.value

    def _push_left_path(self, node: AVLNode | None, start: Any) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while node is not None:
            if start is not None and node.value < start:
                # Skip nodes less than start
                node = node.right
            else:
                self._stack.append(node)
                node = node.left


class _AsyncRangeIterator(AsyncIterator[Any]):
    """Async adapter over a range iterator (in-memory, no I/O)."""

    def __init__(self, iterator: Iterator[Any]) -> None:
        self._iterator = iterator

    def __aiter__(self) -> "_AsyncRangeIterator":
        return self

    async def __anext__(self) -> Any:
        try:
            return next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration from None
