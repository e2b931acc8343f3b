"""
K-Way Merge Iterator for merging sorted sources into one sorted stream.
"""

import heapq
from collections.abc import Iterable, Iterator
from typing import Any


class KWayMergeIterator:
    """
    Efficiently merges K sorted iterators using a min-heap.

    Time Complexity: O(M log K) where M = total values, K = number of sources
    Space Complexity: O(K) for the heap

    Values that compare equal, within one source or across sources, are
    emitted once; the copy from the earliest source wins.
    """

    def __init__(self, sources: list[Iterator[Any]]) -> None:
        """
        Initialize k-way merge iterator.

        Args:
            sources: List of iterators, each yielding values in ascending order.
        """
        self._heap: list[tuple[Any, int]] = []
        self._source_iters: list[Iterator[Any] | None] = []

        # Store (value, source_idx) in heap; source_idx breaks ties
        for i, source in enumerate(sources):
            self._source_iters.append(source)
            self._advance_source(i)

    def _advance_source(self, source_idx: int) -> None:
        """Pull the next value of a source onto the heap."""
        source_iter = self._source_iters[source_idx]
        if source_iter is None:
            return

        try:
            value = next(source_iter)
            heapq.heappush(self._heap, (value, source_idx))
        except StopIteration:
            self._source_iters[source_idx] = None

    def __iter__(self) -> "KWayMergeIterator":
        return self

    def __next__(self) -> Any:
        """
        Get the next distinct value in ascending order.

        Raises:
            StopIteration: When all sources are exhausted.
        """
        if not self._heap:
            raise StopIteration

        current, source_idx = heapq.heappop(self._heap)
        self._advance_source(source_idx)

        # Skip equal values
        while self._heap and self._heap[0][0] == current:
            _, dup_source_idx = heapq.heappop(self._heap)
            self._advance_source(dup_source_idx)

        return current


def merge_sorted(sources: Iterable[Iterable[Any]]) -> list[Any]:
    """
    Merge sorted sources into a list of distinct ascending values.

    Args:
        sources: Iterables, each yielding values in ascending order.

    Returns:
        List of distinct values in ascending order.
    """
    return list(KWayMergeIterator([iter(source) for source in sources]))
