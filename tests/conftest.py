"""
Shared pytest fixtures for the sorted set tests.
"""

import random

import pytest

from avlset.models.node import AVLNode
from avlset.models.sortedcontainers import AVLTreeSet


def _shape(node: AVLNode | None):
    if node is None:
        return None
    return (node.value, node.height, _shape(node.left), _shape(node.right))


def _check_heights(node: AVLNode | None) -> int:
    if node is None:
        return 0
    left = _check_heights(node.left)
    right = _check_heights(node.right)
    assert node.height == 1 + max(left, right), f"bad height at {node.value!r}"
    assert abs(left - right) <= 1, f"unbalanced at {node.value!r}"
    return node.height


@pytest.fixture(autouse=True)
def no_invariant_env(monkeypatch):
    """Keep AVLSET_CHECK_INVARIANTS from leaking in from the environment."""
    monkeypatch.delenv("AVLSET_CHECK_INVARIANTS", raising=False)


@pytest.fixture
def tree_shape():
    """Provide a function returning a nested (value, height, left, right) tuple."""
    return lambda tree_set: _shape(tree_set._root)


@pytest.fixture
def assert_avl():
    """Provide a function asserting cached heights and balance over a whole tree."""
    return lambda tree_set: _check_heights(tree_set._root)


@pytest.fixture
def empty_set():
    """Provide a fresh AVLTreeSet instance."""
    return AVLTreeSet()


@pytest.fixture
def sample_set():
    """Provide a set built from a small, already balanced insertion order."""
    return AVLTreeSet([5, 3, 8, 1, 4, 7, 9])


@pytest.fixture
def large_sample_values():
    """Provide a shuffled range with duplicates for stress testing."""
    rng = random.Random(1234)
    values = [rng.randint(0, 5000) for _ in range(3000)]
    return values
