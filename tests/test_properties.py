"""
Property-based tests comparing AVLTreeSet against the built-in set.
"""

from hypothesis import given, strategies as st

from avlset import AVLTreeSet


def _check_node(node) -> int:
    if node is None:
        return 0
    left = _check_node(node.left)
    right = _check_node(node.right)
    assert node.height == 1 + max(left, right)
    assert abs(left - right) <= 1
    return node.height


class TestSetProperties:
    """Invariants that must hold for every insertion history."""

    @given(st.lists(st.integers()))
    def test_iterator_parity(self, xs):
        """Iteration equals the sorted, deduplicated input."""
        assert list(AVLTreeSet(xs)) == sorted(set(xs))

    @given(st.sets(st.integers(min_value=0, max_value=255)), st.integers(0, 255))
    def test_insert_parity(self, reference, x):
        """insert(x) is True exactly when x was not yet a member."""
        tree_set = AVLTreeSet(reference)
        expected = x not in reference
        reference.add(x)

        assert tree_set.insert(x) == expected
        assert list(tree_set) == sorted(reference)

    @given(st.lists(st.integers()))
    def test_strictly_ascending(self, xs):
        """No value is emitted twice or out of order."""
        values = list(AVLTreeSet(xs))

        assert all(a < b for a, b in zip(values, values[1:]))

    @given(st.lists(st.integers()))
    def test_heights_and_balance(self, xs):
        """Cached heights are exact and every node is balanced."""
        tree_set = AVLTreeSet(xs)

        _check_node(tree_set._root)
        tree_set.validate()

    @given(st.lists(st.integers(), min_size=1))
    def test_repeated_insert_is_idempotent(self, xs):
        """Re-inserting any member changes nothing."""
        tree_set = AVLTreeSet(xs)
        before = list(tree_set)
        height = tree_set.height()

        for x in xs:
            assert not tree_set.insert(x)

        assert list(tree_set) == before
        assert tree_set.height() == height

    @given(st.lists(st.text()))
    def test_text_values(self, xs):
        """Strings order the same way as sorted()."""
        assert list(AVLTreeSet(xs)) == sorted(set(xs))

    @given(st.lists(st.integers()), st.integers(), st.integers())
    def test_range_parity(self, xs, a, b):
        """Range iteration equals filtering the reference."""
        start, end = min(a, b), max(a, b)
        expected = [v for v in sorted(set(xs)) if start <= v < end]

        assert list(AVLTreeSet(xs).iterator(start, end)) == expected

    @given(st.lists(st.integers()), st.lists(st.integers()))
    def test_union_parity(self, xs, ys):
        """Union equals the built-in set union."""
        assert list(AVLTreeSet(xs).union(ys)) == sorted(set(xs) | set(ys))
