"""
Tests for NodeStream, the single-pass sequence returned by traversals.
"""

import operator

import pytest

from jsontreelib import JSONObject, NodeStream, StreamCharacteristics
from jsontreelib.core.node import JSONNode


@pytest.fixture
def document():
    return JSONObject.from_json('{"a": 1, "b": [2, 3], "c": {"d": 4}}')


class TestSinglePass:
    """A stream can only be consumed once."""

    def test_second_iteration_is_empty(self, document):
        stream = document.to_stream()

        first = list(stream)
        second = list(stream)

        assert len(first) == 6
        assert second == []

    def test_fresh_stream_walks_again(self, document):
        document.to_stream().to_list()
        document.put("e", 5)

        assert document.to_flat_stream().paths() == ["a", "b", "c", "e"]

    def test_iter_returns_self(self, document):
        stream = document.to_stream()
        assert iter(stream) is stream


class TestSizeAndAdvance:
    """Pull-style consumption and exact sizing."""

    def test_estimate_size_is_exact(self, document):
        stream = document.to_stream()

        assert stream.estimate_size() == 6
        next(stream)
        assert stream.estimate_size() == 5
        assert operator.length_hint(stream) == 5

    def test_try_advance(self, document):
        stream = document.to_flat_stream()
        seen = []

        assert stream.try_advance(lambda n: seen.append(n.path)) is True
        assert stream.try_advance(lambda n: seen.append(n.path)) is True
        assert stream.try_advance(lambda n: seen.append(n.path)) is True
        assert stream.try_advance(lambda n: seen.append(n.path)) is False
        assert seen == ["a", "b", "c"]

    def test_for_each_remaining(self, document):
        stream = document.to_leaf_stream()
        next(stream)
        seen = []

        stream.for_each_remaining(lambda n: seen.append(n.path))

        assert seen == ["b[0]", "b[1]", "c/d"]
        assert stream.estimate_size() == 0

    def test_cannot_split(self, document):
        stream = document.to_stream()

        assert stream.try_split() is None
        assert stream.estimate_size() == 6

    def test_characteristics(self, document):
        flags = document.to_stream().characteristics

        assert StreamCharacteristics.ORDERED in flags
        assert StreamCharacteristics.SIZED in flags
        assert StreamCharacteristics.NONNULL in flags

    def test_none_elements_rejected(self):
        with pytest.raises(ValueError):
            NodeStream([JSONNode("a", "a", 1), None])


class TestComposition:
    """map / filter / reduce compose without re-walking the tree."""

    def test_reduce_sums_leaves(self, document):
        total = document.to_leaf_stream().reduce(lambda acc, n: acc + n.value, 0)
        assert total == 10

    def test_map_and_filter_are_lazy(self, document):
        stream = document.to_stream()

        containers = stream.filter(lambda n: not n.is_leaf())
        first = next(containers)

        assert first.path == "b"
        # Only what was pulled so far has been consumed
        assert stream.estimate_size() == 4

    def test_map(self, document):
        keys = list(document.to_flat_stream().map(lambda n: n.key))
        assert keys == ["a", "b", "c"]

    def test_count_drains(self, document):
        stream = document.to_stream()

        assert stream.count() == 6
        assert stream.count() == 0

    def test_positional_sum_depends_on_order(self, document):
        weighted = sum(
            position * node.value
            for position, node in enumerate(document.to_leaf_stream(), start=1)
        )
        # a=1, b[0]=2, b[1]=3, c/d=4 in that order
        assert weighted == 1 * 1 + 2 * 2 + 3 * 3 + 4 * 4
