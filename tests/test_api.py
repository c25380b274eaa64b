"""Tests for the high-level functional API.

Also checks the properties that must hold between the three modes for any
document.
"""

import pytest

from jsontreelib import (
    JSONArray,
    JSONException,
    JSONObject,
    TraversalMode,
    count_nodes,
    find_nodes,
    get_paths,
    get_tree_stats,
    stream_flat,
    stream_leaves,
    stream_nodes,
    traverse_json,
    update_leaves,
)

DOCUMENTS = [
    '{"a": {"b": 1, "c": [2, 3]}}',
    '{"book": [{"title": "T", "tags": ["x", "y"]}, {"title": "U"}], "count": 2}',
    '[[1, [2, 3]], {"k": null}, "s", []]',
    '{"empty": {}, "list": [], "n": 0}',
    '{}',
    '[]',
]


class TestTraverseJson:

    def test_accepts_plain_data(self):
        assert traverse_json({"a": [1]}).paths() == ["a", "a[0]"]
        assert traverse_json([{"a": 1}]).paths() == ["[0]", "[0]/a"]

    def test_accepts_json_text(self):
        assert traverse_json('{"a": {"b": true}}', "leaves").paths() == ["a/b"]
        assert traverse_json('  [1, 2]', "flat").paths() == ["[0]", "[1]"]

    def test_accepts_containers(self):
        root = JSONObject().put("a", 1)
        node = traverse_json(root).to_list()[0]
        assert node.parent is root

    def test_mode_names(self):
        doc = {"a": {"b": 1}}
        assert traverse_json(doc, "full").paths() == ["a", "a/b"]
        assert traverse_json(doc, "LEAVES").paths() == ["a/b"]
        assert traverse_json(doc, "leaf").paths() == ["a/b"]
        assert traverse_json(doc, TraversalMode.FLAT).paths() == ["a"]

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            traverse_json({}, "sideways")

    def test_unsupported_root(self):
        with pytest.raises(JSONException):
            traverse_json(42)

    def test_base_path(self):
        assert traverse_json({"a": 1}, base_path="root").paths() == ["root/a"]
        assert traverse_json([1], base_path="items").paths() == ["items[0]"]

    def test_shortcuts(self):
        doc = {"a": {"b": 1}}
        assert stream_nodes(doc).paths() == ["a", "a/b"]
        assert stream_leaves(doc).paths() == ["a/b"]
        assert stream_flat(doc).paths() == ["a"]


class TestModeProperties:
    """Relationships between the modes that hold for every document."""

    @pytest.mark.parametrize("text", DOCUMENTS)
    def test_leaves_are_a_subset_of_full(self, text):
        full = [(n.path, n.value) for n in traverse_json(text, "full")]
        leaves = traverse_json(text, "leaves").to_list()

        assert len(full) >= len(leaves)
        for node in leaves:
            assert node.is_leaf()
            assert (node.path, node.value) in full

    @pytest.mark.parametrize("text", DOCUMENTS)
    def test_flat_matches_immediate_children(self, text):
        root = traverse_json(text, "flat")
        container = JSONArray.from_json(text) if text.startswith("[") else JSONObject.from_json(text)

        nodes = root.to_list()

        assert len(nodes) == container.length()
        for node in nodes:
            assert node.depth == 1
            assert "/" not in node.path
            assert node.path.count("[") <= 1

    @pytest.mark.parametrize("text", DOCUMENTS)
    def test_full_paths_are_unique(self, text):
        paths = get_paths(text)
        assert len(paths) == len(set(paths))


class TestHelpers:

    def test_get_paths(self):
        assert get_paths({"book": [{"title": "T"}]}) == ["book", "book[0]", "book[0]/title"]
        assert get_paths({"book": [{"title": "T"}]}, "leaves") == ["book[0]/title"]

    def test_find_nodes(self):
        doc = {"a": 1, "b": "two", "c": [3, "four"], "d": True}

        numbers = find_nodes(doc, lambda n: isinstance(n.value, int) and not isinstance(n.value, bool))

        assert [n.path for n in numbers] == ["a", "c[0]"]

    def test_count_nodes(self):
        doc = '{"a": {"b": 1, "c": [2, 3]}}'
        assert count_nodes(doc) == 5
        assert count_nodes(doc, "leaves") == 3
        assert count_nodes(doc, "flat") == 1

    def test_update_leaves(self):
        root = JSONObject.from_json('{"a": 1, "b": {"c": 2}, "d": [3]}')

        written = update_leaves(root, lambda n: n.value * 10)

        assert written == 2
        assert root.to_python() == {"a": 10, "b": {"c": 20}, "d": [3]}

    def test_get_tree_stats(self):
        stats = get_tree_stats({"a": {"b": 1, "c": [2, 3]}})

        assert stats['total_nodes'] == 5
        assert stats['leaf_nodes'] == 3
        assert stats['object_nodes'] == 1
        assert stats['array_nodes'] == 1
        assert stats['max_depth'] == 3
        assert stats['depths'] == {1: 1, 2: 2, 3: 2}

    def test_get_tree_stats_empty(self):
        stats = get_tree_stats({})
        assert stats['total_nodes'] == 0
        assert stats['max_depth'] == 0
