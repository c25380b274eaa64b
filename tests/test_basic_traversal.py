"""Basic tests for JSONTreeLib functionality.

This test file demonstrates that the three traversal modes produce the
expected paths, in the expected order.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jsontreelib import JSONArray, JSONObject


def create_nested_array() -> JSONArray:
    """Create a mixed array.

    Structure:
    [
      ["inner1", "inner2"],
      {"name": "John", "age": 30},
      "simple"
    ]
    """
    inner = JSONArray().put("inner1").put("inner2")
    person = JSONObject().put("name", "John").put("age", 30)
    return JSONArray().put(inner).put(person).put("simple")


def test_scenario_all_modes():
    """Test the three modes on a small nested object."""
    print("\n=== Test: All Modes ===")

    root = JSONObject.from_json('{"a": {"b": 1, "c": [2, 3]}}')

    full = root.to_stream().paths()
    leaves = root.to_leaf_stream().paths()
    flat = root.to_flat_stream().paths()

    print(f"full:   {full}")
    print(f"leaves: {leaves}")
    print(f"flat:   {flat}")

    assert full == ["a", "a/b", "a/c", "a/c[0]", "a/c[1]"]
    assert leaves == ["a/b", "a/c[0]", "a/c[1]"]
    assert flat == ["a"]
    print("[PASS] All modes passed")


def test_path_format_object_with_array():
    """Paths join members with '/' and put no '/' before a bracket."""
    root = JSONObject.from_json('{"book": [{"title": "T"}]}')

    paths = root.to_stream().paths()

    assert paths == ["book", "book[0]", "book[0]/title"]


def test_top_level_array_of_primitives():
    """A raw array yields one node per element in full and flat modes."""
    root = JSONArray.from_json('["a", "b"]')

    assert root.to_stream().paths() == ["[0]", "[1]"]
    assert root.to_flat_stream().paths() == ["[0]", "[1]"]
    assert root.to_leaf_stream().paths() == ["[0]", "[1]"]


def test_simple_array_streaming():
    """Test keys and values of a flat array of primitives."""
    arr = JSONArray().put("John").put(30).put(True)

    nodes = arr.to_stream().to_list()

    assert len(nodes) == 3
    values = {node.key: node.value for node in nodes}
    assert values == {"0": "John", "1": 30, "2": True}
    assert [node.path for node in nodes] == ["[0]", "[1]", "[2]"]


def test_nested_array_full_stream():
    """Nested containers are emitted before their contents."""
    nodes = create_nested_array().to_stream().to_list()

    assert [node.path for node in nodes] == [
        "[0]", "[0][0]", "[0][1]",
        "[1]", "[1]/name", "[1]/age",
        "[2]",
    ]
    assert nodes[0].is_array()
    assert nodes[3].is_object()
    assert nodes[5].key == "age"


def test_nested_array_leaf_stream():
    """Only primitive nodes appear in the leaf stream."""
    nodes = create_nested_array().to_leaf_stream().to_list()
    paths = [node.path for node in nodes]

    assert paths == ["[0][0]", "[0][1]", "[1]/name", "[1]/age", "[2]"]
    assert all(node.is_leaf() for node in nodes)
    assert "[0]" not in paths
    assert "[1]" not in paths


def test_nested_array_flat_stream():
    """Only the top level appears in the flat stream."""
    paths = create_nested_array().to_flat_stream().paths()

    assert paths == ["[0]", "[1]", "[2]"]


def test_arrays_of_arrays():
    """Test a deeper structure made only of arrays."""
    level3 = JSONArray().put("deep1").put("deep2")
    level2 = JSONArray().put(level3).put(42)
    level1 = JSONArray().put(level2).put(True)

    assert level1.to_leaf_stream().paths() == [
        "[0][0][0]", "[0][0][1]", "[0][1]", "[1]"
    ]
    assert level1.to_stream().paths() == [
        "[0]", "[0][0]", "[0][0][0]", "[0][0][1]", "[0][1]", "[1]"
    ]
    assert level1.to_flat_stream().paths() == ["[0]", "[1]"]


def test_member_order_follows_insertion():
    """Object members come out in insertion order, not sorted."""
    root = JSONObject().put("zeta", 1).put("alpha", 2).put("mid", 3)

    assert root.to_flat_stream().paths() == ["zeta", "alpha", "mid"]


def test_depth_is_segment_count():
    """Depth counts path segments below the root."""
    root = JSONObject.from_json('{"a": {"c": [2]}}')

    depths = {node.path: node.depth for node in root.to_stream()}

    assert depths == {"a": 1, "a/c": 2, "a/c[0]": 3}


if __name__ == "__main__":
    test_scenario_all_modes()
    test_path_format_object_with_array()
    test_top_level_array_of_primitives()
    print("\n[SUCCESS] All basic tests passed!")
