"""High-level API for JSONTreeLib.

This module provides simple, functional interfaces for common traversal
operations. These functions wrap the container entry points and the
NodeCollector for ease of use in simple cases, and accept plain Python
data or JSON text as well as JSONObject/JSONArray roots.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .config import TraversalConfig, TraversalMode, parse_mode
from .core.container import JSONArray, JSONException, JSONObject, wrap
from .core.collector import NodeCollector
from .core.node import JSONNode
from .core.stream import NodeStream


def as_container(root: Any) -> Union[JSONObject, JSONArray]:
    """Coerce a traversal root into a JSONObject or JSONArray.

    Args:
        root: A container, a plain dict/list, or JSON text

    Returns:
        The root as a container. Plain data is converted, so writes through
        ``update_value`` land in the converted tree, not the original dict.

    Raises:
        JSONException: If root cannot be turned into a container
    """
    if isinstance(root, (JSONObject, JSONArray)):
        return root

    if isinstance(root, (str, bytes)):
        text = root.decode() if isinstance(root, bytes) else root
        stripped = text.lstrip()
        if stripped.startswith('['):
            return JSONArray.from_json(text)
        return JSONObject.from_json(text)

    if isinstance(root, (dict, list, tuple)):
        return wrap(root)

    raise JSONException(
        f"Cannot traverse {type(root).__name__}; expected a JSON object or array"
    )


def traverse_json(
    root: Any,
    mode: Union[TraversalMode, str] = TraversalMode.FULL,
    error_policy: Optional[Any] = None,
    base_path: str = "",
) -> NodeStream:
    """Simple interface for JSON traversal.

    This is the primary high-level function. It handles the common case of
    wanting to iterate over nodes without building a config by hand.

    Args:
        root: JSONObject, JSONArray, plain dict/list, or JSON text
        mode: Traversal mode ("full", "leaves", "flat")
        error_policy: Receives per-entry faults (default logs and skips)
        base_path: Prefix for every produced path

    Returns:
        NodeStream over the collected nodes

    Example:
        >>> for node in traverse_json({"a": {"b": 1}}):
        ...     print(node.path)
        a
        a/b
    """
    config = TraversalConfig(
        mode=parse_mode(mode),
        base_path=base_path,
        error_policy=error_policy,
    )
    collector = NodeCollector.from_config(as_container(root), config)
    return NodeStream(collector.nodes)


def stream_nodes(root: Any, **kwargs) -> NodeStream:
    """Stream every node, depth-first pre-order."""
    return traverse_json(root, TraversalMode.FULL, **kwargs)


def stream_leaves(root: Any, **kwargs) -> NodeStream:
    """Stream only the primitive-valued nodes."""
    return traverse_json(root, TraversalMode.LEAVES, **kwargs)


def stream_flat(root: Any, **kwargs) -> NodeStream:
    """Stream only the immediate children of the root."""
    return traverse_json(root, TraversalMode.FLAT, **kwargs)


def get_paths(
    root: Any,
    mode: Union[TraversalMode, str] = TraversalMode.FULL,
    **kwargs
) -> List[str]:
    """Get the path of every node a traversal produces.

    Example:
        >>> get_paths({"book": [{"title": "T"}]})
        ['book', 'book[0]', 'book[0]/title']
    """
    return traverse_json(root, mode, **kwargs).paths()


def find_nodes(
    root: Any,
    predicate: Callable[[JSONNode], bool],
    mode: Union[TraversalMode, str] = TraversalMode.FULL,
    **kwargs
) -> Iterator[JSONNode]:
    """Find nodes that match a predicate.

    Args:
        root: Traversal root (see traverse_json)
        predicate: Function that returns True for matching nodes
        mode: Traversal mode
        **kwargs: Traversal options (see traverse_json)

    Yields:
        Nodes that match the predicate, in traversal order

    Example:
        >>> # Find all numbers
        >>> for node in find_nodes(doc, lambda n: isinstance(n.value, int)):
        ...     print(node.path)
    """
    yield from traverse_json(root, mode, **kwargs).filter(predicate)


def count_nodes(
    root: Any,
    mode: Union[TraversalMode, str] = TraversalMode.FULL,
    **kwargs
) -> int:
    """Count the nodes a traversal produces."""
    return traverse_json(root, mode, **kwargs).count()


def update_leaves(
    root: Any,
    func: Callable[[JSONNode], Any],
    **kwargs
) -> int:
    """Rewrite leaf values in place.

    Every leaf that is a member of an object gets ``func(node)`` written
    back through ``update_value``. Array elements have no parent object
    and are left alone.

    Args:
        root: JSONObject or JSONArray to modify
        func: Function computing the new value from the node

    Returns:
        Number of values written
    """
    written = 0
    for node in traverse_json(root, TraversalMode.LEAVES, **kwargs):
        if node.update_value(func(node)):
            written += 1
    return written


def get_tree_stats(root: Any, **kwargs) -> Dict[str, Any]:
    """Get statistics about a JSON tree.

    Args:
        root: Traversal root (see traverse_json)
        **kwargs: Traversal options (see traverse_json)

    Returns:
        Dictionary with tree statistics

    Example:
        >>> stats = get_tree_stats({"a": {"b": 1, "c": [2, 3]}})
        >>> stats['total_nodes'], stats['leaf_nodes'], stats['max_depth']
        (5, 3, 3)
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'object_nodes': 0,
        'array_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    for node in traverse_json(root, TraversalMode.FULL, **kwargs):
        stats['total_nodes'] += 1

        if node.is_object():
            stats['object_nodes'] += 1
        elif node.is_array():
            stats['array_nodes'] += 1
        else:
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], node.depth)

        if node.depth not in stats['depths']:
            stats['depths'][node.depth] = 0
        stats['depths'][node.depth] += 1

    return stats
