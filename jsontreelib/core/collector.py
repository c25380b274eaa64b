"""Node collection for JSONTreeLib.

The NodeCollector walks a JSON tree once, depth-first and pre-order, and
buffers the JSONNodes a traversal mode asks for. Everything happens in the
constructor: by the time a caller sees a node the walk is over, so nothing
the caller does to the tree can disturb it.

Three modes are supported through two flags:

    recursive=True,  leaves_only=False   every node at every depth
    recursive=True,  leaves_only=True    primitive-valued nodes only
    recursive=False                      immediate children of the root only
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from .container import JSONArray, JSONException, JSONObject
from .node import JSONNode
from ..config import TraversalConfig
from ..error_policies import ErrorPolicy, resolve_policy

logger = logging.getLogger(__name__)


class NodeCollector:
    """Collects JSONNodes from a JSONObject or JSONArray.

    Cycles are broken with a visited set keyed by container identity, not
    equality: two distinct but equal subtrees are both walked, while a
    container reached a second time (through a back-reference or an alias)
    is emitted as a member but never descended into again.

    Object keys are snapshotted before iteration and each value is fetched
    live, so a member removed by another thread mid-walk is reported to the
    error policy and skipped rather than breaking iteration.
    """

    def __init__(self,
                 root: Any,
                 base_path: str = "",
                 recursive: bool = True,
                 leaves_only: bool = False,
                 error_policy: Optional[ErrorPolicy] = None):
        """Walk root and buffer the nodes the mode calls for.

        Args:
            root: JSONObject or JSONArray to traverse
            base_path: Prefix for every produced path (usually "")
            recursive: Descend into nested objects and arrays
            leaves_only: Only produce primitive-valued nodes
            error_policy: Receives per-entry faults; an ErrorPolicy, a
                ``callback(path, error)`` function, or None for the default

        Raises:
            JSONException: If root is not a JSONObject or JSONArray
        """
        self.recursive = recursive
        self.leaves_only = leaves_only
        self.error_policy = resolve_policy(error_policy)

        self._nodes: List[JSONNode] = []
        # id -> container; holding the container keeps its id from being reused
        self._visited: Dict[int, Any] = {}
        self.errors_encountered = 0

        if not isinstance(root, (JSONObject, JSONArray)):
            raise JSONException(
                f"Cannot traverse {type(root).__name__}; expected JSONObject or JSONArray"
            )
        self._walk(root, base_path)

        logger.debug(
            f"Collected {len(self._nodes)} nodes "
            f"(recursive={recursive}, leaves_only={leaves_only}, "
            f"skipped={self.errors_encountered})"
        )

        # The visited set is only needed during the walk
        self._visited.clear()

    @classmethod
    def from_config(cls, root: Any, config: TraversalConfig) -> 'NodeCollector':
        """Create a collector from a TraversalConfig.

        Raises:
            JSONException: If the configuration is invalid
        """
        config_errors = config.validate()
        if config_errors:
            raise JSONException(f"Invalid configuration: {'; '.join(config_errors)}")

        return cls(
            root,
            base_path=config.base_path,
            recursive=config.recursive,
            leaves_only=config.leaves_only,
            error_policy=config.error_policy,
        )

    @property
    def nodes(self) -> List[JSONNode]:
        """The collected nodes, in traversal order."""
        return self._nodes

    def _mark_visited(self, container: Any) -> bool:
        """Record container as walked.

        Returns:
            False if it had already been walked
        """
        if id(container) in self._visited:
            return False
        self._visited[id(container)] = container
        return True

    def _emit(self, node: JSONNode) -> None:
        if not self.leaves_only or node.is_leaf():
            self._nodes.append(node)

    def _skip(self, error: Exception, path: str, key: str) -> None:
        self.errors_encountered += 1
        self.error_policy.handle(error, path, key)

    def _walk(self, root: Any, base_path: str) -> None:
        """Depth-first pre-order walk with an explicit stack.

        Each stack entry is the pending-entries iterator of one container;
        a node's children are pushed right after the node is emitted, so
        they are finished before its next sibling.
        """
        stack: List[Iterator[JSONNode]] = [self._entries(root, base_path, 0)]

        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue

            self._emit(node)

            if self.recursive and not node.is_leaf():
                entries = self._entries(node.value, node.path, node.depth)
                if entries is not None:
                    stack.append(entries)

    def _entries(self, container: Any, path: str, depth: int) -> Optional[Iterator[JSONNode]]:
        """Return the entries of container, or None if it was already walked."""
        if not self._mark_visited(container):
            return None
        if isinstance(container, JSONObject):
            # Snapshot of keys; values are fetched live
            return self._object_entries(container, list(container.keys()), path, depth)
        return self._array_entries(container, container.length(), path, depth)

    def _object_entries(self, obj: JSONObject, keys: List[str],
                        path: str, depth: int) -> Iterator[JSONNode]:
        for key in keys:
            member_path = f"{path}/{key}" if path else key
            try:
                value = obj.get(key)
            except Exception as e:
                self._skip(e, member_path, key)
                continue

            yield JSONNode(member_path, key, value, obj, depth + 1)

    def _array_entries(self, array: JSONArray, count: int,
                       path: str, depth: int) -> Iterator[JSONNode]:
        # The array node itself, if any, was emitted by whoever holds it
        for index in range(count):
            element_path = f"{path}[{index}]"
            try:
                value = array.get(index)
            except Exception as e:
                self._skip(e, element_path, str(index))
                continue

            yield JSONNode(element_path, str(index), value, None, depth + 1)
