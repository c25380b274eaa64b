"""JSONNode abstraction for JSONTreeLib.

A JSONNode is one addressable location discovered during a traversal. It is
intentionally kept simple - it's primarily a data container. The collector
creates every node; nothing else does.
"""

from typing import Any, Optional

from .container import (
    JSONArray,
    JSONObject,
    as_bool,
    as_float,
    as_int,
    as_string,
)


class JSONNode:
    """A path-annotated value found while walking a JSON tree.

    The path is computed once, when the node is collected, and reflects the
    tree's shape at that moment even if the tree is changed afterwards.

    Attributes are read-only. The only way to change anything through a
    node is ``update_value``, which writes into the containing object.
    """

    __slots__ = ('_path', '_key', '_value', '_parent', '_depth')

    def __init__(self,
                 path: str,
                 key: str,
                 value: Any,
                 parent: Optional[JSONObject] = None,
                 depth: int = 1):
        """Initialize a node.

        Args:
            path: Absolute path from the traversal root ("book[0]/title")
            key: Member name, or the decimal index for array elements
            value: Raw stored value (primitive, JSONObject or JSONArray)
            parent: Object directly containing this node; None for array
                elements and the traversal root
            depth: Number of path segments below the traversal root
        """
        self._path = path
        self._key = key
        self._value = value
        self._parent = parent
        self._depth = depth

    @property
    def path(self) -> str:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Any:
        return self._value

    @property
    def parent(self) -> Optional[JSONObject]:
        return self._parent

    @property
    def depth(self) -> int:
        return self._depth

    def update_value(self, new_value: Any) -> bool:
        """Replace this node's value in its parent object.

        The node itself keeps the value it was collected with; the write
        goes straight into the parent and is visible to every holder of it.
        No locking is done.

        Args:
            new_value: Value to store at this node's key

        Returns:
            True if the parent was updated, False if there is no parent
        """
        if self._parent is None:
            return False
        self._parent.put(self._key, new_value)
        return True

    # Classification

    def is_leaf(self) -> bool:
        """Check if this node holds a primitive (neither object nor array)."""
        return not isinstance(self._value, (JSONObject, JSONArray))

    def is_object(self) -> bool:
        return isinstance(self._value, JSONObject)

    def is_array(self) -> bool:
        return isinstance(self._value, JSONArray)

    # Typed accessors

    def get_string_value(self) -> str:
        """Return the value as a string.

        Raises:
            JSONTypeError: If the value is not a string
        """
        return as_string(self._value, self._path)

    def opt_string_value(self, default: Optional[str] = None) -> Optional[str]:
        """Return the value if it is a string, otherwise default."""
        return self._value if isinstance(self._value, str) else default

    def get_int_value(self) -> int:
        """Return the value as an int, truncating floats.

        Raises:
            JSONTypeError: If the value is not a number
        """
        return as_int(self._value, self._path)

    def get_float_value(self) -> float:
        """Return the value as a float.

        Raises:
            JSONTypeError: If the value is not a number
        """
        return as_float(self._value, self._path)

    def get_bool_value(self) -> bool:
        """Return the value as a bool.

        Raises:
            JSONTypeError: If the value is not a boolean
        """
        return as_bool(self._value, self._path)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"JSONNode(path={self._path!r}, key={self._key!r}, value={self._value!r})"

    def __eq__(self, other: object) -> bool:
        """Nodes are equal when path, key and value match.

        Container values compare by identity, so comparing nodes never
        walks (possibly cyclic) subtrees.
        """
        if not isinstance(other, JSONNode):
            return NotImplemented
        if self._path != other._path or self._key != other._key:
            return False
        if isinstance(self._value, (JSONObject, JSONArray)) or \
                isinstance(other._value, (JSONObject, JSONArray)):
            return self._value is other._value
        return self._value == other._value

    def __hash__(self) -> int:
        """Hash based on path for use in sets and dicts."""
        return hash(self._path)
