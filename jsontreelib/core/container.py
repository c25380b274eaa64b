"""JSON object and array containers for JSONTreeLib.

JSONObject and JSONArray are the tree that every traversal walks. They are
deliberately thin wrappers around ``dict`` and ``list``: ordered storage,
strict ``get`` (missing entries raise) and lenient ``opt`` accessors, and
typed getters that fail with a JSONTypeError naming the kinds involved.

Both containers expose the three stream entry points:

    obj.to_stream()        # every node, depth-first pre-order
    obj.to_leaf_stream()   # primitive-valued nodes only
    obj.to_flat_stream()   # immediate children only
"""

import json
from reprlib import recursive_repr
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

if TYPE_CHECKING:
    from .stream import NodeStream


class JSONException(Exception):
    """Base class for errors raised by JSONTreeLib."""
    pass


class JSONTypeError(JSONException, TypeError):
    """Raised when a value does not have the kind a typed accessor expects.

    Attributes:
        expected: Name of the kind that was requested (e.g. "number")
        actual: Name of the kind that was found (e.g. "string")
    """

    def __init__(self, expected: str, actual: str, value: Any = None, where: str = ""):
        self.expected = expected
        self.actual = actual
        self.value = value
        location = f" at {where!r}" if where else ""
        super().__init__(
            f"Expected a {expected}{location} but found {actual}: {value!r}"
        )


def kind_of(value: Any) -> str:
    """Return the JSON kind name of a value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, JSONObject):
        return "object"
    if isinstance(value, JSONArray):
        return "array"
    return type(value).__name__


def as_string(value: Any, where: str = "") -> str:
    if isinstance(value, str):
        return value
    raise JSONTypeError("string", kind_of(value), value, where)


def as_int(value: Any, where: str = "") -> int:
    # bool is a subclass of int, so it has to be rejected explicitly
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    raise JSONTypeError("number", kind_of(value), value, where)


def as_float(value: Any, where: str = "") -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise JSONTypeError("number", kind_of(value), value, where)


def as_bool(value: Any, where: str = "") -> bool:
    if isinstance(value, bool):
        return value
    raise JSONTypeError("boolean", kind_of(value), value, where)


class _StreamFacade:
    """Stream entry points shared by JSONObject and JSONArray."""

    def to_stream(self, error_policy: Optional[Any] = None) -> 'NodeStream':
        """Return a stream over every node, depth-first pre-order.

        Args:
            error_policy: Receives per-entry faults (default logs and skips)

        Returns:
            NodeStream holding the fully collected nodes
        """
        return self._collect(recursive=True, leaves_only=False, error_policy=error_policy)

    def to_leaf_stream(self, error_policy: Optional[Any] = None) -> 'NodeStream':
        """Return a stream over primitive-valued nodes only."""
        return self._collect(recursive=True, leaves_only=True, error_policy=error_policy)

    def to_flat_stream(self, error_policy: Optional[Any] = None) -> 'NodeStream':
        """Return a stream over the immediate children only."""
        return self._collect(recursive=False, leaves_only=False, error_policy=error_policy)

    def _collect(self, recursive: bool, leaves_only: bool,
                 error_policy: Optional[Any]) -> 'NodeStream':
        # Imported here: the collector needs the container types defined above
        from .collector import NodeCollector
        from .stream import NodeStream

        collector = NodeCollector(
            self,
            base_path="",
            recursive=recursive,
            leaves_only=leaves_only,
            error_policy=error_policy,
        )
        return NodeStream(collector.nodes)


class JSONObject(_StreamFacade):
    """An insertion-ordered mapping of string keys to JSON values."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._map: Dict[str, Any] = {}
        if data:
            for key, value in data.items():
                self._map[str(key)] = value

    @classmethod
    def from_json(cls, text: str) -> 'JSONObject':
        """Parse JSON text whose top level is an object."""
        value = _parse_json(text)
        if not isinstance(value, JSONObject):
            raise JSONTypeError("object", kind_of(value), text[:40])
        return value

    # Core operations

    def get(self, key: str) -> Any:
        """Return the value stored at key.

        Raises:
            JSONException: If key is not present
        """
        try:
            return self._map[key]
        except KeyError:
            raise JSONException(f"JSONObject[{key!r}] not found.") from None

    def opt(self, key: str, default: Any = None) -> Any:
        """Return the value at key, or default when absent."""
        return self._map.get(key, default)

    def put(self, key: str, value: Any) -> 'JSONObject':
        """Store value at key, replacing any existing value."""
        if key is None:
            raise JSONException("Null key.")
        self._map[str(key)] = value
        return self

    def has(self, key: str) -> bool:
        return key in self._map

    def keys(self) -> List[str]:
        """Return the keys in insertion order."""
        return list(self._map.keys())

    def length(self) -> int:
        return len(self._map)

    def remove(self, key: str) -> Any:
        """Remove key and return its value (None if absent)."""
        return self._map.pop(key, None)

    def accumulate(self, key: str, value: Any) -> 'JSONObject':
        """Add value under key, turning repeated keys into a JSONArray."""
        if key not in self._map:
            self._map[key] = value
        else:
            existing = self._map[key]
            if isinstance(existing, JSONArray):
                existing.put(value)
            else:
                self._map[key] = JSONArray([existing, value])
        return self

    def append(self, key: str, value: Any) -> 'JSONObject':
        """Append value to the JSONArray at key, creating it if needed.

        Raises:
            JSONException: If key holds something other than a JSONArray
        """
        if key not in self._map:
            self._map[key] = JSONArray([value])
            return self
        existing = self._map[key]
        if not isinstance(existing, JSONArray):
            raise JSONException(f"JSONObject[{key!r}] is not a JSONArray.")
        existing.put(value)
        return self

    # Typed getters

    def get_string(self, key: str) -> str:
        return as_string(self.get(key), key)

    def get_int(self, key: str) -> int:
        return as_int(self.get(key), key)

    def get_float(self, key: str) -> float:
        return as_float(self.get(key), key)

    def get_bool(self, key: str) -> bool:
        return as_bool(self.get(key), key)

    def get_json_object(self, key: str) -> 'JSONObject':
        value = self.get(key)
        if isinstance(value, JSONObject):
            return value
        raise JSONTypeError("object", kind_of(value), value, key)

    def get_json_array(self, key: str) -> 'JSONArray':
        value = self.get(key)
        if isinstance(value, JSONArray):
            return value
        raise JSONTypeError("array", kind_of(value), value, key)

    # Conversion

    def to_python(self) -> Dict[str, Any]:
        """Return a plain dict copy (the tree must be acyclic)."""
        return {key: unwrap(value) for key, value in self._map.items()}

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONObject):
            return NotImplemented
        return self._map == other._map

    @recursive_repr()
    def __repr__(self) -> str:
        return f"JSONObject({self._map!r})"


class JSONArray(_StreamFacade):
    """An ordered, indexable sequence of JSON values."""

    def __init__(self, values: Optional[List[Any]] = None):
        self._list: List[Any] = list(values) if values else []

    @classmethod
    def from_json(cls, text: str) -> 'JSONArray':
        """Parse JSON text whose top level is an array."""
        value = _parse_json(text)
        if not isinstance(value, JSONArray):
            raise JSONTypeError("array", kind_of(value), text[:40])
        return value

    def get(self, index: int) -> Any:
        """Return the element at index.

        Raises:
            JSONException: If index is out of range
        """
        if index < 0 or index >= len(self._list):
            raise JSONException(f"JSONArray[{index}] not found.")
        return self._list[index]

    def opt(self, index: int, default: Any = None) -> Any:
        if 0 <= index < len(self._list):
            return self._list[index]
        return default

    def put(self, value: Any) -> 'JSONArray':
        """Append value to the end of the array."""
        self._list.append(value)
        return self

    def put_at(self, index: int, value: Any) -> 'JSONArray':
        """Store value at index, padding with None when index is past the end."""
        if index < 0:
            raise JSONException(f"JSONArray[{index}] not found.")
        while len(self._list) < index:
            self._list.append(None)
        if index == len(self._list):
            self._list.append(value)
        else:
            self._list[index] = value
        return self

    def length(self) -> int:
        return len(self._list)

    def remove(self, index: int) -> Any:
        """Remove the element at index and return it (None if out of range)."""
        if 0 <= index < len(self._list):
            return self._list.pop(index)
        return None

    def get_string(self, index: int) -> str:
        return as_string(self.get(index), f"[{index}]")

    def get_int(self, index: int) -> int:
        return as_int(self.get(index), f"[{index}]")

    def get_float(self, index: int) -> float:
        return as_float(self.get(index), f"[{index}]")

    def get_bool(self, index: int) -> bool:
        return as_bool(self.get(index), f"[{index}]")

    def get_json_object(self, index: int) -> JSONObject:
        value = self.get(index)
        if isinstance(value, JSONObject):
            return value
        raise JSONTypeError("object", kind_of(value), value, f"[{index}]")

    def get_json_array(self, index: int) -> 'JSONArray':
        value = self.get(index)
        if isinstance(value, JSONArray):
            return value
        raise JSONTypeError("array", kind_of(value), value, f"[{index}]")

    def to_python(self) -> List[Any]:
        """Return a plain list copy (the tree must be acyclic)."""
        return [unwrap(value) for value in self._list]

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._list))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONArray):
            return NotImplemented
        return self._list == other._list

    @recursive_repr()
    def __repr__(self) -> str:
        return f"JSONArray({self._list!r})"


def wrap(data: Any) -> Any:
    """Convert plain dicts and lists into JSONObject and JSONArray.

    Containers already wrapped are returned unchanged. The same dict or
    list reached twice maps to the same container, so aliasing and cycles
    in the input survive the conversion. Nesting depth is not limited by
    the interpreter's recursion limit.

    Args:
        data: Any JSON-compatible Python value

    Returns:
        The converted value
    """
    # id -> container created for that dict or list
    memo: Dict[int, Any] = {}
    pending: List[Tuple[Any, Any]] = []

    def convert(value: Any) -> Any:
        if isinstance(value, dict):
            factory = JSONObject
        elif isinstance(value, (list, tuple)):
            factory = JSONArray
        else:
            return value
        if id(value) in memo:
            return memo[id(value)]
        container = factory()
        memo[id(value)] = container
        pending.append((value, container))
        return container

    result = convert(data)

    # Containers are created empty and filled here, one level at a time
    while pending:
        source, target = pending.pop()
        if isinstance(target, JSONObject):
            for key, value in source.items():
                target.put(str(key), convert(value))
        else:
            for value in source:
                target.put(convert(value))

    return result


def unwrap(value: Any) -> Any:
    """Convert containers back into plain dicts and lists."""
    if isinstance(value, (JSONObject, JSONArray)):
        return value.to_python()
    return value


def _object_hook(pairs) -> JSONObject:
    obj = JSONObject()
    for key, value in pairs:
        obj.put(key, value)
    return obj


def _parse_json(text: str) -> Any:
    try:
        value = json.loads(text, object_pairs_hook=_object_hook)
    except ValueError as e:
        raise JSONException(f"Malformed JSON text: {e}") from e
    except RecursionError as e:
        raise JSONException("JSON text is nested too deeply to parse") from e
    return _wrap_lists(value)


def _wrap_lists(value: Any) -> Any:
    # json.loads builds objects bottom-up through the hook but leaves lists plain
    if isinstance(value, list):
        value = JSONArray(value)

    stack = [value]
    while stack:
        container = stack.pop()
        if isinstance(container, JSONObject):
            for key in container.keys():
                item = container.get(key)
                if isinstance(item, list):
                    item = JSONArray(item)
                    container.put(key, item)
                if isinstance(item, (JSONObject, JSONArray)):
                    stack.append(item)
        elif isinstance(container, JSONArray):
            for index in range(container.length()):
                item = container.get(index)
                if isinstance(item, list):
                    item = JSONArray(item)
                    container.put_at(index, item)
                if isinstance(item, (JSONObject, JSONArray)):
                    stack.append(item)

    return value
