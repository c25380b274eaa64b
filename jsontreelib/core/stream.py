"""NodeStream: the sequence adapter returned by every traversal.

A NodeStream presents the collector's finished buffer as a single-pass,
forward-only iterator. It is the object callers compose further work on
(map, filter, reduce) without walking the tree again.
"""

from collections import deque
from enum import Flag
from functools import reduce as _reduce
from typing import Any, Callable, Deque, Iterable, Iterator, List, Optional, TypeVar

from .node import JSONNode

T = TypeVar('T')


class StreamCharacteristics(Flag):
    """Properties a NodeStream guarantees about its elements."""
    ORDERED = 0x10       # Elements come out in traversal order
    SIZED = 0x40         # estimate_size() is exact
    NONNULL = 0x100      # No element is None
    IMMUTABLE = 0x400    # The buffer cannot change once built


class NodeStream:
    """Single-pass, ordered iterator over collected JSONNodes.

    The buffer is fully materialized before the stream exists, so the
    remaining size is always exact. Consumed elements are gone: iterating
    a second time yields nothing, and a fresh traversal is needed to start
    over. Splitting for parallel consumption is not supported, since that
    would lose the path ordering downstream code relies on.

    Not safe for concurrent consumption from several threads.

    Example:
        >>> stream = JSONObject.from_json('{"a": 1, "b": [2, 3]}').to_leaf_stream()
        >>> stream.reduce(lambda total, node: total + node.value, 0)
        6
    """

    characteristics = (StreamCharacteristics.ORDERED
                       | StreamCharacteristics.SIZED
                       | StreamCharacteristics.NONNULL
                       | StreamCharacteristics.IMMUTABLE)

    def __init__(self, nodes: Iterable[JSONNode]):
        """Initialize the stream over an already-collected buffer.

        Args:
            nodes: Nodes in traversal order

        Raises:
            ValueError: If any element is None
        """
        self._queue: Deque[JSONNode] = deque(nodes)
        if any(node is None for node in self._queue):
            raise ValueError("NodeStream elements must not be None")

    # Iterator protocol

    def __iter__(self) -> Iterator[JSONNode]:
        return self

    def __next__(self) -> JSONNode:
        if not self._queue:
            raise StopIteration
        return self._queue.popleft()

    def __length_hint__(self) -> int:
        return len(self._queue)

    # Pull-style consumption

    def try_advance(self, action: Callable[[JSONNode], Any]) -> bool:
        """Pass the next node to action.

        Returns:
            True if a node was consumed, False if the stream is exhausted
        """
        if not self._queue:
            return False
        action(self._queue.popleft())
        return True

    def for_each_remaining(self, action: Callable[[JSONNode], Any]) -> None:
        """Pass every remaining node to action, in order."""
        while self.try_advance(action):
            pass

    def estimate_size(self) -> int:
        """Return the exact number of nodes not yet consumed."""
        return len(self._queue)

    def try_split(self) -> Optional['NodeStream']:
        """Parallel decomposition is not supported; always returns None."""
        return None

    # Composition

    def map(self, func: Callable[[JSONNode], T]) -> Iterator[T]:
        """Lazily apply func to each remaining node."""
        return map(func, self)

    def filter(self, predicate: Callable[[JSONNode], bool]) -> Iterator[JSONNode]:
        """Lazily keep the remaining nodes for which predicate is true."""
        return filter(predicate, self)

    def reduce(self, func: Callable[[Any, JSONNode], Any], initial: Any) -> Any:
        """Fold the remaining nodes into a single value."""
        return _reduce(func, self, initial)

    def to_list(self) -> List[JSONNode]:
        """Drain the stream into a list."""
        return list(self)

    def paths(self) -> List[str]:
        """Drain the stream and return the node paths."""
        return [node.path for node in self]

    def count(self) -> int:
        """Drain the stream and return how many nodes it held."""
        remaining = len(self._queue)
        self._queue.clear()
        return remaining

    def __repr__(self) -> str:
        return f"NodeStream(remaining={len(self._queue)})"
