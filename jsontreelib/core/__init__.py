"""Core components of JSONTreeLib: containers, nodes, collector and stream."""

from .container import (
    JSONObject,
    JSONArray,
    JSONException,
    JSONTypeError,
    wrap,
    unwrap,
)
from .node import JSONNode
from .collector import NodeCollector
from .stream import NodeStream, StreamCharacteristics

__all__ = [
    'JSONObject',
    'JSONArray',
    'JSONException',
    'JSONTypeError',
    'wrap',
    'unwrap',
    'JSONNode',
    'NodeCollector',
    'NodeStream',
    'StreamCharacteristics',
]
