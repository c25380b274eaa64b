"""JSONTreeLib - path-annotated traversal of in-memory JSON trees.

JSONTreeLib walks a JSONObject or JSONArray and hands back its nodes as an
ordered, single-pass stream, each node carrying its path ("book[0]/title"),
key, value and a write-back handle into its containing object.

Three traversal modes:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    root.to_stream()        # everything, depth-first pre-order
    root.to_leaf_stream()   # primitive values only
    root.to_flat_stream()   # immediate children only
━━━━━━━━━━━━━━━━━━━━━━━━━━

Traversal is cycle-safe and never aborts because a single entry could not
be read; see jsontreelib.error_policies.
"""

__version__ = "0.3.0"

from .core import (
    JSONObject,
    JSONArray,
    JSONException,
    JSONTypeError,
    JSONNode,
    NodeCollector,
    NodeStream,
    StreamCharacteristics,
    wrap,
    unwrap,
)
from .config import (
    TraversalMode,
    TraversalConfig,
    XMLParserConfig,
    ORIGINAL,
    KEEP_STRINGS,
)
from .error_policies import (
    ErrorPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    CallbackPolicy,
)
from .api import (
    traverse_json,
    stream_nodes,
    stream_leaves,
    stream_flat,
    get_paths,
    find_nodes,
    count_nodes,
    update_leaves,
    get_tree_stats,
)
from .xml_json import to_json_object
from . import aio

__all__ = [
    "__version__",
    # Core
    'JSONObject',
    'JSONArray',
    'JSONException',
    'JSONTypeError',
    'JSONNode',
    'NodeCollector',
    'NodeStream',
    'StreamCharacteristics',
    'wrap',
    'unwrap',
    # Config
    'TraversalMode',
    'TraversalConfig',
    'XMLParserConfig',
    'ORIGINAL',
    'KEEP_STRINGS',
    # Error policies
    'ErrorPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'CallbackPolicy',
    # API
    'traverse_json',
    'stream_nodes',
    'stream_leaves',
    'stream_flat',
    'get_paths',
    'find_nodes',
    'count_nodes',
    'update_leaves',
    'get_tree_stats',
    # XML
    'to_json_object',
    'aio',
]
