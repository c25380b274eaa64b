"""Asynchronous helpers for JSONTreeLib.

Traversal itself is always synchronous. This package holds the wrappers
that run XML to JSON conversion off the calling thread.
"""

from .xml import (
    to_json_object_async,
    submit_to_json_object,
    to_json_object_with_callbacks,
    get_executor,
    shutdown_executor,
)

__all__ = [
    'to_json_object_async',
    'submit_to_json_object',
    'to_json_object_with_callbacks',
    'get_executor',
    'shutdown_executor',
]
