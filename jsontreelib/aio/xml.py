"""Asynchronous XML to JSON conversion.

The conversion itself is a one-shot, CPU-bound call; these wrappers move it
off the caller's thread. Three flavours are provided:

    await to_json_object_async(xml)                      # asyncio coroutine
    future = submit_to_json_object(xml)                  # concurrent Future
    to_json_object_with_callbacks(xml, on_ok, on_error)  # callback pair

All of them run on a shared worker pool unless an executor is passed in.
"""

import asyncio
import functools
import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from ..config import XMLParserConfig
from ..core.container import JSONObject
from ..xml_json import XMLSource, to_json_object

logger = logging.getLogger(__name__)

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Return the shared worker pool, creating it on first use."""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(thread_name_prefix="jsontreelib-xml")
        return _executor


def shutdown_executor(wait: bool = True) -> None:
    """Shut down the shared worker pool.

    A later conversion creates a new pool.
    """
    global _executor
    with _executor_lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


async def to_json_object_async(source: XMLSource,
                               config: Optional[XMLParserConfig] = None,
                               executor: Optional[Executor] = None) -> JSONObject:
    """Convert XML to a JSONObject without blocking the event loop.

    Args:
        source: XML text, bytes, or a readable text stream
        config: Conversion options
        executor: Executor to run on (default: the shared worker pool)

    Returns:
        The converted JSONObject

    Raises:
        JSONException: If the XML is malformed
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        executor or get_executor(),
        functools.partial(to_json_object, source, config),
    )


def submit_to_json_object(source: XMLSource,
                          config: Optional[XMLParserConfig] = None,
                          executor: Optional[Executor] = None) -> 'Future[JSONObject]':
    """Start converting XML on a worker thread.

    Returns immediately. A malformed document surfaces as a JSONException
    from ``future.result()``.

    Returns:
        Future resolving to the converted JSONObject
    """
    return (executor or get_executor()).submit(to_json_object, source, config)


def to_json_object_with_callbacks(source: XMLSource,
                                  on_success: Callable[[JSONObject], None],
                                  on_error: Callable[[Exception], None],
                                  config: Optional[XMLParserConfig] = None,
                                  executor: Optional[Executor] = None) -> 'Future[JSONObject]':
    """Convert XML on a worker thread and report through a callback pair.

    Exactly one of the callbacks runs, on the thread that finished the
    conversion (or on the calling thread if it was already finished).

    Args:
        source: XML text, bytes, or a readable text stream
        on_success: Called with the converted JSONObject
        on_error: Called with the exception if conversion failed
        config: Conversion options
        executor: Executor to run on (default: the shared worker pool)

    Returns:
        The underlying future, for callers that also want to wait on it
    """
    future = submit_to_json_object(source, config, executor)

    def _dispatch(done: 'Future[JSONObject]') -> None:
        if done.cancelled():
            on_error(CancelledError("XML conversion was cancelled"))
            return
        error = done.exception()
        if error is not None:
            logger.debug(f"XML conversion failed: {error}")
            on_error(error)
        else:
            on_success(done.result())

    future.add_done_callback(_dispatch)
    return future
