"""
Error handling policies for JSONTreeLib.

A traversal never aborts because one entry could not be read. Instead the
collector hands each per-entry fault to an ErrorPolicy, skips the entry and
carries on with the next sibling. The policy decides what happens to the
fault: log it, record it, or forward it somewhere else.

The policy is passed in explicitly (through the stream entry points or a
TraversalConfig), so two traversals never share a fault sink by accident.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for per-entry fault policies.

    Subclasses implement different strategies for dealing with entries
    that failed to read during collection. Whatever the policy does, the
    entry has already been dropped from the output.
    """

    @abstractmethod
    def handle(self, error: Exception, path: str, key: str) -> None:
        """
        Handle a fault raised while reading one entry.

        Args:
            error: The exception that was raised
            path: Path the entry would have had
            key: Member name or decimal index of the entry
        """
        pass


def _error_record(error: Exception, path: str, key: str) -> Dict[str, Any]:
    return {
        'path': path,
        'key': key,
        'error': error,
        'error_type': type(error).__name__,
        'error_message': str(error),
    }


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs faults and keeps a record of them.

    This is the default policy. Faults are logged at WARNING on the
    ``jsontreelib.error_policies`` logger when verbose, and are always
    available afterwards through ``errors`` and ``get_statistics``.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every fault
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose

    def handle(self, error: Exception, path: str, key: str) -> None:
        self.errors.append(_error_record(error, path, key))
        self.skipped_paths.append(path)

        if self.verbose:
            logger.warning(f"Skipping entry '{path}' (key {key!r}): {error}")

    def get_statistics(self) -> dict:
        """
        Get statistics about faults encountered.

        Returns:
            Dictionary with fault counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1

        return {
            'total_errors': len(self.errors),
            'skipped_paths': len(self.skipped_paths),
            'by_type': by_type,
            'errors': self.errors,
        }


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all faults without logging.

    Useful for collecting all faults and presenting them at the end.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def handle(self, error: Exception, path: str, key: str) -> None:
        """Silently record the fault."""
        self.errors.append(_error_record(error, path, key))

    @property
    def paths(self) -> List[str]:
        return [record['path'] for record in self.errors]


class CallbackPolicy(ErrorPolicy):
    """Policy that forwards each fault to a user-provided function.

    Allows custom fault reporting without subclassing. The callback is
    called as ``callback(path, error)``. If the callback raises, the
    exception propagates out of the traversal.
    """

    def __init__(self, callback: Callable[[str, Exception], None]):
        self.callback = callback

    def handle(self, error: Exception, path: str, key: str) -> None:
        self.callback(path, error)


def resolve_policy(policy: Optional[Any]) -> ErrorPolicy:
    """Turn None, a callable or an ErrorPolicy into an ErrorPolicy.

    Args:
        policy: ErrorPolicy instance, ``callback(path, error)`` function,
            or None for the default ContinueOnErrorsPolicy

    Returns:
        An ErrorPolicy instance
    """
    if policy is None:
        return ContinueOnErrorsPolicy()
    if isinstance(policy, ErrorPolicy):
        return policy
    if callable(policy):
        return CallbackPolicy(policy)
    raise TypeError(f"Expected an ErrorPolicy or callable, got {type(policy).__name__}")
