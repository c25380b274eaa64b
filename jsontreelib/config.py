"""Configuration system for JSONTreeLib.

This module defines how users specify their traversal requirements (which
nodes to produce and where per-entry faults go) and how XML input is
converted into JSON containers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional


class TraversalMode(Enum):
    """Which nodes a traversal produces.

    Each mode is a combination of the collector's two flags.
    """
    FULL = "full"        # Every node at every depth, containers included
    LEAVES = "leaves"    # Primitive-valued nodes only
    FLAT = "flat"        # Immediate children of the root only

    @property
    def recursive(self) -> bool:
        return self is not TraversalMode.FLAT

    @property
    def leaves_only(self) -> bool:
        return self is TraversalMode.LEAVES


@dataclass
class TraversalConfig:
    """Complete configuration for a traversal.

    This is the primary way users specify what they want from a traversal
    when the three stream entry points are not enough (a non-empty base
    path, or a shared error policy).
    """

    mode: TraversalMode = TraversalMode.FULL

    # Prefix for every produced path ("" means paths start at the root)
    base_path: str = ""

    # Receives per-entry faults; None means ContinueOnErrorsPolicy
    error_policy: Optional[Any] = None

    @property
    def recursive(self) -> bool:
        return self.mode.recursive

    @property
    def leaves_only(self) -> bool:
        return self.mode.leaves_only

    # Convenience constructors for common configurations

    @classmethod
    def full(cls, **kwargs) -> 'TraversalConfig':
        return cls(mode=TraversalMode.FULL, **kwargs)

    @classmethod
    def leaves(cls, **kwargs) -> 'TraversalConfig':
        return cls(mode=TraversalMode.LEAVES, **kwargs)

    @classmethod
    def flat(cls, **kwargs) -> 'TraversalConfig':
        return cls(mode=TraversalMode.FLAT, **kwargs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.mode, TraversalMode):
            errors.append(f"mode must be a TraversalMode, got {self.mode!r}")

        if not isinstance(self.base_path, str):
            errors.append("base_path must be a string")
        elif self.base_path.endswith("/"):
            errors.append("base_path must not end with '/'")

        if self.error_policy is not None and not callable(
                getattr(self.error_policy, 'handle', self.error_policy)):
            errors.append("error_policy must be an ErrorPolicy or a callable")

        return errors


def parse_mode(mode: Any) -> TraversalMode:
    """Parse a traversal mode from string or enum.

    Args:
        mode: TraversalMode, or one of its names/values ("full", "leaves",
            "leaf", "flat")

    Returns:
        TraversalMode enum value

    Raises:
        ValueError: If the mode name is not recognized
    """
    if isinstance(mode, TraversalMode):
        return mode

    mode_map = {
        'full': TraversalMode.FULL,
        'recursive': TraversalMode.FULL,
        'leaves': TraversalMode.LEAVES,
        'leaf': TraversalMode.LEAVES,
        'flat': TraversalMode.FLAT,
    }

    mode_lower = mode.lower() if isinstance(mode, str) else str(mode)
    if mode_lower in mode_map:
        return mode_map[mode_lower]

    raise ValueError(
        f"Unknown traversal mode: {mode}. "
        f"Choose from: {', '.join(mode_map.keys())}"
    )


@dataclass(frozen=True)
class XMLParserConfig:
    """Configuration for converting XML documents into JSON containers."""

    # Keep text and attribute values as strings instead of coercing them
    keep_strings: bool = False

    # Member name used for element text when it sits next to other members
    cdata_tag_name: str = "content"

    # Tag names whose values are always collected into a JSONArray
    force_list: FrozenSet[str] = field(default_factory=frozenset)

    def with_force_list(self, *tag_names: str) -> 'XMLParserConfig':
        """Return a copy that always collects the given tags into arrays."""
        return XMLParserConfig(
            keep_strings=self.keep_strings,
            cdata_tag_name=self.cdata_tag_name,
            force_list=frozenset(tag_names) | self.force_list,
        )


ORIGINAL = XMLParserConfig()
KEEP_STRINGS = XMLParserConfig(keep_strings=True)
