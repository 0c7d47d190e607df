"""Versioning Module.

Semantic version parsing, ordering and increments for release tags.
"""

from semvertag.core.versioning.semver import (
    INCREMENT_PRIORITY,
    MAX_TAG_LENGTH,
    ZERO_VERSION,
    IncrementKind,
    SemanticVersion,
    increment_kind_from_label,
    parse_version,
    select_increment,
)

__all__ = [
    "INCREMENT_PRIORITY",
    "MAX_TAG_LENGTH",
    "ZERO_VERSION",
    "IncrementKind",
    "SemanticVersion",
    "increment_kind_from_label",
    "parse_version",
    "select_increment",
]
