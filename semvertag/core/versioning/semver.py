"""Semantic Version Value Implementation.

Parses, formats, compares and increments the MAJOR.MINOR.PATCH triple of a
release tag. Prerelease and build suffixes are validated and then dropped:
they never take part in ordering.

JPL Power of Ten Compliance:
- Rule #1: No recursion
- Rule #2: Fixed upper bounds (MAX_TAG_LENGTH)
- Rule #4: All functions < 60 lines
- Rule #5: Assert preconditions
- Rule #9: Complete type hints
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable

from semvertag.core.exceptions import InvalidVersionError

# JPL Rule #2: Fixed upper bounds
MAX_TAG_LENGTH = 256


class IncrementKind(Enum):
    """Version increment kinds, named after the pull request labels."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    UNKNOWN = "unknown"


# Lower value wins when several labels are present
INCREMENT_PRIORITY: Dict[IncrementKind, int] = {
    IncrementKind.MAJOR: 0,
    IncrementKind.MINOR: 1,
    IncrementKind.PATCH: 2,
    IncrementKind.UNKNOWN: 3,
}

_LABEL_KINDS: Dict[str, IncrementKind] = {
    "major": IncrementKind.MAJOR,
    "minor": IncrementKind.MINOR,
    "patch": IncrementKind.PATCH,
}


# SemVer 2.0.0 grammar with optional 'v' prefix
VERSION_PATTERN = re.compile(
    r"^v?"
    r"(?P<major>0|[1-9]\d*)\."
    r"(?P<minor>0|[1-9]\d*)\."
    r"(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?\Z",
    re.ASCII,
)


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """Immutable MAJOR.MINOR.PATCH version.

    Field order gives the comparison order, so ``<``/``>`` compare major,
    then minor, then patch.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        """Validate version components.

        Rule #5: Assert preconditions.
        """
        assert self.major >= 0, "major must be non-negative"
        assert self.minor >= 0, "minor must be non-negative"
        assert self.patch >= 0, "patch must be non-negative"

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"

    @property
    def tag_name(self) -> str:
        """Tag name for this version (e.g., "v1.2.3")."""
        return str(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "string": str(self),
        }

    def compare(self, other: SemanticVersion) -> int:
        """Compare with another version.

        Returns:
            1 if self is greater, 0 if equal, -1 if less.
        """
        if self > other:
            return 1
        if self < other:
            return -1
        return 0

    def is_greater_than(self, other: SemanticVersion) -> bool:
        """Return True only if this version is strictly greater."""
        return self.compare(other) > 0

    def increment(self, kind: IncrementKind) -> SemanticVersion:
        """Create the next version for the given increment kind.

        Args:
            kind: MAJOR, MINOR or PATCH.

        Returns:
            New SemanticVersion; lower components are reset to zero.

        Raises:
            ValueError: If kind is UNKNOWN.
        """
        if kind is IncrementKind.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0)
        if kind is IncrementKind.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0)
        if kind is IncrementKind.PATCH:
            return SemanticVersion(self.major, self.minor, self.patch + 1)
        raise ValueError(f"invalid increment type: {kind}")


ZERO_VERSION = SemanticVersion(0, 0, 0)


def parse_version(version_str: str) -> SemanticVersion:
    """Parse a tag or version string into SemanticVersion.

    Args:
        version_str: String such as "v1.2.3", "1.2.3-rc.1" or "1.2.3+build.7".

    Returns:
        SemanticVersion holding the numeric triple.

    Raises:
        InvalidVersionError: If the string does not match the grammar.
    """
    if not version_str or len(version_str) > MAX_TAG_LENGTH:
        raise InvalidVersionError(version_str)

    match = VERSION_PATTERN.match(version_str)
    if not match:
        raise InvalidVersionError(version_str)

    return SemanticVersion(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
    )


def increment_kind_from_label(label: str) -> IncrementKind:
    """Map a pull request label to an increment kind.

    Matching is exact and case-sensitive: "Major" is UNKNOWN.
    """
    return _LABEL_KINDS.get(label, IncrementKind.UNKNOWN)


def select_increment(labels: Iterable[str]) -> IncrementKind:
    """Pick the most significant increment among the given labels.

    Args:
        labels: Pull request label names.

    Returns:
        The recognized kind with the lowest priority value, or UNKNOWN.
    """
    selected = IncrementKind.UNKNOWN
    for label in labels:
        kind = increment_kind_from_label(label)
        if INCREMENT_PRIORITY[kind] < INCREMENT_PRIORITY[selected]:
            selected = kind
    return selected
