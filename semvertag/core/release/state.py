"""Repository state as seen through its tags.

Reduces the tag references of a repository to the highest semantic version
and the commit it was tagged at. Tags that are not semantic versions are
logged and skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from semvertag.core.exceptions import InvalidVersionError
from semvertag.core.logging import get_logger
from semvertag.core.versioning import ZERO_VERSION, SemanticVersion, parse_version

logger = get_logger(__name__)

TAG_REF_PREFIX = "refs/tags/"


@dataclass(frozen=True)
class TagRef:
    """A tag reference returned by the hosting platform.

    Attributes:
        name: Tag name without the refs/tags/ prefix.
        sha: SHA of the object the ref points to.
        object_type: "commit" for lightweight tags, "tag" for annotated ones.
    """

    name: str
    sha: str
    object_type: str = "commit"

    @classmethod
    def from_ref(cls, ref: str, sha: str, object_type: str = "commit") -> TagRef:
        """Create from a full ref name such as refs/tags/v1.2.3."""
        name = ref[len(TAG_REF_PREFIX) :] if ref.startswith(TAG_REF_PREFIX) else ref
        return cls(name=name, sha=sha, object_type=object_type)

    @property
    def is_annotated(self) -> bool:
        return self.object_type == "tag"


@dataclass(frozen=True)
class RepositoryState:
    """Release branch plus the current highest tagged version."""

    release_branch: str
    version: SemanticVersion = ZERO_VERSION
    tagged_commit: Optional[str] = None


def find_highest_tag(
    tag_refs: Iterable[TagRef],
) -> Optional[tuple[SemanticVersion, TagRef]]:
    """Find the tag carrying the highest semantic version.

    Args:
        tag_refs: Tag references in listing order.

    Returns:
        (version, ref) of the highest tag, or None if no tag parses.
        On equal versions the first one listed wins.
    """
    best: Optional[tuple[SemanticVersion, TagRef]] = None
    for ref in tag_refs:
        try:
            version = parse_version(ref.name)
        except InvalidVersionError:
            logger.warning("Skipping tag that is not a semantic version", tag=ref.name)
            continue

        if best is None or version.is_greater_than(best[0]):
            best = (version, ref)
    return best


def build_repository_state(
    release_branch: str,
    tag_refs: Iterable[TagRef],
    tagged_commit: Optional[str] = None,
) -> RepositoryState:
    """Build the repository state from its tag references.

    Args:
        release_branch: Branch whose merges are tagged.
        tag_refs: Tag references of the repository.
        tagged_commit: Commit of the highest tag when already resolved;
            defaults to the SHA of the highest lightweight tag.

    Returns:
        RepositoryState; v0.0.0 with no commit when no tag parses.
    """
    return state_from_highest_tag(
        release_branch, find_highest_tag(tag_refs), tagged_commit=tagged_commit
    )


def state_from_highest_tag(
    release_branch: str,
    highest: Optional[tuple[SemanticVersion, TagRef]],
    tagged_commit: Optional[str] = None,
) -> RepositoryState:
    """Build the repository state from an already selected highest tag.

    Args:
        release_branch: Branch whose merges are tagged.
        highest: Result of find_highest_tag, or None when no tag parses.
        tagged_commit: Commit of the highest tag when already resolved.
    """
    if highest is None:
        logger.info("No semantic version tags found, starting from v0.0.0")
        return RepositoryState(release_branch=release_branch)

    version, ref = highest
    if tagged_commit is None and not ref.is_annotated:
        tagged_commit = ref.sha

    logger.info("Current version", version=str(version), commit=tagged_commit)
    return RepositoryState(
        release_branch=release_branch,
        version=version,
        tagged_commit=tagged_commit,
    )
