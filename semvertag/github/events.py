"""
Pull Request Event Payload.

Reads the webhook payload GitHub Actions writes to GITHUB_EVENT_PATH and
validates the subset of the pull_request event schema the release decision
needs. Unknown fields are ignored.

The repository's "organization" sub-object is removed before validation:
some payloads carry it as a bare login string rather than an object, which
strict webhook schemas refuse.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from semvertag.core.exceptions import EventPayloadError
from semvertag.core.logging import get_logger
from semvertag.core.release.decision import PullRequestContext

logger = get_logger(__name__)

# Event files are small; anything larger is not a webhook payload
MAX_EVENT_FILE_BYTES = 25 * 1024 * 1024


class _EventModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Label(_EventModel):
    """A label attached to the pull request."""

    name: Optional[str] = None


class BranchRef(_EventModel):
    """Head or base of the pull request."""

    ref: Optional[str] = None
    sha: Optional[str] = None


class PullRequest(_EventModel):
    """Pull request fields used for the release decision."""

    number: Optional[int] = None
    merged: Optional[bool] = None
    merge_commit_sha: Optional[str] = None
    base: Optional[BranchRef] = None
    labels: List[Label] = Field(default_factory=list)


class Repository(_EventModel):
    """Repository the event was raised for."""

    full_name: Optional[str] = None


class PullRequestEvent(_EventModel):
    """A pull_request webhook event."""

    action: Optional[str] = None
    pull_request: PullRequest
    repository: Optional[Repository] = None

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.pull_request.labels if label.name]

    def to_context(self) -> PullRequestContext:
        """Build the read-only view consumed by the release decision."""
        base = self.pull_request.base
        return PullRequestContext(
            action=self.action,
            merged=self.pull_request.merged,
            base_branch=base.ref if base is not None else None,
            merge_commit_sha=self.pull_request.merge_commit_sha,
            labels=tuple(self.label_names),
        )


def strip_organization(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Remove repository.organization from a decoded payload.

    Args:
        payload: Decoded event JSON.

    Returns:
        The same mapping, modified in place.
    """
    repository = payload.get("repository")
    if isinstance(repository, dict):
        repository.pop("organization", None)
    return payload


def parse_pull_request_event(
    payload: Any, path: Optional[str] = None
) -> PullRequestEvent:
    """Validate a decoded payload as a pull_request event.

    Raises:
        EventPayloadError: If the payload is not a pull_request event.
    """
    if not isinstance(payload, dict):
        raise EventPayloadError("event payload is not a JSON object", path)

    try:
        return PullRequestEvent.model_validate(strip_organization(payload))
    except ValidationError as e:
        raise EventPayloadError(
            f"could not parse GitHub event into a PullRequestEvent: {e}", path
        ) from e


def load_pull_request_event(path: Path) -> PullRequestEvent:
    """
    Read and validate the event file.

    Args:
        path: Path to the event JSON file.

    Returns:
        Validated PullRequestEvent.

    Raises:
        EventPayloadError: If the file is unreadable, too large, not JSON,
            or not a pull_request event.
    """
    path = Path(path)
    try:
        if path.stat().st_size > MAX_EVENT_FILE_BYTES:
            raise EventPayloadError("event file is too large", str(path))
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise EventPayloadError(str(e), str(path)) from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"invalid JSON: {e}", str(path)) from e

    event = parse_pull_request_event(payload, str(path))
    logger.debug(
        "Loaded pull request event",
        action=event.action,
        number=event.pull_request.number,
        labels=",".join(event.label_names),
    )
    return event
