"""Merge Event Evaluation.

Decides whether a pull request event should produce a new release tag and
which version that tag carries. The evaluation is a pure function of the
repository state, the event and the workflow commit; it returns a
ReleaseDecision instead of raising, so callers choose how to report it.

Evaluation order (first match wins):
    1. action is not "closed"                 -> rejected
    2. pull request not merged                -> rejected
    3. base branch unknown                    -> rejected
    4. base branch is not the release branch  -> no-op
    5. merge commit != workflow commit        -> rejected   (strict)
    6. merge commit already carries the tag   -> no-op      (strict)
    7. no major/minor/patch label             -> no-op
    8-9. increment; result not above v0.0.0   -> rejected
    10. otherwise                             -> proceed

Steps 1-3 become no-ops when ReleasePolicy.unmerged_is_error is False.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from semvertag.core.exceptions import (
    DegenerateVersionError,
    PreconditionRejectedError,
)
from semvertag.core.logging import get_logger
from semvertag.core.release.state import RepositoryState
from semvertag.core.versioning import (
    ZERO_VERSION,
    IncrementKind,
    SemanticVersion,
    select_increment,
)

logger = get_logger(__name__)

CLOSED_ACTION = "closed"


class DecisionOutcome(Enum):
    """What the caller should do with a merge event."""

    PROCEED = "proceed"
    NO_OP = "no-op"
    REJECTED = "rejected"


class DecisionReason(Enum):
    """Why a decision was reached; the value is the reported message."""

    NOT_CLOSED = "pull request is not closed"
    NOT_MERGED = "pull request is not merged"
    MISSING_BASE_BRANCH = "could not determine pull request base branch"
    OTHER_BRANCH = "merged into a different branch"
    COMMIT_MISMATCH = "workflow run arguments and pull request data mismatch"
    ALREADY_TAGGED = "already tagged"
    NO_VERSION_LABEL = "no recognized version label; retains current version"
    ZERO_VERSION = "new version is 0.0.0"
    NEW_VERSION = "new version computed"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ReleasePolicy:
    """Switches for the optional evaluation rules.

    Attributes:
        verify_merge_commit: Require the event's merge commit to match the
            workflow commit and skip commits that already carry the
            current tag.
        unmerged_is_error: Report events that are not closed and merged
            (or lack a base branch) as rejected; otherwise as no-ops.
    """

    verify_merge_commit: bool = True
    unmerged_is_error: bool = True


@dataclass(frozen=True)
class PullRequestContext:
    """Read-only view of the fields of a pull request event we act on."""

    action: Optional[str]
    merged: Optional[bool]
    base_branch: Optional[str]
    merge_commit_sha: Optional[str] = None
    labels: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ReleaseDecision:
    """Result of evaluating a merge event."""

    outcome: DecisionOutcome
    reason: DecisionReason
    version: Optional[SemanticVersion] = None
    increment: IncrementKind = IncrementKind.UNKNOWN

    @property
    def should_tag(self) -> bool:
        return self.outcome is DecisionOutcome.PROCEED

    @property
    def message(self) -> str:
        if self.should_tag and self.version is not None:
            return f"new version {self.version}"
        return self.reason.message

    def raise_for_outcome(self) -> None:
        """Raise the matching error when the decision is a rejection.

        Raises:
            DegenerateVersionError: If the increment produced v0.0.0.
            PreconditionRejectedError: For any other rejection.
        """
        if self.outcome is not DecisionOutcome.REJECTED:
            return
        if self.reason is DecisionReason.ZERO_VERSION:
            raise DegenerateVersionError(self.reason.message)
        raise PreconditionRejectedError(self.reason.message)


def _proceed(version: SemanticVersion, kind: IncrementKind) -> ReleaseDecision:
    return ReleaseDecision(
        DecisionOutcome.PROCEED, DecisionReason.NEW_VERSION, version, kind
    )


def _no_op(reason: DecisionReason) -> ReleaseDecision:
    return ReleaseDecision(DecisionOutcome.NO_OP, reason)


def _rejected(reason: DecisionReason) -> ReleaseDecision:
    return ReleaseDecision(DecisionOutcome.REJECTED, reason)


def _check_event_state(
    pull_request: PullRequestContext, policy: ReleasePolicy
) -> Optional[ReleaseDecision]:
    """Steps 1-3: the event must be a closed, merged pull request."""
    reason: Optional[DecisionReason] = None
    if pull_request.action != CLOSED_ACTION:
        reason = DecisionReason.NOT_CLOSED
    elif pull_request.merged is not True:
        reason = DecisionReason.NOT_MERGED
    elif not pull_request.base_branch:
        reason = DecisionReason.MISSING_BASE_BRANCH

    if reason is None:
        return None
    return _rejected(reason) if policy.unmerged_is_error else _no_op(reason)


def _check_merge_commit(
    state: RepositoryState,
    pull_request: PullRequestContext,
    commit_sha: str,
) -> Optional[ReleaseDecision]:
    """Steps 5-6: the event must describe this run's commit, once."""
    if pull_request.merge_commit_sha != commit_sha:
        return _rejected(DecisionReason.COMMIT_MISMATCH)
    if state.tagged_commit is not None and state.tagged_commit == commit_sha:
        return _no_op(DecisionReason.ALREADY_TAGGED)
    return None


def evaluate_merge(
    state: RepositoryState,
    pull_request: PullRequestContext,
    commit_sha: str,
    policy: Optional[ReleasePolicy] = None,
) -> ReleaseDecision:
    """Decide whether, and at which version, to tag a merge.

    Args:
        state: Release branch and current highest version.
        pull_request: Fields of the pull request event.
        commit_sha: Commit the workflow run is tagging.
        policy: Optional rule switches (defaults to strict, errors on
            unmerged events).

    Returns:
        ReleaseDecision with outcome, reason and the new version on PROCEED.
    """
    policy = policy or ReleasePolicy()

    decision = _check_event_state(pull_request, policy)
    if decision is not None:
        return decision

    if pull_request.base_branch != state.release_branch:
        logger.info(
            "Pull request merged into a different branch",
            base=pull_request.base_branch,
            release_branch=state.release_branch,
        )
        return _no_op(DecisionReason.OTHER_BRANCH)

    if policy.verify_merge_commit:
        decision = _check_merge_commit(state, pull_request, commit_sha)
        if decision is not None:
            return decision

    kind = select_increment(pull_request.labels)
    if kind is IncrementKind.UNKNOWN:
        return _no_op(DecisionReason.NO_VERSION_LABEL)

    candidate = state.version.increment(kind)
    if not candidate.is_greater_than(ZERO_VERSION):
        return _rejected(DecisionReason.ZERO_VERSION)

    logger.debug(
        "Computed next version",
        current=str(state.version),
        increment=kind.value,
        next=str(candidate),
    )
    return _proceed(candidate, kind)
