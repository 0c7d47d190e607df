"""Release Runner.

Runs one tagging invocation end to end:

    list tags -> repository state -> load event -> evaluate -> create tag

Only this module talks to the collaborators; the decision itself stays a
pure function.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from semvertag.core.config import AutoTagConfig
from semvertag.core.logging import get_logger
from semvertag.core.release.decision import ReleaseDecision, evaluate_merge
from semvertag.core.release.state import (
    RepositoryState,
    find_highest_tag,
    state_from_highest_tag,
)
from semvertag.github.client import GitHubClient
from semvertag.github.events import load_pull_request_event

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Outcome of a run."""

    state: RepositoryState
    decision: ReleaseDecision
    tag_created: bool = False

    @property
    def tag_name(self) -> Optional[str]:
        if self.decision.version is None:
            return None
        return self.decision.version.tag_name


def load_repository_state(
    client: GitHubClient, release_branch: str, resolve_commit: bool = True
) -> RepositoryState:
    """
    Read the repository's tags and reduce them to a RepositoryState.

    Args:
        client: GitHub client for the repository.
        release_branch: Branch whose merges are tagged.
        resolve_commit: Dereference an annotated highest tag to its commit.

    Returns:
        RepositoryState for the repository.
    """
    refs = client.list_tag_refs()

    tagged_commit: Optional[str] = None
    highest = find_highest_tag(refs)
    if resolve_commit and highest is not None and highest[1].is_annotated:
        tagged_commit = client.resolve_tag_commit(highest[1])

    return state_from_highest_tag(release_branch, highest, tagged_commit=tagged_commit)


def run_release(
    config: AutoTagConfig, client: Optional[GitHubClient] = None
) -> RunResult:
    """
    Evaluate the merge event and create the tag when required.

    Args:
        config: Validated run configuration.
        client: Optional client (one is created from config otherwise).

    Returns:
        RunResult with the decision and whether a tag was created.

    Raises:
        PreconditionRejectedError: If the event is rejected.
        DegenerateVersionError: If the new version would be v0.0.0.
        EventPayloadError: If the event file cannot be used.
        GitHubAPIError: If listing or creating tags fails.
    """
    owns_client = client is None
    if client is None:
        client = GitHubClient(
            config.token,
            config.repository,
            api_url=config.api_url,
            timeout_sec=config.timeout_sec,
        )

    logger.bind(repository=config.repository)
    try:
        state = load_repository_state(
            client,
            config.release_branch,
            resolve_commit=config.policy.verify_merge_commit,
        )
        event = load_pull_request_event(config.event_path)
        decision = evaluate_merge(
            state, event.to_context(), config.commit_sha, config.policy
        )
        decision.raise_for_outcome()

        if not decision.should_tag:
            logger.info("No tag created", reason=decision.message)
            return RunResult(state=state, decision=decision)

        assert decision.version is not None
        tag_name = decision.version.tag_name
        if config.dry_run:
            logger.info("Dry run, tag not created", tag=tag_name, sha=config.commit_sha)
            return RunResult(state=state, decision=decision)

        client.create_tag_ref(tag_name, config.commit_sha)
        return RunResult(state=state, decision=decision, tag_created=True)
    finally:
        logger.unbind("repository")
        if owns_client:
            client.close()
