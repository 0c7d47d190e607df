"""Release Module.

Repository state and merge event evaluation. The runner that wires these to
the GitHub collaborators lives in semvertag.core.release.runner.
"""

from semvertag.core.release.decision import (
    DecisionOutcome,
    DecisionReason,
    PullRequestContext,
    ReleaseDecision,
    ReleasePolicy,
    evaluate_merge,
)
from semvertag.core.release.state import (
    RepositoryState,
    TagRef,
    build_repository_state,
    find_highest_tag,
    state_from_highest_tag,
)

__all__ = [
    "DecisionOutcome",
    "DecisionReason",
    "PullRequestContext",
    "ReleaseDecision",
    "ReleasePolicy",
    "evaluate_merge",
    "RepositoryState",
    "TagRef",
    "build_repository_state",
    "find_highest_tag",
    "state_from_highest_tag",
]
