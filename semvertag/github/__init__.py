"""GitHub collaborators: REST client and event payload loader."""

from semvertag.github.client import GitHubClient
from semvertag.github.events import (
    PullRequestEvent,
    load_pull_request_event,
    parse_pull_request_event,
)

__all__ = [
    "GitHubClient",
    "PullRequestEvent",
    "load_pull_request_event",
    "parse_pull_request_event",
]
