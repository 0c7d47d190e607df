"""
Fixture modules for auto-semver-tag tests.

Modules
-------
- github: Pull request event payloads and GitHub API response stand-ins
"""

from tests.fixtures.github import (
    MERGE_SHA,
    OTHER_SHA,
    build_event_payload,
    make_ref,
    make_response,
)

__all__ = [
    "MERGE_SHA",
    "OTHER_SHA",
    "build_event_payload",
    "make_ref",
    "make_response",
]
