"""
Centralized Exception Hierarchy for auto-semver-tag.

All custom exceptions inherit from SemverTagError so the CLI can catch
them in one place and render them consistently.

Each exception includes:
- error_code: Unique identifier (e.g., "ST-VER-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Exception Hierarchy
-------------------
    SemverTagError (base)
    ├── InvalidVersionError
    ├── ConfigurationError
    ├── EventPayloadError
    ├── ReleaseRejectedError
    │   ├── PreconditionRejectedError
    │   └── DegenerateVersionError
    └── GitHubAPIError

A merge that needs no tag is not an error: the release decision reports it
as a no-op and the process exits successfully.
"""

from typing import List, Optional
import re


# (pattern, replacement) pairs applied to every error message
_SENSITIVE_PATTERNS = [
    # GitHub tokens (classic, fine-grained, app installation)
    (r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}", r"<github-token>"),
    (r"\bgithub_pat_[A-Za-z0-9_]{20,}", r"<github-token>"),
    # Authorization headers
    (r"(Bearer|token)\s+[A-Za-z0-9_.-]{20,}", r"\1 <token>"),
    # Basic auth in URLs
    (r"://[^:/\s]+:[^@\s]+@", r"://<user>:<pass>@"),
    (r"(GITHUB_TOKEN)[=:]\s*[^\s]+", r"\1=<hidden>"),
]


def sanitize_message(message: str) -> str:
    """Mask credentials that may leak into an error message.

    Args:
        message: Original error message

    Returns:
        Sanitized message with tokens replaced
    """
    if not message:
        return message

    result = message
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = re.sub(pattern, replacement, result)
    return result


class SemverTagError(Exception):
    """
    Base exception for all auto-semver-tag errors.

    Example
    -------
        try:
            run_release(config)
        except SemverTagError as e:
            logger.error(f"Release failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    error_code: str = "ST-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize SemverTagError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "ST-GH-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(sanitize_message(message))

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)


class InvalidVersionError(SemverTagError, ValueError):
    """
    Raised when a string is not a valid semantic version.

    Callers scanning tag lists treat this as recoverable and skip the tag.

    Example
    -------
        parse_version("01.0.0")
        # Raises: InvalidVersionError("invalid semver: 01.0.0")
    """

    error_code = "ST-VER-001"
    why_it_happened = (
        "The value does not match MAJOR.MINOR.PATCH with optional 'v' prefix, "
        "prerelease and build metadata"
    )
    how_to_fix = [
        "Use tags like v1.2.3, 1.2.3, v1.2.3-rc.1 or v1.2.3+build.5",
        "Remove leading zeros from numeric components",
    ]

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid semver: {value}")
        self.value = value


class ConfigurationError(SemverTagError):
    """Raised when invocation arguments or environment are unusable."""

    error_code = "ST-CFG-001"
    why_it_happened = "The run was started with missing or malformed settings"
    how_to_fix = [
        "Pass the repository as owner/name",
        "Export GITHUB_TOKEN or pass --token",
    ]


class EventPayloadError(SemverTagError):
    """
    Raised when the pull request event file cannot be used.

    This occurs when the file is missing, is not valid JSON, or does not
    have the shape of a pull_request webhook event.
    """

    error_code = "ST-EVT-001"
    why_it_happened = "The event payload could not be read as a pull_request event"
    how_to_fix = [
        "Run the action from a workflow triggered by pull_request: closed",
        "Check that GITHUB_EVENT_PATH points to the event file",
    ]

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        detail = f"{message}. Filepath: {path}" if path else message
        super().__init__(detail)
        self.path = path


class ReleaseRejectedError(SemverTagError):
    """Base exception for release decisions that must fail the run."""

    error_code = "ST-REL-000"
    why_it_happened = "The merge event cannot produce a release tag"
    how_to_fix = ["Review the pull request event that triggered the run"]


class PreconditionRejectedError(ReleaseRejectedError):
    """
    Raised when the event is not a closed, merged pull request for this commit.
    """

    error_code = "ST-REL-001"
    why_it_happened = (
        "The pull request was not closed and merged, its base branch is "
        "unknown, or it does not match the commit being tagged"
    )
    how_to_fix = [
        "Trigger the workflow on pull_request types: [closed]",
        "Guard the job with: if: github.event.pull_request.merged == true",
    ]


class DegenerateVersionError(ReleaseRejectedError):
    """Raised when the computed version is not greater than v0.0.0."""

    error_code = "ST-REL-002"
    why_it_happened = "The version increment produced v0.0.0"
    how_to_fix = ["Check the existing tags in the repository"]


class GitHubAPIError(SemverTagError):
    """
    Raised when a GitHub API call fails.

    The message carries GitHub's own error text unchanged. Calls are never
    retried: creating a ref is not idempotent.
    """

    error_code = "ST-GH-001"
    why_it_happened = "A request to the GitHub API failed"
    how_to_fix = [
        "Check that the token has contents: write permission",
        "Check whether the tag already exists",
        "Verify GITHUB_API_URL when using GitHub Enterprise",
    ]

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
