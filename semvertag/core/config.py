"""
Run configuration for auto-semver-tag.

One AutoTagConfig is created per invocation from the CLI arguments and the
environment, validated once, and passed to the runner. Nothing below the
CLI reads the environment.

Environment Variables
---------------------
    GITHUB_TOKEN     Access token used for the GitHub API (required)
    GITHUB_API_URL   API root, set by Actions on GitHub Enterprise
                     (default: https://api.github.com)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from semvertag.core.exceptions import ConfigurationError
from semvertag.core.release.decision import ReleasePolicy

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SEC = 30.0

TOKEN_ENV_VAR = "GITHUB_TOKEN"
API_URL_ENV_VAR = "GITHUB_API_URL"


@dataclass
class AutoTagConfig:
    """Settings for a single tagging run."""

    repository: str
    release_branch: str
    commit_sha: str
    event_path: Path
    token: str = field(repr=False)
    api_url: str = DEFAULT_API_URL
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    policy: ReleasePolicy = field(default_factory=ReleasePolicy)
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate settings at load time."""
        self.event_path = Path(self.event_path)
        self.api_url = self.api_url.rstrip("/")

        parts = self.repository.split("/")
        if len(parts) != 2 or not all(parts):
            raise ConfigurationError(
                f"repository must be in owner/name form, got: {self.repository!r}"
            )
        if not self.release_branch:
            raise ConfigurationError("release branch must not be empty")
        if not self.commit_sha:
            raise ConfigurationError("commit SHA must not be empty")
        if not self.token:
            raise ConfigurationError(f"{TOKEN_ENV_VAR} env var does not exist")
        if self.timeout_sec <= 0:
            raise ConfigurationError("timeout must be positive")


def load_config(
    repository: str,
    release_branch: str,
    commit_sha: str,
    event_path: Path,
    token: Optional[str] = None,
    api_url: Optional[str] = None,
    policy: Optional[ReleasePolicy] = None,
    dry_run: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> AutoTagConfig:
    """
    Build a validated AutoTagConfig.

    Explicit arguments win over the environment.

    Args:
        repository: Repository in owner/name form.
        release_branch: Branch whose merges are tagged.
        commit_sha: Commit to tag.
        event_path: Path to the pull_request event JSON file.
        token: Access token; falls back to GITHUB_TOKEN.
        api_url: API root; falls back to GITHUB_API_URL, then github.com.
        policy: Release rule switches.
        dry_run: Compute the decision without creating the tag.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Validated AutoTagConfig.

    Raises:
        ConfigurationError: If a setting is missing or malformed.
    """
    env = os.environ if environ is None else environ
    return AutoTagConfig(
        repository=repository,
        release_branch=release_branch,
        commit_sha=commit_sha,
        event_path=Path(event_path),
        token=token or env.get(TOKEN_ENV_VAR, ""),
        api_url=api_url or env.get(API_URL_ENV_VAR) or DEFAULT_API_URL,
        policy=policy or ReleasePolicy(),
        dry_run=dry_run,
    )
