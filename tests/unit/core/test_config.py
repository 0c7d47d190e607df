"""Tests for run configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from semvertag.core.config import (
    DEFAULT_API_URL,
    AutoTagConfig,
    load_config,
)
from semvertag.core.exceptions import ConfigurationError
from semvertag.core.release import ReleasePolicy


def _load(**overrides):
    kwargs = dict(
        repository="octo/widgets",
        release_branch="main",
        commit_sha="abc123",
        event_path=Path("event.json"),
        environ={"GITHUB_TOKEN": "env-token"},
    )
    kwargs.update(overrides)
    return load_config(**kwargs)


class TestAutoTagConfig:
    """Tests for AutoTagConfig validation."""

    def test_valid_repository_kept(self) -> None:
        assert _load().repository == "octo/widgets"

    @pytest.mark.parametrize(
        "repository", ["octo", "octo/", "/widgets", "octo/widgets/extra", ""]
    )
    def test_malformed_repository(self, repository: str) -> None:
        with pytest.raises(ConfigurationError, match="owner/name"):
            _load(repository=repository)

    def test_empty_branch(self) -> None:
        with pytest.raises(ConfigurationError, match="release branch"):
            _load(release_branch="")

    def test_empty_commit(self) -> None:
        with pytest.raises(ConfigurationError, match="commit SHA"):
            _load(commit_sha="")

    def test_event_path_coerced(self) -> None:
        config = AutoTagConfig(
            repository="octo/widgets",
            release_branch="main",
            commit_sha="abc",
            event_path="event.json",
            token="t",
        )
        assert config.event_path == Path("event.json")

    def test_token_hidden_from_repr(self) -> None:
        assert "env-token" not in repr(_load())


class TestLoadConfig:
    """Tests for load_config."""

    def test_token_from_environment(self) -> None:
        assert _load().token == "env-token"

    def test_explicit_token_wins(self) -> None:
        assert _load(token="cli-token").token == "cli-token"

    def test_missing_token(self) -> None:
        with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
            _load(environ={})

    def test_default_api_url(self) -> None:
        assert _load().api_url == DEFAULT_API_URL

    def test_api_url_from_environment(self) -> None:
        config = _load(
            environ={
                "GITHUB_TOKEN": "t",
                "GITHUB_API_URL": "https://ghe.example.com/api/v3/",
            }
        )
        assert config.api_url == "https://ghe.example.com/api/v3"

    def test_default_policy(self) -> None:
        policy = _load().policy
        assert policy.verify_merge_commit is True
        assert policy.unmerged_is_error is True

    def test_explicit_policy(self) -> None:
        policy = ReleasePolicy(verify_merge_commit=False, unmerged_is_error=False)
        assert _load(policy=policy).policy is policy
