"""
Shared pytest fixtures for auto-semver-tag tests.

Fixture Organization
--------------------
- **make_event_payload**: Builder for pull_request webhook payloads
- **event_file**: Writes a payload to a temporary event file
- **mock_session**: requests.Session stand-in with a real headers dict
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import pytest

from tests.fixtures.github import build_event_payload


@pytest.fixture
def make_event_payload() -> Callable[..., Dict[str, Any]]:
    """Return the payload builder."""
    return build_event_payload


@pytest.fixture
def event_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a function writing a payload to a temporary event file.

    Example:
        def test_load(event_file):
            path = event_file(labels=["minor"])
    """

    def _write(payload: Any = None, **kwargs: Any) -> Path:
        path = tmp_path / "event.json"
        data = payload if payload is not None else build_event_payload(**kwargs)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_session() -> MagicMock:
    """A requests.Session stand-in with a real headers dict."""
    session = MagicMock()
    session.headers = {}
    return session
