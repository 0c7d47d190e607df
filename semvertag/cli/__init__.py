"""auto-semver-tag CLI.

Usage:
    python -m semvertag exec OWNER/NAME main $GITHUB_SHA $GITHUB_EVENT_PATH
"""

from semvertag.cli.main import app, cli_main

__all__ = ["app", "cli_main"]
