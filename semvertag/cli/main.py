"""auto-semver-tag CLI - Main application entry point.

Commands:
    exec      Tag the merge commit of a pull request event
    validate  Check whether a string is a semantic version tag

Exit codes: 0 when a tag was created or no tag was needed, 1 when the event
was rejected or a GitHub call failed.
"""

from __future__ import annotations

from enum import Enum
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from semvertag.core.config import API_URL_ENV_VAR, TOKEN_ENV_VAR, load_config
from semvertag.core.exceptions import SemverTagError
from semvertag.core.logging import configure_logging, get_logger
from semvertag.core.release.decision import ReleasePolicy
from semvertag.core.release.runner import run_release
from semvertag.core.versioning import parse_version

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


class UnmergedPolicy(str, Enum):
    """How to treat events that are not a closed, merged pull request."""

    ERROR = "error"
    SKIP = "skip"


def _handle_cli_error(e: Exception, operation_name: str, show_debug: bool) -> None:
    """
    Report a failed command on stderr.

    Args:
        e: The exception that occurred
        operation_name: Human-readable operation name
        show_debug: Whether to show technical details
    """
    if isinstance(e, SemverTagError):
        err_console.print(
            f"[red]✗ {escape(e.user_message)}[/red] [dim]({e.error_code})[/dim]"
        )
        err_console.print(f"  Why: {escape(e.why_it_happened)}")
        for fix in e.how_to_fix:
            err_console.print(f"  • {escape(fix)}")
    else:
        err_console.print(
            f"[red]✗ Error during {operation_name}: {type(e).__name__}[/red]"
        )
        if not show_debug:
            err_console.print("  Run with --debug for more information")

    if show_debug:
        logger.exception(f"[{operation_name}] {type(e).__name__}: {e}")
    else:
        logger.error(f"[{operation_name}] {type(e).__name__}: {e}")


def safe_cli_command(
    operation_name: str,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that turns command failures into a report and exit code 1.

    Args:
        operation_name: Human-readable operation name for error context

    Returns:
        Decorator function that wraps the command with error handling
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:
                show_debug = kwargs.get("debug", False)
                _handle_cli_error(e, operation_name, show_debug)
                raise typer.Exit(code=1)

        return wrapper

    return decorator


app = typer.Typer(
    name="auto-semver-tag",
    help="Create semantic version tags for pull requests merged into a release branch",
    add_completion=False,
    pretty_exceptions_enable=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from semvertag import __version__

        typer.echo(f"auto-semver-tag version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """auto-semver-tag - Tag merged pull requests with the next version.

    Label a pull request with major, minor or patch. When it is merged
    into the release branch, the highest existing vX.Y.Z tag is bumped
    accordingly and the new tag is created at the merge commit.

    Examples:
        auto-semver-tag exec octo/widgets main $GITHUB_SHA $GITHUB_EVENT_PATH
        auto-semver-tag validate v1.2.3-rc.1
    """


@app.command("exec")
@safe_cli_command("tagging")
def exec_command(
    repository: str = typer.Argument(..., help="Repository as owner/name"),
    release_branch: str = typer.Argument(..., help="Branch whose merges are tagged"),
    commit_sha: str = typer.Argument(..., help="Commit to tag (GITHUB_SHA)"),
    event_path: Path = typer.Argument(
        ..., help="Path to the pull_request event file (GITHUB_EVENT_PATH)"
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        envvar=TOKEN_ENV_VAR,
        show_envvar=True,
        help="GitHub access token",
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        envvar=API_URL_ENV_VAR,
        help="GitHub API root URL",
    ),
    strict: bool = typer.Option(
        True,
        "--strict/--no-strict",
        help="Require the event's merge commit to match COMMIT_SHA",
    ),
    unmerged_policy: UnmergedPolicy = typer.Option(
        UnmergedPolicy.ERROR,
        "--unmerged-policy",
        case_sensitive=False,
        help="Fail (error) or succeed silently (skip) on unmerged events",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show the decision without creating the tag",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level"),
    debug: bool = typer.Option(False, "--debug", help="Show debug output"),
) -> None:
    """Create the next version tag for a merged pull request."""
    configure_logging(level="DEBUG" if debug else log_level)

    policy = ReleasePolicy(
        verify_merge_commit=strict,
        unmerged_is_error=unmerged_policy is UnmergedPolicy.ERROR,
    )
    config = load_config(
        repository=repository,
        release_branch=release_branch,
        commit_sha=commit_sha,
        event_path=event_path,
        token=token,
        api_url=api_url,
        policy=policy,
        dry_run=dry_run,
    )

    result = run_release(config)

    if result.tag_created:
        console.print(f"[green]✓ Created tag {result.tag_name} at {commit_sha}[/green]")
    elif result.decision.should_tag:
        console.print(f"[yellow]Dry run: would create tag {result.tag_name}[/yellow]")
    else:
        console.print(f"No tag created: {result.decision.message}")


@app.command("validate")
def validate_command(
    version_string: str = typer.Argument(..., help="Tag or version to validate"),
) -> None:
    """Validate a tag against MAJOR.MINOR.PATCH[-prerelease][+build]."""
    try:
        parsed = parse_version(version_string)
    except SemverTagError:
        console.print(f"[red]Invalid version string: {escape(version_string)}[/red]")
        console.print("Expected format: \\[v]MAJOR.MINOR.PATCH[-prerelease][+build]")
        raise typer.Exit(1)

    console.print(f"[green]Valid SemVer: {parsed}[/green]")


def cli_main() -> None:
    """Entry point for console_scripts."""
    app()


if __name__ == "__main__":
    cli_main()
