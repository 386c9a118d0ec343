"""Command-line interface for branchmap."""

import sys
from pathlib import Path

import click

from .config import ConfigError, load_config
from .logging_config import configure_logging
from .output.formatter import format_graph
from .schema.errors import SnapshotLoadError, SnapshotValidationError
from .schema.loader import dump_snapshot, parse_snapshot
from .session import GraphSession


def _get_github_client():
    """Lazy import of the GitHub client to avoid requiring requests."""
    try:
        import requests  # noqa: F401

        from .github.client import GitHubClient

        return GitHubClient
    except ImportError:
        return None


@click.group()
@click.version_option()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv)")
def main(verbose: int):
    """branchmap: force-directed graphs of repository branches and commits."""
    configure_logging(verbose or None)


@main.command()
@click.argument("snapshot_file", type=click.Path(exists=True))
@click.option(
    "--branch",
    "selected_branch",
    default=None,
    help="Selected branch (defaults to the snapshot's selected_branch)",
)
@click.option("--width", type=float, default=None, help="Canvas width")
@click.option("--height", type=float, default=None, help="Canvas height")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--layout/--no-layout",
    default=True,
    help="Run the force layout before printing",
)
def graph(
    snapshot_file: str,
    selected_branch: str | None,
    width: float | None,
    height: float | None,
    config_file: str | None,
    output_format: str,
    layout: bool,
):
    """Build and lay out the graph of a snapshot file.

    SNAPSHOT_FILE is a YAML or JSON file with branches and commits.

    Exit codes:
      0 - Success
      2 - File, schema or configuration error
    """
    try:
        config = load_config(config_file)
        snapshot = parse_snapshot(snapshot_file)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)
    except SnapshotLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SnapshotValidationError as e:
        click.echo(f"Snapshot validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)

    canvas_overrides = {}
    if width is not None:
        canvas_overrides["width"] = width
    if height is not None:
        canvas_overrides["height"] = height
    if canvas_overrides:
        config = config.model_copy(
            update={"canvas": config.canvas.model_copy(update=canvas_overrides)}
        )

    session = GraphSession(config=config)
    session.update(
        branches=snapshot.branches,
        commits=snapshot.commits,
        selected_branch=selected_branch or snapshot.selected_branch,
    )

    result = session.ensure_layout() if layout else None

    output = format_graph(
        session.graph, result, output_format, generation=session.generation  # type: ignore
    )
    click.echo(output)
    sys.exit(0)


@main.command()
@click.argument("owner")
@click.argument("repo")
@click.option("--branch", default=None, help="Branch to fetch commits for")
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    help="GitHub token (defaults to GITHUB_TOKEN env var)",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the snapshot here instead of stdout",
)
def fetch(
    owner: str,
    repo: str,
    branch: str | None,
    token: str | None,
    output_file: str | None,
):
    """Fetch a repository snapshot from GitHub.

    Writes branches and the commits of one branch (with changed files)
    as YAML that the graph command reads.

    Exit codes:
      0 - Success
      2 - Authentication or API error
    """
    from .github.errors import AuthenticationError, GitHubError

    GitHubClient = _get_github_client()
    if GitHubClient is None:
        click.echo(
            "Error: The requests package is not installed.\n"
            "Install it with: pip install branchmap[github]",
            err=True,
        )
        sys.exit(2)

    try:
        client = GitHubClient(token=token)
        snapshot = client.fetch_snapshot(owner, repo, branch)
    except AuthenticationError as e:
        click.echo(f"Authentication error: {e}", err=True)
        sys.exit(2)
    except GitHubError as e:
        click.echo(f"GitHub error: {e}", err=True)
        sys.exit(2)

    content = dump_snapshot(snapshot)
    if output_file is None:
        click.echo(content)
    else:
        path = Path(output_file)
        path.write_text(content, encoding="utf-8")
        click.echo(
            f"Wrote {len(snapshot.branches)} branches and "
            f"{len(snapshot.commits)} commits to {path}"
        )
    sys.exit(0)


if __name__ == "__main__":
    main()
