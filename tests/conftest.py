"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from branchmap.config import Canvas
from branchmap.graph.builder import build_graph
from branchmap.schema.loader import parse_snapshot_from_string
from branchmap.schema.models import Branch, Commit


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def canvas() -> Canvas:
    """Return a square canvas with round numbers."""
    return Canvas(width=400, height=400)


@pytest.fixture
def history_yaml() -> str:
    """Return a snapshot with a short linear history plus a merge."""
    return """
owner: octo
repo: hello
selected_branch: main
branches:
  - main
  - develop
  - feature
commits:
  - sha: c3
    html_url: https://github.com/octo/hello/commit/c3
    message: Merge develop into main for release
    parents: [c2, c1]
    files:
      - src/app.py
      - README.md
  - sha: c2
    message: Add app
    parents: [c1]
    files:
      - src/app.py
  - sha: c1
    message: Initial commit
    parents: [c0]
    files:
      - README.md
"""


@pytest.fixture
def history_snapshot(history_yaml):
    """Return a parsed history snapshot."""
    return parse_snapshot_from_string(history_yaml)


@pytest.fixture
def history_graph(history_snapshot, canvas):
    """Return a graph built from the history snapshot."""
    return build_graph(
        history_snapshot.branches,
        history_snapshot.commits,
        history_snapshot.selected_branch,
        canvas,
    )


@pytest.fixture
def make_branches():
    """Return a factory building branch records from names."""

    def _make(*names: str) -> list[Branch]:
        return [Branch(name=name) for name in names]

    return _make


@pytest.fixture
def make_commit():
    """Return a factory building a commit record from shorthand values."""

    def _make(
        sha: str,
        message: str = "",
        parents: list[str] | None = None,
        files: list[str] | None = None,
    ) -> Commit:
        data: dict = {"sha": sha, "message": message, "parents": parents or []}
        if files is not None:
            data["files"] = files
        return Commit.model_validate(data)

    return _make
