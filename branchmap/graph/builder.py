"""Builder for converting branch and commit records to a CommitGraph."""

import logging
from typing import Sequence

from ..config import Canvas
from ..schema.models import DEFAULT_BRANCH_NAMES, Branch, Commit
from .colors import branch_color
from .commit_graph import CommitGraph
from .node_types import EdgeKind, NodeKind, node_id

logger = logging.getLogger(__name__)


def build_graph(
    branches: Sequence[Branch],
    commits: Sequence[Commit],
    selected_branch: str | None = None,
    canvas: Canvas | None = None,
) -> CommitGraph:
    """Build a CommitGraph from branch and commit records.

    Branches are pinned on a ring around the canvas center. Commits and
    the files they touch are added unpositioned for the layout engine.
    Edges are collected first and only added once every node exists, so
    an edge to a skipped or unfetched record is dropped.

    Args:
        branches: Branch records, in display order.
        commits: Commit records, newest first.
        selected_branch: Name of the branch the commits belong to.
        canvas: Canvas geometry; defaults to Canvas().

    Returns:
        A CommitGraph for the input.
    """
    canvas = canvas or Canvas()
    graph = CommitGraph()
    pending: list[tuple[str, str, EdgeKind]] = []

    # Branches on the anchor ring
    default_branch = next(
        (b for b in branches if b.name in DEFAULT_BRANCH_NAMES), None
    )
    for index, branch in enumerate(branches):
        if graph.has_node(node_id(NodeKind.BRANCH, branch.name)):
            logger.debug("Skipping duplicate branch %r", branch.name)
            continue
        graph.add_branch(
            branch,
            position=canvas.anchor(index, len(branches)),
            color=branch_color(
                branch.name,
                selected_branch,
                is_default=branch.name in DEFAULT_BRANCH_NAMES,
            ),
        )

    # Star from the default branch, used only as a layout attractor
    if default_branch is not None:
        default_id = node_id(NodeKind.BRANCH, default_branch.name)
        for branch in branches:
            if branch.name != default_branch.name:
                pending.append(
                    (default_id, node_id(NodeKind.BRANCH, branch.name), EdgeKind.BRANCH_TO_COMMIT)
                )

    for index, commit in enumerate(commits):
        if not commit.sha:
            logger.debug("Skipping commit without sha at index %d", index)
            continue

        commit_id = node_id(NodeKind.COMMIT, commit.sha)
        if graph.has_node(commit_id):
            logger.debug("Skipping duplicate commit %s", commit.sha)
            continue
        graph.add_commit(commit)

        # The selected branch points at the newest commit
        if index == 0 and selected_branch:
            pending.append(
                (node_id(NodeKind.BRANCH, selected_branch), commit_id, EdgeKind.BRANCH_TO_COMMIT)
            )

        for parent in commit.parents:
            if parent.sha:
                pending.append(
                    (node_id(NodeKind.COMMIT, parent.sha), commit_id, EdgeKind.COMMIT_TO_COMMIT)
                )

        for file in commit.files or []:
            if not file.filename:
                continue
            file_id = node_id(NodeKind.FILE, file.filename)
            if not graph.has_node(file_id):
                graph.add_file(file)
            pending.append((commit_id, file_id, EdgeKind.COMMIT_TO_FILE))

    # Keep only edges whose endpoints both exist
    dropped = 0
    for source, target, kind in pending:
        if graph.add_edge(source, target, kind) is None:
            dropped += 1

    if dropped:
        logger.debug("Dropped %d edge(s) with a missing endpoint", dropped)

    return graph
