"""Node and edge type definitions for the commit graph."""

from enum import Enum


class NodeKind(str, Enum):
    """Kinds of nodes in the commit graph."""

    BRANCH = "branch"
    COMMIT = "commit"
    FILE = "file"


class EdgeKind(str, Enum):
    """Kinds of edges in the commit graph."""

    BRANCH_TO_COMMIT = "branch-commit"  # Also default branch -> other branch
    COMMIT_TO_COMMIT = "commit-commit"  # Parent -> child
    COMMIT_TO_FILE = "commit-file"


NODE_ID_PREFIXES = {
    NodeKind.BRANCH: "branch",
    NodeKind.COMMIT: "commit",
    NodeKind.FILE: "file",
}


def node_id(kind: NodeKind, key: str) -> str:
    """Build the namespaced node id for a natural key."""
    return f"{NODE_ID_PREFIXES[kind]}:{key}"
