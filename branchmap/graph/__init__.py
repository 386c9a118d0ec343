"""Graph layer for representing branches, commits and files as networkx graphs."""

from .node_types import EdgeKind, NodeKind, node_id
from .commit_graph import CommitGraph, Edge, Node
from .builder import build_graph

__all__ = [
    "EdgeKind",
    "NodeKind",
    "node_id",
    "CommitGraph",
    "Edge",
    "Node",
    "build_graph",
]
