"""CommitGraph wrapper around networkx for branch/commit/file graphs."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterator

import networkx as nx

from ..schema.models import Branch, Commit, CommitFile
from .colors import (
    BRANCH_RADIUS,
    COMMIT_COLOR,
    EDGE_COLORS,
    FILE_RADIUS,
    commit_radius,
    file_color,
)
from .node_types import EdgeKind, NodeKind, node_id

Position = tuple[float, float]

COMMIT_LABEL_LENGTH = 20


@dataclass
class Node:
    """A graph vertex: a branch, a commit or a file."""

    id: str
    kind: NodeKind
    label: str
    radius: float
    color: str
    position: Position | None = None
    fixed: bool = False
    payload: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Edge:
    """A directed, typed relation between two node ids."""

    source: str
    target: str
    kind: EdgeKind
    color: str


class CommitGraph:
    """A graph of branches, commits and the files they touch.

    Wraps a networkx MultiDiGraph; each node carries its Node record and
    each edge its Edge record. Node and edge order follow insertion order.
    """

    def __init__(self):
        """Initialize an empty commit graph."""
        self._graph = nx.MultiDiGraph()
        self._edge_seq = 0

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_node(self, node: Node) -> str:
        """Add a node record to the graph.

        Raises:
            ValueError: If a node with the same id already exists.
        """
        if self._graph.has_node(node.id):
            raise ValueError(f"Duplicate node id: {node.id}")
        self._graph.add_node(node.id, node=node, kind=node.kind)
        return node.id

    def add_branch(
        self, branch: Branch, position: Position, color: str
    ) -> str:
        """Add a branch node pinned at its anchor position.

        Returns:
            The node ID.
        """
        return self.add_node(
            Node(
                id=node_id(NodeKind.BRANCH, branch.name),
                kind=NodeKind.BRANCH,
                label=branch.name,
                radius=BRANCH_RADIUS,
                color=color,
                position=position,
                fixed=True,
                payload=branch,
            )
        )

    def add_commit(self, commit: Commit) -> str:
        """Add a commit node, sized by the number of files it touches.

        Returns:
            The node ID.
        """
        return self.add_node(
            Node(
                id=node_id(NodeKind.COMMIT, commit.sha),
                kind=NodeKind.COMMIT,
                label=commit.message[:COMMIT_LABEL_LENGTH],
                radius=commit_radius(commit.file_count),
                color=COMMIT_COLOR,
                payload=commit,
            )
        )

    def add_file(self, file: CommitFile) -> str:
        """Add a file node labelled with the file's basename.

        Returns:
            The node ID.
        """
        return self.add_node(
            Node(
                id=node_id(NodeKind.FILE, file.filename),
                kind=NodeKind.FILE,
                label=file.filename.rsplit("/", 1)[-1] or file.filename,
                radius=FILE_RADIUS,
                color=file_color(file.filename),
                payload=file,
            )
        )

    def add_edge(self, source: str, target: str, kind: EdgeKind) -> Edge | None:
        """Add an edge between two existing nodes.

        Edges with a missing endpoint are not added.

        Returns:
            The added Edge, or None if an endpoint does not exist.
        """
        if not (self._graph.has_node(source) and self._graph.has_node(target)):
            return None

        edge = Edge(source=source, target=target, kind=kind, color=EDGE_COLORS[kind])
        self._graph.add_edge(source, target, edge=edge, kind=kind, seq=self._edge_seq)
        self._edge_seq += 1
        return edge

    def set_position(self, node_id: str, position: Position | None) -> None:
        """Set the position of a node."""
        self._graph.nodes[node_id]["node"].position = position

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_node(self, node_id: str) -> bool:
        """Check if a node id exists."""
        return self._graph.has_node(node_id)

    def get_node(self, node_id: str) -> Node | None:
        """Get a node record by id."""
        if self._graph.has_node(node_id):
            return self._graph.nodes[node_id]["node"]
        return None

    @property
    def nodes(self) -> list[Node]:
        """All node records in insertion order."""
        return [data["node"] for _, data in self._graph.nodes(data=True)]

    @property
    def edges(self) -> list[Edge]:
        """All edge records in insertion order."""
        ordered = sorted(
            self._graph.edges(data=True), key=lambda item: item[2]["seq"]
        )
        return [data["edge"] for _, _, data in ordered]

    def iter_nodes(self, kind: NodeKind) -> Iterator[Node]:
        """Iterate over nodes of one kind."""
        for _, data in self._graph.nodes(data=True):
            if data["kind"] == kind:
                yield data["node"]

    def degree(self, node_id: str) -> int:
        """Number of edges touching a node, counting both directions."""
        return self._graph.degree(node_id)

    def get_branch_names(self) -> list[str]:
        """Get all branch names in the graph."""
        return [node.label for node in self.iter_nodes(NodeKind.BRANCH)]

    def get_commit_node(self, sha: str) -> Node | None:
        """Get a commit node by sha."""
        return self.get_node(node_id(NodeKind.COMMIT, sha))

    def get_file_node(self, path: str) -> Node | None:
        """Get a file node by path."""
        return self.get_node(node_id(NodeKind.FILE, path))

    def edges_into(self, node_id: str, kind: EdgeKind | None = None) -> list[Edge]:
        """Get edges pointing at a node, optionally of one kind."""
        return [
            data["edge"]
            for _, _, data in self._graph.in_edges(node_id, data=True)
            if kind is None or data["kind"] == kind
        ]

    def edges_from(self, node_id: str, kind: EdgeKind | None = None) -> list[Edge]:
        """Get edges leaving a node, optionally of one kind."""
        return [
            data["edge"]
            for _, _, data in self._graph.out_edges(node_id, data=True)
            if kind is None or data["kind"] == kind
        ]

    def positions(self) -> dict[str, Position | None]:
        """Current position of every node."""
        return {node.id: node.position for node in self.nodes}

    def node_url(self, node_id: str) -> str | None:
        """Get the web URL a node links to.

        Commits link to their own page. Branches use their html_url, or a
        tree URL derived from any commit URL of the same repository.
        """
        node = self.get_node(node_id)
        if node is None or node.kind == NodeKind.FILE:
            return None

        if node.kind == NodeKind.COMMIT:
            return node.payload.html_url or None

        if node.payload is not None and node.payload.html_url:
            return node.payload.html_url

        for commit_node in self.iter_nodes(NodeKind.COMMIT):
            html_url = commit_node.payload.html_url
            if html_url and "/commit/" in html_url:
                repo_url = html_url.split("/commit/")[0]
                return f"{repo_url}/tree/{node.label}"
        return None

    def fingerprint(self) -> tuple:
        """Identity of the graph without positions.

        Two graphs built from identical input have equal fingerprints.
        """
        nodes = tuple(
            (n.id, n.kind.value, n.label, n.radius, n.color, n.fixed)
            for n in self.nodes
        )
        edges = tuple((e.source, e.target, e.kind.value, e.color) for e in self.edges)
        return nodes, edges

    def copy_nodes(self) -> tuple[Node, ...]:
        """Detached copies of all nodes, sharing payload references."""
        return tuple(dataclasses.replace(node) for node in self.nodes)
