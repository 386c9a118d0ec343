"""Versioned graph state: rebuild on input change, lay out once per version."""

import logging
from dataclasses import dataclass
from typing import Sequence

from .config import BranchmapConfig
from .graph.builder import build_graph
from .graph.commit_graph import CommitGraph, Edge, Node
from .layout.engine import LayoutEngine, LayoutResult
from .schema.models import Branch, Commit, RepositorySnapshot

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable copy of a graph version handed to the presentation layer."""

    generation: int
    settled: bool
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]


class GraphSession:
    """Owns the (branches, commits, selected branch) input and its graph.

    Every change to the input rebuilds the graph from scratch and bumps
    ``generation``. Layout runs at most once per generation; moving nodes
    does not change the generation.
    """

    def __init__(
        self,
        config: BranchmapConfig | None = None,
        engine: LayoutEngine | None = None,
    ):
        self.config = config or BranchmapConfig()
        self.engine = engine or LayoutEngine(
            settings=self.config.layout, canvas=self.config.canvas
        )
        self.branches: tuple[Branch, ...] = ()
        self.commits: tuple[Commit, ...] = ()
        self.selected_branch: str | None = None
        self.generation = 0
        self.laid_out_generation: int | None = None
        self.last_result: LayoutResult | None = None
        self._graph = build_graph((), (), None, self.config.canvas)

    @classmethod
    def from_snapshot(
        cls, snapshot: RepositorySnapshot, config: BranchmapConfig | None = None
    ) -> "GraphSession":
        """Create a session holding a snapshot's input."""
        session = cls(config=config)
        session.update(
            branches=snapshot.branches,
            commits=snapshot.commits,
            selected_branch=snapshot.selected_branch,
        )
        return session

    @property
    def graph(self) -> CommitGraph:
        """The graph for the current generation."""
        return self._graph

    @property
    def settled(self) -> bool:
        """Check if layout has completed for the current generation."""
        return self.laid_out_generation == self.generation

    def update(
        self,
        branches: Sequence[Branch] | object = _UNSET,
        commits: Sequence[Commit] | object = _UNSET,
        selected_branch: str | None | object = _UNSET,
    ) -> bool:
        """Replace any part of the input triple.

        Returns:
            True if the input changed and the graph was rebuilt.
        """
        new_branches = self.branches if branches is _UNSET else tuple(branches)
        new_commits = self.commits if commits is _UNSET else tuple(commits)
        new_selected = (
            self.selected_branch if selected_branch is _UNSET else selected_branch
        )

        if (new_branches, new_commits, new_selected) == (
            self.branches,
            self.commits,
            self.selected_branch,
        ):
            return False

        self.branches = new_branches
        self.commits = new_commits
        self.selected_branch = new_selected
        self.generation += 1
        self._graph = build_graph(
            self.branches, self.commits, self.selected_branch, self.config.canvas
        )
        logger.debug(
            "Rebuilt graph generation %d: %d nodes, %d edges",
            self.generation,
            len(self._graph),
            len(self._graph.edges),
        )
        return True

    def ensure_layout(self) -> LayoutResult | None:
        """Lay out the current generation unless already done.

        Returns:
            The new LayoutResult, or None if this generation was already
            laid out.
        """
        if self.settled:
            return None

        result = self.engine.run(self._graph)
        self.laid_out_generation = self.generation
        self.last_result = result
        return result

    def snapshot(self) -> GraphSnapshot:
        """Copy the current graph for the presentation layer."""
        return GraphSnapshot(
            generation=self.generation,
            settled=self.settled,
            nodes=self._graph.copy_nodes(),
            edges=tuple(self._graph.edges),
        )
