"""Layout engine running the force simulation over a CommitGraph."""

import logging
from dataclasses import dataclass, field

from ..config import Canvas, LayoutSettings
from ..graph.commit_graph import CommitGraph, Position
from .forces import CollideForce, LinkForce, ManyBodyForce, PositionForce, link_distance
from .simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Outcome of one layout run."""

    positions: dict[str, Position | None] = field(default_factory=dict)
    settled: bool = False
    iterations: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the simulation raised and positions were left as they were."""
        return self.error is not None


class LayoutEngine:
    """Assigns positions to every non-fixed node of a graph.

    Runs a fixed number of relaxation ticks with charge, link, centering
    and collision forces. Failures never propagate: the graph keeps its
    previous positions and the result is still marked settled.
    """

    def __init__(
        self,
        settings: LayoutSettings | None = None,
        canvas: Canvas | None = None,
    ):
        self.settings = settings or LayoutSettings()
        self.canvas = canvas or Canvas()

    def create_simulation(self, graph: CommitGraph) -> Simulation:
        """Build a simulation with the default forces for a graph."""
        settings = self.settings
        cx, cy = self.canvas.center

        simulation = Simulation(
            graph.nodes,
            center=(cx, cy),
            alpha_min=settings.alpha_min,
            alpha_decay=settings.alpha_decay,
            velocity_decay=settings.velocity_decay,
            seed=settings.seed,
        )

        edges = graph.edges
        distances = [
            link_distance(
                edge,
                graph.get_node(edge.source),
                graph.get_node(edge.target),
                settings.link_distances,
            )
            for edge in edges
        ]

        simulation.force("charge", ManyBodyForce(strength=settings.charge_strength))
        simulation.force(
            "link",
            LinkForce([(e.source, e.target) for e in edges], distance=distances),
        )
        simulation.force("x", PositionForce("x", cx, strength=settings.center_strength))
        simulation.force("y", PositionForce("y", cy, strength=settings.center_strength))
        simulation.force("collide", CollideForce(margin=settings.collision_margin))
        return simulation

    def run(self, graph: CommitGraph) -> LayoutResult:
        """Lay out a graph in place.

        Args:
            graph: The graph to lay out. Non-fixed node positions are
                overwritten on success.

        Returns:
            A settled LayoutResult. On failure ``error`` is set and the
            positions are those the graph had before the run.
        """
        before = graph.positions()

        if not any(not node.fixed for node in graph.nodes):
            return LayoutResult(positions=before, settled=True)

        try:
            simulation = self.create_simulation(graph)
            simulation.run(self.settings.iterations)
            positions = simulation.positions()
        except Exception as e:
            logger.exception("Force simulation failed; keeping previous positions")
            return LayoutResult(positions=before, settled=True, error=str(e))

        for node in graph.nodes:
            if not node.fixed:
                graph.set_position(node.id, positions[node.id])

        logger.debug(
            "Laid out %d nodes in %d ticks", len(positions), simulation.ticks
        )
        return LayoutResult(
            positions=graph.positions(),
            settled=True,
            iterations=simulation.ticks,
        )


def run_layout(
    graph: CommitGraph,
    settings: LayoutSettings | None = None,
    canvas: Canvas | None = None,
) -> LayoutResult:
    """Convenience function to lay out a graph."""
    return LayoutEngine(settings=settings, canvas=canvas).run(graph)
