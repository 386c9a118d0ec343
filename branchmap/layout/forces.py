"""Forces acting on simulation particles."""

import math
from typing import Callable, Sequence

from ..config import LinkDistances
from ..graph.commit_graph import Edge, Node
from ..graph.node_types import EdgeKind, NodeKind
from .simulation import Simulation


def link_distance(
    edge: Edge, source: Node, target: Node, distances: LinkDistances
) -> float:
    """Target separation for an edge, by endpoint kinds and edge kind."""
    if source.kind == NodeKind.BRANCH and target.kind == NodeKind.BRANCH:
        return distances.branch_branch
    if edge.kind == EdgeKind.BRANCH_TO_COMMIT:
        return distances.branch_commit
    if edge.kind == EdgeKind.COMMIT_TO_COMMIT:
        return distances.commit_commit
    if edge.kind == EdgeKind.COMMIT_TO_FILE:
        return distances.commit_file
    return distances.default


class ManyBodyForce:
    """Pairwise charge between every two particles.

    A negative strength repels. Squared distances below ``distance_min``
    squared are softened to keep the force bounded.
    """

    def __init__(self, strength: float = -30.0, distance_min: float = 1.0):
        self.strength = strength
        self.distance_min2 = distance_min * distance_min
        self._simulation: Simulation | None = None

    def initialize(self, simulation: Simulation) -> None:
        self._simulation = simulation

    def __call__(self, alpha: float) -> None:
        sim = self._simulation
        particles = sim.particles
        weight = self.strength * alpha
        n = len(particles)

        for i in range(n):
            a = particles[i]
            for j in range(i + 1, n):
                b = particles[j]
                dx = b.x - a.x
                dy = b.y - a.y
                if dx == 0:
                    dx = sim.jiggle()
                if dy == 0:
                    dy = sim.jiggle()
                d2 = dx * dx + dy * dy
                if d2 < self.distance_min2:
                    d2 = math.sqrt(self.distance_min2 * d2)
                w = weight / d2
                a.vx += dx * w
                a.vy += dy * w
                b.vx -= dx * w
                b.vy -= dy * w


class LinkForce:
    """Springs pulling linked particles toward a target distance.

    Each link's strength is ``1 / min(degree)`` of its endpoints and the
    correction is split by endpoint degree, so hubs move less.
    """

    def __init__(
        self,
        links: Sequence[tuple[str, str]],
        distance: Callable[[int], float] | Sequence[float] | float = 30.0,
    ):
        self.links = list(links)
        self._distance = distance
        self._simulation: Simulation | None = None
        self._pairs: list[tuple[int, int]] = []
        self._distances: list[float] = []
        self._strengths: list[float] = []
        self._bias: list[float] = []

    def initialize(self, simulation: Simulation) -> None:
        """Resolve node ids to particle indexes.

        Raises:
            KeyError: If a link references an unknown node id.
        """
        self._simulation = simulation
        self._pairs = [
            (simulation.index[source], simulation.index[target])
            for source, target in self.links
        ]

        count = [0] * len(simulation)
        for s, t in self._pairs:
            count[s] += 1
            count[t] += 1

        self._strengths = [1 / min(count[s], count[t]) for s, t in self._pairs]
        self._bias = [count[s] / (count[s] + count[t]) for s, t in self._pairs]

        if callable(self._distance):
            self._distances = [self._distance(i) for i in range(len(self._pairs))]
        elif isinstance(self._distance, (int, float)):
            self._distances = [float(self._distance)] * len(self._pairs)
        else:
            self._distances = [float(d) for d in self._distance]

    def __call__(self, alpha: float) -> None:
        sim = self._simulation
        particles = sim.particles

        for k, (s, t) in enumerate(self._pairs):
            source = particles[s]
            target = particles[t]
            x = target.x + target.vx - source.x - source.vx
            y = target.y + target.vy - source.y - source.vy
            if x == 0:
                x = sim.jiggle()
            if y == 0:
                y = sim.jiggle()
            length = math.sqrt(x * x + y * y)
            scale = (length - self._distances[k]) / length * alpha * self._strengths[k]
            x *= scale
            y *= scale
            b = self._bias[k]
            target.vx -= x * b
            target.vy -= y * b
            source.vx += x * (1 - b)
            source.vy += y * (1 - b)


class PositionForce:
    """Pull toward a coordinate on one axis ("x" or "y")."""

    def __init__(self, axis: str, target: float, strength: float = 0.1):
        if axis not in ("x", "y"):
            raise ValueError(f"Unknown axis: {axis}")
        self.axis = axis
        self.target = target
        self.strength = strength
        self._simulation: Simulation | None = None

    def initialize(self, simulation: Simulation) -> None:
        self._simulation = simulation

    def __call__(self, alpha: float) -> None:
        k = self.strength * alpha
        if self.axis == "x":
            for p in self._simulation.particles:
                p.vx += (self.target - p.x) * k
        else:
            for p in self._simulation.particles:
                p.vy += (self.target - p.y) * k


class CollideForce:
    """Keep particles at least ``radius + margin`` apart from each other.

    Overlaps are resolved on predicted positions (position plus velocity)
    and split between the pair in proportion to the other's squared radius.
    """

    def __init__(self, margin: float = 0.0, strength: float = 1.0):
        self.margin = margin
        self.strength = strength
        self._simulation: Simulation | None = None
        self._radii: list[float] = []

    def initialize(self, simulation: Simulation) -> None:
        self._simulation = simulation
        self._radii = [p.radius + self.margin for p in simulation.particles]

    def __call__(self, alpha: float) -> None:
        sim = self._simulation
        particles = sim.particles
        radii = self._radii
        n = len(particles)

        for i in range(n):
            node = particles[i]
            ri = radii[i]
            ri2 = ri * ri
            xi = node.x + node.vx
            yi = node.y + node.vy
            for j in range(i + 1, n):
                other = particles[j]
                rj = radii[j]
                r = ri + rj
                x = xi - other.x - other.vx
                y = yi - other.y - other.vy
                d2 = x * x + y * y
                if d2 >= r * r:
                    continue
                if x == 0:
                    x = sim.jiggle()
                    d2 += x * x
                if y == 0:
                    y = sim.jiggle()
                    d2 += y * y
                length = math.sqrt(d2)
                scale = (r - length) / length * self.strength
                x *= scale
                y *= scale
                share = rj * rj / (ri2 + rj * rj)
                node.vx += x * share
                node.vy += y * share
                other.vx -= x * (1 - share)
                other.vy -= y * (1 - share)
