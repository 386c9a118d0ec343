"""Force simulation state and integration loop."""

import math
import random
from dataclasses import dataclass
from typing import Iterable, Protocol

from ..graph.commit_graph import Node, Position

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))
JIGGLE_SCALE = 1e-6


@dataclass(slots=True)
class Particle:
    """Mutable per-node state for one simulation run."""

    x: float
    y: float
    radius: float
    fixed: bool = False
    vx: float = 0.0
    vy: float = 0.0


class Force(Protocol):
    """A force adds to particle velocities once per tick."""

    def initialize(self, simulation: "Simulation") -> None: ...

    def __call__(self, alpha: float) -> None: ...


class Simulation:
    """A bounded force-directed relaxation over a list of particles.

    Particles live in one list addressed by index; ``index`` maps node ids
    to positions in that list. Fixed particles take part in every force
    but are never moved. The run is deterministic: forces are applied in
    registration order and the only randomness is a seeded jiggle used to
    separate coincident points.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        center: Position = (0.0, 0.0),
        *,
        alpha_min: float = 0.001,
        alpha_decay: float | None = None,
        alpha_target: float = 0.0,
        velocity_decay: float = 0.4,
        seed: int = 1,
    ):
        self.particles: list[Particle] = []
        self.ids: list[str] = []
        self.index: dict[str, int] = {}
        self.alpha = 1.0
        self.alpha_min = alpha_min
        self.alpha_decay = (
            alpha_decay if alpha_decay is not None else 1 - alpha_min ** (1 / 300)
        )
        self.alpha_target = alpha_target
        self.velocity_decay = velocity_decay
        self.ticks = 0
        self._forces: dict[str, Force] = {}
        self._random = random.Random(seed)

        cx, cy = center
        for i, node in enumerate(nodes):
            if node.position is None:
                # Phyllotaxis spiral around the center
                r = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                x, y = cx + r * math.cos(angle), cy + r * math.sin(angle)
            else:
                x, y = node.position
            self.index[node.id] = i
            self.ids.append(node.id)
            self.particles.append(
                Particle(x=float(x), y=float(y), radius=node.radius, fixed=node.fixed)
            )

    def __len__(self) -> int:
        return len(self.particles)

    def force(self, name: str, force: Force | None = None) -> Force | None:
        """Register a force under a name, or remove it when ``force`` is None."""
        if force is None:
            return self._forces.pop(name, None)
        force.initialize(self)
        self._forces[name] = force
        return force

    def jiggle(self) -> float:
        """A tiny deterministic offset for separating coincident points."""
        return (self._random.random() - 0.5) * JIGGLE_SCALE

    def tick(self, iterations: int = 1) -> None:
        """Advance the simulation by a number of steps."""
        keep = 1 - self.velocity_decay
        for _ in range(iterations):
            self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

            for force in self._forces.values():
                force(self.alpha)

            for p in self.particles:
                if p.fixed:
                    p.vx = p.vy = 0.0
                else:
                    p.vx *= keep
                    p.vy *= keep
                    p.x += p.vx
                    p.y += p.vy

            self.ticks += 1

    def run(self, iterations: int) -> None:
        """Run exactly ``iterations`` ticks."""
        self.tick(iterations)

    def positions(self) -> dict[str, Position]:
        """Current position of every particle by node id."""
        return {
            node_id: (p.x, p.y) for node_id, p in zip(self.ids, self.particles)
        }
