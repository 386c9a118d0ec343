"""Force-directed layout for commit graphs."""

from .simulation import Particle, Simulation
from .forces import CollideForce, LinkForce, ManyBodyForce, PositionForce, link_distance
from .engine import LayoutEngine, LayoutResult, run_layout

__all__ = [
    "Particle",
    "Simulation",
    "CollideForce",
    "LinkForce",
    "ManyBodyForce",
    "PositionForce",
    "link_distance",
    "LayoutEngine",
    "LayoutResult",
    "run_layout",
]
