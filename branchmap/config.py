"""Configuration models for canvas geometry and layout tuning."""

import math
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded or validated."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class Canvas(BaseModel):
    """Drawing area the graph is laid out in."""

    width: float = Field(default=360.0, gt=0)
    height: float = Field(default=1000.0, gt=0)
    branch_ring_ratio: float = Field(default=0.3, ge=0)

    @property
    def center(self) -> tuple[float, float]:
        """Center of the canvas."""
        return self.width / 2, self.height / 2

    @property
    def branch_ring_radius(self) -> float:
        """Radius of the circle branch nodes are anchored on."""
        return min(self.width, self.height) * self.branch_ring_ratio

    def anchor(self, index: int, count: int) -> tuple[float, float]:
        """Anchor position of the index-th of count branches."""
        angle = index * (2 * math.pi) / max(count, 1)
        cx, cy = self.center
        radius = self.branch_ring_radius
        return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


class LinkDistances(BaseModel):
    """Target separation per edge kind."""

    branch_branch: float = 120.0
    branch_commit: float = 80.0
    commit_commit: float = 60.0
    commit_file: float = 40.0
    default: float = 80.0


class LayoutSettings(BaseModel):
    """Tuning knobs for the force simulation."""

    iterations: int = Field(default=300, ge=0)
    charge_strength: float = -200.0
    center_strength: float = 0.1
    collision_margin: float = 5.0
    velocity_decay: float = Field(default=0.4, ge=0, le=1)
    alpha_min: float = Field(default=0.001, gt=0, lt=1)
    seed: int = 1
    link_distances: LinkDistances = Field(default_factory=LinkDistances)

    @property
    def alpha_decay(self) -> float:
        """Per-tick alpha decay that reaches alpha_min after 300 ticks."""
        return 1 - self.alpha_min ** (1 / 300)


class BranchmapConfig(BaseModel):
    """Root model for a branchmap configuration file."""

    canvas: Canvas = Field(default_factory=Canvas)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)


def load_config(path: str | Path | None = None) -> BranchmapConfig:
    """Load a configuration file, or the defaults when no path is given.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    if path is None:
        return BranchmapConfig()

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    try:
        return BranchmapConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", str(path)) from e
