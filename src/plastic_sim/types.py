# MIT License (see LICENSE)
"""
Core type definitions for the particle-constraint simulation.

Defines the fundamental data structures:
- Particle: a unit point mass integrated with position Verlet.
- Bounds: axis-aligned limits (floor, optional walls and ceiling).

Verlet keeps no explicit velocity. The displacement over the last step
stands in for it:
  v ≈ x(t) - x(t - dt)
  x(t + dt) = x(t) + damping * v - g * up
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .constants import PARTICLE_RADIUS
from .util import f64


# =============================================================================
# Bounds
# =============================================================================

@dataclass
class Bounds:
    """
    Axis-aligned permitted region for particle centers (before radius).

    Unbounded sides hold -inf / +inf, so every axis can be checked the
    same way.

    Attributes:
        lower: Per-axis lower limits [D]. The up axis entry is the floor.
        upper: Per-axis upper limits [D].
    """
    lower: np.ndarray
    upper: np.ndarray

    def __post_init__(self) -> None:
        self.lower = f64(self.lower)
        self.upper = f64(self.upper)
        if self.lower.shape != self.upper.shape:
            raise ValueError(
                f"Bounds shape mismatch: lower {self.lower.shape} vs upper {self.upper.shape}"
            )
        if np.any(self.lower >= self.upper):
            raise ValueError(f"Bounds lower {self.lower} must be below upper {self.upper}")

    @classmethod
    def floor_only(cls, dimension: int, floor: float, up_axis: int = 1) -> "Bounds":
        """Bounds with only a floor plane; every other side is open."""
        lower = np.full(dimension, -np.inf)
        upper = np.full(dimension, np.inf)
        lower[up_axis] = floor
        return cls(lower=lower, upper=upper)


# =============================================================================
# Particle
# =============================================================================

@dataclass(eq=False)
class Particle:
    """
    A point mass with Verlet-integrated motion.

    All particles have unit mass; constraints split corrections evenly
    between their endpoints.

    Attributes:
        position: Current location [D].
        previous_position: Location one step ago [D]. Defaults to a copy of
                           position, i.e. the particle starts at rest.
        radius: Collision radius used against bounds and other particles.
        is_dragged: When True the position is set externally and
                    integration, gravity and bounds are skipped.
    """
    position: np.ndarray | tuple[float, ...]
    previous_position: np.ndarray | tuple[float, ...] | None = None
    radius: float = PARTICLE_RADIUS
    is_dragged: bool = False

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        if self.previous_position is None:
            self.previous_position = self.position.copy()
        else:
            self.previous_position = f64(self.previous_position)
        if self.position.shape != self.previous_position.shape:
            raise ValueError(
                f"position {self.position.shape} and previous_position "
                f"{self.previous_position.shape} must have the same shape"
            )
        if self.radius < 0:
            raise ValueError(f"Particle radius must be >= 0, got {self.radius}")

    @property
    def dimension(self) -> int:
        return len(self.position)

    @property
    def velocity(self) -> np.ndarray:
        """Displacement over the last step (implicit Verlet velocity)."""
        return self.position - self.previous_position

    def apply_external_position(self, target: np.ndarray | tuple[float, ...]) -> None:
        """
        Move the particle to target with zero velocity.

        Both position and previous position are overwritten, so letting
        go of a dragged particle does not fling it.
        """
        target = f64(target)
        if target.shape != self.position.shape:
            raise ValueError(
                f"Target shape {target.shape} does not match particle dimension {self.position.shape}"
            )
        self.position = target
        self.previous_position = target.copy()

    def set_dragged(self, dragged: bool) -> None:
        self.is_dragged = bool(dragged)
