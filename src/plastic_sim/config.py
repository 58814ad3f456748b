# MIT License (see LICENSE)
"""
Configuration surface for a Simulation.

SimConfig gathers every tunable the simulation reads: gravity, damping,
bounds, radius, relaxation passes, spring stiffness and plasticity, and
the starting body dimensions. It is immutable; a running simulation only
picks up a new config when it is rebuilt.

Two presets mirror the two demo variants:
    - preset_3d(): cuboid chassis over an open floor.
    - preset_2d(): rectangle inside a bounded canvas (walls + floor).
"""
from __future__ import annotations
import numbers
from dataclasses import dataclass, field, fields, asdict
from typing import Any

import numpy as np

from . import constants as C
from .materials import PlasticProfile
from .types import Bounds


@dataclass(frozen=True)
class SimConfig:
    """
    Parameters for building and stepping a Simulation.

    Attributes:
        dimension: 2 or 3.
        gravity: Per-step downward displacement of free particles.
        up_axis: Index of the vertical axis (default 1, i.e. y).
        damping: Velocity multiplier per step, in (0, 1].
        restitution: Bounce coefficient against floor/walls, in [0, 1].
        floor: Height of the floor plane along up_axis.
        bounds_min: Optional per-axis lower limits. Entries may be None
                    (unbounded). The up-axis entry is ignored; floor wins.
        bounds_max: Optional per-axis upper limits, entries may be None.
        particle_radius: Collision radius of every particle.
        relaxation_passes: Constraint sweeps per step.
        chassis_stiffness: Stiffness of edge and face-diagonal springs.
        spoke_stiffness: Stiffness of corner-to-center springs.
        plasticity: Yield profile shared by every spring.
        half_extents: Half size of the body along each axis.
        center: Initial position of the body's center particle.
        reference_dt: Frame duration the per-step constants assume. Used
                      only when step() is given an explicit dt.
        collide_particles: Run the particle-particle pass each relaxation.
    """
    dimension: int = 3
    gravity: float = C.GRAVITY
    up_axis: int = 1
    damping: float = C.DAMPING
    restitution: float = C.RESTITUTION
    floor: float = 0.0
    bounds_min: tuple[float | None, ...] | None = None
    bounds_max: tuple[float | None, ...] | None = None
    particle_radius: float = C.PARTICLE_RADIUS
    relaxation_passes: int = C.RELAXATION_PASSES
    chassis_stiffness: float = C.CHASSIS_STIFFNESS
    spoke_stiffness: float = C.SPOKE_STIFFNESS
    plasticity: PlasticProfile = field(default_factory=PlasticProfile)
    half_extents: tuple[float, ...] = (1.0, 0.5, 0.75)
    center: tuple[float, ...] = (0.0, 2.0, 0.0)
    reference_dt: float = C.REFERENCE_DT
    collide_particles: bool = True

    def __post_init__(self) -> None:
        """Normalize sequences to tuples and validate ranges."""
        for name in ("half_extents", "center", "bounds_min", "bounds_max"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, tuple(value))
        if isinstance(self.plasticity, dict):
            known = {f.name for f in fields(PlasticProfile)}
            unknown = sorted(set(self.plasticity) - known)
            if unknown:
                raise ValueError(f"Unrecognized plasticity option(s): {', '.join(unknown)}")
            object.__setattr__(self, "plasticity", PlasticProfile(**self.plasticity))
        self._validate()

    def _validate(self) -> None:
        for name in ("dimension", "up_axis", "relaxation_passes"):
            value = getattr(self, name)
            # bool is an int subclass; reject it explicitly.
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.plasticity, PlasticProfile):
            raise ValueError(
                f"plasticity must be a PlasticProfile or a dict of its fields, got {self.plasticity!r}"
            )
        d = self.dimension
        if d not in (2, 3):
            raise ValueError(f"dimension must be 2 or 3, got {d}")
        if not 0 <= self.up_axis < d:
            raise ValueError(f"up_axis {self.up_axis} out of range for dimension {d}")
        if len(self.half_extents) != d:
            raise ValueError(f"half_extents needs {d} entries, got {len(self.half_extents)}")
        if any(h <= 0 for h in self.half_extents):
            raise ValueError(f"half_extents must be positive, got {self.half_extents}")
        if len(self.center) != d:
            raise ValueError(f"center needs {d} entries, got {len(self.center)}")
        for name in ("bounds_min", "bounds_max"):
            value = getattr(self, name)
            if value is not None and len(value) != d:
                raise ValueError(f"{name} needs {d} entries, got {len(value)}")
        if self.gravity < 0:
            raise ValueError(f"gravity magnitude must be >= 0, got {self.gravity}")
        if not 0.0 < self.damping <= 1.0:
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")
        if not 0.0 <= self.restitution <= 1.0:
            raise ValueError(f"restitution must be in [0, 1], got {self.restitution}")
        if self.particle_radius < 0:
            raise ValueError(f"particle_radius must be >= 0, got {self.particle_radius}")
        if self.relaxation_passes < 1:
            raise ValueError(f"relaxation_passes must be >= 1, got {self.relaxation_passes}")
        for name in ("chassis_stiffness", "spoke_stiffness"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if self.reference_dt <= 0:
            raise ValueError(f"reference_dt must be positive, got {self.reference_dt}")
        # Fails early if floor/walls leave no room.
        b = self.bounds()
        too_narrow = (b.upper - b.lower) <= 2.0 * self.particle_radius
        if np.any(too_narrow):
            axis = int(np.argmax(too_narrow))
            raise ValueError(
                f"Bounds span {b.upper[axis] - b.lower[axis]} on axis {axis} must exceed "
                f"the particle diameter {2.0 * self.particle_radius}"
            )

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    def bounds(self) -> Bounds:
        """Build the Bounds the integrator clamps against."""
        b = Bounds.floor_only(self.dimension, self.floor, self.up_axis)
        for axis in range(self.dimension):
            if self.bounds_min is not None and axis != self.up_axis:
                lo = self.bounds_min[axis]
                if lo is not None:
                    b.lower[axis] = lo
            if self.bounds_max is not None:
                hi = self.bounds_max[axis]
                if hi is not None:
                    b.upper[axis] = hi
        # Re-run the shape/order checks on the edited arrays.
        return Bounds(lower=b.lower, upper=b.upper)

    # -------------------------------------------------------------------------
    # Dict conversion
    # -------------------------------------------------------------------------

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        """Names of every recognized option."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimConfig":
        """
        Build a config from a plain dict (e.g. parsed JSON).

        Missing options take their defaults.

        Raises:
            ValueError: If data contains an unrecognized option name or an
                        option has an invalid value.
        """
        unknown = sorted(set(data) - set(cls.option_names()))
        if unknown:
            raise ValueError(f"Unrecognized configuration option(s): {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view with lists instead of tuples (JSON-friendly)."""
        out = asdict(self)
        for name in ("half_extents", "center", "bounds_min", "bounds_max"):
            if out[name] is not None:
                out[name] = list(out[name])
        return out

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    @classmethod
    def preset_3d(cls, **overrides: Any) -> "SimConfig":
        """Cuboid chassis above an open floor."""
        return cls(**overrides)

    @classmethod
    def preset_2d(cls, **overrides: Any) -> "SimConfig":
        """Rectangle chassis in a walled 2D canvas."""
        params: dict[str, Any] = dict(
            dimension=2,
            half_extents=(1.0, 0.5),
            center=(0.0, 2.0),
            bounds_min=(-4.0, None),
            bounds_max=(4.0, 6.0),
        )
        params.update(overrides)
        return cls(**params)
