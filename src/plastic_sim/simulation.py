# MIT License (see LICENSE)
"""
The simulation world and its frame step.

Simulation owns every particle and constraint of one chassis and drives
them one frame at a time. It manages:
- Lifecycle: construction builds the body; reset() rebuilds it (the only
  way to undo plastic deformation); destroy() releases it.
- The step: Verlet integration of every particle (gravity, damping and
  floor/wall response included), then a fixed number of relaxation
  passes, each solving every constraint once followed by one
  particle-particle collision pass.
- The read API used by renderers and the drag API used by input layers.

Structure:
    - Host creates a Simulation (optionally with a SimConfig).
    - Input layer calls begin_drag/update_drag/end_drag between frames.
    - Host calls sim.step() once per frame and reads positions back.

Everything runs on the caller's thread. Nothing here blocks or spawns
work, and a step is never interrupted part-way.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

import numpy as np

from .config import SimConfig
from .profiler import Profiler
from .types import Particle, Bounds
from .topology import build_body
from .core.integrators import verlet_step
from .constraints.solver import PlasticConstraint, solve_plastic_constraints
from .collision.resolver import resolve_particle_collisions
from .util import f64

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Simulation:
    """
    Particle-constraint world for a single plastically deformable body.

    Attributes:
        config: Immutable parameters (see SimConfig).
        profiler: Optional Profiler timing the integrate/relax/collide phases.
        particles: Owned particles, index-addressable and in build order.
        constraints: Owned constraints, referencing particles by index.
        frame: Number of steps taken since the last build.
        time: Simulated time since the last build. Each dt-less step counts
              as config.reference_dt.
    """
    config: SimConfig = field(default_factory=SimConfig)
    profiler: Profiler | None = None

    # Internal state
    particles: list[Particle] = field(default_factory=list, init=False)
    constraints: list[PlasticConstraint] = field(default_factory=list, init=False)
    frame: int = field(default=0, init=False)
    time: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self._bounds: Bounds = self.config.bounds()
        self._destroyed = False
        self._build()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _build(self) -> None:
        self.particles, self.constraints = build_body(self.config)
        self.frame = 0
        self.time = 0.0
        self._prev_dt = self.config.reference_dt
        logger.info(
            "Built %dD body: %d particles, %d constraints",
            self.config.dimension, len(self.particles), len(self.constraints),
        )

    def reset(self) -> None:
        """
        Discard the body and rebuild it from its initial topology.

        All plastic deformation, motion and drag state is lost. Afterwards
        the simulation is indistinguishable from a freshly constructed one.
        """
        self._check_alive()
        strain = sum(abs(c.plastic_strain) for c in self.constraints)
        logger.info("Resetting body after %d frames (total plastic strain %.6f)", self.frame, strain)
        self._build()

    def destroy(self) -> None:
        """Release all particles and constraints. Further use raises RuntimeError."""
        if self._destroyed:
            return
        self.particles = []
        self.constraints = []
        self._destroyed = True
        logger.debug("Simulation destroyed")

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("Simulation has been destroyed")

    # -------------------------------------------------------------------------
    # Step
    # -------------------------------------------------------------------------

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def _step_parameters(self, dt: float | None) -> tuple[float, float, float, float]:
        """
        Per-step gravity, damping and velocity scale for a frame of length dt.

        With dt=None the configured per-step constants are used unchanged.
        Otherwise they are rescaled from reference_dt:
            gravity  * (dt / ref)^2   (displacement from constant acceleration)
            damping  ** (dt / ref)    (same decay per unit time)
            velocity * dt / dt_prev   (time-corrected Verlet)

        Returns:
            (gravity, damping, velocity_scale, elapsed)
        """
        cfg = self.config
        if dt is None:
            return cfg.gravity, cfg.damping, 1.0, cfg.reference_dt

        dt = float(dt)
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        ratio = dt / cfg.reference_dt
        return (
            cfg.gravity * ratio * ratio,
            cfg.damping ** ratio,
            dt / self._prev_dt,
            dt,
        )

    def step(self, dt: float | None = None) -> None:
        """
        Advance the simulation by one frame.

        Architecture:
        1. Integrate every particle (dragged ones are skipped).
        2. relaxation_passes times: solve all constraints in order, then
           one particle-particle collision pass.

        The pass count is fixed, so residual constraint error may remain
        after a step. That is accepted; the next frame keeps relaxing.

        Args:
            dt: Optional frame duration in seconds. Omit it for fixed-step
                hosts; pass it to make motion independent of frame rate.
        """
        self._check_alive()
        cfg = self.config
        gravity, damping, velocity_scale, elapsed = self._step_parameters(dt)

        with self._section("integrate"):
            for p in self.particles:
                verlet_step(
                    p,
                    gravity=gravity,
                    damping=damping,
                    bounds=self._bounds,
                    restitution=cfg.restitution,
                    up_axis=cfg.up_axis,
                    velocity_scale=velocity_scale,
                )

        for _ in range(cfg.relaxation_passes):
            with self._section("relax"):
                solve_plastic_constraints(self.constraints, self.particles)
            if cfg.collide_particles:
                with self._section("collide"):
                    resolve_particle_collisions(self.particles, cfg.particle_radius)

        self._prev_dt = elapsed
        self.frame += 1
        self.time += elapsed

    # -------------------------------------------------------------------------
    # Read API (renderer)
    # -------------------------------------------------------------------------

    def particle_count(self) -> int:
        return len(self.particles)

    def constraint_count(self) -> int:
        return len(self.constraints)

    def particle_position(self, index: int) -> np.ndarray:
        """Copy of a particle's current position."""
        return self._particle(index).position.copy()

    def constraint_endpoints(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        """Copies of the two endpoint positions of a constraint."""
        self._check_alive()
        if not 0 <= index < len(self.constraints):
            raise IndexError(
                f"Constraint index {index} out of range (0..{len(self.constraints) - 1})"
            )
        c = self.constraints[index]
        return (
            self.particles[c.a].position.copy(),
            self.particles[c.b].position.copy(),
        )

    def positions(self) -> np.ndarray:
        """All particle positions as an (N, D) array copy."""
        self._check_alive()
        if not self.particles:
            return np.zeros((0, self.config.dimension), dtype=np.float64)
        return np.stack([p.position for p in self.particles])

    # -------------------------------------------------------------------------
    # Drag API (input layer)
    # -------------------------------------------------------------------------

    def _particle(self, index: int) -> Particle:
        self._check_alive()
        if not 0 <= index < len(self.particles):
            raise IndexError(
                f"Particle index {index} out of range (0..{len(self.particles) - 1})"
            )
        return self.particles[index]

    def begin_drag(self, index: int, target: np.ndarray | tuple[float, ...]) -> None:
        """
        Start dragging a particle and pin it at target.

        The particle stops integrating (no gravity, no bounds) but keeps
        taking part in constraint and collision corrections.

        Raises:
            IndexError: If index does not name a particle.
            ValueError: If target has the wrong dimension.
        """
        p = self._particle(index)
        p.apply_external_position(f64(target))
        p.set_dragged(True)
        logger.debug("Drag started on particle %d at %s", index, p.position)

    def update_drag(self, index: int, target: np.ndarray | tuple[float, ...]) -> None:
        """
        Move a dragged particle to a new target (zero velocity).

        Raises:
            IndexError: If index does not name a particle.
            ValueError: If the particle is not being dragged.
        """
        p = self._particle(index)
        if not p.is_dragged:
            raise ValueError(f"Particle {index} is not being dragged")
        p.apply_external_position(f64(target))

    def end_drag(self, index: int) -> None:
        """
        Release a dragged particle. Releasing an undragged particle is a no-op.

        Raises:
            IndexError: If index does not name a particle.
        """
        p = self._particle(index)
        if p.is_dragged:
            p.set_dragged(False)
            logger.debug("Drag ended on particle %d at %s", index, p.position)

    def dragged_indices(self) -> list[int]:
        """Indices of all particles currently being dragged."""
        self._check_alive()
        return [i for i, p in enumerate(self.particles) if p.is_dragged]
