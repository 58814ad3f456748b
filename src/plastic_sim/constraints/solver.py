# MIT License (see LICENSE)
"""
Plastic spring constraints and their relaxation solver.

Constraints are solved directly on positions (position-based dynamics):
each solve moves both endpoints toward the rest length by a fraction of
the error. Repeating the sweep a few times per frame relaxes the network
toward a consistent shape without ever solving it exactly.

Plasticity: when a spring is deformed by more than its yield threshold,
part of the excess is absorbed into the rest length before the correction
is computed. The spring then pulls back less, and the dent stays.

    err  = |x_b - x_a| - rest
    if |err| > yield:  rest += err * plasticity
    k    = (|x_b - x_a| - rest) / |x_b - x_a| * 0.5 * stiffness
    x_a += (x_b - x_a) * k
    x_b -= (x_b - x_a) * k

Constraints address particles by index into the owning simulation's
particle list. Rebuilding the particle list therefore never leaves a
constraint pointing at a stale object.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from ..materials import PlasticProfile
from ..types import Particle
from ..util import distance

logger = logging.getLogger(__name__)


@dataclass
class PlasticConstraint:
    """
    A spring between two particles whose rest length can yield.

    Attributes:
        a: Index of the first endpoint particle.
        b: Index of the second endpoint particle. Must differ from a.
        rest_length: Length the spring pulls toward. Mutated by yielding
                     and never restored except by rebuilding the body.
        stiffness: Fraction of the positional error corrected per solve,
                   in (0, 1].
        yield_threshold: Deformation tolerated before yielding (>= 0).
        plasticity_factor: Fraction of excess deformation absorbed into
                           rest_length per solve, in [0, 1].
        initial_length: rest_length at creation. Defaults to rest_length.
    """
    a: int
    b: int
    rest_length: float
    stiffness: float = 1.0
    yield_threshold: float = 0.0
    plasticity_factor: float = 0.0
    initial_length: float | None = None

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise ValueError(f"Constraint endpoints must differ, got a == b == {self.a}")
        if self.rest_length < 0:
            raise ValueError(f"rest_length must be >= 0, got {self.rest_length}")
        if not 0.0 < self.stiffness <= 1.0:
            raise ValueError(f"stiffness must be in (0, 1], got {self.stiffness}")
        # Reuse the profile validation rules.
        PlasticProfile(self.yield_threshold, self.plasticity_factor)
        if self.initial_length is None:
            self.initial_length = float(self.rest_length)
        elif self.initial_length < 0:
            raise ValueError(f"initial_length must be >= 0, got {self.initial_length}")

    @classmethod
    def between(
        cls,
        particles: list[Particle],
        a: int,
        b: int,
        stiffness: float,
        profile: PlasticProfile,
    ) -> "PlasticConstraint":
        """Create a constraint whose rest length is the current endpoint distance."""
        length = distance(particles[a].position, particles[b].position)
        return cls(
            a=a,
            b=b,
            rest_length=length,
            stiffness=stiffness,
            yield_threshold=profile.yield_threshold,
            plasticity_factor=profile.plasticity_factor,
        )

    @property
    def plastic_strain(self) -> float:
        """Permanent change in rest length since creation (signed)."""
        return self.rest_length - self.initial_length

    def solve(self, particles: list[Particle]) -> None:
        """
        Apply one relaxation step to this constraint.

        Dragged endpoints are corrected like any other; only integration
        skips them.

        Args:
            particles: The owning simulation's particle list.
        """
        pa = particles[self.a]
        pb = particles[self.b]
        delta = pb.position - pa.position
        current = float(np.sqrt(np.dot(delta, delta)))

        # Coincident endpoints: no direction to push along. Try next pass.
        if current == 0.0:
            return

        # Yield first so this same correction already uses the new rest length.
        err = current - self.rest_length
        if abs(err) > self.yield_threshold:
            self.rest_length += err * self.plasticity_factor
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Constraint %d-%d yielded: rest_length=%.6f (current=%.6f)",
                    self.a, self.b, self.rest_length, current,
                )

        k = (current - self.rest_length) / current * 0.5 * self.stiffness
        correction = delta * k
        pa.position += correction
        pb.position -= correction


def solve_plastic_constraints(
    constraints: list[PlasticConstraint],
    particles: list[Particle],
) -> None:
    """
    Solve every constraint once, in list order (one relaxation sweep).

    Order matters (Gauss-Seidel style): later constraints see positions
    already moved by earlier ones. Keep the list order stable for
    reproducible results.
    """
    for c in constraints:
        c.solve(particles)
