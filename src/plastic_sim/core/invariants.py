# MIT License (see LICENSE)
"""
Diagnostic measures of the particle network.

Used by tests and benchmarks to check how far the body is from satisfying
its springs and how much it has permanently deformed. With unit masses,
constraint and collision corrections are equal and opposite, so they
never move the centroid; only integration (gravity, bounds) and dragging
do.
"""
from __future__ import annotations
import numpy as np

from ..types import Particle
from ..constraints.solver import PlasticConstraint


def centroid(particles: list[Particle]) -> np.ndarray:
    """Mean particle position (center of mass for unit masses)."""
    return np.mean([p.position for p in particles], axis=0)


def constraint_errors(constraints: list[PlasticConstraint], particles: list[Particle]) -> np.ndarray:
    """Signed length error (current - rest) of every constraint."""
    return np.array(
        [
            float(np.linalg.norm(particles[c.b].position - particles[c.a].position)) - c.rest_length
            for c in constraints
        ],
        dtype=np.float64,
    )


def max_constraint_error(constraints: list[PlasticConstraint], particles: list[Particle]) -> float:
    """Largest absolute constraint error, 0.0 for an empty network."""
    if not constraints:
        return 0.0
    return float(np.max(np.abs(constraint_errors(constraints, particles))))


def total_plastic_strain(constraints: list[PlasticConstraint]) -> float:
    """Sum of absolute rest-length changes since the body was built."""
    return float(sum(abs(c.plastic_strain) for c in constraints))


def displacement_energy(particles: list[Particle]) -> float:
    """
    Kinetic energy proxy: 0.5 * Σ |x - x_prev|².

    In per-step units; zero when every particle is at rest.
    """
    return 0.5 * float(sum(np.dot(p.velocity, p.velocity) for p in particles))
