# MIT License (see LICENSE)
"""
Core integration and diagnostics.

This subpackage provides:
    - Integrators: position Verlet step with floor/wall response.
    - Invariants: constraint error, plastic strain, centroid, energy proxy.

Typical usage:
    from plastic_sim.core import verlet_step

    verlet_step(particle, gravity=0.01, damping=0.99, bounds=bounds)
"""
from .integrators import verlet_step, apply_bounds
from .invariants import (
    centroid,
    constraint_errors,
    max_constraint_error,
    total_plastic_strain,
    displacement_energy,
)

__all__ = [
    # Integrators
    "verlet_step",
    "apply_bounds",
    # Invariants
    "centroid",
    "constraint_errors",
    "max_constraint_error",
    "total_plastic_strain",
    "displacement_energy",
]
