# MIT License (see LICENSE)
"""
Particle-particle collision handling.

This subpackage provides:
    - separate_pair: Symmetric overlap correction for two particles.
    - resolve_particle_collisions: One O(n^2) pass over all pairs.

Floor and wall collisions are not here: they are part of particle
integration (see core.integrators.apply_bounds).

Typical usage:
    from plastic_sim.collision import resolve_particle_collisions

    resolve_particle_collisions(sim.particles, radius=0.1)
"""
from .resolver import separate_pair, resolve_particle_collisions

__all__ = [
    "separate_pair",
    "resolve_particle_collisions",
]
