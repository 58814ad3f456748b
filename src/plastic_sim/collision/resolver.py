# MIT License (see LICENSE)
"""
Pairwise particle-particle overlap correction.

Particles are treated as spheres (circles in 2D) of equal radius. Any
overlapping pair is pushed apart along the line between centers, each
particle moving by half the overlap. This is purely positional; the
Verlet integrator turns the displacement into velocity on the next step.

Complexity is O(n^2) per pass. Bodies here have a handful of particles
(9 in 3D, 5 in 2D), so a broadphase would cost more than it saves.
"""
from __future__ import annotations
from itertools import combinations

import numpy as np

from ..types import Particle


def separate_pair(pa: Particle, pb: Particle, min_dist: float) -> bool:
    """
    Push two particles apart if closer than min_dist.

    Coincident particles are skipped: there is no separation axis.

    Returns:
        True if a correction was applied.
    """
    d = pb.position - pa.position
    dist = float(np.sqrt(np.dot(d, d)))
    if dist == 0.0 or dist >= min_dist:
        return False

    n = d / dist
    push = n * (0.5 * (min_dist - dist))
    pa.position -= push
    pb.position += push
    return True


def resolve_particle_collisions(particles: list[Particle], radius: float | None = None) -> int:
    """
    Run one collision pass over every unordered particle pair.

    Args:
        particles: Particles to separate (modified in-place), visited in
                   index order for determinism.
        radius: Common radius. If None, each pair uses the sum of the two
                particles' own radii.

    Returns:
        Number of pairs that were corrected.
    """
    corrected = 0
    for pa, pb in combinations(particles, 2):
        min_dist = 2.0 * radius if radius is not None else pa.radius + pb.radius
        if separate_pair(pa, pb, min_dist):
            corrected += 1
    return corrected
