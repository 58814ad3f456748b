# MIT License (see LICENSE)
"""
Chassis topology construction.

The body is a box skeleton: one particle at every corner of a rectangle
(2D) or cuboid (3D), plus a center particle appended last.

Springs:
    - chassis: every edge and every face diagonal, high stiffness, so the
      shell holds its shape.
    - spokes: every corner to the center, low stiffness. These are the
      springs that yield first and leave a visible dent.

Corners are enumerated as sign patterns from itertools.product, so two
corners share an edge when their patterns differ in exactly one axis and
a face diagonal when they differ in exactly two. Space diagonals of the
cuboid (three differing axes) are left out.

    dimension | corners | edges | face diagonals | spokes
    ----------+---------+-------+----------------+-------
        2     |    4    |   4   |       2        |   4
        3     |    8    |  12   |      12        |   8
"""
from __future__ import annotations
from itertools import combinations, product
from typing import TYPE_CHECKING

import numpy as np

from .constraints.solver import PlasticConstraint
from .types import Particle
from .util import f64

if TYPE_CHECKING:
    from .config import SimConfig


def corner_offsets(half_extents: tuple[float, ...]) -> list[np.ndarray]:
    """Offsets from the center to every box corner, in deterministic order."""
    h = f64(half_extents)
    return [f64(signs) * h for signs in product((-1.0, 1.0), repeat=len(h))]


def _differing_axes(a: np.ndarray, b: np.ndarray) -> int:
    return int(np.count_nonzero(np.sign(a) != np.sign(b)))


def box_edges(offsets: list[np.ndarray]) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """
    Split corner pairs into edges and face diagonals.

    Returns:
        (edges, face_diagonals), each a list of (i, j) with i < j.
    """
    edges = []
    diagonals = []
    for i, j in combinations(range(len(offsets)), 2):
        n = _differing_axes(offsets[i], offsets[j])
        if n == 1:
            edges.append((i, j))
        elif n == 2:
            diagonals.append((i, j))
    return edges, diagonals


def build_body(config: "SimConfig") -> tuple[list[Particle], list[PlasticConstraint]]:
    """
    Build the chassis particles and springs for a config.

    Particle order: corners (sign-pattern order), then center. Constraint
    order: edges, face diagonals, spokes. Both orders are fixed, so two
    builds from the same config are identical.

    Args:
        config: Source of dimensions, radius, stiffness and plasticity.

    Returns:
        (particles, constraints) ready to hand to a Simulation.
    """
    center = f64(config.center)
    offsets = corner_offsets(config.half_extents)

    particles = [Particle(position=center + off, radius=config.particle_radius) for off in offsets]
    particles.append(Particle(position=center.copy(), radius=config.particle_radius))
    center_index = len(particles) - 1

    edges, diagonals = box_edges(offsets)
    profile = config.plasticity

    constraints = [
        PlasticConstraint.between(particles, i, j, config.chassis_stiffness, profile)
        for i, j in edges + diagonals
    ]
    constraints.extend(
        PlasticConstraint.between(particles, i, center_index, config.spoke_stiffness, profile)
        for i in range(center_index)
    )
    return particles, constraints
