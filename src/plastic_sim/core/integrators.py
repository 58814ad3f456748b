# MIT License (see LICENSE)
"""
Position Verlet integration with floor and wall response.

The integrator never stores a velocity. Each step reconstructs it from
the last displacement, damps it, carries it forward and then applies
gravity as a fixed displacement along the up axis:

    v      = (x - x_prev) * damping * velocity_scale
    x_prev = x
    x      = x + v
    x[up] -= gravity

Collisions with bounds are resolved by clamping the position and
rewriting x_prev so that the next reconstructed velocity points back
into the permitted region, scaled by the restitution coefficient.

Reference:
    https://en.wikipedia.org/wiki/Verlet_integration
    Jakobsen, "Advanced Character Physics", GDC 2001.
"""
from __future__ import annotations

import numpy as np

from ..types import Particle, Bounds


def verlet_step(
    p: Particle,
    gravity: float,
    damping: float,
    bounds: Bounds | None = None,
    restitution: float = 0.5,
    up_axis: int = 1,
    velocity_scale: float = 1.0,
) -> None:
    """
    Advance a single particle by one step.

    Dragged particles are left untouched: their position belongs to the
    input layer until release.

    Args:
        p: Particle to integrate (modified in-place).
        gravity: Displacement subtracted from the up-axis coordinate.
        damping: Multiplier applied to the reconstructed velocity.
        bounds: Optional permitted region; see apply_bounds.
        restitution: Bounce coefficient used by apply_bounds.
        up_axis: Index of the vertical axis (1 = y).
        velocity_scale: Ratio of this step's duration to the previous one.
                        1.0 for fixed-step hosts.
    """
    if p.is_dragged:
        return

    velocity = (p.position - p.previous_position) * (damping * velocity_scale)
    p.previous_position = p.position.copy()
    p.position = p.position + velocity
    p.position[up_axis] -= gravity

    if bounds is not None:
        apply_bounds(p, bounds, velocity, restitution)


def apply_bounds(
    p: Particle,
    bounds: Bounds,
    velocity: np.ndarray,
    restitution: float,
) -> None:
    """
    Clamp a particle into bounds and reflect its implicit velocity.

    For each axis where the particle's surface crosses a limit, the center
    is moved to `limit ± radius` and the previous position is placed on
    the far side so that the next step sees the velocity reversed and
    scaled by restitution:

        x_prev[axis] = x[axis] + velocity[axis] * restitution

    Args:
        p: Particle to correct (modified in-place).
        bounds: Permitted region for particle centers.
        velocity: Velocity used this step, before gravity.
        restitution: Fraction of normal velocity kept (0 = dead stop).
    """
    r = p.radius
    for axis in range(p.dimension):
        lo = bounds.lower[axis] + r
        hi = bounds.upper[axis] - r
        if p.position[axis] < lo:
            p.position[axis] = lo
            p.previous_position[axis] = lo + velocity[axis] * restitution
        elif p.position[axis] > hi:
            p.position[axis] = hi
            p.previous_position[axis] = hi + velocity[axis] * restitution
