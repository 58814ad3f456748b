# MIT License (see LICENSE)
"""
Direct-manipulation contract between an input layer and a Simulation.

The input layer (mouse, touch, VR controller, test harness) turns its
events into press / move / release calls on a DragController. The
controller queues them and applies them in flush(), which the host calls
on the simulation thread between frames:

    controller.press(cursor_world_point)   # from a mouse-down handler
    controller.move(cursor_world_point)    # from a mouse-move handler
    controller.release()                   # from a mouse-up handler
    ...
    controller.flush()                     # host frame loop
    sim.step()

Picking helpers resolve a world point (2D) or a ray (3D) to the nearest
particle using only the simulation's read API.
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from .util import f64, unit

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)


# =============================================================================
# Picking
# =============================================================================

def pick_point(sim: "Simulation", point, radius: float | None = None) -> int | None:
    """
    Find the particle closest to a world point, within radius.

    Args:
        sim: Simulation to query.
        point: World-space point [D].
        radius: Hit radius. Defaults to the configured particle radius.

    Returns:
        Particle index, or None if nothing is within radius.
    """
    if radius is None:
        radius = sim.config.particle_radius
    positions = sim.positions()
    if len(positions) == 0:
        return None
    d2 = np.sum((positions - f64(point)) ** 2, axis=1)
    best = int(np.argmin(d2))
    if d2[best] <= radius * radius:
        return best
    return None


def pick_ray(sim: "Simulation", origin, direction, radius: float | None = None) -> int | None:
    """
    Find the first particle hit by a ray, treating particles as spheres.

    Ties on hit distance go to the lower index.

    Args:
        sim: Simulation to query.
        origin: Ray origin [D] (e.g. camera position).
        direction: Ray direction [D]; need not be normalized.
        radius: Sphere radius. Defaults to the configured particle radius.

    Returns:
        Index of the nearest particle whose sphere the ray enters in front
        of the origin, or None.
    """
    if radius is None:
        radius = sim.config.particle_radius
    o = f64(origin)
    d = unit(f64(direction))
    if not np.any(d):
        raise ValueError("Ray direction must be non-zero")

    best_index = None
    best_t = np.inf
    for i, p in enumerate(sim.positions()):
        # |o + t d - p|^2 = r^2  ->  t^2 + 2 b t + c = 0
        m = o - p
        b = float(np.dot(m, d))
        c = float(np.dot(m, m)) - radius * radius
        disc = b * b - c
        if disc < 0:
            continue
        root = np.sqrt(disc)
        t = -b - root
        if t < 0:
            # Origin inside the sphere.
            t = -b + root
        if t < 0:
            continue
        if t < best_t:
            best_t = t
            best_index = i
    return best_index


# =============================================================================
# Drag controller
# =============================================================================

class DragEventType(Enum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"


@dataclass(frozen=True)
class DragEvent:
    """A queued input event. point is None for RELEASE."""
    kind: DragEventType
    point: tuple[float, ...] | None = None


class DragController:
    """
    Turns press/move/release input into drag calls on a Simulation.

    Only one particle is dragged at a time. Events are queued by the input
    layer and applied in order by flush(), never during a step.

    Attributes:
        sim: Target simulation.
        pick_radius: Hit radius for press events in point mode.
        use_rays: If True, press/move points are (origin, direction) pairs
                  and picking uses pick_ray; move targets are then placed
                  on the ray at the grab distance.
    """

    def __init__(self, sim: "Simulation", pick_radius: float | None = None, use_rays: bool = False) -> None:
        self.sim = sim
        self.pick_radius = sim.config.particle_radius if pick_radius is None else pick_radius
        self.use_rays = use_rays
        self.active: int | None = None
        self._grab_distance = 0.0
        self._queue: deque[DragEvent] = deque()

    # -- input side -----------------------------------------------------------

    def press(self, point) -> None:
        self._queue.append(DragEvent(DragEventType.PRESS, self._freeze(point)))

    def move(self, point) -> None:
        self._queue.append(DragEvent(DragEventType.MOVE, self._freeze(point)))

    def release(self) -> None:
        self._queue.append(DragEvent(DragEventType.RELEASE))

    @staticmethod
    def _freeze(point) -> tuple:
        # Copy now: the input layer may reuse its vector objects.
        arr = np.asarray(point, dtype=np.float64)
        if arr.ndim == 2:
            return tuple(tuple(float(x) for x in row) for row in arr)
        return tuple(float(x) for x in arr)

    @property
    def pending(self) -> int:
        return len(self._queue)

    # -- simulation side ------------------------------------------------------

    def flush(self) -> None:
        """Apply every queued event in order. Call between frames."""
        while self._queue:
            self.apply(self._queue.popleft())

    def apply(self, event: DragEvent) -> None:
        """
        Apply a single event immediately.

        Events reaching a destroyed simulation are dropped along with any
        grab, so input arriving during teardown is harmless.
        """
        if self.sim.is_destroyed:
            if self.active is not None:
                logger.debug("Dropping grab on particle %d: simulation destroyed", self.active)
            self.active = None
            return
        if event.kind is DragEventType.PRESS:
            self._on_press(event.point)
        elif event.kind is DragEventType.MOVE:
            self._on_move(event.point)
        elif event.kind is DragEventType.RELEASE:
            self._on_release()
        else:
            raise ValueError(f"Unknown drag event type: {event.kind}")

    def _on_press(self, point) -> None:
        if self.active is not None:
            self._on_release()
        if self.use_rays:
            origin, direction = f64(point[0]), f64(point[1])
            index = pick_ray(self.sim, origin, direction, self.pick_radius)
            if index is None:
                return
            target = self.sim.particle_position(index)
            self._grab_distance = float(np.dot(target - origin, unit(direction)))
        else:
            index = pick_point(self.sim, point, self.pick_radius)
            if index is None:
                return
            target = self.sim.particle_position(index)
        self.sim.begin_drag(index, target)
        self.active = index
        logger.debug("Picked particle %d", index)

    def _on_move(self, point) -> None:
        if self.active is None:
            return
        if self._grab_is_stale():
            self.active = None
            return
        if self.use_rays:
            origin, direction = f64(point[0]), f64(point[1])
            target = origin + unit(direction) * self._grab_distance
        else:
            target = f64(point)
        self.sim.update_drag(self.active, target)

    def _on_release(self) -> None:
        if self.active is None:
            return
        if not self._grab_is_stale():
            self.sim.end_drag(self.active)
        self.active = None

    def _grab_is_stale(self) -> bool:
        # Reset or destroy rebuilt the particle list under us.
        return (
            self.sim.is_destroyed
            or self.active >= self.sim.particle_count()
            or not self.sim.particles[self.active].is_dragged
        )

    def cancel(self) -> None:
        """Drop queued events and release any active drag (e.g. before reset)."""
        self._queue.clear()
        self._on_release()
