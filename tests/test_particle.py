# MIT License (see LICENSE)
import numpy as np
import pytest
from plastic_sim.types import Particle, Bounds
from plastic_sim.core.integrators import verlet_step


def test_particle_starts_at_rest():
    p = Particle(position=(1.0, 2.0, 3.0))
    np.testing.assert_array_equal(p.previous_position, p.position)
    assert p.previous_position is not p.position
    np.testing.assert_array_equal(p.velocity, 0.0)


def test_integrate_applies_damped_velocity_and_gravity():
    """
    v = (x - x_prev) * damping; x_prev = x; x += v; x[up] -= g
    """
    p = Particle(position=(1.0, 5.0), previous_position=(0.0, 5.0))
    verlet_step(p, gravity=0.1, damping=0.5)
    np.testing.assert_allclose(p.position, (1.5, 4.9))
    np.testing.assert_allclose(p.previous_position, (1.0, 5.0))


def test_gravity_uses_up_axis():
    p = Particle(position=(0.0, 0.0, 10.0))
    verlet_step(p, gravity=1.0, damping=1.0, up_axis=2)
    np.testing.assert_allclose(p.position, (0.0, 0.0, 9.0))


def test_drag_pins_position_exactly():
    """While dragged, verlet_step() leaves the externally set position untouched."""
    p = Particle(position=(0.0, 5.0, 0.0), previous_position=(0.3, 5.5, 0.0))
    target = (2.0, -3.0, 1.0)  # below the floor on purpose
    p.set_dragged(True)
    p.apply_external_position(target)
    bounds = Bounds.floor_only(3, floor=0.0)
    for gravity, damping in [(0.01, 0.99), (10.0, 0.1), (0.0, 1.0)]:
        verlet_step(p, gravity=gravity, damping=damping, bounds=bounds)
        np.testing.assert_array_equal(p.position, target)
        np.testing.assert_array_equal(p.previous_position, target)


def test_release_after_drag_has_no_impulse():
    p = Particle(position=(0.0, 5.0), previous_position=(0.0, 6.0))
    p.set_dragged(True)
    p.apply_external_position((1.0, 3.0))
    p.set_dragged(False)
    verlet_step(p, gravity=0.0, damping=1.0)
    np.testing.assert_allclose(p.position, (1.0, 3.0))


def test_apply_external_position_rejects_wrong_dimension():
    p = Particle(position=(0.0, 0.0))
    with pytest.raises(ValueError):
        p.apply_external_position((1.0, 2.0, 3.0))


def test_floor_clamp_and_bounce():
    """Crossing the floor clamps to floor + radius and reverses velocity scaled by restitution."""
    p = Particle(position=(0.0, 0.15), previous_position=(0.0, 0.35), radius=0.1)
    bounds = Bounds.floor_only(2, floor=0.0)
    verlet_step(p, gravity=0.0, damping=1.0, bounds=bounds, restitution=0.5)

    assert p.position[1] == pytest.approx(0.1)
    # Incoming velocity -0.2 -> next implied velocity +0.1
    assert p.velocity[1] == pytest.approx(0.1)


def test_free_fall_settles_on_floor():
    """An unconstrained particle settles at floor + radius and never goes below it."""
    radius = 0.1
    p = Particle(position=(0.0, 3.0, 0.0), radius=radius)
    bounds = Bounds.floor_only(3, floor=0.0)
    for _ in range(2000):
        verlet_step(p, gravity=0.01, damping=0.99, bounds=bounds, restitution=0.5)
        assert p.position[1] >= radius
    assert p.position[1] == pytest.approx(radius, abs=1e-9)


def test_lateral_walls():
    p = Particle(position=(3.95, 1.0), previous_position=(3.75, 1.0), radius=0.1)
    bounds = Bounds(lower=(-4.0, 0.0), upper=(4.0, 10.0))
    verlet_step(p, gravity=0.0, damping=1.0, bounds=bounds, restitution=0.5)
    assert p.position[0] == pytest.approx(3.9)
    assert p.velocity[0] < 0


def test_invalid_bounds():
    with pytest.raises(ValueError):
        Bounds(lower=(0.0, 1.0), upper=(1.0, 0.0))
    with pytest.raises(ValueError):
        Bounds(lower=(0.0, 0.0), upper=(1.0, 1.0, 1.0))
