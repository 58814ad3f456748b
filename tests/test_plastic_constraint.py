# MIT License (see LICENSE)
import numpy as np
import pytest
from plastic_sim.types import Particle
from plastic_sim.constraints.solver import PlasticConstraint, solve_plastic_constraints


def _pair(distance, dim=2):
    a = np.zeros(dim)
    b = np.zeros(dim)
    b[0] = distance
    return [Particle(position=a), Particle(position=b)]


def test_rest_length_converges_under_constant_overstretch():
    """
    Endpoints held at D > rest + yield: each solve must raise rest_length
    toward D and the applied displacement must shrink (self-limiting yield).
    """
    D = 2.0
    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=1.0,
                          yield_threshold=0.1, plasticity_factor=0.3)

    prev_rest = c.rest_length
    prev_disp = np.inf
    for _ in range(30):
        particles = _pair(D)
        solve_plastic_constraints([c], particles)
        disp = float(np.linalg.norm(particles[0].position))

        assert c.rest_length >= prev_rest
        assert c.rest_length <= D
        assert disp <= prev_disp
        prev_rest = c.rest_length
        prev_disp = disp

    # Stops yielding once inside the threshold.
    assert D - c.rest_length <= 0.1 + 1e-12
    assert c.plastic_strain == pytest.approx(c.rest_length - 1.0)


def test_first_yield_uses_updated_rest_length():
    """The correction in a yielding solve is computed from the new rest length."""
    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=1.0,
                          yield_threshold=0.1, plasticity_factor=0.5)
    particles = _pair(2.0)
    c.solve(particles)

    assert c.rest_length == pytest.approx(1.5)
    # k = (2 - 1.5) / 2 * 0.5 = 0.125, delta = (2, 0) -> A moves by 0.25
    assert particles[0].position[0] == pytest.approx(0.25)
    assert particles[1].position[0] == pytest.approx(1.75)


def test_no_yield_within_threshold():
    """Deformation at or below the threshold is purely elastic."""
    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=0.5,
                          yield_threshold=0.2, plasticity_factor=0.9)
    for d in (1.2, 0.8, 1.1, 0.95, 1.0):
        particles = _pair(d)
        for _ in range(5):
            c.solve(particles)
        assert c.rest_length == 1.0


def test_compression_yields_shorter():
    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=1.0,
                          yield_threshold=0.05, plasticity_factor=0.5)
    c.solve(_pair(0.5))
    assert c.rest_length == pytest.approx(0.75)
    assert c.plastic_strain < 0


def test_correction_is_symmetric():
    """The delta applied to A is the exact negation of the delta applied to B."""
    rng = np.random.default_rng(7)
    for dim in (2, 3):
        for _ in range(20):
            pa = Particle(position=rng.normal(size=dim))
            pb = Particle(position=rng.normal(size=dim))
            a0, b0 = pa.position.copy(), pb.position.copy()
            c = PlasticConstraint(a=0, b=1, rest_length=float(rng.uniform(0.1, 3.0)),
                                  stiffness=float(rng.uniform(0.1, 1.0)),
                                  yield_threshold=0.1, plasticity_factor=0.4)
            c.solve([pa, pb])
            np.testing.assert_allclose(pa.position - a0, -(pb.position - b0), rtol=1e-12, atol=1e-12)
            # Midpoint is conserved.
            np.testing.assert_allclose(pa.position + pb.position, a0 + b0, atol=1e-12)


def test_zero_length_is_skipped():
    particles = [Particle(position=(1.0, 1.0)), Particle(position=(1.0, 1.0))]
    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=1.0,
                          yield_threshold=0.0, plasticity_factor=1.0)
    c.solve(particles)
    assert c.rest_length == 1.0
    np.testing.assert_array_equal(particles[0].position, (1.0, 1.0))
    np.testing.assert_array_equal(particles[1].position, (1.0, 1.0))


def test_dragged_endpoint_still_corrected():
    particles = _pair(2.0)
    particles[0].set_dragged(True)
    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=1.0)
    c.solve(particles)
    assert particles[0].position[0] > 0.0


def test_between_uses_current_distance():
    from plastic_sim.materials import PlasticProfile

    particles = [Particle(position=(0, 0, 0)), Particle(position=(3, 4, 0))]
    c = PlasticConstraint.between(particles, 0, 1, 0.8, PlasticProfile(0.01, 0.2))
    assert c.rest_length == pytest.approx(5.0)
    assert c.initial_length == pytest.approx(5.0)
    assert c.stiffness == 0.8
    assert c.yield_threshold == 0.01
    assert c.plasticity_factor == 0.2


def test_initial_length_defaults_to_rest_length():
    assert PlasticConstraint(a=0, b=1, rest_length=2.0).initial_length == 2.0
    # An explicit initial length is kept even when it differs from rest_length.
    c = PlasticConstraint(a=0, b=1, rest_length=1.5, initial_length=1.0)
    assert c.initial_length == 1.0
    assert c.plastic_strain == pytest.approx(0.5)
    assert PlasticConstraint(a=0, b=1, rest_length=0.0, initial_length=0.0).initial_length == 0.0


@pytest.mark.parametrize("kwargs", [
    dict(a=0, b=0, rest_length=1.0),
    dict(a=0, b=1, rest_length=1.0, stiffness=0.0),
    dict(a=0, b=1, rest_length=1.0, stiffness=1.5),
    dict(a=0, b=1, rest_length=1.0, yield_threshold=-0.1),
    dict(a=0, b=1, rest_length=1.0, plasticity_factor=1.1),
    dict(a=0, b=1, rest_length=-1.0),
    dict(a=0, b=1, rest_length=1.0, initial_length=-1.0),
])
def test_invalid_constraint_rejected(kwargs):
    with pytest.raises(ValueError):
        PlasticConstraint(**kwargs)
