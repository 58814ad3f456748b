# MIT License (see LICENSE)
import numpy as np
import pytest
from plastic_sim.types import Particle
from plastic_sim.constraints.solver import PlasticConstraint
from plastic_sim.core.invariants import (
    centroid,
    constraint_errors,
    max_constraint_error,
    total_plastic_strain,
    displacement_energy,
)


def test_constraint_errors_are_signed():
    particles = [Particle(position=(0.0, 0.0)), Particle(position=(2.0, 0.0)), Particle(position=(0.0, 0.5))]
    constraints = [
        PlasticConstraint(a=0, b=1, rest_length=1.0),
        PlasticConstraint(a=0, b=2, rest_length=1.0),
    ]
    np.testing.assert_allclose(constraint_errors(constraints, particles), (1.0, -0.5))
    assert max_constraint_error(constraints, particles) == pytest.approx(1.0)
    assert max_constraint_error([], particles) == 0.0


def test_plastic_strain_and_energy():
    c = PlasticConstraint(a=0, b=1, rest_length=1.0)
    c.rest_length = 1.25
    d = PlasticConstraint(a=0, b=1, rest_length=1.0)
    d.rest_length = 0.5
    assert total_plastic_strain([c, d]) == pytest.approx(0.75)

    p = Particle(position=(1.0, 1.0), previous_position=(0.0, 1.0))
    q = Particle(position=(0.0, 0.0))
    assert displacement_energy([p, q]) == pytest.approx(0.5)
    np.testing.assert_allclose(centroid([p, q]), (0.5, 0.5))
