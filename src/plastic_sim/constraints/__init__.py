# MIT License (see LICENSE)
"""
Constraint solvers for the particle network.

This subpackage provides:
    - PlasticConstraint: Spring between two particles with a yielding rest length.
    - solve_plastic_constraints: One relaxation sweep over a constraint list.

Typical usage:
    from plastic_sim.constraints import PlasticConstraint, solve_plastic_constraints

    c = PlasticConstraint(a=0, b=1, rest_length=1.0, stiffness=0.9)
    solve_plastic_constraints([c], particles)
"""
from .solver import PlasticConstraint, solve_plastic_constraints

__all__ = [
    "PlasticConstraint",
    "solve_plastic_constraints",
]
