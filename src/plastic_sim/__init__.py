# MIT License (see LICENSE)
"""
plastic_sim - A particle-constraint kernel with plastic deformation.

A box-shaped body is modelled as point masses joined by springs. Springs
pushed past their yield threshold permanently change their rest length,
so the body dents and stays dented until it is rebuilt.

Main entry points:
    - Simulation: Owns the body; step(), reset(), drag API, read API.
    - SimConfig: All tunables, with 2D and 3D presets.
    - Particle, PlasticConstraint: The data model.
    - DragController: Queues input events and applies them between frames.

Submodules:
    - collision: Particle-particle overlap correction.
    - constraints: Plastic spring constraints and the relaxation sweep.
    - core: Verlet integrator, bounds response, diagnostics.
    - io: JSON load/save of SimConfig.

Example:
    from plastic_sim import Simulation, SimConfig

    sim = Simulation(SimConfig.preset_3d())
    sim.begin_drag(0, (-2.0, 1.0, 0.0))
    for _ in range(120):
        sim.step()
    sim.end_drag(0)
"""
from .simulation import Simulation
from .config import SimConfig
from .materials import PlasticProfile
from .types import Particle, Bounds
from .constraints.solver import PlasticConstraint
from .interaction import DragController, pick_point, pick_ray

__all__ = [
    # Core simulation
    "Simulation",
    "SimConfig",
    # Data model
    "Particle",
    "Bounds",
    "PlasticConstraint",
    "PlasticProfile",
    # Interaction
    "DragController",
    "pick_point",
    "pick_ray",
]
