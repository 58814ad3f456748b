# MIT License (see LICENSE)
"""
Default constants used throughout the simulation.

Units are arbitrary "world units" per frame: gravity and damping are
applied once per step() call rather than per second, matching a host
that steps once per rendered frame at roughly REFERENCE_DT.
"""
from __future__ import annotations

# Downward displacement added to each free particle per step.
GRAVITY: float = 0.01

# Fraction of the previous-frame displacement carried into the next frame.
DAMPING: float = 0.99

# Fraction of normal velocity kept after hitting a floor or wall.
RESTITUTION: float = 0.5

# Constraint sweeps per step. Fixed for stability, not convergence.
RELAXATION_PASSES: int = 5

PARTICLE_RADIUS: float = 0.1

# Perimeter springs approximate a rigid shell; spokes to the center are
# soft so they absorb dents.
CHASSIS_STIFFNESS: float = 0.9
SPOKE_STIFFNESS: float = 0.3

# Absolute length change (world units) before a spring starts to yield.
YIELD_THRESHOLD: float = 0.05

# Fraction of the excess deformation absorbed into the rest length per solve.
PLASTICITY_FACTOR: float = 0.5

# Frame duration the per-step constants above were tuned for.
REFERENCE_DT: float = 1 / 60
