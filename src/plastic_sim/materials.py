# MIT License (see LICENSE)
"""
Plasticity profiles for spring constraints.

A profile decides when a spring stops behaving elastically and how fast
its rest length drifts toward the deformed length afterwards.
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import YIELD_THRESHOLD, PLASTICITY_FACTOR


@dataclass(frozen=True)
class PlasticProfile:
    """
    Yield behavior shared by a group of constraints.

    Attributes:
        yield_threshold: Absolute deformation (length units) a spring
                         tolerates before its rest length starts to change.
                         Must be >= 0. Zero means every deformation yields.
        plasticity_factor: Fraction of the excess deformation absorbed into
                           the rest length per solve call, in [0, 1].
                           0 = purely elastic, 1 = rest length snaps to the
                           current length as soon as it yields.
    """
    yield_threshold: float = YIELD_THRESHOLD
    plasticity_factor: float = PLASTICITY_FACTOR

    def __post_init__(self) -> None:
        if self.yield_threshold < 0:
            raise ValueError(f"yield_threshold must be >= 0, got {self.yield_threshold}")
        if not 0.0 <= self.plasticity_factor <= 1.0:
            raise ValueError(f"plasticity_factor must be in [0, 1], got {self.plasticity_factor}")
