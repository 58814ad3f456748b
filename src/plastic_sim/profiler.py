# MIT License (see LICENSE)
"""
Per-phase timing for Simulation.step().

Simulation wraps each phase of a step in a named section when given a
Profiler: "integrate", "relax" (constraint sweeps) and "collide"
(particle-particle passes).

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    for _ in range(600):
        sim.step()
    print(profiler.stats.summary()["relax"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Timing samples (seconds) per section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def clear(self) -> None:
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary per section.

        Returns:
            Dict mapping section name to:
            - 'n': sample count
            - 'total_ms': summed time in milliseconds
            - 'mean_ms': average time in milliseconds
            - 'max_ms': maximum time in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            total = sum(times)
            out[name] = {
                "n": n,
                "total_ms": 1e3 * total,
                "mean_ms": 1e3 * total / n,
                "max_ms": 1e3 * max(times),
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under name."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
