"""
Microbenchmark: time per step for the 2D and 3D chassis.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from plastic_sim import Simulation, SimConfig
from plastic_sim.profiler import Profiler


def run(config: SimConfig, steps: int = 600):
    prof = Profiler()
    sim = Simulation(config, profiler=prof)

    # Keep one corner dragged in a circle so springs keep yielding.
    start = sim.particle_position(0)
    sim.begin_drag(0, start)

    # warmup
    for _ in range(30):
        sim.step()
    prof.stats.clear()

    t0 = time.perf_counter()
    for i in range(steps):
        offset = np.zeros(config.dimension)
        offset[0] = 0.5 * np.cos(i * 0.05)
        offset[1] = 0.5 * np.sin(i * 0.05)
        sim.update_drag(0, start + offset)
        sim.step()
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for name, config in [
        ("2d", SimConfig.preset_2d()),
        ("3d", SimConfig.preset_3d()),
        ("3d/no-collide", SimConfig.preset_3d(collide_particles=False)),
        ("3d/20 passes", SimConfig.preset_3d(relaxation_passes=20)),
    ]:
        per_step, summary = run(config)
        print(f"{name:14s}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["integrate", "relax", "collide"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
