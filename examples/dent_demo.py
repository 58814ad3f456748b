# examples/dent_demo.py
import numpy as np

from plastic_sim import Simulation, SimConfig, DragController
from plastic_sim.core.invariants import total_plastic_strain

# 2D canvas variant: pull the top-right corner outward with a simulated mouse,
# release it, and watch the dent stay.
sim = Simulation(SimConfig.preset_2d())
mouse = DragController(sim, pick_radius=0.3)

corner = sim.particle_position(3)
mouse.press(corner)
for i in range(45):
    mouse.move(corner + np.array([1.5, 1.0]) * (i + 1) / 45)
    mouse.flush()
    sim.step()
mouse.release()
mouse.flush()

for _ in range(300):
    sim.step()

for i, c in enumerate(sim.constraints):
    if abs(c.plastic_strain) > 1e-6:
        print(f"constraint {i:2d} ({c.a}-{c.b}): rest {c.initial_length:.3f} -> {c.rest_length:.3f}")
print("total strain:", total_plastic_strain(sim.constraints))

sim.reset()
print("after reset:", total_plastic_strain(sim.constraints))
