# examples/two_body_orbit.py
import math

from gravity_sandbox import Simulation

sim = Simulation(seed=0)
sun = sim.bodies[0]
moon = sim.add_body((sun.position[0] + 250.0, sun.position[1]), radius=10.0)

G = sim.params.G
T = 2 * math.pi * math.sqrt(250.0**3 / (G * sun.mass))

path = sim.orbit_paths()[moon.id]
print("predicted:", len(path), "points,", path.outcome)

while sim.time < T:
    sim.tick(1 / 240)

print("t:", sim.time, "period:", T)
print("moon pos:", moon.position)
print("moon vel:", moon.velocity)
print("trail points:", len(sim.trail(moon.id)))
