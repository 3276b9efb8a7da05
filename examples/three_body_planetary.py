from gravity_sandbox import Simulation, SimulationParams
from gravity_sandbox.core import total_energy
from gravity_sandbox.renderer import DebugRenderer

sim = Simulation(params=SimulationParams(planetary_forces=True), seed=7)
cx, cy = sim.bodies[0].position
inner = sim.add_body((cx + 200.0, cy), radius=8.0, mass=500.0)
outer = sim.add_body((cx, cy - 420.0), radius=12.0, mass=2000.0)
drifter = sim.add_body((cx - 600.0, cy + 150.0), radius=5.0, is_orbital=False)

e0 = total_energy(sim.bodies, sim.params.G)
for _ in range(600):
    sim.tick(1 / 60)

# Mutual attraction perturbs the inner orbit; compare with planetary forces off.
DebugRenderer(verbose=False).render(sim)
print("energy drift:", total_energy(sim.bodies, sim.params.G) - e0)

sim.set_planetary_forces(False)
for body_id, path in sim.orbit_paths().items():
    print(body_id, "without planetary forces:", len(path), path.outcome)
