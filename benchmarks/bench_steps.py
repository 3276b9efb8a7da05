"""
Microbenchmark: tick and prediction cost vs number of bodies.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from gravity_sandbox.simulation import Simulation
from gravity_sandbox.profiler import Profiler

def run(n: int, ticks: int = 300):
    prof = Profiler()
    sim = Simulation(seed=12345, profiler=prof)
    cx, cy = sim.bodies[0].position

    rng = np.random.default_rng(12345)  # determinism for placement

    # spawn bodies on a ring band around the primary
    for _ in range(n - 1):
        r = rng.uniform(150.0, 2000.0)
        a = rng.uniform(0.0, 2 * np.pi)
        sim.add_body((cx + r * np.cos(a), cy + r * np.sin(a)), radius=5.0, mass=1.0)

    # warmup
    for _ in range(30):
        sim.tick(1 / 60)

    t0 = time.perf_counter()
    for _ in range(ticks):
        sim.tick(1 / 60)
    t1 = time.perf_counter()

    t2 = time.perf_counter()
    sim.orbit_paths()
    t3 = time.perf_counter()

    return (t1 - t0) / ticks, t3 - t2, prof.stats.summary()

if __name__ == "__main__":
    for n in [2, 10, 50, 100, 250]:
        per_tick, predict, summary = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}  predict={1e3*predict:8.1f} ms")
        for k in ["forces", "integrate", "predict"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
