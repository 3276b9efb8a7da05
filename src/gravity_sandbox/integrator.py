# MIT License (see LICENSE)
"""
Live time stepping of a WorldState.

One call to Integrator.tick() is one frame:
    1. dt = real elapsed time × time scale.
    2. Net force on every body from a single snapshot of the roster.
    3. Semi-implicit Euler update (velocity first, then position).
    4. Publish all new states together, so no body sees another body's
       updated state within the same tick.

Diagnostics (per-pair force vectors, per-body velocity decomposition) are
returned in a TickReport for rendering collaborators and never feed back
into physics.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .core.forces import compute_net_force
from .core.integrators import semi_implicit_euler_step
from .core.velocity import decompose_velocity
from .profiler import Profiler
from .types import ForceVector, VelocityDecomposition
from .world import WorldState


@dataclass
class TickReport:
    """
    Result of one tick.

    Attributes:
        dt: Simulated time covered by the tick (real elapsed × time scale).
        applied: False when physics was skipped (paused, or fewer than two
                 bodies).
        force_vectors: Every non-zero force applied, source → target.
        velocity_vectors: Velocity decomposition of each body, taken from
                          the pre-step snapshot.
    """
    dt: float
    applied: bool = False
    force_vectors: list[ForceVector] = field(default_factory=list)
    velocity_vectors: list[VelocityDecomposition] = field(default_factory=list)


class Integrator:
    """
    Advances a WorldState with semi-implicit Euler.

    Usage:
        world = WorldState()
        world.seed_primary()
        world.add_body((50_200.0, 50_000.0))
        integrator = Integrator(world)
        report = integrator.tick(1 / 60)
    """

    def __init__(self, world: WorldState, profiler: Profiler | None = None) -> None:
        self.world = world
        self.profiler = profiler

    def tick(self, real_elapsed: float) -> TickReport:
        """
        Advance the world by one frame.

        Args:
            real_elapsed: Wall-clock seconds since the previous tick.

        Returns:
            TickReport with the diagnostics for this tick.
        """
        world = self.world
        params = world.params
        dt = float(real_elapsed) * params.time_scale
        report = TickReport(dt=dt)

        if not params.playing or len(world.bodies) < 2:
            return report

        bodies = world.snapshot()
        primary = bodies[0]
        prof = self.profiler

        if prof:
            with prof.section("forces"):
                acc = self._accelerations(bodies, report)
        else:
            acc = self._accelerations(bodies, report)

        report.velocity_vectors = [decompose_velocity(b, primary) for b in bodies]

        positions = np.array([b.position for b in bodies], dtype=np.float64)
        velocities = np.array([b.velocity for b in bodies], dtype=np.float64)

        if prof:
            with prof.section("integrate"):
                x_next, v_next = semi_implicit_euler_step(positions, velocities, acc, dt)
        else:
            x_next, v_next = semi_implicit_euler_step(positions, velocities, acc, dt)

        # Publish. The primary keeps its state when anchored.
        start = 1 if params.anchor_primary else 0
        for i in range(start, len(world.bodies)):
            world.bodies[i].position = x_next[i].copy()
            world.bodies[i].velocity = v_next[i].copy()

        world.time += dt
        report.applied = True
        return report

    def _accelerations(self, bodies: list, report: TickReport) -> np.ndarray:
        """Net acceleration of every body, recording each force applied."""
        params = self.world.params
        acc = np.zeros((len(bodies), 2), dtype=np.float64)
        for i, b in enumerate(bodies):
            if i == 0 and params.anchor_primary:
                continue
            f = compute_net_force(
                b,
                bodies,
                params.G,
                params.planetary_forces,
                params.proximity_threshold,
                contributions=report.force_vectors,
            )
            acc[i] = f / b.mass
        return acc
