# MIT License (see LICENSE)
"""
Host-facing facade over the world, integrator, predictor and trails.

A host UI drives the sandbox through this class:
- Commands: add_body, remove_body, toggle_orbital_mode,
  set_planetary_forces, set_time_scale, set_G, set_playing.
- tick(real_elapsed) once per frame from the host's scheduler. The core
  owns no timer; pausing is set_playing(False), stopping is simply not
  calling tick() any more.
- Outputs: bodies, force_vectors, velocity_vectors, orbit_paths(),
  trail(), force_lines(), fps.

Orbit predictions are recomputed lazily, only when the world revision
changed (roster, orbital toggle, planetary forces or G), not on every tick.
Between recomputations the predicted overlay can lag the live positions;
it is advisory only.
"""
from __future__ import annotations
import logging
from typing import Sequence

import numpy as np

from .config import PredictorSettings, SimulationParams
from .constants import TRAIL_INTERVAL, TRAIL_MAX_POINTS
from .core.forces import force_lines
from .integrator import Integrator, TickReport
from .prediction import OrbitPredictor, PredictionPass
from .profiler import FpsCounter, Profiler
from .trails import TrailRecorder
from .types import Body, ForceLine, ForceVector, OrbitPath, VelocityDecomposition
from .world import WorldState

logger = logging.getLogger(__name__)


class Simulation:
    """
    Interactive gravity sandbox.

    Args:
        params: Initial simulation parameters.
        settings: Orbit predictor tuning.
        seed: Seed for randomised velocities and colours.
        seed_primary: Start with the default central body at the canvas
                      centre.
        profiler: Optional Profiler for section timings.
        trail_points: Points kept per recorded trail.
        trail_interval: Real seconds between trail samples.

    Example:
        sim = Simulation(seed=1)
        sim.add_body((50_200.0, 50_000.0))
        for _ in range(60):
            sim.tick(1 / 60)
        paths = sim.orbit_paths()
    """

    def __init__(
        self,
        params: SimulationParams | None = None,
        settings: PredictorSettings | None = None,
        seed: int | None = None,
        seed_primary: bool = True,
        profiler: Profiler | None = None,
        trail_points: int = TRAIL_MAX_POINTS,
        trail_interval: float = TRAIL_INTERVAL,
    ) -> None:
        self.world = WorldState(params=params or SimulationParams(), seed=seed)
        if seed_primary:
            self.world.seed_primary()
        self.profiler = profiler
        self.integrator = Integrator(self.world, profiler)
        self.predictor = OrbitPredictor(settings, profiler)
        self.trails = TrailRecorder(trail_points, trail_interval)
        self.fps_counter = FpsCounter()
        self.clock = 0.0
        self.last_report = TickReport(dt=0.0)
        self._predictions: PredictionPass | None = None

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def add_body(self, position: Sequence[float], **kwargs) -> Body:
        """Create a body (see WorldState.add_body for keyword arguments)."""
        return self.world.add_body(position, **kwargs)

    def remove_body(self, body_id: int) -> Body:
        """Remove a body by id."""
        return self.world.remove_body(body_id)

    def toggle_orbital_mode(self, body_id: int) -> Body:
        """Flip a body between circular-orbit and random velocity."""
        return self.world.toggle_orbital(body_id)

    def set_planetary_forces(self, enabled: bool) -> None:
        self.world.set_planetary_forces(enabled)

    def set_time_scale(self, multiplier: float) -> None:
        self.world.set_time_scale(multiplier)

    def set_G(self, value: float) -> None:
        self.world.set_G(value)

    def set_playing(self, playing: bool) -> None:
        self.world.set_playing(playing)

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def tick(self, real_elapsed: float) -> TickReport:
        """
        Run one frame.

        Clock and FPS bookkeeping always advance. Physics and trail
        recording only run while playing (physics also needs at least two
        bodies).
        """
        self.clock += real_elapsed
        self.fps_counter.frame(real_elapsed)
        report = self.integrator.tick(real_elapsed)
        if self.world.params.playing:
            if self.profiler:
                with self.profiler.section("trails"):
                    self.trails.record(self.world, self.clock)
            else:
                self.trails.record(self.world, self.clock)
        self.last_report = report
        return report

    # -------------------------------------------------------------------------
    # Outputs
    # -------------------------------------------------------------------------

    @property
    def bodies(self) -> list[Body]:
        """Current bodies in roster order."""
        return list(self.world.bodies)

    @property
    def params(self) -> SimulationParams:
        return self.world.params

    @property
    def time(self) -> float:
        """Simulated time."""
        return self.world.time

    @property
    def fps(self) -> int:
        return self.fps_counter.fps

    @property
    def force_vectors(self) -> list[ForceVector]:
        """Forces applied during the last tick."""
        return self.last_report.force_vectors

    @property
    def velocity_vectors(self) -> list[VelocityDecomposition]:
        """Velocity decompositions from the last tick."""
        return self.last_report.velocity_vectors

    def force_lines(self) -> list[ForceLine]:
        """Log-scaled attraction of every pair at the current positions."""
        params = self.world.params
        return force_lines(self.world.bodies, params.G, params.proximity_threshold)

    def orbit_paths(self) -> dict[int, OrbitPath]:
        """Predicted path per non-primary body, recomputed when stale."""
        if self._predictions is None or not self._predictions.is_current(self.world):
            logger.debug("Refreshing orbit predictions for revision %d", self.world.revision)
            self._predictions = self.predictor.predict_all(self.world)
        return self._predictions.paths

    def accept_predictions(self, prediction: PredictionPass) -> bool:
        """
        Adopt a prediction pass computed elsewhere.

        Returns False, keeping the current predictions, when the pass was
        computed for an older revision of the world.
        """
        if not prediction.is_current(self.world):
            logger.debug(
                "Discarding stale prediction pass (revision %d, world at %d)",
                prediction.revision, self.world.revision,
            )
            return False
        self._predictions = prediction
        return True

    def trail(self, body_id: int) -> np.ndarray:
        """Recorded positions of a body, oldest first."""
        return self.trails.trail(body_id)
