# MIT License (see LICENSE)
"""
Forward prediction of orbit paths.

For one target body the predictor integrates a private copy of the body's
position and velocity through the gravity field of the other bodies, which
are held fixed at their snapshot positions. The world is never modified.

Integration uses RK4 at a fixed step smaller than a typical frame. The
force field honours the same G and planetary-forces flag as the live
integrator; both are passed in explicitly. Near-contact pairs are cut off
at a size-proportional squared distance instead of the live threshold.

Termination, first match wins:
    closed     The path came back around. Heuristic mode: after a warm-up,
               close to the first point, velocity aligned with the initial
               velocity, and enough velocity sign flips. Angular mode: the
               swept angle about the primary reached 2π.
    diverged   After the warm-up, distance to the primary exceeded
               divergence_factor × the initial distance (escaping or
               unstable trajectory).
    exhausted  The hard step cap was reached.

All three return the points collected so far; none is an error.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .config import PredictorSettings
from .core.integrators import rk4_step
from .profiler import Profiler
from .types import Body, OrbitPath
from .util import cross2, norm
from .world import WorldState

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


class _SourceField:
    """
    Frozen gravity field acting on one target.

    Positions, masses and cut-offs of the source bodies are copied into
    arrays so the scratch integration never touches live bodies.
    """

    def __init__(
        self,
        bodies: Sequence[Body],
        target: Body,
        G: float,
        planetary_forces: bool,
        contact_factor: float,
    ) -> None:
        primary_id = bodies[0].id
        sources = [
            b for b in bodies
            if b.id != target.id and (planetary_forces or b.id == primary_id)
        ]
        self.G = G
        self.positions = np.array([b.position for b in sources], dtype=np.float64).reshape(-1, 2)
        self.masses = np.array([b.mass for b in sources], dtype=np.float64)
        self.cutoffs = np.array(
            [contact_factor * max(target.radius, b.radius) for b in sources], dtype=np.float64
        )

    def __call__(self, x: np.ndarray) -> np.ndarray:
        """Acceleration of the target at position x."""
        if len(self.masses) == 0:
            return np.zeros(2, dtype=np.float64)
        d = self.positions - x
        d2 = np.einsum("ij,ij->i", d, d)
        active = (d2 > self.cutoffs) & (d2 > 0.0)
        if not active.any():
            return np.zeros(2, dtype=np.float64)
        d = d[active]
        d2 = d2[active]
        scale = self.G * self.masses[active] / (d2 * np.sqrt(d2))
        return (d * scale[:, None]).sum(axis=0)


def _alignment(v0: np.ndarray, v0_mag: float, v: np.ndarray) -> float:
    """Cosine between the initial and current velocity; 0 if either is zero."""
    v_mag = norm(v)
    if v0_mag == 0.0 or v_mag == 0.0:
        return 0.0
    return float(np.dot(v0, v)) / (v0_mag * v_mag)


def predict_orbit(
    bodies: Sequence[Body],
    target_id: int,
    G: float,
    planetary_forces: bool = True,
    settings: PredictorSettings | None = None,
    revision: int = 0,
) -> OrbitPath:
    """
    Predict the future path of one body.

    Args:
        bodies: Ordered roster; bodies[0] is the primary. Not modified.
        target_id: Body to predict.
        G: Gravitational constant.
        planetary_forces: If False only the primary attracts the target.
        settings: Predictor tuning (defaults to PredictorSettings()).
        revision: World revision stamped on the result.

    Returns:
        OrbitPath whose first point is the body's current position. Empty
        (outcome "skipped") for the primary, an unknown id, or a roster
        with fewer than two bodies.
    """
    settings = settings or PredictorSettings()
    if len(bodies) < 2 or bodies[0].id == target_id:
        return OrbitPath(target_id, revision=revision)
    target = next((b for b in bodies if b.id == target_id), None)
    if target is None:
        return OrbitPath(target_id, revision=revision)

    accel = _SourceField(bodies, target, G, planetary_forces, settings.contact_factor)
    h = settings.step

    # Scratch state: value copies only.
    x = target.position.copy()
    v = target.velocity.copy()
    start = x.copy()
    v0 = v.copy()
    v0_mag = norm(v0)
    center = bodies[0].position.copy()
    r0 = norm(start - center)
    close_enough = settings.closure_factor * target.radius
    escape = settings.divergence_factor * r0

    points = [start]
    last_sign = np.sign(v)
    direction_changes = 0
    swept = 0.0
    prev_rel = start - center
    outcome = "exhausted"

    for i in range(settings.max_points):
        x, v = rk4_step(x, v, h, accel)
        points.append(x)

        sign = np.sign(v)
        if sign[0] != last_sign[0] or sign[1] != last_sign[1]:
            direction_changes += 1
            last_sign = sign

        rel = x - center
        if settings.closure == "angular":
            swept += math.atan2(cross2(prev_rel, rel), float(np.dot(prev_rel, rel)))
            prev_rel = rel
            if abs(swept) >= TWO_PI:
                outcome = "closed"
                break
        elif (
            i > settings.warmup
            and norm(x - start) < close_enough
            and _alignment(v0, v0_mag, v) > settings.alignment
            and direction_changes >= settings.min_direction_changes
        ):
            outcome = "closed"
            break

        if i > settings.warmup and norm(rel) > escape:
            outcome = "diverged"
            break

    logger.debug(
        "Predicted body %d: %d points, %s after %d direction changes",
        target_id, len(points), outcome, direction_changes,
    )
    return OrbitPath(target_id, np.array(points, dtype=np.float64), outcome, revision)


@dataclass
class PredictionPass:
    """
    Orbit paths for every non-primary body, computed for one revision.

    A pass started before a roster or force-field change is stale; hosts
    should discard it rather than display it.
    """
    revision: int
    paths: dict[int, OrbitPath] = field(default_factory=dict)

    def is_current(self, world: WorldState) -> bool:
        """True while the world has not changed since the pass was computed."""
        return self.revision == world.revision


class OrbitPredictor:
    """
    Computes prediction passes over a WorldState.

    Usage:
        predictor = OrbitPredictor()
        pass_ = predictor.predict_all(world)
        for body_id, path in pass_.paths.items():
            ...
    """

    def __init__(self, settings: PredictorSettings | None = None, profiler: Profiler | None = None) -> None:
        self.settings = settings or PredictorSettings()
        self.profiler = profiler

    def predict(self, world: WorldState, body_id: int) -> OrbitPath:
        """Predict a single body of the world."""
        params = world.params
        return predict_orbit(
            world.bodies, body_id, params.G, params.planetary_forces, self.settings, world.revision
        )

    def predict_all(self, world: WorldState) -> PredictionPass:
        """Predict every non-primary body. Empty for worlds with < 2 bodies."""
        result = PredictionPass(world.revision)
        if len(world.bodies) < 2:
            return result
        if self.profiler:
            with self.profiler.section("predict"):
                self._fill(world, result)
        else:
            self._fill(world, result)
        return result

    def _fill(self, world: WorldState, result: PredictionPass) -> None:
        for body in world.bodies[1:]:
            result.paths[body.id] = self.predict(world, body.id)
