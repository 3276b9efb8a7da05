# MIT License (see LICENSE)
"""
Configuration values for the simulation and the orbit predictor.

Both are frozen dataclasses: a tick or a prediction pass receives one value
and reads it without ever mutating it. Commands that change a parameter
produce a new value with dataclasses.replace().
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from .constants import (
    DEFAULT_G,
    PROXIMITY_THRESHOLD,
    PREDICTION_STEP,
    PREDICTION_MAX_POINTS,
    PREDICTION_WARMUP,
)

CLOSURE_MODES = ("heuristic", "angular")


def _check_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite non-negative number, got {value!r}")


@dataclass(frozen=True)
class SimulationParams:
    """
    Global simulation parameters.

    Attributes:
        G: Gravitational constant (sandbox units).
        time_scale: Multiplier applied to real elapsed time each tick.
        planetary_forces: If False, only the primary body is a force source;
                          non-primary bodies do not attract each other or
                          the primary.
        playing: Gates whether ticks apply physics.
        proximity_threshold: Squared distance below which a pair exerts no
                             force.
        anchor_primary: Keep the primary body fixed in place during ticks.
    """
    G: float = DEFAULT_G
    time_scale: float = 1.0
    planetary_forces: bool = True
    playing: bool = True
    proximity_threshold: float = PROXIMITY_THRESHOLD
    anchor_primary: bool = False

    def __post_init__(self) -> None:
        _check_non_negative("G", self.G)
        _check_non_negative("time_scale", self.time_scale)
        _check_non_negative("proximity_threshold", self.proximity_threshold)


@dataclass(frozen=True)
class PredictorSettings:
    """
    Tuning of the orbit predictor.

    The closure thresholds are empirical. They produce visually plausible,
    bounded-cost paths and are not a rigorous periodicity test; the
    "angular" closure mode is the stricter alternative.

    Attributes:
        step: Fixed RK4 step (smaller than a typical frame).
        max_points: Hard cap on integration steps per body.
        warmup: Steps before the heuristic closure test is evaluated.
        closure_factor: Loop closes when the path returns within
                        closure_factor * radius of its first point.
        alignment: Minimum cosine between current and initial velocity.
        min_direction_changes: Minimum velocity sign flips (x or y) before
                               a loop may close.
        divergence_factor: Abort when distance to the primary exceeds this
                           multiple of the initial distance.
        contact_factor: Prediction force cut-off is
                        contact_factor * max(target radius, source radius)
                        on the squared distance.
        closure: "heuristic" (distance + alignment + sign changes) or
                 "angular" (swept angle about the primary reaches 2π).
    """
    step: float = PREDICTION_STEP
    max_points: int = PREDICTION_MAX_POINTS
    warmup: int = PREDICTION_WARMUP
    closure_factor: float = 4.0
    alignment: float = 0.9
    min_direction_changes: int = 4
    divergence_factor: float = 3.0
    contact_factor: float = 4.0
    closure: str = "heuristic"

    def __post_init__(self) -> None:
        if not self.step > 0:
            raise ValueError(f"step must be positive, got {self.step!r}")
        if self.max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {self.max_points!r}")
        if self.closure not in CLOSURE_MODES:
            raise ValueError(f"Unknown closure mode: {self.closure}")
