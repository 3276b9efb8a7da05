# MIT License (see LICENSE)
"""
Default constants used throughout the sandbox.

Units are sandbox units (canvas pixels, seconds, arbitrary mass), not SI.
G is scaled so that a 1e6-mass primary gives visible orbits at a few
hundred pixels.
"""
from __future__ import annotations

# Gravitational constant scaled for the canvas.
DEFAULT_G: float = 6.67430

# Squared distance below which a pair exerts no force. Guards the 1/d²
# singularity when two bodies overlap.
PROXIMITY_THRESHOLD: float = 100.0

# Infinite canvas is addressed around this centre; the primary is seeded here.
CANVAS_CENTER: tuple[float, float] = (50_000.0, 50_000.0)

# Seeded primary ("Sun").
PRIMARY_RADIUS: float = 75.0
PRIMARY_MASS: float = 1_000_000.0
PRIMARY_COLOR: str = "#FFA500"

# Bodies added without explicit properties.
DEFAULT_BODY_RADIUS: float = 30.0
DEFAULT_BODY_MASS: float = 1.0

# Non-orbital bodies get each velocity component uniform in [-span, span).
RANDOM_VELOCITY_RANGE: float = 10.0

# Orbit prediction defaults (see config.PredictorSettings).
PREDICTION_STEP: float = 0.05
PREDICTION_MAX_POINTS: int = 2000
PREDICTION_WARMUP: int = 50

# Trail recording defaults.
TRAIL_MAX_POINTS: int = 100
TRAIL_INTERVAL: float = 1.0
