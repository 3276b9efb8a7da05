# MIT License (see LICENSE)
"""
gravity_sandbox - physics core of an interactive 2D gravity sandbox.

Users place mass-bearing bodies on an infinite canvas, run a live N-body
simulation and look at predicted and recorded orbit trails. This package
holds everything with numerical content; rendering and input handling
belong to the host UI.

Main entry points:
    - Simulation: Host-facing facade (commands, tick, outputs).
    - WorldState: Ordered bodies plus global parameters.
    - Body, Planet: A point mass and its kind-specific payload.
    - Integrator: Semi-implicit Euler tick.
    - OrbitPredictor, predict_orbit: RK4 forward prediction.
    - SimulationParams, PredictorSettings: Configuration values.

Submodules:
    - core: Force law, velocity initialisation/decomposition, integrators,
      invariants.
    - renderer: Optional visualization adapters.

Example:
    from gravity_sandbox import Simulation

    sim = Simulation(seed=0)
    moon = sim.add_body((50_200.0, 50_000.0))
    sim.tick(1 / 60)
    path = sim.orbit_paths()[moon.id]
"""
import logging

from .config import SimulationParams, PredictorSettings
from .types import Body, BodyPayload, Planet, ForceVector, ForceLine, VelocityDecomposition, OrbitPath
from .world import WorldState
from .integrator import Integrator, TickReport
from .prediction import OrbitPredictor, PredictionPass, predict_orbit
from .trails import TrailRecorder
from .simulation import Simulation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Facade
    "Simulation",
    # World
    "WorldState",
    "Body",
    "BodyPayload",
    "Planet",
    # Configuration
    "SimulationParams",
    "PredictorSettings",
    # Stepping and prediction
    "Integrator",
    "TickReport",
    "OrbitPredictor",
    "PredictionPass",
    "predict_orbit",
    "TrailRecorder",
    # Diagnostics
    "ForceVector",
    "ForceLine",
    "VelocityDecomposition",
    "OrbitPath",
]
