# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force law: pairwise Newtonian gravity with a proximity cut-off.
    - Velocity: circular-orbit initialisation and radial/tangential split.
    - Integrators: semi-implicit Euler (live ticks), RK4 (prediction).
    - Invariants: energy and momentum for diagnostics.

Typical usage:
    from gravity_sandbox.core import compute_net_force, semi_implicit_euler_step

    f = compute_net_force(body, bodies, G=6.6743)
"""
from .forces import (
    pair_force,
    compute_force,
    compute_net_force,
    pairwise_forces,
    force_lines,
    field_intensity,
)
from .velocity import (
    circular_speed,
    orbital_velocity,
    random_velocity,
    initial_velocity,
    decompose_velocity,
)
from .integrators import semi_implicit_euler_step, rk4_step
from .invariants import (
    kinetic_energy,
    potential_energy,
    total_energy,
    linear_momentum,
    angular_momentum,
)

__all__ = [
    # Forces
    "pair_force",
    "compute_force",
    "compute_net_force",
    "pairwise_forces",
    "force_lines",
    "field_intensity",
    # Velocity
    "circular_speed",
    "orbital_velocity",
    "random_velocity",
    "initial_velocity",
    "decompose_velocity",
    # Integrators
    "semi_implicit_euler_step",
    "rk4_step",
    # Invariants
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "linear_momentum",
    "angular_momentum",
]
