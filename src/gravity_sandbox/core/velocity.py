# MIT License (see LICENSE)
"""
Orbit-consistent initial velocities and velocity decomposition.

Initialisation (run on body creation and on every orbital-mode toggle):
    orbital:      v = sqrt(G·M / d) · perp(û),   û = unit(primary - body)
    non-orbital:  each component uniform in [-span, span)

perp() is the same rotation for every body, so all circular orbits share
one handedness. Re-running the initialiser always yields the same orbital
velocity for the same geometry; it never adjusts the previous velocity.

Decomposition splits v into its projection on û (radial) and on perp(û)
(tangential). It is diagnostic only and never feeds back into physics.
"""
from __future__ import annotations
import logging
import math

import numpy as np

from ..constants import RANDOM_VELOCITY_RANGE
from ..types import Body, VelocityDecomposition
from ..util import norm, perp, zeros2

logger = logging.getLogger(__name__)


def circular_speed(G: float, primary_mass: float, distance: float) -> float:
    """Speed of a circular orbit of radius `distance`: sqrt(G·M / d)."""
    if distance <= 0:
        return 0.0
    return math.sqrt(G * primary_mass / distance)


def orbital_velocity(body: Body, primary: Body | None, G: float) -> np.ndarray:
    """
    Velocity for a circular orbit of `body` around `primary`.

    Returns the zero vector when there is no primary, when `body` is the
    primary, or when the two centres coincide (no defined direction).
    """
    if primary is None or primary.id == body.id:
        return zeros2()
    r = primary.position - body.position
    d = norm(r)
    if d == 0.0:
        logger.warning("Body %d sits on the primary; orbital velocity set to zero", body.id)
        return zeros2()
    u = r / d
    return perp(u) * circular_speed(G, primary.mass, d)


def random_velocity(rng: np.random.Generator, span: float = RANDOM_VELOCITY_RANGE) -> np.ndarray:
    """Velocity with each component drawn uniformly from [-span, span)."""
    return rng.uniform(-span, span, size=2).astype(np.float64)


def initial_velocity(
    body: Body,
    primary: Body | None,
    G: float,
    is_orbital: bool,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Velocity for a newly created (or re-toggled) body.

    Args:
        body: Body being initialised.
        primary: Current primary, or None if the world is empty.
        G: Gravitational constant.
        is_orbital: Circular orbit (True) or random velocity (False).
        rng: Random source for the non-orbital mode.
    """
    if is_orbital:
        return orbital_velocity(body, primary, G)
    return random_velocity(rng)


def decompose_velocity(body: Body, primary: Body | None) -> VelocityDecomposition:
    """
    Split a body's velocity into radial and tangential parts.

    The radial direction points from the body to the primary; tangential is
    its perpendicular. The primary itself (and any body at the primary's
    centre) decomposes to zero components.
    """
    v = body.velocity.copy()
    if primary is None or primary.id == body.id:
        return VelocityDecomposition(body.id, v, zeros2(), zeros2())

    r = primary.position - body.position
    d = norm(r)
    if d == 0.0:
        return VelocityDecomposition(body.id, v, zeros2(), zeros2())

    u = r / d
    p = perp(u)
    radial = float(np.dot(v, u)) * u
    tangential = float(np.dot(v, p)) * p
    return VelocityDecomposition(body.id, v, radial, tangential)
