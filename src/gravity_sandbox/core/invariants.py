# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and debugging stability issues.
With planetary forces enabled and no anchored primary the system is closed,
so total energy, linear momentum and angular momentum should stay constant
within integration error. The proximity cut-off makes the potential flat
inside the threshold, so contact-range encounters break conservation.
"""
from __future__ import annotations
import math
from typing import Sequence

import numpy as np

from ..constants import PROXIMITY_THRESHOLD
from ..types import Body
from ..util import cross2


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """
    Total kinetic energy.

    T = Σ 0.5 · m · v²
    """
    ke = 0.0
    for b in bodies:
        ke += 0.5 * b.mass * float(np.dot(b.velocity, b.velocity))
    return ke


def potential_energy(
    bodies: Sequence[Body],
    G: float,
    threshold: float = PROXIMITY_THRESHOLD,
) -> float:
    """
    Total gravitational potential energy.

    U = -Σ_{i<j} G · m_i · m_j / d_ij, skipping pairs inside the proximity
    threshold (they exert no force).
    """
    pe = 0.0
    n = len(bodies)
    for i in range(n):
        a = bodies[i]
        for j in range(i + 1, n):
            b = bodies[j]
            r = b.position - a.position
            d2 = float(np.dot(r, r))
            if d2 <= threshold or d2 == 0.0:
                continue
            pe -= G * a.mass * b.mass / math.sqrt(d2)
    return pe


def total_energy(bodies: Sequence[Body], G: float, threshold: float = PROXIMITY_THRESHOLD) -> float:
    """Kinetic plus potential energy."""
    return kinetic_energy(bodies) + potential_energy(bodies, G, threshold)


def linear_momentum(bodies: Sequence[Body]) -> np.ndarray:
    """
    Total linear momentum.

    P = Σ m · v
    """
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        p += b.mass * b.velocity
    return p


def angular_momentum(bodies: Sequence[Body], origin: Sequence[float] = (0.0, 0.0)) -> float:
    """
    Total angular momentum (z-component) about `origin`.

    L = Σ m · (r - origin) × v
    """
    o = np.asarray(origin, dtype=np.float64)
    total = 0.0
    for b in bodies:
        total += b.mass * cross2(b.position - o, b.velocity)
    return total
