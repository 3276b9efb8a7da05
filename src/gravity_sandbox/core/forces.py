# MIT License (see LICENSE)
"""
Newtonian gravity between bodies.

Implements F = G * m_a * m_b / d², directed from each body toward the other.
Pairs closer than the proximity threshold (compared on the squared distance)
exert no force at all; this guards the 1/d² singularity when two bodies
overlap and keeps the result finite for any masses.

The first body of an ordered roster is the primary. With planetary forces
disabled only the primary acts as a source, which models a dominant-mass
approximation: non-primary bodies neither attract each other nor the
primary.

Complexity: O(N²) direct summation.
"""
from __future__ import annotations
import math
from typing import Sequence

import numpy as np

from ..constants import PROXIMITY_THRESHOLD
from ..types import Body, ForceVector, ForceLine
from ..util import zeros2


def pair_force(
    pos_a: np.ndarray,
    mass_a: float,
    pos_b: np.ndarray,
    mass_b: float,
    G: float,
    threshold: float = PROXIMITY_THRESHOLD,
) -> np.ndarray:
    """
    Gravitational force exerted on a by b.

    Args:
        pos_a, mass_a: Target position and mass.
        pos_b, mass_b: Source position and mass.
        G: Gravitational constant.
        threshold: Squared distance at or below which the force is zero.

    Returns:
        Force vector [Fx, Fy] pointing from a toward b.
    """
    dx = pos_b[0] - pos_a[0]
    dy = pos_b[1] - pos_a[1]
    d2 = dx * dx + dy * dy
    if d2 <= threshold or d2 == 0.0:
        return zeros2()
    d = math.sqrt(d2)
    f = G * mass_a * mass_b / d2
    return np.array([f * dx / d, f * dy / d], dtype=np.float64)


def compute_force(a: Body, b: Body, G: float, threshold: float = PROXIMITY_THRESHOLD) -> np.ndarray:
    """Force on body a from body b (see pair_force)."""
    return pair_force(a.position, a.mass, b.position, b.mass, G, threshold)


def compute_net_force(
    body: Body,
    bodies: Sequence[Body],
    G: float,
    planetary_forces: bool = True,
    threshold: float = PROXIMITY_THRESHOLD,
    contributions: list[ForceVector] | None = None,
) -> np.ndarray:
    """
    Sum the forces acting on `body` from the rest of an ordered roster.

    Args:
        body: Target body. Skipped as a source of its own force.
        bodies: Ordered roster; bodies[0] is the primary.
        G: Gravitational constant.
        planetary_forces: If False only the primary is a force source, so
                          the primary itself receives no force.
        threshold: Squared-distance cut-off.
        contributions: Optional list that receives one ForceVector per
                       source with a non-zero contribution.

    Returns:
        Net force vector [Fx, Fy].
    """
    net = zeros2()
    if not bodies:
        return net
    primary_id = bodies[0].id
    for other in bodies:
        if other.id == body.id:
            continue
        if not planetary_forces and other.id != primary_id:
            continue
        f = compute_force(body, other, G, threshold)
        if f[0] == 0.0 and f[1] == 0.0:
            continue
        net += f
        if contributions is not None:
            contributions.append(ForceVector(other.id, body.id, float(f[0]), float(f[1])))
    return net


def pairwise_forces(
    bodies: Sequence[Body],
    G: float,
    planetary_forces: bool = True,
    threshold: float = PROXIMITY_THRESHOLD,
) -> list[ForceVector]:
    """Every directed force the roster currently exerts, target by target."""
    out: list[ForceVector] = []
    for b in bodies:
        compute_net_force(b, bodies, G, planetary_forces, threshold, contributions=out)
    return out


def force_lines(
    bodies: Sequence[Body],
    G: float,
    threshold: float = PROXIMITY_THRESHOLD,
) -> list[ForceLine]:
    """
    One undirected line per attracting pair, for display.

    Strength is log(F + 1) / 10, which keeps vastly different forces on a
    comparable visual scale. Pairs inside the proximity threshold are
    omitted.
    """
    lines: list[ForceLine] = []
    n = len(bodies)
    for i in range(n):
        a = bodies[i]
        for j in range(i + 1, n):
            b = bodies[j]
            f = compute_force(a, b, G, threshold)
            mag = math.hypot(f[0], f[1])
            if mag == 0.0:
                continue
            lines.append(ForceLine(a.id, b.id, math.log(mag + 1.0) / 10.0))
    return lines


def field_intensity(point: Sequence[float], bodies: Sequence[Body]) -> float:
    """
    Normalised gravitational field strength at a point, in [0, 1].

    Sums m / d² over all bodies (ignoring bodies within unit distance) and
    maps the total through min(1, log(total + 1) / 10).
    """
    px, py = float(point[0]), float(point[1])
    total = 0.0
    for b in bodies:
        dx = b.position[0] - px
        dy = b.position[1] - py
        d2 = dx * dx + dy * dy
        if d2 < 1.0:
            continue
        total += b.mass / d2
    return min(1.0, math.log(total + 1.0) / 10.0)
