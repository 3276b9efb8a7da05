# MIT License (see LICENSE)
"""
Core type definitions for the gravity sandbox.

Defines the fundamental data structures:
- Body: a point mass with position, velocity, mass and radius, plus a
  kind-specific payload.
- Payloads (Planet): kind tag and kind-specific fields. The physics code
  reads only the common numeric fields of Body, so new kinds never touch
  the integrator.
- Diagnostic records produced for rendering collaborators: ForceVector,
  ForceLine, VelocityDecomposition, OrbitPath.

Equations of motion (Newtonian, 2D):
  dx/dt = v
  dv/dt = F/m,   F = Σ G·m·m_j / d² along the line of centres
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import ClassVar

import numpy as np

from .util import f64


# =============================================================================
# Payloads
# =============================================================================

@dataclass(frozen=True)
class BodyPayload:
    """Base class for kind-specific body data."""
    kind: ClassVar[str] = "body"


@dataclass(frozen=True)
class Planet(BodyPayload):
    """
    Planet payload.

    Attributes:
        name: Display name.
        color: CSS-style colour string used by renderers.
    """
    kind: ClassVar[str] = "planet"

    name: str = "Small Planet"
    color: str = "#FFFFFF"


# =============================================================================
# Body
# =============================================================================

@dataclass(eq=False)
class Body:
    """
    A point mass in the sandbox.

    Attributes:
        mass: Mass, strictly positive.
        radius: Visual radius, strictly positive. Used by the predictor's
                near-contact force cut-off and loop-closure distance.
        position: Centre [x, y].
        velocity: Velocity [vx, vy].
        is_orbital: Whether the velocity is initialised for a circular orbit
                    around the primary (True) or randomised (False).
        payload: Kind-specific data, or None for a bare body.
        id: Unique identifier assigned by WorldState.add_body().

    Bodies compare by identity; look them up by id.

    Raises:
        ValueError: If mass or radius is not strictly positive.
    """
    mass: float
    radius: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    is_orbital: bool = True
    payload: BodyPayload | None = None
    id: int = -1

    def __post_init__(self) -> None:
        if not self.mass > 0:
            raise ValueError(f"Body mass must be positive, got {self.mass!r}")
        if not self.radius > 0:
            raise ValueError(f"Body radius must be positive, got {self.radius!r}")
        self.mass = float(self.mass)
        self.radius = float(self.radius)
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    @property
    def kind(self) -> str:
        """Kind tag of the payload ("body" when there is none)."""
        return self.payload.kind if self.payload is not None else BodyPayload.kind

    def copy(self) -> "Body":
        """Independent value copy; no arrays are shared with the original."""
        return replace(self, position=self.position.copy(), velocity=self.velocity.copy())


# =============================================================================
# Diagnostics
# =============================================================================

@dataclass(frozen=True)
class ForceVector:
    """Force exerted on `target_id` by `source_id` during one tick."""
    source_id: int
    target_id: int
    fx: float
    fy: float


@dataclass(frozen=True)
class ForceLine:
    """Undirected pair attraction, log-scaled for display."""
    a_id: int
    b_id: int
    strength: float


@dataclass(frozen=True)
class VelocityDecomposition:
    """
    Velocity split relative to the primary.

    radial + tangential == velocity. Both components are zero for the
    primary itself.
    """
    body_id: int
    velocity: np.ndarray
    radial: np.ndarray
    tangential: np.ndarray


@dataclass(frozen=True)
class OrbitPath:
    """
    Predicted future positions of one body.

    Attributes:
        body_id: Body the path belongs to.
        points: Array [N, 2]; the first row is the starting position.
        outcome: Why prediction stopped: "closed" (loop detected),
                 "diverged" (moving away from the primary), "exhausted"
                 (hit the iteration cap) or "skipped" (nothing to predict).
        revision: World revision the path was computed for.
    """
    body_id: int
    points: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.float64))
    outcome: str = "skipped"
    revision: int = 0

    def __len__(self) -> int:
        return len(self.points)
