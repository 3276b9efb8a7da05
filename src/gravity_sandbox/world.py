# MIT License (see LICENSE)
"""
The world container: bodies plus global parameters.

WorldState manages:
- The ordered list of bodies. Insertion order is significant: the first
  body is the primary (central) body that orbits are referenced to.
- The current SimulationParams value (G, time scale, planetary forces,
  play state).
- A revision counter, bumped whenever the roster or the force field
  changes. Orbit predictions computed for an older revision are stale.

Structure:
    - User creates a WorldState (optionally seeded with the primary).
    - User adds bodies via add_body(); velocities are initialised for a
      circular orbit around the primary or randomised.
    - An Integrator advances the world one tick at a time.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Iterator, Sequence

import numpy as np

from .config import SimulationParams
from .constants import (
    CANVAS_CENTER,
    DEFAULT_BODY_MASS,
    DEFAULT_BODY_RADIUS,
    PRIMARY_COLOR,
    PRIMARY_MASS,
    PRIMARY_RADIUS,
)
from .core.velocity import initial_velocity
from .types import Body, BodyPayload, Planet

logger = logging.getLogger(__name__)


@dataclass
class WorldState:
    """
    Bodies and global parameters of the sandbox.

    Attributes:
        params: Current simulation parameters. Replaced, never mutated.
        bodies: Ordered bodies; bodies[0] is the primary.
        time: Simulated time in seconds (advances only when physics runs).
        revision: Bumped on every roster or force-field change.
        seed: Seed for the random source used by non-orbital bodies.
    """
    params: SimulationParams = field(default_factory=SimulationParams)
    bodies: list[Body] = field(default_factory=list)
    time: float = 0.0
    revision: int = 0
    seed: int | None = None

    def __post_init__(self) -> None:
        self.rng = np.random.default_rng(self.seed)
        self._next_id = 1
        initial = list(self.bodies)
        self.bodies = []
        for b in initial:
            self.add(b)

    # -------------------------------------------------------------------------
    # Roster
    # -------------------------------------------------------------------------

    @property
    def primary(self) -> Body | None:
        """The primary body, or None for an empty world."""
        return self.bodies[0] if self.bodies else None

    def __len__(self) -> int:
        return len(self.bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(self.bodies)

    def add(self, body: Body) -> int:
        """
        Add a fully constructed body as-is.

        Assigns a unique ID to the body; its velocity is left untouched.

        Returns:
            The assigned body ID.
        """
        body.id = self._next_id
        self._next_id += 1
        self.bodies.append(body)
        self._bump()
        return body.id

    def add_body(
        self,
        position: Sequence[float],
        *,
        radius: float = DEFAULT_BODY_RADIUS,
        mass: float = DEFAULT_BODY_MASS,
        payload: BodyPayload | None = None,
        is_orbital: bool = True,
        velocity: Sequence[float] | None = None,
    ) -> Body:
        """
        Create a body at `position` and add it to the world.

        Unless an explicit velocity is given, the velocity is initialised
        for a circular orbit around the current primary (is_orbital) or
        randomised. The first body of an empty world starts at rest in
        orbital mode.

        Raises:
            ValueError: If mass or radius is not strictly positive.
        """
        body = Body(
            mass=mass,
            radius=radius,
            position=position,
            is_orbital=is_orbital,
            payload=payload if payload is not None else Planet(color=self._random_color()),
        )
        if velocity is None:
            body.velocity = initial_velocity(body, self.primary, self.params.G, is_orbital, self.rng)
        else:
            body.velocity = np.array(velocity, dtype=np.float64)
        self.add(body)
        logger.info(
            "Added %s %d at (%.1f, %.1f) mass=%g orbital=%s",
            body.kind, body.id, body.position[0], body.position[1], body.mass, body.is_orbital,
        )
        return body

    def seed_primary(self, position: Sequence[float] = CANVAS_CENTER) -> Body:
        """Add the default central "Sun" if the world is empty; return the primary."""
        if self.bodies:
            return self.bodies[0]
        return self.add_body(
            position,
            radius=PRIMARY_RADIUS,
            mass=PRIMARY_MASS,
            payload=Planet(name="Sun", color=PRIMARY_COLOR),
            is_orbital=True,
            velocity=(0.0, 0.0),
        )

    def get(self, body_id: int) -> Body:
        """
        Look up a body by ID.

        Raises:
            KeyError: If no body has this ID.
        """
        for b in self.bodies:
            if b.id == body_id:
                return b
        raise KeyError(f"No body with id {body_id}")

    def remove_body(self, body_id: int) -> Body:
        """
        Remove a body. Removing the primary promotes the next body.

        Raises:
            KeyError: If no body has this ID.
        """
        body = self.get(body_id)
        self.bodies = [b for b in self.bodies if b.id != body_id]
        self._bump()
        logger.info("Removed body %d (%d left)", body_id, len(self.bodies))
        return body

    def toggle_orbital(self, body_id: int) -> Body:
        """
        Flip a body's orbital mode and re-initialise its velocity.

        The velocity is recomputed from scratch, so toggling off and on
        again restores exactly the circular-orbit velocity for the current
        geometry.
        """
        body = self.get(body_id)
        body.is_orbital = not body.is_orbital
        body.velocity = initial_velocity(body, self.primary, self.params.G, body.is_orbital, self.rng)
        self._bump()
        logger.debug("Body %d orbital=%s v=%s", body_id, body.is_orbital, body.velocity)
        return body

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def set_planetary_forces(self, enabled: bool) -> None:
        """Enable or disable mutual attraction between non-primary bodies."""
        if self.params.planetary_forces != enabled:
            self.params = replace(self.params, planetary_forces=bool(enabled))
            self._bump()

    def set_G(self, value: float) -> None:
        """Set the gravitational constant."""
        if self.params.G != value:
            self.params = replace(self.params, G=float(value))
            self._bump()

    def set_time_scale(self, multiplier: float) -> None:
        """Set the simulation speed multiplier."""
        self.params = replace(self.params, time_scale=float(multiplier))

    def set_playing(self, playing: bool) -> None:
        """Start or pause physics."""
        self.params = replace(self.params, playing=bool(playing))

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> list[Body]:
        """Value copies of all bodies, in roster order."""
        return [b.copy() for b in self.bodies]

    def _bump(self) -> None:
        self.revision += 1

    def _random_color(self) -> str:
        return "#%06x" % int(self.rng.integers(0, 0xFFFFFF))
