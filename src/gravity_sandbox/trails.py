# MIT License (see LICENSE)
"""
History of the positions bodies actually visited.

Complements the predicted paths: the recorder samples every non-primary
body at a throttled interval and keeps a bounded ring of recent points per
body.
"""
from __future__ import annotations
from collections import deque

import numpy as np

from .constants import TRAIL_INTERVAL, TRAIL_MAX_POINTS
from .world import WorldState


class TrailRecorder:
    """
    Throttled, bounded position history per body.

    Attributes:
        max_points: Points kept per body; the oldest are dropped first.
        interval: Minimum clock seconds between two samples.
    """

    def __init__(self, max_points: int = TRAIL_MAX_POINTS, interval: float = TRAIL_INTERVAL) -> None:
        self.max_points = max_points
        self.interval = interval
        self._trails: dict[int, deque[tuple[float, float]]] = {}
        self._last_sample: float | None = None

    def record(self, world: WorldState, clock: float) -> bool:
        """
        Sample the world if at least `interval` seconds passed on `clock`.

        Trails follow the current roster: bodies that left are forgotten and
        new non-primary bodies start with an empty trail.

        Returns:
            True if a sample was taken.
        """
        self._sync_roster(world)
        if self._last_sample is not None and clock - self._last_sample < self.interval:
            return False
        self._last_sample = clock
        for body in world.bodies[1:]:
            self._trails[body.id].append((float(body.position[0]), float(body.position[1])))
        return True

    def trail(self, body_id: int) -> np.ndarray:
        """Recorded points of a body as an array [N, 2] (empty if unknown)."""
        points = self._trails.get(body_id)
        if not points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array(points, dtype=np.float64)

    def trails(self) -> dict[int, np.ndarray]:
        """All recorded trails by body id."""
        return {body_id: self.trail(body_id) for body_id in self._trails}

    def clear(self) -> None:
        """Forget every trail."""
        self._trails.clear()
        self._last_sample = None

    def _sync_roster(self, world: WorldState) -> None:
        tracked = {b.id for b in world.bodies[1:]}
        for body_id in list(self._trails):
            if body_id not in tracked:
                del self._trails[body_id]
        for body_id in tracked:
            if body_id not in self._trails:
                self._trails[body_id] = deque(maxlen=self.max_points)
