# MIT License (see LICENSE)
"""
Timing and frame-rate telemetry.

A sandbox runs for as long as the host keeps calling tick(), so section
timings are kept as running aggregates per section (count, total, max,
last) rather than as raw sample lists. The FPS counter feeds the host's
frame-rate display. Neither feeds back into physics.

Sections timed by the package:
    forces     Net force on every body (Integrator.tick)
    integrate  Semi-implicit Euler update (Integrator.tick)
    trails     Trail sampling (Simulation.tick)
    predict    One full prediction pass (OrbitPredictor.predict_all)

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    ...
    print(profiler.stats.summary()["predict"]["last_ms"])
"""
from __future__ import annotations
import time
from dataclasses import dataclass, field


@dataclass
class SectionTiming:
    """Running aggregate of one named section, in seconds."""
    n: int = 0
    total: float = 0.0
    max: float = 0.0
    last: float = 0.0

    def add(self, dt: float) -> None:
        self.n += 1
        self.total += dt
        self.last = dt
        if dt > self.max:
            self.max = dt


@dataclass
class ProfileStats:
    """
    Timings of every section seen so far.

    summary() reports milliseconds: 'n', 'mean_ms', 'max_ms', 'last_ms'
    and 'total_ms' per section.
    """
    sections: dict[str, SectionTiming] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record one run of a section that took dt seconds."""
        self.sections.setdefault(name, SectionTiming()).add(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        out = {}
        for name, s in self.sections.items():
            out[name] = {
                "n": s.n,
                "mean_ms": 1e3 * s.total / s.n,
                "max_ms": 1e3 * s.max,
                "last_ms": 1e3 * s.last,
                "total_ms": 1e3 * s.total,
            }
        return out

    def reset(self) -> None:
        self.sections.clear()


class _Timer:
    def __init__(self, stats: ProfileStats, name: str) -> None:
        self.stats = stats
        self.name = name
        self.t0 = 0.0

    def __enter__(self) -> "_Timer":
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stats.add(self.name, time.perf_counter() - self.t0)


class Profiler:
    """
    Times named sections of the simulation.

    Attach one to Simulation, Integrator or OrbitPredictor; each wraps its
    phases in section(). A section that raises is still recorded.
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def section(self, name: str) -> _Timer:
        """Context manager timing the enclosed block under `name`."""
        return _Timer(self.stats, name)


class FpsCounter:
    """
    Frames-per-second estimate from the elapsed time of each frame.

    The estimate is republished each time more than `window` seconds of
    frames have accumulated: fps = round(frames / accumulated seconds).
    """

    def __init__(self, window: float = 1.0) -> None:
        self.window = window
        self.fps = 0
        self._frames = 0
        self._elapsed = 0.0

    def frame(self, elapsed: float) -> int:
        """Count one frame that took `elapsed` seconds; return current fps."""
        self._frames += 1
        self._elapsed += elapsed
        if self._elapsed > self.window:
            self.fps = round(self._frames / self._elapsed)
            self._frames = 0
            self._elapsed = 0.0
        return self.fps
