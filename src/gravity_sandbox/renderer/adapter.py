# MIT License (see LICENSE)
"""
Renderer adapters for sandbox visualization.

This module provides an abstract base class for rendering and concrete
debug implementations. The physics core has no rendering dependency; a
host UI implements RendererAdapter for its own graphics backend.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..types import Body, ForceVector, OrbitPath, VelocityDecomposition

if TYPE_CHECKING:
    from ..simulation import Simulation


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods for a concrete backend.
    Diagnostic overlays (forces, velocities, orbit paths) default to no-ops
    so a minimal renderer only has to draw bodies.

    Usage:
        renderer = MyRenderer()
        renderer.render(simulation)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame for rendering.

        Args:
            time: Current simulated time in seconds.
        """
        ...

    @abstractmethod
    def draw_body(self, body: Body) -> None:
        """
        Draw a single body.

        Args:
            body: The body to draw.
        """
        ...

    def draw_force_vector(self, vector: ForceVector) -> None:
        """Draw the force one body exerted on another during the last tick."""

    def draw_velocity(self, decomposition: VelocityDecomposition) -> None:
        """Draw a body's velocity and its radial/tangential components."""

    def draw_orbit_path(self, path: OrbitPath) -> None:
        """Draw a predicted orbit path."""

    @abstractmethod
    def end_frame(self) -> None:
        """
        Finalize the current frame.

        Called after everything has been drawn for this frame.
        """
        ...

    def render(self, simulation: "Simulation", orbits: bool = True) -> None:
        """
        Convenience method to render a whole simulation frame.

        Args:
            simulation: The simulation to render.
            orbits: Include predicted orbit paths (may trigger a prediction
                    refresh if the world changed).
        """
        self.begin_frame(simulation.time)
        if orbits:
            for path in simulation.orbit_paths().values():
                self.draw_orbit_path(path)
        for body in simulation.bodies:
            self.draw_body(body)
        for vector in simulation.force_vectors:
            self.draw_force_vector(vector)
        for decomposition in simulation.velocity_vectors:
            self.draw_velocity(decomposition)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text debug renderer for development and testing.

    Outputs a human-readable text representation to a stream (stdout by
    default).

    Output:
        === Frame t=0.0167 ===
        [1] planet Sun m=1e+06 r=75.00 @ (50000.00, 50000.00) v=(0.00, 0.00)
        [2] planet Small Planet m=1 r=30.00 @ (50200.00, 49996.95) v=(-0.09, -182.67)
        path 2: 123 points (closed)
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Initialize the debug renderer.

        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also print forces and velocity components.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        """Begin a new debug frame."""
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_body(self, body: Body) -> None:
        """Draw a body as text output."""
        pos, vel = body.position, body.velocity
        name = getattr(body.payload, "name", "")
        label = f"{body.kind} {name}".rstrip()
        self.output.write(
            f"[{body.id}] {label} m={body.mass:g} r={body.radius:.2f} "
            f"@ ({pos[0]:.2f}, {pos[1]:.2f}) v=({vel[0]:.2f}, {vel[1]:.2f})\n"
        )

    def draw_force_vector(self, vector: ForceVector) -> None:
        if self.verbose:
            self.output.write(
                f"  F {vector.source_id}->{vector.target_id} = ({vector.fx:.4g}, {vector.fy:.4g})\n"
            )

    def draw_velocity(self, decomposition: VelocityDecomposition) -> None:
        if self.verbose:
            r, t = decomposition.radial, decomposition.tangential
            self.output.write(
                f"  v[{decomposition.body_id}] radial=({r[0]:.2f}, {r[1]:.2f}) "
                f"tangential=({t[0]:.2f}, {t[1]:.2f})\n"
            )

    def draw_orbit_path(self, path: OrbitPath) -> None:
        self.output.write(f"path {path.body_id}: {len(path)} points ({path.outcome})\n")

    def end_frame(self) -> None:
        """End the debug frame."""
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer that does nothing.

    Useful as a placeholder or for performance testing without rendering overhead.
    """

    def begin_frame(self, time: float) -> None:
        pass

    def draw_body(self, body: Body) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that buffers frame data for later retrieval.

    Stores plain-data snapshots of everything drawn in each frame, useful
    for recording a session or feeding another process.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            sim.tick(1 / 60)
            renderer.render(sim)

        for frame in renderer.frames:
            print(f"t={frame['time']}, bodies={len(frame['bodies'])}")
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        """Begin buffering a new frame."""
        self._current_frame = {
            "time": time,
            "bodies": [],
            "forces": [],
            "velocities": [],
            "orbits": {},
        }

    def draw_body(self, body: Body) -> None:
        """Buffer body state."""
        if self._current_frame is None:
            return
        self._current_frame["bodies"].append({
            "id": body.id,
            "kind": body.kind,
            "position": body.position.tolist(),
            "velocity": body.velocity.tolist(),
            "mass": body.mass,
            "radius": body.radius,
        })

    def draw_force_vector(self, vector: ForceVector) -> None:
        if self._current_frame is None:
            return
        self._current_frame["forces"].append(
            {"source": vector.source_id, "target": vector.target_id, "force": [vector.fx, vector.fy]}
        )

    def draw_velocity(self, decomposition: VelocityDecomposition) -> None:
        if self._current_frame is None:
            return
        self._current_frame["velocities"].append({
            "id": decomposition.body_id,
            "radial": decomposition.radial.tolist(),
            "tangential": decomposition.tangential.tolist(),
        })

    def draw_orbit_path(self, path: OrbitPath) -> None:
        if self._current_frame is None:
            return
        self._current_frame["orbits"][path.body_id] = path.points.tolist()

    def end_frame(self) -> None:
        """Finalize and store the buffered frame."""
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
