import io
import logging

import numpy as np
import pytest

from gravity_sandbox import Simulation, SimulationParams
from gravity_sandbox.constants import CANVAS_CENTER
from gravity_sandbox.profiler import Profiler
from gravity_sandbox.renderer import BufferedRenderer, DebugRenderer, NullRenderer


def _sim(**kwargs):
    sim = Simulation(seed=1, **kwargs)
    moon = sim.add_body((50_200.0, 50_000.0), radius=5.0)
    return sim, moon


def test_simulation_starts_with_primary():
    sim = Simulation()
    assert len(sim.bodies) == 1
    sun = sim.bodies[0]
    np.testing.assert_array_equal(sun.position, CANVAS_CENTER)
    assert sun.payload.name == "Sun"

    empty = Simulation(seed_primary=False)
    assert empty.bodies == []
    empty.tick(1 / 60)
    assert empty.time == 0.0


def test_tick_reports_equal_and_opposite_forces():
    sim, moon = _sim()
    report = sim.tick(1 / 60)
    assert report.applied
    assert sim.time == pytest.approx(1 / 60)
    assert len(sim.force_vectors) == 2
    a, b = sim.force_vectors
    assert a.fx == pytest.approx(-b.fx)
    assert a.fy == pytest.approx(-b.fy)
    assert {d.body_id for d in sim.velocity_vectors} == {sim.bodies[0].id, moon.id}


def test_pause_keeps_clock_but_freezes_physics():
    sim, moon = _sim()
    sim.set_playing(False)
    x0 = moon.position.copy()
    for _ in range(10):
        sim.tick(0.1)
    np.testing.assert_array_equal(moon.position, x0)
    assert sim.time == 0.0
    assert sim.clock == pytest.approx(1.0)
    assert sim.trail(moon.id).shape == (0, 2)

    sim.set_playing(True)
    sim.tick(0.1)
    assert sim.time == pytest.approx(0.1)
    assert not np.array_equal(moon.position, x0)


def test_time_scale_command():
    sim, _ = _sim()
    sim.set_time_scale(3.0)
    sim.tick(0.01)
    assert sim.time == pytest.approx(0.03)
    assert sim.params.time_scale == 3.0


def test_fps_counter():
    sim, _ = _sim()
    for _ in range(51):
        sim.tick(0.02)
    assert sim.fps == 50


def test_profiler_aggregates_sections():
    prof = Profiler()
    sim, _ = _sim(profiler=prof)
    for _ in range(4):
        sim.tick(1 / 60)
    sim.orbit_paths()

    summary = prof.stats.summary()
    print(summary)
    assert summary["forces"]["n"] == 4
    assert summary["integrate"]["n"] == 4
    assert summary["trails"]["n"] == 4
    assert summary["predict"]["n"] == 1
    for s in summary.values():
        assert 0.0 <= s["last_ms"] <= s["max_ms"] <= s["total_ms"]
        assert s["mean_ms"] == pytest.approx(s["total_ms"] / s["n"])

    with pytest.raises(RuntimeError):
        with prof.section("failing"):
            raise RuntimeError("boom")
    assert prof.stats.summary()["failing"]["n"] == 1

    prof.stats.reset()
    assert prof.stats.summary() == {}


def test_trails_are_throttled():
    sim, moon = _sim(trail_interval=1.0)
    for _ in range(10):
        sim.tick(0.25)
    trail = sim.trail(moon.id)
    assert trail.shape == (3, 2)
    # Primary is never recorded.
    assert sim.trail(sim.bodies[0].id).shape == (0, 2)


def test_trails_are_bounded_and_follow_roster():
    sim, moon = _sim(trail_points=2, trail_interval=0.0)
    other = sim.add_body((50_000.0, 50_400.0), radius=5.0)
    for _ in range(5):
        sim.tick(1 / 60)
    assert len(sim.trail(moon.id)) == 2
    np.testing.assert_allclose(sim.trail(moon.id)[-1], moon.position)

    sim.remove_body(other.id)
    sim.tick(1 / 60)
    assert len(sim.trail(other.id)) == 0
    assert other.id not in sim.trails.trails()


def test_orbit_paths_cached_until_world_changes():
    sim, moon = _sim()
    first = sim.orbit_paths()
    assert set(first) == {moon.id}
    assert first[moon.id].outcome == "closed"

    sim.tick(1 / 60)
    assert sim.orbit_paths() is first

    sim.set_planetary_forces(False)
    second = sim.orbit_paths()
    assert second is not first

    other = sim.add_body((50_000.0, 50_400.0), radius=5.0)
    assert set(sim.orbit_paths()) == {moon.id, other.id}


def test_stale_prediction_pass_is_discarded():
    sim, moon = _sim()
    pass_ = sim.predictor.predict_all(sim.world)
    sim.add_body((50_000.0, 49_600.0), radius=5.0)
    assert not sim.accept_predictions(pass_)

    fresh = sim.predictor.predict_all(sim.world)
    assert sim.accept_predictions(fresh)
    assert sim.orbit_paths() is fresh.paths


def test_toggle_and_set_G_commands():
    sim, moon = _sim()
    sim.toggle_orbital_mode(moon.id)
    assert not moon.is_orbital
    assert np.all(np.abs(moon.velocity) <= 10.0)

    sim.set_G(1.0)
    assert sim.params.G == 1.0
    with pytest.raises(KeyError):
        sim.toggle_orbital_mode(999)


def test_force_lines():
    sim, moon = _sim()
    lines = sim.force_lines()
    assert len(lines) == 1
    assert (lines[0].a_id, lines[0].b_id) == (sim.bodies[0].id, moon.id)
    assert lines[0].strength > 0.0


def test_buffered_renderer():
    sim, moon = _sim()
    renderer = BufferedRenderer()
    for _ in range(3):
        sim.tick(1 / 60)
        renderer.render(sim)

    assert len(renderer.frames) == 3
    frame = renderer.frames[-1]
    assert frame["time"] == pytest.approx(3 / 60)
    assert [b["id"] for b in frame["bodies"]] == [sim.bodies[0].id, moon.id]
    assert len(frame["forces"]) == 2
    assert len(frame["velocities"]) == 2
    assert moon.id in frame["orbits"]

    renderer.clear()
    assert renderer.frames == []


def test_debug_renderer_writes_text():
    sim, moon = _sim()
    sim.tick(1 / 60)
    out = io.StringIO()
    DebugRenderer(output=out).render(sim)
    text = out.getvalue()
    print(text)
    assert text.startswith("=== Frame t=")
    assert "planet Sun" in text
    assert f"path {moon.id}:" in text
    assert f"F {sim.bodies[0].id}->{moon.id}" in text

    quiet = io.StringIO()
    DebugRenderer(output=quiet, verbose=False).render(sim, orbits=False)
    assert "F " not in quiet.getvalue()
    assert "path" not in quiet.getvalue()


def test_null_renderer():
    sim, _ = _sim()
    NullRenderer().render(sim)


def test_commands_are_logged(caplog):
    caplog.set_level(logging.INFO, logger="gravity_sandbox")
    sim = Simulation(params=SimulationParams(G=2.0), seed=0)
    moon = sim.add_body((50_200.0, 50_000.0))
    sim.remove_body(moon.id)
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith(f"Added planet {moon.id}") for m in messages)
    assert any(m.startswith(f"Removed body {moon.id}") for m in messages)
