import math

import numpy as np
import pytest

from gravity_sandbox.types import Body
from gravity_sandbox.world import WorldState
from gravity_sandbox.core.forces import (
    compute_force,
    compute_net_force,
    pairwise_forces,
    force_lines,
    field_intensity,
)


def test_force_direction_and_magnitude():
    """
    Newton's law with G=1:
      |F| = m_a m_b / d² = 2*3 / 50² = 0.0024
    directed from each body toward the other.
    """
    a = Body(mass=2.0, radius=1.0, position=(0.0, 0.0))
    b = Body(mass=3.0, radius=1.0, position=(30.0, 40.0))

    f_ab = compute_force(a, b, G=1.0)
    f_ba = compute_force(b, a, G=1.0)

    assert np.linalg.norm(f_ab) == pytest.approx(0.0024, rel=1e-12)
    np.testing.assert_allclose(f_ab / np.linalg.norm(f_ab), [0.6, 0.8], atol=1e-12)
    np.testing.assert_allclose(f_ba, -f_ab, atol=1e-15)


def test_force_inverse_square():
    a = Body(mass=1.0, radius=1.0, position=(0.0, 0.0))
    near = Body(mass=1.0, radius=1.0, position=(30.0, 40.0))
    far = Body(mass=1.0, radius=1.0, position=(60.0, 80.0))

    ratio = np.linalg.norm(compute_force(a, near, G=5.0)) / np.linalg.norm(compute_force(a, far, G=5.0))
    assert ratio == pytest.approx(4.0, rel=1e-12)


@pytest.mark.parametrize("offset", [(0.0, 0.0), (6.0, 8.0), (1e-9, 0.0), (3.0, 4.0)])
@pytest.mark.parametrize("masses", [(1.0, 1.0), (1e30, 1e-30), (1e12, 1e12)])
def test_force_clamped_inside_threshold(offset, masses):
    """Squared distance at or below 100 gives an exact zero vector."""
    a = Body(mass=masses[0], radius=1.0, position=(10.0, 10.0))
    b = Body(mass=masses[1], radius=1.0, position=(10.0 + offset[0], 10.0 + offset[1]))

    f = compute_force(a, b, G=6.6743)
    assert np.all(np.isfinite(f))
    assert f[0] == 0.0 and f[1] == 0.0


def test_net_force_skips_self_and_sums_sources():
    world = WorldState()
    sun = world.add_body((0.0, 0.0), mass=1000.0, radius=10.0, velocity=(0, 0))
    left = world.add_body((-100.0, 0.0), mass=1.0, radius=1.0, velocity=(0, 0))
    right = world.add_body((100.0, 0.0), mass=1.0, radius=1.0, velocity=(0, 0))

    # Symmetric pull on the primary cancels out.
    f_sun = compute_net_force(sun, world.bodies, G=1.0)
    np.testing.assert_allclose(f_sun, [0.0, 0.0], atol=1e-15)

    # Right body: pulled left by the sun and by the left body.
    f_right = compute_net_force(right, world.bodies, G=1.0)
    expected = -(1000.0 / 100.0**2 + 1.0 / 200.0**2)
    assert f_right[0] == pytest.approx(expected, rel=1e-12)
    assert f_right[1] == 0.0
    assert left.id != right.id


def test_planetary_forces_flag_three_bodies():
    """
    Without planetary forces only the primary is a source: no force flows
    between non-primary bodies, and the primary receives none.
    """
    world = WorldState()
    world.add_body((0.0, 0.0), mass=1e6, radius=75.0, velocity=(0, 0))
    b = world.add_body((200.0, 0.0), mass=50.0, radius=5.0, velocity=(0, 0))
    c = world.add_body((0.0, 300.0), mass=80.0, radius=5.0, velocity=(0, 0))
    primary = world.primary

    off = pairwise_forces(world.bodies, G=6.6743, planetary_forces=False)
    for v in off:
        assert v.source_id == primary.id
        assert v.target_id != primary.id
    assert len(off) == 2
    np.testing.assert_allclose(compute_net_force(primary, world.bodies, 6.6743, False), [0.0, 0.0])

    on = pairwise_forces(world.bodies, G=6.6743, planetary_forces=True)
    mutual = [v for v in on if {v.source_id, v.target_id} == {b.id, c.id}]
    assert len(mutual) == 2
    for v in mutual:
        assert math.hypot(v.fx, v.fy) > 0.0
    assert len(on) == 6


def test_contributions_are_recorded():
    world = WorldState()
    sun = world.add_body((0.0, 0.0), mass=100.0, radius=5.0, velocity=(0, 0))
    moon = world.add_body((0.0, 50.0), mass=2.0, radius=1.0, velocity=(0, 0))

    out = []
    net = compute_net_force(moon, world.bodies, G=1.0, contributions=out)
    assert len(out) == 1
    assert out[0].source_id == sun.id and out[0].target_id == moon.id
    assert (out[0].fx, out[0].fy) == pytest.approx((net[0], net[1]))
    assert out[0].fy < 0


def test_force_lines_log_strength():
    world = WorldState()
    world.add_body((0.0, 0.0), mass=100.0, radius=5.0, velocity=(0, 0))
    world.add_body((0.0, 50.0), mass=2.0, radius=1.0, velocity=(0, 0))
    world.add_body((0.0, 55.0), mass=2.0, radius=1.0, velocity=(0, 0))  # inside threshold of the previous

    lines = force_lines(world.bodies, G=1.0)
    assert len(lines) == 2
    f = 100.0 * 2.0 / 50.0**2
    assert lines[0].strength == pytest.approx(math.log(f + 1.0) / 10.0)


def test_field_intensity_is_normalised():
    bodies = [Body(mass=1e6, radius=75.0, position=(0.0, 0.0))]
    near = field_intensity((10.0, 0.0), bodies)
    far = field_intensity((1000.0, 0.0), bodies)
    assert 0.0 < far < near <= 1.0
    assert field_intensity((0.5, 0.0), bodies) == 0.0
