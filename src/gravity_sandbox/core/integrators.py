# MIT License (see LICENSE)
"""
Numerical integrators for point-mass dynamics.

Both integrators solve
    dx/dt = v,    dv/dt = a(x)
where the acceleration depends on position only (gravity).

Available integrators:
- semi_implicit_euler_step: symplectic Euler, used by the live tick.
- rk4_step: 4th-order Runge-Kutta on the second-order system, used by the
  orbit predictor.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from typing import Callable

import numpy as np

AccelFn = Callable[[np.ndarray], np.ndarray]


def semi_implicit_euler_step(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance a batch of states by dt with semi-implicit (symplectic) Euler.

    The update order is
        v(t+dt) = v(t) + a(t)·dt
        x(t+dt) = x(t) + v(t+dt)·dt
    Using the updated velocity for the position keeps orbital energy error
    bounded instead of growing every period as with explicit Euler.

    Args:
        positions: Array [N, 2] of positions at time t.
        velocities: Array [N, 2] of velocities at time t.
        accelerations: Array [N, 2] evaluated at the time-t positions.
        dt: Timestep.

    Returns:
        New (positions, velocities) arrays; the inputs are not modified.
    """
    v_next = velocities + accelerations * dt
    x_next = positions + v_next * dt
    return x_next, v_next


def rk4_step(
    x: np.ndarray,
    v: np.ndarray,
    h: float,
    accel: AccelFn,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance one state by h with classical RK4 on x'' = a(x).

    The four stage accelerations are sampled at
        k1 = a(x)
        k2 = a(x + v·h/2)
        k3 = a(x + v·h/2 + k1·h²/4)
        k4 = a(x + v·h + k2·h²/2)
    and combined with weights (1, 2, 2, 1)/6 for the velocity. The position
    advances with the trapezoidal average of the pre- and post-step
    velocities.

    Args:
        x: Position [x, y].
        v: Velocity [vx, vy].
        h: Step size.
        accel: Acceleration as a function of position.

    Returns:
        New (position, velocity).
    """
    k1 = accel(x)
    k2 = accel(x + v * (h / 2))
    k3 = accel(x + v * (h / 2) + k1 * (h * h / 4))
    k4 = accel(x + v * h + k2 * (h * h / 2))

    v_next = v + (h / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)
    x_next = x + (v + v_next) * (h / 2)
    return x_next, v_next
