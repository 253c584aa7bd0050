"""Fixed-step classic Runge-Kutta (RK4) step function.

Stages, with ``h = dt``::

    k1 = f(t,       x)
    k2 = f(t + h/2, x + h/2 k1)
    k3 = f(t + h/2, x + h/2 k2)
    k4 = f(t + h,   x + h k3)
    x' = x + h/6 (k1 + 2 k2 + 2 k3 + k4)

Local truncation error is O(h^5), global error O(h^4).
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroprop.config import get_dtype
from astroprop.integrators._types import StepResult


def rk4_step(
    dynamics: Callable[[ArrayLike, ArrayLike], Array],
    t: ArrayLike,
    state: ArrayLike,
    dt: ArrayLike,
) -> StepResult:
    """Advance *state* from ``t`` to ``t + dt`` with one RK4 step.

    Pure and traceable; the stages are combined in a fixed order, so
    repeated calls with the same inputs return bit-identical states.

    Args:
        dynamics: Right-hand side ``f(t, x) -> dx/dt``, e.g. a
            :class:`~astroprop.dynamics.DynamicalEquations`.
        t: Time at the start of the step.
        state: State at ``t``.
        dt: Step length.  Negative values integrate backward.

    Returns:
        StepResult: New state; ``dt_used == dt_next == dt`` and a zero
            ``error_estimate``.

    Examples:
        ```python
        import jax.numpy as jnp
        from astroprop.integrators import rk4_step
        def harmonic(t, x):
            return jnp.array([x[1], -x[0]])
        rk4_step(harmonic, 0.0, jnp.array([1.0, 0.0]), 0.01).state
        # ~[cos(0.01), -sin(0.01)]
        ```
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    x = jnp.asarray(state, dtype=dtype)
    h = jnp.asarray(dt, dtype=dtype)
    t_mid = t + 0.5 * h

    k1 = dynamics(t, x)
    k2 = dynamics(t_mid, x + (0.5 * h) * k1)
    k3 = dynamics(t_mid, x + (0.5 * h) * k2)
    k4 = dynamics(t + h, x + h * k3)

    return StepResult(
        state=x + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4),
        dt_used=h,
        error_estimate=jnp.zeros((), dtype=dtype),
        dt_next=h,
    )
