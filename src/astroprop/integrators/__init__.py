"""Numerical ODE step functions.

All step functions share one interface::

    result = step_fn(dynamics, t, state, dt)

where ``dynamics(t, x) -> dx`` defines the ODE right-hand side, and the
result is a :class:`StepResult` named tuple.

- :func:`rk4_step` -- Classic 4th-order Runge-Kutta (fixed step)
"""

from astroprop.integrators._types import StepResult
from astroprop.integrators.rk4 import rk4_step

__all__ = [
    "StepResult",
    "rk4_step",
]
