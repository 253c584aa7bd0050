"""Result type shared by the step functions.

:class:`StepResult` is a :class:`~typing.NamedTuple`, which JAX treats as a
pytree, so step functions stay usable under ``jax.jit`` and ``jax.lax``
control flow.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class StepResult(NamedTuple):
    """Result of a single integrator step.

    For fixed-step methods ``error_estimate`` is always 0.0 and ``dt_next``
    equals ``dt_used``.

    Attributes:
        state: State vector at time ``t + dt_used``.
        dt_used: Timestep actually taken.
        error_estimate: Normalized local error estimate (0.0 when the
            method has none).
        dt_next: Suggested timestep for the next step.
    """

    state: Array
    dt_used: Array
    error_estimate: Array
    dt_next: Array
