"""Composition of dynamics models into a single ODE right-hand side.

:class:`DynamicalEquations` holds an ordered collection of dynamics models
and a reference epoch.  Calling it as ``equations(t, state)`` -- the
signature every astroprop integrator expects -- evaluates the absolute
instant ``reference_epoch + t`` and lets each model add its term to a
zero-initialised derivative, in insertion order.

The object holds no scratch state, so the same instance can be evaluated
repeatedly, from several threads, or under ``jax.jit``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroprop.config import get_dtype
from astroprop.dynamics._base import Dynamics
from astroprop.epoch import Epoch

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DynamicalEquations:
    """Sum of the contributions of several dynamics models.

    Args:
        dynamics: Models to apply, in order.  Stored as a tuple.
        reference_epoch: Instant corresponding to ``t = 0``.

    Raises:
        TypeError: If an element does not satisfy the
            :class:`~astroprop.dynamics.Dynamics` protocol.
        ValueError: If the models declare different state dimensions.
    """

    dynamics: tuple[Dynamics, ...]
    reference_epoch: Epoch

    def __post_init__(self) -> None:
        object.__setattr__(self, "dynamics", tuple(self.dynamics))

        for d in self.dynamics:
            if not isinstance(d, Dynamics):
                raise TypeError(f"{d!r} does not implement the Dynamics interface")

        dimensions = {d.state_dimension for d in self.dynamics if d.state_dimension is not None}
        if len(dimensions) > 1:
            raise ValueError(
                f"Dynamics disagree on state dimension: "
                f"{[(d.name, d.state_dimension) for d in self.dynamics]}"
            )

        logger.debug(
            "Composed %d dynamics at %s: %s",
            len(self.dynamics),
            self.reference_epoch,
            [d.name for d in self.dynamics],
        )

    @property
    def state_dimension(self) -> int | None:
        """Agreed state dimension, or ``None`` if no model constrains it."""
        for d in self.dynamics:
            if d.state_dimension is not None:
                return d.state_dimension
        return None

    def __call__(self, t: ArrayLike, state: ArrayLike) -> Array:
        """Evaluate the state derivative.

        Args:
            t: Seconds elapsed since ``reference_epoch``.
            state: State vector.

        Returns:
            jax.Array: Time-derivative of *state*.

        Raises:
            ValueError: If the state length differs from the agreed
                state dimension.
        """
        x = jnp.asarray(state, dtype=get_dtype())
        dimension = self.state_dimension
        if dimension is not None and x.shape != (dimension,):
            raise ValueError(
                f"State vector must have shape ({dimension},), got {x.shape}"
            )

        epc = self.reference_epoch + t
        dx = jnp.zeros_like(x)
        for d in self.dynamics:
            dx = d.apply_contribution(x, dx, epc)
        return dx


def get_dynamical_equations(
    dynamics: Iterable[Dynamics], reference_epoch: Epoch
) -> DynamicalEquations:
    """Compose *dynamics* into a single ``f(t, state) -> derivative``.

    Args:
        dynamics: Models to apply, in order.
        reference_epoch: Instant corresponding to ``t = 0``.

    Returns:
        DynamicalEquations: Callable usable with every astroprop integrator.

    Examples:
        ```python
        import jax.numpy as jnp
        from astroprop import Epoch
        from astroprop.dynamics import (
            CentralBodyGravity, PositionDerivative, get_dynamical_equations,
        )
        from astroprop.environment import earth
        from astroprop.integrators import rk4_step
        f = get_dynamical_equations(
            [PositionDerivative(), CentralBodyGravity(earth())],
            Epoch(2021, 3, 20, 12, 0, 0),
        )
        result = rk4_step(f, 0.0, jnp.array([7e6, 0.0, 0.0, 0.0, 7546.0, 0.0]), 10.0)
        ```
    """
    return DynamicalEquations(tuple(dynamics), reference_epoch)
