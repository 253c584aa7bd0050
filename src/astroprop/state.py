"""State vector conventions.

A state vector is a plain 1-D ``jax.Array`` in the configured float dtype.
The built-in force models use the 6-element Cartesian layout
``[x, y, z, vx, vy, vz]`` in metres and metres/second.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroprop.config import get_dtype

StateVector = Array

CARTESIAN_STATE_DIMENSION = 6


def as_state_vector(state: ArrayLike, dimension: int | None = None) -> StateVector:
    """Validate and convert *state* to a state vector.

    Must be called on concrete values (outside ``jax.jit``).

    Args:
        state: Array-like of real numbers.
        dimension: Expected length, or ``None`` to accept any length.

    Returns:
        1-D array in the configured float dtype.

    Raises:
        ValueError: If *state* is not 1-D, has the wrong length, or
            contains NaN/Inf values.
    """
    x = jnp.asarray(state, dtype=get_dtype())
    if x.ndim != 1:
        raise ValueError(f"State vector must be 1-D, got shape {x.shape}")
    if dimension is not None and x.shape[0] != dimension:
        raise ValueError(
            f"State vector must have {dimension} elements, got {x.shape[0]}"
        )
    if not bool(jnp.all(jnp.isfinite(x))):
        raise ValueError(f"State vector contains NaN or Inf values: {x}")
    return x
