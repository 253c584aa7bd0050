"""Floating-point precision used across astroprop.

astroprop computes in double precision by default.  A third-body pull of
~1e-7 m/s^2 sits on top of a ~8 m/s^2 central field, and every dynamics
evaluation forms ``reference_epoch + t`` to sub-microsecond resolution;
single precision loses both.  Importing this module therefore turns on
JAX's 64-bit mode.

Lower precisions remain available through :func:`set_dtype`, e.g. for
quick GPU experiments.  The dtype is read when arrays are created and,
under ``jax.jit``, at trace time, so change it before compiling anything.

Epoch day numbers are ``jnp.int32`` whatever the float dtype.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

# Tolerance [s] under which two Epochs compare equal, per dtype.
_EPOCH_EQ_TOLERANCE = {
    jnp.float64: 1e-9,
    jnp.float32: 1e-3,
    jnp.float16: 0.1,
    jnp.bfloat16: 0.1,
}

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Select the float dtype for all subsequently created astroprop arrays.

    Selecting ``jnp.float64`` also (re-)enables ``jax_enable_x64``.

    Args:
        dtype: ``jnp.float64``, ``jnp.float32``, ``jnp.float16`` or
            ``jnp.bfloat16``.

    Raises:
        ValueError: If *dtype* is not one of the supported float types.
    """
    global _dtype
    if dtype not in _EPOCH_EQ_TOLERANCE:
        raise ValueError(
            f"Unsupported dtype {dtype}; expected one of "
            f"{', '.join(d.__name__ for d in _EPOCH_EQ_TOLERANCE)}"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the active float dtype (``jnp.float64`` unless changed)."""
    return _dtype


def get_epoch_eq_tolerance() -> float:
    """Tolerance [s] for Epoch equality at the active dtype.

    1e-9 s for float64, 1e-3 s for float32, 0.1 s for the 16-bit types.
    """
    return _EPOCH_EQ_TOLERANCE[_dtype]
