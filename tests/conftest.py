import jax.numpy as jnp
import pytest

from astroprop.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Tests that switch to a lower precision (test_config.py) leave the
    module-wide dtype changed; this fixture restores the default so every
    other test runs in float64.
    """
    set_dtype(jnp.float64)
