"""Tests for the astroprop.integrators module.

Tests cover:
- Polynomial exactness (RK4 is exact for degree <= 3 polynomials)
- Harmonic oscillator and two-body accuracy
- Backward integration
- Use with composed dynamics and under jit
"""

import jax
import jax.numpy as jnp
import pytest

from astroprop.constants import GM_EARTH
from astroprop.dynamics import CentralBodyGravity, PositionDerivative, get_dynamical_equations
from astroprop.environment import earth
from astroprop.epoch import Epoch
from astroprop.integrators import StepResult, rk4_step


# ──────────────────────────────────────────────
# Helper dynamics functions
# ──────────────────────────────────────────────

def _exponential_decay(t, x):
    """dx/dt = -x. Solution: x(t) = x0 * exp(-t)."""
    return -x


def _harmonic_oscillator(t, x):
    """d^2q/dt^2 = -q. State: [q, dq/dt]. Solution: [cos(t), -sin(t)]."""
    return jnp.array([x[1], -x[0]])


def _cubic_dynamics(t, x):
    """dx/dt = 3t^2. Solution: x(t) = x0 + t^3."""
    return 3.0 * t**2 * jnp.ones_like(x)


def _two_body(t, state):
    r = state[:3]
    return jnp.concatenate([state[3:], -GM_EARTH * r / jnp.linalg.norm(r) ** 3])


class TestStepResult:
    def test_fields(self):
        result = rk4_step(_exponential_decay, 0.0, jnp.array([1.0]), 0.1)
        assert isinstance(result, StepResult)
        assert float(result.dt_used) == pytest.approx(0.1)
        assert float(result.error_estimate) == 0.0
        assert float(result.dt_next) == pytest.approx(0.1)


class TestRK4:
    def test_exponential_decay(self):
        result = rk4_step(_exponential_decay, 0.0, jnp.array([1.0]), 0.1)
        assert jnp.allclose(result.state, jnp.exp(-0.1), atol=1e-6)

    def test_cubic_exactness(self):
        """RK4 is exact for cubic dynamics (dx/dt = 3t^2)."""
        result = rk4_step(_cubic_dynamics, 0.0, jnp.array([0.0]), 1.0)
        assert jnp.allclose(result.state, jnp.array([1.0]), atol=1e-14)

    def test_harmonic_oscillator_single_step(self):
        dt = 0.01
        result = rk4_step(_harmonic_oscillator, 0.0, jnp.array([1.0, 0.0]), dt)
        expected = jnp.array([jnp.cos(dt), -jnp.sin(dt)])
        assert jnp.allclose(result.state, expected, atol=1e-11)

    def test_backward_integration(self):
        x0 = jnp.array([1.0])
        fwd = rk4_step(_exponential_decay, 0.0, x0, 0.1)
        bwd = rk4_step(_exponential_decay, 0.1, fwd.state, -0.1)
        assert jnp.allclose(bwd.state, x0, atol=1e-6)

    def test_output_dtype(self):
        result = rk4_step(_exponential_decay, 0.0, jnp.array([1.0]), 0.1)
        assert result.state.dtype == jnp.float64

    def test_two_body_energy(self):
        sma = 7e6
        x = jnp.array([sma, 0.0, 0.0, 0.0, float(jnp.sqrt(GM_EARTH / sma)), 0.0])

        def energy(s):
            return 0.5 * jnp.dot(s[3:], s[3:]) - GM_EARTH / jnp.linalg.norm(s[:3])

        e0 = energy(x)
        for _ in range(100):
            x = rk4_step(_two_body, 0.0, x, 10.0).state
        assert float(jnp.abs((energy(x) - e0) / e0)) < 1e-8

    def test_composed_dynamics_match_two_body(self):
        f = get_dynamical_equations(
            [PositionDerivative(), CentralBodyGravity(earth())], Epoch(2021, 3, 20, 12, 0, 0)
        )
        x = jnp.array([7e6, 0.0, 0.0, 0.0, 7.5e3, 0.0])
        composed = rk4_step(f, 0.0, x, 10.0).state
        reference = rk4_step(_two_body, 0.0, x, 10.0).state
        assert jnp.allclose(composed, reference, rtol=1e-14, atol=1e-9)

    def test_jit(self):
        step = jax.jit(rk4_step, static_argnums=0)
        x = jnp.array([1.0, 0.0])
        result = step(_harmonic_oscillator, 0.0, x, 0.01)
        assert jnp.allclose(result.state, rk4_step(_harmonic_oscillator, 0.0, x, 0.01).state)
