"""Tests for the NumericalSolver and its configuration."""

import logging
import math

import jax.numpy as jnp
import numpy as np
import pytest

from astroprop.constants import GM_EARTH
from astroprop.dynamics import (
    CentralBodyGravity,
    PositionDerivative,
    ThirdBodyGravity,
    get_dynamical_equations,
)
from astroprop.environment import earth, moon, sun
from astroprop.epoch import Epoch
from astroprop.event_conditions import (
    Conjunctive,
    Criteria,
    Disjunctive,
    RealEventCondition,
)
from astroprop.integrators import rk4_step
from astroprop.solvers import (
    ConditionSolution,
    NumericalSolver,
    SolverConfig,
    StepperType,
)


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────

def _harmonic_oscillator(t, x):
    """State [q, p]. Solution from [1, 0]: q = cos(t), p = -sin(t)."""
    return jnp.array([x[1], -x[0]])


def _fine_solver(**kwargs) -> NumericalSolver:
    return NumericalSolver(SolverConfig(step_size=0.01, root_tolerance=1e-9, **kwargs))


def _q_falls_through_zero() -> RealEventCondition:
    return RealEventCondition("q falls", Criteria.NEGATIVE_CROSSING, lambda x, t: x[0])


def _epoch() -> Epoch:
    return Epoch(2021, 3, 20, 12, 0, 0)


def _circular_leo():
    sma = 7e6
    return jnp.array([sma, 0.0, 0.0, 0.0, math.sqrt(GM_EARTH / sma), 0.0]), sma


# ──────────────────────────────────────────────
# SolverConfig
# ──────────────────────────────────────────────


class TestSolverConfig:
    def test_defaults(self):
        config = SolverConfig()
        assert config.stepper == StepperType.RUNGE_KUTTA_4
        assert config.step_size == 10.0
        assert config.root_tolerance == 1e-6
        assert config.max_root_iterations == 100

    def test_custom(self):
        config = SolverConfig(step_size=1.0, root_tolerance=1e-3, max_root_iterations=5)
        assert config.step_size == 1.0
        assert config.max_root_iterations == 5

    @pytest.mark.parametrize("step_size", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_step_size(self, step_size):
        with pytest.raises(ValueError, match="step_size"):
            SolverConfig(step_size=step_size)

    def test_invalid_root_tolerance(self):
        with pytest.raises(ValueError, match="root_tolerance"):
            SolverConfig(root_tolerance=-1e-6)

    def test_invalid_max_root_iterations(self):
        with pytest.raises(ValueError, match="max_root_iterations"):
            SolverConfig(max_root_iterations=0)

    def test_invalid_stepper(self):
        with pytest.raises(ValueError, match="stepper"):
            SolverConfig(stepper="rk4")

    def test_frozen(self):
        with pytest.raises(AttributeError):
            SolverConfig().step_size = 1.0

    def test_stepper_display(self):
        assert str(StepperType.RUNGE_KUTTA_4) == "Runge-Kutta 4"

    def test_solver_default_config(self):
        assert NumericalSolver().config == SolverConfig()


# ──────────────────────────────────────────────
# integrate_time / integrate_duration
# ──────────────────────────────────────────────


class TestIntegrateTime:
    def test_harmonic_half_period(self):
        x = _fine_solver().integrate_time(jnp.array([1.0, 0.0]), 0.0, math.pi, _harmonic_oscillator)
        assert jnp.allclose(x, jnp.array([-1.0, 0.0]), atol=1e-8)

    def test_lands_on_end_time(self):
        """A non-integer number of steps ends with a shortened step."""
        solver = NumericalSolver(SolverConfig(step_size=10.0))
        x0 = jnp.array([1.0, 0.0])

        x = solver.integrate_time(x0, 0.0, 25.0, _harmonic_oscillator)

        manual = rk4_step(_harmonic_oscillator, 0.0, x0, 10.0).state
        manual = rk4_step(_harmonic_oscillator, 10.0, manual, 10.0).state
        manual = rk4_step(_harmonic_oscillator, 20.0, manual, 5.0).state
        assert jnp.array_equal(x, manual)

    def test_partial_step_accuracy(self):
        solver = NumericalSolver(SolverConfig(step_size=0.003))
        x = solver.integrate_time(jnp.array([1.0, 0.0]), 0.0, 1.0, _harmonic_oscillator)
        assert jnp.allclose(x, jnp.array([math.cos(1.0), -math.sin(1.0)]), atol=1e-10)

    def test_backward(self):
        x = _fine_solver().integrate_time(jnp.array([1.0, 0.0]), 0.0, -10.0, _harmonic_oscillator)
        assert jnp.allclose(x, jnp.array([math.cos(10.0), math.sin(10.0)]), atol=1e-7)

    def test_forward_then_backward(self):
        solver = _fine_solver()
        x0 = jnp.array([1.0, 0.0])
        x1 = solver.integrate_time(x0, 0.0, 5.0, _harmonic_oscillator)
        x2 = solver.integrate_time(x1, 5.0, 0.0, _harmonic_oscillator)
        assert jnp.allclose(x2, x0, atol=1e-8)

    def test_zero_span(self):
        x0 = jnp.array([1.0, 0.0])
        x = NumericalSolver().integrate_time(x0, 3.0, 3.0, _harmonic_oscillator)
        assert jnp.array_equal(x, x0)

    def test_integrate_duration(self):
        solver = _fine_solver()
        x0 = jnp.array([1.0, 0.0])
        assert jnp.array_equal(
            solver.integrate_duration(x0, 2.0, _harmonic_oscillator),
            solver.integrate_time(x0, 0.0, 2.0, _harmonic_oscillator),
        )

    def test_accepts_list_state(self):
        x = _fine_solver().integrate_time([1.0, 0.0], 0.0, 0.1, _harmonic_oscillator)
        assert x.dtype == jnp.float64

    def test_rejects_non_finite_state(self):
        with pytest.raises(ValueError, match="NaN or Inf"):
            NumericalSolver().integrate_time(jnp.array([jnp.nan, 0.0]), 0.0, 1.0, _harmonic_oscillator)

    @pytest.mark.parametrize(
        "start_time,end_time",
        [(0.0, math.inf), (0.0, -math.inf), (math.nan, 1.0), (0.0, math.nan)],
    )
    def test_rejects_non_finite_times(self, start_time, end_time):
        with pytest.raises(ValueError, match="must be finite"):
            NumericalSolver().integrate_time(jnp.array([1.0, 0.0]), start_time, end_time, _harmonic_oscillator)

    def test_condition_rejects_non_finite_end_time(self):
        with pytest.raises(ValueError, match="must be finite"):
            NumericalSolver().integrate_time_with_condition(
                jnp.array([1.0, 0.0]), 0.0, math.inf, _harmonic_oscillator, _q_falls_through_zero()
            )

    def test_rejects_2d_state(self):
        with pytest.raises(ValueError, match="1-D"):
            NumericalSolver().integrate_time(jnp.zeros((2, 2)), 0.0, 1.0, _harmonic_oscillator)

    def test_rejects_wrong_dimension_for_system(self):
        f = get_dynamical_equations([PositionDerivative()], _epoch())
        with pytest.raises(ValueError, match="6 elements"):
            NumericalSolver().integrate_time(jnp.zeros(4), 0.0, 1.0, f)

    def test_circular_orbit_radius_preserved(self):
        f = get_dynamical_equations([PositionDerivative(), CentralBodyGravity(earth())], _epoch())
        x0, sma = _circular_leo()
        x = NumericalSolver().integrate_time(x0, 0.0, 600.0, f)
        assert float(jnp.linalg.norm(x[0:3])) == pytest.approx(sma, rel=1e-9)

    def test_bit_reproducible(self):
        f = get_dynamical_equations(
            [
                PositionDerivative(),
                CentralBodyGravity(earth()),
                ThirdBodyGravity(sun()),
                ThirdBodyGravity(moon()),
            ],
            _epoch(),
        )
        x0, _ = _circular_leo()
        solver = NumericalSolver()
        first = solver.integrate_time(x0, 0.0, 60.0, f)
        second = solver.integrate_time(x0, 0.0, 60.0, f)
        assert np.array_equal(np.asarray(first), np.asarray(second))


# ──────────────────────────────────────────────
# integrate_times
# ──────────────────────────────────────────────


class TestIntegrateTimes:
    def test_states_at_each_time(self):
        solver = NumericalSolver(SolverConfig(step_size=0.1))
        times = [1.0, 2.0, 3.0]
        states = solver.integrate_times(jnp.array([1.0, 0.0]), 0.0, times, _harmonic_oscillator)
        assert states.shape == (3, 2)
        for row, t in zip(states, times):
            assert jnp.allclose(row, jnp.array([math.cos(t), -math.sin(t)]), atol=1e-5)

    def test_last_row_matches_integrate_time(self):
        solver = NumericalSolver(SolverConfig(step_size=0.5))
        x0 = jnp.array([1.0, 0.0])
        states = solver.integrate_times(x0, 0.0, jnp.array([1.0, 2.0, 3.0]), _harmonic_oscillator)
        final = solver.integrate_time(x0, 0.0, 3.0, _harmonic_oscillator)
        np.testing.assert_allclose(np.asarray(states[-1]), np.asarray(final), rtol=1e-14, atol=1e-15)

    def test_backward_times(self):
        states = _fine_solver().integrate_times(
            jnp.array([1.0, 0.0]), 0.0, [-1.0, -2.0], _harmonic_oscillator
        )
        assert jnp.allclose(states[1], jnp.array([math.cos(2.0), math.sin(2.0)]), atol=1e-8)

    def test_start_time_included(self):
        x0 = jnp.array([1.0, 0.0])
        states = NumericalSolver().integrate_times(x0, 0.0, [0.0, 1.0], _harmonic_oscillator)
        assert jnp.array_equal(states[0], x0)

    def test_non_monotonic_raises(self):
        with pytest.raises(ValueError, match="monotonic"):
            NumericalSolver().integrate_times(jnp.array([1.0, 0.0]), 0.0, [1.0, 3.0, 2.0], _harmonic_oscillator)

    def test_mixed_direction_raises(self):
        with pytest.raises(ValueError, match="monotonic"):
            NumericalSolver().integrate_times(jnp.array([1.0, 0.0]), 0.0, [-1.0, 1.0], _harmonic_oscillator)

    def test_empty_times_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            NumericalSolver().integrate_times(jnp.array([1.0, 0.0]), 0.0, [], _harmonic_oscillator)


# ──────────────────────────────────────────────
# integrate_time_with_condition
# ──────────────────────────────────────────────


class TestIntegrateTimeWithCondition:
    def test_finds_crossing(self):
        solution = _fine_solver().integrate_time_with_condition(
            jnp.array([1.0, 0.0]), 0.0, 10.0, _harmonic_oscillator, _q_falls_through_zero()
        )
        assert isinstance(solution, ConditionSolution)
        assert solution.condition_is_satisfied
        assert solution.root_solver_has_converged
        assert 0 < solution.iteration_count <= 100
        assert solution.time == pytest.approx(math.pi / 2.0, abs=1e-7)
        assert float(solution.state[0]) == pytest.approx(0.0, abs=1e-7)
        assert float(solution.state[1]) == pytest.approx(-1.0, abs=1e-7)

    def test_solution_satisfies_condition(self):
        """The reported instant lies on the satisfied side of the crossing."""
        solution = _fine_solver().integrate_time_with_condition(
            jnp.array([1.0, 0.0]), 0.0, 10.0, _harmonic_oscillator, _q_falls_through_zero()
        )
        assert float(solution.state[0]) < 0.0

    def test_backward_crossing(self):
        solution = _fine_solver().integrate_time_with_condition(
            jnp.array([1.0, 0.0]), 0.0, -10.0, _harmonic_oscillator, _q_falls_through_zero()
        )
        assert solution.condition_is_satisfied
        assert solution.time == pytest.approx(-math.pi / 2.0, abs=1e-7)

    def test_not_satisfied(self):
        solver = _fine_solver()
        x0 = jnp.array([1.0, 0.0])
        solution = solver.integrate_time_with_condition(
            x0, 0.0, 1.0, _harmonic_oscillator, _q_falls_through_zero()
        )
        assert not solution.condition_is_satisfied
        assert not solution.root_solver_has_converged
        assert solution.iteration_count == 0
        assert solution.time == 1.0
        assert jnp.array_equal(solution.state, solver.integrate_time(x0, 0.0, 1.0, _harmonic_oscillator))

    def test_not_converged_warns(self, caplog):
        solver = _fine_solver(max_root_iterations=1)
        with caplog.at_level(logging.WARNING, logger="astroprop.solvers.numerical_solver"):
            solution = solver.integrate_time_with_condition(
                jnp.array([1.0, 0.0]), 0.0, 10.0, _harmonic_oscillator, _q_falls_through_zero()
            )
        assert solution.condition_is_satisfied
        assert not solution.root_solver_has_converged
        assert solution.iteration_count == 1
        assert "did not converge" in caplog.text

    def test_event_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="astroprop.solvers.numerical_solver"):
            _fine_solver().integrate_time_with_condition(
                jnp.array([1.0, 0.0]), 0.0, 10.0, _harmonic_oscillator, _q_falls_through_zero()
            )
        assert "q falls" in caplog.text

    def test_disjunctive_first_event(self):
        condition = Disjunctive([
            _q_falls_through_zero(),
            RealEventCondition("p rises", Criteria.POSITIVE_CROSSING, lambda x, t: x[1]),
        ])
        solution = _fine_solver().integrate_time_with_condition(
            jnp.array([1.0, 0.0]), 0.0, 10.0, _harmonic_oscillator, condition
        )
        assert solution.time == pytest.approx(math.pi / 2.0, abs=1e-7)

    def test_conjunctive_with_time_monitor(self):
        """Only the second q-crossing happens after t = 5."""
        condition = Conjunctive([
            _q_falls_through_zero(),
            RealEventCondition("late", Criteria.STRICTLY_POSITIVE, lambda x, t: t, 5.0),
        ])
        solution = _fine_solver().integrate_time_with_condition(
            jnp.array([1.0, 0.0]), 0.0, 10.0, _harmonic_oscillator, condition
        )
        assert solution.time == pytest.approx(5.0 * math.pi / 2.0, abs=1e-7)

    def test_orbit_quarter_period(self):
        f = get_dynamical_equations([PositionDerivative(), CentralBodyGravity(earth())], _epoch())
        x0, sma = _circular_leo()
        condition = RealEventCondition("x crosses zero", Criteria.NEGATIVE_CROSSING, lambda x, t: x[0])

        solution = NumericalSolver().integrate_time_with_condition(x0, 0.0, 3000.0, f, condition)

        quarter_period = 0.5 * math.pi * math.sqrt(sma**3 / GM_EARTH)
        assert solution.condition_is_satisfied
        assert solution.time == pytest.approx(quarter_period, abs=1e-3)

    def test_rejects_non_condition(self):
        with pytest.raises(TypeError):
            NumericalSolver().integrate_time_with_condition(
                jnp.array([1.0, 0.0]), 0.0, 1.0, _harmonic_oscillator, lambda x, t: True
            )
