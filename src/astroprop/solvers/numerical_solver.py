"""Fixed-step propagation of a dynamical system, with optional event detection.

The solver drives a single-step scheme (see :mod:`astroprop.integrators`)
over a time span.  Step times are computed as ``start + k * h`` rather
than accumulated, and the last step is shortened so that the propagation
ends exactly on the requested time.  The same inputs always produce
bit-identical outputs.

Event-aware integration evaluates an
:class:`~astroprop.event_conditions.EventCondition` on every
(previous, current) pair of samples and, once satisfied, bisects the last
step down to ``root_tolerance``.  Conditions are evaluated on concrete
values, so these methods run eagerly.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroprop.event_conditions import EventCondition
from astroprop.integrators import StepResult, rk4_step
from astroprop.solvers.config import SolverConfig, StepperType
from astroprop.state import StateVector, as_state_vector

logger = logging.getLogger(__name__)

System = Callable[[ArrayLike, ArrayLike], Array]

_STEPPERS = {
    StepperType.RUNGE_KUTTA_4: rk4_step,
}


class ConditionSolution(NamedTuple):
    """Result of :meth:`NumericalSolver.integrate_time_with_condition`.

    Attributes:
        state: State at ``time``.
        time: First instant found at which the condition holds, or the end
            time when it never does.
        condition_is_satisfied: Whether the condition was met before the
            end time.
        iteration_count: Number of bisection iterations performed.
        root_solver_has_converged: Whether bisection reached
            ``root_tolerance`` within ``max_root_iterations``.
    """

    state: StateVector
    time: float
    condition_is_satisfied: bool
    iteration_count: int
    root_solver_has_converged: bool


class NumericalSolver:
    """Fixed-step numerical solver.

    Args:
        config: Solver settings.  Defaults to ``SolverConfig()``.

    Examples:
        ```python
        import jax.numpy as jnp
        from astroprop.solvers import NumericalSolver, SolverConfig
        solver = NumericalSolver(SolverConfig(step_size=0.01))
        x = solver.integrate_time(
            jnp.array([1.0, 0.0]), 0.0, jnp.pi,
            lambda t, x: jnp.array([x[1], -x[0]]),
        )  # ~[-1, 0]
        ```
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self._config = config if config is not None else SolverConfig()
        self._stepper = _STEPPERS[self._config.stepper]

    @property
    def config(self) -> SolverConfig:
        return self._config

    def _step(self, system: System, t: float, state: Array, dt: float) -> StepResult:
        return self._stepper(system, t, state, dt)

    def _step_times(self, start_time: float, end_time: float) -> list[float]:
        if not (math.isfinite(start_time) and math.isfinite(end_time)):
            raise ValueError(
                f"start and end times must be finite, got {start_time} and {end_time}"
            )

        span = end_time - start_time
        if span == 0.0:
            return [start_time]

        h = math.copysign(self._config.step_size, span)
        n_full = int(math.floor(abs(span) / self._config.step_size))

        times = [start_time + k * h for k in range(n_full + 1)]
        if times[-1] != end_time:
            times.append(end_time)
        return times

    def _initial_state(self, state: ArrayLike, system: System) -> StateVector:
        return as_state_vector(state, getattr(system, "state_dimension", None))

    def _propagate(
        self, x: StateVector, start_time: float, end_time: float, system: System
    ) -> StateVector:
        times = self._step_times(start_time, end_time)
        for t_prev, t_next in zip(times[:-1], times[1:]):
            x = self._step(system, t_prev, x, t_next - t_prev).state
        return x

    def integrate_time(
        self,
        state: ArrayLike,
        start_time: float,
        end_time: float,
        system: System,
    ) -> StateVector:
        """Propagate *state* from *start_time* to *end_time*.

        Integrates backward when ``end_time < start_time``.

        Args:
            state: Initial state vector.
            start_time: Time of *state* [s].
            end_time: Target time [s].
            system: Right-hand side ``f(t, x) -> dx/dt``.

        Returns:
            StateVector: State at *end_time*.

        Raises:
            ValueError: If *state* is not a finite 1-D vector of the
                system's dimension.
        """
        x = self._initial_state(state, system)
        start_time, end_time = float(start_time), float(end_time)

        logger.debug(
            "Integrating %d-element state from t=%s to t=%s with %s",
            x.shape[0], start_time, end_time, self._config.stepper,
        )
        return self._propagate(x, start_time, end_time, system)

    def integrate_duration(
        self, state: ArrayLike, duration: float, system: System
    ) -> StateVector:
        """Propagate *state* for *duration* seconds starting at ``t = 0``."""
        return self.integrate_time(state, 0.0, duration, system)

    def integrate_times(
        self,
        state: ArrayLike,
        start_time: float,
        times: Sequence[float] | ArrayLike,
        system: System,
    ) -> Array:
        """Propagate *state* and collect it at each requested time.

        Args:
            state: Initial state vector.
            start_time: Time of *state* [s].
            times: Output times.  Must be monotonic in the propagation
                direction, starting from *start_time*.
            system: Right-hand side ``f(t, x) -> dx/dt``.

        Returns:
            Array: States, one row per output time.

        Raises:
            ValueError: If *times* is empty or not monotonic.
        """
        x = self._initial_state(state, system)
        start_time = float(start_time)
        output_times = [float(t) for t in jnp.ravel(jnp.asarray(times))]
        if not output_times:
            raise ValueError("times must contain at least one value")

        deltas = [b - a for a, b in zip([start_time] + output_times[:-1], output_times)]
        if not (all(d >= 0.0 for d in deltas) or all(d <= 0.0 for d in deltas)):
            raise ValueError(f"times must be monotonic from start time {start_time}")

        logger.debug(
            "Integrating %d-element state from t=%s through %d output times",
            x.shape[0], start_time, len(output_times),
        )

        states = []
        t = start_time
        for t_out in output_times:
            x = self._propagate(x, t, t_out, system)
            states.append(x)
            t = t_out
        return jnp.stack(states)

    def integrate_time_with_condition(
        self,
        state: ArrayLike,
        start_time: float,
        end_time: float,
        system: System,
        condition: EventCondition,
    ) -> ConditionSolution:
        """Propagate until *condition* is satisfied or *end_time* is reached.

        After each step the condition is checked on the (current, previous)
        pair.  When it holds, the step is bisected: the solution is the
        earliest sample found (in the propagation direction) at which the
        condition holds, within ``root_tolerance``.

        Args:
            state: Initial state vector.
            start_time: Time of *state* [s].
            end_time: Time at which to give up [s].
            system: Right-hand side ``f(t, x) -> dx/dt``.
            condition: Event condition to detect.

        Returns:
            ConditionSolution: The event state and time, or the state at
                *end_time* with ``condition_is_satisfied=False``.
        """
        if not isinstance(condition, EventCondition):
            raise TypeError(f"{condition!r} is not an EventCondition")

        x = self._initial_state(state, system)
        start_time, end_time = float(start_time), float(end_time)

        logger.debug(
            "Integrating from t=%s to t=%s until '%s'", start_time, end_time, condition.name,
        )

        times = self._step_times(start_time, end_time)
        for t_prev, t_next in zip(times[:-1], times[1:]):
            x_next = self._step(system, t_prev, x, t_next - t_prev).state
            if condition.is_satisfied(x_next, t_next, x, t_prev):
                return self._refine(system, condition, t_prev, x, t_next - t_prev, x_next)
            x = x_next

        return ConditionSolution(
            state=x,
            time=end_time,
            condition_is_satisfied=False,
            iteration_count=0,
            root_solver_has_converged=False,
        )

    def _refine(
        self,
        system: System,
        condition: EventCondition,
        t0: float,
        x0: StateVector,
        dt: float,
        x_dt: StateVector,
    ) -> ConditionSolution:
        # Offsets from t0: the condition fails on [t0, t0 + lo] and holds at t0 + hi.
        lo, hi = 0.0, dt
        x_lo, x_hi = x0, x_dt
        tolerance = self._config.root_tolerance

        iterations = 0
        while abs(hi - lo) > tolerance and iterations < self._config.max_root_iterations:
            mid = 0.5 * (lo + hi)
            x_mid = self._step(system, t0, x0, mid).state
            if condition.is_satisfied(x_mid, t0 + mid, x_lo, t0 + lo):
                hi, x_hi = mid, x_mid
            else:
                lo, x_lo = mid, x_mid
            iterations += 1

        converged = abs(hi - lo) <= tolerance
        time = t0 + hi

        logger.info(
            "Event condition '%s' satisfied at t=%s after %d iterations",
            condition.name, time, iterations,
        )
        if not converged:
            logger.warning(
                "Root refinement of '%s' did not converge: bracket %.3e s > tolerance %.3e s",
                condition.name, abs(hi - lo), tolerance,
            )

        return ConditionSolution(
            state=x_hi,
            time=time,
            condition_is_satisfied=True,
            iteration_count=iterations,
            root_solver_has_converged=converged,
        )
