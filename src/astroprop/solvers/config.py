"""Solver configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class StepperType(Enum):
    """Single-step integration scheme used by :class:`NumericalSolver`."""

    RUNGE_KUTTA_4 = "rk4"

    def __str__(self) -> str:
        return _STEPPER_DISPLAY[self]


_STEPPER_DISPLAY = {
    StepperType.RUNGE_KUTTA_4: "Runge-Kutta 4",
}


@dataclass(frozen=True)
class SolverConfig:
    """Settings of a :class:`~astroprop.solvers.NumericalSolver`.

    Attributes:
        stepper: Integration scheme. Default: ``RUNGE_KUTTA_4``.
        step_size: Fixed step length [s]. Must be positive. Default: 10.0.
        root_tolerance: Width [s] below which event bisection stops.
            Must be positive. Default: 1e-6.
        max_root_iterations: Maximum number of bisection iterations.
            Must be at least 1. Default: 100.

    Examples:
        ```python
        from astroprop.solvers import SolverConfig
        config = SolverConfig(step_size=5.0)
        ```
    """

    stepper: StepperType = StepperType.RUNGE_KUTTA_4
    step_size: float = 10.0
    root_tolerance: float = 1e-6
    max_root_iterations: int = 100

    def __post_init__(self) -> None:
        if not isinstance(self.stepper, StepperType):
            raise ValueError(f"stepper must be a StepperType, got {self.stepper!r}")
        if not (math.isfinite(self.step_size) and self.step_size > 0.0):
            raise ValueError(f"step_size must be positive and finite, got {self.step_size}")
        if not (math.isfinite(self.root_tolerance) and self.root_tolerance > 0.0):
            raise ValueError(
                f"root_tolerance must be positive and finite, got {self.root_tolerance}"
            )
        if self.max_root_iterations < 1:
            raise ValueError(
                f"max_root_iterations must be at least 1, got {self.max_root_iterations}"
            )
