"""Numerical solvers that propagate dynamical systems through time.

- :class:`NumericalSolver` -- fixed-step propagation, multi-output
  propagation and event detection
- :class:`SolverConfig` / :class:`StepperType` -- solver settings
- :class:`ConditionSolution` -- result of event-aware propagation
"""

from .config import SolverConfig, StepperType
from .numerical_solver import ConditionSolution, NumericalSolver

__all__ = [
    "StepperType",
    "SolverConfig",
    "NumericalSolver",
    "ConditionSolution",
]
