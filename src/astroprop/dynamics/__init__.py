"""Composable dynamics models.

Each model adds one term to the state derivative:

- :class:`PositionDerivative` -- velocity into the position derivative
- :class:`CentralBodyGravity` -- primary body's field
- :class:`ThirdBodyGravity` -- perturbing body's third-body pull

:func:`get_dynamical_equations` combines any collection of models (built-in
or user-defined, see :class:`Dynamics`) into the ``f(t, x)`` callable the
integrators consume.
"""

from ._base import Dynamics
from .central_body_gravity import CentralBodyGravity
from .equations import DynamicalEquations, get_dynamical_equations
from .position_derivative import PositionDerivative
from .third_body_gravity import ThirdBodyGravity

__all__ = [
    "Dynamics",
    "PositionDerivative",
    "CentralBodyGravity",
    "ThirdBodyGravity",
    "DynamicalEquations",
    "get_dynamical_equations",
]
