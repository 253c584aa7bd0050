"""Kinematic term of a Cartesian state: d(position)/dt = velocity."""

from __future__ import annotations

from jax import Array

from astroprop._display import Describable, format_description
from astroprop.epoch import Epoch
from astroprop.state import CARTESIAN_STATE_DIMENSION


class PositionDerivative(Describable):
    """Copies the velocity components into the position-derivative components.

    Contributes nothing to the velocity derivatives.

    Args:
        name: Display name. Default: ``"Position Derivative"``.
    """

    state_dimension = CARTESIAN_STATE_DIMENSION

    def __init__(self, name: str = "Position Derivative") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def is_defined(self) -> bool:
        return True

    def apply_contribution(self, state: Array, derivative: Array, epc: Epoch) -> Array:
        return derivative.at[0:3].add(state[3:6])

    def describe(self, display_decorator: bool = True) -> str:
        return format_description(
            "Position Derivative Dynamics",
            [("Name", self._name), ("Defined", self.is_defined())],
            display_decorator,
        )

    def __repr__(self) -> str:
        return f"PositionDerivative(name={self._name!r})"
