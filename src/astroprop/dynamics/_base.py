"""The contract every force/acceleration model satisfies.

A dynamics model adds its own term to the time-derivative of the state
vector.  Models are independent: each owns its parameters and none shares
state with another, so they are expressed as a structural
:class:`~typing.Protocol` rather than a base class.  Any object with these
members can take part in a :class:`~astroprop.dynamics.DynamicalEquations`
composition.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from jax import Array

from astroprop.epoch import Epoch


@runtime_checkable
class Dynamics(Protocol):
    """Structural interface of a dynamics model.

    Attributes:
        state_dimension: Length of the state vector the model reads and
            writes, or ``None`` if it works with any length.
    """

    state_dimension: int | None

    @property
    def name(self) -> str: ...

    def set_name(self, name: str) -> None: ...

    def is_defined(self) -> bool: ...

    def apply_contribution(self, state: Array, derivative: Array, epc: Epoch) -> Array:
        """Return *derivative* with this model's contribution added.

        Args:
            state: Current state vector.
            derivative: Accumulated derivative from the models applied so far.
            epc: Absolute instant of the evaluation.

        Returns:
            The updated derivative accumulator.
        """
        ...

    def describe(self, display_decorator: bool = True) -> str: ...
