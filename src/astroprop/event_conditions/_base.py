"""Base class of all event conditions."""

from __future__ import annotations

from abc import abstractmethod

from jax.typing import ArrayLike

from astroprop._display import Describable


class EventCondition(Describable):
    """A predicate over a (current, previous) pair of state/time samples.

    Evaluation must be pure: ``is_satisfied`` never changes the condition,
    so conditions can be shared between composites and propagations.

    Args:
        name: Display name of the condition.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def is_satisfied(
        self,
        current_state: ArrayLike,
        current_time: float,
        previous_state: ArrayLike | None = None,
        previous_time: float | None = None,
    ) -> bool:
        """Whether the condition holds for this pair of samples.

        Args:
            current_state: State vector at the current sample.
            current_time: Time of the current sample.
            previous_state: State vector at the previous sample.
            previous_time: Time of the previous sample.

        Returns:
            bool: True if the condition is satisfied.
        """

    @abstractmethod
    def describe(self, display_decorator: bool = True) -> str: ...
