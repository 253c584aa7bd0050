"""Logical AND / OR of event conditions.

Composites hold their children in an immutable tuple fixed at
construction.  A child can be shared by several composites (the
structure is a DAG), but a composite can never reference one of its
ancestors, so there are no cycles.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar

from jax.typing import ArrayLike

from astroprop._display import format_description
from astroprop.errors import ConstructionPreconditionError
from astroprop.event_conditions._base import EventCondition


class LogicalConnective(EventCondition):
    """Common construction and diagnostics of :class:`Conjunctive` / :class:`Disjunctive`.

    Args:
        conditions: Child conditions, evaluated in order.  Must be non-empty.
        name: Display name.  Defaults to the connective followed by the
            children's names.

    Raises:
        ConstructionPreconditionError: If *conditions* is empty.
        TypeError: If a child is not an :class:`EventCondition`.
    """

    connective: ClassVar[str] = ""

    def __init__(self, conditions: Iterable[EventCondition], name: str | None = None) -> None:
        conditions = tuple(conditions)
        if not conditions:
            raise ConstructionPreconditionError(
                f"{type(self).__name__} requires at least one event condition"
            )
        for condition in conditions:
            if not isinstance(condition, EventCondition):
                raise TypeError(f"{condition!r} is not an EventCondition")

        if name is None:
            name = f"{self.connective} [{', '.join(c.name for c in conditions)}]"

        super().__init__(name)
        self._conditions = conditions

    @property
    def conditions(self) -> tuple[EventCondition, ...]:
        return self._conditions

    def evaluate_children(
        self,
        current_state: ArrayLike,
        current_time: float,
        previous_state: ArrayLike | None = None,
        previous_time: float | None = None,
    ) -> tuple[bool, ...]:
        """Evaluate every child, without short-circuiting."""
        return tuple(
            c.is_satisfied(current_state, current_time, previous_state, previous_time)
            for c in self._conditions
        )

    def describe(self, display_decorator: bool = True) -> str:
        return format_description(
            f"{self.connective} Event Condition",
            [("Name", self._name)]
            + [(f"Condition {i}", c.name) for i, c in enumerate(self._conditions)],
            display_decorator,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(conditions={list(self._conditions)!r})"


class Conjunctive(LogicalConnective):
    """Satisfied when every child condition is satisfied.

    Examples:
        ```python
        from astroprop.event_conditions import (
            Conjunctive, Criteria, RealEventCondition,
        )
        both = Conjunctive([
            RealEventCondition("x up", Criteria.POSITIVE_CROSSING, lambda x, t: x[0]),
            RealEventCondition("y low", Criteria.STRICTLY_NEGATIVE, lambda x, t: x[1], 0.1),
        ])
        both.is_satisfied([1.0, 0.0], 0.0, [-1.0, 3.0], 1.0)  # True
        ```
    """

    connective = "Conjunctive"

    def is_satisfied(
        self,
        current_state: ArrayLike,
        current_time: float,
        previous_state: ArrayLike | None = None,
        previous_time: float | None = None,
    ) -> bool:
        return all(
            c.is_satisfied(current_state, current_time, previous_state, previous_time)
            for c in self._conditions
        )


class Disjunctive(LogicalConnective):
    """Satisfied when at least one child condition is satisfied."""

    connective = "Disjunctive"

    def is_satisfied(
        self,
        current_state: ArrayLike,
        current_time: float,
        previous_state: ArrayLike | None = None,
        previous_time: float | None = None,
    ) -> bool:
        return any(
            c.is_satisfied(current_state, current_time, previous_state, previous_time)
            for c in self._conditions
        )
