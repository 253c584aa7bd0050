"""Conditions on the sign, or change of sign, of a real-valued monitor.

A :class:`RealEventCondition` evaluates ``evaluator(state, time) - target``
at the current sample (and, for crossing criteria, at the previous sample)
and classifies the value(s) with a :class:`Criteria`.  Classification is
always against zero.

Zero sits on the non-strict side of the crossing tests: a monitor that was
exactly 0 at the previous sample and is positive now has crossed
positively.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from jax.typing import ArrayLike

from astroprop._display import format_description
from astroprop.event_conditions._base import EventCondition

Evaluator = Callable[[ArrayLike, float], float]


class Criteria(Enum):
    """Rule applied to the (previous, current) monitor values."""

    STRICTLY_POSITIVE = "strictly_positive"
    STRICTLY_NEGATIVE = "strictly_negative"
    POSITIVE_CROSSING = "positive_crossing"
    NEGATIVE_CROSSING = "negative_crossing"
    ANY_CROSSING = "any_crossing"

    @property
    def requires_previous(self) -> bool:
        """True for the crossing rules, which compare two samples."""
        return self in _CROSSING_CRITERIA

    def __str__(self) -> str:
        return _CRITERIA_DISPLAY[self]


_CROSSING_CRITERIA = frozenset({
    Criteria.POSITIVE_CROSSING,
    Criteria.NEGATIVE_CROSSING,
    Criteria.ANY_CROSSING,
})

_CRITERIA_DISPLAY = {
    Criteria.STRICTLY_POSITIVE: "Strictly Positive",
    Criteria.STRICTLY_NEGATIVE: "Strictly Negative",
    Criteria.POSITIVE_CROSSING: "Positive Crossing",
    Criteria.NEGATIVE_CROSSING: "Negative Crossing",
    Criteria.ANY_CROSSING: "Any Crossing",
}


def evaluate_criteria(
    criteria: Criteria,
    current_value: float,
    previous_value: float | None = None,
) -> bool:
    """Classify a monitor value (and its predecessor) against zero.

    Args:
        criteria: Rule to apply.
        current_value: Monitor value at the current sample.
        previous_value: Monitor value at the previous sample.  Required by
            the crossing rules, ignored by the sign rules.

    Returns:
        bool: Whether the rule is satisfied.

    Raises:
        ValueError: If a crossing rule is given no previous value.

    Examples:
        ```python
        from astroprop.event_conditions import Criteria, evaluate_criteria
        evaluate_criteria(Criteria.POSITIVE_CROSSING, 1.0, -1.0)  # True
        evaluate_criteria(Criteria.STRICTLY_NEGATIVE, 1.0)        # False
        ```
    """
    if criteria == Criteria.STRICTLY_POSITIVE:
        return current_value > 0.0
    if criteria == Criteria.STRICTLY_NEGATIVE:
        return current_value < 0.0

    if previous_value is None:
        raise ValueError(f"{criteria} requires a previous value")

    positive = previous_value <= 0.0 and current_value > 0.0
    negative = previous_value >= 0.0 and current_value < 0.0

    if criteria == Criteria.POSITIVE_CROSSING:
        return positive
    if criteria == Criteria.NEGATIVE_CROSSING:
        return negative
    return positive or negative


class RealEventCondition(EventCondition):
    """Event condition on a scalar monitor function.

    Args:
        name: Display name.
        criteria: Sign / crossing rule.
        evaluator: Monitor ``evaluator(state, time) -> real``.
        target: Threshold subtracted from the monitor before
            classification. Default: 0.0.

    Examples:
        ```python
        from astroprop.event_conditions import Criteria, RealEventCondition
        # x-coordinate crosses 0 going positive
        condition = RealEventCondition(
            "x crossing", Criteria.POSITIVE_CROSSING, lambda x, t: x[0], 0.0
        )
        condition.is_satisfied([1.0, 0.0], 1.0, [-1.0, 0.0], 0.0)  # True
        ```
    """

    def __init__(
        self,
        name: str,
        criteria: Criteria,
        evaluator: Evaluator,
        target: float = 0.0,
    ) -> None:
        if not isinstance(criteria, Criteria):
            raise ValueError(f"criteria must be a Criteria member, got {criteria!r}")
        if not callable(evaluator):
            raise ValueError("evaluator must be callable")

        super().__init__(name)
        self._criteria = criteria
        self._evaluator = evaluator
        self._target = float(target)

    @property
    def criteria(self) -> Criteria:
        return self._criteria

    @property
    def evaluator(self) -> Evaluator:
        return self._evaluator

    @property
    def target(self) -> float:
        return self._target

    def evaluate(self, state: ArrayLike, time: float) -> float:
        """Monitor value minus target at one sample."""
        return float(self._evaluator(state, time)) - self._target

    def is_satisfied(
        self,
        current_state: ArrayLike,
        current_time: float,
        previous_state: ArrayLike | None = None,
        previous_time: float | None = None,
    ) -> bool:
        current_value = self.evaluate(current_state, current_time)

        previous_value = None
        if self._criteria.requires_previous and previous_state is not None:
            previous_value = self.evaluate(previous_state, previous_time)

        return evaluate_criteria(self._criteria, current_value, previous_value)

    def describe(self, display_decorator: bool = True) -> str:
        return format_description(
            "Real Event Condition",
            [
                ("Name", self._name),
                ("Criteria", self._criteria),
                ("Target", self._target),
            ],
            display_decorator,
        )

    def __repr__(self) -> str:
        return (
            f"RealEventCondition(name={self._name!r}, criteria={self._criteria!r}, "
            f"target={self._target})"
        )
