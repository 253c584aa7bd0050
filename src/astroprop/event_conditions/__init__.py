"""Event conditions evaluated along a propagated trajectory.

- :class:`Criteria` / :func:`evaluate_criteria` -- sign and crossing rules
- :class:`RealEventCondition` -- rule applied to a scalar monitor function
- :class:`Conjunctive` / :class:`Disjunctive` -- logical AND / OR of
  conditions

Every condition answers ``is_satisfied(current_state, current_time,
previous_state, previous_time)``.
"""

from ._base import EventCondition
from .logical import Conjunctive, Disjunctive, LogicalConnective
from .real import Criteria, RealEventCondition, evaluate_criteria

__all__ = [
    "EventCondition",
    "Criteria",
    "evaluate_criteria",
    "RealEventCondition",
    "LogicalConnective",
    "Conjunctive",
    "Disjunctive",
]
