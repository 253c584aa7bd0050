"""
astroprop is a small library for composing orbital force models and propagating satellite states, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    AS2RAD,
    JD_MJD_OFFSET,
    JD_J2000,
    SECONDS_PER_DAY,
    AU,
    R_EARTH,
    GM_EARTH,
    J2_EARTH,
    GM_SUN,
    R_SUN,
    GM_MOON,
    R_MOON,
)

from .config import set_dtype, get_dtype, get_epoch_eq_tolerance
from .epoch import Epoch
from .errors import (
    UndefinedError,
    UnsupportedConfigurationError,
    ConstructionPreconditionError,
)
from .state import StateVector, CARTESIAN_STATE_DIMENSION, as_state_vector

from .environment import (
    Celestial,
    GravitationalModel,
    GravitationalModelType,
    earth,
    sun,
    moon,
    sun_position,
    moon_position,
)

from .dynamics import (
    Dynamics,
    PositionDerivative,
    CentralBodyGravity,
    ThirdBodyGravity,
    DynamicalEquations,
    get_dynamical_equations,
)

from .integrators import StepResult, rk4_step

from .solvers import (
    StepperType,
    SolverConfig,
    NumericalSolver,
    ConditionSolution,
)

from .event_conditions import (
    EventCondition,
    Criteria,
    evaluate_criteria,
    RealEventCondition,
    Conjunctive,
    Disjunctive,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "AS2RAD",
    "JD_MJD_OFFSET",
    "JD_J2000",
    "SECONDS_PER_DAY",
    "AU",
    "R_EARTH",
    "GM_EARTH",
    "J2_EARTH",
    "GM_SUN",
    "R_SUN",
    "GM_MOON",
    "R_MOON",
    # Config
    "set_dtype",
    "get_dtype",
    "get_epoch_eq_tolerance",
    # Time
    "Epoch",
    # Errors
    "UndefinedError",
    "UnsupportedConfigurationError",
    "ConstructionPreconditionError",
    # State
    "StateVector",
    "CARTESIAN_STATE_DIMENSION",
    "as_state_vector",
    # Environment
    "Celestial",
    "GravitationalModel",
    "GravitationalModelType",
    "earth",
    "sun",
    "moon",
    "sun_position",
    "moon_position",
    # Dynamics
    "Dynamics",
    "PositionDerivative",
    "CentralBodyGravity",
    "ThirdBodyGravity",
    "DynamicalEquations",
    "get_dynamical_equations",
    # Integrators
    "StepResult",
    "rk4_step",
    # Solvers
    "StepperType",
    "SolverConfig",
    "NumericalSolver",
    "ConditionSolution",
    # Event conditions
    "EventCondition",
    "Criteria",
    "evaluate_criteria",
    "RealEventCondition",
    "Conjunctive",
    "Disjunctive",
]
