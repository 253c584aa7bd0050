"""Gravitational acceleration of the primary (central) body."""

from __future__ import annotations

import logging

from jax import Array

from astroprop._display import Describable, format_description
from astroprop.environment.celestial import Celestial
from astroprop.epoch import Epoch
from astroprop.errors import UndefinedError
from astroprop.state import CARTESIAN_STATE_DIMENSION

logger = logging.getLogger(__name__)


class CentralBodyGravity(Describable):
    """Adds the primary body's field acceleration to the velocity derivatives.

    The field is evaluated with the body's own
    :class:`~astroprop.environment.GravitationalModel` at the current
    position, in the frame the state is expressed in.

    The dynamics is defined exactly when *celestial* is.  Applying an
    undefined one raises :class:`~astroprop.errors.UndefinedError`.

    Args:
        celestial: The primary body.
        name: Display name. Default: ``"Central Body Gravity [<body>]"``.

    Raises:
        UndefinedError: If *celestial* is ``None`` or its gravitational
            model is undefined.

    Examples:
        ```python
        from astroprop.dynamics import CentralBodyGravity
        from astroprop.environment import earth
        gravity = CentralBodyGravity(earth())
        gravity.is_defined()  # True
        ```
    """

    state_dimension = CARTESIAN_STATE_DIMENSION

    def __init__(self, celestial: Celestial, name: str | None = None) -> None:
        if celestial is None:
            raise UndefinedError("Celestial")
        if not celestial.gravitational_model.is_defined():
            raise UndefinedError("Gravitational Model")

        self._celestial = celestial
        self._name = name if name is not None else f"Central Body Gravity [{celestial.name}]"
        logger.debug("Created %s", self._name)

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    @property
    def celestial(self) -> Celestial:
        return self._celestial

    def is_defined(self) -> bool:
        return self._celestial.is_defined()

    def apply_contribution(self, state: Array, derivative: Array, epc: Epoch) -> Array:
        if not self.is_defined():
            raise UndefinedError("Celestial")
        a = self._celestial.gravitational_acceleration(state[0:3], epc)
        return derivative.at[3:6].add(a)

    def describe(self, display_decorator: bool = True) -> str:
        return format_description(
            "Central Body Gravitational Dynamics",
            [
                ("Name", self._name),
                ("Defined", self.is_defined()),
                ("Celestial", self._celestial.name),
                ("Gravitational Model", self._celestial.gravitational_model.type),
            ],
            display_decorator,
        )

    def __repr__(self) -> str:
        return f"CentralBodyGravity(celestial={self._celestial.name!r}, name={self._name!r})"
