"""Third-body gravitational perturbation of a perturbing body.

The acceleration is the difference between the perturbing body's pull on
the object and its pull on the frame origin, both from the body's
ephemeris position at the same instant.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 69.
"""

from __future__ import annotations

import logging

from jax import Array

from astroprop._display import Describable, format_description
from astroprop.environment.celestial import Celestial
from astroprop.environment.gravity import accel_third_body
from astroprop.epoch import Epoch
from astroprop.errors import UndefinedError, UnsupportedConfigurationError
from astroprop.state import CARTESIAN_STATE_DIMENSION

logger = logging.getLogger(__name__)


class ThirdBodyGravity(Describable):
    """Adds a perturbing body's point-mass third-body acceleration.

    Args:
        celestial: The perturbing body.  Must have an ephemeris.
        name: Display name. Default: ``"Third Body Gravity [<body>]"``.

    Raises:
        UndefinedError: If *celestial* is ``None`` or its gravitational
            model is undefined.
        UnsupportedConfigurationError: If *celestial* is the origin of the
            propagation frame (the primary body perturbing itself).

    Examples:
        ```python
        import jax.numpy as jnp
        from astroprop import Epoch
        from astroprop.dynamics import ThirdBodyGravity
        from astroprop.environment import moon
        dynamics = ThirdBodyGravity(moon())
        dxdt = dynamics.apply_contribution(
            jnp.array([7e6, 0.0, 0.0, 0.0, 0.0, 0.0]),
            jnp.zeros(6),
            Epoch(2021, 3, 20, 12, 0, 0),
        )
        ```
    """

    state_dimension = CARTESIAN_STATE_DIMENSION

    def __init__(self, celestial: Celestial, name: str | None = None) -> None:
        if celestial is None:
            raise UndefinedError("Celestial")
        if not celestial.gravitational_model.is_defined():
            raise UndefinedError("Gravitational Model")
        if celestial.is_frame_origin:
            raise UnsupportedConfigurationError(
                f"Cannot calculate third body acceleration for the {celestial.name} yet."
            )

        self._celestial = celestial
        self._name = name if name is not None else f"Third Body Gravity [{celestial.name}]"
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
        r_body = self._celestial.position(epc)
        a = accel_third_body(
            state[0:3], r_body, self._celestial.gravitational_model.gravitational_parameter
        )
        return derivative.at[3:6].add(a)

    def describe(self, display_decorator: bool = True) -> str:
        return format_description(
            "Third Body Gravitational Dynamics",
            [
                ("Name", self._name),
                ("Defined", self.is_defined()),
                ("Celestial", self._celestial.name),
            ],
            display_decorator,
        )

    def __repr__(self) -> str:
        return f"ThirdBodyGravity(celestial={self._celestial.name!r}, name={self._name!r})"
