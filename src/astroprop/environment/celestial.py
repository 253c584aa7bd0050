"""Celestial bodies as seen by the force models.

A :class:`Celestial` bundles what a force model needs to know about a body:
its gravitational field and where it is.  A body without an ephemeris is
the origin of the frame the propagated state is expressed in (e.g. the
Earth for a geocentric EME2000 state).
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroprop.config import get_dtype
from astroprop.constants import (
    GM_EARTH,
    GM_MOON,
    GM_SUN,
    J2_EARTH,
    R_EARTH,
    R_MOON,
    R_SUN,
)
from astroprop.environment.ephemerides import moon_position, sun_position
from astroprop.environment.gravity import GravitationalModel, GravitationalModelType
from astroprop.epoch import Epoch
from astroprop.errors import UndefinedError

Ephemeris = Callable[[Epoch], Array]


class Celestial:
    """A body with a gravitational field and (optionally) an ephemeris.

    Args:
        name: Body name, e.g. ``"Moon"``.
        gravitational_parameter: GM [m^3/s^2].
        equatorial_radius: Equatorial radius [m].
        gravitational_model: Field model used when evaluating the body's
            gravity.  Defaults to a spherical model built from
            *gravitational_parameter*.
        ephemeris: ``ephemeris(epoch) -> position`` in the propagation
            frame [m].  ``None`` marks the body as the frame origin.

    Raises:
        ValueError: If a defined *gravitational_model* carries a different
            GM than *gravitational_parameter*.
    """

    def __init__(
        self,
        name: str,
        gravitational_parameter: float,
        equatorial_radius: float,
        gravitational_model: GravitationalModel | None = None,
        ephemeris: Ephemeris | None = None,
    ) -> None:
        if gravitational_model is None:
            gravitational_model = GravitationalModel.spherical(gravitational_parameter)
        elif (
            gravitational_model.is_defined()
            and gravitational_model.gravitational_parameter != gravitational_parameter
        ):
            raise ValueError(
                f"gravitational_parameter {gravitational_parameter} of {name} disagrees with "
                f"its gravitational model ({gravitational_model.gravitational_parameter})"
            )

        self._name = name
        self._gravitational_parameter = gravitational_parameter
        self._equatorial_radius = equatorial_radius
        self._gravitational_model = gravitational_model
        self._ephemeris = ephemeris

    @property
    def name(self) -> str:
        return self._name

    @property
    def gravitational_parameter(self) -> float:
        return self._gravitational_parameter

    @property
    def equatorial_radius(self) -> float:
        return self._equatorial_radius

    @property
    def gravitational_model(self) -> GravitationalModel:
        return self._gravitational_model

    @property
    def is_frame_origin(self) -> bool:
        """True when the body sits at the origin of the propagation frame."""
        return self._ephemeris is None

    def is_defined(self) -> bool:
        """True when the field can be evaluated for a named body of positive radius."""
        return (
            bool(self._name)
            and self._equatorial_radius > 0.0
            and self._gravitational_model.is_defined()
        )

    def position(self, epc: Epoch) -> Array:
        """Position of the body's centre at *epc* [m]."""
        if self._ephemeris is None:
            return jnp.zeros(3, dtype=get_dtype())
        return self._ephemeris(epc)

    def gravitational_acceleration(self, r_object: ArrayLike, epc: Epoch) -> Array:
        """Acceleration of the body's field at an absolute position.

        Args:
            r_object: Position in the propagation frame [m], shape ``(3,)``.
            epc: Epoch at which to evaluate the body's position.

        Returns:
            Acceleration vector [m/s^2], shape ``(3,)``.

        Raises:
            UndefinedError: If the gravitational model is undefined.
        """
        if not self._gravitational_model.is_defined():
            raise UndefinedError("Gravitational Model")

        r_relative = jnp.asarray(r_object, dtype=get_dtype()) - self.position(epc)
        return self._gravitational_model.acceleration(r_relative)

    def __str__(self) -> str:
        return (
            f"Celestial(name={self._name}, "
            f"gravitational_model={self._gravitational_model.type}, "
            f"frame_origin={self.is_frame_origin})"
        )

    def __repr__(self) -> str:
        return self.__str__()


def earth(model_type: GravitationalModelType = GravitationalModelType.SPHERICAL) -> Celestial:
    """The Earth as the origin of a geocentric EME2000 frame.

    Args:
        model_type: Gravitational field fidelity.  ``UNDEFINED`` yields a
            body whose field cannot be evaluated.

    Returns:
        Celestial: Earth preset.
    """
    if model_type == GravitationalModelType.UNDEFINED:
        model = GravitationalModel.undefined()
    elif model_type == GravitationalModelType.J2:
        model = GravitationalModel.j2_zonal(GM_EARTH, R_EARTH, J2_EARTH)
    else:
        model = GravitationalModel.spherical(GM_EARTH)
    return Celestial("Earth", GM_EARTH, R_EARTH, model)


def sun() -> Celestial:
    """The Sun with a spherical field and the analytic geocentric ephemeris."""
    return Celestial("Sun", GM_SUN, R_SUN, ephemeris=sun_position)


def moon() -> Celestial:
    """The Moon with a spherical field and the analytic geocentric ephemeris."""
    return Celestial("Moon", GM_MOON, R_MOON, ephemeris=moon_position)
