"""Gravitational field models.

Provides the point-mass and J2 zonal field of a body, and the third-body
(indirect) point-mass acceleration.  All inputs and outputs use SI base
units (metres, metres/second squared).

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 56-69.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroprop.config import get_dtype
from astroprop.errors import UndefinedError


def accel_point_mass(r_relative: ArrayLike, gm: float) -> Array:
    """Acceleration due to a point mass located at the origin.

    Args:
        r_relative: Position of the object relative to the attracting
            body [m].  Shape ``(3,)``.
        gm: Gravitational parameter of the attracting body [m^3/s^2].

    Returns:
        Acceleration vector ``-gm * r / |r|^3`` [m/s^2], shape ``(3,)``.
    """
    r = jnp.asarray(r_relative, dtype=get_dtype())
    r_norm = jnp.linalg.norm(r)
    return -gm * r / r_norm**3


def accel_j2(r_relative: ArrayLike, gm: float, radius: float, j2: float) -> Array:
    """Acceleration due to the J2 zonal harmonic alone.

    The body's rotation axis is taken to be the z-axis of the frame the
    position is expressed in.

    Args:
        r_relative: Position of the object relative to the body [m].
        gm: Gravitational parameter [m^3/s^2].
        radius: Reference radius of the harmonic expansion [m].
        j2: Unnormalized J2 coefficient.

    Returns:
        Acceleration vector [m/s^2], shape ``(3,)``.
    """
    r = jnp.asarray(r_relative, dtype=get_dtype())
    r_norm = jnp.linalg.norm(r)
    z2_r2 = (r[2] / r_norm) ** 2
    factor = -1.5 * j2 * gm * radius**2 / r_norm**5
    return factor * jnp.array([
        r[0] * (1.0 - 5.0 * z2_r2),
        r[1] * (1.0 - 5.0 * z2_r2),
        r[2] * (3.0 - 5.0 * z2_r2),
    ])


def accel_third_body(r_object: ArrayLike, r_body: ArrayLike, gm: float) -> Array:
    """Point-mass acceleration of a perturbing body, relative to the frame origin.

    Difference between the body's pull on the object and its pull on the
    frame origin (the primary body):

    .. math::

        a = GM \\left( \\frac{r_b - r}{|r_b - r|^3} - \\frac{r_b}{|r_b|^3} \\right)

    Args:
        r_object: Position of the object [m].  Shape ``(3,)``.
        r_body: Position of the perturbing body [m].  Shape ``(3,)``.
        gm: Gravitational parameter of the perturbing body [m^3/s^2].

    Returns:
        Acceleration vector [m/s^2], shape ``(3,)``.
    """
    _float = get_dtype()
    r = jnp.asarray(r_object, dtype=_float)
    r_b = jnp.asarray(r_body, dtype=_float)

    d = r_b - r
    return gm * (d / jnp.linalg.norm(d) ** 3 - r_b / jnp.linalg.norm(r_b) ** 3)


class GravitationalModelType(Enum):
    """Fidelity of a body's gravitational field."""

    UNDEFINED = "undefined"
    SPHERICAL = "spherical"
    J2 = "j2"

    def __str__(self) -> str:
        return _MODEL_TYPE_DISPLAY[self]


_MODEL_TYPE_DISPLAY = {
    GravitationalModelType.UNDEFINED: "Undefined",
    GravitationalModelType.SPHERICAL: "Spherical",
    GravitationalModelType.J2: "J2",
}


@dataclass(frozen=True)
class GravitationalModel:
    """Gravitational field of a single body.

    Args:
        type: Field fidelity.
        gravitational_parameter: GM [m^3/s^2].  Required unless
            *type* is ``UNDEFINED``.
        equatorial_radius: Reference radius [m].  Required for ``J2``.
        j2: Unnormalized J2 coefficient.  Required for ``J2``.

    Examples:
        ```python
        from astroprop.constants import GM_EARTH
        from astroprop.environment import GravitationalModel
        model = GravitationalModel.spherical(GM_EARTH)
        model.is_defined()  # True
        ```
    """

    type: GravitationalModelType
    gravitational_parameter: float | None = None
    equatorial_radius: float | None = None
    j2: float | None = None

    def __post_init__(self) -> None:
        if self.type == GravitationalModelType.UNDEFINED:
            return
        if self.gravitational_parameter is None or self.gravitational_parameter <= 0.0:
            raise ValueError(
                f"gravitational_parameter must be positive for a {self.type} model, "
                f"got {self.gravitational_parameter}"
            )
        if self.type == GravitationalModelType.J2:
            if self.equatorial_radius is None or self.equatorial_radius <= 0.0:
                raise ValueError(
                    f"equatorial_radius must be positive for a J2 model, "
                    f"got {self.equatorial_radius}"
                )
            if self.j2 is None:
                raise ValueError("j2 must be provided for a J2 model")

    @staticmethod
    def undefined() -> GravitationalModel:
        """Preset: a field that cannot be evaluated."""
        return GravitationalModel(GravitationalModelType.UNDEFINED)

    @staticmethod
    def spherical(gravitational_parameter: float) -> GravitationalModel:
        """Preset: point-mass field."""
        return GravitationalModel(GravitationalModelType.SPHERICAL, gravitational_parameter)

    @staticmethod
    def j2_zonal(
        gravitational_parameter: float, equatorial_radius: float, j2: float
    ) -> GravitationalModel:
        """Preset: point mass plus the J2 zonal term."""
        return GravitationalModel(
            GravitationalModelType.J2, gravitational_parameter, equatorial_radius, j2
        )

    def is_defined(self) -> bool:
        return self.type != GravitationalModelType.UNDEFINED

    def acceleration(self, r_relative: ArrayLike) -> Array:
        """Field acceleration at a position relative to the body's centre.

        Args:
            r_relative: Position relative to the body [m], shape ``(3,)``.

        Returns:
            Acceleration vector [m/s^2], shape ``(3,)``.

        Raises:
            UndefinedError: If the model type is ``UNDEFINED``.
        """
        if not self.is_defined():
            raise UndefinedError("Gravitational Model")

        a = accel_point_mass(r_relative, self.gravitational_parameter)
        if self.type == GravitationalModelType.J2:
            a = a + accel_j2(
                r_relative, self.gravitational_parameter, self.equatorial_radius, self.j2
            )
        return a
