"""Environment models consumed by the dynamics.

- **Ephemerides**: Low-precision Sun and Moon positions (Montenbruck & Gill)
- **Gravity**: Point-mass, J2 zonal and third-body accelerations, and the
  :class:`GravitationalModel` that selects between them
- **Celestial**: Bodies combining a field model and an ephemeris, plus the
  Earth / Sun / Moon presets
"""

from .celestial import Celestial, earth, moon, sun
from .ephemerides import moon_position, sun_position
from .gravity import (
    GravitationalModel,
    GravitationalModelType,
    accel_j2,
    accel_point_mass,
    accel_third_body,
)

__all__ = [
    # Ephemerides
    "sun_position",
    "moon_position",
    # Gravity
    "accel_point_mass",
    "accel_j2",
    "accel_third_body",
    "GravitationalModel",
    "GravitationalModelType",
    # Celestial bodies
    "Celestial",
    "earth",
    "sun",
    "moon",
]
