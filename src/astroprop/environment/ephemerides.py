"""Low-precision analytic Sun and Moon ephemerides.

Geocentric positions in EME2000, in metres, from the truncated series of
Montenbruck & Gill (section 3.3.2).  Accuracy is about 0.1 deg in
direction and well under 1% in distance, ample for third-body
perturbations on near-Earth orbits.

Time argument: UTC is used in place of TT.  The ~69 s offset shifts the
Moon by ~0.01 deg.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 70-73.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array

from astroprop.config import get_dtype
from astroprop.constants import AS2RAD, DEG2RAD, JD_J2000, SECONDS_PER_DAY
from astroprop.epoch import Epoch

_OBLIQUITY_J2000 = 23.43929111 * DEG2RAD

# Periodic terms of the lunar theory.  Each row is
# (coefficient, l, l', F, D): the coefficient multiplies sin (or cos) of
# the listed integer combination of the fundamental arguments
#   l  -- Moon mean anomaly
#   l' -- Sun mean anomaly
#   F  -- Moon mean argument of latitude
#   D  -- mean elongation of the Moon from the Sun

# Longitude perturbation [arcsec], sine terms
_MOON_LONGITUDE = (
    (22640.0, 1, 0, 0, 0),
    (-4586.0, 1, 0, 0, -2),
    (2370.0, 0, 0, 0, 2),
    (769.0, 2, 0, 0, 0),
    (-668.0, 0, 1, 0, 0),
    (-412.0, 0, 0, 2, 0),
    (-212.0, 2, 0, 0, -2),
    (-206.0, 1, 1, 0, -2),
    (192.0, 1, 0, 0, 2),
    (-165.0, 0, 1, 0, -2),
    (-125.0, 0, 0, 0, 1),
    (-110.0, 1, 1, 0, 0),
    (148.0, 1, -1, 0, 0),
    (-55.0, 0, 0, 2, -2),
)

# Latitude correction N [arcsec], sine terms
_MOON_LATITUDE = (
    (-526.0, 0, 0, 1, -2),
    (44.0, 1, 0, 1, -2),
    (-31.0, -1, 0, 1, -2),
    (-23.0, 0, 1, 1, -2),
    (11.0, 0, -1, 1, -2),
    (-25.0, -2, 0, 1, 0),
    (21.0, -1, 0, 1, 0),
)

# Distance [m], cosine terms about a mean of 385000 km
_MOON_DISTANCE = (
    (-20905e3, 1, 0, 0, 0),
    (-3699e3, -1, 0, 0, 2),
    (-2956e3, 0, 0, 0, 2),
    (-570e3, 2, 0, 0, 0),
    (246e3, 2, 0, 0, -2),
    (-205e3, 0, 1, 0, -2),
    (-171e3, 1, 0, 0, 2),
    (-152e3, 1, 1, 0, -2),
)


def _julian_centuries_from_j2000(epc: Epoch) -> jax.Array:
    """Julian centuries since J2000.0, formed from the split day/seconds."""
    _float = get_dtype()
    days = (epc._jd - jnp.int32(JD_J2000)).astype(_float)
    days = days + epc._compensated_seconds() / _float(SECONDS_PER_DAY)
    return days / _float(36525.0)


def _revolutions(phase0: float, rate: float, T: Array) -> Array:
    """Fractional part of a linear phase, in revolutions."""
    _float = get_dtype()
    x = _float(phase0) + _float(rate) * T
    return x - jnp.floor(x)


def _series(terms, arguments: Array, fn) -> Array:
    table = jnp.asarray(terms, dtype=get_dtype())
    return jnp.sum(table[:, 0] * fn(table[:, 1:] @ arguments))


def _ecliptic_to_eme2000(r: Array) -> Array:
    """Rotate a J2000 ecliptic vector into the equator (about x by -obliquity)."""
    c = jnp.cos(_OBLIQUITY_J2000)
    s = jnp.sin(_OBLIQUITY_J2000)
    return jnp.array([r[0], c * r[1] - s * r[2], s * r[1] + c * r[2]])


def _spherical_to_cartesian(distance: Array, longitude: Array, latitude: Array) -> Array:
    cos_lat = jnp.cos(latitude)
    return distance * jnp.array([
        jnp.cos(longitude) * cos_lat,
        jnp.sin(longitude) * cos_lat,
        jnp.sin(latitude),
    ])


def sun_position(epc: Epoch) -> Array:
    """Geocentric position of the Sun in EME2000.

    Args:
        epc: Epoch of evaluation.

    Returns:
        Position vector [m], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from astroprop import Epoch
        from astroprop.environment import sun_position
        r_sun = sun_position(Epoch(2021, 3, 20, 12, 0, 0))
        float(jnp.linalg.norm(r_sun))  # ~1 AU
        ```
    """
    _float = get_dtype()
    two_pi = _float(2.0 * jnp.pi)
    T = _julian_centuries_from_j2000(epc)

    M = two_pi * _revolutions(0.9931267, 99.9973583, T)

    # Equation of centre [arcsec]
    centre = _float(6892.0) * jnp.sin(M) + _float(72.0) * jnp.sin(_float(2.0) * M)
    longitude = two_pi * _float(0.7859444) + M + centre * _float(AS2RAD)

    distance = (
        _float(149.619e9)
        - _float(2.499e9) * jnp.cos(M)
        - _float(0.021e9) * jnp.cos(_float(2.0) * M)
    )

    return _ecliptic_to_eme2000(_spherical_to_cartesian(distance, longitude, _float(0.0)))


def moon_position(epc: Epoch) -> Array:
    """Geocentric position of the Moon in EME2000.

    Args:
        epc: Epoch of evaluation.

    Returns:
        Position vector [m], shape ``(3,)``.
    """
    _float = get_dtype()
    two_pi = _float(2.0 * jnp.pi)
    T = _julian_centuries_from_j2000(epc)

    mean_longitude = _revolutions(0.606433, 1336.851344, T)
    arguments = two_pi * jnp.array([
        _revolutions(0.374897, 1325.552410, T),  # l
        _revolutions(0.993133, 99.997361, T),    # l'
        _revolutions(0.259086, 1342.227825, T),  # F
        _revolutions(0.827361, 1236.853086, T),  # D
    ])
    l_sun, F = arguments[1], arguments[2]

    dL = _series(_MOON_LONGITUDE, arguments, jnp.sin)
    longitude = two_pi * (mean_longitude + dL / _float(1296.0e3))

    S = F + (dL + _float(412.0) * jnp.sin(_float(2.0) * F) + _float(541.0) * jnp.sin(l_sun)) * _float(AS2RAD)
    N = _series(_MOON_LATITUDE, arguments, jnp.sin)
    latitude = (_float(18520.0) * jnp.sin(S) + N) * _float(AS2RAD)

    distance = _float(385000e3) + _series(_MOON_DISTANCE, arguments, jnp.cos)

    return _ecliptic_to_eme2000(_spherical_to_cartesian(distance, longitude, latitude))
