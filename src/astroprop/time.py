"""Calendar / Julian Date conversions used by :class:`~astroprop.epoch.Epoch`.

These run eagerly on Python numbers: they are only needed when an Epoch is
constructed from calendar components or rendered back to a string, never
inside a traced dynamics evaluation.
"""

from __future__ import annotations

import math

from .constants import JD_MJD_OFFSET


def caldate_to_mjd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a calendar date to Modified Julian Date. Algorithm is only valid from year 1583 onward.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the calendar date. Default: ``0``
        minute (int): Minute of the calendar date. Default: ``0``
        second (float): Second of the calendar date. Default: ``0.0``

    Returns:
        float: Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """
    if month <= 2:
        year -= 1
        month += 12

    b = year // 400 - year // 100 + year // 4
    mjd = 365 * year - 679004 + b + math.floor(30.6001 * (month + 1)) + day

    return mjd + (hour + (minute + second / 60.0) / 60.0) / 24.0


def caldate_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a calendar date to Julian Date.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the calendar date. Default: ``0``
        minute (int): Minute of the calendar date. Default: ``0``
        second (float): Second of the calendar date. Default: ``0.0``

    Returns:
        float: Julian Date.
    """
    return caldate_to_mjd(year, month, day, hour, minute, second) + JD_MJD_OFFSET


def jd_to_caldate(jd: float) -> tuple[int, int, int, int, int, float]:
    """Convert Julian Date to calendar date.

    Uses the algorithm from Montenbruck & Gill for Gregorian calendar dates.
    The fractional day is resolved to whole microseconds.

    Args:
        jd (float): Julian Date.

    Returns:
        tuple: (year, month, day, hour, minute, second) where second
            includes the fractional part.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
           Applications*, 2012, p. 322.
    """
    jd_shifted = jd + 0.5
    z = math.floor(jd_shifted)
    f = jd_shifted - z

    if z < 2299161:
        a = z
    else:
        alpha = (100 * z - 186721625) // 3652425
        a = z + 1 + alpha - alpha // 4

    b = a + 1524
    c = (100 * b - 12210) // 36525
    d = (36525 * c) // 100
    e = ((b - d) * 10000) // 306001

    day = b - d - (306001 * e) // 10000
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    total_us = round(f * 86400e6)
    hour, total_us = divmod(total_us, 3600 * 10**6)
    minute, total_us = divmod(total_us, 60 * 10**6)

    return year, month, day, hour, minute, total_us / 1e6
