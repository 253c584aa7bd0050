"""Instants in time with compensated arithmetic.

An :class:`Epoch` is held as three numbers:

- ``_jd``: integer Julian Day number (``jnp.int32``); Julian days start at noon,
- ``_seconds``: seconds elapsed since the start of that Julian day,
- ``_kahan_c``: Kahan compensator of ``_seconds``.

Dynamics evaluate ``reference_epoch + t`` at every integrator stage.
Keeping the day number separate and compensating the seconds leaves the
rounding error of those additions bounded (~1e-11 s in float64) instead of
growing with each call.

Epochs are registered as JAX pytrees and ``epoch + t`` is traceable, so a
composed right-hand side can be compiled with ``jax.jit``.  Calendar
conversions (``caldate``, ``str``) need concrete values.
"""

from __future__ import annotations

import math
import re

import jax
import jax.numpy as jnp

from .config import get_dtype, get_epoch_eq_tolerance
from .constants import JD_MJD_OFFSET, SECONDS_PER_DAY
from .time import caldate_to_jd, jd_to_caldate

# YYYY-MM-DD[THH:MM:SS[.fff]][Z]
_ISO_8601 = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})'
    r'(?:T(\d{2}):(\d{2}):(\d{2}(?:\.\d+)?)Z?)?$'
)


def _parse_iso(string: str) -> tuple[int, int, int, int, int, float]:
    match = _ISO_8601.match(string)
    if match is None:
        raise ValueError(f'Invalid Epoch string: "{string}" is not ISO 8601 compliant')

    year, month, day, hour, minute, second = match.groups()
    if hour is None:
        return int(year), int(month), int(day), 0, 0, 0.0
    return int(year), int(month), int(day), int(hour), int(minute), float(second)


class Epoch:
    """A single UTC instant.

    Constructors::

        Epoch(2021, 3, 20)                  # date, midnight
        Epoch(2021, 3, 20, 12, 0, 0.0)      # date and time of day
        Epoch("2021-03-20T12:00:00Z")       # ISO 8601
        Epoch(other)                        # copy

    Arithmetic: ``epoch + seconds`` and ``epoch - seconds`` give Epochs,
    ``epoch - epoch`` gives seconds.  Comparisons use the difference, with
    equality to within :func:`~astroprop.config.get_epoch_eq_tolerance`.
    """

    __slots__ = ('_jd', '_seconds', '_kahan_c')

    def __init__(self, *args: int | float | str | Epoch) -> None:
        if len(args) == 1 and isinstance(args[0], Epoch):
            other = args[0]
            self._jd, self._seconds, self._kahan_c = other._jd, other._seconds, other._kahan_c
            return

        if len(args) == 1 and isinstance(args[0], str):
            components = _parse_iso(args[0])
        elif 3 <= len(args) <= 6:
            components = args
        elif len(args) == 1:
            raise ValueError(f"Cannot construct Epoch from {type(args[0])}")
        else:
            raise ValueError(
                "Epoch requires date components (3-6 args), a string, or an Epoch"
            )

        self._set_calendar(*components)

    @classmethod
    def _from_internal(cls, jd, seconds, kahan_c) -> Epoch:
        """Wrap already-normalized components without validation."""
        obj = object.__new__(cls)
        obj._jd = jd
        obj._seconds = seconds
        obj._kahan_c = kahan_c
        return obj

    def _set_calendar(self, year, month, day, hour=0, minute=0, second=0.0) -> None:
        # Midnight falls half-way through a Julian day.
        jd_midnight = caldate_to_jd(year, month, day)
        jd_int = math.floor(jd_midnight)
        seconds = ((jd_midnight - jd_int) * SECONDS_PER_DAY
                   + hour * 3600.0 + minute * 60.0 + second)

        # Normalize in Python so the stored day number is exact.
        extra_days, seconds = divmod(seconds, SECONDS_PER_DAY)

        _float = get_dtype()
        self._jd = jnp.int32(jd_int + int(extra_days))
        self._seconds = _float(seconds)
        self._kahan_c = _float(0.0)

    def _compensated_seconds(self):
        return self._seconds - self._kahan_c

    def _difference(self, other: Epoch):
        dtype = self._seconds.dtype
        days = (self._jd - other._jd).astype(dtype)
        return days * SECONDS_PER_DAY + (self._compensated_seconds() - other._compensated_seconds())

    # Arithmetic

    def __add__(self, delta) -> Epoch:
        """Epoch *delta* seconds later (earlier if negative).

        One Kahan update followed by a floor-based renormalization of the
        day; no Python branching, so *delta* may be a traced value.
        """
        dtype = self._seconds.dtype
        y = jnp.asarray(delta, dtype=dtype) - self._kahan_c
        total = self._seconds + y
        kahan_c = (total - self._seconds) - y

        days = jnp.floor(total / SECONDS_PER_DAY)
        seconds = total - days * jnp.asarray(SECONDS_PER_DAY, dtype=dtype)

        return Epoch._from_internal(self._jd + days.astype(jnp.int32), seconds, kahan_c)

    __radd__ = __add__

    def __sub__(self, other):
        """``epoch - epoch`` in seconds, or ``epoch - seconds`` as an Epoch."""
        if isinstance(other, Epoch):
            return self._difference(other)
        return self + (-jnp.asarray(other, dtype=self._seconds.dtype))

    # Comparison

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.abs(self._difference(other)) < get_epoch_eq_tolerance()

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return ~(self == other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._difference(other) < 0.0

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._difference(other) > 0.0

    def __le__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self < other) | (self == other)

    def __ge__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self > other) | (self == other)

    def __hash__(self):
        return hash((int(self._jd), round(float(self._compensated_seconds()), 6)))

    # Conversions

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Calendar components ``(year, month, day, hour, minute, second)``.

        Needs concrete values; do not call under ``jax.jit``.
        """
        seconds = float(self._compensated_seconds())
        year, month, day, _, _, _ = jd_to_caldate(int(self._jd) + seconds / SECONDS_PER_DAY)

        time_of_day = (seconds + 0.5 * SECONDS_PER_DAY) % SECONDS_PER_DAY
        hour, time_of_day = divmod(time_of_day, 3600.0)
        minute, second = divmod(time_of_day, 60.0)

        return year, month, day, int(hour), int(minute), second

    def jd(self) -> jax.Array:
        """Julian Date as one float (sub-millisecond detail is lost)."""
        return self._jd.astype(self._seconds.dtype) + self._compensated_seconds() / SECONDS_PER_DAY

    def mjd(self) -> jax.Array:
        """Modified Julian Date as one float."""
        return self.jd() - JD_MJD_OFFSET

    def __str__(self):
        year, month, day, hour, minute, second = self.caldate()
        return f'{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:06.3f}Z'

    def __repr__(self):
        return (f'Epoch(_jd={int(self._jd)}, _seconds={float(self._seconds)}, '
                f'_kahan_c={float(self._kahan_c)})')


jax.tree_util.register_pytree_node(
    Epoch,
    lambda e: ((e._jd, e._seconds, e._kahan_c), None),
    lambda _, children: Epoch._from_internal(*children),
)
