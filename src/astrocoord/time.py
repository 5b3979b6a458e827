"""Time-scale offsets and calendar/Julian Date conversions.

Provides the pieces :class:`~astrocoord.epoch.Epoch` needs to move between
time scales:

- TAI-UTC from a hardcoded leap second table,
- the constant TT-TAI offset,
- the periodic TDB-TT term,

plus Gregorian calendar <-> Julian Date conversion.  All functions use
``jnp`` operations and respect :func:`~astrocoord.config.get_dtype`.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import DEG2RAD, JD2000, JD_MJD_OFFSET

# TT - TAI offset in seconds (constant by definition)
TT_TAI: float = 32.184

# Leap second table: (MJD of introduction, TAI-UTC in seconds)
# Source: IERS Bulletin C (1972-01-01 through 2017-01-01).
_LEAP_SECOND_TABLE: tuple[tuple[float, float], ...] = (
    (41317.0, 10.0),  # 1972-01-01
    (41499.0, 11.0),  # 1972-07-01
    (41683.0, 12.0),  # 1973-01-01
    (42048.0, 13.0),  # 1974-01-01
    (42413.0, 14.0),  # 1975-01-01
    (42778.0, 15.0),  # 1976-01-01
    (43144.0, 16.0),  # 1977-01-01
    (43509.0, 17.0),  # 1978-01-01
    (43874.0, 18.0),  # 1979-01-01
    (44239.0, 19.0),  # 1980-01-01
    (44786.0, 20.0),  # 1981-07-01
    (45151.0, 21.0),  # 1982-07-01
    (45516.0, 22.0),  # 1983-07-01
    (46247.0, 23.0),  # 1985-07-01
    (47161.0, 24.0),  # 1988-01-01
    (47892.0, 25.0),  # 1990-01-01
    (48257.0, 26.0),  # 1991-01-01
    (48804.0, 27.0),  # 1992-07-01
    (49169.0, 28.0),  # 1993-07-01
    (49534.0, 29.0),  # 1994-07-01
    (50083.0, 30.0),  # 1996-01-01
    (50630.0, 31.0),  # 1997-07-01
    (51179.0, 32.0),  # 1999-01-01
    (53736.0, 33.0),  # 2006-01-01
    (54832.0, 34.0),  # 2009-01-01
    (56109.0, 35.0),  # 2012-07-01
    (57204.0, 36.0),  # 2015-07-01
    (57754.0, 37.0),  # 2017-01-01
)


def leap_seconds_tai_utc(mjd: ArrayLike) -> jax.Array:
    """Return TAI-UTC (cumulative leap seconds) for a given UTC MJD.

    Dates before 1972 return 10.0; dates after the last table entry hold
    the most recent value (37.0).  JIT-compatible: uses
    ``jnp.searchsorted`` for O(log n) lookup.

    Args:
        mjd: Modified Julian Date (UTC), scalar or array.

    Returns:
        TAI-UTC in seconds.
    """
    mjd = jnp.asarray(mjd, dtype=get_dtype())
    mjd_breaks = jnp.array([m for m, _ in _LEAP_SECOND_TABLE], dtype=get_dtype())
    tai_utc_vals = jnp.array([v for _, v in _LEAP_SECOND_TABLE], dtype=get_dtype())

    # idx-1 is the last entry <= mjd
    idx = jnp.searchsorted(mjd_breaks, mjd, side="right")

    return jnp.where(idx == 0, get_dtype()(10.0), tai_utc_vals[idx - 1])


def tdb_minus_tt(jd_tt: ArrayLike) -> jax.Array:
    """Return the periodic TDB-TT offset for a TT Julian Date.

    Uses the two-term approximation of the Fairhead & Bretagnon series,
    accurate to about 30 microseconds over several centuries around J2000.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        TDB-TT in seconds.

    References:

        1. G. H. Kaplan, *The IAU Resolutions on Astronomical Reference
           Systems, Time Scales, and Earth Rotation Models*, USNO Circular
           179, 2005, eq. 2.6.
    """
    jd_tt = jnp.asarray(jd_tt, dtype=get_dtype())
    g = (357.53 + 0.98560028 * (jd_tt - JD2000)) * DEG2RAD
    return 0.001657 * jnp.sin(g) + 0.000014 * jnp.sin(2.0 * g)


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Modified Julian Date.

    Only valid from year 1583 onward.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer.
    """
    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    b = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd = 365 * year - 679004 + b + jnp.floor(30.6001 * (month + 1)) + day

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return get_dtype()(jnp.floor(mjd)) + frac_day


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Julian Date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Julian Date.
    """
    return caldate_to_mjd(year, month, day, hour, minute, second) + JD_MJD_OFFSET


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert a Julian Date to a calendar date.

    Dates before 1582 October 15 are returned in the Julian calendar.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second) where
            all but ``second`` are int32.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 7.
    """
    jd = jnp.asarray(jd, dtype=get_dtype())
    jd_shifted = jd + 0.5
    z = jnp.floor(jd_shifted)
    f = jd_shifted - z

    alpha = jnp.floor((z - 1867216.25) / 36524.25)
    a = jnp.where(z < 2299161, z, z + 1 + alpha - jnp.floor(alpha / 4))

    b = a + 1524
    c = jnp.floor((b - 122.1) / 365.25)
    d = jnp.floor(365.25 * c)
    e = jnp.floor((b - d) / 30.6001)

    day = (b - d - jnp.floor(30.6001 * e)).astype(jnp.int32)
    month = jnp.where(e < 14, e - 1, e - 13).astype(jnp.int32)
    year = jnp.where(month > 2, c - 4716, c - 4715).astype(jnp.int32)

    # Decompose the day fraction via integer microseconds, in int64 until the end
    total_us = jnp.round(f * 86400.0e6).astype(jnp.int64)
    hour_us = total_us // 3600000000
    total_us = total_us - hour_us * 3600000000
    minute_us = total_us // 60000000
    total_us = total_us - minute_us * 60000000
    hour = hour_us.astype(jnp.int32)
    minute = minute_us.astype(jnp.int32)
    second = get_dtype()(total_us) / 1.0e6

    return year, month, day, hour, minute, second
