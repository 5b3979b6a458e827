"""Angle and unit conversion helpers.

``to_radians`` / ``from_radians`` wrap the ``use_degrees`` convention used
throughout astrocoord and are JAX-traceable.  The sexagesimal helpers at the
bottom of the module operate on concrete Python floats and are meant for
construction and presentation code, not for JIT-compiled functions.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

_TWO_PI = 2.0 * math.pi

# Largest |asin argument| excursion above 1 attributed to rounding
ASIN_DOMAIN_TOL = 1e-12


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def normalize_angle(angle: ArrayLike) -> Array:
    """Normalize an angle to the range ``[0, 2pi)``.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Equivalent angle in ``[0, 2pi)`` radians.
    """
    wrapped = jnp.mod(angle, _TWO_PI)
    # mod of a tiny negative number can round up to exactly 2pi
    return jnp.where(wrapped >= _TWO_PI, wrapped - _TWO_PI, wrapped)


def wrap_to_pi(angle: ArrayLike) -> Array:
    """Wrap an angle to the range ``[-pi, pi)``.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Equivalent angle in ``[-pi, pi)`` radians.
    """
    return normalize_angle(jnp.asarray(angle) + math.pi) - math.pi


def clamped_arcsin(x: ArrayLike, tol: float = ASIN_DOMAIN_TOL) -> Array:
    """Arcsine that tolerates rounding excursions just outside ``[-1, 1]``.

    Arguments within ``tol`` of the domain are clamped onto it.  Arguments
    further outside produce NaN so that callers outside of JIT can detect a
    genuine domain violation.

    Args:
        x (ArrayLike): Sine value.
        tol (float): Accepted excursion beyond ``[-1, 1]``.

    Returns:
        Angle in ``[-pi/2, pi/2]`` radians, or NaN.
    """
    x = jnp.asarray(x)
    clamped = jnp.arcsin(jnp.clip(x, -1.0, 1.0))
    return jnp.where(jnp.abs(x) > 1.0 + tol, jnp.nan, clamped)


def hms_to_rad(hours: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Convert hours, minutes and seconds of time to radians.

    A negative sign on any component makes the whole value negative.

    Args:
        hours (float): Hours.
        minutes (float): Minutes of time. Default: ``0.0``
        seconds (float): Seconds of time. Default: ``0.0``

    Returns:
        float: Angle in radians.
    """
    return _sexagesimal_to_float(hours, minutes, seconds) * _TWO_PI / 24.0


def dms_to_rad(degrees: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Convert degrees, arcminutes and arcseconds to radians.

    A negative sign on any component, including ``-0.0`` degrees, makes the
    whole value negative, so ``dms_to_rad(-0.0, 30, 0)`` is -0.5 degrees.

    Args:
        degrees (float): Degrees.
        minutes (float): Arcminutes. Default: ``0.0``
        seconds (float): Arcseconds. Default: ``0.0``

    Returns:
        float: Angle in radians.
    """
    return math.radians(_sexagesimal_to_float(degrees, minutes, seconds))


def _sexagesimal_to_float(whole: float, minutes: float, seconds: float) -> float:
    negative = (
        math.copysign(1.0, whole) < 0 or minutes < 0 or seconds < 0
    )
    value = abs(whole) + abs(minutes) / 60.0 + abs(seconds) / 3600.0
    return -value if negative else value


def split_sexagesimal(
    value: float, precision: int = 3
) -> tuple[int, int, int, int, int]:
    """Split a value into sign, whole units, minutes, seconds and a fraction.

    Rounding is applied once, on the total number of seconds, so that a
    value such as 59.9999 seconds carries into the next minute instead of
    printing as ``60``.

    Args:
        value (float): Value in whole units (hours or degrees).
        precision (int): Number of decimal places kept for the seconds.

    Returns:
        tuple: ``(sign, whole, minutes, seconds, fraction)`` where ``sign`` is
            ``+1`` or ``-1`` and ``fraction`` is the integer count of
            ``10**-precision`` seconds.
    """
    sign = -1 if value < 0 else 1
    scale = 10 ** precision
    total = int(round(abs(value) * 3600.0 * scale))
    units, fraction = divmod(total, scale)
    whole, rem = divmod(units, 3600)
    minutes, seconds = divmod(rem, 60)
    if sign < 0 and total == 0:
        sign = 1
    return sign, whole, minutes, seconds, fraction
