"""Equatorial <-> ecliptic rotation for a given obliquity.

With obliquity ``eps``:

.. math::

    \\lambda = \\operatorname{atan2}(\\sin\\alpha\\cos\\epsilon
               + \\tan\\delta\\sin\\epsilon, \\cos\\alpha)

    \\beta = \\arcsin(\\sin\\delta\\cos\\epsilon
             - \\cos\\delta\\sin\\epsilon\\sin\\alpha)

and the inverse with ``eps -> -eps``.  The tangent is folded into the
atan2 arguments (both are multiplied by ``cos(delta)``) so that the poles
``delta = +-90 deg`` are regular.  The arcsine is clamped against rounding;
arguments beyond ``[-1, 1]`` by more than ``ASIN_DOMAIN_TOL`` give NaN.

References:
    1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 13.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astrocoord.config import get_dtype
from astrocoord.utils import clamped_arcsin, from_radians, normalize_angle, to_radians


def _rotate(lon: Array, lat: Array, eps: Array) -> tuple[Array, Array]:
    sin_lon = jnp.sin(lon)
    cos_lon = jnp.cos(lon)
    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    sin_eps = jnp.sin(eps)
    cos_eps = jnp.cos(eps)

    out_lon = jnp.arctan2(
        sin_lon * cos_lat * cos_eps + sin_lat * sin_eps, cos_lon * cos_lat
    )
    out_lat = clamped_arcsin(sin_lat * cos_eps - cos_lat * sin_eps * sin_lon)
    return normalize_angle(out_lon), out_lat


def position_equatorial_to_ecliptic(
    ra: ArrayLike,
    dec: ArrayLike,
    obliquity: ArrayLike,
    use_degrees: bool = False,
) -> tuple[Array, Array]:
    """Convert right ascension and declination to ecliptic coordinates.

    Args:
        ra: Right ascension. Units: *rad* (or *deg*).
        dec: Declination. Units: *rad* (or *deg*).
        obliquity: Obliquity of the ecliptic. Units: *rad* (or *deg*).
        use_degrees: If ``True``, inputs and outputs are in degrees.

    Returns:
        tuple: ``(lon, lat)`` ecliptic longitude in ``[0, 2pi)`` and latitude.

    Example:
        >>> from astrocoord.coordinates import position_equatorial_to_ecliptic
        >>> lon, lat = position_equatorial_to_ecliptic(90.0, 0.0, 23.44, use_degrees=True)
        >>> round(float(lat), 2)
        -23.44
    """
    dtype = get_dtype()
    ra = to_radians(jnp.asarray(ra, dtype=dtype), use_degrees)
    dec = to_radians(jnp.asarray(dec, dtype=dtype), use_degrees)
    eps = to_radians(jnp.asarray(obliquity, dtype=dtype), use_degrees)

    lon, lat = _rotate(ra, dec, eps)
    return from_radians(lon, use_degrees), from_radians(lat, use_degrees)


def position_ecliptic_to_equatorial(
    lon: ArrayLike,
    lat: ArrayLike,
    obliquity: ArrayLike,
    use_degrees: bool = False,
) -> tuple[Array, Array]:
    """Convert ecliptic longitude and latitude to equatorial coordinates.

    Args:
        lon: Ecliptic longitude. Units: *rad* (or *deg*).
        lat: Ecliptic latitude. Units: *rad* (or *deg*).
        obliquity: Obliquity of the ecliptic. Units: *rad* (or *deg*).
        use_degrees: If ``True``, inputs and outputs are in degrees.

    Returns:
        tuple: ``(ra, dec)`` right ascension in ``[0, 2pi)`` and declination.
    """
    dtype = get_dtype()
    lon = to_radians(jnp.asarray(lon, dtype=dtype), use_degrees)
    lat = to_radians(jnp.asarray(lat, dtype=dtype), use_degrees)
    eps = to_radians(jnp.asarray(obliquity, dtype=dtype), use_degrees)

    ra, dec = _rotate(lon, lat, -eps)
    return from_radians(ra, use_degrees), from_radians(dec, use_degrees)
