"""Observer-relative corrections in the equatorial system.

- :func:`position_geocentric_to_topocentric`: rigorous shift of a
  geocentric right ascension/declination to the place seen by an observer
  on the surface, due to the observer's offset from the Earth's centre.
- :func:`position_hadec_to_azel`: hour angle and declination to azimuth
  (North through East) and altitude for a spherical horizon.

These are geometric helpers; the full observed-place pipeline in
:mod:`astrocoord.equatorial` additionally applies aberration, polar motion
and refraction.

References:
    1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 13 and 40.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astrocoord.config import get_dtype
from astrocoord.utils import clamped_arcsin, from_radians, normalize_angle, to_radians


def position_geocentric_to_topocentric(
    ra: ArrayLike,
    dec: ArrayLike,
    hour_angle: ArrayLike,
    parallax: ArrayLike,
    rho_sin_phi: ArrayLike,
    rho_cos_phi: ArrayLike,
    use_degrees: bool = False,
) -> tuple[Array, Array, Array]:
    """Apply the rigorous topocentric parallax correction.

    .. math::

        \\Delta\\alpha = \\operatorname{atan2}(-\\rho\\cos\\phi'\\sin\\pi\\sin H,
                         \\cos\\delta - \\rho\\cos\\phi'\\sin\\pi\\cos H)

        \\delta' = \\operatorname{atan2}((\\sin\\delta - \\rho\\sin\\phi'\\sin\\pi)
                   \\cos\\Delta\\alpha,
                   \\cos\\delta - \\rho\\cos\\phi'\\sin\\pi\\cos H)

    Args:
        ra: Geocentric right ascension. Units: *rad* (or *deg*).
        dec: Geocentric declination. Units: *rad* (or *deg*).
        hour_angle: Geocentric local hour angle. Units: *rad* (or *deg*).
        parallax: Equatorial horizontal parallax of the body. Units: *rad*
            (or *deg*).
        rho_sin_phi: Observer parallax constant ``rho sin(phi')``.
        rho_cos_phi: Observer parallax constant ``rho cos(phi')``.
        use_degrees: If ``True``, angles are in degrees.

    Returns:
        tuple: ``(ra', dec', hour_angle')`` topocentric right ascension in
            ``[0, 2pi)``, declination and hour angle.
    """
    dtype = get_dtype()
    ra = to_radians(jnp.asarray(ra, dtype=dtype), use_degrees)
    dec = to_radians(jnp.asarray(dec, dtype=dtype), use_degrees)
    ha = to_radians(jnp.asarray(hour_angle, dtype=dtype), use_degrees)
    px = to_radians(jnp.asarray(parallax, dtype=dtype), use_degrees)

    sin_px = jnp.sin(px)
    denom = jnp.cos(dec) - rho_cos_phi * sin_px * jnp.cos(ha)

    d_ra = jnp.arctan2(-rho_cos_phi * sin_px * jnp.sin(ha), denom)
    dec_topo = jnp.arctan2(
        (jnp.sin(dec) - rho_sin_phi * sin_px) * jnp.cos(d_ra), denom
    )

    ra_topo = normalize_angle(ra + d_ra)
    ha_topo = ha - d_ra

    return (
        from_radians(ra_topo, use_degrees),
        from_radians(dec_topo, use_degrees),
        from_radians(ha_topo, use_degrees),
    )


def position_hadec_to_azel(
    hour_angle: ArrayLike,
    dec: ArrayLike,
    lat: ArrayLike,
    use_degrees: bool = False,
) -> tuple[Array, Array]:
    """Convert hour angle and declination to azimuth and altitude.

    Azimuth is measured from North through East.

    Args:
        hour_angle: Local hour angle, positive West. Units: *rad* (or *deg*).
        dec: Declination. Units: *rad* (or *deg*).
        lat: Observer latitude. Units: *rad* (or *deg*).
        use_degrees: If ``True``, angles are in degrees.

    Returns:
        tuple: ``(az, alt)`` with azimuth in ``[0, 2pi)``.

    Example:
        >>> from astrocoord.coordinates import position_hadec_to_azel
        >>> az, alt = position_hadec_to_azel(0.0, 20.0, 38.0, use_degrees=True)
        >>> round(float(alt), 6)
        72.0
    """
    dtype = get_dtype()
    ha = to_radians(jnp.asarray(hour_angle, dtype=dtype), use_degrees)
    dec = to_radians(jnp.asarray(dec, dtype=dtype), use_degrees)
    lat = to_radians(jnp.asarray(lat, dtype=dtype), use_degrees)

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    sin_dec = jnp.sin(dec)
    cos_dec = jnp.cos(dec)

    # Meeus azimuth is from South; rotate by pi to North-based
    az = jnp.arctan2(
        jnp.sin(ha) * cos_dec, jnp.cos(ha) * cos_dec * sin_lat - sin_dec * cos_lat
    ) + jnp.pi
    alt = clamped_arcsin(sin_lat * sin_dec + cos_lat * cos_dec * jnp.cos(ha))

    return from_radians(normalize_angle(az), use_degrees), from_radians(alt, use_degrees)
