"""IAU SOFA elementary astrometry used by the apparent-place pipeline.

The spherical helpers (``anp``, ``s2c``, ``c2s``) and the IAU 2006 mean
obliquity are written in ``jnp`` and are traceable under ``jax.jit``.  The
heavier routines (IAU 2000A nutation, the ICRS <-> CIRS transformations and
the CIRS -> observed transformation) delegate to ERFA through ``pyerfa``, the
BSD-licensed SOFA binding, and operate on concrete values.

Uses routines and computations derived from software provided by SOFA
under license to the user. Does not itself constitute software provided
by and/or endorsed by SOFA.
"""

from __future__ import annotations

from typing import NamedTuple

import erfa
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astrocoord.config import get_dtype

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DJ00: float = 2451545.0
"""Julian Date of J2000.0."""

DJC: float = 36525.0
"""Days per Julian century."""

DAS2R: float = 4.848136811095359935899141e-6
"""Arcseconds to radians."""

D2PI: float = 6.283185307179586476925287
"""2*pi."""


class ObservedPlace(NamedTuple):
    """Result of :func:`atio13`.

    Attributes:
        aob: Observed azimuth, N=0 E=90 [rad].
        zob: Observed zenith distance [rad].
        hob: Observed hour angle [rad].
        dob: Observed declination [rad].
        rob: Observed right ascension, CIO-based [rad].
    """

    aob: float
    zob: float
    hob: float
    dob: float
    rob: float


# ---------------------------------------------------------------------------
# Spherical helpers
# ---------------------------------------------------------------------------


def anp(a: ArrayLike) -> Array:
    """Normalize an angle into the range ``[0, 2pi)``.

    Args:
        a: Angle in radians.

    Returns:
        Angle in radians, ``0 <= a < 2pi``.
    """
    a = jnp.asarray(a, dtype=get_dtype())
    w = jnp.fmod(a, D2PI)
    w = jnp.where(w < 0.0, w + D2PI, w)
    return jnp.where(w >= D2PI, w - D2PI, w)


def s2c(theta: ArrayLike, phi: ArrayLike) -> Array:
    """Convert spherical coordinates to a unit Cartesian vector.

    Args:
        theta: Longitude angle [rad].
        phi: Latitude angle [rad].

    Returns:
        Direction cosines, shape ``(3,)``.
    """
    theta = jnp.asarray(theta, dtype=get_dtype())
    phi = jnp.asarray(phi, dtype=get_dtype())
    cp = jnp.cos(phi)
    return jnp.array([jnp.cos(theta) * cp, jnp.sin(theta) * cp, jnp.sin(phi)])


def c2s(p: ArrayLike) -> tuple[Array, Array]:
    """Convert a Cartesian vector to spherical coordinates.

    The vector need not be of unit length.  A null vector gives ``(0, 0)``.

    Args:
        p: Vector, shape ``(3,)``.

    Returns:
        Tuple ``(theta, phi)``: longitude in ``(-pi, pi]`` and latitude in
        ``[-pi/2, pi/2]`` [rad].
    """
    p = jnp.asarray(p, dtype=get_dtype())
    x, y, z = p[0], p[1], p[2]
    d2 = x * x + y * y
    theta = jnp.where(d2 == 0.0, 0.0, jnp.arctan2(y, x))
    phi = jnp.where((d2 == 0.0) & (z == 0.0), 0.0, jnp.arctan2(z, jnp.sqrt(d2)))
    return theta, phi


# ---------------------------------------------------------------------------
# Obliquity and nutation
# ---------------------------------------------------------------------------


def obl06(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 2006 precession.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Obliquity of the ecliptic in radians.

    References:

        1. Hilton, J. et al., 2006, Celest.Mech.Dyn.Astron. 94, 351
    """
    date1 = jnp.asarray(date1, dtype=get_dtype())
    date2 = jnp.asarray(date2, dtype=get_dtype())
    t = ((date1 - DJ00) + date2) / DJC
    eps0 = 84381.406 + t * (
        -46.836769 + t * (-0.0001831 + t * (0.00200340 + t * (-0.000000576 + t * (-0.0000000434))))
    )
    return eps0 * DAS2R


def nut06a(date1: float, date2: float) -> tuple[float, float]:
    """IAU 2000A nutation with adjustments to match the IAU 2006 precession.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [rad].
    """
    dpsi, deps = erfa.nut06a(float(date1), float(date2))
    return float(dpsi), float(deps)


# ---------------------------------------------------------------------------
# Astrometric transformations
# ---------------------------------------------------------------------------


def atci13(
    rc: float,
    dc: float,
    pr: float,
    pd: float,
    px: float,
    rv: float,
    date1: float,
    date2: float,
) -> tuple[float, float, float]:
    """Transform an ICRS star position to CIRS, geocentric observer.

    Applies proper motion, parallax, light deflection by the Sun, annual
    aberration and precession-nutation.

    Args:
        rc: ICRS right ascension at J2000.0 [rad].
        dc: ICRS declination at J2000.0 [rad].
        pr: RA proper motion, dRA/dt [rad/year].
        pd: Dec proper motion, dDec/dt [rad/year].
        px: Parallax [arcsec].
        rv: Radial velocity [km/s, +ve if receding].
        date1: TDB as 2-part Julian Date (part 1).
        date2: TDB as 2-part Julian Date (part 2).

    Returns:
        Tuple ``(ri, di, eo)``: CIRS geocentric RA and Dec and the equation
        of the origins (ERA - GST) [rad].
    """
    ri, di, eo = erfa.atci13(
        float(rc), float(dc), float(pr), float(pd), float(px), float(rv),
        float(date1), float(date2),
    )
    return float(ri), float(di), float(eo)


def atic13(
    ri: float, di: float, date1: float, date2: float
) -> tuple[float, float, float]:
    """Transform a CIRS star position to ICRS, the inverse of :func:`atci13`.

    Args:
        ri: CIRS geocentric right ascension [rad].
        di: CIRS geocentric declination [rad].
        date1: TDB as 2-part Julian Date (part 1).
        date2: TDB as 2-part Julian Date (part 2).

    Returns:
        Tuple ``(rc, dc, eo)``: ICRS astrometric RA and Dec and the
        equation of the origins [rad].
    """
    rc, dc, eo = erfa.atic13(float(ri), float(di), float(date1), float(date2))
    return float(rc), float(dc), float(eo)


def atio13(
    ri: float,
    di: float,
    utc1: float,
    utc2: float,
    dut1: float,
    elong: float,
    phi: float,
    hm: float,
    xp: float,
    yp: float,
    phpa: float,
    tc: float,
    rh: float,
    wl: float,
) -> ObservedPlace:
    """Transform CIRS coordinates to observed place.

    Accounts for Earth rotation, polar motion, diurnal aberration and
    parallax, and atmospheric refraction.  Refraction is omitted when
    ``phpa`` is zero.

    Args:
        ri: CIRS right ascension [rad].
        di: CIRS declination [rad].
        utc1: UTC as 2-part quasi Julian Date (part 1).
        utc2: UTC as 2-part quasi Julian Date (part 2).
        dut1: UT1-UTC [s].
        elong: Longitude, East positive [rad].
        phi: Geodetic latitude [rad].
        hm: Height above the ellipsoid [m].
        xp: Polar motion x [rad].
        yp: Polar motion y [rad].
        phpa: Pressure at the observer [hPa].
        tc: Ambient temperature at the observer [deg C].
        rh: Relative humidity at the observer [0-1].
        wl: Wavelength [micrometers].

    Returns:
        :class:`ObservedPlace`.
    """
    aob, zob, hob, dob, rob = erfa.atio13(
        float(ri), float(di), float(utc1), float(utc2), float(dut1),
        float(elong), float(phi), float(hm), float(xp), float(yp),
        float(phpa), float(tc), float(rh), float(wl),
    )
    return ObservedPlace(float(aob), float(zob), float(hob), float(dob), float(rob))
