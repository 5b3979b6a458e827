"""Reference ellipsoids and geodetic observer geometry.

Provides the :class:`Ellipsoid` value type, the geocentric parallax
constants ``rho sin(phi')`` and ``rho cos(phi')`` of an observer, and the
closed-form geodetic to Earth-Centered Earth-Fixed (ECEF) conversion.

Heights and radii are in metres, angles in radians unless
``use_degrees=True``.

References:
    1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 11.
    2. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astrocoord.config import get_dtype
from astrocoord.constants import IAU1976_a, IAU1976_f, WGS84_a, WGS84_f
from astrocoord.utils import to_radians


class Ellipsoid(NamedTuple):
    """Oblate reference ellipsoid.

    Attributes:
        eq_radius: Equatorial radius ``a`` [m].
        flattening: Flattening ``f``.
    """

    eq_radius: float
    flattening: float

    @classmethod
    def earth_1976_iau(cls) -> Ellipsoid:
        """IAU 1976 Earth ellipsoid: a = 6 378 140 m, f = 1/298.257."""
        return cls(IAU1976_a, IAU1976_f)

    @classmethod
    def wgs84(cls) -> Ellipsoid:
        """WGS84 Earth ellipsoid: a = 6 378 137 m, f = 1/298.257223563."""
        return cls(WGS84_a, WGS84_f)

    @property
    def polar_radius(self) -> float:
        """Polar radius ``b = a (1 - f)`` [m]."""
        return self.eq_radius * (1.0 - self.flattening)

    @property
    def eccentricity(self) -> float:
        """First eccentricity ``e = sqrt(f (2 - f))``."""
        return (self.flattening * (2.0 - self.flattening)) ** 0.5


IAU_1976 = Ellipsoid.earth_1976_iau()
"""Default ellipsoid for observer locations."""


def parallax_constants(
    lat: ArrayLike,
    height: ArrayLike = 0.0,
    ellipsoid: Ellipsoid = IAU_1976,
    use_degrees: bool = False,
) -> tuple[Array, Array]:
    """Compute the geocentric parallax constants of an observer.

    The reduced latitude is taken as ``u = atan2(b sin(phi), a cos(phi))``,
    which equals ``atan((b/a) tan(phi))`` but stays finite at the poles:

    .. math::

        \\rho \\sin\\phi' = \\frac{b}{a} \\sin u + \\frac{h}{a} \\sin\\phi

        \\rho \\cos\\phi' = \\cos u + \\frac{h}{a} \\cos\\phi

    Args:
        lat: Geodetic latitude. Units: *rad* (or *deg*).
        height: Height above the ellipsoid [m]. Default: 0.0
        ellipsoid: Reference ellipsoid. Default: IAU 1976.
        use_degrees: If ``True``, interpret ``lat`` as degrees.

    Returns:
        tuple: ``(rho_sin_phi, rho_cos_phi)`` in units of the equatorial
            radius.

    Example:
        >>> from astrocoord.coordinates import parallax_constants
        >>> parallax_constants(0.0)
        (Array(0., dtype=float64), Array(1., dtype=float64))
    """
    phi = to_radians(jnp.asarray(lat, dtype=get_dtype()), use_degrees)
    height = jnp.asarray(height, dtype=get_dtype())

    a = ellipsoid.eq_radius
    b = ellipsoid.polar_radius
    sin_phi = jnp.sin(phi)
    cos_phi = jnp.cos(phi)

    u = jnp.arctan2(b * sin_phi, a * cos_phi)

    rho_sin_phi = (b / a) * jnp.sin(u) + (height / a) * sin_phi
    rho_cos_phi = jnp.cos(u) + (height / a) * cos_phi

    return rho_sin_phi, rho_cos_phi


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    ellipsoid: Ellipsoid = IAU_1976,
    use_degrees: bool = False,
) -> Array:
    """Convert geodetic position to ECEF Cartesian coordinates.

    Uses the prime vertical radius of curvature:

    .. math::

        N = \\frac{a}{\\sqrt{1 - e^2 \\sin^2 \\phi}}

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, height]``.
            Longitude and latitude in *rad* (or *deg* if ``use_degrees=True``),
            height in *m* above the ellipsoid.
        ellipsoid: Reference ellipsoid. Default: IAU 1976.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.

    Returns:
        jax.Array: ECEF position ``[x, y, z]`` in *m*.

    Example:
        >>> import jax.numpy as jnp
        >>> from astrocoord.coordinates import position_geodetic_to_ecef
        >>> x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        >>> float(x_ecef[0])  # equatorial radius on the equator
        6378140.0
    """
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())

    lon = x_geod[0]
    lat = x_geod[1]
    height = x_geod[2]

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    ecc2 = ellipsoid.flattening * (2.0 - ellipsoid.flattening)
    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)

    N = ellipsoid.eq_radius / jnp.sqrt(1.0 - ecc2 * sin_lat * sin_lat)

    x = (N + height) * cos_lat * jnp.cos(lon)
    y = (N + height) * cos_lat * jnp.sin(lon)
    z = ((1.0 - ecc2) * N + height) * sin_lat

    return jnp.array([x, y, z])
