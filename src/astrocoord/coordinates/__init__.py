"""Coordinate transformations.

This sub-module provides the functional, ``jax.jit``-compatible layer
underneath the coordinate classes:

- **Spherical**: Cartesian ``[x, y, z]`` ↔ ``[ra, dec, r]``
- **Ecliptic**: equatorial ``(ra, dec)`` ↔ ecliptic ``(lon, lat)`` for a
  given obliquity
- **Geodetic**: reference ellipsoids, observer parallax constants and
  geodetic ``[lon, lat, h]`` → ECEF
- **Topocentric**: rigorous parallax shift to the observer and
  hour angle/declination → azimuth/altitude
"""

from .ecliptic import (
    position_ecliptic_to_equatorial,
    position_equatorial_to_ecliptic,
)
from .geodetic import (
    IAU_1976,
    Ellipsoid,
    parallax_constants,
    position_geodetic_to_ecef,
)
from .spherical import (
    position_cartesian_to_spherical,
    position_spherical_to_cartesian,
)
from .topocentric import (
    position_geocentric_to_topocentric,
    position_hadec_to_azel,
)

__all__ = [
    "Ellipsoid",
    "IAU_1976",
    "parallax_constants",
    "position_cartesian_to_spherical",
    "position_ecliptic_to_equatorial",
    "position_equatorial_to_ecliptic",
    "position_geocentric_to_topocentric",
    "position_geodetic_to_ecef",
    "position_hadec_to_azel",
    "position_spherical_to_cartesian",
]
