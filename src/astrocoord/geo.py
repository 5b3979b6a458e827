"""Geographic observer location on a reference ellipsoid.

Longitude convention: **East positive, West negative**, wrapped to
``[-180, 180)`` degrees.  Latitude is geodetic, ``[-90, 90]`` degrees.
Height is metres above the ellipsoid.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from .config import get_dtype
from .coordinates.geodetic import (
    IAU_1976,
    Ellipsoid,
    parallax_constants,
    position_geodetic_to_ecef,
)
from .errors import InvalidArgumentError


class Geo:
    """Observer location: geodetic latitude, longitude and height.

    Args:
        lat: Geodetic latitude. Units: *rad* (or *deg*).
        lon: Longitude, East positive. Units: *rad* (or *deg*).
        height: Height above the ellipsoid [m]. Default: 0.0
        ellipsoid: Reference ellipsoid. Default: IAU 1976.
        use_degrees: If ``True``, ``lat`` and ``lon`` are in degrees.

    Raises:
        InvalidArgumentError: If the latitude is outside ``[-90, 90]`` degrees,
            any value is not finite, or the height is negative.

    Examples:
        ```python
        from astrocoord import Geo
        washington = Geo(38.0, -77.0, use_degrees=True)
        washington.is_west()  # True
        ```
    """

    __slots__ = ("_lat", "_lon", "_height", "_ellipsoid")

    def __init__(
        self,
        lat: float,
        lon: float,
        height: float = 0.0,
        ellipsoid: Ellipsoid = IAU_1976,
        use_degrees: bool = False,
    ) -> None:
        lat = float(lat)
        lon = float(lon)
        height = float(height)
        if not all(math.isfinite(v) for v in (lat, lon, height)):
            raise InvalidArgumentError("Geo coordinates must be finite")
        if use_degrees:
            lat = math.radians(lat)
            lon = math.radians(lon)
        if abs(lat) > math.pi / 2.0 + 1e-12:
            raise InvalidArgumentError(
                f"Latitude must be within [-90, 90] degrees, got {math.degrees(lat)}"
            )
        if height < 0.0:
            raise InvalidArgumentError(f"Height must be non-negative, got {height} m")

        self._lat = max(-math.pi / 2.0, min(math.pi / 2.0, lat))
        self._lon = (lon + math.pi) % (2.0 * math.pi) - math.pi
        self._height = height
        self._ellipsoid = ellipsoid

    @property
    def lat(self) -> float:
        """Geodetic latitude [rad]."""
        return self._lat

    @property
    def lon(self) -> float:
        """Longitude, East positive, in ``[-pi, pi)`` [rad]."""
        return self._lon

    @property
    def height(self) -> float:
        """Height above the ellipsoid [m]."""
        return self._height

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    def is_north(self) -> bool:
        return self._lat >= 0.0

    def is_south(self) -> bool:
        return self._lat < 0.0

    def is_east(self) -> bool:
        return self._lon >= 0.0

    def is_west(self) -> bool:
        return self._lon < 0.0

    def parallax_constants(self, height: float | None = None) -> tuple[Array, Array]:
        """Return ``(rho sin(phi'), rho cos(phi'))`` for this location.

        Args:
            height: Height above the ellipsoid [m]. Default: the stored height.

        Returns:
            tuple: Parallax constants in units of the equatorial radius.
        """
        if height is None:
            height = self._height
        return parallax_constants(self._lat, height, self._ellipsoid)

    def to_ecef(self) -> Array:
        """Return the Earth-Centered Earth-Fixed position ``[x, y, z]`` [m]."""
        return position_geodetic_to_ecef(self.to_array(), self._ellipsoid)

    def to_array(self, use_degrees: bool = False) -> Array:
        """Return ``[lon, lat, height]`` with angles in *rad* (or *deg*)."""
        lon, lat = self._lon, self._lat
        if use_degrees:
            lon, lat = math.degrees(lon), math.degrees(lat)
        return jnp.array([lon, lat, self._height], dtype=get_dtype())

    def __eq__(self, other):
        if not isinstance(other, Geo):
            return NotImplemented
        return (
            self._lat == other._lat
            and self._lon == other._lon
            and self._height == other._height
            and self._ellipsoid == other._ellipsoid
        )

    def __hash__(self):
        return hash((self._lat, self._lon, self._height, self._ellipsoid))

    def __str__(self):
        from .formatting import format_geo

        return format_geo(self)

    def __repr__(self):
        return (
            f"Geo(lat={math.degrees(self._lat)!r}, lon={math.degrees(self._lon)!r}, "
            f"height={self._height!r}, use_degrees=True)"
        )
