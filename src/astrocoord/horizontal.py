"""Horizontal (altitude/azimuth) coordinates.

Azimuth is measured from North through East and normalised to ``[0, 2pi)``.
Instances are produced by :meth:`~astrocoord.equatorial.Equatorial.to_horiz`;
``refracted`` records whether atmospheric refraction was applied.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from .config import get_dtype
from .errors import InvalidArgumentError
from .utils import normalize_angle


class Horizontal:
    """Altitude, azimuth and optional distance of a body for an observer.

    Args:
        alt: Altitude above the horizon. Units: *rad* (or *deg*).
        az: Azimuth, North through East. Units: *rad* (or *deg*).
        dist: Distance [AU], or ``None`` if unknown.
        refracted: Whether atmospheric refraction is included.
        use_degrees: If ``True``, ``alt`` and ``az`` are in degrees.

    Raises:
        InvalidArgumentError: If the altitude is outside ``[-90, 90]``
            degrees or the distance is negative.
    """

    __slots__ = ("_alt", "_az", "_dist", "_refracted")

    def __init__(
        self,
        alt: float,
        az: float,
        dist: float | None = None,
        refracted: bool = False,
        use_degrees: bool = False,
    ) -> None:
        alt = float(alt)
        az = float(az)
        if use_degrees:
            alt = math.radians(alt)
            az = math.radians(az)
        if not (math.isfinite(alt) and math.isfinite(az)):
            raise InvalidArgumentError("Horizontal coordinates must be finite")
        if abs(alt) > math.pi / 2.0 + 1e-12:
            raise InvalidArgumentError(
                f"Altitude must be within [-90, 90] degrees, got {math.degrees(alt)}"
            )
        if dist is not None and not float(dist) >= 0.0:
            raise InvalidArgumentError(f"Distance must be non-negative, got {dist}")

        self._alt = max(-math.pi / 2.0, min(math.pi / 2.0, alt))
        self._az = float(normalize_angle(az))
        self._dist = None if dist is None else float(dist)
        self._refracted = bool(refracted)

    @property
    def alt(self) -> float:
        """Altitude [rad]."""
        return self._alt

    @property
    def az(self) -> float:
        """Azimuth, North through East, in ``[0, 2pi)`` [rad]."""
        return self._az

    @property
    def dist(self) -> float | None:
        return self._dist

    @property
    def refracted(self) -> bool:
        return self._refracted

    @property
    def zenith_distance(self) -> float:
        """Zenith distance ``90 deg - alt`` [rad]."""
        return math.pi / 2.0 - self._alt

    def to_array(self, use_degrees: bool = False) -> Array:
        """Return ``[alt, az]`` in *rad* (or *deg*)."""
        values = jnp.array([self._alt, self._az], dtype=get_dtype())
        return jnp.rad2deg(values) if use_degrees else values

    def __eq__(self, other):
        if not isinstance(other, Horizontal):
            return NotImplemented
        return (self._alt, self._az, self._dist, self._refracted) == (
            other._alt, other._az, other._dist, other._refracted,
        )

    def __hash__(self):
        return hash((self._alt, self._az, self._dist, self._refracted))

    def __str__(self):
        from .formatting import HORIZONTAL_DEFAULT, format_coordinate

        return format_coordinate(self, HORIZONTAL_DEFAULT)

    def __repr__(self):
        return (
            f"Horizontal(alt={math.degrees(self._alt)!r}, az={math.degrees(self._az)!r}, "
            f"dist={self._dist!r}, refracted={self._refracted!r}, use_degrees=True)"
        )
