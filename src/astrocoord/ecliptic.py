"""Ecliptic coordinates and the obliquity of the ecliptic.

:func:`mean_obliquity` uses the IAU 2006 precession model; the
:func:`true_obliquity` adds the IAU 2000A nutation in obliquity.  Which one a
conversion uses is decided by :class:`~astrocoord.equatorial.Equatorial`:
astrometric places are referred to the mean ecliptic, apparent places to the
true ecliptic of date.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from .config import get_dtype
from .coordinates.ecliptic import position_ecliptic_to_equatorial
from .epoch import Epoch, TimeSystem
from .errors import InvalidArgumentError, NumericDomainError
from .sofa import nut06a, obl06
from .utils import normalize_angle


def mean_obliquity(epoch: Epoch) -> float:
    """Return the mean obliquity of the ecliptic at ``epoch`` [rad].

    Args:
        epoch: Instant of interest (any time system).

    Returns:
        float: IAU 2006 mean obliquity.
    """
    date1, date2 = epoch.jd_parts(TimeSystem.TT)
    return float(obl06(date1, date2))


def true_obliquity(epoch: Epoch) -> float:
    """Return the true obliquity of the ecliptic at ``epoch`` [rad].

    Args:
        epoch: Instant of interest (any time system).

    Returns:
        float: Mean obliquity plus the nutation in obliquity.
    """
    date1, date2 = epoch.jd_parts(TimeSystem.TT)
    _, deps = nut06a(date1, date2)
    return float(obl06(date1, date2)) + deps


def _checked_latitude(value: float, what: str) -> float:
    if math.isnan(value):
        raise NumericDomainError(f"{what} is outside the domain of asin")
    return value


class Ecliptic:
    """Ecliptic longitude, latitude and optional distance.

    Args:
        lon: Ecliptic longitude. Units: *rad* (or *deg*).
        lat: Ecliptic latitude. Units: *rad* (or *deg*).
        dist: Distance [AU], or ``None`` if unknown.
        use_degrees: If ``True``, ``lon`` and ``lat`` are in degrees.

    Raises:
        InvalidArgumentError: If the latitude is outside ``[-90, 90]``
            degrees or the distance is negative.
    """

    __slots__ = ("_lon", "_lat", "_dist")

    def __init__(
        self,
        lon: float,
        lat: float,
        dist: float | None = None,
        use_degrees: bool = False,
    ) -> None:
        lon = float(lon)
        lat = float(lat)
        if use_degrees:
            lon = math.radians(lon)
            lat = math.radians(lat)
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise InvalidArgumentError("Ecliptic coordinates must be finite")
        if abs(lat) > math.pi / 2.0 + 1e-12:
            raise InvalidArgumentError(
                f"Ecliptic latitude must be within [-90, 90] degrees, got {math.degrees(lat)}"
            )
        if dist is not None and not float(dist) >= 0.0:
            raise InvalidArgumentError(f"Distance must be non-negative, got {dist}")

        self._lon = float(normalize_angle(lon))
        self._lat = max(-math.pi / 2.0, min(math.pi / 2.0, lat))
        self._dist = None if dist is None else float(dist)

    @property
    def lon(self) -> float:
        """Ecliptic longitude in ``[0, 2pi)`` [rad]."""
        return self._lon

    @property
    def lat(self) -> float:
        """Ecliptic latitude [rad]."""
        return self._lat

    @property
    def dist(self) -> float | None:
        """Distance [AU] or ``None``."""
        return self._dist

    def to_equatorial(self, frame, epoch: Epoch, obliquity: float | None = None):
        """Convert to equatorial coordinates.

        Args:
            frame: :class:`~astrocoord.frame.Frame` of the result.
            epoch: Epoch of the result; also the date of the default
                obliquity.
            obliquity: Obliquity of the ecliptic [rad]. Default: the mean
                obliquity at ``epoch``.

        Returns:
            Equatorial: Right ascension and declination, distance passed
                through.

        Raises:
            NumericDomainError: If the declination cannot be computed.
        """
        from .equatorial import Equatorial

        if obliquity is None:
            obliquity = mean_obliquity(epoch)
        ra, dec = position_ecliptic_to_equatorial(self._lon, self._lat, obliquity)
        dec = _checked_latitude(float(dec), "Declination")
        return Equatorial(frame, epoch, float(ra), dec, dist=self._dist)

    def to_array(self, use_degrees: bool = False) -> Array:
        """Return ``[lon, lat]`` in *rad* (or *deg*)."""
        values = jnp.array([self._lon, self._lat], dtype=get_dtype())
        return jnp.rad2deg(values) if use_degrees else values

    def __eq__(self, other):
        if not isinstance(other, Ecliptic):
            return NotImplemented
        return (self._lon, self._lat, self._dist) == (other._lon, other._lat, other._dist)

    def __hash__(self):
        return hash((self._lon, self._lat, self._dist))

    def __str__(self):
        from .formatting import ECLIPTIC_DEFAULT, format_coordinate

        return format_coordinate(self, ECLIPTIC_DEFAULT)

    def __repr__(self):
        return (
            f"Ecliptic(lon={math.degrees(self._lon)!r}, lat={math.degrees(self._lat)!r}, "
            f"dist={self._dist!r}, use_degrees=True)"
        )
