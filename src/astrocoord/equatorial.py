"""Equatorial coordinates and the astrometric to observed place pipeline.

An :class:`Equatorial` holds an astrometric (catalogue) place.  Reducing it
with :meth:`Equatorial.apparent` yields an :class:`ApparentEquatorial` that
remembers the astrometric original it came from and which kind of apparent
place it is:

==============  ==========================  ======================================
Observer        Weather given               Result
==============  ==========================  ======================================
none            ignored                     geocentric apparent place
``Geo``         none                        topocentric place, no refraction
``Geo``         any of p, T, RH             observed place, refraction applied
==============  ==========================  ======================================

The pipeline is ICRS -> CIRS (``atci13``, at TDB) for the geocentric place,
followed by CIRS -> observed (``atio13``, at UTC with UT1-UTC and polar
motion from the Earth orientation dataset) for the topocentric and
observed places.  The receiver is never modified.

Examples:
    ```python
    from astrocoord import Epoch, Equatorial, Frame, Geo
    eq = Equatorial.from_hms_dms(
        Frame.ICRF(), Epoch(2015, 11, 10), (12, 0, 0), (0, 0, 0), dist=1.0
    )
    geocentric = eq.apparent()
    eq.set_topo(Geo(38.0, -77.0, use_degrees=True))
    horizontal = eq.to_horiz(pressure=1013.25, temperature=15.0, humidity=0.5)
    ```
"""

from __future__ import annotations

import enum
import logging
import math
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from .config import get_default_eop, get_dtype
from .constants import SOLAR_PARALLAX, WAVELENGTH_VISUAL
from .coordinates.ecliptic import position_equatorial_to_ecliptic
from .ecliptic import Ecliptic, mean_obliquity, true_obliquity
from .eop import lookup_jd
from .epoch import Epoch, TimeSystem
from .errors import InvalidArgumentError, NumericDomainError, TransformationError
from .frame import Frame
from .geo import Geo
from .horizontal import Horizontal
from .sofa import ObservedPlace, anp, atci13, atio13
from .utils import dms_to_rad, hms_to_rad, normalize_angle, wrap_to_pi

logger = logging.getLogger(__name__)


class ApparentPlace(enum.Enum):
    """Kind of apparent place held by an :class:`ApparentEquatorial`."""

    GEOCENTRIC = "geocentric"
    TOPOCENTRIC = "topocentric"
    OBSERVED = "observed"


class Weather(NamedTuple):
    """Ambient conditions at the observer used for refraction.

    Attributes:
        pressure: Atmospheric pressure [hPa]. Zero disables refraction.
        temperature: Air temperature [deg C].
        humidity: Relative humidity, fraction ``0-1``.
    """

    pressure: float = 0.0
    temperature: float = 0.0
    humidity: float = 0.0


def _weather_from(pressure, temperature, humidity) -> Weather | None:
    if pressure is None and temperature is None and humidity is None:
        return None
    return Weather(
        0.0 if pressure is None else float(pressure),
        0.0 if temperature is None else float(temperature),
        0.0 if humidity is None else float(humidity),
    )


def _parallax_arcsec(dist: float | None) -> float:
    """Horizontal parallax [arcsec] of a body at ``dist`` AU, zero if unknown."""
    if dist is None or dist <= 0.0:
        return 0.0
    return SOLAR_PARALLAX / dist


def _validated_dec(dec: float) -> float:
    if not math.isfinite(dec) or abs(dec) > math.pi / 2.0 + 1e-12:
        raise InvalidArgumentError(
            f"Declination must be within [-90, 90] degrees, got {math.degrees(dec)}"
        )
    return max(-math.pi / 2.0, min(math.pi / 2.0, dec))


def _validated_ra(ra: float) -> float:
    if not math.isfinite(ra):
        raise InvalidArgumentError(f"Right ascension must be finite, got {ra}")
    return float(normalize_angle(ra))


def _validated_dist(dist: float | None) -> float | None:
    if dist is None:
        return None
    dist = float(dist)
    if not dist >= 0.0 or math.isinf(dist):
        raise InvalidArgumentError(f"Distance must be finite and non-negative, got {dist}")
    return dist


class Equatorial:
    """Astrometric right ascension, declination and optional distance.

    Args:
        frame: Reference frame of the place.
        epoch: Epoch of observation.
        ra: Right ascension. Units: *rad* (or *deg*).
        dec: Declination. Units: *rad* (or *deg*).
        dist: Distance [AU], or ``None`` if unknown.
        topo: Observer location, or ``None`` for a geocentric observer.
        use_degrees: If ``True``, ``ra`` and ``dec`` are in degrees.

    Raises:
        InvalidArgumentError: If the declination is outside ``[-90, 90]``
            degrees, the distance is negative, or ``frame``/``epoch``/``topo``
            have the wrong type.
    """

    __slots__ = ("_frame", "_epoch", "_ra", "_dec", "_dist", "_topo")

    def __init__(
        self,
        frame: Frame,
        epoch: Epoch,
        ra: float,
        dec: float,
        dist: float | None = None,
        topo: Geo | None = None,
        use_degrees: bool = False,
    ) -> None:
        if not isinstance(frame, Frame):
            raise InvalidArgumentError(f"frame must be a Frame, got {type(frame).__name__}")
        if not isinstance(epoch, Epoch):
            raise InvalidArgumentError(f"epoch must be an Epoch, got {type(epoch).__name__}")
        if topo is not None and not isinstance(topo, Geo):
            raise InvalidArgumentError(f"topo must be a Geo, got {type(topo).__name__}")

        ra = float(ra)
        dec = float(dec)
        if use_degrees:
            ra = math.radians(ra)
            dec = math.radians(dec)

        self._frame = frame
        self._epoch = epoch
        self._ra = _validated_ra(ra)
        self._dec = _validated_dec(dec)
        self._dist = _validated_dist(dist)
        self._topo = topo

    @classmethod
    def from_hms_dms(
        cls,
        frame: Frame,
        epoch: Epoch,
        ra: tuple[float, float, float],
        dec: tuple[float, float, float],
        dist: float | None = None,
        topo: Geo | None = None,
    ) -> Equatorial:
        """Create a place from sexagesimal right ascension and declination.

        Args:
            frame: Reference frame.
            epoch: Epoch of observation.
            ra: ``(hours, minutes, seconds)``.
            dec: ``(degrees, arcminutes, arcseconds)``; a negative sign on
                any component, including ``-0.0`` degrees, means South.
            dist: Distance [AU].
            topo: Observer location.

        Returns:
            Equatorial: New astrometric place.
        """
        return cls(frame, epoch, hms_to_rad(*ra), dms_to_rad(*dec), dist=dist, topo=topo)

    # Properties

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def epoch(self) -> Epoch:
        return self._epoch

    @property
    def ra(self) -> float:
        """Right ascension in ``[0, 2pi)`` [rad]."""
        return self._ra

    @property
    def dec(self) -> float:
        """Declination [rad]."""
        return self._dec

    @property
    def dist(self) -> float | None:
        """Distance [AU] or ``None``."""
        return self._dist

    @property
    def topo(self) -> Geo | None:
        """Observer location or ``None``."""
        return self._topo

    def is_apparent(self) -> bool:
        return False

    # Mutators

    def set_position(self, ra: float, dec: float, use_degrees: bool = False) -> Equatorial:
        """Replace the right ascension and declination.

        Returns:
            Equatorial: ``self``.
        """
        ra = float(ra)
        dec = float(dec)
        if use_degrees:
            ra = math.radians(ra)
            dec = math.radians(dec)
        new_ra = _validated_ra(ra)
        self._dec = _validated_dec(dec)
        self._ra = new_ra
        return self

    def set_topo(self, topo: Geo | None) -> Equatorial:
        """Replace the observer location.

        Returns:
            Equatorial: ``self``.
        """
        if topo is not None and not isinstance(topo, Geo):
            raise InvalidArgumentError(f"topo must be a Geo, got {type(topo).__name__}")
        self._topo = topo
        return self

    def set_distance(self, dist: float | None) -> Equatorial:
        """Replace the distance [AU].

        Returns:
            Equatorial: ``self``.
        """
        self._dist = _validated_dist(dist)
        return self

    def copy(self) -> Equatorial:
        return Equatorial(
            self._frame, self._epoch, self._ra, self._dec, self._dist, self._topo
        )

    def _astrometric(self) -> Equatorial:
        """The catalogue place the pipeline starts from."""
        return self

    # Transformations

    def apparent(
        self,
        pressure: float | None = None,
        temperature: float | None = None,
        humidity: float | None = None,
        eop=None,
    ) -> ApparentEquatorial:
        """Reduce this astrometric place to an apparent place.

        Without an observer location the geocentric apparent place is
        returned and any weather is ignored.  With an observer location the
        topocentric place is returned, with refraction when at least one
        weather parameter is given (missing ones default to zero).

        Args:
            pressure: Atmospheric pressure [hPa].
            temperature: Air temperature [deg C].
            humidity: Relative humidity, fraction ``0-1``.
            eop: Earth orientation dataset. Default: the configured default.

        Returns:
            ApparentEquatorial: New apparent place; ``self`` is unchanged.

        Raises:
            TransformationError: If the reduction produces no finite place.
        """
        weather = _weather_from(pressure, temperature, humidity)

        if self._topo is None:
            if weather is not None:
                logger.debug("Weather ignored for a geocentric apparent place")
            ra, dec = _geocentric_apparent(self)
            return ApparentEquatorial(self, ra, dec, ApparentPlace.GEOCENTRIC)

        if weather is None:
            obs = _observed_place(self, Weather(), eop)
            return ApparentEquatorial(self, obs.rob, obs.dob, ApparentPlace.TOPOCENTRIC)

        obs = _observed_place(self, weather, eop)
        return ApparentEquatorial(self, obs.rob, obs.dob, ApparentPlace.OBSERVED, weather)

    def to_horiz(
        self,
        pressure: float | None = None,
        temperature: float | None = None,
        humidity: float | None = None,
        eop=None,
    ) -> Horizontal:
        """Compute the observed altitude and azimuth of this place.

        Always starts from the astrometric place.  Refraction is applied when
        weather with a non-zero pressure is given.  Without an observer
        location the horizon of longitude 0, latitude 0 at sea level is used.

        Args:
            pressure: Atmospheric pressure [hPa].
            temperature: Air temperature [deg C].
            humidity: Relative humidity, fraction ``0-1``.
            eop: Earth orientation dataset. Default: the configured default.

        Returns:
            Horizontal: Observed altitude and azimuth.

        Raises:
            TransformationError: If the reduction produces no finite place.
        """
        source = self._astrometric()
        if source.topo is None:
            logger.warning(
                "Horizontal coordinates requested without an observer location; "
                "using longitude 0, latitude 0"
            )
        weather = _weather_from(pressure, temperature, humidity)
        obs = _observed_place(source, weather or Weather(), eop)
        refracted = weather is not None and weather.pressure > 0.0
        return Horizontal(
            math.pi / 2.0 - obs.zob, obs.aob, dist=source.dist, refracted=refracted
        )

    def to_eclip(self, obliquity: float | None = None) -> Ecliptic:
        """Convert to ecliptic coordinates.

        Astrometric places use their own position and the mean obliquity at
        the epoch.

        Args:
            obliquity: Obliquity of the ecliptic [rad]. Default: the mean
                obliquity at the epoch.

        Returns:
            Ecliptic: Longitude, latitude and the same distance.

        Raises:
            NumericDomainError: If the latitude cannot be computed.
        """
        if obliquity is None:
            obliquity = mean_obliquity(self._epoch)
        return _to_ecliptic(self._ra, self._dec, obliquity, self._dist)

    def to_cartesian(self):
        """Return the Cartesian position of this place.

        Raises:
            TransformationError: If the place has no distance.
        """
        from .cartesian import Cartesian

        return Cartesian.from_equatorial(self)

    def hour_angle(self, geo: Geo | None = None, use_degrees: bool = False, eop=None) -> float:
        """Local hour angle of this place, positive West.

        Args:
            geo: Observer location. Default: the stored observer location.
            use_degrees: If ``True``, return degrees.
            eop: Earth orientation dataset for UT1.

        Returns:
            float: Local apparent sidereal time minus right ascension, in
                ``[-pi, pi)`` (or ``[-180, 180)``).

        Raises:
            TransformationError: If no observer location is available.
        """
        geo = self._topo if geo is None else geo
        if geo is None:
            raise TransformationError("An observer location is required for the hour angle")
        last = self._epoch.local_sidereal_time(geo.lon, eop=eop)
        ha = float(wrap_to_pi(last - self._ra))
        return math.degrees(ha) if use_degrees else ha

    def to_array(self, use_degrees: bool = False) -> Array:
        """Return ``[ra, dec]`` in *rad* (or *deg*)."""
        values = jnp.array([self._ra, self._dec], dtype=get_dtype())
        return jnp.rad2deg(values) if use_degrees else values

    def __str__(self):
        from .formatting import EQUATORIAL_DEFAULT, format_coordinate

        return format_coordinate(self, EQUATORIAL_DEFAULT)

    def __repr__(self):
        return (
            f"{type(self).__name__}(frame={self._frame!s}, epoch={self._epoch!s}, "
            f"ra={math.degrees(self._ra)!r}, dec={math.degrees(self._dec)!r}, "
            f"dist={self._dist!r}, topo={self._topo!r}, use_degrees=True)"
        )


class ApparentEquatorial(Equatorial):
    """Apparent place produced by :meth:`Equatorial.apparent`.

    Args:
        base: Astrometric place this was reduced from; a snapshot is kept.
        ra: Apparent right ascension [rad].
        dec: Apparent declination [rad].
        place: Kind of apparent place.
        weather: Weather used for refraction, ``None`` when not refracted.
    """

    __slots__ = ("_base", "_place", "_weather")

    def __init__(
        self,
        base: Equatorial,
        ra: float,
        dec: float,
        place: ApparentPlace,
        weather: Weather | None = None,
    ) -> None:
        super().__init__(base.frame, base.epoch, ra, dec, base.dist, base.topo)
        self._base = base._astrometric().copy()
        self._place = ApparentPlace(place)
        self._weather = weather

    @property
    def base(self) -> Equatorial:
        """Copy of the astrometric place this was reduced from."""
        return self._base.copy()

    @property
    def saved_original(self) -> Equatorial:
        """Alias of :attr:`base`."""
        return self.base

    @property
    def place(self) -> ApparentPlace:
        return self._place

    @property
    def weather(self) -> Weather | None:
        return self._weather

    def is_apparent(self) -> bool:
        return True

    def copy(self) -> ApparentEquatorial:
        clone = ApparentEquatorial(self._base, self._ra, self._dec, self._place, self._weather)
        clone._dist = self._dist
        clone._topo = self._topo
        return clone

    def _astrometric(self) -> Equatorial:
        # later set_topo / set_distance calls apply to the reduction source
        return self._base.copy().set_topo(self._topo).set_distance(self._dist)

    def apparent(self, pressure=None, temperature=None, humidity=None, eop=None):
        """Return a copy; an apparent place is not reduced twice."""
        return self.copy()

    def to_eclip(self, obliquity: float | None = None) -> Ecliptic:
        """Convert to ecliptic coordinates of date.

        The geocentric apparent place is recomputed from :attr:`base` (the
        observer location is dropped) and referred to the true obliquity at
        the epoch.

        Args:
            obliquity: Obliquity of the ecliptic [rad]. Default: the true
                obliquity at the epoch.

        Returns:
            Ecliptic: Apparent ecliptic longitude, latitude and distance.
        """
        source = self._astrometric().set_topo(None)
        ra, dec = _geocentric_apparent(source)
        if obliquity is None:
            obliquity = true_obliquity(self._epoch)
        return _to_ecliptic(ra, dec, obliquity, source.dist)


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------


def _cirs(eq: Equatorial) -> tuple[float, float, float]:
    """ICRS -> CIRS for a geocentric observer, returns ``(ri, di, eo)``."""
    tdb1, tdb2 = (float(d) for d in eq.epoch.jd_parts(TimeSystem.TDB))
    px = _parallax_arcsec(eq.dist)
    logger.debug("ICRS -> CIRS at TDB %.1f + %.12f, parallax %.6f arcsec", tdb1, tdb2, px)
    return atci13(eq.ra, eq.dec, 0.0, 0.0, px, 0.0, tdb1, tdb2)


def _geocentric_apparent(eq: Equatorial) -> tuple[float, float]:
    ri, di, eo = _cirs(eq)
    ra = float(anp(ri - eo))
    if not (math.isfinite(ra) and math.isfinite(di)):
        raise TransformationError("cannot determine apparent coordinates")
    return ra, di


def _observed_place(eq: Equatorial, weather: Weather, eop) -> ObservedPlace:
    if eop is None:
        eop = get_default_eop()

    ri, di, _ = _cirs(eq)

    utc1, utc2 = (float(d) for d in eq.epoch.jd_parts(TimeSystem.UTC, eop))
    dut1, xp, yp = (float(v) for v in lookup_jd(eop, utc1 + utc2))
    logger.debug(
        "CIRS -> observed at UTC %.1f + %.12f, dUT1 %.6f s, xp %.3e rad, yp %.3e rad",
        utc1, utc2, dut1, xp, yp,
    )

    topo = eq.topo
    if topo is None:
        elong, phi, hm = 0.0, 0.0, 0.0
    else:
        elong, phi, hm = topo.lon, topo.lat, topo.height

    obs = atio13(
        ri, di, utc1, utc2, dut1, elong, phi, hm, xp, yp,
        weather.pressure, weather.temperature, weather.humidity, WAVELENGTH_VISUAL,
    )
    if not all(math.isfinite(v) for v in obs):
        raise TransformationError("cannot determine apparent coordinates")
    return obs


def _to_ecliptic(ra: float, dec: float, obliquity: float, dist: float | None) -> Ecliptic:
    lon, lat = position_equatorial_to_ecliptic(ra, dec, obliquity)
    lat = float(lat)
    if math.isnan(lat):
        raise NumericDomainError("Ecliptic latitude is outside the domain of asin")
    return Ecliptic(float(lon), lat, dist=dist)
