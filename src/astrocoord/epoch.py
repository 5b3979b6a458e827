"""The epoch module provides the ``Epoch`` class for representing instants in time.

An Epoch stores an integer Julian Day number, the seconds elapsed since that
day began (Julian days begin at noon) and the :class:`TimeSystem` the instant
is expressed in.  Conversions between time systems pivot through TAI:

- UTC <-> TAI via the leap second table,
- TT = TAI + 32.184 s,
- TDB = TT + the periodic TDB-TT term,
- UT1 = UTC + (UT1-UTC) from an Earth orientation dataset.

The Epoch class is registered as a JAX pytree (the time system travels as
static auxiliary data), making it compatible with ``jax.jit`` and
``jax.vmap``.  Arithmetic, comparison and time-scale conversions use JAX
operations; ``caldate``, ``gast`` and string rendering work on concrete
values only.
"""

from __future__ import annotations

import enum
import math
import re

import jax
import jax.numpy as jnp

from .config import get_default_eop, get_dtype, get_epoch_eq_tolerance
from .constants import (
    BESSELIAN_YEAR,
    JD2000,
    JD_B1900,
    JD_B1950,
    JD_MJD_OFFSET,
    JULIAN_YEAR,
    SECONDS_PER_DAY,
)
from .errors import InvalidArgumentError
from .time import TT_TAI, caldate_to_jd, jd_to_caldate, leap_seconds_tai_utc, tdb_minus_tt

# Valid ISO 8601 epoch string patterns
_EPOCH_PATTERNS = [
    # YYYY-MM-DD
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})$'),
    # YYYY-MM-DDTHH:MM:SS[Z]
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z?$'),
    # YYYY-MM-DDTHH:MM:SS.fff[Z]
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d+)Z?$'),
]


class TimeSystem(enum.Enum):
    """Time scales an :class:`Epoch` can be expressed in."""

    UTC = "UTC"
    TAI = "TAI"
    TT = "TT"
    TDB = "TDB"
    UT1 = "UT1"


def _coerce_time_system(value) -> TimeSystem:
    if isinstance(value, TimeSystem):
        return value
    try:
        return TimeSystem(str(value).upper())
    except ValueError:
        raise InvalidArgumentError(f"Unknown time system: {value!r}") from None


class Epoch:
    """Represents a single instant in time in a given time system.

    The internal representation uses three private components:
        ``_jd`` (jnp.int32), ``_seconds`` (float, module dtype) and
        ``_time_system`` (:class:`TimeSystem`).

    Constructors:
        Epoch(2018, 1, 1)
        Epoch(2018, 1, 1, 12, 0, 0.0, time_system=TimeSystem.TT)
        Epoch("2018-01-01T12:00:00Z")
        Epoch(other_epoch)
        Epoch.from_jd(2451545.0, time_system=TimeSystem.TT)
        Epoch.from_mjd(51544.5)
        Epoch.J2000(), Epoch.B1950()
        Epoch.julian(2015.5), Epoch.besselian(1950.0)
    """

    __slots__ = ('_jd', '_seconds', '_time_system')

    def __init__(
        self,
        *args: int | float | str | Epoch,
        time_system: TimeSystem | str = TimeSystem.UTC,
    ) -> None:
        """Initialize Epoch. Supports multiple constructor forms.

        Args:
            *args: Either (year, month, day[, hour, minute, second]),
                a string in ISO 8601 format, or another Epoch instance.
            time_system: Time system of the supplied date.  Ignored when
                copying another Epoch. Default: UTC.

        Raises:
            InvalidArgumentError: If the arguments do not describe a date.
        """
        self._jd = jnp.int32(0)
        self._seconds = get_dtype()(0.0)
        self._time_system = _coerce_time_system(time_system)

        if len(args) == 1:
            if isinstance(args[0], str):
                self._init_string(args[0])
            elif isinstance(args[0], Epoch):
                self._init_epoch(args[0])
            else:
                raise InvalidArgumentError(f"Cannot construct Epoch from {type(args[0])}")
        elif 3 <= len(args) <= 6:
            self._init_date(*args)
        else:
            raise InvalidArgumentError(
                "Epoch requires date components (3-6 args), a string, or an Epoch"
            )

    @classmethod
    def _from_internal(cls, jd, seconds, time_system):
        """Create an Epoch from raw values without Python-side processing.

        No normalization is performed; the caller must ensure values are
        already normalized.
        """
        obj = object.__new__(cls)
        obj._jd = jd
        obj._seconds = seconds
        obj._time_system = time_system
        return obj

    @classmethod
    def _from_split(cls, jd, seconds, time_system):
        day_offset = jnp.int32(jnp.floor(seconds / SECONDS_PER_DAY))
        seconds = seconds - get_dtype()(day_offset) * SECONDS_PER_DAY
        return cls._from_internal(jnp.int32(jd) + day_offset, seconds, time_system)

    # Named constructors

    @classmethod
    def from_jd(
        cls,
        jd1: float,
        jd2: float = 0.0,
        time_system: TimeSystem | str = TimeSystem.UTC,
    ) -> Epoch:
        """Create an Epoch from a (possibly two-part) Julian Date.

        Args:
            jd1: Julian Date, or its first part.
            jd2: Second part of the Julian Date. Default: 0.0
            time_system: Time system of the date. Default: UTC.

        Returns:
            Epoch: The instant ``jd1 + jd2``.

        Raises:
            InvalidArgumentError: If the date is not finite.
        """
        jd1 = float(jd1)
        jd2 = float(jd2)
        if not (math.isfinite(jd1) and math.isfinite(jd2)):
            raise InvalidArgumentError(f"Julian Date must be finite, got {jd1} + {jd2}")
        whole1 = math.floor(jd1)
        whole2 = math.floor(jd2)
        seconds = ((jd1 - whole1) + (jd2 - whole2)) * SECONDS_PER_DAY
        return cls._from_split(
            whole1 + whole2, get_dtype()(seconds), _coerce_time_system(time_system)
        )

    @classmethod
    def from_mjd(cls, mjd: float, time_system: TimeSystem | str = TimeSystem.UTC) -> Epoch:
        """Create an Epoch from a Modified Julian Date.

        Args:
            mjd: Modified Julian Date.
            time_system: Time system of the date. Default: UTC.

        Returns:
            Epoch: The instant ``mjd``.
        """
        return cls.from_jd(JD_MJD_OFFSET, mjd, time_system=time_system)

    @classmethod
    def J2000(cls) -> Epoch:
        """Return the standard epoch J2000.0, JD 2451545.0 TT."""
        return cls.from_jd(JD2000, time_system=TimeSystem.TT)

    @classmethod
    def B1950(cls) -> Epoch:
        """Return the standard epoch B1950.0, JD 2433282.4235 TT."""
        return cls.from_jd(JD_B1950, time_system=TimeSystem.TT)

    @classmethod
    def julian(cls, year: float) -> Epoch:
        """Return the Julian epoch ``J<year>`` in TT.

        Args:
            year: Julian epoch year, e.g. ``2015.5``.

        Returns:
            Epoch: ``JD 2451545.0 + (year - 2000) * 365.25`` TT.
        """
        return cls.from_jd(JD2000, (year - 2000.0) * JULIAN_YEAR, time_system=TimeSystem.TT)

    @classmethod
    def besselian(cls, year: float) -> Epoch:
        """Return the Besselian epoch ``B<year>`` in TT.

        Args:
            year: Besselian epoch year, e.g. ``1950.0``.

        Returns:
            Epoch: ``JD 2415020.31352 + (year - 1900) * 365.242198781`` TT.
        """
        return cls.from_jd(
            JD_B1900, (year - 1900.0) * BESSELIAN_YEAR, time_system=TimeSystem.TT
        )

    def _init_date(self, year, month, day, hour=0, minute=0, second=0.0):
        if not 1 <= month <= 12:
            raise InvalidArgumentError(f"Month must be in 1..12, got {month}")
        if not 1 <= day <= 31:
            raise InvalidArgumentError(f"Day must be in 1..31, got {day}")
        if not 0 <= hour <= 23 or not 0 <= minute <= 59 or not 0.0 <= second < 61.0:
            raise InvalidArgumentError(
                f"Invalid time of day {hour}:{minute}:{second}"
            )

        # JD of the date at 0h falls on a half day
        jd_full = float(caldate_to_jd(year, month, day))

        jd_int = int(math.floor(jd_full))
        frac_day = jd_full - jd_int

        seconds = (frac_day * SECONDS_PER_DAY
                   + hour * 3600.0 + minute * 60.0 + second)

        normalized = Epoch._from_split(jd_int, get_dtype()(seconds), self._time_system)
        self._jd = normalized._jd
        self._seconds = normalized._seconds

    def _init_string(self, string):
        """Initialize from an ISO 8601 string.

        Supported formats:
            - ``YYYY-MM-DD``
            - ``YYYY-MM-DDTHH:MM:SS[Z]``
            - ``YYYY-MM-DDTHH:MM:SS.fff[Z]``
        """
        for pattern in _EPOCH_PATTERNS:
            m = pattern.match(string)
            if m:
                groups = m.groups()
                year = int(groups[0])
                month = int(groups[1])
                day = int(groups[2])

                hour = 0
                minute = 0
                second = 0.0

                if len(groups) >= 6:
                    hour = int(groups[3])
                    minute = int(groups[4])
                    second = float(groups[5])

                if len(groups) == 7:
                    second += float(f"0.{groups[6]}")

                self._init_date(year, month, day, hour, minute, second)
                return

        raise InvalidArgumentError(
            f'Invalid Epoch string: "{string}" is not ISO 8601 compliant'
        )

    def _init_epoch(self, other):
        self._jd = other._jd
        self._seconds = other._seconds
        self._time_system = other._time_system

    @property
    def time_system(self) -> TimeSystem:
        """Time system this Epoch is expressed in."""
        return self._time_system

    # Time-scale conversion

    def _to_tai_offset(self, eop):
        """Seconds to add to this Epoch's own-scale value to reach TAI."""
        ts = self._time_system
        if ts == TimeSystem.TAI:
            return get_dtype()(0.0)
        if ts == TimeSystem.TT:
            return get_dtype()(-TT_TAI)
        if ts == TimeSystem.TDB:
            return -(TT_TAI + tdb_minus_tt(self._raw_jd()))
        mjd = self._raw_jd() - JD_MJD_OFFSET
        if ts == TimeSystem.UTC:
            return leap_seconds_tai_utc(mjd)
        # UT1: UT1-UTC sampled at the UT1 date differs negligibly from UTC
        from .eop import get_ut1_utc

        dut1 = get_ut1_utc(eop, mjd)
        return leap_seconds_tai_utc(mjd - dut1 / SECONDS_PER_DAY) - dut1

    @staticmethod
    def _from_tai_offset(jd_tai, time_system, eop):
        """Seconds to add to a TAI value to express it in ``time_system``."""
        if time_system == TimeSystem.TAI:
            return get_dtype()(0.0)
        if time_system == TimeSystem.TT:
            return get_dtype()(TT_TAI)
        if time_system == TimeSystem.TDB:
            return TT_TAI + tdb_minus_tt(jd_tai + TT_TAI / SECONDS_PER_DAY)
        mjd_tai = jd_tai - JD_MJD_OFFSET
        leap = leap_seconds_tai_utc(mjd_tai)
        leap = leap_seconds_tai_utc(mjd_tai - leap / SECONDS_PER_DAY)
        if time_system == TimeSystem.UTC:
            return -leap
        from .eop import get_ut1_utc

        return get_ut1_utc(eop, mjd_tai - leap / SECONDS_PER_DAY) - leap

    def _raw_jd(self):
        return get_dtype()(self._jd) + self._seconds / SECONDS_PER_DAY

    def _offset_seconds(self, time_system, eop=None):
        """Seconds to add to the internal value to express it in ``time_system``."""
        time_system = _coerce_time_system(time_system)
        if time_system == self._time_system:
            return get_dtype()(0.0)
        if eop is None:
            eop = get_default_eop()
        to_tai = self._to_tai_offset(eop)
        jd_tai = self._raw_jd() + to_tai / SECONDS_PER_DAY
        return to_tai + Epoch._from_tai_offset(jd_tai, time_system, eop)

    def to(self, time_system: TimeSystem | str, eop=None) -> Epoch:
        """Return the same instant expressed in another time system.

        Args:
            time_system: Target time system.
            eop: EOP dataset for UT1 conversions. Default: the configured
                default dataset.

        Returns:
            Epoch: New Epoch in ``time_system``.
        """
        time_system = _coerce_time_system(time_system)
        offset = self._offset_seconds(time_system, eop)
        return Epoch._from_split(self._jd, self._seconds + offset, time_system)

    def jd_parts(self, time_system: TimeSystem | str | None = None, eop=None):
        """Return the Julian Date as two parts, as the SOFA routines expect.

        The first part is the integral Julian Day number (a half-day value
        in calendar terms), the second the fraction of the day.

        Args:
            time_system: Time system of the result. Default: own time system.
            eop: EOP dataset for UT1 conversions.

        Returns:
            tuple: ``(date1, date2)`` with ``date1 + date2`` the Julian Date.
        """
        if time_system is None:
            time_system = self._time_system
        offset = self._offset_seconds(time_system, eop)
        return (
            get_dtype()(self._jd),
            (self._seconds + offset) / SECONDS_PER_DAY,
        )

    def jd(self, time_system: TimeSystem | str | None = None, eop=None) -> jax.Array:
        """Return the Julian Date.

        Args:
            time_system: Time system of the result. Default: own time system.
            eop: EOP dataset for UT1 conversions.

        Returns:
            Julian Date as a single float.
        """
        date1, date2 = self.jd_parts(time_system, eop)
        return date1 + date2

    def mjd(self, time_system: TimeSystem | str | None = None, eop=None) -> jax.Array:
        """Return the Modified Julian Date.

        Args:
            time_system: Time system of the result. Default: own time system.
            eop: EOP dataset for UT1 conversions.

        Returns:
            Modified Julian Date.
        """
        date1, date2 = self.jd_parts(time_system, eop)
        return (date1 - JD_MJD_OFFSET) + date2

    def julian_year(self) -> jax.Array:
        """Return the Julian epoch year, e.g. ``2000.0`` at J2000.0."""
        return 2000.0 + (self.jd(TimeSystem.TT) - JD2000) / JULIAN_YEAR

    def besselian_year(self) -> jax.Array:
        """Return the Besselian epoch year, e.g. ``1950.0`` at B1950.0."""
        return 1900.0 + (self.jd(TimeSystem.TT) - JD_B1900) / BESSELIAN_YEAR

    # Arithmetic operators

    def __add__(self, delta: float) -> Epoch:
        """Return a new Epoch with seconds added.

        Args:
            delta (float): Seconds to add.

        Returns:
            Epoch: New Epoch advanced by delta seconds.
        """
        return Epoch._from_split(self._jd, self._seconds + delta, self._time_system)

    def __sub__(self, other: Epoch | float) -> Epoch | jax.Array:
        """Subtract seconds or compute difference between Epochs.

        Args:
            other: If Epoch, returns the time difference in seconds (the
                other Epoch is first converted to this one's time system).
                If numeric, returns a new Epoch with seconds subtracted.

        Returns:
            float or Epoch: Time difference in seconds, or new Epoch.
        """
        if isinstance(other, Epoch):
            other = other._aligned(self._time_system)
            return ((self._jd - other._jd) * SECONDS_PER_DAY
                    + (self._seconds - other._seconds))
        return self.__add__(-other)

    def _aligned(self, time_system):
        if self._time_system == time_system:
            return self
        return self.to(time_system)

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.abs(self - other) < get_epoch_eq_tolerance()

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return ~self.__eq__(other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self - other) < 0.0

    def __le__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__lt__(other) | self.__eq__(other)

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self - other) > 0.0

    def __ge__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__gt__(other) | self.__eq__(other)

    # Calendar

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the calendar date components in this Epoch's time system.

        This method extracts concrete Python values from JAX arrays and
        is not traceable under ``jax.jit``.

        Returns:
            tuple: (year, month, day, hour, minute, second) where second
                includes fractional part.
        """
        jd_midnight, civil_time = self._civil()
        year, month, day, _, _, _ = jd_to_caldate(jd_midnight)

        hour = int(civil_time // 3600)
        civil_time -= hour * 3600
        minute = int(civil_time // 60)
        second = civil_time - minute * 60

        return int(year), int(month), int(day), hour, minute, second

    def _civil(self) -> tuple[float, float]:
        """Return the JD of the preceding civil midnight and the seconds since it."""
        seconds = float(self._seconds)
        # Julian days begin at noon
        if seconds >= 43200.0:
            return int(self._jd) + 0.5, seconds - 43200.0
        return int(self._jd) - 0.5, seconds + 43200.0

    # Sidereal time

    def gmst(self, use_degrees: bool = False, eop=None) -> jax.Array:
        """Compute Greenwich Mean Sidereal Time using the IAU 1982 model.

        Uses the Vallado GMST82 polynomial evaluated at UT1, with UT1-UTC
        taken from ``eop`` (or the configured default dataset).

        Args:
            use_degrees (bool): If True, return in degrees. Default: False
                (radians).
            eop: EOP dataset for the UT1 conversion.

        Returns:
            Greenwich Mean Sidereal Time. Units: rad (or deg if
                use_degrees=True)

        References:

            1. D. Vallado, *Fundamentals of Astrodynamics and Applications
               (4th Ed.)*, 2010.
        """
        date1, date2 = self.jd_parts(TimeSystem.UT1, eop)
        t_ut1 = ((date1 - JD2000) + date2) / 36525.0

        # GMST in seconds of time
        gmst_sec = (67310.54841
                    + (876600.0 * 3600.0 + 8640184.812866) * t_ut1
                    + 0.093104 * t_ut1 * t_ut1
                    - 6.2e-6 * t_ut1 * t_ut1 * t_ut1)

        # 1 second of time = 1/240 degree
        gmst_rad = jnp.mod(gmst_sec / 240.0 * jnp.pi / 180.0, 2.0 * jnp.pi)

        return jnp.where(use_degrees, gmst_rad * 180.0 / jnp.pi, gmst_rad)

    def gast(self, use_degrees: bool = False, eop=None) -> jax.Array:
        """Compute Greenwich Apparent Sidereal Time.

        GAST = GMST + dpsi * cos(eps0), with the IAU 2000A nutation in
        longitude and the IAU 2006 mean obliquity at this instant (TT).

        Args:
            use_degrees (bool): If True, return in degrees. Default: False
            eop: EOP dataset for the UT1 conversion.

        Returns:
            Greenwich Apparent Sidereal Time. Units: rad (or deg).
        """
        from .sofa import anp, nut06a, obl06

        tt1, tt2 = self.jd_parts(TimeSystem.TT)
        dpsi, _ = nut06a(tt1, tt2)
        eps0 = obl06(tt1, tt2)
        gast = anp(self.gmst(eop=eop) + dpsi * jnp.cos(eps0))
        return jnp.where(use_degrees, gast * 180.0 / jnp.pi, gast)

    def local_sidereal_time(
        self, longitude: float, use_degrees: bool = False, eop=None
    ) -> jax.Array:
        """Compute local apparent sidereal time at a geographic longitude.

        Args:
            longitude: Longitude, East positive. Units: rad (or deg).
            use_degrees (bool): If True, ``longitude`` and the result are in
                degrees. Default: False
            eop: EOP dataset for the UT1 conversion.

        Returns:
            Local apparent sidereal time in ``[0, 2pi)`` (or ``[0, 360)``).
        """
        from .sofa import anp

        lon = jnp.where(use_degrees, jnp.deg2rad(longitude), longitude)
        last = anp(self.gast(eop=eop) + lon)
        return jnp.where(use_degrees, jnp.rad2deg(last), last)

    # String representations

    def isoformat(self, precision: int = 3) -> str:
        """Return the ISO 8601 date and time in this Epoch's time system.

        Args:
            precision: Number of decimals on the seconds. Default: 3

        Returns:
            str: ``YYYY-MM-DDTHH:MM:SS.fff``
        """
        jd_midnight, civil_time = self._civil()
        scale = 10 ** precision
        units = round(civil_time * scale)
        if units >= 86400 * scale:
            units -= 86400 * scale
            jd_midnight += 1.0
        year, month, day, _, _, _ = jd_to_caldate(jd_midnight)

        whole, fraction = divmod(units, scale)
        hour, rem = divmod(whole, 3600)
        minute, second = divmod(rem, 60)
        text = (f'{int(year):04d}-{int(month):02d}-{int(day):02d}T'
                f'{hour:02d}:{minute:02d}:{second:02d}')
        if precision > 0:
            text += f'.{fraction:0{precision}d}'
        return text

    def __str__(self):
        return f'{self.isoformat()} {self._time_system.value}'

    def __repr__(self):
        return (f'Epoch(_jd={int(self._jd)}, _seconds={float(self._seconds)}, '
                f'time_system={self._time_system.value})')

    def __hash__(self):
        # Keyed on the TAI minute so Epochs equal within tolerance share a
        # hash; only pairs straddling a minute boundary can still differ.
        tai = self._aligned(TimeSystem.TAI)
        return hash((int(tai._jd), int(float(tai._seconds) // 60.0)))


# Register Epoch as a JAX pytree so it can be used with jit, vmap, scan, etc.
jax.tree_util.register_pytree_node(
    Epoch,
    lambda e: ((e._jd, e._seconds), e._time_system),
    lambda ts, children: Epoch._from_internal(*children, ts),
)
