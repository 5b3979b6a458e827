"""Tests for time-scale offsets and calendar conversions."""

import jax
import jax.numpy as jnp
import pytest

from astrocoord.time import (
    TT_TAI,
    caldate_to_jd,
    caldate_to_mjd,
    jd_to_caldate,
    leap_seconds_tai_utc,
    tdb_minus_tt,
)


class TestLeapSeconds:
    def test_before_1972(self):
        assert float(leap_seconds_tai_utc(40000.0)) == 10.0

    def test_1972_jul(self):
        assert float(leap_seconds_tai_utc(41499.0)) == 11.0

    def test_day_before_step(self):
        # 2016-12-31
        assert float(leap_seconds_tai_utc(57753.5)) == 36.0

    def test_2017_jan(self):
        assert float(leap_seconds_tai_utc(57754.0)) == 37.0

    def test_after_table_holds(self):
        assert float(leap_seconds_tai_utc(61000.0)) == 37.0

    def test_vectorized(self):
        values = leap_seconds_tai_utc(jnp.array([41317.0, 51179.0, 57754.0]))
        assert [float(v) for v in values] == [10.0, 32.0, 37.0]

    def test_jit(self):
        assert float(jax.jit(leap_seconds_tai_utc)(54195.0)) == 33.0


class TestTdbMinusTt:
    def test_tt_tai_constant(self):
        assert TT_TAI == 32.184

    def test_amplitude_bounded(self):
        jds = jnp.linspace(2451545.0, 2451545.0 + 365.25, 50)
        values = tdb_minus_tt(jds)
        assert float(jnp.max(jnp.abs(values))) < 0.00168

    def test_j2000_value(self):
        g = jnp.deg2rad(357.53)
        expected = 0.001657 * jnp.sin(g) + 0.000014 * jnp.sin(2.0 * g)
        assert float(tdb_minus_tt(2451545.0)) == pytest.approx(float(expected), abs=1e-12)


class TestCalendar:
    def test_mjd_j2000(self):
        assert float(caldate_to_mjd(2000, 1, 1, 12, 0, 0.0)) == pytest.approx(51544.5, abs=1e-9)

    def test_jd_j2000(self):
        assert float(caldate_to_jd(2000, 1, 1, 12)) == pytest.approx(2451545.0, abs=1e-9)

    def test_jd_february(self):
        # Meeus example 7.a: 1957 October 4.81 -> JD 2436116.31
        jd = caldate_to_jd(1957, 10, 4, 19, 26, 24.0)
        assert float(jd) == pytest.approx(2436116.31, abs=1e-6)

    def test_jd_to_caldate(self):
        year, month, day, hour, minute, second = jd_to_caldate(2436116.31)
        assert (int(year), int(month), int(day)) == (1957, 10, 4)
        assert (int(hour), int(minute)) == (19, 26)
        assert float(second) == pytest.approx(24.0, abs=1e-3)

    def test_jd_to_caldate_afternoon(self):
        # 13:30 needs more than 2**31 microseconds
        year, month, day, hour, minute, second = jd_to_caldate(2451545.0625)
        assert (int(year), int(month), int(day)) == (2000, 1, 1)
        assert (int(hour), int(minute)) == (13, 30)
        assert float(second) == pytest.approx(0.0, abs=1e-3)

    def test_jd_to_caldate_late_evening(self):
        jd = caldate_to_jd(2015, 11, 10, 23, 59, 30.0)
        _, _, _, hour, minute, second = jd_to_caldate(jd)
        assert (int(hour), int(minute)) == (23, 59)
        assert float(second) == pytest.approx(30.0, abs=1e-3)

    def test_jd_to_caldate_leap_day(self):
        jd = caldate_to_jd(2024, 2, 29)
        year, month, day, hour, _, _ = jd_to_caldate(jd)
        assert (int(year), int(month), int(day), int(hour)) == (2024, 2, 29, 0)

    def test_jd_to_caldate_julian_calendar(self):
        # Meeus: JD 2026871.8 = 837 April 10.3
        year, month, day, _, _, _ = jd_to_caldate(2026871.8)
        assert (int(year), int(month), int(day)) == (837, 4, 10)
