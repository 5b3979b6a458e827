"""Tests for equatorial coordinates and the apparent/observed place pipeline.

Reference values come from calling ERFA directly with the same inputs.
"""

import logging
import math

import erfa
import pytest

from astrocoord.coordinates import position_equatorial_to_ecliptic
from astrocoord.ecliptic import Ecliptic, mean_obliquity, true_obliquity
from astrocoord.eop import static_eop
from astrocoord.epoch import Epoch, TimeSystem
from astrocoord.equatorial import ApparentEquatorial, ApparentPlace, Equatorial, Weather
from astrocoord.errors import InvalidArgumentError, TransformationError
from astrocoord.frame import Frame
from astrocoord.geo import Geo

_ANGLE_TOL = 1e-12
_ARCSEC = math.radians(1.0 / 3600.0)


@pytest.fixture
def epoch():
    return Epoch(2015, 11, 10)


@pytest.fixture
def washington():
    return Geo(38.0, -77.0, use_degrees=True)


@pytest.fixture
def eq(epoch):
    return Equatorial.from_hms_dms(Frame.ICRF(), epoch, (12, 0, 0), (20, 0, 0))


def _erfa_cirs(eq):
    tdb1, tdb2 = (float(p) for p in eq.epoch.jd_parts(TimeSystem.TDB))
    return erfa.atci13(eq.ra, eq.dec, 0.0, 0.0, 0.0, 0.0, tdb1, tdb2)


def _erfa_observed(eq, geo, phpa=0.0, tc=0.0, rh=0.0):
    ri, di, _ = _erfa_cirs(eq)
    utc1, utc2 = (float(p) for p in eq.epoch.jd_parts(TimeSystem.UTC))
    return erfa.atio13(
        ri, di, utc1, utc2, 0.0, geo.lon, geo.lat, geo.height,
        0.0, 0.0, phpa, tc, rh, 0.55,
    )


# ──────────────────────────────────────────────
# Construction and mutation
# ──────────────────────────────────────────────


class TestEquatorialConstruction:
    def test_from_hms_dms(self, eq):
        assert math.degrees(eq.ra) == pytest.approx(180.0)
        assert math.degrees(eq.dec) == pytest.approx(20.0)
        assert eq.dist is None
        assert eq.topo is None
        assert not eq.is_apparent()

    def test_negative_zero_degrees(self, epoch):
        eq = Equatorial.from_hms_dms(Frame.ICRF(), epoch, (0, 0, 0), (-0.0, 30, 0))
        assert math.degrees(eq.dec) == pytest.approx(-0.5)

    def test_ra_normalized(self, epoch):
        eq = Equatorial(Frame.ICRF(), epoch, -90.0, 0.0, use_degrees=True)
        assert math.degrees(eq.ra) == pytest.approx(270.0)

    def test_dec_out_of_range(self, epoch):
        with pytest.raises(InvalidArgumentError, match="Declination"):
            Equatorial(Frame.ICRF(), epoch, 0.0, 91.0, use_degrees=True)

    def test_negative_distance(self, epoch):
        with pytest.raises(InvalidArgumentError, match="Distance"):
            Equatorial(Frame.ICRF(), epoch, 0.0, 0.0, dist=-1.0)

    def test_topo_type(self, epoch):
        with pytest.raises(InvalidArgumentError):
            Equatorial(Frame.ICRF(), epoch, 0.0, 0.0, topo=(38.0, -77.0))

    def test_epoch_type(self):
        with pytest.raises(InvalidArgumentError):
            Equatorial(Frame.ICRF(), 2451545.0, 0.0, 0.0)


class TestEquatorialMutation:
    def test_setters_chain(self, eq, washington):
        result = eq.set_topo(washington).set_distance(2.0).set_position(10.0, -10.0, use_degrees=True)
        assert result is eq
        assert eq.topo == washington
        assert eq.dist == 2.0
        assert math.degrees(eq.ra) == pytest.approx(10.0)
        assert math.degrees(eq.dec) == pytest.approx(-10.0)

    def test_invalid_position_leaves_instance_unchanged(self, eq):
        ra = eq.ra
        with pytest.raises(InvalidArgumentError):
            eq.set_position(1.0, 2.0)
        assert eq.ra == ra
        assert math.degrees(eq.dec) == pytest.approx(20.0)

    def test_copy_independent(self, eq, washington):
        clone = eq.copy()
        clone.set_topo(washington)
        assert eq.topo is None
        assert clone.ra == eq.ra


# ──────────────────────────────────────────────
# Apparent places
# ──────────────────────────────────────────────


class TestGeocentricApparent:
    def test_matches_erfa(self, eq):
        ri, di, eo = _erfa_cirs(eq)
        app = eq.apparent()
        assert app.ra == pytest.approx(erfa.anp(ri - eo), abs=_ANGLE_TOL)
        assert app.dec == pytest.approx(di, abs=_ANGLE_TOL)

    def test_place_kind(self, eq):
        app = eq.apparent()
        assert isinstance(app, ApparentEquatorial)
        assert app.place is ApparentPlace.GEOCENTRIC
        assert app.weather is None
        assert app.is_apparent()

    def test_j2000_close_to_catalogue(self):
        # no precession at J2000; aberration and nutation stay below a minute of arc
        eq = Equatorial(Frame.ICRF(), Epoch.J2000(), math.pi, 0.0)
        ri, di, eo = _erfa_cirs(eq)
        app = eq.apparent()
        assert app.ra == pytest.approx(erfa.anp(ri - eo), abs=_ANGLE_TOL)
        assert app.ra == pytest.approx(math.pi, abs=60.0 * _ARCSEC)
        assert app.dec == pytest.approx(0.0, abs=60.0 * _ARCSEC)

    def test_shift_is_precession_sized(self, eq):
        # ~16 years of precession plus nutation and aberration
        app = eq.apparent()
        assert 0.0 < abs(app.ra - eq.ra) < math.radians(0.5)
        assert abs(app.dec - eq.dec) < math.radians(0.5)

    def test_receiver_unchanged(self, eq):
        ra, dec = eq.ra, eq.dec
        eq.apparent()
        assert (eq.ra, eq.dec) == (ra, dec)
        assert not eq.is_apparent()

    def test_base_is_snapshot(self, eq):
        app = eq.apparent()
        eq.set_position(0.0, 0.0)
        assert app.base.ra == pytest.approx(math.pi)
        assert app.saved_original.dec == pytest.approx(math.radians(20.0))
        # mutating the returned base does not leak back
        app.base.set_position(1.0, 1.0)
        assert app.base.ra == pytest.approx(math.pi)

    def test_idempotent(self, eq):
        app = eq.apparent()
        again = app.apparent(pressure=1000.0)
        assert again is not app
        assert (again.ra, again.dec) == (app.ra, app.dec)
        assert again.place is ApparentPlace.GEOCENTRIC

    def test_weather_ignored_without_observer(self, eq):
        plain = eq.apparent()
        weathered = eq.apparent(pressure=1013.25, temperature=15.0, humidity=0.5)
        assert weathered.place is ApparentPlace.GEOCENTRIC
        assert weathered.weather is None
        assert (weathered.ra, weathered.dec) == (plain.ra, plain.dec)

    def test_distance_kept(self, eq):
        eq.set_distance(0.5)
        assert eq.apparent().dist == 0.5

    def test_parallax_uses_distance(self, eq):
        near = eq.copy().set_distance(0.01).apparent()
        far = eq.apparent()
        assert abs(near.dec - far.dec) > _ARCSEC

    def test_nonfinite_result_raises(self, eq, monkeypatch):
        monkeypatch.setattr(
            "astrocoord.equatorial.atci13", lambda *args: (math.nan, math.nan, 0.0)
        )
        with pytest.raises(TransformationError, match="cannot determine apparent"):
            eq.apparent()


class TestTopocentricApparent:
    def test_matches_erfa(self, eq, washington):
        eq.set_topo(washington)
        _, _, _, dob, rob = _erfa_observed(eq, washington)
        app = eq.apparent()
        assert app.place is ApparentPlace.TOPOCENTRIC
        assert app.ra == pytest.approx(erfa.anp(rob), abs=_ANGLE_TOL)
        assert app.dec == pytest.approx(dob, abs=_ANGLE_TOL)
        assert app.topo == washington

    def test_observed_with_weather(self, eq, washington):
        eq.set_topo(washington)
        _, _, _, dob, rob = _erfa_observed(eq, washington, 1013.25, 15.0, 0.5)
        app = eq.apparent(pressure=1013.25, temperature=15.0, humidity=0.5)
        assert app.place is ApparentPlace.OBSERVED
        assert app.weather == Weather(1013.25, 15.0, 0.5)
        assert app.ra == pytest.approx(erfa.anp(rob), abs=_ANGLE_TOL)
        assert app.dec == pytest.approx(dob, abs=_ANGLE_TOL)

    def test_single_weather_value_selects_observed(self, eq, washington):
        eq.set_topo(washington)
        app = eq.apparent(humidity=0.0)
        assert app.place is ApparentPlace.OBSERVED
        assert app.weather == Weather(0.0, 0.0, 0.0)


# ──────────────────────────────────────────────
# Horizontal
# ──────────────────────────────────────────────


class TestToHorizontal:
    def test_transit_altitude(self, washington):
        epoch = Epoch(2000, 1, 1, 12)
        ra = float(epoch.local_sidereal_time(washington.lon))
        eq = Equatorial(Frame.ICRF(), epoch, ra, math.radians(20.0), topo=washington)
        horiz = eq.to_horiz()
        assert math.degrees(horiz.alt) == pytest.approx(72.0, abs=0.02)
        assert math.degrees(horiz.az) == pytest.approx(180.0, abs=0.1)
        assert horiz.refracted is False

    def test_matches_erfa(self, eq, washington):
        eq.set_topo(washington)
        aob, zob, _, _, _ = _erfa_observed(eq, washington)
        horiz = eq.to_horiz()
        assert horiz.alt == pytest.approx(math.pi / 2 - zob, abs=_ANGLE_TOL)
        assert horiz.az == pytest.approx(aob, abs=_ANGLE_TOL)

    def test_refraction_raises_object(self, washington):
        epoch = Epoch(2000, 1, 1, 12)
        ra = float(epoch.local_sidereal_time(washington.lon))
        eq = Equatorial(Frame.ICRF(), epoch, ra, math.radians(-30.0), topo=washington)
        plain = eq.to_horiz()
        refracted = eq.to_horiz(pressure=1013.25, temperature=10.0, humidity=0.5)
        assert refracted.refracted is True
        # about 2.4 arcmin at 22 degrees altitude
        assert refracted.alt - plain.alt == pytest.approx(math.radians(2.4 / 60), abs=math.radians(1.0 / 60))

    def test_zero_pressure_not_refracted(self, eq, washington):
        eq.set_topo(washington)
        assert eq.to_horiz(temperature=20.0).refracted is False

    def test_from_apparent_uses_astrometric(self, eq, washington):
        eq.set_topo(washington)
        direct = eq.to_horiz()
        via_apparent = eq.apparent().to_horiz()
        assert via_apparent.alt == pytest.approx(direct.alt, abs=_ANGLE_TOL)
        assert via_apparent.az == pytest.approx(direct.az, abs=_ANGLE_TOL)

    def test_topo_set_after_reduction(self, eq, washington):
        app = eq.apparent()
        app.set_topo(washington)
        expected = eq.copy().set_topo(washington).to_horiz()
        assert app.to_horiz().alt == pytest.approx(expected.alt, abs=_ANGLE_TOL)

    def test_without_observer_warns(self, eq, caplog):
        with caplog.at_level(logging.WARNING, logger="astrocoord.equatorial"):
            horiz = eq.to_horiz()
        assert "without an observer location" in caplog.text
        assert -math.pi / 2 <= horiz.alt <= math.pi / 2

    def test_eop_changes_azimuth(self, eq, washington):
        eq.set_topo(washington)
        default = eq.to_horiz()
        shifted = eq.to_horiz(eop=static_eop(ut1_utc=0.5))
        # half a second of Earth rotation
        assert abs(shifted.az - default.az) > _ARCSEC

    def test_distance_passed_through(self, eq, washington):
        eq.set_topo(washington).set_distance(3.0)
        assert eq.to_horiz().dist == 3.0


# ──────────────────────────────────────────────
# Ecliptic, Cartesian and hour angle
# ──────────────────────────────────────────────


class TestToEcliptic:
    def test_astrometric_uses_mean_obliquity(self, eq):
        expected_lon, expected_lat = position_equatorial_to_ecliptic(
            eq.ra, eq.dec, mean_obliquity(eq.epoch)
        )
        ecl = eq.to_eclip()
        assert isinstance(ecl, Ecliptic)
        assert ecl.lon == pytest.approx(float(expected_lon), abs=_ANGLE_TOL)
        assert ecl.lat == pytest.approx(float(expected_lat), abs=_ANGLE_TOL)

    def test_apparent_uses_true_obliquity(self, eq):
        app = eq.apparent()
        expected_lon, expected_lat = position_equatorial_to_ecliptic(
            app.ra, app.dec, true_obliquity(eq.epoch)
        )
        ecl = app.to_eclip()
        assert ecl.lon == pytest.approx(float(expected_lon), abs=_ANGLE_TOL)
        assert ecl.lat == pytest.approx(float(expected_lat), abs=_ANGLE_TOL)

    def test_topocentric_recomputes_geocentric(self, eq, washington):
        geocentric = eq.apparent().to_eclip()
        topocentric = eq.copy().set_topo(washington).apparent().to_eclip()
        assert topocentric.lon == pytest.approx(geocentric.lon, abs=_ANGLE_TOL)
        assert topocentric.lat == pytest.approx(geocentric.lat, abs=_ANGLE_TOL)

    def test_explicit_obliquity(self, eq):
        ecl = eq.to_eclip(obliquity=0.0)
        assert ecl.lon == pytest.approx(eq.ra, abs=_ANGLE_TOL)
        assert ecl.lat == pytest.approx(eq.dec, abs=_ANGLE_TOL)


class TestToCartesian:
    def test_with_distance(self, eq):
        eq.set_distance(2.0)
        c = eq.to_cartesian()
        assert c.r == pytest.approx(2.0)
        assert c.z == pytest.approx(2.0 * math.sin(math.radians(20.0)))

    def test_without_distance(self, eq):
        with pytest.raises(TransformationError):
            eq.to_cartesian()


class TestHourAngle:
    def test_zero_at_transit(self, washington):
        epoch = Epoch(2000, 1, 1, 12)
        ra = float(epoch.local_sidereal_time(washington.lon))
        eq = Equatorial(Frame.ICRF(), epoch, ra, 0.0)
        assert eq.hour_angle(washington) == pytest.approx(0.0, abs=1e-9)

    def test_degrees_range(self, eq, washington):
        ha = eq.set_topo(washington).hour_angle(use_degrees=True)
        assert -180.0 <= ha < 180.0

    def test_requires_observer(self, eq):
        with pytest.raises(TransformationError):
            eq.hour_angle()


class TestRepr:
    def test_repr_names_class(self, eq):
        assert repr(eq).startswith("Equatorial(frame=ICRF/J2000.0")
        assert repr(eq.apparent()).startswith("ApparentEquatorial(")
