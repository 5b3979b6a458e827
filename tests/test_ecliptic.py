"""Tests for ecliptic coordinates and the obliquity of the ecliptic."""

import math

import erfa
import pytest

from astrocoord.ecliptic import Ecliptic, mean_obliquity, true_obliquity
from astrocoord.epoch import Epoch, TimeSystem
from astrocoord.equatorial import Equatorial
from astrocoord.errors import InvalidArgumentError
from astrocoord.frame import Frame

_ANGLE_TOL = 1e-12


class TestObliquity:
    def test_mean_j2000(self):
        assert mean_obliquity(Epoch.J2000()) == pytest.approx(
            math.radians(84381.406 / 3600.0), abs=_ANGLE_TOL
        )

    def test_mean_any_time_system(self):
        epc = Epoch(2015, 11, 10)
        tt1, tt2 = (float(p) for p in epc.jd_parts(TimeSystem.TT))
        assert mean_obliquity(epc) == pytest.approx(erfa.obl06(tt1, tt2), abs=_ANGLE_TOL)

    def test_true_adds_nutation(self):
        epc = Epoch(2015, 11, 10)
        tt1, tt2 = (float(p) for p in epc.jd_parts(TimeSystem.TT))
        _, deps = erfa.nut06a(tt1, tt2)
        assert true_obliquity(epc) == pytest.approx(erfa.obl06(tt1, tt2) + deps, abs=_ANGLE_TOL)
        assert true_obliquity(epc) != mean_obliquity(epc)


class TestEclipticConstruction:
    def test_degrees(self):
        ecl = Ecliptic(113.215630, 6.684170, use_degrees=True)
        assert math.degrees(ecl.lon) == pytest.approx(113.215630)
        assert math.degrees(ecl.lat) == pytest.approx(6.684170)
        assert ecl.dist is None

    def test_longitude_normalized(self):
        assert math.degrees(Ecliptic(-10.0, 0.0, use_degrees=True).lon) == pytest.approx(350.0)

    def test_latitude_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            Ecliptic(0.0, 95.0, use_degrees=True)

    def test_negative_distance(self):
        with pytest.raises(InvalidArgumentError):
            Ecliptic(0.0, 0.0, dist=-1.0)

    def test_to_array(self):
        values = Ecliptic(90.0, -45.0, use_degrees=True).to_array(use_degrees=True)
        assert [float(v) for v in values] == pytest.approx([90.0, -45.0])


class TestEclipticToEquatorial:
    def test_meeus_pollux(self):
        # Meeus example 13.a
        ecl = Ecliptic(113.215630, 6.684170, use_degrees=True)
        eq = ecl.to_equatorial(Frame.ICRF(), Epoch.J2000(), math.radians(23.4392911))
        assert isinstance(eq, Equatorial)
        assert math.degrees(eq.ra) == pytest.approx(116.328942, abs=1e-5)
        assert math.degrees(eq.dec) == pytest.approx(28.026183, abs=1e-5)

    def test_distance_passes_through(self):
        eq = Ecliptic(0.5, 0.1, dist=2.5).to_equatorial(Frame.ICRF(), Epoch.J2000())
        assert eq.dist == 2.5

    def test_roundtrip_mean_obliquity(self):
        epoch = Epoch(2015, 11, 10)
        ecl = Ecliptic(4.0, -0.3, dist=1.0)
        back = ecl.to_equatorial(Frame.ICRF(), epoch).to_eclip()
        assert back.lon == pytest.approx(4.0, abs=1e-9)
        assert back.lat == pytest.approx(-0.3, abs=1e-9)
        assert back.dist == 1.0

    def test_ecliptic_pole(self):
        eq = Ecliptic(0.0, 90.0, use_degrees=True).to_equatorial(
            Frame.ICRF(), Epoch.J2000(), math.radians(23.44)
        )
        assert math.degrees(eq.dec) == pytest.approx(90.0 - 23.44, abs=1e-9)
        assert math.degrees(eq.ra) == pytest.approx(270.0, abs=1e-9)


class TestEclipticDunder:
    def test_str(self):
        text = str(Ecliptic(113.25, -6.5, dist=1.0, use_degrees=True))
        assert text == "λ 113°15'00\".000, β -06°30'00\".000, 1.000 AU"

    def test_equality(self):
        assert Ecliptic(1.0, 0.5) == Ecliptic(1.0, 0.5)
        assert Ecliptic(1.0, 0.5) != Ecliptic(1.0, 0.5, dist=1.0)
