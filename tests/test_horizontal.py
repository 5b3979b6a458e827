"""Tests for horizontal coordinates."""

import math

import pytest

from astrocoord.errors import InvalidArgumentError
from astrocoord.horizontal import Horizontal


class TestHorizontal:
    def test_degrees(self):
        h = Horizontal(45.0, 180.0, use_degrees=True)
        assert h.alt == pytest.approx(math.pi / 4)
        assert h.az == pytest.approx(math.pi)
        assert h.dist is None
        assert h.refracted is False

    def test_zenith_distance(self):
        h = Horizontal(30.0, 0.0, use_degrees=True)
        assert math.degrees(h.zenith_distance) == pytest.approx(60.0)

    def test_azimuth_normalized(self):
        assert math.degrees(Horizontal(0.0, -90.0, use_degrees=True).az) == pytest.approx(270.0)

    def test_below_horizon_allowed(self):
        assert Horizontal(-10.0, 0.0, use_degrees=True).alt < 0.0

    def test_altitude_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            Horizontal(90.5, 0.0, use_degrees=True)

    def test_negative_distance(self):
        with pytest.raises(InvalidArgumentError):
            Horizontal(0.0, 0.0, dist=-0.1)

    def test_to_array(self):
        values = Horizontal(10.0, 20.0, use_degrees=True).to_array(use_degrees=True)
        assert [float(v) for v in values] == pytest.approx([10.0, 20.0])

    def test_equality_includes_refraction(self):
        assert Horizontal(0.1, 0.2) == Horizontal(0.1, 0.2)
        assert Horizontal(0.1, 0.2) != Horizontal(0.1, 0.2, refracted=True)

    def test_str(self):
        h = Horizontal(45.5, 180.0, use_degrees=True)
        assert str(h) == "h 45°30'00\".000, A 180°00'00\".000"

    def test_repr(self):
        assert "refracted=True" in repr(Horizontal(0.0, 0.0, refracted=True))
