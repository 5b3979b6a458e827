"""Tests for Earth Orientation Parameters (EOP) module."""

from __future__ import annotations

import jax
import jax.numpy as jnp
import pytest

from astrocoord.config import get_dtype
from astrocoord.constants import AS2RAD
from astrocoord.eop import (
    EOPData,
    EOPExtrapolation,
    EOPValues,
    get_eop,
    get_pm,
    get_ut1_utc,
    load_eop_from_file,
    lookup_jd,
    static_eop,
    zero_eop,
)
from astrocoord.eop._parsers import parse_finals_file, parse_finals_line

_FINAL_LINE = (
    "2311 1 60249.00 I  0.274620 0.000020  0.268283 0.000018  I 0.0113205 0.0000039"
    " -0.3630 0.0029  I     0.293    0.290    -0.045    0.041  0.274569  0.268315"
    "  0.0113342     0.238    -0.039  "
)
_PREDICTED_LINE = (
    "241228 60672.00 P  0.173369 0.019841  0.266914 0.028808  P 0.0420038 0.0254096"
)
_EMPTY_LINE = "241229 60673.00" + " " * 60


def _make_test_eop(
    mjds: list[float],
    ut1_utcs: list[float],
    pm_xs: list[float] | None = None,
    pm_ys: list[float] | None = None,
) -> EOPData:
    """Helper to construct EOPData for tests using the configured dtype."""
    dtype = get_dtype()
    n = len(mjds)
    return EOPData(
        mjd=jnp.array(mjds, dtype=dtype),
        ut1_utc=jnp.array(ut1_utcs, dtype=dtype),
        pm_x=jnp.array(pm_xs or [0.0] * n, dtype=dtype),
        pm_y=jnp.array(pm_ys or [0.0] * n, dtype=dtype),
        mjd_min=jnp.array(mjds[0], dtype=dtype),
        mjd_max=jnp.array(mjds[-1], dtype=dtype),
    )


# ---------------------------------------------------------------------------
# Static / Zero provider tests
# ---------------------------------------------------------------------------


class TestZeroEOP:
    """Tests for zero_eop provider."""

    def test_returns_eopdata(self):
        assert isinstance(zero_eop(), EOPData)

    def test_ut1_utc(self):
        assert float(get_ut1_utc(zero_eop(), 59569.0)) == 0.0

    def test_pm(self):
        pm_x, pm_y = get_pm(zero_eop(), 59569.0)
        assert float(pm_x) == 0.0
        assert float(pm_y) == 0.0


class TestStaticEOP:
    """Tests for static_eop provider."""

    def test_constant_values(self):
        eop = static_eop(ut1_utc=-0.2, pm_x=1e-6, pm_y=2e-6)
        values = get_eop(eop, 60000.0)
        assert isinstance(values, EOPValues)
        assert float(values.ut1_utc) == pytest.approx(-0.2)
        assert float(values.pm_x) == pytest.approx(1e-6)
        assert float(values.pm_y) == pytest.approx(2e-6)

    def test_constant_everywhere(self):
        eop = static_eop(ut1_utc=0.3)
        for mjd in (0.0, 41317.0, 60000.0, 99999.0):
            assert float(get_ut1_utc(eop, mjd)) == pytest.approx(0.3)

    def test_dtype(self):
        assert static_eop().mjd.dtype == jnp.float64

    def test_range(self):
        eop = static_eop(mjd_min=50000.0, mjd_max=60000.0)
        assert float(eop.mjd_min) == 50000.0
        assert float(eop.mjd_max) == 60000.0


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------


class TestInterpolation:
    """Linear interpolation and extrapolation modes."""

    def setup_method(self):
        self.eop = _make_test_eop(
            [60000.0, 60001.0, 60002.0],
            [0.1, 0.2, 0.4],
            pm_xs=[1e-6, 2e-6, 3e-6],
            pm_ys=[-1e-6, -2e-6, -3e-6],
        )

    def test_at_node(self):
        assert float(get_ut1_utc(self.eop, 60001.0)) == pytest.approx(0.2)

    def test_midpoint(self):
        assert float(get_ut1_utc(self.eop, 60001.5)) == pytest.approx(0.3)

    def test_pm_midpoint(self):
        pm_x, pm_y = get_pm(self.eop, 60000.5)
        assert float(pm_x) == pytest.approx(1.5e-6)
        assert float(pm_y) == pytest.approx(-1.5e-6)

    def test_hold_before(self):
        assert float(get_ut1_utc(self.eop, 59000.0)) == pytest.approx(0.1)

    def test_hold_after(self):
        assert float(get_ut1_utc(self.eop, 61000.0)) == pytest.approx(0.4)

    def test_zero_outside(self):
        value = get_ut1_utc(self.eop, 61000.0, EOPExtrapolation.ZERO)
        assert float(value) == 0.0

    def test_zero_inside_still_interpolates(self):
        value = get_ut1_utc(self.eop, 60000.5, EOPExtrapolation.ZERO)
        assert float(value) == pytest.approx(0.15)

    def test_vectorized(self):
        values = get_ut1_utc(self.eop, jnp.array([60000.0, 60000.5, 60002.0]))
        assert values.shape == (3,)
        assert float(values[1]) == pytest.approx(0.15)

    def test_jit(self):
        value = jax.jit(get_ut1_utc)(self.eop, 60001.5)
        assert float(value) == pytest.approx(0.3)


class TestLookupJD:
    """lookup_jd keys the table by UTC Julian Date."""

    def test_offset(self):
        eop = _make_test_eop([60000.0, 60001.0], [0.1, 0.3])
        values = lookup_jd(eop, 2460000.5 + 0.5)
        assert float(values.ut1_utc) == pytest.approx(0.2)

    def test_unpacks(self):
        dut1, xp, yp = lookup_jd(static_eop(ut1_utc=0.05, pm_x=1e-7), 2451545.0)
        assert float(dut1) == pytest.approx(0.05)
        assert float(xp) == pytest.approx(1e-7)
        assert float(yp) == 0.0


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseFinalsLine:
    """Fixed-column parsing of IERS finals records."""

    def test_final_values(self):
        mjd, pm_x, pm_y, ut1_utc = parse_finals_line(_FINAL_LINE)
        assert mjd == 60249.0
        assert pm_x == pytest.approx(0.274620 * AS2RAD)
        assert pm_y == pytest.approx(0.268283 * AS2RAD)
        assert ut1_utc == pytest.approx(0.0113205)

    def test_predicted_values(self):
        mjd, _, _, ut1_utc = parse_finals_line(_PREDICTED_LINE)
        assert mjd == 60672.0
        assert ut1_utc == pytest.approx(0.0420038)

    def test_missing_fields(self):
        assert parse_finals_line(_EMPTY_LINE) is None

    def test_empty(self):
        assert parse_finals_line("") is None

    def test_too_long(self):
        assert parse_finals_line(_FINAL_LINE + "X" * 200) is None


class TestLoadFromFile:
    """Loading an EOP table from a finals file on disk."""

    def test_load(self, tmp_path):
        path = tmp_path / "finals.txt"
        path.write_text("\n".join([_PREDICTED_LINE, _FINAL_LINE, _EMPTY_LINE]) + "\n")
        eop = load_eop_from_file(path)
        assert eop.mjd.shape == (2,)
        # rows are sorted by MJD
        assert float(eop.mjd[0]) == 60249.0
        assert float(eop.mjd_min) == 60249.0
        assert float(eop.mjd_max) == 60672.0
        assert float(get_ut1_utc(eop, 60249.0)) == pytest.approx(0.0113205)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_eop_from_file(tmp_path / "nope.txt")

    def test_no_valid_rows(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text(_EMPTY_LINE + "\n")
        with pytest.raises(ValueError, match="No valid EOP data"):
            parse_finals_file(path)
