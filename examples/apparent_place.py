# /// script
# requires-python = ">=3.11"
# dependencies = ["astrocoord"]
#
# [tool.uv.sources]
# astrocoord = { path = ".." }
# ///
"""Reduce a catalogue position to its apparent, topocentric and observed place.

Prints each stage of the reduction of an ICRS position for an observer in
Washington, together with the horizontal coordinates with and without
refraction.  Set ``ASTROCOORD_EXAMPLE_IERS=1`` to load (and, when stale,
download) the IERS Earth orientation series first.

Requires astrocoord to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/apparent_place.py
"""

import logging
import os

import jax.numpy as jnp

from astrocoord import Epoch, Equatorial, Frame, Geo, set_default_eop, set_dtype
from astrocoord.eop import load_cached_eop
from astrocoord.formatting import HORIZONTAL_DEGREES, format_coordinate

set_dtype(jnp.float64)

# ── Inputs ───────────────────────────────────────────────────────────────────

EPOCH = Epoch("2015-11-10T00:00:00Z")
OBSERVER = Geo(38.0, -77.0, use_degrees=True)
RA_HMS = (12, 0, 0)
DEC_DMS = (20, 0, 0)
PRESSURE_HPA = 1013.25
TEMPERATURE_C = 15.0
HUMIDITY = 0.5


def main() -> None:
    logging.basicConfig(level=logging.WARNING)

    if os.environ.get("ASTROCOORD_EXAMPLE_IERS"):
        set_default_eop(load_cached_eop())

    star = Equatorial.from_hms_dms(Frame.ICRF(), EPOCH, RA_HMS, DEC_DMS)

    print(f"Epoch:        {EPOCH}")
    print(f"Observer:     {OBSERVER}")
    print(f"Astrometric:  {star}")
    print(f"Geocentric:   {star.apparent()}")

    star.set_topo(OBSERVER)
    print(f"Topocentric:  {star.apparent()}")
    observed = star.apparent(
        pressure=PRESSURE_HPA, temperature=TEMPERATURE_C, humidity=HUMIDITY
    )
    print(f"Observed:     {observed}")
    print(f"Ecliptic:     {observed.to_eclip()}")
    print(f"Hour angle:   {star.hour_angle(use_degrees=True):.5f}°")

    print("\n── Horizontal ──")
    airless = star.to_horiz()
    refracted = star.to_horiz(
        pressure=PRESSURE_HPA, temperature=TEMPERATURE_C, humidity=HUMIDITY
    )
    print(f"  Airless:    {format_coordinate(airless, HORIZONTAL_DEGREES)}")
    print(f"  Refracted:  {format_coordinate(refracted, HORIZONTAL_DEGREES)}")


if __name__ == "__main__":
    main()
