"""Earth Orientation Parameters (EOP) for the observed-place transformation.

Stores UT1-UTC and polar motion as sorted JAX arrays and interpolates them
with ``jnp.searchsorted``; all query functions work inside ``jax.jit``.

Typical usage::

    from astrocoord.eop import load_cached_eop, lookup_jd
    eop = load_cached_eop()
    dut1, xp, yp = lookup_jd(eop, 2460000.5)
"""

from astrocoord.eop._download import (
    FINALS_FILENAME,
    IERS_FINALS_URL,
    download_finals_file,
)
from astrocoord.eop._lookup import get_eop, get_pm, get_ut1_utc, lookup_jd
from astrocoord.eop._providers import (
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)
from astrocoord.eop._types import EOPData, EOPExtrapolation, EOPValues

__all__ = [
    "EOPData",
    "EOPExtrapolation",
    "EOPValues",
    "FINALS_FILENAME",
    "IERS_FINALS_URL",
    "download_finals_file",
    "get_eop",
    "get_pm",
    "get_ut1_utc",
    "load_cached_eop",
    "load_eop_from_file",
    "lookup_jd",
    "static_eop",
    "zero_eop",
]
