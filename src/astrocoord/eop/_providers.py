"""Constructors for :class:`~astrocoord.eop.EOPData`.

- :func:`static_eop`: constant values over the whole MJD range.
- :func:`zero_eop`: all zeros, i.e. UT1 = UTC and no polar motion.
- :func:`load_eop_from_file`: an IERS finals file on disk.
- :func:`load_cached_eop`: a cached finals file, refreshed from IERS when
  stale and falling back to :func:`zero_eop` if anything goes wrong.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jax.numpy as jnp

from astrocoord.config import get_dtype
from astrocoord.eop._download import FINALS_FILENAME, download_finals_file
from astrocoord.eop._parsers import parse_finals_file
from astrocoord.eop._types import EOPData
from astrocoord.utils.caching import get_eop_cache_dir, is_file_stale

logger = logging.getLogger(__name__)

_DEFAULT_MAX_AGE_DAYS: float = 7.0


def static_eop(
    ut1_utc: float = 0.0,
    pm_x: float = 0.0,
    pm_y: float = 0.0,
    mjd_min: float = 0.0,
    mjd_max: float = 99999.0,
) -> EOPData:
    """Create an EOPData holding constant values.

    Two identical samples at *mjd_min* and *mjd_max* make interpolation
    return the constant everywhere.

    Args:
        ut1_utc: UT1-UTC [s]. Default: 0.0.
        pm_x: Polar motion x [rad]. Default: 0.0.
        pm_y: Polar motion y [rad]. Default: 0.0.
        mjd_min: Start of the valid MJD range. Default: 0.0.
        mjd_max: End of the valid MJD range. Default: 99999.0.

    Returns:
        EOPData with constant values.

    Examples:
        ```python
        from astrocoord.eop import static_eop, get_ut1_utc
        eop = static_eop(ut1_utc=-0.2)
        get_ut1_utc(eop, 60000.0)  # -0.2
        ```
    """
    dtype = get_dtype()

    def pair(value):
        return jnp.array([value, value], dtype=dtype)

    return EOPData(
        mjd=jnp.array([mjd_min, mjd_max], dtype=dtype),
        ut1_utc=pair(ut1_utc),
        pm_x=pair(pm_x),
        pm_y=pair(pm_y),
        mjd_min=jnp.array(mjd_min, dtype=dtype),
        mjd_max=jnp.array(mjd_max, dtype=dtype),
    )


def zero_eop() -> EOPData:
    """Create an EOPData with all values set to zero.

    Returns:
        EOPData equivalent to ignoring Earth orientation corrections.
    """
    return static_eop()


def load_eop_from_file(filepath: str | Path) -> EOPData:
    """Load EOP data from an IERS finals file.

    Args:
        filepath: Path to a ``finals.all.iau2000.txt`` style file.

    Returns:
        EOPData ready for lookups.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no valid EOP data is found.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"EOP file not found: {filepath}")

    mjds, pm_xs, pm_ys, ut1_utcs = parse_finals_file(filepath)

    dtype = get_dtype()
    mjd = jnp.array(mjds, dtype=dtype)
    order = jnp.argsort(mjd)

    return EOPData(
        mjd=mjd[order],
        ut1_utc=jnp.array(ut1_utcs, dtype=dtype)[order],
        pm_x=jnp.array(pm_xs, dtype=dtype)[order],
        pm_y=jnp.array(pm_ys, dtype=dtype)[order],
        mjd_min=jnp.min(mjd),
        mjd_max=jnp.max(mjd),
    )


def load_cached_eop(
    filepath: str | Path | None = None,
    *,
    max_age_days: float = _DEFAULT_MAX_AGE_DAYS,
) -> EOPData:
    """Load EOP data from a local cache, downloading it when stale.

    If the file at *filepath* is missing or older than *max_age_days*, a
    fresh copy is fetched from IERS.  If that download fails the stale copy
    is used when there is one.  With no usable file a warning is logged and
    :func:`zero_eop` is returned, so this function never raises on network
    issues.

    Args:
        filepath: Cache file path.  Defaults to
            ``<cache_dir>/eop/finals.all.iau2000.txt``.
        max_age_days: Maximum acceptable age of the cached file in days.

    Returns:
        EOPData from the cached or freshly downloaded file, or all zeros.
    """
    if filepath is None:
        filepath = get_eop_cache_dir() / FINALS_FILENAME
    else:
        filepath = Path(filepath)

    if is_file_stale(filepath, max_age_days):
        try:
            download_finals_file(filepath)
        except Exception:
            if not filepath.exists():
                logger.warning(
                    "Failed to download EOP data; falling back to zero EOP.",
                    exc_info=True,
                )
                return zero_eop()
            logger.warning(
                "Failed to refresh EOP data; using stale copy at %s.",
                filepath,
                exc_info=True,
            )

    try:
        return load_eop_from_file(filepath)
    except Exception:
        logger.warning(
            "Failed to parse cached EOP file %s; falling back to zero EOP.",
            filepath,
            exc_info=True,
        )
        return zero_eop()
