"""JIT-compatible EOP interpolation.

Queries use ``jnp.searchsorted`` to bracket the requested MJD and then
interpolate linearly between the two tabulated values.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astrocoord.constants import JD_MJD_OFFSET
from astrocoord.eop._types import EOPData, EOPExtrapolation, EOPValues


def _interpolate(
    eop: EOPData,
    mjd: Array,
    values: Array,
    extrapolation: EOPExtrapolation,
) -> Array:
    n = eop.mjd.shape[0]

    idx = jnp.searchsorted(eop.mjd, mjd, side="right")
    idx_lo = jnp.clip(idx - 1, 0, n - 1)
    idx_hi = jnp.clip(idx, 0, n - 1)

    mjd_lo = eop.mjd[idx_lo]
    dmjd = eop.mjd[idx_hi] - mjd_lo
    frac = jnp.where(dmjd > 0.0, (mjd - mjd_lo) / jnp.where(dmjd > 0.0, dmjd, 1.0), 0.0)
    interpolated = values[idx_lo] + frac * (values[idx_hi] - values[idx_lo])

    if extrapolation == EOPExtrapolation.ZERO:
        in_range = (mjd >= eop.mjd_min) & (mjd <= eop.mjd_max)
        return jnp.where(in_range, interpolated, 0.0)
    # HOLD: the clipped bracket already pins to the boundary value
    return interpolated


def get_ut1_utc(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> Array:
    """Query the UT1-UTC offset at a UTC MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC).
        extrapolation: Behaviour outside the tabulated range.

    Returns:
        UT1-UTC [s].
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    return _interpolate(eop, mjd, eop.ut1_utc, extrapolation)


def get_pm(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> tuple[Array, Array]:
    """Query the polar motion components at a UTC MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC).
        extrapolation: Behaviour outside the tabulated range.

    Returns:
        Tuple of (pm_x, pm_y) [rad].
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    return (
        _interpolate(eop, mjd, eop.pm_x, extrapolation),
        _interpolate(eop, mjd, eop.pm_y, extrapolation),
    )


def get_eop(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> EOPValues:
    """Query UT1-UTC and polar motion together at a UTC MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC).
        extrapolation: Behaviour outside the tabulated range.

    Returns:
        :class:`EOPValues` with ``ut1_utc`` [s] and ``pm_x``/``pm_y`` [rad].

    Examples:
        ```python
        from astrocoord.eop import static_eop, get_eop
        eop = static_eop(ut1_utc=0.1)
        values = get_eop(eop, 59569.0)
        ```
    """
    ut1_utc = get_ut1_utc(eop, mjd, extrapolation)
    pm_x, pm_y = get_pm(eop, mjd, extrapolation)
    return EOPValues(ut1_utc=ut1_utc, pm_x=pm_x, pm_y=pm_y)


def lookup_jd(
    eop: EOPData,
    jd_utc: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> EOPValues:
    """Query Earth orientation keyed by a UTC Julian Date.

    Args:
        eop: EOP dataset.
        jd_utc: Julian Date (UTC).
        extrapolation: Behaviour outside the tabulated range.

    Returns:
        :class:`EOPValues` at ``jd_utc``.
    """
    mjd = jnp.asarray(jd_utc, dtype=eop.mjd.dtype) - JD_MJD_OFFSET
    return get_eop(eop, mjd, extrapolation)
