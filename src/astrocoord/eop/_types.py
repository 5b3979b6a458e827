"""Type definitions for Earth Orientation Parameters (EOP).

- :class:`EOPData`: immutable container of sorted EOP arrays, a JAX pytree
  by virtue of being a :class:`~typing.NamedTuple`.
- :class:`EOPValues`: the parameters the observed-place transformation
  needs at one instant.
- :class:`EOPExtrapolation`: behaviour outside the tabulated range.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

from jax import Array


class EOPData(NamedTuple):
    """Earth Orientation Parameter table for JIT-compatible lookups.

    Attributes:
        mjd: Sorted UTC Modified Julian Dates, shape ``(N,)``.
        ut1_utc: UT1-UTC offset [s], shape ``(N,)``.
        pm_x: Polar motion x-component [rad], shape ``(N,)``.
        pm_y: Polar motion y-component [rad], shape ``(N,)``.
        mjd_min: Scalar, first MJD in the dataset.
        mjd_max: Scalar, last MJD in the dataset.
    """

    mjd: Array
    ut1_utc: Array
    pm_x: Array
    pm_y: Array
    mjd_min: Array
    mjd_max: Array


class EOPValues(NamedTuple):
    """Earth orientation at a single instant.

    Attributes:
        ut1_utc: UT1-UTC [s].
        pm_x: Polar motion x [rad].
        pm_y: Polar motion y [rad].
    """

    ut1_utc: Array
    pm_x: Array
    pm_y: Array


class EOPExtrapolation(enum.Enum):
    """Extrapolation mode for EOP queries outside the data range.

    Resolved at trace time.

    Attributes:
        HOLD: Clamp to the nearest boundary value.
        ZERO: Return zero for out-of-range queries.
    """

    HOLD = "hold"
    ZERO = "zero"
