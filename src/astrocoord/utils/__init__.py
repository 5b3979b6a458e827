"""Shared utility functions for astrocoord.

Provides angle conversion helpers and filesystem cache management.
"""

from astrocoord.utils._angle import (
    ASIN_DOMAIN_TOL,
    clamped_arcsin,
    dms_to_rad,
    from_radians,
    hms_to_rad,
    normalize_angle,
    split_sexagesimal,
    to_radians,
    wrap_to_pi,
)
from astrocoord.utils.caching import (
    file_age_seconds,
    get_cache_dir,
    get_eop_cache_dir,
    is_file_stale,
)

__all__ = [
    "ASIN_DOMAIN_TOL",
    "clamped_arcsin",
    "dms_to_rad",
    "file_age_seconds",
    "from_radians",
    "get_cache_dir",
    "get_eop_cache_dir",
    "hms_to_rad",
    "is_file_stale",
    "normalize_angle",
    "split_sexagesimal",
    "to_radians",
    "wrap_to_pi",
]
