"""Local cache for downloaded reference data (the IERS EOP series).

The cache root is ``$ASTROCOORD_CACHE`` when that environment variable is
set and ``~/.cache/astrocoord`` otherwise.  Nothing here imports JAX.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

CACHE_ENV_VAR = "ASTROCOORD_CACHE"


def _cache_root() -> Path:
    override = os.environ.get(CACHE_ENV_VAR)
    if override is not None:
        return Path(override)
    return Path.home() / ".cache" / "astrocoord"


def get_cache_dir(*parts: str) -> Path:
    """Return a directory inside the cache, creating it when missing.

    Args:
        *parts: Path components below the cache root, e.g. ``"eop"``.

    Returns:
        :class:`~pathlib.Path` to the directory.
    """
    directory = _cache_root().joinpath(*parts)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_eop_cache_dir() -> Path:
    """Directory holding the cached Earth orientation series."""
    return get_cache_dir("eop")


def file_age_seconds(filepath: str | Path) -> float:
    """Seconds since *filepath* was last modified.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    try:
        mtime = Path(filepath).stat().st_mtime
    except FileNotFoundError:
        raise FileNotFoundError(f"No such file: '{filepath}'") from None
    return max(0.0, time.time() - mtime)


def is_file_stale(filepath: str | Path, max_age_days: float) -> bool:
    """Whether *filepath* needs refreshing.

    Args:
        filepath: Cached file.
        max_age_days: Age in days beyond which the file is stale.

    Returns:
        ``True`` if the file is missing or older than *max_age_days*.
    """
    if not Path(filepath).exists():
        return True
    return file_age_seconds(filepath) > max_age_days * 86400.0
