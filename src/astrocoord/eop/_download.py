"""Fetch the IERS ``finals.all.iau2000.txt`` Earth orientation series.

HTTP and transport errors are not caught here.  Whether a failed refresh
is fatal is up to :func:`~astrocoord.eop.load_cached_eop`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

IERS_FINALS_URL: str = (
    "https://datacenter.iers.org/data/latestVersion/finals.all.iau2000.txt"
)
"""Bulletin A series, IAU 2000 nutation flavour."""

FINALS_FILENAME: str = "finals.all.iau2000.txt"
"""Name of the cached copy inside the EOP cache directory."""


def download_finals_file(
    filepath: str | Path,
    *,
    url: str = IERS_FINALS_URL,
    timeout: float = 120.0,
) -> Path:
    """Save the finals series from *url* to *filepath*.

    The body goes to a ``.part`` file next to *filepath* that replaces the
    destination only once the whole response has been received, so a
    failed refresh leaves any previous copy untouched.

    Args:
        filepath: Where to store the series.  Missing parent directories
            are created.
        url: Source URL.
        timeout: HTTP timeout in seconds.

    Returns:
        Absolute path of the stored file.

    Raises:
        httpx.HTTPStatusError: Non-2xx response.
        httpx.TransportError: Connection, DNS or timeout failure.
    """
    target = Path(filepath)
    target.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Fetching finals series from %s", url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()
    body = response.text

    partial = target.with_name(target.name + ".part")
    partial.write_text(body, encoding="utf-8")
    partial.replace(target)
    logger.info("Stored %d lines of EOP data in %s", body.count("\n"), target)
    return target.resolve()
