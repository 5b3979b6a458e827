"""Parser for the IERS ``finals.all.iau2000.txt`` fixed-column format.

Only the columns the observed-place transformation needs are read: MJD,
polar motion x/y (Bulletin A, arcseconds) and UT1-UTC (seconds).
"""

from __future__ import annotations

from pathlib import Path

from astrocoord.constants import AS2RAD

# 0-indexed column slices of the IERS standard (finals) format
_MJD = slice(6, 15)
_PM_X = slice(17, 27)
_PM_Y = slice(36, 46)
_UT1_UTC = slice(58, 68)
_MAX_LINE_LENGTH = 187


def parse_finals_line(line: str) -> tuple[float, float, float, float] | None:
    """Parse one line of an IERS finals file.

    Lines longer than the format allows, or lines missing any of the
    required fields (prediction lines past the end of the series), yield
    ``None``.

    Args:
        line: One line of the file, without its newline.

    Returns:
        Tuple ``(mjd, pm_x [rad], pm_y [rad], ut1_utc [s])`` or ``None``.
    """
    if len(line) > _MAX_LINE_LENGTH:
        return None
    line = line.ljust(_MAX_LINE_LENGTH)

    try:
        mjd = float(line[_MJD])
        pm_x = float(line[_PM_X]) * AS2RAD
        pm_y = float(line[_PM_Y]) * AS2RAD
        ut1_utc = float(line[_UT1_UTC])
    except ValueError:
        return None

    return mjd, pm_x, pm_y, ut1_utc


def parse_finals_file(
    filepath: str | Path,
) -> tuple[list[float], list[float], list[float], list[float]]:
    """Parse an entire IERS finals file.

    Args:
        filepath: Path to the file.

    Returns:
        Parallel lists ``(mjd, pm_x, pm_y, ut1_utc)`` in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no parsable line.
    """
    mjds: list[float] = []
    pm_xs: list[float] = []
    pm_ys: list[float] = []
    ut1_utcs: list[float] = []

    with open(filepath, encoding="utf-8") as f:
        for line in f:
            record = parse_finals_line(line.rstrip("\n"))
            if record is None:
                continue
            mjd, pm_x, pm_y, ut1_utc = record
            mjds.append(mjd)
            pm_xs.append(pm_x)
            pm_ys.append(pm_y)
            ut1_utcs.append(ut1_utc)

    if not mjds:
        raise ValueError(f"No valid EOP data found in {filepath}")

    return mjds, pm_xs, pm_ys, ut1_utcs
