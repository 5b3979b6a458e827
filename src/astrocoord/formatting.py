"""String rendering of coordinates.

A format is a tuple of :class:`Field` entries.  :func:`format_coordinate`
renders each field of a coordinate and joins them with ``", "``; the frame
label is appended in parentheses after the preceding field.  Fields whose
value is missing (a distance that is not set) are skipped.

Examples:
    ```python
    from astrocoord.formatting import HORIZONTAL_DEGREES, format_coordinate
    format_coordinate(horizontal, HORIZONTAL_DEGREES)
    # 'h -69.64686°, A 087.35112°'
    ```
"""

from __future__ import annotations

import enum
import math
from typing import NamedTuple

from .constants import AU, PARSEC
from .utils import split_sexagesimal


class Component(enum.Enum):
    """A renderable part of a coordinate."""

    RA_HMS = "ra_hms"
    RA_DEG = "ra_deg"
    DEC_DMS = "dec_dms"
    DEC_DEG = "dec_deg"
    ALT_DMS = "alt_dms"
    ALT_DEG = "alt_deg"
    AZ_DMS = "az_dms"
    AZ_DEG = "az_deg"
    LON_DMS = "lon_dms"
    LON_DEG = "lon_deg"
    LAT_DMS = "lat_dms"
    LAT_DEG = "lat_deg"
    DIST = "dist"
    FRAME = "frame"


class Field(NamedTuple):
    """One rendered component.

    Attributes:
        component: What to render.
        precision: Decimal places on the seconds (sexagesimal), the degrees
            or the distance.
        spaced: Separate sexagesimal parts with spaces instead of unit marks.
    """

    component: Component
    precision: int = 3
    spaced: bool = False


EQUATORIAL_DEFAULT = (
    Field(Component.RA_HMS),
    Field(Component.DEC_DMS),
    Field(Component.DIST),
    Field(Component.FRAME),
)
EQUATORIAL_DEGREES = (
    Field(Component.RA_DEG, 5),
    Field(Component.DEC_DEG, 5),
    Field(Component.FRAME),
)
HORIZONTAL_DEFAULT = (Field(Component.ALT_DMS), Field(Component.AZ_DMS))
HORIZONTAL_FULL = HORIZONTAL_DEFAULT + (Field(Component.DIST),)
HORIZONTAL_DEGREES = (Field(Component.ALT_DEG, 5), Field(Component.AZ_DEG, 5))
HORIZONTAL_SPACED = (
    Field(Component.ALT_DMS, spaced=True),
    Field(Component.AZ_DMS, spaced=True),
)
ECLIPTIC_DEFAULT = (
    Field(Component.LON_DMS),
    Field(Component.LAT_DMS),
    Field(Component.DIST),
)

_DEGREE_MARKS = ("°", "'", '"')
_HOUR_MARKS = ("ʰ", "ᵐ", "ˢ")
_SPACE_MARKS = (" ", " ", "")


def sexagesimal(
    value: float,
    precision: int = 3,
    width: int = 2,
    sign: str = "negative",
    marks: tuple[str, str, str] = _DEGREE_MARKS,
    modulus: int | None = None,
) -> str:
    """Render a value in hours or degrees as ``DD°MM'SS".fff``.

    Args:
        value: Value in whole units (hours or degrees).
        precision: Decimal places on the seconds.
        width: Zero-padded width of the whole units.
        sign: ``"always"`` for an explicit ``+``/``-``, ``"negative"`` for a
            ``-`` on negative values only, ``"none"`` for the magnitude.
        marks: Unit marks placed after the whole units, minutes and seconds.
        modulus: Wrap the whole units at this value after rounding
            (24 for hours, 360 for azimuth).

    Returns:
        str: Formatted value.
    """
    sgn, whole, minutes, seconds, fraction = split_sexagesimal(value, precision)
    if modulus is not None:
        whole %= modulus
    if sign == "always":
        prefix = "-" if sgn < 0 else "+"
    elif sign == "negative":
        prefix = "-" if sgn < 0 else ""
    else:
        prefix = ""
    text = (
        f"{prefix}{whole:0{width}d}{marks[0]}{minutes:02d}{marks[1]}"
        f"{seconds:02d}{marks[2]}"
    )
    if precision > 0:
        text += f".{fraction:0{precision}d}"
    return text


def format_distance(dist_au: float, precision: int = 3) -> str:
    """Render a distance in km below 1 AU, pc above 1 pc, AU in between."""
    if dist_au < 1.0:
        return f"{dist_au * AU / 1000.0:,.{precision}f} km"
    if dist_au * AU > PARSEC:
        return f"{dist_au * AU / PARSEC:,.{precision}f} pc"
    return f"{dist_au:,.{precision}f} AU"


def _degrees(value: float, precision: int, width: int, signed: bool) -> str:
    total = width + (precision + 1 if precision > 0 else 0)
    if signed:
        return f"{value:+0{total + 1}.{precision}f}°"
    return f"{value:0{total}.{precision}f}°"


def _dms(value: float, field: Field, width: int, sign: str, modulus: int | None = None) -> str:
    marks = _SPACE_MARKS if field.spaced else _DEGREE_MARKS
    return sexagesimal(value, field.precision, width, sign, marks, modulus)


def _frame_label(coord) -> str:
    if coord.is_apparent():
        return f"({coord.epoch})"
    return f"({coord.frame})"


def _render(coord, field: Field) -> str | None:
    c = field.component
    p = field.precision
    if c is Component.RA_HMS:
        marks = _SPACE_MARKS if field.spaced else _HOUR_MARKS
        return "α " + sexagesimal(math.degrees(coord.ra) / 15.0, p, 2, "none", marks, 24)
    if c is Component.RA_DEG:
        return "α " + _degrees(math.degrees(coord.ra), p, 3, False)
    if c is Component.DEC_DMS:
        return "δ " + _dms(math.degrees(coord.dec), field, 2, "always")
    if c is Component.DEC_DEG:
        return "δ " + _degrees(math.degrees(coord.dec), p, 2, True)
    if c is Component.ALT_DMS:
        return "h " + _dms(math.degrees(coord.alt), field, 2, "negative")
    if c is Component.ALT_DEG:
        return "h " + f"{math.degrees(coord.alt):.{p}f}°"
    if c is Component.AZ_DMS:
        return "A " + _dms(math.degrees(coord.az), field, 3, "none", 360)
    if c is Component.AZ_DEG:
        return "A " + _degrees(math.degrees(coord.az), p, 3, False)
    if c is Component.LON_DMS:
        return "λ " + _dms(math.degrees(coord.lon), field, 3, "none", 360)
    if c is Component.LON_DEG:
        return "λ " + _degrees(math.degrees(coord.lon), p, 3, False)
    if c is Component.LAT_DMS:
        return "β " + _dms(math.degrees(coord.lat), field, 2, "always")
    if c is Component.LAT_DEG:
        return "β " + _degrees(math.degrees(coord.lat), p, 2, True)
    if c is Component.DIST:
        return None if coord.dist is None else format_distance(coord.dist, p)
    return _frame_label(coord)


def format_coordinate(coord, fields) -> str:
    """Render ``coord`` according to ``fields``.

    Args:
        coord: An Equatorial, Horizontal or Ecliptic instance.
        fields: Sequence of :class:`Field`.

    Returns:
        str: The rendered fields joined with ``", "``.
    """
    parts: list[str] = []
    for field in fields:
        text = _render(coord, field)
        if text is None:
            continue
        if field.component is Component.FRAME and parts:
            parts[-1] = f"{parts[-1]} {text}"
        else:
            parts.append(text)
    return ", ".join(parts)


def format_geo(geo, precision: int = 3) -> str:
    """Render an observer location as ``38°00'00".000 N, 077°00'00".000 W``."""
    lat = sexagesimal(abs(math.degrees(geo.lat)), precision, 2, "none")
    lon = sexagesimal(abs(math.degrees(geo.lon)), precision, 3, "none")
    return f"{lat} {'N' if geo.is_north() else 'S'}, {lon} {'E' if geo.is_east() else 'W'}"
