"""
astrocoord converts celestial positions between Cartesian, equatorial, ecliptic and horizontal coordinates, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    HOUR2RAD,
    RAD2HOUR,
    JD_MJD_OFFSET,
    JD2000,
    MJD2000,
    C_LIGHT,
    AU,
    PARSEC,
    SOLAR_PARALLAX,
    IAU1976_a,
    IAU1976_f,
    WGS84_a,
    WGS84_f,
)

from .config import (
    set_dtype,
    get_dtype,
    set_default_eop,
    get_default_eop,
)
from .errors import (
    AstroCoordError,
    InvalidArgumentError,
    TransformationError,
    NumericDomainError,
)
from .epoch import Epoch, TimeSystem
from .frame import Frame

from .coordinates import (
    Ellipsoid,
    parallax_constants,
    position_cartesian_to_spherical,
    position_spherical_to_cartesian,
    position_equatorial_to_ecliptic,
    position_ecliptic_to_equatorial,
    position_geodetic_to_ecef,
    position_geocentric_to_topocentric,
    position_hadec_to_azel,
)

from .geo import Geo
from .cartesian import Cartesian
from .ecliptic import Ecliptic, mean_obliquity, true_obliquity
from .horizontal import Horizontal
from .equatorial import (
    ApparentEquatorial,
    ApparentPlace,
    Equatorial,
    Weather,
)
from .formatting import Component, Field, format_coordinate

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AS2RAD",
    "RAD2AS",
    "HOUR2RAD",
    "RAD2HOUR",
    "JD_MJD_OFFSET",
    "JD2000",
    "MJD2000",
    "C_LIGHT",
    "AU",
    "PARSEC",
    "SOLAR_PARALLAX",
    "IAU1976_a",
    "IAU1976_f",
    "WGS84_a",
    "WGS84_f",
    # Config
    "set_dtype",
    "get_dtype",
    "set_default_eop",
    "get_default_eop",
    # Errors
    "AstroCoordError",
    "InvalidArgumentError",
    "TransformationError",
    "NumericDomainError",
    # Time
    "Epoch",
    "TimeSystem",
    # Frames
    "Frame",
    # Coordinates
    "Ellipsoid",
    "parallax_constants",
    "position_cartesian_to_spherical",
    "position_spherical_to_cartesian",
    "position_equatorial_to_ecliptic",
    "position_ecliptic_to_equatorial",
    "position_geodetic_to_ecef",
    "position_geocentric_to_topocentric",
    "position_hadec_to_azel",
    # Coordinate classes
    "Geo",
    "Cartesian",
    "Ecliptic",
    "mean_obliquity",
    "true_obliquity",
    "Horizontal",
    "Equatorial",
    "ApparentEquatorial",
    "ApparentPlace",
    "Weather",
    # Formatting
    "Component",
    "Field",
    "format_coordinate",
]
