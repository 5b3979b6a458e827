"""
Angle, time and physical constants shared by the astrocoord modules.
"""

from jax.numpy import pi as PI

# Angle Conversions

"""
Radians per degree. Units: *rad/deg*
"""
DEG2RAD = PI / 180.0

"""
Degrees per radian. Units: *deg/rad*
"""
RAD2DEG = 180.0 / PI

"""
Radians per arcsecond. Units: *rad/arcsec*
"""
AS2RAD = PI / 648000.0

"""
Arcseconds per radian. Units: *arcsec/rad*
"""
RAD2AS = 648000.0 / PI

"""
Radians per hour of right ascension (15 degrees). Units: *rad/h*
"""
HOUR2RAD = PI / 12.0

"""
Hours of right ascension per radian. Units: *h/rad*
"""
RAD2HOUR = 12.0 / PI

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD2000 = 2451545.0

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Julian Date of the B1950.0 epoch (TT). Units: *days*

References:

1. J. H. Lieske, *Precession matrix based on IAU (1976) system of astronomical constants*, A&A 73, 1979.
"""
JD_B1950 = 2433282.4235

"""
Julian Date of the B1900.0 epoch (TT). Units: *days*
"""
JD_B1900 = 2415020.31352

"""
Length of the Julian year. Units: *days*
"""
JULIAN_YEAR = 365.25

"""
Length of the tropical (Besselian) year at B1900.0. Units: *days*
"""
BESSELIAN_YEAR = 365.242198781

"""
Seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

# Physical Constants

"""
Speed of light in vacuum. Units: *m/s*
"""
C_LIGHT = 299792458.0

"""
Astronomical Unit. TDB-compatible value. Units: *m*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11

"""
Parsec. Equal to 648000/pi AU. Units: *m*
"""
PARSEC = AU * 648000.0 / PI

"""
Equatorial horizontal parallax of the Sun at 1 AU. Units: *arcsec*

References:

1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 40.
"""
SOLAR_PARALLAX = 8.794

# Earth Constants

"""
Earth's equatorial radius, IAU 1976 system of astronomical constants. Units: *m*
"""
IAU1976_a = 6378140.0

"""
Earth's flattening, IAU 1976 system of astronomical constants. [dimensionless]
"""
IAU1976_f = 1.0 / 298.257

"""
Earth's semi-major axis as defined by the WGS84 geodetic system. Units: *m*

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0

"""
Earth's ellipsoidal flattening. WGS84 Value. [dimensionless]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563

# Observation Constants

"""
Effective wavelength used for atmospheric refraction (visual). Units: *micrometres*
"""
WAVELENGTH_VISUAL = 0.55
