"""
The `constants` module defines the angular, time and distance constants used by the VSOP87 theory.
"""

import math

# Mathematical Constants
"""
Full turn in radians. Units: *rad*
"""
TWO_PI = 2.0 * math.pi

"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * math.pi / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (math.pi * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * math.pi / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / math.pi / 2.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00). Units: *days*
"""
JD_J2000 = 2451545.0

"""
Julian Date of the Unix epoch (1970-01-01 00:00:00 UTC). Units: *days*
"""
JD_UNIX_EPOCH = 2440587.5

"""
Milliseconds in one day. Units: *ms*
"""
MS_PER_DAY = 86400000

"""
Days in one Julian millennium, the time unit of the VSOP87 series. Units: *days*

References:

1. P. Bretagnon and G. Francou, *Planetary theories in rectangular and spherical
   variables. VSOP87 solutions*, Astronomy and Astrophysics 202, 1988
"""
DAYS_PER_JULIAN_MILLENNIUM = 365250.0

"""
Half-width of the interval around J2000 outside of which positions are
flagged with a precision advisory. Units: *Julian millennia*
"""
VSOP87_VALID_MILLENNIA = 60.0

# Distance Constants

"""
Astronomical Unit. TDB-compatible value. Units: *m*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11
