"""
vsopjax computes heliocentric planet positions from the VSOP87D theory in JAX.
"""

from .constants import (
    TWO_PI,
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    JD_MJD_OFFSET,
    JD_J2000,
    JD_UNIX_EPOCH,
    MS_PER_DAY,
    DAYS_PER_JULIAN_MILLENNIUM,
    VSOP87_VALID_MILLENNIA,
    AU,
)

from .config import set_dtype, get_dtype
from .errors import InvalidArgumentError, PrecisionAdvisory

from .time import (
    caldate_to_unix_ms,
    caldate_to_jd,
    jd_to_caldate,
    unix_ms_to_jd,
    jd_to_unix_ms,
    jd_to_julian_millennia,
    julian_millennia_to_jd,
)

from .instant import Instant, instant_to_jd, jd_to_instant

from .vsop87 import (
    Planet,
    Coordinate,
    HeliocentricPosition,
    SphericalCoordinates,
    RectangularCoordinates,
    heliocentric_position,
    heliocentric_position_t,
    heliocentric_positions,
    compute_heliocentric_position,
    spherical_to_rectangular,
    resolve_planet,
)

convert_calendar_to_julian = instant_to_jd
convert_julian_to_calendar = jd_to_instant

__all__ = [
    # Constants
    "TWO_PI",
    "DEG2RAD",
    "RAD2DEG",
    "AS2RAD",
    "RAD2AS",
    "JD_MJD_OFFSET",
    "JD_J2000",
    "JD_UNIX_EPOCH",
    "MS_PER_DAY",
    "DAYS_PER_JULIAN_MILLENNIUM",
    "VSOP87_VALID_MILLENNIA",
    "AU",
    # Config
    "set_dtype",
    "get_dtype",
    # Errors
    "InvalidArgumentError",
    "PrecisionAdvisory",
    # Time
    "caldate_to_unix_ms",
    "caldate_to_jd",
    "jd_to_caldate",
    "unix_ms_to_jd",
    "jd_to_unix_ms",
    "jd_to_julian_millennia",
    "julian_millennia_to_jd",
    # Instant
    "Instant",
    "instant_to_jd",
    "jd_to_instant",
    "convert_calendar_to_julian",
    "convert_julian_to_calendar",
    # VSOP87
    "Planet",
    "Coordinate",
    "HeliocentricPosition",
    "SphericalCoordinates",
    "RectangularCoordinates",
    "heliocentric_position",
    "heliocentric_position_t",
    "heliocentric_positions",
    "compute_heliocentric_position",
    "spherical_to_rectangular",
    "resolve_planet",
]
