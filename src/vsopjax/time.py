"""Calendar and Julian Day conversions.

All functions here operate on concrete Python numbers on the host.  Julian
Days are real numbers whose fractional part encodes the time of day, with
day boundaries at noon.  Civil dates are proleptic Gregorian and UTC.

Julian millennia since J2000, the time argument of the VSOP87 series, are
derived from Julian Days with :func:`jd_to_julian_millennia`, which also
accepts NumPy or JAX arrays.
"""

from __future__ import annotations

import datetime
import math

from .constants import DAYS_PER_JULIAN_MILLENNIUM, JD_J2000, JD_UNIX_EPOCH, MS_PER_DAY
from .errors import InvalidArgumentError

MIN_YEAR: int = 1
MAX_YEAR: int = 9999

_UNIX_EPOCH_ORDINAL = datetime.date(1970, 1, 1).toordinal()

# Julian Days at 0001-01-01T00:00:00 and at the end of 9999-12-31
_JD_MIN = JD_UNIX_EPOCH + (datetime.date(MIN_YEAR, 1, 1).toordinal() - _UNIX_EPOCH_ORDINAL)
_JD_MAX = JD_UNIX_EPOCH + (datetime.date(MAX_YEAR, 12, 31).toordinal() - _UNIX_EPOCH_ORDINAL + 1)


def caldate_to_unix_ms(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> int:
    """Convert a UTC calendar date to integer milliseconds since the Unix epoch.

    Hour, minute and second may exceed their usual ranges; the excess carries
    into the following minute, hour or day.

    Args:
        year (int): Year, 1 through 9999.
        month (int): Month, 1 through 12.
        day (int): Day of the month.
        hour (int): Hour. Default: ``0``
        minute (int): Minute. Default: ``0``
        second (float): Second, may include a fractional part. Default: ``0.0``

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z, rounded to the nearest
        millisecond.

    Raises:
        InvalidArgumentError: If the date does not exist in the supported range.
    """
    try:
        ordinal = datetime.date(int(year), int(month), int(day)).toordinal()
    except (TypeError, ValueError) as err:
        raise InvalidArgumentError(
            f"Invalid calendar date {year}-{month}-{day}: {err}"
        ) from err

    if not math.isfinite(second):
        raise InvalidArgumentError(f"Seconds must be finite, got {second}")

    days = ordinal - _UNIX_EPOCH_ORDINAL
    ms_of_day = (int(hour) * 60 + int(minute)) * 60000 + round(second * 1000.0)
    return days * MS_PER_DAY + ms_of_day


def unix_ms_to_jd(unix_ms: int) -> float:
    """Convert milliseconds since the Unix epoch (UTC) to Julian Date.

    Args:
        unix_ms (int): Milliseconds since 1970-01-01T00:00:00Z.

    Returns:
        Julian Date, including the fractional day.
    """
    return unix_ms / MS_PER_DAY + JD_UNIX_EPOCH


def jd_to_unix_ms(jd: float) -> int:
    """Convert a Julian Date to milliseconds since the Unix epoch.

    Args:
        jd (float): Julian Date.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z, rounded to the nearest
        millisecond.

    Raises:
        InvalidArgumentError: If *jd* is not finite.
    """
    jd = _as_jd(jd)
    return round((jd - JD_UNIX_EPOCH) * MS_PER_DAY)


def caldate_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a UTC calendar date to Julian Date.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the calendar date. Default: ``0``
        minute (int): Minute of the calendar date. Default: ``0``
        second (float): Second of the calendar date. Default: ``0.0``

    Returns:
        Julian Date.
    """
    return unix_ms_to_jd(caldate_to_unix_ms(year, month, day, hour, minute, second))


def jd_to_caldate(jd: float) -> tuple[int, int, int, int, int, int]:
    """Convert a Julian Date to a Gregorian calendar date and time of day.

    The hour and minute are truncated from the fractional day and the second
    is rounded to the nearest integer, so the returned second can be ``60``;
    callers that build a timestamp must let it carry into the next minute.

    Args:
        jd (float): Julian Date.

    Returns:
        tuple[int, ...]: (year, month, day, hour, minute, second).

    Raises:
        InvalidArgumentError: If *jd* is not finite or falls outside years
            1 through 9999.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, chapter 7.
    """
    jd = _as_jd(jd)
    if not _JD_MIN <= jd < _JD_MAX:
        raise InvalidArgumentError(
            f"Julian Date {jd} is outside years {MIN_YEAR}-{MAX_YEAR}"
        )

    x = jd + 0.5
    z = math.floor(x)
    f = x - z

    # Gregorian leap-cycle correction
    y = math.floor((z - 1867216.25) / 36524.25)
    a = z + 1 + y - math.floor(y / 4)
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    g = math.floor((b - d) / 30.6001)

    month = g - 1 if g < 13.5 else g - 13
    year = c - 4715 if month < 2.5 else c - 4716

    ut = b - d - math.floor(30.6001 * g) + f
    day = math.floor(ut)

    ut = (ut - math.floor(ut)) * 24.0
    hour = math.floor(ut)
    ut = (ut - math.floor(ut)) * 60.0
    minute = math.floor(ut)
    ut = (ut - math.floor(ut)) * 60.0
    second = round(ut)

    return int(year), int(month), int(day), int(hour), int(minute), int(second)


def jd_to_julian_millennia(jd):
    """Convert Julian Date to Julian millennia since J2000.

    Works on Python floats as well as NumPy or JAX arrays.

    Args:
        jd: Julian Date.

    Returns:
        ``(jd - 2451545.0) / 365250``.
    """
    return (jd - JD_J2000) / DAYS_PER_JULIAN_MILLENNIUM


def julian_millennia_to_jd(t):
    """Convert Julian millennia since J2000 to Julian Date.

    Args:
        t: Julian millennia since J2000.

    Returns:
        Julian Date.
    """
    return t * DAYS_PER_JULIAN_MILLENNIUM + JD_J2000


def _as_jd(jd) -> float:
    """Coerce *jd* to a finite float or raise InvalidArgumentError."""
    if isinstance(jd, (str, bytes, bool)):
        raise InvalidArgumentError(f"Julian Date must be a real number, got {jd!r}")
    try:
        value = float(jd)
    except (TypeError, ValueError) as err:
        raise InvalidArgumentError(f"Julian Date must be a real number, got {jd!r}") from err
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Julian Date must be finite, got {value}")
    return value
