"""The instant module provides the ``Instant`` class for representing points in time.

An Instant is an absolute UTC point in time stored as an integer number of
milliseconds since the Unix epoch.  Integer storage makes instants exact,
hashable and immutable; conversion to Julian Date happens on demand and is
the only place where floating point enters.

The module also provides the calendar converter entry points
:func:`instant_to_jd` and :func:`jd_to_instant`.
"""

from __future__ import annotations

import datetime
import math
import re

from .constants import JD_MJD_OFFSET, MS_PER_DAY
from .errors import InvalidArgumentError
from .time import (
    MAX_YEAR,
    MIN_YEAR,
    caldate_to_unix_ms,
    jd_to_caldate,
    unix_ms_to_jd,
)

_UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

# Milliseconds since the Unix epoch of the first and one past the last supported instant
_MIN_MS = caldate_to_unix_ms(MIN_YEAR, 1, 1)
_MAX_MS = caldate_to_unix_ms(MAX_YEAR, 12, 31) + MS_PER_DAY
_LAST_SECOND_MS = _MAX_MS - 1000

# YYYY-MM-DD[(T| )HH:MM[:SS[.fff]]][Z|(+|-)HH:MM]
_INSTANT_PATTERN = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})'
    r'(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d+))?)?)?'
    r'(Z|[+-]\d{2}:?\d{2})?$'
)


class Instant:
    """Represents a single UTC instant with millisecond resolution.

    The only state is ``_ms``, integer milliseconds since
    1970-01-01T00:00:00Z.  Instances are immutable; arithmetic returns new
    instances.

    Time-zone handling: aware datetimes and ISO 8601 strings with an offset
    are normalised to UTC.  Naive datetimes and strings without an offset
    are read as UTC, never as process-local time.

    Constructors:
        Instant(2018, 1, 1)
        Instant(2018, 1, 1, 12, 0, 0.0)
        Instant("2018-01-01T12:00:00Z")
        Instant(datetime.datetime(2018, 1, 1, tzinfo=datetime.timezone.utc))
        Instant(other_instant)
        Instant.from_unix_ms(1514764800000)
        Instant.from_jd(2458120.0)
    """

    __slots__ = ('_ms',)

    def __init__(self, *args: int | float | str | datetime.datetime | Instant) -> None:
        """Initialize Instant. Supports multiple constructor forms.

        Args:
            *args: Either (year, month, day[, hour, minute, second]),
                an ISO 8601 string, a ``datetime.datetime``, or another
                Instant.

        Raises:
            InvalidArgumentError: If the arguments do not describe an instant
                between years 1 and 9999.
        """
        if len(args) == 1:
            arg = args[0]
            if isinstance(arg, Instant):
                ms = arg._ms
            elif isinstance(arg, str):
                ms = _parse_string(arg)
            elif isinstance(arg, datetime.datetime):
                ms = _datetime_to_ms(arg)
            else:
                raise InvalidArgumentError(f"Cannot construct Instant from {type(arg)}")
        elif 3 <= len(args) <= 6:
            ms = caldate_to_unix_ms(*args)
        else:
            raise InvalidArgumentError(
                "Instant requires date components (3-6 args), a string, a datetime or an Instant"
            )

        _check_range(ms)
        object.__setattr__(self, '_ms', ms)

    @classmethod
    def from_unix_ms(cls, unix_ms: int) -> Instant:
        """Create an Instant from milliseconds since the Unix epoch.

        Args:
            unix_ms (int): Milliseconds since 1970-01-01T00:00:00Z.

        Returns:
            Instant: New Instant.

        Raises:
            InvalidArgumentError: If *unix_ms* is not an integer or is out of range.
        """
        if isinstance(unix_ms, bool) or not isinstance(unix_ms, int):
            if isinstance(unix_ms, float) and unix_ms.is_integer():
                unix_ms = int(unix_ms)
            else:
                raise InvalidArgumentError(f"unix_ms must be an integer, got {unix_ms!r}")
        _check_range(unix_ms)
        obj = object.__new__(cls)
        object.__setattr__(obj, '_ms', unix_ms)
        return obj

    @classmethod
    def from_jd(cls, jd: float) -> Instant:
        """Create an Instant from a Julian Date.

        The time of day is resolved to whole seconds: hour and minute are
        truncated and the second is rounded, so the result is within one
        second of the exact instant.  A carry past the last second of year
        9999 is clamped to 9999-12-31T23:59:59.

        Args:
            jd (float): Julian Date (UTC).

        Returns:
            Instant: New Instant.

        Raises:
            InvalidArgumentError: If *jd* is not finite or lies outside years
                1 through 9999.
        """
        year, month, day, hour, minute, second = jd_to_caldate(jd)
        # A rounded second of 60 carries into the next minute here
        ms = caldate_to_unix_ms(year, month, day, hour, minute, second)
        # Past 9999-12-31T23:59:59.5 the carry would leave the calendar range
        return cls.from_unix_ms(min(ms, _LAST_SECOND_MS))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Arithmetic operators

    def __add__(self, seconds: float) -> Instant:
        """Return a new Instant advanced by *seconds*.

        Args:
            seconds (float): Seconds to add, rounded to the nearest millisecond.

        Returns:
            Instant: New Instant.
        """
        if isinstance(seconds, (Instant, datetime.datetime)):
            return NotImplemented
        return Instant.from_unix_ms(self._ms + _seconds_to_ms(seconds))

    __radd__ = __add__

    def __sub__(self, other: Instant | float) -> Instant | float:
        """Subtract seconds or compute the difference between Instants.

        Args:
            other: If Instant, returns the time difference in seconds.
                If numeric, returns a new Instant with seconds subtracted.

        Returns:
            float or Instant: Time difference in seconds, or new Instant.
        """
        if isinstance(other, Instant):
            return (self._ms - other._ms) / 1000.0
        if isinstance(other, datetime.datetime):
            return NotImplemented
        return Instant.from_unix_ms(self._ms - _seconds_to_ms(other))

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms == other._ms

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms < other._ms

    def __le__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms <= other._ms

    def __gt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms > other._ms

    def __ge__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ms >= other._ms

    def __hash__(self):
        return hash(self._ms)

    # Time properties

    @property
    def unix_ms(self) -> int:
        """Milliseconds since 1970-01-01T00:00:00Z."""
        return self._ms

    def jd(self) -> float:
        """Return the Julian Date of this instant, including the fractional day.

        Returns:
            float: Julian Date (UTC).
        """
        return unix_ms_to_jd(self._ms)

    def mjd(self) -> float:
        """Return the Modified Julian Date of this instant.

        Returns:
            float: Modified Julian Date (UTC).
        """
        return self.jd() - JD_MJD_OFFSET

    def to_datetime(self) -> datetime.datetime:
        """Return this instant as an aware ``datetime`` in UTC.

        Returns:
            datetime.datetime: UTC datetime with millisecond precision.
        """
        return _UNIX_EPOCH + datetime.timedelta(milliseconds=self._ms)

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the calendar date components.

        Returns:
            tuple: (year, month, day, hour, minute, second) where second
                includes the millisecond fraction.
        """
        dt = self.to_datetime()
        second = dt.second + dt.microsecond / 1e6
        return dt.year, dt.month, dt.day, dt.hour, dt.minute, second

    # String representations

    def __str__(self):
        dt = self.to_datetime()
        return (f'{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T'
                f'{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}'
                f'.{dt.microsecond // 1000:03d}Z')

    def __repr__(self):
        return f'Instant({str(self)!r})'

    def __reduce__(self):
        return (Instant.from_unix_ms, (self._ms,))


def instant_to_jd(instant: Instant | str | datetime.datetime) -> float:
    """Convert an instant to its Julian Date.

    The conversion uses the instant's UTC representation,
    ``unix_ms / 86400000 + 2440587.5``; no local time-zone offset is
    involved.  Anything accepted by the :class:`Instant` constructor is
    accepted here.

    Args:
        instant: Instant, ISO 8601 string or ``datetime``.

    Returns:
        float: Julian Date (UTC), including the fractional day.

    Examples:
        ```python
        from vsopjax import Instant, instant_to_jd
        instant_to_jd(Instant(2000, 1, 1, 12))  # 2451545.0
        ```
    """
    if not isinstance(instant, Instant):
        instant = Instant(instant)
    return instant.jd()


def jd_to_instant(jd: float) -> Instant:
    """Convert a Julian Date to a UTC Instant.

    Args:
        jd (float): Julian Date (UTC).

    Returns:
        Instant: Instant within one second of *jd*.

    Raises:
        InvalidArgumentError: If *jd* is not finite or lies outside years
            1 through 9999.

    Examples:
        ```python
        from vsopjax import jd_to_instant
        str(jd_to_instant(2451545.0))  # '2000-01-01T12:00:00.000Z'
        ```
    """
    return Instant.from_jd(jd)


def _check_range(ms: int) -> None:
    if not _MIN_MS <= ms < _MAX_MS:
        raise InvalidArgumentError(
            f"Instant {ms} ms from the Unix epoch is outside years {MIN_YEAR}-{MAX_YEAR}"
        )


def _seconds_to_ms(seconds: float) -> int:
    if isinstance(seconds, bool):
        raise InvalidArgumentError("Time offsets must be numbers, not bool")
    try:
        seconds = float(seconds)
    except (TypeError, ValueError) as err:
        raise InvalidArgumentError(f"Time offsets must be numbers, got {seconds!r}") from err
    if not math.isfinite(seconds):
        raise InvalidArgumentError(f"Time offsets must be finite, got {seconds}")
    return round(seconds * 1000.0)


def _datetime_to_ms(dt: datetime.datetime) -> int:
    """Convert a datetime to Unix milliseconds, reading naive values as UTC."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    delta = dt - _UNIX_EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + round(delta.microseconds / 1000)


def _parse_string(string: str) -> int:
    """Parse an ISO 8601 string to Unix milliseconds.

    Supported formats:
        - ``YYYY-MM-DD``
        - ``YYYY-MM-DDTHH:MM``
        - ``YYYY-MM-DDTHH:MM:SS``
        - ``YYYY-MM-DDTHH:MM:SS.fff``

    each optionally followed by ``Z`` or a ``+HH:MM`` / ``-HH:MM`` offset.
    """
    m = _INSTANT_PATTERN.match(string.strip())
    if m is None:
        raise InvalidArgumentError(
            f'Invalid Instant string: "{string}" is not ISO 8601 compliant'
        )

    year, month, day, hour, minute, second, frac, zone = m.groups()
    seconds = float(second) if second is not None else 0.0
    if frac is not None:
        seconds += float(f"0.{frac}")

    hour = int(hour) if hour is not None else 0
    minute = int(minute) if minute is not None else 0
    if hour > 23 or minute > 59 or seconds >= 61.0:
        raise InvalidArgumentError(f'Invalid time of day in Instant string: "{string}"')

    ms = caldate_to_unix_ms(int(year), int(month), int(day), hour, minute, seconds)

    if zone is not None and zone != 'Z':
        sign = -1 if zone[0] == '-' else 1
        digits = zone[1:].replace(':', '')
        offset_minutes = int(digits[:2]) * 60 + int(digits[2:])
        # Local time = UTC + offset, so subtract the offset to reach UTC
        ms -= sign * offset_minutes * 60000

    return ms
