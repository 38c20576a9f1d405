"""Type definitions for VSOP87 tables and results.

Provides the identifiers and containers used throughout the VSOP87 package:

- :class:`Planet`: The eight major planets, numbered by distance from the Sun.
- :func:`resolve_planet`: Normalises a planet id or name to :class:`Planet`.
- :class:`Coordinate`: The three spherical coordinates of version D.
- :class:`CoordinateSeries`: Term arrays for one coordinate, one per power of *t*.
- :class:`PlanetTable`: The three coordinate series of one planet.
- :class:`Vsop87Block`: One header-delimited block of a published VSOP87 file.
- :class:`SphericalCoordinates`, :class:`RectangularCoordinates` and
  :class:`HeliocentricPosition`: Results of the position resolver.

The containers are :class:`~typing.NamedTuple` subclasses.  The result types
are JAX pytrees and pass through ``jax.jit`` and ``jax.vmap`` unchanged.
Tables hold read-only NumPy arrays and are treated as static data.
"""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

import numpy as np
from jax import Array

from vsopjax.errors import InvalidArgumentError


class Planet(IntEnum):
    """Major planets in order of distance from the Sun."""

    MERCURY = 0
    VENUS = 1
    EARTH = 2
    MARS = 3
    JUPITER = 4
    SATURN = 5
    URANUS = 6
    NEPTUNE = 7


def resolve_planet(planet: Planet | int | str) -> Planet:
    """Normalise a planet identifier to :class:`Planet`.

    Args:
        planet: A :class:`Planet`, an integer id in ``0..7`` or a planet
            name (case-insensitive).

    Returns:
        Planet: The matching planet.

    Raises:
        InvalidArgumentError: If *planet* does not name one of the eight
            planets.  Booleans and floats are rejected.

    Examples:
        ```python
        from vsopjax.vsop87 import resolve_planet
        resolve_planet("mars")  # Planet.MARS
        resolve_planet(2)       # Planet.EARTH
        ```
    """
    if isinstance(planet, Planet):
        return planet
    if isinstance(planet, (bool, np.bool_)):
        raise InvalidArgumentError(f"Invalid planet id {planet!r}")
    if isinstance(planet, (int, np.integer)):
        if 0 <= planet < len(Planet):
            return Planet(int(planet))
        raise InvalidArgumentError(
            f"Invalid planet id {planet}; expected 0..{len(Planet) - 1}"
        )
    if isinstance(planet, str):
        try:
            return Planet[planet.strip().upper()]
        except KeyError:
            raise InvalidArgumentError(f"Unknown planet name {planet!r}") from None
    raise InvalidArgumentError(f"Invalid planet identifier {planet!r}")


class Coordinate(IntEnum):
    """Heliocentric spherical coordinates, numbered as in the VSOP87 files."""

    LONGITUDE = 1
    LATITUDE = 2
    RADIUS = 3


class CoordinateSeries(NamedTuple):
    """Series terms for one coordinate of one planet.

    Attributes:
        coordinate: Which coordinate the series evaluates.
        terms: One read-only array per power of *t*, starting at ``t**0``.
            Each array has shape ``(n, 3)`` with columns ``(A, B, C)``;
            ``n`` may be zero.
    """

    coordinate: Coordinate
    terms: tuple[np.ndarray, ...]

    @property
    def max_power(self) -> int:
        """Highest power of *t* carried by the series."""
        return len(self.terms) - 1

    @property
    def n_terms(self) -> int:
        """Total number of periodic terms over all powers."""
        return sum(int(block.shape[0]) for block in self.terms)


class PlanetTable(NamedTuple):
    """Heliocentric longitude, latitude and radius series for one planet.

    Attributes:
        planet: Planet described by the table.
        longitude: Series for L in radians.
        latitude: Series for B in radians.
        radius: Series for R in AU.
    """

    planet: Planet
    longitude: CoordinateSeries
    latitude: CoordinateSeries
    radius: CoordinateSeries


class Vsop87Block(NamedTuple):
    """One block of a published VSOP87 file.

    A block holds every term of a single (body, coordinate, power)
    combination and carries both term forms of each record.

    Attributes:
        version: VSOP87 version number (0 for the main version, 1-5 for A-E).
        body: Body number in the file convention (1=Mercury ... 8=Neptune,
            9=Earth-Moon barycentre).
        coordinate: Coordinate index within the version (1-6).
        power: Power of *t* the block multiplies.
        multipliers: Integer multipliers of the 12 fundamental arguments,
            shape ``(n, 12)``.
        sine_cosine: ``(S, K)`` pairs, shape ``(n, 2)``.
        amplitude_phase_frequency: ``(A, B, C)`` triples, shape ``(n, 3)``.
    """

    version: int
    body: int
    coordinate: int
    power: int
    multipliers: np.ndarray
    sine_cosine: np.ndarray
    amplitude_phase_frequency: np.ndarray


class SphericalCoordinates(NamedTuple):
    """Heliocentric ecliptic spherical coordinates (ecliptic and equinox of date).

    Attributes:
        longitude: Heliocentric longitude L in radians, in ``[0, 2*pi)``.
        latitude: Heliocentric latitude B in radians.
        radius: Distance from the Sun R in AU.
    """

    longitude: Array
    latitude: Array
    radius: Array


class RectangularCoordinates(NamedTuple):
    """Rectangular coordinates derived from :class:`SphericalCoordinates`.

    Uses the y-up convention ``x = -R cos(B) cos(L)``, ``y = R sin(B)``,
    ``z = R cos(B) sin(L)``.  Units: AU.
    """

    x: Array
    y: Array
    z: Array


class HeliocentricPosition(NamedTuple):
    """Heliocentric position of a planet at one instant.

    Attributes:
        spherical: Longitude, latitude and radius.
        rectangular: The same position in rectangular coordinates.
    """

    spherical: SphericalCoordinates
    rectangular: RectangularCoordinates
