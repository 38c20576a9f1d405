"""Heliocentric planet positions from the VSOP87D series.

Combines the calendar conversion, the series evaluator and the coefficient
tables: an instant is converted to Julian millennia from J2000, the
longitude, latitude and radius series of the requested planet are evaluated,
the longitude is wrapped into ``[0, 2*pi)`` and the spherical position is
converted to rectangular coordinates.

Positions are referred to the mean ecliptic and equinox of date.  The
functions taking *t* directly are compatible with ``jax.jit`` and
``jax.vmap``; the planet and table are treated as static.
"""

from __future__ import annotations

import warnings
from collections.abc import Sequence

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from vsopjax.config import get_dtype
from vsopjax.constants import TWO_PI, VSOP87_VALID_MILLENNIA
from vsopjax.errors import PrecisionAdvisory
from vsopjax.instant import instant_to_jd
from vsopjax.time import jd_to_julian_millennia
from vsopjax.vsop87._providers import get_planet_table
from vsopjax.vsop87._series import coordinate_series
from vsopjax.vsop87._types import (
    HeliocentricPosition,
    Planet,
    PlanetTable,
    RectangularCoordinates,
    SphericalCoordinates,
    resolve_planet,
)


def warn_if_outside_validity(t: float) -> None:
    """Issue a :class:`PrecisionAdvisory` when *t* is far from J2000.

    Args:
        t: Julian millennia from J2000 (a concrete value, not a tracer).
    """
    if abs(float(t)) > VSOP87_VALID_MILLENNIA:
        warnings.warn(
            f"t = {float(t):.3f} Julian millennia is outside the VSOP87 validity span "
            f"of +/-{VSOP87_VALID_MILLENNIA:g}; accuracy is not warranted",
            PrecisionAdvisory,
            stacklevel=3,
        )


def spherical_to_rectangular(longitude: ArrayLike, latitude: ArrayLike, radius: ArrayLike) -> RectangularCoordinates:
    """Convert heliocentric spherical coordinates to rectangular.

    Uses the y-up convention ``x = -R cos(B) cos(L)``, ``y = R sin(B)``,
    ``z = R cos(B) sin(L)``.

    Args:
        longitude: Longitude L. Units: *rad*
        latitude: Latitude B. Units: *rad*
        radius: Distance R. Units: *AU*

    Returns:
        RectangularCoordinates: ``(x, y, z)``. Units: *AU*

    Examples:
        ```python
        from vsopjax.vsop87 import spherical_to_rectangular
        spherical_to_rectangular(0.0, 0.0, 1.0)  # (-1, 0, 0)
        ```
    """
    dtype = get_dtype()
    lon = jnp.asarray(longitude, dtype=dtype)
    lat = jnp.asarray(latitude, dtype=dtype)
    r = jnp.asarray(radius, dtype=dtype)

    cos_lat = jnp.cos(lat)
    return RectangularCoordinates(
        x=-r * cos_lat * jnp.cos(lon),
        y=r * jnp.sin(lat),
        z=r * cos_lat * jnp.sin(lon),
    )


def heliocentric_position_t(
    t: ArrayLike,
    planet: Planet | int | str,
    *,
    table: PlanetTable | None = None,
) -> HeliocentricPosition:
    """Compute a heliocentric position from Julian millennia since J2000.

    Traceable by ``jax.jit`` and ``jax.vmap`` in *t*.  No precision
    advisory is issued here since *t* may be a tracer.

    Args:
        t: Julian millennia from J2000 (TT).  Scalar or array.
        planet: Planet identifier, see :func:`resolve_planet`.
        table: Coefficient table to evaluate.  Defaults to the bundled
            table of *planet*.

    Returns:
        HeliocentricPosition: Spherical (L in ``[0, 2*pi)``, B, R) and
        rectangular coordinates with the shape of *t*.

    Raises:
        InvalidArgumentError: If *planet* is not recognised.
    """
    planet = resolve_planet(planet)
    if table is None:
        table = get_planet_table(planet)

    t = jnp.asarray(t, dtype=get_dtype())
    lon = jnp.mod(coordinate_series(t, table.longitude), TWO_PI)
    lat = coordinate_series(t, table.latitude)
    r = coordinate_series(t, table.radius)

    return HeliocentricPosition(
        spherical=SphericalCoordinates(longitude=lon, latitude=lat, radius=r),
        rectangular=spherical_to_rectangular(lon, lat, r),
    )


def heliocentric_position(
    instant,
    planet: Planet | int | str,
    *,
    table: PlanetTable | None = None,
) -> HeliocentricPosition:
    """Compute the heliocentric position of a planet at an instant.

    The instant is converted to a Julian Day and then to Julian millennia
    from J2000 before the series are evaluated.  A
    :class:`~vsopjax.errors.PrecisionAdvisory` is issued when the instant
    lies outside the validity span of the theory; the position is still
    returned.

    Args:
        instant: An :class:`~vsopjax.Instant` or anything its constructor
            accepts (ISO string, ``datetime``).
        planet: Planet identifier, see :func:`resolve_planet`.
        table: Coefficient table to evaluate.  Defaults to the bundled
            table of *planet*.

    Returns:
        HeliocentricPosition: Spherical and rectangular coordinates.

    Raises:
        InvalidArgumentError: If the planet or instant is invalid.

    Examples:
        ```python
        from vsopjax import Instant, Planet, compute_heliocentric_position
        pos = compute_heliocentric_position(Instant(2000, 1, 1, 12), Planet.EARTH)
        pos.spherical.radius  # ~0.98333 AU
        ```
    """
    planet = resolve_planet(planet)
    t = jd_to_julian_millennia(instant_to_jd(instant))
    warn_if_outside_validity(t)
    return heliocentric_position_t(t, planet, table=table)


compute_heliocentric_position = heliocentric_position


def heliocentric_positions(
    instants: Sequence,
    planet: Planet | int | str,
    *,
    table: PlanetTable | None = None,
) -> HeliocentricPosition:
    """Compute positions of one planet at several instants.

    The instants are converted on the host, then the series are evaluated
    for all of them at once with ``jax.vmap``.

    Args:
        instants: Sequence of instants (anything :class:`~vsopjax.Instant`
            accepts).
        planet: Planet identifier, see :func:`resolve_planet`.
        table: Coefficient table to evaluate.  Defaults to the bundled
            table of *planet*.

    Returns:
        HeliocentricPosition: Each leaf has shape ``(len(instants),)``.

    Raises:
        InvalidArgumentError: If the planet or any instant is invalid.
    """
    planet = resolve_planet(planet)
    if table is None:
        table = get_planet_table(planet)

    ts = np.array([jd_to_julian_millennia(instant_to_jd(i)) for i in instants], dtype=np.float64)
    if ts.size:
        warn_if_outside_validity(np.max(np.abs(ts)))

    def _position(t: Array) -> HeliocentricPosition:
        return heliocentric_position_t(t, planet, table=table)

    return jax.vmap(_position)(jnp.asarray(ts, dtype=get_dtype()))
