"""Construction and validation of VSOP87 coefficient tables.

Tables are built from nested sequences of ``(A, B, C)`` terms, validated,
converted to float64 NumPy arrays and frozen (``writeable=False``).  The
resulting :class:`~vsopjax.vsop87._types.PlanetTable` objects are shared
between callers and must never be mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from vsopjax.vsop87._types import Coordinate, CoordinateSeries, Planet, PlanetTable

logger = logging.getLogger(__name__)

MAX_POWER_SETS = 6


def _freeze_terms(terms, amplitude_scale: float) -> np.ndarray:
    arr = np.array(terms, dtype=np.float64)
    if arr.size == 0:
        arr = np.zeros((0, 3), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Term set must have shape (n, 3), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Term set contains non-finite values")
    arr[:, 0] *= amplitude_scale
    arr.setflags(write=False)
    return arr


def build_coordinate_series(
    coordinate: Coordinate | int,
    power_sets: Sequence,
    *,
    amplitude_scale: float = 1.0,
) -> CoordinateSeries:
    """Build a validated, read-only series for one coordinate.

    Args:
        coordinate: Coordinate the series evaluates.
        power_sets: One sequence of ``(A, B, C)`` terms per power of *t*,
            starting at ``t**0``.  Between 1 and 6 sets; a set may be empty.
        amplitude_scale: Factor applied to every amplitude ``A``.
            Default: ``1.0``

    Returns:
        CoordinateSeries: The frozen series.

    Raises:
        ValueError: If the coordinate is unknown, the number of sets is
            outside 1..6, or a set is not an ``(n, 3)`` array of finite values.
    """
    try:
        coordinate = Coordinate(coordinate)
    except ValueError as err:
        raise ValueError(f"Unknown coordinate {coordinate!r}") from err

    if not 1 <= len(power_sets) <= MAX_POWER_SETS:
        raise ValueError(
            f"A coordinate series needs 1 to {MAX_POWER_SETS} power sets, got {len(power_sets)}"
        )

    terms = tuple(_freeze_terms(block, amplitude_scale) for block in power_sets)
    return CoordinateSeries(coordinate=coordinate, terms=terms)


def build_planet_table(
    planet: Planet | int,
    longitude: Sequence,
    latitude: Sequence,
    radius: Sequence,
    *,
    amplitude_scale: float = 1.0,
) -> PlanetTable:
    """Build a validated, read-only table for one planet.

    Args:
        planet: Planet described by the table.
        longitude: Power sets for L.
        latitude: Power sets for B.
        radius: Power sets for R.
        amplitude_scale: Factor applied to every amplitude.  The bundled
            coefficients use ``1e-8``.  Default: ``1.0``

    Returns:
        PlanetTable: The frozen table.

    Raises:
        ValueError: If the planet is unknown or any series is malformed.
    """
    try:
        planet = Planet(planet)
    except ValueError as err:
        raise ValueError(f"Unknown planet {planet!r}") from err

    table = PlanetTable(
        planet=planet,
        longitude=build_coordinate_series(Coordinate.LONGITUDE, longitude, amplitude_scale=amplitude_scale),
        latitude=build_coordinate_series(Coordinate.LATITUDE, latitude, amplitude_scale=amplitude_scale),
        radius=build_coordinate_series(Coordinate.RADIUS, radius, amplitude_scale=amplitude_scale),
    )
    logger.debug(
        "Built %s table with %d/%d/%d terms",
        planet.name,
        table.longitude.n_terms,
        table.latitude.n_terms,
        table.radius.n_terms,
    )
    return table


def pad_coordinate_series(series: CoordinateSeries, n_sets: int = MAX_POWER_SETS) -> CoordinateSeries:
    """Append empty term sets so *series* carries *n_sets* powers.

    Padding does not change the value of the series.

    Args:
        series: Series to pad.
        n_sets: Number of power sets wanted.  Default: ``6``

    Returns:
        CoordinateSeries: Padded series (or *series* itself if already long enough).

    Raises:
        ValueError: If *n_sets* exceeds 6.
    """
    if n_sets > MAX_POWER_SETS:
        raise ValueError(f"n_sets must be at most {MAX_POWER_SETS}, got {n_sets}")
    missing = n_sets - len(series.terms)
    if missing <= 0:
        return series
    empty = np.zeros((0, 3), dtype=np.float64)
    empty.setflags(write=False)
    return series._replace(terms=series.terms + (empty,) * missing)
