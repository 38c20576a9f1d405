"""Factory functions for VSOP87 planet tables.

Provides the sources a :class:`~vsopjax.vsop87._types.PlanetTable` can come
from:

- :func:`load_default_tables`: The bundled truncated tables of all eight
  planets, built once when this module is imported.
- :func:`get_planet_table`: One bundled table.
- :func:`load_cached_planet_table`: The full-precision table from a local
  cache, downloading the published file when missing and falling back to
  the bundled table on failure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from vsopjax.vsop87._coefficients import (
    AMPLITUDE_SCALE,
    earth,
    jupiter,
    mars,
    mercury,
    neptune,
    saturn,
    uranus,
    venus,
)
from vsopjax.vsop87._download import VSOP87D_FILENAMES, download_vsop87_file
from vsopjax.vsop87._parsers import load_planet_table_from_file
from vsopjax.vsop87._tables import build_planet_table
from vsopjax.vsop87._types import Planet, PlanetTable, resolve_planet
from vsopjax.utils.caching import get_vsop87_cache_dir, is_file_stale

logger = logging.getLogger(__name__)

_BUNDLED_MODULES = {
    Planet.MERCURY: mercury,
    Planet.VENUS: venus,
    Planet.EARTH: earth,
    Planet.MARS: mars,
    Planet.JUPITER: jupiter,
    Planet.SATURN: saturn,
    Planet.URANUS: uranus,
    Planet.NEPTUNE: neptune,
}


def _build_default_tables() -> Mapping[Planet, PlanetTable]:
    tables = {
        planet: build_planet_table(
            planet,
            module.LONGITUDE,
            module.LATITUDE,
            module.RADIUS,
            amplitude_scale=AMPLITUDE_SCALE,
        )
        for planet, module in _BUNDLED_MODULES.items()
    }
    logger.debug("Built bundled VSOP87D tables for %d planets", len(tables))
    return MappingProxyType(tables)


_DEFAULT_TABLES = _build_default_tables()


def load_default_tables() -> Mapping[Planet, PlanetTable]:
    """Return the bundled truncated VSOP87D tables of all eight planets.

    The mapping is read-only and shared; it is built once at import time.

    Returns:
        Mapping from :class:`Planet` to its :class:`PlanetTable`.

    Examples:
        ```python
        from vsopjax.vsop87 import Planet, load_default_tables
        tables = load_default_tables()
        earth = tables[Planet.EARTH]
        ```
    """
    return _DEFAULT_TABLES


def get_planet_table(planet: Planet | int | str) -> PlanetTable:
    """Return the bundled table of *planet*.

    Args:
        planet: Planet identifier, see :func:`resolve_planet`.

    Returns:
        PlanetTable: The shared bundled table.

    Raises:
        InvalidArgumentError: If *planet* is not recognised.
    """
    return _DEFAULT_TABLES[resolve_planet(planet)]


def load_cached_planet_table(
    planet: Planet | int | str,
    filepath: str | Path | None = None,
) -> PlanetTable:
    """Load a full-precision planet table from the local cache.

    If the cached ``VSOP87D.*`` file is missing it is downloaded first.  The
    published files never change, so an existing file is used as is.  If the
    download fails or the file cannot be parsed, the bundled truncated table
    is returned so this function never raises on network issues.

    Args:
        planet: Planet identifier, see :func:`resolve_planet`.
        filepath: Path to the cached file.  When ``None`` (the default),
            uses ``<cache_dir>/vsop87/VSOP87D.<ext>``.

    Returns:
        PlanetTable loaded from the cached (or freshly downloaded) file, or
        the bundled table as a fallback.

    Raises:
        InvalidArgumentError: If *planet* is not recognised.

    Examples:
        ```python
        from vsopjax.vsop87 import Planet, load_cached_planet_table
        table = load_cached_planet_table(Planet.MARS)
        ```
    """
    planet = resolve_planet(planet)
    if filepath is None:
        filepath = get_vsop87_cache_dir() / VSOP87D_FILENAMES[planet]
    else:
        filepath = Path(filepath)

    if is_file_stale(filepath):
        try:
            download_vsop87_file(planet, filepath)
        except Exception:
            logger.warning(
                "Failed to download VSOP87D data for %s; falling back to bundled table.",
                planet.name,
                exc_info=True,
            )
            return get_planet_table(planet)

    try:
        table = load_planet_table_from_file(filepath)
    except Exception:
        logger.warning(
            "Failed to parse cached VSOP87D file %s; falling back to bundled table.",
            filepath,
            exc_info=True,
        )
        return get_planet_table(planet)

    if table.planet != planet:
        logger.warning(
            "Cached file %s describes %s, not %s; falling back to bundled table.",
            filepath,
            table.planet.name,
            planet.name,
        )
        return get_planet_table(planet)
    return table
