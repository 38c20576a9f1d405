"""VSOP87D heliocentric positions of the eight major planets.

Provides the series evaluator, the bundled truncated coefficient tables,
loaders for the full published files, the generator of the bundled
coefficient modules and the position resolver.  The
evaluation functions work inside ``jax.jit`` and ``jax.vmap``.

Typical usage::

    from vsopjax.vsop87 import Planet, heliocentric_position
    pos = heliocentric_position("2024-03-20T03:06:00Z", Planet.EARTH)
    pos.spherical.longitude
"""

from vsopjax.vsop87._codegen import render_coefficient_module, write_coefficient_module
from vsopjax.vsop87._download import VSOP87D_FILENAMES, download_vsop87_file, vsop87d_url
from vsopjax.vsop87._parsers import (
    load_planet_table_from_file,
    parse_term_line,
    parse_vsop87_file,
    planet_table_from_blocks,
)
from vsopjax.vsop87._providers import (
    get_planet_table,
    load_cached_planet_table,
    load_default_tables,
)
from vsopjax.vsop87._series import (
    FUNDAMENTAL_FREQUENCIES,
    FUNDAMENTAL_PHASES,
    argument_series,
    coordinate_series,
    cosine_series,
    fundamental_arguments,
)
from vsopjax.vsop87._tables import (
    build_coordinate_series,
    build_planet_table,
    pad_coordinate_series,
)
from vsopjax.vsop87._types import (
    Coordinate,
    CoordinateSeries,
    HeliocentricPosition,
    Planet,
    PlanetTable,
    RectangularCoordinates,
    SphericalCoordinates,
    Vsop87Block,
    resolve_planet,
)
from vsopjax.vsop87.position import (
    compute_heliocentric_position,
    heliocentric_position,
    heliocentric_position_t,
    heliocentric_positions,
    spherical_to_rectangular,
    warn_if_outside_validity,
)

__all__ = [
    "Coordinate",
    "CoordinateSeries",
    "FUNDAMENTAL_FREQUENCIES",
    "FUNDAMENTAL_PHASES",
    "HeliocentricPosition",
    "Planet",
    "PlanetTable",
    "RectangularCoordinates",
    "SphericalCoordinates",
    "VSOP87D_FILENAMES",
    "Vsop87Block",
    "argument_series",
    "build_coordinate_series",
    "build_planet_table",
    "compute_heliocentric_position",
    "coordinate_series",
    "cosine_series",
    "download_vsop87_file",
    "fundamental_arguments",
    "get_planet_table",
    "heliocentric_position",
    "heliocentric_position_t",
    "heliocentric_positions",
    "load_cached_planet_table",
    "load_default_tables",
    "load_planet_table_from_file",
    "pad_coordinate_series",
    "parse_term_line",
    "parse_vsop87_file",
    "planet_table_from_blocks",
    "render_coefficient_module",
    "resolve_planet",
    "spherical_to_rectangular",
    "vsop87d_url",
    "warn_if_outside_validity",
    "write_coefficient_module",
]
