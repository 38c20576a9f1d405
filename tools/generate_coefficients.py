# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "vsopjax"]
#
# [tool.uv.sources]
# vsopjax = { path = ".." }
# ///
"""Regenerate the bundled VSOP87D coefficient modules.

Downloads the published ``VSOP87D.*`` files (CDS catalogue VI/81) into the
vsopjax cache when they are not there yet, parses them and rewrites
``src/vsopjax/vsop87/_coefficients/<planet>.py``.  Unlike
``load_cached_planet_table`` this script never falls back to the bundled
tables: a failed download or parse aborts.

Usage:
    uv run tools/generate_coefficients.py [OPTIONS]

Examples:
    # Every published term of every planet
    uv run tools/generate_coefficients.py

    # Earth only, dropping terms below 1e-10 rad / AU
    uv run tools/generate_coefficients.py --planet earth --min-amplitude 1e-10
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from vsopjax.utils import get_vsop87_cache_dir, is_file_stale
from vsopjax.vsop87 import (
    VSOP87D_FILENAMES,
    Planet,
    download_vsop87_file,
    load_planet_table_from_file,
    resolve_planet,
    write_coefficient_module,
)

_COEFFICIENTS_DIR = Path(__file__).resolve().parent.parent / "src" / "vsopjax" / "vsop87" / "_coefficients"


def main(
    planet: Annotated[
        list[str] | None, typer.Option(help="Planet name or id (repeatable). Defaults to all.")
    ] = None,
    min_amplitude: Annotated[
        float, typer.Option(help="Drop terms with |A| below this value [rad or AU]")
    ] = 0.0,
    output: Annotated[
        Path, typer.Option(help="Directory receiving the generated modules")
    ] = _COEFFICIENTS_DIR,
) -> None:
    """Regenerate bundled VSOP87D coefficient modules from the published files."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if planet:
        planets = [resolve_planet(int(p) if p.isdigit() else p) for p in planet]
    else:
        planets = list(Planet)

    for body in planets:
        source = get_vsop87_cache_dir() / VSOP87D_FILENAMES[body]
        if is_file_stale(source):
            download_vsop87_file(body, source)
        table = load_planet_table_from_file(source)
        if table.planet != body:
            raise typer.BadParameter(f"{source} describes {table.planet.name}, not {body.name}")
        path = write_coefficient_module(table, output, min_amplitude=min_amplitude)
        print(f"{body.name.title():<8} -> {path}")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
