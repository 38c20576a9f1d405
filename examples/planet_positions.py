# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "vsopjax"]
#
# [tool.uv.sources]
# vsopjax = { path = ".." }
# ///
"""Print heliocentric positions of the eight planets.

Evaluates the VSOP87D series for every planet at a start instant and,
optionally, at a number of later instants spaced by a fixed time step.
Positions are printed as ecliptic longitude, latitude and distance together
with the rectangular coordinates.

Requires vsopjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/planet_positions.py [OPTIONS]

Examples:
    # Positions at J2000.0
    uv run examples/planet_positions.py --date 2000-01-01T12:00:00Z

    # Earth and Mars every 10 days for 5 steps, in degrees
    uv run examples/planet_positions.py --planet earth --planet mars \\
        --step 864000 --steps 5 --degrees

    # Use the full-precision published tables (downloaded and cached)
    uv run examples/planet_positions.py --full
"""

import time
from typing import Annotated

import jax.numpy as jnp
import typer

from vsopjax import RAD2DEG, Instant, Planet, set_dtype
from vsopjax.vsop87 import (
    get_planet_table,
    heliocentric_positions,
    load_cached_planet_table,
    resolve_planet,
)

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    date: Annotated[
        str | None, typer.Option(help="Start instant (ISO 8601, UTC). Defaults to now.")
    ] = None,
    planet: Annotated[
        list[str] | None, typer.Option(help="Planet name or id (repeatable). Defaults to all.")
    ] = None,
    step: Annotated[float, typer.Option(help="Time step between samples in seconds")] = 86400.0,
    steps: Annotated[int, typer.Option(help="Number of steps after the start instant")] = 0,
    degrees: Annotated[bool, typer.Option(help="Print angles in degrees")] = False,
    full: Annotated[
        bool, typer.Option(help="Use the full published VSOP87D tables (downloads on first use)")
    ] = False,
) -> None:
    """Print heliocentric planet positions."""
    start = Instant(date) if date is not None else Instant.from_unix_ms(int(time.time() * 1000))
    instants = [start + i * step for i in range(steps + 1)]

    if planet:
        planets = [resolve_planet(int(p) if p.isdigit() else p) for p in planet]
    else:
        planets = list(Planet)

    scale = RAD2DEG if degrees else 1.0
    unit = "deg" if degrees else "rad"

    print(f"Start: {start}  (JD {start.jd():.6f})")
    for body in planets:
        table = load_cached_planet_table(body) if full else get_planet_table(body)
        pos = heliocentric_positions(instants, body, table=table)
        sph = pos.spherical
        rect = pos.rectangular

        print(f"\n── {body.name.title()} ──")
        print(f"  {'instant':<26} {'L [' + unit + ']':>14} {'B [' + unit + ']':>14} {'R [AU]':>12}"
              f" {'x':>12} {'y':>12} {'z':>12}")
        for i, instant in enumerate(instants):
            print(
                f"  {str(instant):<26} {float(sph.longitude[i]) * scale:14.8f} "
                f"{float(sph.latitude[i]) * scale:14.8f} {float(sph.radius[i]):12.8f} "
                f"{float(rect.x[i]):12.8f} {float(rect.y[i]):12.8f} {float(rect.z[i]):12.8f}"
            )

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
