"""Download published VSOP87D data files.

Provides a helper to fetch the full-precision version-D file of a planet
from the CDS mirror of the VSOP87 distribution.  Network errors are
propagated to the caller so that higher-level code (e.g.
:func:`load_cached_planet_table`) can decide on fallback behaviour.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from vsopjax.vsop87._types import Planet, resolve_planet

logger = logging.getLogger(__name__)

VSOP87_BASE_URL: str = "https://cdsarc.cds.unistra.fr/ftp/VI/81"
"""Base URL of the VSOP87 distribution (CDS catalogue VI/81)."""

VSOP87D_FILENAMES: dict[Planet, str] = {
    Planet.MERCURY: "VSOP87D.mer",
    Planet.VENUS: "VSOP87D.ven",
    Planet.EARTH: "VSOP87D.ear",
    Planet.MARS: "VSOP87D.mar",
    Planet.JUPITER: "VSOP87D.jup",
    Planet.SATURN: "VSOP87D.sat",
    Planet.URANUS: "VSOP87D.ura",
    Planet.NEPTUNE: "VSOP87D.nep",
}
"""Canonical filename of each planet's version-D file."""

_DEFAULT_TIMEOUT: float = 120.0
"""Default HTTP timeout in seconds."""


def vsop87d_url(planet: Planet | int | str) -> str:
    """Return the default download URL of *planet*'s version-D file.

    Args:
        planet: Planet whose file is wanted.

    Returns:
        URL on the CDS mirror.

    Raises:
        InvalidArgumentError: If *planet* is not recognised.
    """
    return f"{VSOP87_BASE_URL}/{VSOP87D_FILENAMES[resolve_planet(planet)]}"


def download_vsop87_file(
    planet: Planet,
    filepath: str | Path,
    *,
    url: str | None = None,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Download a planet's VSOP87D file to *filepath*.

    Creates parent directories if they do not exist.  On success the
    downloaded text is written to *filepath* and the resolved path is
    returned.

    Args:
        planet: Planet whose file is fetched.
        filepath: Destination path for the downloaded file.
        url: URL to fetch.  Defaults to :func:`vsop87d_url` of *planet*.
        timeout: HTTP timeout in seconds.  Defaults to 120.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
    """
    if url is None:
        url = vsop87d_url(planet)
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Downloading VSOP87D data for %s from %s", resolve_planet(planet).name, url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()

    filepath.write_text(response.text, encoding="utf-8")
    logger.info("VSOP87D data written to %s", filepath)
    return filepath.resolve()
