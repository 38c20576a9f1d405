"""Rendering of planet tables as bundled coefficient modules.

The modules under :mod:`vsopjax.vsop87._coefficients` are generated data.
:func:`render_coefficient_module` turns a :class:`PlanetTable` (typically
parsed from a published ``VSOP87D.*`` file) into the source text of such a
module, and :func:`write_coefficient_module` writes it next to the others.
``tools/generate_coefficients.py`` drives both for all eight planets.

Amplitudes are written in units of :data:`AMPLITUDE_SCALE` (1e-8 rad or
1e-8 AU) rounded to three decimals, which keeps the eleven decimals of the
published files.  Phases and frequencies are written with ``repr`` so they
read back bit-identical.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from vsopjax.vsop87._coefficients import AMPLITUDE_SCALE
from vsopjax.vsop87._download import VSOP87D_FILENAMES
from vsopjax.vsop87._types import CoordinateSeries, PlanetTable

logger = logging.getLogger(__name__)

_PREFIXES = (("L", "LONGITUDE"), ("B", "LATITUDE"), ("R", "RADIUS"))

_HEADER = '''"""VSOP87D series for {name}.

Generated by ``tools/generate_coefficients.py`` from ``{filename}``.
{selection}

Each term is ``(A, B, C)`` and contributes ``A * cos(B + C * t)`` where *t*
is Julian millennia from J2000.  Amplitudes are in units of 1e-8 rad for L
and B, and 1e-8 AU for R.  Phases are radians, frequencies rad/millennium.

References:
    P. Bretagnon and G. Francou, VSOP87 solutions, CDS catalogue VI/81.
"""
'''


def _select_terms(terms: np.ndarray, min_amplitude: float) -> np.ndarray:
    if min_amplitude <= 0.0:
        return terms
    return terms[np.abs(terms[:, 0]) >= min_amplitude]


def _render_term_set(name: str, terms: np.ndarray) -> str:
    if terms.shape[0] == 0:
        return f"{name} = ()\n"
    lines = [f"{name} = ("]
    for a, b, c in terms:
        amplitude = round(float(a) / AMPLITUDE_SCALE, 3)
        lines.append(f"    ({amplitude!r}, {float(b)!r}, {float(c)!r}),")
    lines.append(")")
    return "\n".join(lines) + "\n"


def _render_series(prefix: str, attribute: str, series: CoordinateSeries, min_amplitude: float) -> tuple[str, str]:
    names = [f"{prefix}{power}" for power in range(len(series.terms))]
    blocks = "\n".join(
        _render_term_set(name, _select_terms(terms, min_amplitude))
        for name, terms in zip(names, series.terms)
    )
    members = names[0] + "," if len(names) == 1 else ", ".join(names)
    return blocks, f"{attribute} = ({members})"


def render_coefficient_module(table: PlanetTable, *, min_amplitude: float = 0.0) -> str:
    """Render *table* as the source of a bundled coefficient module.

    Args:
        table: Table to render, with amplitudes in rad or AU.
        min_amplitude: Terms with ``|A|`` below this value are dropped.
            Units: *rad* or *AU*.  Default: ``0.0`` (keep every term)

    Returns:
        str: Python source defining ``L0..``, ``B0..``, ``R0..`` and the
        ``LONGITUDE``, ``LATITUDE`` and ``RADIUS`` tuples.

    Raises:
        ValueError: If *min_amplitude* is negative.
    """
    if min_amplitude < 0.0:
        raise ValueError(f"min_amplitude must be non-negative, got {min_amplitude}")

    if min_amplitude > 0.0:
        selection = f"Terms with ``|A|`` below {min_amplitude:g} are dropped."
    else:
        selection = "Every published term is kept."
    header = _HEADER.format(
        name=table.planet.name.title(),
        filename=VSOP87D_FILENAMES[table.planet],
        selection=selection,
    )

    rendered = [
        _render_series(prefix, attribute, series, min_amplitude)
        for (prefix, attribute), series in zip(
            _PREFIXES, (table.longitude, table.latitude, table.radius)
        )
    ]
    blocks = "\n".join(block for block, _ in rendered)
    tuples = "\n".join(line for _, line in rendered)
    return f"{header}\n# fmt: off\n{blocks}# fmt: on\n\n{tuples}\n"


def write_coefficient_module(
    table: PlanetTable,
    directory: str | Path,
    *,
    min_amplitude: float = 0.0,
) -> Path:
    """Write the coefficient module of *table* into *directory*.

    The file is named after the planet (``earth.py``, ``mars.py``, ...) and
    replaces any existing module of that name.

    Args:
        table: Table to write.
        directory: Target directory, usually the ``_coefficients`` package.
        min_amplitude: Passed to :func:`render_coefficient_module`.

    Returns:
        Path: The written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{table.planet.name.lower()}.py"
    path.write_text(render_coefficient_module(table, min_amplitude=min_amplitude), encoding="utf-8")
    logger.info(
        "Wrote %s coefficients (%d/%d/%d published terms) to %s",
        table.planet.name,
        table.longitude.n_terms,
        table.latitude.n_terms,
        table.radius.n_terms,
        path,
    )
    return path
