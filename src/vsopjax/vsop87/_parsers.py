"""Parsers for published VSOP87 data files.

The VSOP87 distribution ships one ASCII file per body and version (for
example ``VSOP87D.ear``).  Each file is a sequence of blocks; a block starts
with a header record such as::

     VSOP87 VERSION D4    EARTH     VARIABLE 1 (LBR)       *T**0    559 TERMS ...

followed by one fixed-width record per term.  Column layout of a term
record (1-indexed, as in the distribution's documentation):

- column 2: version (0 = VSOP87, 1..5 = A..E)
- column 3: body (1 = Mercury ... 8 = Neptune, 9 = Earth-Moon barycentre)
- column 4: coordinate index
- column 5: power of *t*
- columns 11-46: twelve ``I3`` multipliers of the fundamental arguments
- trailing fields: ``S``, ``K``, ``A``, ``B``, ``C``

References:
    P. Bretagnon and G. Francou, VSOP87 solutions, CDS catalogue VI/81.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import numpy as np

from vsopjax.vsop87._tables import MAX_POWER_SETS, build_planet_table
from vsopjax.vsop87._types import Coordinate, Planet, PlanetTable, Vsop87Block

logger = logging.getLogger(__name__)

VERSION_D: int = 4
"""Version number of the heliocentric spherical (ecliptic of date) solution."""

_MULTIPLIER_RANGE = slice(10, 46)
_MULTIPLIER_WIDTH = 3
_N_MULTIPLIERS = 12

_HEADER_PATTERN = re.compile(
    r"VSOP87\s+VERSION\s+\w+\s+(?P<body>[\w-]+)\s+VARIABLE\s+(?P<coordinate>\d)"
    r".*\*T\*\*(?P<power>\d+)\s+(?P<n_terms>\d+)\s+TERMS"
)


def parse_term_line(line: str) -> tuple[int, int, int, int, list[int], tuple[float, ...]]:
    """Parse one term record of a VSOP87 file.

    Args:
        line: A term record.

    Returns:
        Tuple of (version, body, coordinate, power, multipliers, (S, K, A, B, C)).

    Raises:
        ValueError: If the record is malformed.
    """
    if len(line) < _MULTIPLIER_RANGE.stop:
        raise ValueError(f"VSOP87 term record too short: {line!r}")

    version = int(line[1])
    body = int(line[2])
    coordinate = int(line[3])
    power = int(line[4])

    field = line[_MULTIPLIER_RANGE]
    multipliers = [
        int(field[i:i + _MULTIPLIER_WIDTH])
        for i in range(0, _N_MULTIPLIERS * _MULTIPLIER_WIDTH, _MULTIPLIER_WIDTH)
    ]

    values = line[_MULTIPLIER_RANGE.stop:].split()
    if len(values) < 5:
        raise ValueError(f"VSOP87 term record is missing coefficients: {line!r}")
    s, k, a, b, c = (float(v) for v in values[-5:])

    return version, body, coordinate, power, multipliers, (s, k, a, b, c)


def parse_vsop87_file(filepath: str | Path) -> list[Vsop87Block]:
    """Parse a published VSOP87 file into its blocks.

    Blocks are returned in file order.  When a header announces a term
    count, the number of records read for that block must match.

    Args:
        filepath: Path to a VSOP87 file of any version.

    Returns:
        list[Vsop87Block]: One entry per (body, coordinate, power) block.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a record is malformed, a block is inconsistent, or
            the file holds no terms.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"VSOP87 file not found: {filepath}")

    blocks: list[Vsop87Block] = []
    key: tuple[int, int, int, int] | None = None
    expected: int | None = None
    multipliers: list[list[int]] = []
    terms: list[tuple[float, ...]] = []

    def flush() -> None:
        if key is None:
            return
        if expected is not None and expected != len(terms):
            raise ValueError(
                f"Block {key} of {filepath} announces {expected} terms, found {len(terms)}"
            )
        rows = np.array(terms, dtype=np.float64).reshape(-1, 5)
        block = Vsop87Block(
            version=key[0],
            body=key[1],
            coordinate=key[2],
            power=key[3],
            multipliers=np.array(multipliers, dtype=np.int64).reshape(-1, _N_MULTIPLIERS),
            sine_cosine=np.ascontiguousarray(rows[:, 0:2]),
            amplitude_phase_frequency=np.ascontiguousarray(rows[:, 2:5]),
        )
        for arr in block[4:]:
            arr.setflags(write=False)
        blocks.append(block)

    with open(filepath) as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.rstrip("\n")
            if not line.strip():
                continue

            header = _HEADER_PATTERN.search(line)
            if header is not None:
                flush()
                key = None
                expected = int(header.group("n_terms"))
                multipliers, terms = [], []
                continue

            try:
                version, body, coordinate, power, m, values = parse_term_line(line)
            except ValueError as err:
                raise ValueError(f"{filepath}:{lineno}: {err}") from err

            record_key = (version, body, coordinate, power)
            if key is None:
                key = record_key
            elif record_key != key:
                # Files without headers: a key change starts a new block
                flush()
                key = record_key
                expected = None
                multipliers, terms = [], []
            multipliers.append(m)
            terms.append(values)

    flush()

    if not blocks:
        raise ValueError(f"No VSOP87 terms found in {filepath}")

    logger.debug("Parsed %d VSOP87 blocks from %s", len(blocks), filepath)
    return blocks


def planet_table_from_blocks(blocks: list[Vsop87Block]) -> PlanetTable:
    """Assemble a :class:`PlanetTable` from version-D blocks of one body.

    Powers without a block become empty term sets.

    Args:
        blocks: Blocks parsed from a ``VSOP87D.*`` file.

    Returns:
        PlanetTable: Table using the ``(A, B, C)`` columns of each record.

    Raises:
        ValueError: If the blocks are not version D, mix bodies, or carry
            an unsupported coordinate or power.
    """
    if not blocks:
        raise ValueError("No VSOP87 blocks given")

    versions = {block.version for block in blocks}
    if versions != {VERSION_D}:
        raise ValueError(f"Expected VSOP87 version D blocks, got versions {sorted(versions)}")

    bodies = {block.body for block in blocks}
    if len(bodies) != 1:
        raise ValueError(f"Blocks describe more than one body: {sorted(bodies)}")
    body = bodies.pop()
    if not 1 <= body <= len(Planet):
        raise ValueError(f"Body {body} is not a planet of the version D solution")
    planet = Planet(body - 1)

    power_sets: dict[Coordinate, list[np.ndarray]] = {c: [] for c in Coordinate}
    for block in blocks:
        try:
            coordinate = Coordinate(block.coordinate)
        except ValueError as err:
            raise ValueError(f"Unsupported coordinate index {block.coordinate}") from err
        if not 0 <= block.power < MAX_POWER_SETS:
            raise ValueError(f"Unsupported power of t: {block.power}")

        sets = power_sets[coordinate]
        while len(sets) <= block.power:
            sets.append(np.zeros((0, 3), dtype=np.float64))
        sets[block.power] = np.concatenate([sets[block.power], block.amplitude_phase_frequency])

    for coordinate, sets in power_sets.items():
        if not sets:
            raise ValueError(f"No terms for coordinate {coordinate.name}")

    return build_planet_table(
        planet,
        power_sets[Coordinate.LONGITUDE],
        power_sets[Coordinate.LATITUDE],
        power_sets[Coordinate.RADIUS],
    )


def load_planet_table_from_file(filepath: str | Path) -> PlanetTable:
    """Load a planet table from a published ``VSOP87D.*`` file.

    Args:
        filepath: Path to the file (e.g. ``VSOP87D.ear``).

    Returns:
        PlanetTable: Full-precision table for the planet in the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a valid version-D planet file.

    Examples:
        ```python
        from vsopjax.vsop87 import load_planet_table_from_file
        table = load_planet_table_from_file("VSOP87D.ear")
        ```
    """
    return planet_table_from_blocks(parse_vsop87_file(filepath))
