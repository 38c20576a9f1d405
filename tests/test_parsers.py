"""Tests for the VSOP87 file parser."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from vsopjax.vsop87 import (
    FUNDAMENTAL_FREQUENCIES,
    FUNDAMENTAL_PHASES,
    Planet,
    argument_series,
    cosine_series,
    load_planet_table_from_file,
    parse_term_line,
    parse_vsop87_file,
    planet_table_from_blocks,
)

_EARTH_MEAN_LONGITUDE = [0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0]
_ZERO = [0] * 12


def _header(body_name: str, coordinate: int, power: int, n_terms: int, version: str = "D4") -> str:
    return (
        f" VSOP87 VERSION {version}    {body_name:<9} VARIABLE {coordinate} (LBR)       "
        f"*T**{power} {n_terms:6d} TERMS    HELIOCENTRIC DYNAMICAL ECLIPTIC AND EQUINOX OF THE DATE"
    )


def _record(
    version: int,
    body: int,
    coordinate: int,
    power: int,
    index: int,
    multipliers: list[int],
    s: float,
    k: float,
    a: float,
    b: float,
    c: float,
) -> str:
    head = f" {version}{body}{coordinate}{power}{index:5d}"
    mult = "".join(f"{m:3d}" for m in multipliers)
    return f"{head}{mult} {s:17.11f} {k:17.11f} {a:18.11f} {b:14.11f} {c:20.11f}"


def _earth_lines(version: int = 4) -> list[str]:
    lam = FUNDAMENTAL_PHASES[2]
    freq = FUNDAMENTAL_FREQUENCIES[2]
    return [
        _header("EARTH", 1, 0, 2),
        _record(version, 3, 1, 0, 1, _ZERO, 0.0, 1.75347045673, 1.75347045673, 0.0, 0.0),
        _record(version, 3, 1, 0, 2, _EARTH_MEAN_LONGITUDE, 0.0, 0.001, 0.001, lam, freq),
        _header("EARTH", 1, 1, 1),
        _record(version, 3, 1, 1, 1, _ZERO, 0.0, 6283.31966747, 6283.31966747, 0.0, 0.0),
        _header("EARTH", 2, 0, 1),
        _record(version, 3, 2, 0, 1, _EARTH_MEAN_LONGITUDE, 0.0, 0.000002, 0.000002, lam, freq),
        _header("EARTH", 3, 0, 1),
        _record(version, 3, 3, 0, 1, _ZERO, 0.0, 1.00013988784, 1.00013988784, 0.0, 0.0),
    ]


def _write(tmp_path: Path, lines: list[str], name: str = "VSOP87D.ear") -> Path:
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n")
    return path


# ---------------------------------------------------------------------------
# parse_term_line
# ---------------------------------------------------------------------------


class TestParseTermLine:
    def test_fields(self):
        line = _record(4, 3, 1, 2, 7, _EARTH_MEAN_LONGITUDE, 0.5, -0.25, 0.559, 1.5, 6283.07585)
        version, body, coordinate, power, multipliers, values = parse_term_line(line)
        assert (version, body, coordinate, power) == (4, 3, 1, 2)
        assert multipliers == _EARTH_MEAN_LONGITUDE
        assert values == pytest.approx((0.5, -0.25, 0.559, 1.5, 6283.07585))

    def test_negative_multipliers(self):
        m = [0, 0, 2, -3, 0, 0, 0, 0, 0, 0, 0, -1]
        line = _record(4, 4, 1, 0, 1, m, 0.0, 0.0, 0.0, 0.0, 0.0)
        assert parse_term_line(line)[4] == m

    def test_too_short_raises(self):
        with pytest.raises(ValueError, match="too short"):
            parse_term_line(" 4310    1  0  0")

    def test_missing_coefficients_raises(self):
        line = _record(4, 3, 1, 0, 1, _ZERO, 0.0, 0.0, 0.0, 0.0, 0.0)
        with pytest.raises(ValueError, match="missing coefficients"):
            parse_term_line(line[:46] + " 1.0 2.0")


# ---------------------------------------------------------------------------
# parse_vsop87_file
# ---------------------------------------------------------------------------


class TestParseVsop87File:
    def test_blocks(self, tmp_path):
        blocks = parse_vsop87_file(_write(tmp_path, _earth_lines()))
        assert [(b.coordinate, b.power) for b in blocks] == [(1, 0), (1, 1), (2, 0), (3, 0)]
        assert all(b.version == 4 and b.body == 3 for b in blocks)

    def test_block_arrays(self, tmp_path):
        block = parse_vsop87_file(_write(tmp_path, _earth_lines()))[0]
        assert block.multipliers.shape == (2, 12)
        assert block.sine_cosine.shape == (2, 2)
        assert block.amplitude_phase_frequency.shape == (2, 3)
        assert block.multipliers[1].tolist() == _EARTH_MEAN_LONGITUDE
        assert not block.amplitude_phase_frequency.flags.writeable
        assert not block.multipliers.flags.writeable

    def test_blank_lines_ignored(self, tmp_path):
        lines = _earth_lines()
        lines.insert(3, "")
        assert len(parse_vsop87_file(_write(tmp_path, lines))) == 4

    def test_term_forms_agree(self, tmp_path):
        """Both term forms of a record evaluate to the same value."""
        block = parse_vsop87_file(_write(tmp_path, _earth_lines()))[0]
        t = np.linspace(-0.3, 0.3, 7)
        np.testing.assert_allclose(
            argument_series(t, block.multipliers, block.sine_cosine),
            cosine_series(t, block.amplitude_phase_frequency),
            atol=1e-12,
        )

    def test_headerless_file_splits_on_key_change(self, tmp_path):
        lines = [line for line in _earth_lines() if "VSOP87" not in line]
        blocks = parse_vsop87_file(_write(tmp_path, lines))
        assert [(b.coordinate, b.power, len(b.multipliers)) for b in blocks] == [
            (1, 0, 2),
            (1, 1, 1),
            (2, 0, 1),
            (3, 0, 1),
        ]

    def test_term_count_mismatch_raises(self, tmp_path):
        lines = _earth_lines()
        lines[0] = _header("EARTH", 1, 0, 3)
        with pytest.raises(ValueError, match="announces 3 terms"):
            parse_vsop87_file(_write(tmp_path, lines))

    def test_malformed_record_reports_line(self, tmp_path):
        lines = _earth_lines()
        lines[2] = lines[2][:40]
        with pytest.raises(ValueError, match=":3:"):
            parse_vsop87_file(_write(tmp_path, lines))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_vsop87_file(tmp_path / "VSOP87D.xyz")

    def test_empty_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="No VSOP87 terms"):
            parse_vsop87_file(_write(tmp_path, [_header("EARTH", 1, 0, 0)]))


# ---------------------------------------------------------------------------
# planet_table_from_blocks / load_planet_table_from_file
# ---------------------------------------------------------------------------


class TestPlanetTableFromFile:
    def test_load(self, tmp_path):
        table = load_planet_table_from_file(_write(tmp_path, _earth_lines()))
        assert table.planet is Planet.EARTH
        assert len(table.longitude.terms) == 2
        assert len(table.latitude.terms) == 1
        assert len(table.radius.terms) == 1
        assert table.longitude.n_terms == 3
        np.testing.assert_allclose(table.radius.terms[0], [[1.00013988784, 0.0, 0.0]])

    def test_body_number_maps_to_planet(self, tmp_path):
        lines = [
            _record(4, 8, 1, 0, 1, _ZERO, 0.0, 5.3, 5.3, 0.0, 0.0),
            _record(4, 8, 2, 0, 1, _ZERO, 0.0, 0.0, 0.0, 0.0, 0.0),
            _record(4, 8, 3, 0, 1, _ZERO, 0.0, 30.07, 30.07, 0.0, 0.0),
        ]
        assert load_planet_table_from_file(_write(tmp_path, lines)).planet is Planet.NEPTUNE

    def test_missing_powers_filled_with_empty_sets(self, tmp_path):
        lines = _earth_lines()
        lines[3:5] = [
            _header("EARTH", 1, 2, 1),
            _record(4, 3, 1, 2, 1, _ZERO, 0.0, 0.1, 0.1, 0.0, 0.0),
        ]
        table = load_planet_table_from_file(_write(tmp_path, lines))
        assert len(table.longitude.terms) == 3
        assert table.longitude.terms[1].shape == (0, 3)

    def test_wrong_version_raises(self, tmp_path):
        blocks = parse_vsop87_file(_write(tmp_path, _earth_lines(version=0)))
        with pytest.raises(ValueError, match="version D"):
            planet_table_from_blocks(blocks)

    def test_mixed_bodies_raise(self, tmp_path):
        lines = _earth_lines() + [_record(4, 4, 3, 0, 1, _ZERO, 0.0, 1.5, 1.5, 0.0, 0.0)]
        blocks = parse_vsop87_file(_write(tmp_path, lines))
        with pytest.raises(ValueError, match="more than one body"):
            planet_table_from_blocks(blocks)

    def test_earth_moon_barycentre_rejected(self, tmp_path):
        lines = [_record(4, 9, 1, 0, 1, _ZERO, 0.0, 1.0, 1.0, 0.0, 0.0)]
        blocks = parse_vsop87_file(_write(tmp_path, lines))
        with pytest.raises(ValueError, match="not a planet"):
            planet_table_from_blocks(blocks)

    def test_missing_coordinate_raises(self, tmp_path):
        lines = _earth_lines()[:7]
        blocks = parse_vsop87_file(_write(tmp_path, lines))
        with pytest.raises(ValueError, match="RADIUS"):
            planet_table_from_blocks(blocks)

    def test_empty_blocks_raise(self):
        with pytest.raises(ValueError):
            planet_table_from_blocks([])
