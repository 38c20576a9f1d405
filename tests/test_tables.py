"""Tests for VSOP87 coefficient table construction and the bundled tables."""

import numpy as np
import pytest

from vsopjax.errors import InvalidArgumentError
from vsopjax.vsop87 import (
    Coordinate,
    Planet,
    PlanetTable,
    build_coordinate_series,
    build_planet_table,
    get_planet_table,
    load_default_tables,
    pad_coordinate_series,
)

_FIVE_SET_PLANETS = {Planet.EARTH, Planet.URANUS}

# ---------------------------------------------------------------------------
# build_coordinate_series / build_planet_table
# ---------------------------------------------------------------------------


class TestBuildCoordinateSeries:
    def test_basic(self):
        series = build_coordinate_series(Coordinate.LONGITUDE, [[(1.0, 2.0, 3.0)], []])
        assert series.coordinate == Coordinate.LONGITUDE
        assert len(series.terms) == 2
        assert series.max_power == 1
        assert series.n_terms == 1
        assert series.terms[0].shape == (1, 3)
        assert series.terms[1].shape == (0, 3)

    def test_integer_coordinate(self):
        assert build_coordinate_series(3, [[]]).coordinate == Coordinate.RADIUS

    def test_amplitude_scale(self):
        series = build_coordinate_series(
            Coordinate.RADIUS, [[(100000000, 0.5, 10.0)]], amplitude_scale=1e-8
        )
        np.testing.assert_allclose(series.terms[0], [[1.0, 0.5, 10.0]])

    def test_arrays_are_read_only(self):
        series = build_coordinate_series(Coordinate.LATITUDE, [[(1.0, 0.0, 0.0)]])
        with pytest.raises(ValueError):
            series.terms[0][0, 0] = 2.0

    def test_input_not_mutated(self):
        source = np.array([[2.0, 0.0, 0.0]])
        build_coordinate_series(Coordinate.LATITUDE, [source], amplitude_scale=0.5)
        assert source[0, 0] == 2.0

    def test_float64_storage(self):
        series = build_coordinate_series(Coordinate.LATITUDE, [[(1, 2, 3)]])
        assert series.terms[0].dtype == np.float64

    def test_unknown_coordinate_raises(self):
        with pytest.raises(ValueError, match="Unknown coordinate"):
            build_coordinate_series(4, [[]])

    def test_no_sets_raises(self):
        with pytest.raises(ValueError, match="power sets"):
            build_coordinate_series(Coordinate.LONGITUDE, [])

    def test_too_many_sets_raises(self):
        with pytest.raises(ValueError, match="power sets"):
            build_coordinate_series(Coordinate.LONGITUDE, [[]] * 7)

    def test_wrong_term_width_raises(self):
        with pytest.raises(ValueError, match="shape"):
            build_coordinate_series(Coordinate.LONGITUDE, [[(1.0, 2.0)]])

    def test_non_finite_raises(self):
        with pytest.raises(ValueError, match="non-finite"):
            build_coordinate_series(Coordinate.LONGITUDE, [[(1.0, float("nan"), 0.0)]])


class TestBuildPlanetTable:
    def test_basic(self):
        table = build_planet_table(Planet.MARS, [[(1.0, 0.0, 0.0)]], [[]], [[(1.5, 0.0, 0.0)]])
        assert isinstance(table, PlanetTable)
        assert table.planet is Planet.MARS
        assert table.latitude.n_terms == 0

    def test_unknown_planet_raises(self):
        with pytest.raises(ValueError, match="Unknown planet"):
            build_planet_table(8, [[]], [[]], [[]])


class TestPadCoordinateSeries:
    def test_pads_to_six(self):
        series = build_coordinate_series(Coordinate.RADIUS, [[(1.0, 0.0, 0.0)]] * 5)
        padded = pad_coordinate_series(series)
        assert len(padded.terms) == 6
        assert padded.terms[5].shape == (0, 3)
        assert not padded.terms[5].flags.writeable

    def test_already_full(self):
        series = build_coordinate_series(Coordinate.RADIUS, [[]] * 6)
        assert pad_coordinate_series(series) is series

    def test_too_many_raises(self):
        series = build_coordinate_series(Coordinate.RADIUS, [[]])
        with pytest.raises(ValueError):
            pad_coordinate_series(series, 7)


# ---------------------------------------------------------------------------
# Bundled tables
# ---------------------------------------------------------------------------


class TestBundledTables:
    def test_all_planets_present(self):
        tables = load_default_tables()
        assert set(tables) == set(Planet)

    def test_mapping_is_read_only(self):
        tables = load_default_tables()
        with pytest.raises(TypeError):
            tables[Planet.EARTH] = None

    def test_shared_instance(self):
        assert load_default_tables() is load_default_tables()
        assert get_planet_table(Planet.VENUS) is load_default_tables()[Planet.VENUS]

    def test_get_by_int(self):
        assert get_planet_table(2).planet is Planet.EARTH

    def test_get_by_name(self):
        assert get_planet_table("Neptune").planet is Planet.NEPTUNE

    @pytest.mark.parametrize("planet", [8, -1, "pluto", 2.0, True])
    def test_get_invalid_planet_raises(self, planet):
        with pytest.raises(InvalidArgumentError):
            get_planet_table(planet)

    @pytest.mark.parametrize("planet", list(Planet))
    def test_set_counts(self, planet):
        table = get_planet_table(planet)
        expected = 5 if planet in _FIVE_SET_PLANETS else 6
        for series in (table.longitude, table.latitude, table.radius):
            assert len(series.terms) == expected

    @pytest.mark.parametrize("planet", list(Planet))
    def test_table_matches_key(self, planet):
        table = get_planet_table(planet)
        assert table.planet is planet
        assert table.longitude.coordinate is Coordinate.LONGITUDE
        assert table.latitude.coordinate is Coordinate.LATITUDE
        assert table.radius.coordinate is Coordinate.RADIUS

    @pytest.mark.parametrize("planet", list(Planet))
    def test_arrays_frozen(self, planet):
        table = get_planet_table(planet)
        for series in (table.longitude, table.latitude, table.radius):
            for terms in series.terms:
                assert not terms.flags.writeable
                assert terms.ndim == 2 and terms.shape[1] == 3

    def test_earth_leading_terms(self):
        earth = get_planet_table(Planet.EARTH)
        np.testing.assert_allclose(earth.longitude.terms[0][0], [1.75347046, 0.0, 0.0])
        np.testing.assert_allclose(earth.radius.terms[0][0], [1.00013989, 0.0, 0.0])

    def test_earth_mean_motion(self):
        earth = get_planet_table(Planet.EARTH)
        # L1 constant term is the mean motion in rad per millennium
        assert earth.longitude.terms[1][0, 0] == pytest.approx(6283.31966747, rel=1e-9)

    @pytest.mark.parametrize("planet", list(Planet))
    def test_radius_leading_term_near_semi_major_axis(self, planet):
        axes = {
            Planet.MERCURY: 0.3871, Planet.VENUS: 0.7233, Planet.EARTH: 1.0000, Planet.MARS: 1.5237,
            Planet.JUPITER: 5.2026, Planet.SATURN: 9.5549, Planet.URANUS: 19.2184, Planet.NEPTUNE: 30.1104,
        }
        r0 = get_planet_table(planet).radius.terms[0][0, 0]
        assert r0 == pytest.approx(axes[planet], rel=0.025)
