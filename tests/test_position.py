"""Tests for heliocentric planet positions."""

import math
import warnings

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from vsopjax import (
    HeliocentricPosition,
    Instant,
    InvalidArgumentError,
    Planet,
    PrecisionAdvisory,
    compute_heliocentric_position,
)
from vsopjax.vsop87 import (
    build_planet_table,
    get_planet_table,
    heliocentric_position,
    heliocentric_position_t,
    heliocentric_positions,
    load_cached_planet_table,
    resolve_planet,
    spherical_to_rectangular,
    warn_if_outside_validity,
)

_J2000 = Instant(2000, 1, 1, 12)

# Full VSOP87D values at JD 2451545.0: (L rad, B rad, R AU) and tolerances
# matching the truncation of the bundled tables. The published tables are
# checked against the same values with _PUBLISHED_TOLERANCE.
_J2000_REFERENCE = {
    Planet.MERCURY: ((4.4293481036, -0.0527573409, 0.4664714751), (1e-4, 1e-4, 1e-4)),
    Planet.VENUS: ((3.1870221833, 0.0569782849, 0.7202129253), (1e-4, 1e-4, 1e-4)),
    Planet.EARTH: ((1.7519238681, -0.0000039656, 0.9833276819), (2e-6, 1e-6, 2e-7)),
    Planet.MARS: ((6.2735389983, -0.0247779824, 1.3912076925), (1e-4, 1e-4, 1e-4)),
    Planet.JUPITER: ((0.6334614186, -0.0205001039, 4.9653813154), (1e-4, 1e-4, 1e-4)),
}

_OUTER_LONGITUDE = {
    Planet.SATURN: (0.7980038761, (9.0, 9.4)),
    Planet.URANUS: (5.5225485803, (19.8, 20.1)),
    Planet.NEPTUNE: (5.3045629252, (30.0, 30.3)),
}

# (L rad, B rad, R AU)
_PUBLISHED_TOLERANCE = (1e-7, 1e-7, 1e-8)

# Upper bounds on heliocentric longitude change per day. Units: *rad*
_MAX_DAILY_MOTION = {
    Planet.MERCURY: 0.12,
    Planet.VENUS: 0.035,
    Planet.EARTH: 0.02,
    Planet.MARS: 0.013,
    Planet.JUPITER: 0.003,
    Planet.SATURN: 0.0012,
    Planet.URANUS: 0.0005,
    Planet.NEPTUNE: 0.0002,
}


def _angle_diff(a, b):
    return (np.asarray(a) - np.asarray(b) + np.pi) % (2.0 * np.pi) - np.pi


# ──────────────────────────────────────────────
# Planet identifiers
# ──────────────────────────────────────────────


class TestResolvePlanet:
    def test_enum_values(self):
        assert [p.value for p in Planet] == list(range(8))
        assert Planet.EARTH == 2
        assert Planet.MARS == 3

    def test_enum_passthrough(self):
        assert resolve_planet(Planet.SATURN) is Planet.SATURN

    @pytest.mark.parametrize("value, expected", [(0, Planet.MERCURY), (2, Planet.EARTH), (7, Planet.NEPTUNE)])
    def test_integer_ids(self, value, expected):
        assert resolve_planet(value) is expected

    def test_numpy_integer(self):
        assert resolve_planet(np.int64(3)) is Planet.MARS

    @pytest.mark.parametrize("name", ["mars", "MARS", " Mars "])
    def test_names(self, name):
        assert resolve_planet(name) is Planet.MARS

    @pytest.mark.parametrize("value", [8, -1, 100, True, False, 2.0, "pluto", "", None])
    def test_invalid_raises(self, value):
        with pytest.raises(InvalidArgumentError):
            resolve_planet(value)

    def test_invalid_id_in_position(self):
        with pytest.raises(InvalidArgumentError):
            compute_heliocentric_position(_J2000, 8)
        with pytest.raises(InvalidArgumentError):
            compute_heliocentric_position(_J2000, -1)

    def test_invalid_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_planet(8)


# ──────────────────────────────────────────────
# Spherical to rectangular
# ──────────────────────────────────────────────


class TestSphericalToRectangular:
    def test_unit_on_axis(self):
        x, y, z = spherical_to_rectangular(0.0, 0.0, 1.0)
        assert float(x) == -1.0
        assert float(y) == 0.0
        assert float(z) == 0.0

    def test_quarter_turn(self):
        x, y, z = spherical_to_rectangular(math.pi / 2, 0.0, 2.0)
        assert float(x) == pytest.approx(0.0, abs=1e-15)
        assert float(y) == 0.0
        assert float(z) == pytest.approx(2.0, abs=1e-15)

    def test_pole(self):
        x, y, z = spherical_to_rectangular(1.234, math.pi / 2, 3.0)
        assert float(y) == pytest.approx(3.0, abs=1e-15)
        assert float(jnp.hypot(x, z)) == pytest.approx(0.0, abs=1e-14)

    def test_norm_is_radius(self):
        rng = np.random.default_rng(3)
        lon = rng.uniform(0.0, 2.0 * np.pi, 50)
        lat = rng.uniform(-0.1, 0.1, 50)
        r = rng.uniform(0.3, 31.0, 50)
        rect = spherical_to_rectangular(lon, lat, r)
        norm = jnp.sqrt(rect.x**2 + rect.y**2 + rect.z**2)
        np.testing.assert_allclose(norm, r, rtol=1e-14)


# ──────────────────────────────────────────────
# Positions
# ──────────────────────────────────────────────


class TestHeliocentricPosition:
    def test_result_type(self):
        pos = compute_heliocentric_position(_J2000, Planet.EARTH)
        assert isinstance(pos, HeliocentricPosition)
        assert pos.spherical.longitude.shape == ()

    def test_alias(self):
        assert compute_heliocentric_position is heliocentric_position

    @pytest.mark.parametrize("planet", list(_J2000_REFERENCE))
    def test_j2000_reference(self, planet):
        (lon, lat, r), (tol_lon, tol_lat, tol_r) = _J2000_REFERENCE[planet]
        sph = heliocentric_position(_J2000, planet).spherical
        assert float(_angle_diff(sph.longitude, lon)) == pytest.approx(0.0, abs=tol_lon)
        assert float(sph.latitude) == pytest.approx(lat, abs=tol_lat)
        assert float(sph.radius) == pytest.approx(r, abs=tol_r)

    @pytest.mark.parametrize("planet", list(_OUTER_LONGITUDE))
    def test_j2000_outer_planets(self, planet):
        lon, (r_min, r_max) = _OUTER_LONGITUDE[planet]
        sph = heliocentric_position(_J2000, planet).spherical
        assert float(_angle_diff(sph.longitude, lon)) == pytest.approx(0.0, abs=5e-4)
        assert abs(float(sph.latitude)) < 0.05
        assert r_min < float(sph.radius) < r_max

    def test_j2000_from_string_and_name(self):
        a = heliocentric_position("2000-01-01T12:00:00Z", "earth")
        b = heliocentric_position(_J2000, Planet.EARTH)
        assert float(a.spherical.longitude) == float(b.spherical.longitude)

    def test_march_equinox(self):
        """At the March equinox the Sun is at longitude 0, so Earth is at pi."""
        sph = heliocentric_position("2000-03-20T07:35:00Z", Planet.EARTH).spherical
        assert float(_angle_diff(sph.longitude, np.pi)) == pytest.approx(0.0, abs=1e-3)

    def test_rectangular_consistent(self):
        pos = heliocentric_position(Instant(2024, 6, 1), Planet.MARS)
        sph = pos.spherical
        expected = spherical_to_rectangular(sph.longitude, sph.latitude, sph.radius)
        for got, want in zip(pos.rectangular, expected):
            assert float(got) == float(want)

    def test_deterministic(self):
        instant = Instant(1987, 4, 10, 19, 21)
        for planet in Planet:
            a = heliocentric_position(instant, planet)
            b = heliocentric_position(instant, planet)
            for leaf_a, leaf_b in zip(jax.tree_util.tree_leaves(a), jax.tree_util.tree_leaves(b)):
                assert np.asarray(leaf_a).tobytes() == np.asarray(leaf_b).tobytes()

    @pytest.mark.parametrize("planet", list(Planet))
    def test_longitude_wrapped(self, planet):
        t = jnp.linspace(-2.0, 8.0, 101)
        lon = heliocentric_position_t(t, planet).spherical.longitude
        assert jnp.all(lon >= 0.0)
        assert jnp.all(lon < 2.0 * np.pi)

    @pytest.mark.parametrize("planet", list(Planet))
    def test_continuity(self, planet):
        start = Instant(2020, 1, 1)
        instants = [start + day * 86400.0 for day in range(400)]
        sph = heliocentric_positions(instants, planet).spherical
        dlon = np.abs(_angle_diff(sph.longitude[1:], sph.longitude[:-1]))
        assert np.all(dlon < _MAX_DAILY_MOTION[planet])
        assert np.all(np.abs(np.diff(np.asarray(sph.latitude))) < 0.02)
        assert np.all(np.abs(np.diff(np.asarray(sph.radius))) < 0.01)

    def test_earth_distance_range(self):
        instants = [Instant(2023, 1, 1) + day * 86400.0 for day in range(366)]
        r = np.asarray(heliocentric_positions(instants, Planet.EARTH).spherical.radius)
        assert 0.9832 < r.min() < 0.9834
        assert 1.0166 < r.max() < 1.0168

    def test_custom_table(self):
        table = build_planet_table(
            Planet.EARTH,
            [[(7.0, 0.0, 0.0)]],
            [[(0.1, 0.0, 0.0)]],
            [[(2.5, 0.0, 0.0)]],
        )
        sph = heliocentric_position(_J2000, Planet.EARTH, table=table).spherical
        assert float(sph.longitude) == pytest.approx(7.0 - 2.0 * np.pi, abs=1e-12)
        assert float(sph.latitude) == pytest.approx(0.1, abs=1e-15)
        assert float(sph.radius) == 2.5

    def test_invalid_instant_raises(self):
        with pytest.raises(InvalidArgumentError):
            heliocentric_position("yesterday", Planet.EARTH)


class TestPublishedTables:
    """Reference positions from the full published VSOP87D files.

    These download ``VSOP87D.*`` into the cache on first use.
    """

    @staticmethod
    def _published_table(planet):
        table = load_cached_planet_table(planet)
        bundled = get_planet_table(planet)
        assert table is not bundled, "published VSOP87D file could not be loaded"
        assert table.longitude.n_terms > bundled.longitude.n_terms
        return table

    @pytest.mark.ci
    @pytest.mark.parametrize("planet", list(_J2000_REFERENCE))
    def test_j2000_reference(self, planet):
        (lon, lat, r), _ = _J2000_REFERENCE[planet]
        tol_lon, tol_lat, tol_r = _PUBLISHED_TOLERANCE
        sph = heliocentric_position(_J2000, planet, table=self._published_table(planet)).spherical
        assert float(_angle_diff(sph.longitude, lon)) == pytest.approx(0.0, abs=tol_lon)
        assert float(sph.latitude) == pytest.approx(lat, abs=tol_lat)
        assert float(sph.radius) == pytest.approx(r, abs=tol_r)

    @pytest.mark.ci
    @pytest.mark.parametrize("planet", list(_OUTER_LONGITUDE))
    def test_j2000_outer_longitude(self, planet):
        lon, _ = _OUTER_LONGITUDE[planet]
        sph = heliocentric_position(_J2000, planet, table=self._published_table(planet)).spherical
        assert float(_angle_diff(sph.longitude, lon)) == pytest.approx(0.0, abs=_PUBLISHED_TOLERANCE[0])


class TestBatchedPositions:
    def test_matches_single(self):
        instants = [Instant(2010, 1, 1), Instant(2015, 6, 30, 12), Instant(2042, 2, 3)]
        batch = heliocentric_positions(instants, Planet.VENUS)
        assert batch.spherical.longitude.shape == (3,)
        for i, instant in enumerate(instants):
            single = heliocentric_position(instant, Planet.VENUS)
            assert float(batch.spherical.radius[i]) == pytest.approx(float(single.spherical.radius), abs=1e-14)
            assert float(batch.rectangular.z[i]) == pytest.approx(float(single.rectangular.z), abs=1e-13)

    def test_accepts_strings(self):
        batch = heliocentric_positions(["2000-01-01T12:00:00Z"], "jupiter")
        assert float(batch.spherical.radius[0]) == pytest.approx(4.9653813154, abs=1e-4)

    def test_jit(self):
        f = jax.jit(lambda t: heliocentric_position_t(t, Planet.MARS))
        eager = heliocentric_position_t(0.0123, Planet.MARS)
        compiled = f(0.0123)
        assert float(compiled.spherical.longitude) == pytest.approx(float(eager.spherical.longitude), abs=1e-12)
        assert float(compiled.rectangular.y) == pytest.approx(float(eager.rectangular.y), abs=1e-12)

    def test_vmap(self):
        t = jnp.linspace(-0.1, 0.1, 5)
        mapped = jax.vmap(lambda ti: heliocentric_position_t(ti, Planet.SATURN))(t)
        direct = heliocentric_position_t(t, Planet.SATURN)
        np.testing.assert_allclose(mapped.spherical.radius, direct.spherical.radius, atol=1e-13)


# ──────────────────────────────────────────────
# Precision advisory
# ──────────────────────────────────────────────


class TestPrecisionAdvisory:
    def test_no_warning_in_range(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            heliocentric_position(Instant(9999, 12, 31), Planet.EARTH)
            heliocentric_position(Instant(1, 1, 1), Planet.EARTH)

    @pytest.mark.parametrize("t", [60.5, -61.0, 100.0])
    def test_warns_outside_validity(self, t):
        with pytest.warns(PrecisionAdvisory):
            warn_if_outside_validity(t)

    def test_boundary_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            warn_if_outside_validity(60.0)
            warn_if_outside_validity(-60.0)

    def test_far_positions_still_finite(self):
        pos = heliocentric_position_t(jnp.array([-80.0, 80.0]), Planet.MERCURY)
        for leaf in jax.tree_util.tree_leaves(pos):
            assert jnp.all(jnp.isfinite(leaf))
