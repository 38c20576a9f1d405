"""Tests for VSOP87 series evaluation."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from vsopjax.vsop87 import (
    FUNDAMENTAL_FREQUENCIES,
    FUNDAMENTAL_PHASES,
    Coordinate,
    argument_series,
    build_coordinate_series,
    coordinate_series,
    cosine_series,
    fundamental_arguments,
    get_planet_table,
    pad_coordinate_series,
    Planet,
)


class TestCosineSeries:
    def test_single_term(self):
        terms = np.array([[2.0, 0.5, 3.0]])
        assert float(cosine_series(0.25, terms)) == pytest.approx(2.0 * np.cos(0.5 + 0.75), abs=1e-15)

    def test_sum_of_terms(self):
        terms = np.array([[1.0, 0.0, 0.0], [0.5, np.pi, 0.0], [0.1, 0.0, 2.0 * np.pi]])
        # 1 - 0.5 + 0.1 cos(2 pi t)
        assert float(cosine_series(0.5, terms)) == pytest.approx(0.4, abs=1e-14)

    def test_empty_is_zero(self):
        assert float(cosine_series(0.3, np.zeros((0, 3)))) == 0.0

    def test_empty_keeps_shape(self):
        t = jnp.linspace(-1.0, 1.0, 7)
        result = cosine_series(t, np.zeros((0, 3)))
        assert result.shape == (7,)
        assert jnp.all(result == 0.0)

    def test_array_input(self):
        terms = np.array([[1.0, 0.1, 10.0], [0.2, 1.0, 3.0]])
        t = np.array([-0.5, 0.0, 0.5])
        expected = [sum(a * np.cos(b + c * ti) for a, b, c in terms) for ti in t]
        np.testing.assert_allclose(cosine_series(t, terms), expected, atol=1e-14)

    def test_jit_compatible(self):
        terms = np.array([[1.0, 0.1, 10.0]])
        f = jax.jit(lambda t: cosine_series(t, terms))
        assert float(f(0.2)) == pytest.approx(float(cosine_series(0.2, terms)), abs=1e-15)

    def test_bounded_by_amplitude_sum(self):
        terms = np.array([[1.0, 0.3, 1e4], [0.5, 2.0, 3e3]])
        t = np.linspace(-60.0, 60.0, 1001)
        values = np.asarray(cosine_series(t, terms))
        assert np.all(np.isfinite(values))
        assert np.all(np.abs(values) <= 1.5 + 1e-12)


class TestFundamentalArguments:
    def test_twelve_arguments(self):
        assert FUNDAMENTAL_PHASES.shape == (12,)
        assert FUNDAMENTAL_FREQUENCIES.shape == (12,)

    def test_at_j2000(self):
        np.testing.assert_allclose(fundamental_arguments(0.0), FUNDAMENTAL_PHASES, atol=0.0)

    def test_linear_in_t(self):
        np.testing.assert_allclose(
            fundamental_arguments(0.1), FUNDAMENTAL_PHASES + 0.1 * FUNDAMENTAL_FREQUENCIES, rtol=1e-14
        )

    def test_earth_mean_longitude_rate(self):
        # One revolution per year
        assert FUNDAMENTAL_FREQUENCIES[2] / 1000.0 == pytest.approx(2.0 * np.pi, rel=1e-4)

    def test_read_only(self):
        with pytest.raises(ValueError):
            FUNDAMENTAL_PHASES[0] = 0.0


class TestArgumentSeries:
    def test_single_multiplier(self):
        m = np.zeros((1, 12), dtype=np.int64)
        m[0, 2] = 1
        coeffs = np.array([[0.0, 1.0]])
        t = 0.01
        expected = np.cos(FUNDAMENTAL_PHASES[2] + FUNDAMENTAL_FREQUENCIES[2] * t)
        assert float(argument_series(t, m, coeffs)) == pytest.approx(expected, abs=1e-12)

    def test_empty_is_zero(self):
        result = argument_series(0.5, np.zeros((0, 12)), np.zeros((0, 2)))
        assert float(result) == 0.0

    def test_shape_mismatch_raises(self):
        with pytest.raises(ValueError):
            argument_series(0.0, np.zeros((2, 11)), np.zeros((2, 2)))
        with pytest.raises(ValueError):
            argument_series(0.0, np.zeros((2, 12)), np.zeros((3, 2)))

    def test_agrees_with_cosine_form(self):
        """S sin(phi) + K cos(phi) equals A cos(B + C t) with the derived A, B, C."""
        rng = np.random.default_rng(0)
        n = 25
        m = rng.integers(-3, 4, size=(n, 12))
        sk = rng.normal(scale=1e-3, size=(n, 2))

        a = np.hypot(sk[:, 0], sk[:, 1])
        b = m @ FUNDAMENTAL_PHASES - np.arctan2(sk[:, 0], sk[:, 1])
        c = m @ FUNDAMENTAL_FREQUENCIES
        abc = np.stack([a, b, c], axis=1)

        t = np.linspace(-0.5, 0.5, 11)
        np.testing.assert_allclose(argument_series(t, m, sk), cosine_series(t, abc), atol=1e-10)

    def test_vmap_compatible(self):
        m = np.eye(12, dtype=np.int64)[:3]
        sk = np.array([[1.0, 0.0], [0.0, 1.0], [0.5, 0.5]])
        t = jnp.array([0.0, 0.1, 0.2])
        batched = jax.vmap(lambda ti: argument_series(ti, m, sk))(t)
        np.testing.assert_allclose(batched, argument_series(t, m, sk), atol=1e-12)


class TestCoordinateSeries:
    def test_polynomial_in_t(self):
        series = build_coordinate_series(
            Coordinate.RADIUS,
            [[(1.0, 0.0, 0.0)], [(2.0, 0.0, 0.0)], [(3.0, 0.0, 0.0)]],
        )
        # 1 + 2 t + 3 t^2
        assert float(coordinate_series(0.5, series)) == pytest.approx(2.75, abs=1e-15)

    def test_matches_explicit_sum(self):
        table = get_planet_table(Planet.MARS)
        t = 0.37
        expected = sum(float(cosine_series(t, terms)) * t**k for k, terms in enumerate(table.longitude.terms))
        assert float(coordinate_series(t, table.longitude)) == pytest.approx(expected, rel=1e-12)

    def test_empty_sets_contribute_zero(self):
        series = build_coordinate_series(Coordinate.LATITUDE, [[(1.0, 0.0, 0.0)], [], [(1.0, 0.0, 0.0)]])
        assert float(coordinate_series(2.0, series)) == pytest.approx(1.0 + 4.0, abs=1e-15)

    @pytest.mark.parametrize("planet", [Planet.EARTH, Planet.URANUS])
    def test_padding_gives_identical_output(self, planet):
        table = get_planet_table(planet)
        t = jnp.linspace(-2.0, 2.0, 41)
        for series in (table.longitude, table.latitude, table.radius):
            assert len(series.terms) == 5
            padded = pad_coordinate_series(series)
            assert len(padded.terms) == 6
            assert jnp.array_equal(coordinate_series(t, series), coordinate_series(t, padded))

    def test_finite_over_validity_span(self):
        table = get_planet_table(Planet.MERCURY)
        t = jnp.linspace(-60.0, 60.0, 241)
        for series in (table.longitude, table.latitude, table.radius):
            assert jnp.all(jnp.isfinite(coordinate_series(t, series)))
