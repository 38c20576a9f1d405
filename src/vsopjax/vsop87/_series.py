"""Evaluation of VSOP87 periodic series.

Two term forms are supported:

- **Cosine form** ``(A, B, C)``: each term contributes
  ``A * cos(B + C * t)``.  This is the form of the bundled tables and of the
  last three columns of every published VSOP87 record.
- **Argument form** ``(S, K)`` with 12 integer multipliers: each term
  contributes ``S * sin(phi) + K * cos(phi)`` where
  ``phi = sum_j m_j * (lambda0_j + N_j * t)`` over the fundamental arguments
  of :func:`fundamental_arguments`.

A coordinate is the polynomial ``sum_k t**k * series_k(t)`` over the powers
the coordinate carries.  All functions are pure and traceable by
``jax.jit`` and ``jax.vmap``; *t* may be a scalar or an array of Julian
millennia from J2000.

References:
    P. Bretagnon and G. Francou, "Planetary theories in rectangular and
    spherical variables. VSOP87 solutions", Astronomy and Astrophysics 202,
    pp. 309-315, 1988.
"""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from vsopjax.config import get_dtype
from vsopjax.vsop87._types import CoordinateSeries

# fmt: off
# Mean longitudes of Mercury..Neptune, then the lunar arguments D, F, l and Lm.
# Phases in rad, frequencies in rad per Julian millennium.
FUNDAMENTAL_PHASES = np.array([
    4.40260884240, 3.17614669689, 1.75347045953, 6.20347611291,
    0.59954649739, 0.87401675650, 5.48129387159, 5.31188628676,
    5.19846674103, 1.62790523337, 2.35555589827, 3.81034454697,
])

FUNDAMENTAL_FREQUENCIES = np.array([
    26087.9031415742, 10213.2855462110, 6283.0758499914, 3340.6124266998,
    529.6909650946, 213.2990954380, 74.7815985673, 38.1330356378,
    77713.7714681205, 84334.6615813083, 83286.9142695536, 83997.0911355954,
])
# fmt: on
FUNDAMENTAL_PHASES.setflags(write=False)
FUNDAMENTAL_FREQUENCIES.setflags(write=False)

N_FUNDAMENTAL_ARGUMENTS = 12


def fundamental_arguments(t: ArrayLike) -> Array:
    """Compute the 12 fundamental arguments ``lambda0_j + N_j * t``.

    Args:
        t: Julian millennia from J2000.  Scalar or array of shape ``(...)``.

    Returns:
        Arguments in radians, shape ``(..., 12)``.  Not reduced modulo
        ``2*pi``.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    phases = jnp.asarray(FUNDAMENTAL_PHASES, dtype=dtype)
    frequencies = jnp.asarray(FUNDAMENTAL_FREQUENCIES, dtype=dtype)
    return phases + frequencies * t[..., None]


def cosine_series(t: ArrayLike, terms: ArrayLike) -> Array:
    """Sum ``A * cos(B + C * t)`` over a set of terms.

    Args:
        t: Julian millennia from J2000.  Scalar or array of shape ``(...)``.
        terms: Term array of shape ``(n, 3)`` with columns ``(A, B, C)``.
            An empty set (``n == 0``) contributes exactly zero.

    Returns:
        Series value with the shape of *t*.

    Examples:
        ```python
        import numpy as np
        from vsopjax.vsop87 import cosine_series
        cosine_series(0.0, np.array([[2.0, 0.0, 1.0]]))  # 2.0
        ```
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    if np.shape(terms)[0] == 0:
        return jnp.zeros_like(t)

    terms = jnp.asarray(terms, dtype=dtype)
    a = terms[:, 0]
    b = terms[:, 1]
    c = terms[:, 2]
    return jnp.sum(a * jnp.cos(b + c * t[..., None]), axis=-1)


def argument_series(t: ArrayLike, multipliers: ArrayLike, coefficients: ArrayLike) -> Array:
    """Sum ``S * sin(phi) + K * cos(phi)`` over a set of terms.

    ``phi`` is the integer combination of the fundamental arguments given by
    each row of *multipliers*.

    Args:
        t: Julian millennia from J2000.  Scalar or array of shape ``(...)``.
        multipliers: Integer multipliers, shape ``(n, 12)``.
        coefficients: ``(S, K)`` pairs, shape ``(n, 2)``.

    Returns:
        Series value with the shape of *t*.

    Raises:
        ValueError: If the array shapes are inconsistent.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    n = np.shape(coefficients)[0]
    if np.shape(multipliers) != (n, N_FUNDAMENTAL_ARGUMENTS) or np.shape(coefficients) != (n, 2):
        raise ValueError(
            f"Expected multipliers of shape ({n}, {N_FUNDAMENTAL_ARGUMENTS}) and "
            f"coefficients of shape ({n}, 2), got {np.shape(multipliers)} and "
            f"{np.shape(coefficients)}"
        )
    if n == 0:
        return jnp.zeros_like(t)

    m = jnp.asarray(multipliers, dtype=dtype)
    coefficients = jnp.asarray(coefficients, dtype=dtype)
    phi = fundamental_arguments(t) @ m.T
    s = coefficients[:, 0]
    k = coefficients[:, 1]
    return jnp.sum(s * jnp.sin(phi) + k * jnp.cos(phi), axis=-1)


def coordinate_series(t: ArrayLike, series: CoordinateSeries) -> Array:
    """Evaluate one coordinate as ``sum_k t**k * cosine_series(t, terms_k)``.

    The polynomial in *t* is evaluated with Horner's scheme, starting from
    the highest power the series carries.

    Args:
        t: Julian millennia from J2000.  Scalar or array of shape ``(...)``.
        series: Coordinate series with one term array per power.

    Returns:
        Coordinate value (rad or AU) with the shape of *t*.  Longitude is not
        reduced modulo ``2*pi``.
    """
    t = jnp.asarray(t, dtype=get_dtype())
    total = jnp.zeros_like(t)
    for terms in reversed(series.terms):
        total = total * t + cosine_series(t, terms)
    return total
