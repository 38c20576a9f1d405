"""Bundled truncated VSOP87D coefficients, one module per planet.

Each planet module exposes ``LONGITUDE``, ``LATITUDE`` and ``RADIUS``:
tuples of term sets indexed by power of *t*, each term ``(A, B, C)`` with
the amplitude in units of 1e-8 rad or 1e-8 AU.
"""

from vsopjax.vsop87._coefficients import (
    earth,
    jupiter,
    mars,
    mercury,
    neptune,
    saturn,
    uranus,
    venus,
)

AMPLITUDE_SCALE = 1.0e-8

__all__ = [
    "AMPLITUDE_SCALE",
    "earth",
    "jupiter",
    "mars",
    "mercury",
    "neptune",
    "saturn",
    "uranus",
    "venus",
]
