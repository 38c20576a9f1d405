"""Exception and warning types raised by vsopjax."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised for an unrecognised planet or an instant outside the supported range.

    Subclasses ``ValueError`` so callers that already guard numeric input
    with ``except ValueError`` keep working.
    """


class PrecisionAdvisory(UserWarning):
    """Issued when a position is requested far outside the VSOP87 validity span.

    The series stay finite and are still evaluated; only their accuracy
    degrades beyond roughly 6000 years from J2000.
    """
