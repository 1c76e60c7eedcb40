"""Exception hierarchy for matnet."""

from __future__ import annotations


class MatnetError(Exception):
    """Base class for every error raised by matnet."""


class DimensionMismatchError(MatnetError, ValueError):
    """Operand shapes, or vector and layer sizes, do not agree."""


class IndexOutOfRangeError(MatnetError, IndexError):
    """A row or column index lies outside the matrix."""


class InvalidConfigurationError(MatnetError, ValueError):
    """A network was configured with unusable options."""


class InvalidShapeError(MatnetError, ValueError):
    """A matrix cannot be built or reshaped into the requested shape."""


__all__ = [
    "MatnetError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidConfigurationError",
    "InvalidShapeError",
]
