"""Plain-text rendering of matrices."""

from __future__ import annotations

import sys
from typing import TextIO

from .core.matrix import Matrix


def _format_cell(value: float, decimals: int) -> str:
    places = decimals
    for threshold in (10, 100, 1000):
        if value >= threshold:
            places -= 1
    prefix = " " if value >= 0 else ""
    return f"{prefix}{value:.{max(places, 0)}f}"


def format_matrix(matrix: Matrix, decimals: int = 3) -> str:
    """Render ``matrix`` one row per line with roughly aligned columns.

    Non-negative values get a leading space so they line up with negative
    ones, and large values drop a decimal place per order of magnitude
    (10, 100, 1000) to keep cells about the same width.
    """

    lines = []
    for row in matrix.to_rows():
        lines.append("  ".join(_format_cell(value, decimals) for value in row))
    return "\n".join(lines)


def print_matrix(matrix: Matrix, decimals: int = 3, file: TextIO | None = None) -> None:
    print(format_matrix(matrix, decimals), file=file or sys.stdout)


__all__ = ["format_matrix", "print_matrix"]
