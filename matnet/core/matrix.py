"""Dense two-dimensional matrix used by :mod:`matnet.core.network`.

The grid is stored in a private ``float64`` :class:`numpy.ndarray`. Every
matrix owns its storage: functions that return a new matrix never alias the
operands, and the instance arithmetic methods (:meth:`Matrix.add`,
:meth:`Matrix.subtract`, :meth:`Matrix.multiply`) mutate the receiver and
return it so calls can be chained::

    gradient = z.clone().apply(dydx).multiply(error).multiply(0.1)

No arithmetic operators are overloaded; in-place updates are always spelled
out as method calls.
"""

from __future__ import annotations

import numbers
from typing import Callable, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError, IndexOutOfRangeError, InvalidShapeError
from .types import Array

CellFn = Callable[[float, int, int], float]
Scalar = float | int


def _check_size(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidShapeError(f"Matrix {name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidShapeError(f"Matrix {name} must be at least 1, got {value}")
    return int(value)


def _check_same_shape(a: "Matrix", b: "Matrix") -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Matrix dimensions do not match: {a.rows}x{a.cols} vs {b.rows}x{b.cols}"
        )


def _as_vector(values: Iterable[float] | "Matrix") -> Array:
    if isinstance(values, Matrix):
        return values._data.ravel().copy()
    try:
        data = np.asarray(list(values), dtype=np.float64)
    except ValueError as exc:
        raise InvalidShapeError(f"Expected a flat sequence of numbers: {exc}") from exc
    if data.ndim > 1:
        raise InvalidShapeError(f"Expected a flat sequence, got shape {data.shape}")
    return data


class Matrix:
    """A rows x cols grid of floats."""

    __slots__ = ("_data",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int = 1, cols: int = 1) -> None:
        rows = _check_size(rows, "rows")
        cols = _check_size(cols, "cols")
        self._data: Array = np.zeros((rows, cols), dtype=np.float64)

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def _wrap(cls, data: Array) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    @classmethod
    def create(cls, rows: int, cols: int) -> "Matrix":
        """Return a zero-filled ``rows x cols`` matrix."""

        return cls(rows, cols)

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "Matrix":
        """Return a column matrix holding ``values`` in order."""

        column = _as_vector(values)
        if column.size == 0:
            raise InvalidShapeError("Cannot build a matrix from an empty sequence")
        return cls._wrap(column.reshape(-1, 1))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """Return a matrix whose rows are the nested sequences in ``rows``."""

        try:
            data = np.array(rows, dtype=np.float64)
        except ValueError as exc:
            raise InvalidShapeError(f"Rows do not form a rectangular grid: {exc}") from exc
        if data.ndim != 2 or data.size == 0:
            raise InvalidShapeError(f"Expected a non-empty 2-D grid, got shape {data.shape}")
        return cls._wrap(data)

    @staticmethod
    def identity(size: int) -> "Matrix":
        size = _check_size(size, "size")
        return Matrix._wrap(np.eye(size, dtype=np.float64))

    # ------------------------------------------------------------------
    # Shape and cell access

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def _check_index(self, i: int, j: int) -> None:
        for index in (i, j):
            if isinstance(index, bool) or not isinstance(index, numbers.Integral):
                raise IndexOutOfRangeError(f"Matrix index must be an integer, got {index!r}")
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexOutOfRangeError(
                f"Index ({i}, {j}) out of range for {self.rows}x{self.cols} matrix"
            )

    def get(self, i: int, j: int) -> float:
        self._check_index(i, j)
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        self._check_index(i, j)
        self._data[i, j] = value

    # ------------------------------------------------------------------
    # Element-wise transforms (in place, return self)

    def map(self, func: CellFn) -> "Matrix":
        """Replace every cell with ``func(value, i, j)``, visiting rows in order."""

        rows, cols = self._data.shape
        for i in range(rows):
            for j in range(cols):
                self._data[i, j] = func(float(self._data[i, j]), i, j)
        return self

    def apply(self, func: Callable[[float], float]) -> "Matrix":
        """Replace every cell with ``func(value)``."""

        return self.map(lambda value, _i, _j: func(value))

    def randomize(
        self,
        low: float = -1.0,
        high: float = 1.0,
        as_int: bool = False,
        rng: np.random.Generator | None = None,
    ) -> "Matrix":
        """Fill every cell with a uniform draw from ``[low, high)``."""

        rng = rng if rng is not None else np.random.default_rng()
        values = rng.uniform(low, high, size=self._data.shape)
        if as_int:
            values = np.floor(values)
        self._data[...] = values
        return self

    def _combine(self, other: "Matrix | Scalar", op: np.ufunc) -> "Matrix":
        if isinstance(other, Matrix):
            _check_same_shape(self, other)
            op(self._data, other._data, out=self._data)
        else:
            op(self._data, float(other), out=self._data)
        return self

    def add(self, other: "Matrix | Scalar") -> "Matrix":
        """Add a scalar or an equally shaped matrix into this matrix."""

        return self._combine(other, np.add)

    def subtract(self, other: "Matrix | Scalar") -> "Matrix":
        """Subtract a scalar or an equally shaped matrix from this matrix."""

        return self._combine(other, np.subtract)

    def multiply(self, other: "Matrix | Scalar") -> "Matrix":
        """Scale by a scalar, or take the Hadamard product with a matrix."""

        return self._combine(other, np.multiply)

    # ------------------------------------------------------------------
    # Structural mutation (in place, return self)

    def append_row(self, values: Iterable[float] | "Matrix") -> "Matrix":
        """Add ``values`` as a new bottom row."""

        row = _as_vector(values)
        if row.size != self.cols:
            raise DimensionMismatchError(
                f"Row of length {row.size} does not fit a matrix with {self.cols} columns"
            )
        self._data = np.vstack([self._data, row.reshape(1, -1)])
        return self

    def append_column(self, values: Iterable[float] | "Matrix") -> "Matrix":
        """Add ``values`` as a new right-hand column."""

        column = _as_vector(values)
        if column.size != self.rows:
            raise DimensionMismatchError(
                f"Column of length {column.size} does not fit a matrix with {self.rows} rows"
            )
        self._data = np.hstack([self._data, column.reshape(-1, 1)])
        return self

    def remove_column(self, index: int) -> "Matrix":
        """Drop column ``index``; later columns shift one place left."""

        if not 0 <= index < self.cols:
            raise IndexOutOfRangeError(
                f"Column {index} out of range for matrix with {self.cols} columns"
            )
        if self.cols == 1:
            raise InvalidShapeError("Cannot remove the only column of a matrix")
        self._data = np.delete(self._data, index, axis=1)
        return self

    # ------------------------------------------------------------------
    # Copies and views

    def clone(self) -> "Matrix":
        return Matrix._wrap(self._data.copy())

    def to_list(self) -> List[float]:
        """Return every cell in row-major order."""

        return [float(v) for v in self._data.ravel(order="C")]

    def to_rows(self) -> List[List[float]]:
        return [[float(v) for v in row] for row in self._data]

    def to_numpy(self) -> Array:
        return self._data.copy()

    # ------------------------------------------------------------------
    # Static algebra (return new matrices)

    @staticmethod
    def product(a: "Matrix", b: "Matrix") -> "Matrix":
        """Return the matrix product ``a x b``."""

        if a.cols != b.rows:
            raise DimensionMismatchError(
                f"Matrix `a` column count ({a.cols}) does not match "
                f"matrix `b` row count ({b.rows})"
            )
        return Matrix._wrap(a._data @ b._data)

    @staticmethod
    def transpose(a: "Matrix") -> "Matrix":
        return Matrix._wrap(a._data.T.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix({self.to_rows()!r})"


def add(a: Matrix, b: Matrix) -> Matrix:
    """Return the element-wise sum of two equally shaped matrices."""

    _check_same_shape(a, b)
    return Matrix._wrap(a._data + b._data)


def subtract(a: Matrix, b: Matrix) -> Matrix:
    """Return the element-wise difference ``a - b``."""

    _check_same_shape(a, b)
    return Matrix._wrap(a._data - b._data)


product = Matrix.product
transpose = Matrix.transpose
identity = Matrix.identity


__all__ = ["Matrix", "add", "subtract", "product", "transpose", "identity"]
