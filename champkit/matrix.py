"""Small dense matrices of floats with the usual linear-algebra operations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from numbers import Real


class SingularMatrixError(ArithmeticError):
    """Raised when a matrix that has no inverse is inverted."""


class Matrix:
    """A mutable rows x cols matrix stored in row-major order."""

    __slots__ = ("_rows", "_cols", "_values")

    def __init__(self, rows: int, cols: int = 1, values: Iterable[float] | None = None):
        if rows < 0 or cols < 0:
            raise ValueError(f"matrix dimensions must be non-negative, got {rows}x{cols}")
        size = rows * cols
        if values is None:
            data = [0.0] * size
        else:
            data = [float(v) for v in values]
            if len(data) != size:
                raise ValueError(
                    f"a {rows}x{cols} matrix needs {size} values, got {len(data)}"
                )
        self._rows = rows
        self._cols = cols
        self._values = data

    @classmethod
    def zeros(cls, rows: int, cols: int = 1) -> Matrix:
        """Return a matrix of the given size filled with zeros."""
        return cls(rows, cols)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> Matrix:
        """Build a matrix from a sequence of equally long rows."""
        row_list = [list(row) for row in rows]
        ncols = len(row_list[0]) if row_list else 0
        if any(len(row) != ncols for row in row_list):
            raise ValueError("all rows must have the same length")
        return cls(len(row_list), ncols, (v for row in row_list for v in row))

    @property
    def shape(self) -> tuple[int, int]:
        """The (rows, cols) dimensions of the matrix."""
        return self._rows, self._cols

    def _offset(self, key) -> int:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError("matrix index must be (row, col)")
            row, col = key
        else:
            row, col = key, 0
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(
                f"index ({row}, {col}) out of range for a {self._rows}x{self._cols} matrix"
            )
        return row * self._cols + col

    def __getitem__(self, key) -> float:
        return self._values[self._offset(key)]

    def __setitem__(self, key, value: float) -> None:
        self._values[self._offset(key)] = float(value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._values == other._values

    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self.rows()!r})"

    def rows(self) -> list[tuple[float, ...]]:
        """Return the rows of the matrix as tuples."""
        c = self._cols
        return [tuple(self._values[r * c:(r + 1) * c]) for r in range(self._rows)]

    def _columns(self) -> list[tuple[float, ...]]:
        return [tuple(self._values[j::self._cols]) for j in range(self._cols)] if self._rows else [
            () for _ in range(self._cols)
        ]

    def fill(self, value: float) -> Matrix:
        """Set every element to value and return self."""
        self._values = [float(value)] * len(self._values)
        return self

    def submatrix(self, row_start: int, row_end: int, col_start: int, col_end: int) -> Matrix:
        """Return a copy of rows [row_start, row_end) and cols [col_start, col_end)."""
        if not (0 <= row_start <= row_end <= self._rows and 0 <= col_start <= col_end <= self._cols):
            raise IndexError("submatrix bounds out of range")
        return Matrix.from_rows(
            row[col_start:col_end] for row in self.rows()[row_start:row_end]
        ) if row_end > row_start else Matrix(0, col_end - col_start)

    def hstack(self, other: Matrix) -> Matrix:
        """Concatenate other to the right of this matrix."""
        if self._rows != other._rows:
            raise ValueError("horizontal concatenation needs equal row counts")
        return Matrix(
            self._rows,
            self._cols + other._cols,
            (v for a, b in zip(self.rows(), other.rows()) for v in a + b),
        )

    def vstack(self, other: Matrix) -> Matrix:
        """Concatenate other below this matrix."""
        if self._cols != other._cols:
            raise ValueError("vertical concatenation needs equal column counts")
        return Matrix(self._rows + other._rows, self._cols, self._values + other._values)

    def _check_same_shape(self, other: Matrix) -> None:
        if self.shape != other.shape:
            raise ValueError(f"shape mismatch: {self.shape} and {other.shape}")

    def _combine(self, other, op) -> Matrix:
        if isinstance(other, Matrix):
            self._check_same_shape(other)
            return Matrix(self._rows, self._cols, map(op, self._values, other._values))
        if isinstance(other, Real):
            return Matrix(self._rows, self._cols, (op(v, other) for v in self._values))
        return NotImplemented

    def __add__(self, other) -> Matrix:
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other) -> Matrix:
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self, other) -> Matrix:
        if not isinstance(other, Real):
            return NotImplemented
        return Matrix(self._rows, self._cols, (v * other for v in self._values))

    __rmul__ = __mul__

    def __matmul__(self, other) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise ValueError(f"cannot multiply {self.shape} by {other.shape}")
        columns = other._columns()
        return Matrix(
            self._rows,
            other._cols,
            (sum(a * b for a, b in zip(row, col)) for row in self.rows() for col in columns),
        )

    def __truediv__(self, other) -> Matrix:
        if not isinstance(other, Real):
            return NotImplemented
        return Matrix(self._rows, self._cols, (v / other for v in self._values))

    def __neg__(self) -> Matrix:
        return Matrix(self._rows, self._cols, (-v for v in self._values))

    def transpose(self) -> Matrix:
        """Return the transposed matrix."""
        return Matrix(self._cols, self._rows, (v for col in self._columns() for v in col))

    def elementwise_multiply(self, other: Matrix) -> Matrix:
        """Multiply corresponding elements of two matrices of the same shape."""
        self._check_same_shape(other)
        return Matrix(self._rows, self._cols, (a * b for a, b in zip(self._values, other._values)))

    def _require_square(self, what: str) -> None:
        if self._rows != self._cols or self._rows == 0:
            raise ValueError(f"{what} needs a non-empty square matrix, got {self.shape}")

    def determinant(self) -> float:
        """Return the determinant by cofactor expansion along the first column."""
        self._require_square("determinant")
        return _determinant([list(row) for row in self.rows()])

    def inverse(self) -> Matrix:
        """Return the inverse using Gauss-Jordan elimination with partial pivoting."""
        self._require_square("inverse")
        a = [list(row) for row in self.rows()]
        n = len(a)
        pivot_rows = []

        for k in range(n):
            best = 0.0
            pivot = None
            for i in range(k, n):
                if abs(a[i][k]) >= best:
                    best = abs(a[i][k])
                    pivot = i
            if pivot is None or a[pivot][k] == 0.0:
                raise SingularMatrixError("matrix is singular")
            if pivot != k:
                a[k], a[pivot] = a[pivot], a[k]
            pivot_rows.append(pivot)

            scale = 1.0 / a[k][k]
            a[k][k] = 1.0
            a[k] = [v * scale for v in a[k]]

            for i, row in enumerate(a):
                if i == k:
                    continue
                factor = row[k]
                row[k] = 0.0
                a[i] = [x - y * factor for x, y in zip(row, a[k])]

        for k, pivot in reversed(list(enumerate(pivot_rows))):
            if pivot != k:
                for row in a:
                    row[k], row[pivot] = row[pivot], row[k]

        return Matrix.from_rows(a)


def _determinant(a: list[list[float]]) -> float:
    n = len(a)
    if n == 1:
        return a[0][0]
    if n == 2:
        return a[0][0] * a[1][1] - a[1][0] * a[0][1]
    det = 0.0
    for i, row in enumerate(a):
        minor = [r[1:] for j, r in enumerate(a) if j != i]
        term = _determinant(minor) * row[0]
        det = det - term if i % 2 else det + term
    return det