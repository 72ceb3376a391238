"""
vecmat Matrix - Fixed-size Dense Matrix

Types:
    - Matrix: ``rows x cols`` doubles in row-major order

Usage:
    m = Matrix(2, 3)                          # zero-filled
    a = Matrix.from_rows([[1, 2], [4, 5]])
    a[0, 1] = 3.0                             # bounds-checked assignment
    a * Vector.from_values([1, 1])            # matrix-vector product
    a * a                                     # matrix product
    a.lu().inv()                              # inverse via LU decomposition
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from vecmat._base import DenseBase
from vecmat._config import config
from vecmat._display import render_grid
from vecmat._kernel import blas, dense
from vecmat._typing import (
    check_index,
    check_size,
    coerce_real,
    coerce_reals,
    ensure_vector,
)
from vecmat.error import (
    DimensionMismatchError,
    InvalidSizeError,
    NotSquareError,
    OperandTypeError,
)
from vecmat.vector import Vector

if TYPE_CHECKING:
    from vecmat.decomp import LUDecomp, QRDecomp

__all__ = ['Matrix']


class Matrix(DenseBase):
    """
    Fixed-size two-dimensional array of doubles.

    Element ``(i, j)`` is valid for ``0 <= i < rows`` and ``0 <= j < cols``.
    Element-wise arithmetic requires equal ``rows x cols``; the matrix
    product requires ``self.cols == other.rows``.

    Attributes:
        rows (int): Number of rows
        cols (int): Number of columns
        format (str): printf-style element format used by ``str(m)``

    Example:
        >>> a = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        >>> b = Matrix.from_rows([[1, 2], [3, 4], [5, 6]])
        >>> a * b
        M[[22.0, 28.0], [49.0, 64.0]]
    """

    __slots__ = ()

    _kind = "matrix"
    _tag = "M"

    def __init__(self, rows: int, cols: int, *, format: Optional[str] = None):
        """
        Allocate a zero-filled matrix.

        Args:
            rows: Number of rows (>= 1)
            cols: Number of columns (>= 1)
            format: Optional per-instance element format

        Raises:
            InvalidSizeError: If either dimension is not a positive integer
        """
        rows = check_size(rows, "rows")
        cols = check_size(cols, "cols")
        self._data = dense.alloc_matrix(rows, cols)
        self._format = None
        if format is not None:
            self.format = format

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def _from_array(cls, data: np.ndarray) -> "Matrix":
        """Adopt an already-owned 2-D float64 array (internal)."""
        m = cls.__new__(cls)
        m._data = data
        m._format = None
        return m

    @classmethod
    def from_rows(cls, rows: Union[Sequence[Sequence[Any]], np.ndarray]) -> "Matrix":
        """
        Create a matrix from a nested list of rows.

        Dimensions are taken from the number of rows and the length of the
        first row.

        Raises:
            InvalidSizeError: If there are no rows or the first row is empty
            DimensionMismatchError: If rows differ in length
            OperandTypeError: If any element is not numeric-convertible
        """
        if isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise DimensionMismatchError(f"Expected a 2-D array, got {rows.ndim}-D")
            rows = rows.tolist()
        if isinstance(rows, (str, bytes)):
            raise OperandTypeError("Expected a list of rows, got a string")

        rows = list(rows)
        if not rows:
            raise InvalidSizeError("Matrix needs at least one row")

        parsed = [coerce_reals(row) for row in rows]
        ncols = len(parsed[0])
        for i, row in enumerate(parsed):
            if len(row) != ncols:
                raise DimensionMismatchError(
                    f"row {i} has {len(row)} elements, expected {ncols}"
                )

        m = cls(len(parsed), ncols)
        m._data[:, :] = parsed
        return m

    @classmethod
    def identity_matrix(cls, n: int) -> "Matrix":
        """``n x n`` identity."""
        return cls(n, n).identity()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols)."""
        return (self.rows, self.cols)

    size = shape

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def _order_key(self) -> int:
        return self.rows * self.cols

    def _default_format(self) -> str:
        return config.display.matrix_format

    # =========================================================================
    # Element Access
    # =========================================================================

    def _check_ij(self, i: int, j: int) -> Tuple[int, int]:
        return check_index(i, self.rows, "row"), check_index(j, self.cols, "col")

    def get(self, i: int, j: int) -> float:
        """Element at (i, j)."""
        i, j = self._check_ij(i, j)
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: Any) -> None:
        """Assign ``float(value)`` at (i, j)."""
        i, j = self._check_ij(i, j)
        self._data[i, j] = coerce_real(value)

    def __getitem__(self, key: Tuple[int, int]) -> float:
        """Get element at (row, col)."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise OperandTypeError("Index must be (row, col) tuple")
        return self.get(key[0], key[1])

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        """Set element at (row, col)."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise OperandTypeError("Index must be (row, col) tuple")
        self.set(key[0], key[1], value)

    def __len__(self) -> int:
        """Element count, matching the row-major iteration."""
        return self.rows * self.cols

    def row(self, i: int) -> Vector:
        """Copy of row i as a Vector."""
        i = check_index(i, self.rows, "row")
        return Vector.from_values(self._data[i, :])

    def col(self, j: int) -> Vector:
        """Copy of column j as a Vector."""
        j = check_index(j, self.cols, "col")
        return Vector.from_values(self._data[:, j])

    get_row = row
    get_col = col

    def set_row(self, i: int, values: Any) -> "Matrix":
        """Overwrite row i with a Vector or sequence of length cols."""
        i = check_index(i, self.rows, "row")
        v = ensure_vector(values, size=self.cols)
        self._data[i, :] = v._data
        return self

    def set_col(self, j: int, values: Any) -> "Matrix":
        """Overwrite column j with a Vector or sequence of length rows."""
        j = check_index(j, self.cols, "col")
        v = ensure_vector(values, size=self.rows)
        self._data[:, j] = v._data
        return self

    def to_list(self) -> List[List[float]]:
        """Nested Python lists, one per row."""
        return [[float(x) for x in row] for row in self._data]

    # =========================================================================
    # Iteration
    # =========================================================================

    def __iter__(self) -> Iterator[float]:
        """Elements in row-major order."""
        for i in range(self.rows):
            for j in range(self.cols):
                yield float(self._data[i, j])

    def each_with_indexes(self) -> Iterator[Tuple[float, int, int]]:
        """(value, i, j) in row-major order."""
        for i in range(self.rows):
            for j in range(self.cols):
                yield float(self._data[i, j]), i, j

    def each_row(self) -> Iterator[Tuple[Vector, int]]:
        """(row Vector, i) for ascending i."""
        for i in range(self.rows):
            yield self.row(i), i

    def each_col(self) -> Iterator[Tuple[Vector, int]]:
        """(column Vector, j) for ascending j."""
        for j in range(self.cols):
            yield self.col(j), j

    def map_(self, fn: Callable[[float], Any]) -> "Matrix":
        """
        Replace every element with ``fn(element)`` in row-major order.

        All results are computed and validated before any element is
        written, so a failing ``fn`` leaves the matrix unchanged.

        Returns:
            self
        """
        results = [coerce_real(fn(x)) for x in self]
        self._data[:, :] = np.asarray(results, dtype=np.float64).reshape(self.shape)
        return self

    def map(self, fn: Callable[[float], Any]) -> "Matrix":
        """Copy with ``fn`` applied to every element."""
        return self.copy().map_(fn)

    # =========================================================================
    # Element-wise Arithmetic
    # =========================================================================

    def add(self, other: "Matrix") -> "Matrix":
        """Element-wise sum as a new matrix."""
        return self._binary(other, dense.ADD, inplace=False, what="add")

    def add_(self, other: "Matrix") -> "Matrix":
        """Element-wise sum in place; returns self."""
        return self._binary(other, dense.ADD, inplace=True, what="add_")

    def sub(self, other: "Matrix") -> "Matrix":
        """Element-wise difference as a new matrix."""
        return self._binary(other, dense.SUB, inplace=False, what="sub")

    def sub_(self, other: "Matrix") -> "Matrix":
        """Element-wise difference in place; returns self."""
        return self._binary(other, dense.SUB, inplace=True, what="sub_")

    def mul_elements(self, other: "Matrix") -> "Matrix":
        """Element-wise (Hadamard) product as a new matrix."""
        return self._binary(other, dense.MUL, inplace=False, what="mul_elements")

    def mul_elements_(self, other: "Matrix") -> "Matrix":
        return self._binary(other, dense.MUL, inplace=True, what="mul_elements_")

    def div_elements(self, other: "Matrix") -> "Matrix":
        """Element-wise quotient as a new matrix."""
        return self._binary(other, dense.DIV, inplace=False, what="div_elements")

    def div_elements_(self, other: "Matrix") -> "Matrix":
        return self._binary(other, dense.DIV, inplace=True, what="div_elements_")

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def mul(self, other: "Matrix") -> "Matrix":
        """
        Matrix product ``self x other``.

        Raises:
            OperandTypeError: If other is not a Matrix
            DimensionMismatchError: If self.cols != other.rows
        """
        if not isinstance(other, Matrix):
            raise OperandTypeError(f"mul requires a Matrix, got {type(other).__name__}")
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"mul: {self.rows}x{self.cols} times {other.rows}x{other.cols}"
            )
        return Matrix._from_array(blas.gemm(self._data, other._data))

    def mul_vector(self, v: Vector) -> Vector:
        """
        Matrix-vector product, a Vector of length rows.

        Raises:
            DimensionMismatchError: If v.length != cols
        """
        if not isinstance(v, Vector):
            raise OperandTypeError(f"mul_vector requires a Vector, got {type(v).__name__}")
        if v.length != self.cols:
            raise DimensionMismatchError(
                f"mul_vector: {self.rows}x{self.cols} times vector of length {v.length}"
            )
        return Vector.from_values(blas.gemv(self._data, v._data))

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "Matrix":
        return self._dispatch(other, "+", {"matrix": self.add, "scalar": self.add_scalar})

    def __sub__(self, other: Any) -> "Matrix":
        return self._dispatch(
            other, "-", {"matrix": self.sub, "scalar": lambda k: self.add_scalar(-coerce_real(k))}
        )

    def __mul__(self, other: Any) -> Union["Matrix", Vector]:
        return self._dispatch(
            other, "*", {"matrix": self.mul, "vector": self.mul_vector, "scalar": self.scale}
        )

    def __matmul__(self, other: Any) -> Union["Matrix", Vector]:
        return self._dispatch(other, "@", {"matrix": self.mul, "vector": self.mul_vector})

    def __truediv__(self, other: Any) -> "Matrix":
        return self._dispatch(
            other,
            "/",
            {"matrix": self.div_elements, "scalar": lambda k: self._scalar_div(k, inplace=False)},
        )

    def __iadd__(self, other: Any) -> "Matrix":
        return self._dispatch(other, "+=", {"matrix": self.add_, "scalar": self.add_scalar_})

    def __isub__(self, other: Any) -> "Matrix":
        return self._dispatch(
            other, "-=", {"matrix": self.sub_, "scalar": lambda k: self.add_scalar_(-coerce_real(k))}
        )

    def __imul__(self, other: Any) -> "Matrix":
        # Only scalar scaling can be done in place; the matrix product
        # generally changes shape.
        return self._dispatch(other, "*=", {"scalar": self.scale_})

    def __itruediv__(self, other: Any) -> "Matrix":
        return self._dispatch(
            other,
            "/=",
            {"matrix": self.div_elements_, "scalar": lambda k: self._scalar_div(k, inplace=True)},
        )

    def __radd__(self, other: Any) -> "Matrix":
        return self._dispatch(other, "+", {"scalar": self.add_scalar})

    def __rsub__(self, other: Any) -> "Matrix":
        return self._dispatch(other, "-", {"scalar": lambda k: self.scale(-1.0).add_scalar_(k)})

    def __rmul__(self, other: Any) -> "Matrix":
        return self._dispatch(other, "*", {"scalar": self.scale})

    # =========================================================================
    # Reductions
    # =========================================================================

    def argmax(self) -> Tuple[int, int]:
        """(i, j) of the first maximal element in row-major order."""
        return dense.argmax(self._data)

    def argmin(self) -> Tuple[int, int]:
        """(i, j) of the first minimal element in row-major order."""
        return dense.argmin(self._data)

    # =========================================================================
    # Shape Operations
    # =========================================================================

    def transpose(self) -> "Matrix":
        """New ``cols x rows`` matrix with ``result[j, i] == self[i, j]``."""
        return self._wrap(dense.transpose(self._data))

    t = transpose

    def transpose_(self) -> "Matrix":
        """Transpose a square matrix in place; returns self."""
        self._require_square("transpose_")
        self._data[:, :] = dense.transpose(self._data)
        return self

    def swap_rows(self, i: int, j: int) -> "Matrix":
        i = check_index(i, self.rows, "row")
        j = check_index(j, self.rows, "row")
        dense.swap_elements(self._data, i, j)
        return self

    def swap_cols(self, i: int, j: int) -> "Matrix":
        i = check_index(i, self.cols, "col")
        j = check_index(j, self.cols, "col")
        if i != j:
            self._data[:, [i, j]] = self._data[:, [j, i]]
        return self

    def identity(self) -> "Matrix":
        """Ones on the main diagonal, zeros elsewhere; returns self."""
        dense.set_identity(self._data)
        return self

    def random_fill(self, seed: Optional[int] = None) -> "Matrix":
        """Fill with uniform values in [0, 1); returns self."""
        rng = np.random.default_rng(seed)
        self._data[:, :] = rng.random(self.shape)
        return self

    # =========================================================================
    # Decompositions
    # =========================================================================

    def _require_square(self, what: str) -> None:
        if not self.is_square:
            raise NotSquareError(f"{what} requires a square matrix, got {self.rows}x{self.cols}")

    def lu(self, tol: Optional[float] = None) -> "LUDecomp":
        """
        LU decomposition of this (square) matrix.

        The decomposition works on a private copy; later changes to this
        matrix do not affect it.

        Raises:
            NotSquareError: If rows != cols
        """
        from vecmat.decomp import LUDecomp
        return LUDecomp(self, tol=tol)

    def qr(self, tol: Optional[float] = None) -> "QRDecomp":
        """Householder QR decomposition (rows >= cols)."""
        from vecmat.decomp import QRDecomp
        return QRDecomp(self, tol=tol)

    def det(self) -> float:
        """Determinant via LU decomposition."""
        return self.lu().det()

    def inv(self) -> "Matrix":
        """Inverse via LU decomposition."""
        return self.lu().inv()

    def solve(self, b: Any) -> Vector:
        """Solve ``self x = b`` via LU decomposition."""
        return self.lu().solve(b)

    # =========================================================================
    # Display
    # =========================================================================

    def __str__(self) -> str:
        return render_grid(self._data, self.format)
