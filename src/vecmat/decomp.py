"""
Matrix Decompositions.

This module provides factorizations of a Matrix that are computed once and
then queried:

    - LUDecomp: ``P A = L U`` with partial pivoting; determinant, inverse
      and linear solves for square matrices.
    - QRDecomp: Householder ``A = Q R`` for ``m x n`` matrices with
      ``m >= n``; square solves and least-squares solutions.

Both capture a private working copy of the source matrix at construction,
so mutating the source afterwards never changes their results. A
singular matrix still factorizes; the failure surfaces as
SingularMatrixError when a solve or inverse is requested.

Example:
    >>> from vecmat import Matrix, Vector
    >>> a = Matrix.from_rows([[1, 2], [4, 5]])
    >>> lu = a.lu()
    >>> lu.det()
    -3.0
    >>> lu.solve(Vector.from_values([5, 14]))
    V[1.0, 2.0]
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import numpy as np

from vecmat._config import get_epsilon
from vecmat._kernel import dense, linalg
from vecmat._typing import ensure_vector
from vecmat.error import (
    InvalidSizeError,
    NotSquareError,
    OperandTypeError,
    check_error,
)
from vecmat.matrix import Matrix
from vecmat.vector import Vector

__all__ = ['LUDecomp', 'QRDecomp']

logger = logging.getLogger("vecmat.decomp")


def _require_matrix(m: Any, what: str) -> Matrix:
    if not isinstance(m, Matrix):
        raise OperandTypeError(f"{what} requires a Matrix, got {type(m).__name__}")
    return m


# =============================================================================
# LU Decomposition
# =============================================================================

class LUDecomp:
    """
    LU factorization with partial pivoting of a square Matrix.

    Mathematical Definition:
        P A = L U, where P is a row permutation, L is unit lower triangular
        and U is upper triangular.

    Pivot selection takes the largest ``|a_rk|`` among rows r >= k; ties go
    to the lowest row index, so the factorization is reproducible.

    Attributes:
        n (int): Order of the matrix
        sign (int): +1 or -1, parity of the row interchanges
        permutation (tuple): Row of A found at each row of ``P A``
        tol (float): Pivots with ``|u_kk| <= tol`` count as zero

    Raises:
        OperandTypeError: If the argument is not a Matrix
        NotSquareError: If the matrix is not square
    """

    __slots__ = ("_lu", "_perm", "_sign", "_tol")

    def __init__(self, matrix: Matrix, tol: Optional[float] = None):
        matrix = _require_matrix(matrix, "LUDecomp")
        if not matrix.is_square:
            raise NotSquareError(
                f"LU decomposition requires a square matrix, got {matrix.rows}x{matrix.cols}"
            )
        self._tol = get_epsilon(tol)

        # Fully materialized private copy before any factorization step
        work = dense.copy(matrix._data)
        self._lu, self._perm, self._sign = linalg.lu_decomp(work)

        if self.is_singular():
            logger.debug("LU decomposition of order %d is singular (tol=%g)", self.n, self._tol)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def n(self) -> int:
        return self._lu.shape[0]

    @property
    def sign(self) -> int:
        return self._sign

    @property
    def permutation(self) -> Tuple[int, ...]:
        return tuple(int(p) for p in self._perm)

    @property
    def tol(self) -> float:
        return self._tol

    def is_singular(self) -> bool:
        """True if any diagonal entry of U is within tolerance of zero."""
        return linalg.lu_singular(self._lu, self._tol)

    def l(self) -> Matrix:  # noqa: E743
        """Unit lower-triangular factor L."""
        lower, _ = linalg.lu_unpack(self._lu)
        return Matrix._from_array(lower)

    def u(self) -> Matrix:
        """Upper-triangular factor U."""
        _, upper = linalg.lu_unpack(self._lu)
        return Matrix._from_array(upper)

    # =========================================================================
    # Queries
    # =========================================================================

    def det(self) -> float:
        """
        Determinant of the source matrix.

        Returns 0.0 when U has a diagonal entry within tolerance of zero.
        """
        if self.is_singular():
            return 0.0
        return linalg.lu_det(self._lu, self._sign)

    def solve(self, b: Any) -> Vector:
        """
        Solve ``A x = b``.

        Args:
            b: Vector (or sequence of numbers) of length n

        Returns:
            Solution vector x of length n

        Raises:
            DimensionMismatchError: If b's length is not n
            SingularMatrixError: If A is singular within tolerance
        """
        b = ensure_vector(b, size=self.n)
        x = dense.alloc_vector(self.n)
        check_error(linalg.lu_solve(self._lu, self._perm, b._data, x, self._tol), "LU solve")
        return Vector.from_values(x)

    def inv(self) -> Matrix:
        """
        Inverse of the source matrix.

        Column j of the result is the solution for the j-th unit basis
        vector.

        Raises:
            SingularMatrixError: If A is singular within tolerance
        """
        n = self.n
        result = Matrix(n, n)
        for j in range(n):
            result.set_col(j, self.solve(Vector.basis_vector(n, j)))
        return result

    def __repr__(self) -> str:
        return f"<LUDecomp n={self.n} sign={self._sign:+d}>"


# =============================================================================
# QR Decomposition
# =============================================================================

class QRDecomp:
    """
    Householder QR factorization of an ``m x n`` Matrix with ``m >= n``.

    Mathematical Definition:
        A = Q R, where Q is ``m x m`` orthogonal and R is ``m x n`` upper
        trapezoidal.

    Raises:
        OperandTypeError: If the argument is not a Matrix
        InvalidSizeError: If the matrix has fewer rows than columns
    """

    __slots__ = ("_r", "_reflectors", "_tol")

    def __init__(self, matrix: Matrix, tol: Optional[float] = None):
        matrix = _require_matrix(matrix, "QRDecomp")
        if matrix.rows < matrix.cols:
            raise InvalidSizeError(
                f"QR decomposition requires rows >= cols, got {matrix.rows}x{matrix.cols}"
            )
        self._tol = get_epsilon(tol)
        work = dense.copy(matrix._data)
        self._r, self._reflectors = linalg.qr_decomp(work)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._r.shape

    @property
    def tol(self) -> float:
        return self._tol

    def is_singular(self) -> bool:
        """True if any diagonal entry of R is within tolerance of zero."""
        return linalg.qr_singular(self._r, self._tol)

    def q(self) -> Matrix:
        """Orthogonal factor Q (m x m)."""
        return Matrix._from_array(linalg.qr_q(self._reflectors, self._r.shape[0]))

    def r(self) -> Matrix:
        """Upper-trapezoidal factor R (m x n)."""
        return Matrix._from_array(np.array(self._r, copy=True))

    def solve(self, b: Any) -> Vector:
        """
        Solve ``A x = b`` for a square A.

        Raises:
            NotSquareError: If A is not square
            DimensionMismatchError: If b's length is not n
            SingularMatrixError: If R has a diagonal entry within tolerance
        """
        m, n = self.shape
        if m != n:
            raise NotSquareError(f"QR solve requires a square matrix, got {m}x{n}; use lstsq")
        return self.lstsq(b)

    def lstsq(self, b: Any) -> Vector:
        """
        Least-squares solution of ``min ||A x - b||``.

        Args:
            b: Vector (or sequence of numbers) of length m

        Returns:
            x of length n

        Raises:
            DimensionMismatchError: If b's length is not m
            SingularMatrixError: If A is rank deficient within tolerance
        """
        m, n = self.shape
        b = ensure_vector(b, size=m)
        x = dense.alloc_vector(n)
        check_error(linalg.qr_lstsq(self._r, self._reflectors, b._data, x, self._tol), "QR solve")
        return Vector.from_values(x)

    def __repr__(self) -> str:
        m, n = self.shape
        return f"<QRDecomp {m}x{n}>"
