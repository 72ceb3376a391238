"""
Factorization Kernels

LU decomposition with partial pivoting and Householder QR, plus the
triangular solvers built on them. Solvers report failures through status
codes (see vecmat.error); they never raise for numeric conditions.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..error import VECMAT_OK, VECMAT_ERROR_SINGULAR_MATRIX

__all__ = [
    'lu_decomp',
    'lu_singular',
    'lu_det',
    'lu_solve',
    'lu_unpack',
    'qr_decomp',
    'qr_singular',
    'qr_apply_qt',
    'qr_q',
    'qr_lstsq',
]

logger = logging.getLogger("vecmat.kernel.linalg")


# =============================================================================
# LU Decomposition
# =============================================================================

def lu_decomp(work: np.ndarray) -> Tuple[np.ndarray, np.ndarray, int]:
    """Factorize ``P A = L U`` in place with partial pivoting.

    Algorithm:
        For each pivot column k the row r >= k holding the largest
        ``|work[r, k]|`` becomes the pivot row; among equal magnitudes the
        lowest row index wins. Multipliers are stored below the diagonal
        (unit diagonal of L implied), U occupies the diagonal and above.

    A zero pivot column is skipped instead of failing, so a singular matrix
    still yields a complete factorization; singularity is reported by the
    solvers.

    Args:
        work: Square working copy of A; overwritten with the combined LU.

    Returns:
        Tuple of (lu, perm, sign) where ``perm[i]`` is the row of A that
        ended up in row i of ``P A`` and ``sign`` is +1 or -1.
    """
    n = work.shape[0]
    perm = np.arange(n)
    sign = 1

    for k in range(n):
        # np.argmax returns the first maximal entry -> lowest row index
        r = k + int(np.argmax(np.abs(work[k:, k])))
        if r != k:
            work[[k, r]] = work[[r, k]]
            perm[[k, r]] = perm[[r, k]]
            sign = -sign

        pivot = work[k, k]
        if pivot == 0.0:
            continue

        work[k + 1:, k] /= pivot
        work[k + 1:, k + 1:] -= np.outer(work[k + 1:, k], work[k, k + 1:])

    logger.debug("LU decomposition of order %d, sign %+d", n, sign)
    return work, perm, sign


def lu_singular(lu: np.ndarray, tol: float) -> bool:
    """True if any diagonal entry of U satisfies ``|u_kk| <= tol``."""
    return bool(np.any(np.abs(np.diagonal(lu)) <= tol))


def lu_det(lu: np.ndarray, sign: int) -> float:
    """Determinant: product of U's diagonal times the permutation sign."""
    return float(sign * np.prod(np.diagonal(lu)))


def lu_solve(
    lu: np.ndarray,
    perm: np.ndarray,
    b: np.ndarray,
    x: np.ndarray,
    tol: float,
) -> int:
    """Solve ``A x = b`` from a factorization produced by lu_decomp.

    Forward substitution solves ``L y = P b``, backward substitution solves
    ``U x = y``.

    Args:
        lu: Combined LU factors.
        perm: Row permutation from lu_decomp.
        b: Right-hand side of length n.
        x: Output vector of length n (written in place).
        tol: Singularity tolerance for U's diagonal.

    Returns:
        VECMAT_OK, or VECMAT_ERROR_SINGULAR_MATRIX (``x`` left untouched).
    """
    if lu_singular(lu, tol):
        return VECMAT_ERROR_SINGULAR_MATRIX

    n = lu.shape[0]
    y = np.array(b[perm], dtype=np.float64)

    for i in range(1, n):
        y[i] -= np.dot(lu[i, :i], y[:i])

    for i in range(n - 1, -1, -1):
        y[i] = (y[i] - np.dot(lu[i, i + 1:], y[i + 1:])) / lu[i, i]

    x[:] = y
    return VECMAT_OK


def lu_unpack(lu: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Split combined storage into (unit lower L, upper U)."""
    lower = np.tril(lu, -1)
    np.fill_diagonal(lower, 1.0)
    upper = np.triu(lu)
    return np.ascontiguousarray(lower), np.ascontiguousarray(upper)


# =============================================================================
# QR Decomposition (Householder)
# =============================================================================

def qr_decomp(work: np.ndarray) -> Tuple[np.ndarray, List[Optional[np.ndarray]]]:
    """Householder QR of an m x n matrix with m >= n.

    Reflector k is ``H_k = I - 2 v_k v_k^T`` acting on rows k..m-1, with
    ``v_k`` of unit length. ``Q = H_0 H_1 ... H_{n-1}``.

    Args:
        work: Working copy of A; overwritten with R (zeros below diagonal).

    Returns:
        Tuple of (r, reflectors). A reflector is None when the column below
        the diagonal was already zero.
    """
    m, n = work.shape
    reflectors: List[Optional[np.ndarray]] = []

    for k in range(n):
        x = work[k:, k]
        norm_x = float(np.linalg.norm(x))
        if norm_x == 0.0:
            reflectors.append(None)
            continue

        alpha = -norm_x if x[0] >= 0.0 else norm_x
        v = x.copy()
        v[0] -= alpha
        norm_v = float(np.linalg.norm(v))
        if norm_v == 0.0:
            reflectors.append(None)
            continue
        v /= norm_v

        work[k:, k:] -= 2.0 * np.outer(v, v @ work[k:, k:])
        work[k + 1:, k] = 0.0
        reflectors.append(v)

    logger.debug("QR decomposition of %dx%d", m, n)
    return work, reflectors


def qr_singular(r: np.ndarray, tol: float) -> bool:
    """True if any ``|R[k, k]| <= tol`` for k < n."""
    return bool(np.any(np.abs(np.diagonal(r)) <= tol))


def qr_apply_qt(reflectors: List[Optional[np.ndarray]], b: np.ndarray) -> np.ndarray:
    """Return ``Q^T b`` as a fresh vector."""
    c = np.array(b, dtype=np.float64)
    for k, v in enumerate(reflectors):
        if v is not None:
            c[k:] -= 2.0 * v * np.dot(v, c[k:])
    return c


def qr_q(reflectors: List[Optional[np.ndarray]], m: int) -> np.ndarray:
    """Accumulate the full m x m orthogonal factor Q."""
    q = np.eye(m, dtype=np.float64)
    for k in range(len(reflectors) - 1, -1, -1):
        v = reflectors[k]
        if v is not None:
            q[k:, :] -= 2.0 * np.outer(v, v @ q[k:, :])
    return q


def qr_lstsq(
    r: np.ndarray,
    reflectors: List[Optional[np.ndarray]],
    b: np.ndarray,
    x: np.ndarray,
    tol: float,
) -> int:
    """Least-squares solution of ``min ||A x - b||`` (exact when A is square).

    Args:
        r: R factor from qr_decomp (m x n).
        reflectors: Householder vectors from qr_decomp.
        b: Right-hand side of length m.
        x: Output vector of length n (written in place).
        tol: Singularity tolerance for R's diagonal.

    Returns:
        VECMAT_OK, or VECMAT_ERROR_SINGULAR_MATRIX (``x`` left untouched).
    """
    if qr_singular(r, tol):
        return VECMAT_ERROR_SINGULAR_MATRIX

    n = r.shape[1]
    c = qr_apply_qt(reflectors, b)[:n]

    for i in range(n - 1, -1, -1):
        c[i] = (c[i] - np.dot(r[i, i + 1:n], c[i + 1:])) / r[i, i]

    x[:] = c
    return VECMAT_OK
