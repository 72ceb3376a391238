"""
Linear Algebra Kernels

Dot product, matrix-vector and matrix-matrix products on float64 storage.
"""

import numpy as np

__all__ = [
    'dot',
    'gemv',
    'gemm',
]


def dot(x: np.ndarray, y: np.ndarray) -> float:
    """Sum of element-wise products of two equal-length vectors."""
    return float(np.dot(x, y))


def gemv(a: np.ndarray, x: np.ndarray) -> np.ndarray:
    """Matrix-vector product.

    Computes ``y[i] = sum(a[i, j] * x[j] for j in range(cols))``.

    Args:
        a: Matrix of shape (rows, cols).
        x: Vector of length cols.

    Returns:
        Fresh vector of length rows.
    """
    return np.ascontiguousarray(np.dot(a, x), dtype=np.float64)


def gemm(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Matrix-matrix product.

    Computes ``c[i, k] = sum(a[i, j] * b[j, k] for j in range(a.cols))``.

    Args:
        a: Matrix of shape (m, n).
        b: Matrix of shape (n, p).

    Returns:
        Fresh matrix of shape (m, p).
    """
    return np.ascontiguousarray(np.dot(a, b), dtype=np.float64)
