"""
Dense Storage Kernels

Allocation, element-wise arithmetic and reductions over float64 arrays.
"""

import math
import operator
from typing import Callable, Iterable, Tuple

import numpy as np

__all__ = [
    'REAL',
    'alloc_vector',
    'alloc_matrix',
    'from_sequence',
    'copy',
    'fill',
    'set_basis',
    'set_identity',
    'elementwise',
    'broadcast',
    'equal',
    'total',
    'mean',
    'quantile_sorted',
    'quantile',
    'max_value',
    'min_value',
    'argmax',
    'argmin',
    'swap_elements',
    'reverse',
    'transpose',
    'ADD',
    'SUB',
    'MUL',
    'DIV',
]

REAL = np.float64

# Element-wise operators understood by elementwise() / broadcast()
ADD = operator.add
SUB = operator.sub
MUL = operator.mul
DIV = operator.truediv

_UFUNCS = {
    ADD: np.add,
    SUB: np.subtract,
    MUL: np.multiply,
    DIV: np.divide,
}


# =============================================================================
# Allocation
# =============================================================================

def alloc_vector(n: int) -> np.ndarray:
    """Allocate a zero-filled vector of ``n`` doubles."""
    return np.zeros(n, dtype=REAL)


def alloc_matrix(rows: int, cols: int) -> np.ndarray:
    """Allocate a zero-filled ``rows x cols`` matrix (row-major)."""
    return np.zeros((rows, cols), dtype=REAL)


def from_sequence(values: Iterable[float]) -> np.ndarray:
    """Copy already-coerced floats into fresh storage."""
    return np.array(list(values), dtype=REAL)


def copy(src: np.ndarray) -> np.ndarray:
    """Deep copy; the result never aliases ``src``."""
    return np.array(src, dtype=REAL, copy=True, order='C')


def fill(dst: np.ndarray, value: float) -> None:
    """Set every element of ``dst`` to ``value``."""
    dst.fill(value)


def set_basis(dst: np.ndarray, i: int) -> None:
    """Turn ``dst`` into the i-th unit basis vector."""
    dst.fill(0.0)
    dst[i] = 1.0


def set_identity(dst: np.ndarray) -> None:
    """Ones on the main diagonal, zeros elsewhere (any shape)."""
    dst.fill(0.0)
    np.fill_diagonal(dst, 1.0)


# =============================================================================
# Element-wise Arithmetic
# =============================================================================

def elementwise(op: Callable, target: np.ndarray, operand: np.ndarray) -> np.ndarray:
    """Apply ``target = op(target, operand)`` element by element.

    This is the single traversal used by both the copying and the in-place
    arithmetic of the containers: callers pass either their own storage or
    a fresh copy as ``target``.

    Args:
        op: One of ADD, SUB, MUL, DIV.
        target: Array written in place.
        operand: Array of identical shape.

    Returns:
        ``target``.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        _UFUNCS[op](target, operand, out=target)
    return target


def broadcast(op: Callable, target: np.ndarray, scalar: float) -> np.ndarray:
    """Apply ``target = op(target, scalar)`` to every element."""
    _UFUNCS[op](target, scalar, out=target)
    return target


def equal(a: np.ndarray, b: np.ndarray) -> bool:
    """Exact element-wise equality of two same-shaped arrays."""
    return a.shape == b.shape and bool(np.array_equal(a, b))


# =============================================================================
# Reductions
# =============================================================================

def total(a: np.ndarray) -> float:
    """Sum of all elements (0.0 when empty)."""
    return float(np.sum(a))


def mean(a: np.ndarray) -> float:
    """Arithmetic mean of a non-empty array."""
    return float(np.sum(a)) / a.size


def quantile_sorted(sorted_data: np.ndarray, q: float) -> float:
    """Quantile of ascending data with linear interpolation.

    The rank is ``(n - 1) * q``; for a non-integral rank the result
    interpolates between the two neighbouring order statistics.

    Args:
        sorted_data: Non-empty, ascending 1-D array.
        q: Fraction in [0, 1].

    Returns:
        The interpolated quantile.
    """
    n = sorted_data.size
    index = (n - 1) * q
    lhs = int(math.floor(index))
    delta = index - lhs
    if lhs + 1 >= n or delta == 0.0:
        return float(sorted_data[lhs])
    return float((1.0 - delta) * sorted_data[lhs] + delta * sorted_data[lhs + 1])


def quantile(a: np.ndarray, q: float) -> float:
    """Quantile of unsorted data (sorts a copy)."""
    return quantile_sorted(np.sort(a, axis=None), q)


def max_value(a: np.ndarray) -> float:
    return float(np.max(a))


def min_value(a: np.ndarray) -> float:
    return float(np.min(a))


def argmax(a: np.ndarray) -> Tuple[int, ...]:
    """Position of the first maximum, as an index tuple in ``a``'s shape."""
    return tuple(int(i) for i in np.unravel_index(int(np.argmax(a)), a.shape))


def argmin(a: np.ndarray) -> Tuple[int, ...]:
    """Position of the first minimum, as an index tuple in ``a``'s shape."""
    return tuple(int(i) for i in np.unravel_index(int(np.argmin(a)), a.shape))


# =============================================================================
# Rearrangement
# =============================================================================

def swap_elements(a: np.ndarray, i: int, j: int) -> None:
    """Swap two elements of a vector, or two rows of a matrix."""
    if i != j:
        a[[i, j]] = a[[j, i]]


def reverse(a: np.ndarray) -> None:
    """Reverse a vector in place."""
    a[:] = a[::-1].copy()


def transpose(a: np.ndarray) -> np.ndarray:
    """Fresh, contiguous transpose of a matrix."""
    return np.ascontiguousarray(a.T, dtype=REAL)
