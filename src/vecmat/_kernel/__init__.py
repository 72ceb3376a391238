"""vecmat Private Kernel (_kernel).

This is a private package that provides the low-level dense primitives the
public containers are built on.

Architecture:
    - numpy float64 arrays as storage (C-contiguous, row-major)
    - Minimal functions close to a BLAS/LAPACK-style API
    - Status codes instead of exceptions for numeric failures
    - Used as foundation for high-level public API

Design Principles:
    - Kernels never validate shapes: callers check before calling
    - Output arrays are passed in and written in place where possible
    - Google-style docstrings with type hints
    - One module per concern

Modules:
    - dense: Storage allocation, element-wise ops and reductions
    - blas: Dot product, matrix-vector and matrix-matrix products
    - linalg: LU and QR factorizations with their solvers

Usage (Internal only):
    >>> from vecmat._kernel import dense, blas
    >>> a = dense.from_sequence([1.0, 2.0, 3.0])
    >>> blas.dot(a, a)
    14.0
"""

from . import dense
from . import blas
from . import linalg

__all__ = [
    'dense',
    'blas',
    'linalg',
]
