"""
vecmat - Lightweight numeric containers

Small dense linear algebra for scripting and I/O control code:
- Vector: fixed-length float64 vector with arithmetic and reductions
- Matrix: fixed-size float64 matrix, row-major
- LUDecomp / QRDecomp: factorizations for determinants, inverses and solves
- CircularBuffer: fixed-capacity ring for streaming samples

Modules:
- vector, matrix, decomp, buffer: public container types
- error: exception hierarchy and error codes
- _kernel: numpy-backed storage and arithmetic primitives (private)

Example:
    >>> import vecmat
    >>> v = vecmat.vector([1, 2, 3])
    >>> m = vecmat.matrix([[1, 2, 3], [4, 5, 6]])
    >>> m * v
    V[14.0, 32.0]
    >>> vecmat.matrix([[1, 2], [4, 5]]).lu().det()
    -3.0
    >>>
    >>> # Looser singularity tolerance for one block
    >>> with vecmat.config.local(compute=vecmat.ComputeConfig(epsilon=1e-6)):
    ...     pass
"""

__version__ = '0.1.0'

import logging
from typing import Any

from ._config import (
    ComputeConfig,
    DisplayConfig,
    VecmatConfig,
    config,
    get_config,
    set_epsilon,
    set_format,
)
from .error import (
    VecmatError,
    InvalidSizeError,
    IndexOutOfRangeError,
    DimensionMismatchError,
    OperandTypeError,
    NotSquareError,
    SingularMatrixError,
    InvalidFormatError,
    check_error,
    error_for_code,
)
from .vector import Vector
from .matrix import Matrix
from .decomp import LUDecomp, QRDecomp
from .buffer import CircularBuffer

logging.getLogger(__name__).addHandler(logging.NullHandler())


def vector(values: Any) -> Vector:
    """Vector literal: ``vector([1, 2, 3])``."""
    return Vector.from_values(values)


def matrix(rows: Any) -> Matrix:
    """Matrix literal: ``matrix([[1, 2], [3, 4]])``."""
    return Matrix.from_rows(rows)


__all__ = [
    # Version
    "__version__",
    # Containers
    "Vector",
    "Matrix",
    "LUDecomp",
    "QRDecomp",
    "CircularBuffer",
    "vector",
    "matrix",
    # Error handling
    "VecmatError",
    "InvalidSizeError",
    "IndexOutOfRangeError",
    "DimensionMismatchError",
    "OperandTypeError",
    "NotSquareError",
    "SingularMatrixError",
    "InvalidFormatError",
    "check_error",
    "error_for_code",
    # Configuration
    "ComputeConfig",
    "DisplayConfig",
    "VecmatConfig",
    "config",
    "get_config",
    "set_epsilon",
    "set_format",
]
