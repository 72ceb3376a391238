"""
vecmat Type Definitions and Coercion Helpers.

This module provides the type aliases, operand classification and argument
validation shared by Vector, Matrix, the decompositions and the circular
buffer. It handles transparently:

    - Native vecmat types (Vector, Matrix)
    - NumPy arrays (ndarray, numpy scalars)
    - Python sequences and numbers

Example:
    >>> from vecmat._typing import coerce_real, operand_kind
    >>> coerce_real(3)
    3.0
    >>> operand_kind(2.5)
    'scalar'
"""

from __future__ import annotations

import numbers
from typing import (
    TYPE_CHECKING,
    Any,
    List,
    Sequence,
    Union,
)

import numpy as np

from vecmat.error import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidSizeError,
    OperandTypeError,
)

if TYPE_CHECKING:
    from vecmat.vector import Vector


# =============================================================================
# Type Aliases
# =============================================================================

Real = Union[int, float, np.floating, np.integer]
VectorInput = Union["Vector", Sequence[Real], np.ndarray]


# =============================================================================
# Operand Classification
# =============================================================================

def is_real_scalar(obj: Any) -> bool:
    """Check if object is a real number usable as a broadcast scalar.

    Args:
        obj: Object to check.

    Returns:
        True for Python/NumPy integers and floats (bool included).
    """
    return isinstance(obj, numbers.Real)


def is_vector(obj: Any) -> bool:
    """Check if object is a native Vector."""
    from vecmat.vector import Vector
    return isinstance(obj, Vector)


def is_matrix(obj: Any) -> bool:
    """Check if object is a native Matrix."""
    from vecmat.matrix import Matrix
    return isinstance(obj, Matrix)


def operand_kind(obj: Any) -> str:
    """Classify an arithmetic operand.

    Args:
        obj: Right-hand operand of an operator.

    Returns:
        'vector', 'matrix', 'scalar' or 'unknown'.
    """
    if is_vector(obj):
        return "vector"
    elif is_matrix(obj):
        return "matrix"
    elif is_real_scalar(obj):
        return "scalar"
    else:
        return "unknown"


# =============================================================================
# Coercion
# =============================================================================

def coerce_real(value: Any) -> float:
    """Convert a numeric-convertible value to float.

    Strings and bytes are rejected even when they look numeric.

    Raises:
        OperandTypeError: If value cannot be converted.
    """
    if isinstance(value, (str, bytes, bytearray)):
        raise OperandTypeError(f"Expected a number, got {type(value).__name__}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise OperandTypeError(
            f"Expected a number, got {type(value).__name__}"
        ) from exc


def coerce_reals(values: Any) -> List[float]:
    """Convert an iterable of numbers to a list of floats."""
    if isinstance(values, np.ndarray):
        values = values.ravel().tolist()
    if isinstance(values, (str, bytes, bytearray)):
        raise OperandTypeError("Expected a sequence of numbers, got a string")
    try:
        items = list(values)
    except TypeError as exc:
        raise OperandTypeError(
            f"Expected a sequence of numbers, got {type(values).__name__}"
        ) from exc
    return [coerce_real(v) for v in items]


def ensure_vector(vec: VectorInput, size: Union[int, None] = None) -> "Vector":
    """Convert any vector input to a Vector.

    Args:
        vec: Vector, numpy array or sequence of numbers.
        size: Expected length (for validation).

    Returns:
        ``vec`` itself when it already is a Vector, otherwise a new one.

    Raises:
        DimensionMismatchError: If the length doesn't match ``size``.
    """
    from vecmat.vector import Vector

    if isinstance(vec, Vector):
        result = vec
    else:
        result = Vector.from_values(coerce_reals(vec))

    if size is not None and result.length != size:
        raise DimensionMismatchError(f"Vector length {result.length} != expected {size}")

    return result


# =============================================================================
# Validation
# =============================================================================

def check_size(n: Any, name: str = "size", minimum: int = 1) -> int:
    """Validate a dimension argument.

    Args:
        n: Candidate dimension.
        name: Argument name used in the error message.
        minimum: Smallest accepted value.

    Returns:
        ``n`` as int.

    Raises:
        InvalidSizeError: If n is not an integer or is below ``minimum``.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidSizeError(f"{name} must be an integer, got {type(n).__name__}")
    n = int(n)
    if n < minimum:
        raise InvalidSizeError(f"{name} must be >= {minimum}, got {n}")
    return n


def check_index(i: Any, bound: int, axis: str = "index") -> int:
    """Validate an element index against ``[0, bound)``.

    Negative indices are out of range; they do not count from the end.

    Raises:
        OperandTypeError: If i is not an integer.
        IndexOutOfRangeError: If i is outside ``[0, bound)``.
    """
    if isinstance(i, bool) or not isinstance(i, numbers.Integral):
        raise OperandTypeError(f"{axis} must be an integer, got {type(i).__name__}")
    i = int(i)
    if i < 0 or i >= bound:
        raise IndexOutOfRangeError(f"{axis} {i} out of range [0, {bound})")
    return i
