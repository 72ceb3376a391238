"""
Error handling for vecmat.

Every failure raised by the containers carries an integer code and derives
from both :class:`VecmatError` and the closest builtin exception, so callers
may catch either ``vecmat.DimensionMismatchError`` or plain ``ValueError``.
"""

from __future__ import annotations

from typing import Dict, Optional, Type


# =============================================================================
# Error Codes
# =============================================================================

# Success
VECMAT_OK = 0

# Construction errors (10-19)
VECMAT_ERROR_INVALID_SIZE = 10

# Access errors (20-29)
VECMAT_ERROR_INDEX_OUT_OF_RANGE = 20

# Operand errors (30-39)
VECMAT_ERROR_DIMENSION_MISMATCH = 30
VECMAT_ERROR_TYPE_ERROR = 31

# Decomposition errors (40-49)
VECMAT_ERROR_NOT_SQUARE = 40
VECMAT_ERROR_SINGULAR_MATRIX = 41

# Display errors (50-59)
VECMAT_ERROR_INVALID_FORMAT = 50


# Error code to message mapping
_ERROR_MESSAGES = {
    VECMAT_OK: "Success",
    VECMAT_ERROR_INVALID_SIZE: "Invalid size",
    VECMAT_ERROR_INDEX_OUT_OF_RANGE: "Index out of range",
    VECMAT_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    VECMAT_ERROR_TYPE_ERROR: "Type error",
    VECMAT_ERROR_NOT_SQUARE: "Matrix is not square",
    VECMAT_ERROR_SINGULAR_MATRIX: "Singular matrix",
    VECMAT_ERROR_INVALID_FORMAT: "Invalid element format",
}


# =============================================================================
# Exception Classes
# =============================================================================

class VecmatError(Exception):
    """
    Base exception for all vecmat errors.

    Subclasses fix ``code``; the message defaults to the text registered
    for that code.
    """

    code: int = VECMAT_OK

    OK = VECMAT_OK
    ERROR_INVALID_SIZE = VECMAT_ERROR_INVALID_SIZE
    ERROR_INDEX_OUT_OF_RANGE = VECMAT_ERROR_INDEX_OUT_OF_RANGE
    ERROR_DIMENSION_MISMATCH = VECMAT_ERROR_DIMENSION_MISMATCH
    ERROR_TYPE_ERROR = VECMAT_ERROR_TYPE_ERROR
    ERROR_NOT_SQUARE = VECMAT_ERROR_NOT_SQUARE
    ERROR_SINGULAR_MATRIX = VECMAT_ERROR_SINGULAR_MATRIX
    ERROR_INVALID_FORMAT = VECMAT_ERROR_INVALID_FORMAT

    def __init__(self, message: Optional[str] = None):
        """
        Create a vecmat exception.

        Args:
            message: Optional detailed message. Falls back to the generic
                text for the class' error code.
        """
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "VecmatError":
        """Create the exception registered for ``code`` with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return error_for_code(code)(msg)


class InvalidSizeError(VecmatError, ValueError):
    """Non-positive or otherwise invalid dimension."""
    code = VECMAT_ERROR_INVALID_SIZE


class IndexOutOfRangeError(VecmatError, IndexError):
    """Element index outside the container bounds."""
    code = VECMAT_ERROR_INDEX_OUT_OF_RANGE


class DimensionMismatchError(VecmatError, ValueError):
    """Operands with incompatible shapes."""
    code = VECMAT_ERROR_DIMENSION_MISMATCH


class OperandTypeError(VecmatError, TypeError):
    """Operand is not a Vector, Matrix or real number as required."""
    code = VECMAT_ERROR_TYPE_ERROR


class NotSquareError(VecmatError, ValueError):
    """Square matrix required."""
    code = VECMAT_ERROR_NOT_SQUARE


class SingularMatrixError(VecmatError, ArithmeticError):
    """Factorization has a pivot within tolerance of zero."""
    code = VECMAT_ERROR_SINGULAR_MATRIX


class InvalidFormatError(VecmatError, ValueError):
    """Display format that does not render exactly one float."""
    code = VECMAT_ERROR_INVALID_FORMAT


_ERROR_CLASSES: Dict[int, Type[VecmatError]] = {
    cls.code: cls
    for cls in (
        InvalidSizeError,
        IndexOutOfRangeError,
        DimensionMismatchError,
        OperandTypeError,
        NotSquareError,
        SingularMatrixError,
        InvalidFormatError,
    )
}


# =============================================================================
# Error Checking Functions
# =============================================================================

def error_for_code(code: int) -> Type[VecmatError]:
    """
    Get the exception class registered for an error code.

    Unknown codes map to the base :class:`VecmatError`.
    """
    return _ERROR_CLASSES.get(code, VecmatError)


def check_error(code: int, context: str = "") -> None:
    """
    Check error code and raise exception if not OK.

    Args:
        code: Error code returned by a kernel routine
        context: Optional context message for better error reporting

    Raises:
        VecmatError: Subclass matching ``code`` if it indicates an error
    """
    if code == VECMAT_OK:
        return
    raise VecmatError.from_code(code, context)
