"""
vecmat Vector - Fixed-length Dense Vector

Types:
    - Vector: ``length`` doubles, zero-initialized unless values are given

Usage:
    v = Vector(3)                    # V[0.0, 0.0, 0.0]
    w = Vector.from_values([1, 2, 3])
    w[0] = 4.5                       # bounds-checked assignment
    w + 1                            # copy, scalar broadcast
    w += v                           # in place, element-wise
    w @ v                            # dot product
    w.median()                       # 50th percentile, linear interpolation
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Sequence, Union

import numpy as np

from vecmat._base import DenseBase
from vecmat._config import config
from vecmat._display import render_column
from vecmat._kernel import blas, dense
from vecmat._typing import (
    check_index,
    check_size,
    coerce_real,
    coerce_reals,
)
from vecmat.error import InvalidSizeError

if TYPE_CHECKING:
    from vecmat.matrix import Matrix

__all__ = ['Vector']


class Vector(DenseBase):
    """
    Ordered, fixed-length sequence of doubles.

    The length is fixed at construction. Indices must lie in
    ``[0, length)``; negative indices are rejected rather than counted
    from the end.

    Attributes:
        length (int): Number of elements (also ``size`` and ``len(v)``)
        format (str): printf-style element format used by ``str(v)``

    Example:
        >>> v = Vector.from_values([1, 2, 3])
        >>> v + Vector.from_values([3, 2, 1])
        V[4.0, 4.0, 4.0]
        >>> v.dot(Vector.from_values([3, 2, 1]))
        10.0
    """

    __slots__ = ()

    _kind = "vector"
    _tag = "V"

    def __init__(self, n: int, *, format: Optional[str] = None):
        """
        Allocate a zero-filled vector.

        Args:
            n: Number of elements (>= 0)
            format: Optional per-instance element format

        Raises:
            InvalidSizeError: If n is not a non-negative integer
        """
        n = check_size(n, "length", minimum=0)
        self._data = dense.alloc_vector(n)
        self._format = None
        if format is not None:
            self.format = format

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_values(cls, values: Union[Sequence[Any], np.ndarray]) -> "Vector":
        """
        Create a vector holding ``values`` converted to float.

        Raises:
            OperandTypeError: If any element is not numeric-convertible
        """
        v = cls.__new__(cls)
        v._data = dense.from_sequence(coerce_reals(values))
        v._format = None
        return v

    @classmethod
    def basis_vector(cls, n: int, i: int) -> "Vector":
        """Unit vector of length n with a 1.0 at position i."""
        return cls(n).basis(i)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def length(self) -> int:
        """Number of elements."""
        return self._data.shape[0]

    size = length

    def _order_key(self) -> int:
        return self.length

    def _default_format(self) -> str:
        return config.display.vector_format

    # =========================================================================
    # Element Access
    # =========================================================================

    def get(self, i: int) -> float:
        """Element at index i (0 <= i < length)."""
        return float(self._data[check_index(i, self.length)])

    def set(self, i: int, value: Any) -> None:
        """Assign ``float(value)`` at index i (0 <= i < length)."""
        i = check_index(i, self.length)
        self._data[i] = coerce_real(value)

    def __getitem__(self, i: int) -> float:
        return self.get(i)

    def __setitem__(self, i: int, value: Any) -> None:
        self.set(i, value)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[float]:
        """Iterate over elements in index order; restartable."""
        for i in range(self.length):
            yield float(self._data[i])

    def to_list(self) -> List[float]:
        """Convert to Python list."""
        return [float(x) for x in self._data]

    # =========================================================================
    # Element-wise Arithmetic
    # =========================================================================

    def add(self, other: "Vector") -> "Vector":
        """Element-wise sum as a new vector."""
        return self._binary(other, dense.ADD, inplace=False, what="add")

    def add_(self, other: "Vector") -> "Vector":
        """Element-wise sum in place; returns self."""
        return self._binary(other, dense.ADD, inplace=True, what="add_")

    def sub(self, other: "Vector") -> "Vector":
        """Element-wise difference as a new vector."""
        return self._binary(other, dense.SUB, inplace=False, what="sub")

    def sub_(self, other: "Vector") -> "Vector":
        """Element-wise difference in place; returns self."""
        return self._binary(other, dense.SUB, inplace=True, what="sub_")

    def mul(self, other: "Vector") -> "Vector":
        """Element-wise (Hadamard) product as a new vector."""
        return self._binary(other, dense.MUL, inplace=False, what="mul")

    def mul_(self, other: "Vector") -> "Vector":
        """Element-wise (Hadamard) product in place; returns self."""
        return self._binary(other, dense.MUL, inplace=True, what="mul_")

    def div(self, other: "Vector") -> "Vector":
        """Element-wise quotient as a new vector (IEEE semantics for 0)."""
        return self._binary(other, dense.DIV, inplace=False, what="div")

    def div_(self, other: "Vector") -> "Vector":
        """Element-wise quotient in place; returns self."""
        return self._binary(other, dense.DIV, inplace=True, what="div_")

    def dot(self, other: "Vector") -> float:
        """Sum of element-wise products of two equal-length vectors."""
        self._check_same_shape(other, "dot")
        return blas.dot(self._data, other._data)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "Vector":
        return self._dispatch(other, "+", {"vector": self.add, "scalar": self.add_scalar})

    def __sub__(self, other: Any) -> "Vector":
        return self._dispatch(
            other, "-", {"vector": self.sub, "scalar": lambda k: self.add_scalar(-coerce_real(k))}
        )

    def __mul__(self, other: Any) -> "Vector":
        return self._dispatch(other, "*", {"vector": self.mul, "scalar": self.scale})

    def __truediv__(self, other: Any) -> "Vector":
        return self._dispatch(
            other, "/", {"vector": self.div, "scalar": lambda k: self._scalar_div(k, inplace=False)}
        )

    def __matmul__(self, other: Any) -> float:
        return self._dispatch(other, "@", {"vector": self.dot})

    def __iadd__(self, other: Any) -> "Vector":
        return self._dispatch(other, "+=", {"vector": self.add_, "scalar": self.add_scalar_})

    def __isub__(self, other: Any) -> "Vector":
        return self._dispatch(
            other, "-=", {"vector": self.sub_, "scalar": lambda k: self.add_scalar_(-coerce_real(k))}
        )

    def __imul__(self, other: Any) -> "Vector":
        return self._dispatch(other, "*=", {"vector": self.mul_, "scalar": self.scale_})

    def __itruediv__(self, other: Any) -> "Vector":
        return self._dispatch(
            other, "/=", {"vector": self.div_, "scalar": lambda k: self._scalar_div(k, inplace=True)}
        )

    def __radd__(self, other: Any) -> "Vector":
        return self._dispatch(other, "+", {"scalar": self.add_scalar})

    def __rsub__(self, other: Any) -> "Vector":
        return self._dispatch(other, "-", {"scalar": lambda k: self.scale(-1.0).add_scalar_(k)})

    def __rmul__(self, other: Any) -> "Vector":
        return self._dispatch(other, "*", {"scalar": self.scale})

    # =========================================================================
    # Reductions
    # =========================================================================

    def quantile(self, q: float = 0.5) -> float:
        """
        Quantile of the elements with linear interpolation.

        The rank ``(length - 1) * q`` selects an order statistic; ranks that
        fall between two order statistics interpolate linearly.

        Args:
            q: Fraction in [0, 1]

        Raises:
            ValueError: If q is outside [0, 1]
            InvalidSizeError: If the vector is empty
        """
        q = coerce_real(q)
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"quantile fraction must be in [0, 1], got {q}")
        self._require_elements("quantile")
        return dense.quantile(self._data, q)

    def median(self) -> float:
        """50th percentile."""
        return self.quantile(0.5)

    def argmax(self) -> int:
        """Index of the first maximal element."""
        self._require_elements("argmax")
        return dense.argmax(self._data)[0]

    def argmin(self) -> int:
        """Index of the first minimal element."""
        self._require_elements("argmin")
        return dense.argmin(self._data)[0]

    # =========================================================================
    # In-place Rearrangement
    # =========================================================================

    def basis(self, i: int) -> "Vector":
        """Overwrite with the i-th unit basis vector; returns self."""
        i = check_index(i, self.length)
        dense.set_basis(self._data, i)
        return self

    def swap(self, i: int, j: int) -> "Vector":
        """Exchange elements i and j; returns self."""
        i = check_index(i, self.length)
        j = check_index(j, self.length)
        dense.swap_elements(self._data, i, j)
        return self

    def reverse(self) -> "Vector":
        """Reverse element order in place; returns self."""
        dense.reverse(self._data)
        return self

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_matrix(self) -> "Matrix":
        """``length x 1`` column matrix (fresh copy, no aliasing)."""
        from vecmat.matrix import Matrix

        if self.length == 0:
            raise InvalidSizeError("Cannot convert an empty Vector to a Matrix")
        return Matrix._from_array(dense.copy(self._data).reshape(self.length, 1))

    def t(self) -> "Matrix":
        """``1 x length`` row matrix."""
        return self.to_matrix().transpose()

    def __str__(self) -> str:
        return render_column(self, self.format)
