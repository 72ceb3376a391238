"""
Dense Container Base Class

This module defines the base class shared by Vector and Matrix. It owns the
float64 storage and implements the behaviour both types have in common:

Type Hierarchy:

    DenseBase
    ├── Vector - 1-D, ``length`` elements
    └── Matrix - 2-D, ``rows x cols`` elements, row-major

Shared Behaviour:

1. Operator dispatch: every overloaded operator classifies its right-hand
   operand once (same container kind, real scalar, other) and forwards to
   the named method; anything else raises OperandTypeError.

2. One arithmetic traversal: copying (``add``) and in-place (``add_``)
   arithmetic both run through ``_binary``/``_broadcast``; the only
   difference is whether the target is the receiver or a fresh copy.

3. Narrow ordering: ``<``, ``<=``, ``>``, ``>=`` and ``compare`` look at the
   element count only. ``==`` compares values element by element.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TypeVar

import numpy as np

from vecmat._display import check_format, inspect
from vecmat._kernel import dense
from vecmat._typing import coerce_real, operand_kind
from vecmat.error import DimensionMismatchError, InvalidSizeError, OperandTypeError

__all__ = ['DenseBase']

DenseT = TypeVar("DenseT", bound="DenseBase")


class DenseBase:
    """
    Base class for dense float64 containers.

    Subclasses set ``_kind`` (the operand kind they accept as "same type"),
    ``_tag`` (the repr prefix) and implement ``_order_key`` and ``to_list``.
    """

    __slots__ = ("_data", "_format")

    _kind = ""
    _tag = ""

    # numpy must defer to our reflected operators instead of broadcasting
    __array_ufunc__ = None

    # Mutable containers are unhashable
    __hash__ = None  # type: ignore[assignment]

    def _wrap(self: DenseT, data: np.ndarray) -> DenseT:
        """Build a new instance of the same type around ``data``."""
        obj = type(self).__new__(type(self))
        obj._data = data
        obj._format = self._format
        return obj

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def format(self) -> str:
        """Per-element printf-style format used by ``str()``."""
        if self._format is not None:
            return self._format
        return self._default_format()

    @format.setter
    def format(self, fmt: Optional[str]) -> None:
        self._format = None if fmt is None else check_format(fmt)

    def _default_format(self) -> str:
        raise NotImplementedError

    def _order_key(self) -> int:
        raise NotImplementedError

    def to_list(self) -> list:
        raise NotImplementedError

    # =========================================================================
    # Operand Dispatch
    # =========================================================================

    def _dispatch(self, other: Any, symbol: str, handlers: Dict[str, Callable[[Any], Any]]) -> Any:
        """Forward ``self <symbol> other`` to the handler for other's kind.

        Args:
            other: Right-hand operand.
            symbol: Operator spelling for the error message.
            handlers: Mapping from operand kind ('vector', 'matrix',
                'scalar') to a one-argument callable.

        Raises:
            OperandTypeError: If other's kind has no handler.
        """
        handler = handlers.get(operand_kind(other))
        if handler is None:
            accepted = " or ".join(sorted(handlers))
            raise OperandTypeError(
                f"unsupported operand for {symbol}: {type(self).__name__} and "
                f"{type(other).__name__} (expected {accepted})"
            )
        return handler(other)

    # =========================================================================
    # Arithmetic Core
    # =========================================================================

    def _check_same_shape(self, other: "DenseBase", what: str) -> None:
        if not isinstance(other, DenseBase) or other._kind != self._kind:
            raise OperandTypeError(
                f"{what} requires a {type(self).__name__}, got {type(other).__name__}"
            )
        if self._data.shape != other._data.shape:
            raise DimensionMismatchError(
                f"{what}: shape {self._shape_str()} does not match {other._shape_str()}"
            )

    def _shape_str(self) -> str:
        return "x".join(str(d) for d in self._data.shape)

    def _binary(self: DenseT, other: DenseT, op: Callable, inplace: bool, what: str) -> DenseT:
        """Element-wise ``op`` with a same-shaped operand.

        The shape check runs before any element is written.
        """
        self._check_same_shape(other, what)
        target = self if inplace else self.copy()
        dense.elementwise(op, target._data, other._data)
        return target

    def _broadcast(self: DenseT, op: Callable, scalar: Any, inplace: bool) -> DenseT:
        """Apply ``op`` with a scalar to every element."""
        k = coerce_real(scalar)
        target = self if inplace else self.copy()
        dense.broadcast(op, target._data, k)
        return target

    # -------------------------------------------------------------------------
    # Scalar operations
    # -------------------------------------------------------------------------

    def scale(self: DenseT, k: Any) -> DenseT:
        """Return a copy with every element multiplied by ``k``."""
        return self._broadcast(dense.MUL, k, inplace=False)

    def scale_(self: DenseT, k: Any) -> DenseT:
        """Multiply every element by ``k`` in place."""
        return self._broadcast(dense.MUL, k, inplace=True)

    def add_scalar(self: DenseT, k: Any) -> DenseT:
        """Return a copy with ``k`` added to every element."""
        return self._broadcast(dense.ADD, k, inplace=False)

    def add_scalar_(self: DenseT, k: Any) -> DenseT:
        """Add ``k`` to every element in place."""
        return self._broadcast(dense.ADD, k, inplace=True)

    def _scalar_div(self: DenseT, k: Any, inplace: bool) -> DenseT:
        k = coerce_real(k)
        if k == 0.0:
            raise ZeroDivisionError(f"{type(self).__name__} division by zero scalar")
        return self._broadcast(dense.DIV, k, inplace=inplace)

    # =========================================================================
    # Whole-container Operations
    # =========================================================================

    def copy(self: DenseT) -> DenseT:
        """Deep copy (shares no storage with self)."""
        return self._wrap(dense.copy(self._data))

    def fill(self: DenseT, value: Any) -> DenseT:
        """Set all elements to ``value``; returns self."""
        dense.fill(self._data, coerce_real(value))
        return self

    def zero(self: DenseT) -> DenseT:
        """Set all elements to 0.0; returns self."""
        dense.fill(self._data, 0.0)
        return self

    def to_numpy(self) -> np.ndarray:
        """Fresh numpy copy of the contents."""
        return dense.copy(self._data)

    def equals(self, other: Any) -> bool:
        """Exact element-wise equality with a container of the same kind."""
        if not isinstance(other, DenseBase) or other._kind != self._kind:
            return False
        return dense.equal(self._data, other._data)

    # -------------------------------------------------------------------------
    # Reductions
    # -------------------------------------------------------------------------

    def _require_elements(self, what: str) -> None:
        if self._data.size == 0:
            raise InvalidSizeError(f"{what} of an empty {type(self).__name__}")

    def sum(self) -> float:
        """Sum of all elements."""
        return dense.total(self._data)

    def mean(self) -> float:
        """Arithmetic mean of all elements."""
        self._require_elements("mean")
        return dense.mean(self._data)

    def max(self) -> float:
        self._require_elements("max")
        return dense.max_value(self._data)

    def min(self) -> float:
        self._require_elements("min")
        return dense.min_value(self._data)

    # =========================================================================
    # Comparison
    # =========================================================================

    def compare(self, other: "DenseBase") -> int:
        """Three-way comparison by element count only (-1, 0 or 1).

        Two containers of equal size compare as 0 even when their values
        differ; use ``==`` for value comparison.
        """
        if not isinstance(other, DenseBase) or other._kind != self._kind:
            raise OperandTypeError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        a, b = self._order_key(), other._order_key()
        return (a > b) - (a < b)

    def _comparable(self, other: Any) -> bool:
        return isinstance(other, DenseBase) and other._kind == self._kind

    def __lt__(self, other: Any) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Any) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Any) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Any) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) >= 0

    def __eq__(self, other: Any) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return not self.equals(other)

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __neg__(self: DenseT) -> DenseT:
        return self.scale(-1.0)

    def __pos__(self: DenseT) -> DenseT:
        return self.copy()

    def __copy__(self: DenseT) -> DenseT:
        return self.copy()

    def __deepcopy__(self: DenseT, memo: dict) -> DenseT:
        return self.copy()

    def __repr__(self) -> str:
        return inspect(self._tag, self.to_list())
