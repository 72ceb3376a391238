"""
vecmat CircularBuffer - Fixed-capacity Ring of Samples

Usage:
    buf = CircularBuffer(3)     # B[0.0, 0.0, 0.0]
    buf << 1.0                  # same as buf.push(1.0)
    buf.extend([2.0, 3.0, 4.0])
    buf[0]                      # 2.0, the oldest retained sample
    buf[-1]                     # 4.0, the newest sample
    buf[1000]                   # never raises: indices wrap around
"""

from __future__ import annotations

import numbers
from typing import Any, Iterable, Iterator, List, Optional

from vecmat._config import config
from vecmat._display import check_format, inspect, render_column
from vecmat._typing import check_size, coerce_real, coerce_reals
from vecmat.error import DimensionMismatchError, OperandTypeError
from vecmat.vector import Vector

__all__ = ['CircularBuffer']


def wrap_index(i: int, capacity: int) -> int:
    """Map any integer onto ``[0, capacity)``."""
    return ((i % capacity) + capacity) % capacity


class CircularBuffer:
    """
    Fixed-capacity sequence with a wrap-around write cursor.

    All ``capacity`` slots are present from construction on (zero or the
    supplied values). ``push`` writes at ``head`` and advances it, so once
    the buffer has been filled logical index 0 is the oldest retained value
    and ``capacity - 1`` the newest. Reads translate logical index i to
    storage slot ``(head + i) mod capacity`` and never fail on range.

    Attributes:
        capacity (int): Number of slots
        head (int): Storage slot the next push writes to
        format (str): printf-style element format used by ``str(buf)``
    """

    __slots__ = ("_store", "_head", "_format")

    def __init__(self, capacity: int, values: Optional[Iterable[Any]] = None):
        """
        Args:
            capacity: Number of slots (>= 1)
            values: Optional initial contents, exactly ``capacity`` numbers

        Raises:
            InvalidSizeError: If capacity is not a positive integer
            DimensionMismatchError: If values has the wrong length
        """
        capacity = check_size(capacity, "capacity")
        if values is None:
            self._store = Vector(capacity)
        else:
            floats = coerce_reals(values)
            if len(floats) != capacity:
                raise DimensionMismatchError(
                    f"{len(floats)} initial values for capacity {capacity}"
                )
            self._store = Vector.from_values(floats)
        self._head = 0
        self._format: Optional[str] = None

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def capacity(self) -> int:
        return self._store.length

    @property
    def head(self) -> int:
        return self._head

    @property
    def format(self) -> str:
        if self._format is not None:
            return self._format
        return config.display.vector_format

    @format.setter
    def format(self, fmt: Optional[str]) -> None:
        self._format = None if fmt is None else check_format(fmt)

    def __len__(self) -> int:
        return self.capacity

    # =========================================================================
    # Writing
    # =========================================================================

    def push(self, value: Any) -> float:
        """
        Write ``value`` at head and advance head circularly.

        Returns:
            The value written, as float

        Raises:
            OperandTypeError: If value is not numeric-convertible
        """
        x = coerce_real(value)
        self._store._data[self._head] = x
        self._head = wrap_index(self._head + 1, self.capacity)
        return x

    def __lshift__(self, value: Any) -> float:
        return self.push(value)

    def extend(self, values: Iterable[Any]) -> "CircularBuffer":
        """Push every value in order; returns self."""
        for x in coerce_reals(values):
            self.push(x)
        return self

    # =========================================================================
    # Reading
    # =========================================================================

    def get(self, i: int) -> float:
        """Value at logical index i; any integer is accepted."""
        if isinstance(i, bool) or not isinstance(i, numbers.Integral):
            raise OperandTypeError(f"index must be an integer, got {type(i).__name__}")
        slot = wrap_index(self._head + int(i), self.capacity)
        return float(self._store._data[slot])

    def __getitem__(self, i: int) -> float:
        return self.get(i)

    def latest(self) -> float:
        """Most recently pushed value."""
        return self.get(-1)

    def __iter__(self) -> Iterator[float]:
        """Logical indices 0 .. capacity-1, oldest first."""
        for i in range(self.capacity):
            yield self.get(i)

    def to_list(self) -> List[float]:
        return list(self)

    def to_vector(self) -> Vector:
        """Contents in logical order as a fresh Vector."""
        return Vector.from_values(self.to_list())

    # =========================================================================
    # Display
    # =========================================================================

    def __repr__(self) -> str:
        return inspect("B", self.to_list())

    def __str__(self) -> str:
        return render_column(self, self.format)
