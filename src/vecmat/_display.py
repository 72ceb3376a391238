"""
Text rendering for vecmat containers.

Two renderings exist for every container:

    repr -> type tag followed by the nested-list contents, e.g. ``V[1.0, 2.0]``
    str  -> boxed column/grid drawn with a printf-style per-element format
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from vecmat.error import InvalidFormatError, OperandTypeError

__all__ = [
    "inspect",
    "render_column",
    "render_grid",
    "check_format",
]

_TOP_LEFT, _TOP_RIGHT = "⎡", "⎤"
_SIDE_LEFT, _SIDE_RIGHT = "⎜", "⎟"
_BOTTOM_LEFT, _BOTTOM_RIGHT = "⎣", "⎦"


def check_format(fmt: str) -> str:
    """Validate that ``fmt`` formats exactly one float."""
    if not isinstance(fmt, str):
        raise OperandTypeError(f"format must be a str, got {type(fmt).__name__}")
    try:
        fmt % 0.0
    except (TypeError, ValueError) as exc:
        raise InvalidFormatError(f"Invalid element format {fmt!r}: {exc}") from exc
    return fmt


def inspect(tag: str, contents: list) -> str:
    """Debug representation: tag + nested list."""
    return f"{tag}{contents!r}"


def _box(lines: List[str]) -> str:
    width = max((len(line) for line in lines), default=2) - 2
    top = _TOP_LEFT + " " * width + _TOP_RIGHT
    bottom = _BOTTOM_LEFT + " " * width + _BOTTOM_RIGHT
    return "\n".join([top] + lines + [bottom]) + "\n"


def render_column(values: Iterable[float], fmt: str) -> str:
    """Render a vector as one boxed element per line."""
    lines = [f"{_SIDE_LEFT} {fmt % v} {_SIDE_RIGHT}" for v in values]
    return _box(lines)


def render_grid(rows: Iterable[Sequence[float]], fmt: str) -> str:
    """Render a matrix as one boxed row per line."""
    lines = [
        f"{_SIDE_LEFT} " + "".join(f"{fmt % v} " for v in row) + _SIDE_RIGHT
        for row in rows
    ]
    return _box(lines)
