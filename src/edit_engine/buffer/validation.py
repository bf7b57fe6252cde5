"""Bounds checks shared by buffer primitives."""

from __future__ import annotations


class OutOfRangeError(IndexError):
    """Raised when a position or span falls outside the current content."""

    def __init__(
        self,
        message: str,
        *,
        position: int,
        length: int | None = None,
        size: int,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.length = length
        self.size = size


def ensure_position(position: int, size: int) -> int:
    """Insertion points may sit anywhere in ``[0, size]``."""

    if position < 0 or position > size:
        raise OutOfRangeError(
            f"Position {position} outside [0, {size}]", position=position, size=size
        )
    return position


def ensure_span(start: int, length: int, size: int) -> int:
    """Validate a deletion span and return its clamped end offset."""

    if start < 0 or start >= size:
        raise OutOfRangeError(
            f"Start {start} outside [0, {size})",
            position=start,
            length=length,
            size=size,
        )
    if length <= 0:
        raise OutOfRangeError(
            f"Length must be positive, got {length}",
            position=start,
            length=length,
            size=size,
        )
    return min(start + length, size)


def ensure_replace_span(start: int, length: int, size: int) -> int:
    """Like ``ensure_span`` but zero-length spans and ``start == size`` pass."""

    ensure_position(start, size)
    if length < 0:
        raise OutOfRangeError(
            f"Length cannot be negative, got {length}",
            position=start,
            length=length,
            size=size,
        )
    return min(start + length, size)


__all__ = [
    "OutOfRangeError",
    "ensure_position",
    "ensure_span",
    "ensure_replace_span",
]
