"""LIFO stack holding executed or undone operations."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional

from edit_engine.operations import EditOperation


class OperationStack:
    """Push/pop at one end; an optional ``limit`` drops the oldest entries."""

    def __init__(self, *, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("limit must be a positive integer or None")
        self._items: Deque[EditOperation] = deque(maxlen=limit)

    @property
    def limit(self) -> Optional[int]:
        return self._items.maxlen

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[EditOperation]:
        """Most recent first."""

        return reversed(tuple(self._items))

    def push(self, operation: EditOperation) -> None:
        self._items.append(operation)

    def pop(self) -> EditOperation:
        if not self._items:
            raise IndexError("pop from empty OperationStack")
        return self._items.pop()

    def peek(self) -> Optional[EditOperation]:
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()


__all__ = ["OperationStack"]
