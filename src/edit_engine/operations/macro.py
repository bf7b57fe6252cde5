"""Composite operation grouping ordered sub-operations."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from edit_engine.buffer import TextBuffer
from edit_engine.runtime import telemetry

from .base import EditOperation


class Macro(EditOperation):
    """Runs children in order and reverts them in reverse order.

    Children may be added until the first ``execute``; after that the macro
    is sealed. If a child fails during ``execute`` the children already
    applied are undone (last first) before the error propagates.
    """

    __slots__ = ("description", "_operations", "_sealed")

    def __init__(
        self,
        description: str,
        operations: Optional[Iterable[EditOperation]] = None,
    ) -> None:
        self.description = description
        self._operations: List[EditOperation] = list(operations or ())
        self._sealed = False

    @classmethod
    def applied(
        cls, description: str, operations: Iterable[EditOperation]
    ) -> "Macro":
        """Wrap operations that have already been executed, sealed."""

        macro = cls(description, operations)
        macro._sealed = True
        return macro

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[EditOperation]:
        return iter(tuple(self._operations))

    def __repr__(self) -> str:
        return f"Macro({self.description!r}, {self._operations!r})"

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(self, operation: EditOperation) -> "Macro":
        if self._sealed:
            raise RuntimeError(
                f"Macro '{self.description}' already executed; cannot add operations"
            )
        self._operations.append(operation)
        return self

    def execute(self, buffer: TextBuffer) -> None:
        self._sealed = True
        applied: List[EditOperation] = []
        try:
            for operation in self._operations:
                operation.execute(buffer)
                applied.append(operation)
        except Exception:
            telemetry.record_event(
                "macro.rollback",
                level="warning",
                data={"macro": self.description, "applied": len(applied)},
            )
            for operation in reversed(applied):
                operation.undo(buffer)
            raise

    def undo(self, buffer: TextBuffer) -> None:
        for operation in reversed(self._operations):
            operation.undo(buffer)

    def describe(self) -> str:
        return f"Macro: {self.description} ({len(self._operations)} commands)"


__all__ = ["Macro"]
