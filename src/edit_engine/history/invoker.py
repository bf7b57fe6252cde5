"""Invoker sequencing operations over a buffer with linear undo/redo."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from edit_engine.buffer import TextBuffer
from edit_engine.operations import EditOperation, Macro
from edit_engine.runtime import telemetry

from .bus import HistoryBus
from .stack import OperationStack


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    """Descriptions on each stack, most recent first."""

    undo: tuple[str, ...]
    redo: tuple[str, ...]

    def lines(self) -> list[str]:
        rendered = [f"Undo stack ({len(self.undo)} commands):"]
        rendered.extend(f"  {i}. {label}" for i, label in enumerate(self.undo, 1))
        rendered.append(f"Redo stack ({len(self.redo)} commands):")
        rendered.extend(f"  {i}. {label}" for i, label in enumerate(self.redo, 1))
        return rendered


class OperationInvoker:
    """Executes operations against one buffer and owns its history.

    History is linear: executing a new operation discards every redo entry.
    A failed ``execute_new`` records nothing. Empty-history undo/redo are
    notices, reported by returning ``False``.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        limit: Optional[int] = None,
        bus: Optional[HistoryBus] = None,
    ) -> None:
        self.buffer = buffer
        self.bus = bus or HistoryBus()
        self._undo = OperationStack(limit=limit)
        self._redo = OperationStack()
        self._groups: List[List[EditOperation]] = []

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def execute_new(self, operation: EditOperation) -> None:
        with self._span("execute", operation):
            operation.execute(self.buffer)
        if self._groups:
            self._groups[-1].append(operation)
            return
        self._record(operation)

    def undo(self) -> bool:
        self._reject_while_grouping("undo")
        if not self._undo:
            self._notice("undo")
            return False
        operation = self._undo.pop()
        try:
            with self._span("undo", operation):
                operation.undo(self.buffer)
        finally:
            # Moves to redo even when the undo raises.
            self._redo.push(operation)
        self.bus.emit("history.undo", operation.describe())
        return True

    def redo(self) -> bool:
        self._reject_while_grouping("redo")
        if not self._redo:
            self._notice("redo")
            return False
        operation = self._redo.pop()
        try:
            with self._span("redo", operation):
                operation.execute(self.buffer)
        except Exception:
            self._redo.push(operation)
            raise
        self._undo.push(operation)
        self.bus.emit("history.redo", operation.describe())
        return True

    def clear(self) -> None:
        self._reject_while_grouping("clear")
        self._undo.clear()
        self._redo.clear()

    def history(self) -> HistorySnapshot:
        return HistorySnapshot(
            undo=tuple(op.describe() for op in self._undo),
            redo=tuple(op.describe() for op in self._redo),
        )

    @contextmanager
    def group(self, description: str) -> Iterator[None]:
        """Fold every operation executed in the block into one ``Macro``.

        Operations apply immediately so later ones capture the buffer as the
        earlier ones left it. If the block raises, the applied operations
        are undone in reverse order and nothing is recorded.
        """

        applied: List[EditOperation] = []
        self._groups.append(applied)
        try:
            yield
        except BaseException:
            for operation in reversed(applied):
                operation.undo(self.buffer)
            telemetry.record_event(
                "history.group_rollback",
                level="warning",
                data={"group": description, "operations": len(applied)},
            )
            raise
        finally:
            self._groups.pop()
        if not applied:
            return
        macro = Macro.applied(description, applied)
        if self._groups:
            self._groups[-1].append(macro)
        else:
            self._record(macro)

    def _record(self, operation: EditOperation) -> None:
        self._undo.push(operation)
        self._redo.clear()
        self.bus.emit("history.execute", operation.describe())

    def _notice(self, action: str) -> None:
        telemetry.record_event(
            "history.empty",
            data={"action": action, "buffer": self.buffer.name},
        )
        self.bus.emit("history.empty", f"Nothing to {action}")

    def _reject_while_grouping(self, action: str) -> None:
        if self._groups:
            raise RuntimeError(f"Cannot {action} while an operation group is open")

    def _span(self, action: str, operation: EditOperation):
        return telemetry.span(
            f"history::{action}",
            component="history",
            metadata={"operation": operation.describe(), "buffer": self.buffer.name},
        )


__all__ = ["HistorySnapshot", "OperationInvoker"]
