"""High-level session façade pairing one buffer with one invoker."""

from __future__ import annotations

from typing import ContextManager, Optional

from .buffer import BufferView, TextBuffer
from .history import HistoryBus, HistorySnapshot, OperationInvoker
from .operations import Delete, EditOperation, Insert, Replace
from .runtime.settings import EngineSettings


class EditSession:
    """Builds operations from the live buffer and routes them through history.

    Each session owns its buffer and invoker exclusively; callers sharing a
    session across threads must serialize access themselves.
    """

    def __init__(
        self,
        *,
        text: str = "",
        settings: Optional[EngineSettings] = None,
        bus: Optional[HistoryBus] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.buffer = TextBuffer.from_text(text, name=self.settings.buffer_name)
        self.invoker = OperationInvoker(
            self.buffer, limit=self.settings.history_limit, bus=bus
        )

    @classmethod
    def from_env(cls, *, text: str = "") -> "EditSession":
        return cls(text=text, settings=EngineSettings.from_env())

    @property
    def bus(self) -> HistoryBus:
        return self.invoker.bus

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        return self.buffer.cursor

    def execute(self, operation: EditOperation) -> EditOperation:
        self.invoker.execute_new(operation)
        return operation

    def insert(self, text: str, position: Optional[int] = None) -> Insert:
        target = self.buffer.cursor if position is None else position
        operation = Insert(text=text, position=target)
        self.execute(operation)
        return operation

    def append(self, text: str) -> Insert:
        return self.insert(text, len(self.buffer))

    def delete(self, start: int, length: int) -> Delete:
        operation = Delete.capture(self.buffer, start, length)
        self.execute(operation)
        return operation

    def replace(self, start: int, length: int, new_text: str) -> Replace:
        operation = Replace.capture(self.buffer, start, length, new_text)
        self.execute(operation)
        return operation

    def move_cursor(self, position: int) -> None:
        self.buffer.set_cursor(position)

    def undo(self) -> bool:
        return self.invoker.undo()

    def redo(self) -> bool:
        return self.invoker.redo()

    def can_undo(self) -> bool:
        return self.invoker.can_undo()

    def can_redo(self) -> bool:
        return self.invoker.can_redo()

    def group(self, description: str) -> ContextManager[None]:
        return self.invoker.group(description)

    def history(self) -> HistorySnapshot:
        return self.invoker.history()

    def snapshot(self) -> BufferView:
        return self.buffer.snapshot()


__all__ = ["EditSession"]
