"""Primitive text operations: insert, delete, replace."""

from __future__ import annotations

from dataclasses import dataclass

from edit_engine.buffer import TextBuffer

from .base import EditOperation


@dataclass(frozen=True, slots=True)
class Insert(EditOperation):
    text: str
    position: int

    def execute(self, buffer: TextBuffer) -> None:
        buffer.insert(self.text, self.position)

    def undo(self, buffer: TextBuffer) -> None:
        if not self.text:
            # Nothing was added; only the cursor moved.
            buffer.set_cursor(self.position)
            return
        buffer.delete(self.position, len(self.text))

    def describe(self) -> str:
        return f"Insert '{self.text}' at position {self.position}"


@dataclass(frozen=True, slots=True)
class Delete(EditOperation):
    """Removes ``length`` characters from ``start``.

    ``captured_text`` must hold what the deletion will remove; build with
    ``Delete.capture`` to snapshot it from the live buffer.
    """

    start: int
    length: int
    captured_text: str

    @classmethod
    def capture(cls, buffer: TextBuffer, start: int, length: int) -> "Delete":
        return cls(
            start=start,
            length=length,
            captured_text=buffer.get_text_range(start, length),
        )

    def execute(self, buffer: TextBuffer) -> None:
        buffer.delete(self.start, self.length)

    def undo(self, buffer: TextBuffer) -> None:
        buffer.insert(self.captured_text, self.start)

    def describe(self) -> str:
        return f"Delete {self.length} characters from position {self.start}"


@dataclass(frozen=True, slots=True)
class Replace(EditOperation):
    """Swaps ``length`` characters at ``start`` for ``new_text``.

    Built with ``Replace.capture`` so ``captured_original`` reflects the
    buffer before execution.
    """

    start: int
    length: int
    new_text: str
    captured_original: str

    @classmethod
    def capture(
        cls, buffer: TextBuffer, start: int, length: int, new_text: str
    ) -> "Replace":
        return cls(
            start=start,
            length=length,
            new_text=new_text,
            captured_original=buffer.get_text_range(start, length),
        )

    def execute(self, buffer: TextBuffer) -> None:
        buffer.replace(self.start, self.length, self.new_text)

    def undo(self, buffer: TextBuffer) -> None:
        buffer.replace(self.start, len(self.new_text), self.captured_original)

    def describe(self) -> str:
        return f"Replace text at position {self.start} with '{self.new_text}'"


__all__ = ["Insert", "Delete", "Replace"]
