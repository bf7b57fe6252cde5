"""Mutable text buffer acting as the receiver of edit operations."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from edit_engine.runtime import telemetry

from .validation import (
    OutOfRangeError,
    ensure_position,
    ensure_replace_span,
    ensure_span,
)


@dataclass(frozen=True, slots=True)
class BufferView:
    name: str
    version: int
    text: str
    cursor: int


class TextBuffer:
    """Character content plus a cursor kept within ``[0, len(text)]``.

    Every primitive either applies fully or raises ``OutOfRangeError``
    without touching content, cursor, or version.
    """

    def __init__(self, *, name: str = "default") -> None:
        self.name = name
        self._text = ""
        self._cursor = 0
        self.version = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "TextBuffer":
        buffer = cls(name=name)
        buffer._text = text
        return buffer

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return (
            f"TextBuffer(name={self.name!r}, text={self._text!r}, "
            f"cursor={self._cursor})"
        )

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def get_text(self) -> str:
        return self._text

    def get_cursor(self) -> int:
        return self._cursor

    def get_text_range(self, start: int, length: int) -> str:
        """Clamped slice; empty when ``start`` is not inside the content."""

        if start < 0 or start >= len(self._text) or length <= 0:
            return ""
        return self._text[start : min(start + length, len(self._text))]

    def snapshot(self) -> BufferView:
        return BufferView(
            name=self.name, version=self.version, text=self._text, cursor=self._cursor
        )

    def insert(self, text: str, position: int) -> None:
        with self._mutation("insert", position=position, chars=len(text)):
            ensure_position(position, len(self._text))
            self._text = self._text[:position] + text + self._text[position:]
            self._cursor = position + len(text)

    def delete(self, start: int, length: int) -> str:
        with self._mutation("delete", start=start, length=length):
            end = ensure_span(start, length, len(self._text))
            removed = self._text[start:end]
            self._text = self._text[:start] + self._text[end:]
            self._cursor = start
            return removed

    def replace(self, start: int, length: int, new_text: str) -> str:
        with self._mutation("replace", start=start, length=length):
            end = ensure_replace_span(start, length, len(self._text))
            replaced = self._text[start:end]
            self._text = self._text[:start] + new_text + self._text[end:]
            self._cursor = start + len(new_text)
            return replaced

    def set_cursor(self, position: int) -> None:
        ensure_position(position, len(self._text))
        self._cursor = position

    def clear(self) -> None:
        with self._mutation("clear"):
            self._text = ""
            self._cursor = 0

    @contextmanager
    def _mutation(self, label: str, **metadata: object) -> Iterator[None]:
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, **metadata},
        ):
            yield
        self.version += 1


__all__ = ["BufferView", "OutOfRangeError", "TextBuffer"]
