"""Abstract edit operation shared by every reversible change."""

from __future__ import annotations

from abc import ABC, abstractmethod

from edit_engine.buffer import TextBuffer


class EditOperation(ABC):
    """A self-contained, reversible change to a ``TextBuffer``.

    Operations close over everything they need at construction time and
    receive the buffer only when called. ``execute`` is expected once per
    "do"; calling it twice without an ``undo`` in between is not guarded.
    Buffer errors propagate untouched.
    """

    __slots__ = ()

    @abstractmethod
    def execute(self, buffer: TextBuffer) -> None:
        """Apply the forward change."""

    @abstractmethod
    def undo(self, buffer: TextBuffer) -> None:
        """Apply the exact inverse of the most recent ``execute``."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable label for history listings and telemetry."""

    def __str__(self) -> str:
        return self.describe()


__all__ = ["EditOperation"]
