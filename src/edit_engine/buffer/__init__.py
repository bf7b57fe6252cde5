"""Text buffer receiver and its bounds checks."""

from .buffer import BufferView, TextBuffer
from .validation import (
    OutOfRangeError,
    ensure_position,
    ensure_replace_span,
    ensure_span,
)

__all__ = [
    "BufferView",
    "TextBuffer",
    "OutOfRangeError",
    "ensure_position",
    "ensure_span",
    "ensure_replace_span",
]
