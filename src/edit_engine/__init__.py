"""UI-agnostic text-buffer command engine with linear undo/redo."""

from .buffer import BufferView, OutOfRangeError, TextBuffer
from .history import HistorySnapshot, OperationInvoker
from .operations import Delete, EditOperation, Insert, Macro, Replace
from .session import EditSession

__all__ = [
    "BufferView",
    "OutOfRangeError",
    "TextBuffer",
    "EditOperation",
    "Insert",
    "Delete",
    "Replace",
    "Macro",
    "OperationInvoker",
    "HistorySnapshot",
    "EditSession",
]

__version__ = "0.1.0"
