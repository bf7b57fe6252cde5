"""Undo/redo history: operation stacks, invoker and event bus."""

from .bus import HISTORY_EVENTS, HistoryBus
from .invoker import HistorySnapshot, OperationInvoker
from .stack import OperationStack

__all__ = [
    "HISTORY_EVENTS",
    "HistoryBus",
    "HistorySnapshot",
    "OperationInvoker",
    "OperationStack",
]
