"""Reversible edit operations: Insert, Delete, Replace, Macro."""

from .base import EditOperation
from .macro import Macro
from .text import Delete, Insert, Replace

__all__ = ["EditOperation", "Insert", "Delete", "Replace", "Macro"]
