"""Actions that evaluate Ex-style command lines against a session."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional

from edit_engine.buffer import OutOfRangeError
from edit_engine.runtime import telemetry
from edit_engine.session import EditSession


@dataclass(slots=True)
class CommandResult:
    """Outcome of one submitted command line."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class CommandUsageError(ValueError):
    """Raised by handlers when arguments do not match the command's usage."""


CommandHandler = Callable[[EditSession, List[str]], CommandResult]


def submit_command_line(session: EditSession, line: str) -> CommandResult:
    text = line.strip()
    if not text:
        return CommandResult(consumed=False, status="command_empty")
    try:
        parts = shlex.split(text)
    except ValueError as exc:
        return _error(text, str(exc))
    command, args = parts[0], parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _error(command, f"Unknown command '{command}'")
    try:
        return handler(session, args)
    except (CommandUsageError, OutOfRangeError) as exc:
        return _error(command, str(exc))


def _error(command: str, message: str) -> CommandResult:
    telemetry.record_event(
        "command.error", level="warning", data={"command": command, "reason": message}
    )
    return CommandResult(consumed=True, status="command_error", message=message)


def _int_arg(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise CommandUsageError(f"{name} must be an integer, got '{value}'") from exc


def _expect(args: List[str], minimum: int, maximum: int, usage: str) -> None:
    if not minimum <= len(args) <= maximum:
        raise CommandUsageError(f"usage: {usage}")


def _handle_insert(session: EditSession, args: List[str]) -> CommandResult:
    _expect(args, 1, 2, "insert TEXT [POSITION]")
    position = _int_arg(args[1], "POSITION") if len(args) == 2 else None
    operation = session.insert(args[0], position)
    return CommandResult(consumed=True, status="command_insert", message=operation.describe())


def _handle_append(session: EditSession, args: List[str]) -> CommandResult:
    _expect(args, 1, 1, "append TEXT")
    operation = session.append(args[0])
    return CommandResult(consumed=True, status="command_insert", message=operation.describe())


def _handle_delete(session: EditSession, args: List[str]) -> CommandResult:
    _expect(args, 2, 2, "delete START LENGTH")
    operation = session.delete(_int_arg(args[0], "START"), _int_arg(args[1], "LENGTH"))
    return CommandResult(consumed=True, status="command_delete", message=operation.describe())


def _handle_replace(session: EditSession, args: List[str]) -> CommandResult:
    _expect(args, 3, 3, "replace START LENGTH TEXT")
    operation = session.replace(
        _int_arg(args[0], "START"), _int_arg(args[1], "LENGTH"), args[2]
    )
    return CommandResult(consumed=True, status="command_replace", message=operation.describe())


def _handle_step(session: EditSession, args: List[str], *, action: str) -> CommandResult:
    _expect(args, 0, 0, action)
    stepped = session.undo() if action == "undo" else session.redo()
    if not stepped:
        return CommandResult(
            consumed=True, status=f"command_{action}_empty", message=f"Nothing to {action}"
        )
    return CommandResult(consumed=True, status=f"command_{action}", message=action)


def _handle_history(session: EditSession, args: List[str]) -> CommandResult:
    _expect(args, 0, 0, "history")
    lines = session.history().lines()
    return CommandResult(consumed=True, status="command_history", message="\n".join(lines))


def _handle_cursor(session: EditSession, args: List[str]) -> CommandResult:
    _expect(args, 1, 1, "cursor POSITION")
    session.move_cursor(_int_arg(args[0], "POSITION"))
    return CommandResult(
        consumed=True, status="command_cursor", message=f"cursor {session.cursor}"
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "insert": _handle_insert,
    "i": _handle_insert,
    "append": _handle_append,
    "a": _handle_append,
    "delete": _handle_delete,
    "d": _handle_delete,
    "replace": _handle_replace,
    "r": _handle_replace,
    "undo": partial(_handle_step, action="undo"),
    "u": partial(_handle_step, action="undo"),
    "redo": partial(_handle_step, action="redo"),
    "red": partial(_handle_step, action="redo"),
    "history": _handle_history,
    "h": _handle_history,
    "cursor": _handle_cursor,
    "goto": _handle_cursor,
}


__all__ = ["CommandResult", "CommandUsageError", "submit_command_line"]
