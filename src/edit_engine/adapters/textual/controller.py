"""Textual adapter wiring an EditSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from edit_engine.actions import CommandResult, submit_command_line
from edit_engine.buffer import BufferView
from edit_engine.history import HISTORY_EVENTS, HistorySnapshot
from edit_engine.session import EditSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    update_status: Callable[[str], None] = _noop
    show_history: Callable[[HistorySnapshot], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds submitted command lines to the session and refreshes the UI."""

    def __init__(self, session: EditSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh()

    def submit(self, line: str) -> CommandResult:
        self._log_state("command ->", line=line)
        result = submit_command_line(self.session, line)
        # History listings go to the history pane, not the one-line status.
        status = result.message if result.status != "command_history" else None
        self.hooks.update_status(status or result.status)
        self._refresh()
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def _subscribe_events(self) -> None:
        for event in HISTORY_EVENTS:
            self.session.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.session.snapshot())
        self.hooks.show_history(self.session.history())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        view = self.session.snapshot()
        return {
            "buffer": view.name,
            "version": view.version,
            "cursor": view.cursor,
            "undo": self.session.invoker.undo_depth,
            "redo": self.session.invoker.redo_depth,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
