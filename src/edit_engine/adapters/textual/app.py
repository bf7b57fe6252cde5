"""Executable Textual app that hosts an edit session."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

from edit_engine.buffer import BufferView
from edit_engine.history import HistorySnapshot
from edit_engine.runtime import telemetry
from edit_engine.runtime.settings import EngineSettings
from edit_engine.session import EditSession

from .controller import TextualEditorAdapter, TextualUIHooks


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    history_text: str = ""


class EditEngineApp(App[None]):
    """Buffer view, history pane, status line and a command input."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#buffer-view {
		width: 2fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#history-view {
		width: 1fr;
		border: round $secondary;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+z", "undo", "Undo"),
        ("ctrl+y", "redo", "Redo"),
    ]

    def __init__(self, session: EditSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._state = UIState()
        self._buffer_widget: Static | None = None
        self._history_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("edit_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._buffer_widget = Static("", id="buffer-view")
            self._history_widget = Static("", id="history-view")
            yield self._buffer_widget
            yield self._history_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder="insert TEXT [POS] | delete S L | replace S L TEXT | undo | redo")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_history=self._show_history,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter is None:
            return
        self.adapter.submit(event.value)
        event.input.value = ""

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.submit("undo")

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.submit("redo")

    def _update_buffer(self, view: BufferView) -> None:
        text = view.text
        self._state.buffer_text = f"{text[: view.cursor]}|{text[view.cursor :]}"
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_history(self, snapshot: HistorySnapshot) -> None:
        self._state.history_text = "\n".join(snapshot.lines())
        if self._history_widget:
            self._history_widget.update(self._state.history_text)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _history_limit(raw: str) -> Optional[int]:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw}'") from exc
    if value < 0:
        raise argparse.ArgumentTypeError("history limit cannot be negative")
    return value or None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = EngineSettings.from_env()
    parser = argparse.ArgumentParser(description="Run the edit engine Textual app.")
    parser.add_argument(
        "--text",
        default="",
        help="Initial buffer content (default: empty)",
    )
    parser.add_argument(
        "--history-limit",
        type=_history_limit,
        default=defaults.history_limit,
        help="Maximum undo entries kept, 0 for unbounded (default: unbounded)",
    )
    parser.add_argument(
        "--buffer-name",
        default=defaults.buffer_name,
        help="Buffer label used in telemetry (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # Console logging would draw over the Textual screen.
    telemetry.configure(preset="production")
    settings = EngineSettings(
        history_limit=args.history_limit, buffer_name=args.buffer_name
    )
    session = EditSession(text=args.text, settings=settings)
    EditEngineApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
