"""Event bus announcing history changes to front ends."""

from __future__ import annotations

from typing import Callable, Dict, List

HISTORY_EVENTS = (
    "history.execute",
    "history.undo",
    "history.redo",
    "history.empty",
)

HistoryListener = Callable[[object], None]


class HistoryBus:
    """Publish/subscribe hub restricted to ``HISTORY_EVENTS``.

    Payloads are operation descriptions, or the notice text for
    ``history.empty``. Unknown event names raise ``ValueError`` on both
    sides so a typo cannot silently drop notifications.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[HistoryListener]] = {
            event: [] for event in HISTORY_EVENTS
        }

    def subscribe(self, event: str, callback: HistoryListener) -> None:
        self._listeners_for(event).append(callback)

    def unsubscribe(self, event: str, callback: HistoryListener) -> None:
        listeners = self._listeners_for(event)
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in tuple(self._listeners_for(event)):
            callback(payload)

    def _listeners_for(self, event: str) -> List[HistoryListener]:
        try:
            return self._listeners[event]
        except KeyError as exc:
            raise ValueError(
                f"Unknown history event '{event}'; expected one of {HISTORY_EVENTS}"
            ) from exc


__all__ = ["HISTORY_EVENTS", "HistoryBus", "HistoryListener"]
