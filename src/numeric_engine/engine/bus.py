"""Change notifications emitted by the engine facade."""

from __future__ import annotations

from typing import Callable, Dict

VALUE_CHANGE = "value.change"
VALUE_COMMIT = "value.commit"
EDIT_REJECTED = "edit.rejected"

ENGINE_EVENTS = (VALUE_CHANGE, VALUE_COMMIT, EDIT_REJECTED)


class EngineBus:
    """Minimal event bus relaying edit results to interested hosts."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        if event not in ENGINE_EVENTS:
            raise KeyError(f"Unknown engine event '{event}'")
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = [
    "EDIT_REJECTED",
    "ENGINE_EVENTS",
    "EngineBus",
    "VALUE_CHANGE",
    "VALUE_COMMIT",
]
