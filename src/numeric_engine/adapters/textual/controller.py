"""Adapter translating Textual key, paste and focus events into engine edits."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from numeric_engine.cursor import editable_bounds
from numeric_engine.engine import (
    EDIT_REJECTED,
    VALUE_CHANGE,
    VALUE_COMMIT,
    EditResult,
    NumericEngine,
)
from numeric_engine.events import Delete, DeleteDirection, EditEvent, Insert, Paste, Step
from numeric_engine.formatting import StepDirection
from numeric_engine.host import (
    DEFAULT_HOLD_DELAY_MS,
    DEFAULT_HOLD_INTERVAL_MS,
    HoldRepeater,
    HostMirror,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


STEP_KEYS = {"up": StepDirection.UP, "down": StepDirection.DOWN}
COMMIT_KEYS = frozenset({"enter", "tab"})


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update Textual widgets."""

    update_text: Callable[[HostMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualNumericAdapter:
    """Bridges a NumericEngine to a Textual-friendly surface.

    The adapter keeps a :class:`HostMirror` of the displayed text and caret,
    feeds the caret to the engine with each edit and writes the resolved
    caret back.
    """

    def __init__(
        self,
        engine: NumericEngine,
        hooks: TextualUIHooks,
        *,
        with_keyboard_events: bool = True,
        hold_delay_ms: int = DEFAULT_HOLD_DELAY_MS,
        hold_interval_ms: int = DEFAULT_HOLD_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.engine = engine
        self.hooks = hooks
        self.with_keyboard_events = with_keyboard_events
        self.mirror = HostMirror(
            text=engine.current_formatted(), caret=engine.current_caret()
        )
        self.repeater = HoldRepeater(
            self.step,
            delay_ms=hold_delay_ms,
            interval_ms=hold_interval_ms,
            clock=clock,
        )
        self._subscribe_events()
        self.hooks.update_text(self.mirror)

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[EditResult]:
        """Dispatch a Textual key; return the engine result when an edit ran."""

        self._log_state("key ->", key=key, character=character)
        if key in STEP_KEYS:
            if not self.with_keyboard_events:
                return None
            return self.step(STEP_KEYS[key])
        if key in COMMIT_KEYS:
            return self.handle_blur()
        if key in {"left", "right", "home", "end"}:
            self._move_caret(key)
            return None

        start, end = self.mirror.edit_span()
        if key == "backspace":
            return self._apply(Delete(start, end, DeleteDirection.BACKWARD))
        if key == "delete":
            return self._apply(Delete(start, end, DeleteDirection.FORWARD))
        if character and len(character) == 1 and character.isprintable():
            return self._apply(Insert(start, character, end if end != start else None))
        return None

    def handle_paste(self, text: str) -> EditResult:
        start, end = self.mirror.edit_span()
        return self._apply(Paste(text, start, end))

    def handle_blur(self) -> EditResult:
        self.repeater.release()
        result = self.engine.commit()
        self._after_result(result)
        return result

    def set_value(self, value: object) -> EditResult:
        result = self.engine.set_value(value)  # type: ignore[arg-type]
        self._after_result(result)
        return result

    def step(self, direction: StepDirection) -> EditResult:
        return self._apply(Step(direction))

    def press_step(self, direction: StepDirection) -> None:
        self.repeater.press(direction)

    def release_step(self) -> None:
        self.repeater.release()

    def process_timers(self) -> bool:
        """Forward the host timer tick to the hold repeater."""

        return self.repeater.poll()

    def restore_caret(self) -> None:
        """Show the caret again once the post-step frame has painted."""

        if not self.mirror.caret_visible:
            self.mirror.caret_visible = True
            self.hooks.update_text(self.mirror)

    def _apply(self, event: EditEvent) -> EditResult:
        start, end = self.mirror.edit_span()
        result = self.engine.apply(event, caret_before=end if end != start else self.mirror.caret)
        self._after_result(result)
        self._log_state(
            "result <-",
            changed=result.changed,
            rejected=result.rejected,
            caret=result.caret,
        )
        return result

    def _after_result(self, result: EditResult) -> None:
        self.mirror.text = result.formatted
        self.mirror.set_caret(result.caret)
        self.mirror.caret_visible = not result.hide_caret
        if result.rejected:
            self.hooks.update_status("rejected")
        elif result.changed:
            self.hooks.update_status(f"value::{result.raw}")
        self.hooks.update_text(self.mirror)

    def _move_caret(self, key: str) -> None:
        start, end = editable_bounds(self.mirror.text, self.engine.config)
        caret = self.mirror.caret
        target = {
            "left": caret - 1,
            "right": caret + 1,
            "home": start,
            "end": end,
        }[key]
        self.mirror.set_caret(max(start, min(target, end)))
        self.hooks.update_text(self.mirror)

    def _subscribe_events(self) -> None:
        for event in (VALUE_CHANGE, VALUE_COMMIT, EDIT_REJECTED):
            self.engine.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "engine": self.engine.name,
            "phase": self.engine.phase.value,
            "text": self.mirror.text,
            "caret": self.mirror.caret,
            "holding": self.repeater.active,
        }


__all__ = ["TextualNumericAdapter", "TextualUIHooks"]
