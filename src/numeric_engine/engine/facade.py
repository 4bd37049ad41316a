"""Stateful coordinator threading edit events through the formatting pipeline."""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from numeric_engine.cursor import editable_bounds, resolve_caret
from numeric_engine.events import (
    Delete,
    EditEvent,
    ExternalSet,
    Insert,
    Paste,
    Step,
    splice,
)
from numeric_engine.formatting import (
    ClampPhase,
    canonicalize,
    clamp,
    count_leading_zeros,
    format_number,
    fraction_digits,
    pad_leading_zeros,
    parse_numeric,
    step,
    unformat,
)
from numeric_engine.grammar import (
    COMMIT,
    MINUS,
    TYPING,
    EditHints,
    GrammarConfig,
    GrammarConfigError,
)
from numeric_engine.runtime import telemetry
from numeric_engine.runtime.telemetry import SpanHandle

from .bus import EDIT_REJECTED, VALUE_CHANGE, VALUE_COMMIT, EngineBus
from .state import EditResult, EnginePhase, EngineState

ExternalValue = Union[str, float, int, None]

LOGGER_NAME = "numeric_engine.engine"


class NumericEngine:
    """Owns one input's canonical text, numeric value and caret.

    Every call is synchronous: the event is canonicalized, checked against
    the clamp policy and the caret is resolved before the call returns. One
    engine serves exactly one logical input.
    """

    def __init__(
        self,
        config: GrammarConfig,
        initial_raw: ExternalValue = "",
        *,
        step_size: float = 1.0,
        name: str = "default",
        bus: Optional[EngineBus] = None,
        emit_on_construct: bool = False,
    ) -> None:
        if step_size <= 0:
            raise ValueError("step_size must be positive")
        _check_scale(config, step_size)
        self.config = config
        self.name = name
        self.step_size = float(step_size)
        self.bus = bus or EngineBus()
        self.state = EngineState()

        canonical, numeric = self._settle(_coerce(initial_raw, config))
        self.state.adopt(canonical, numeric, editable_bounds(canonical, config)[1])
        if emit_on_construct:
            self.bus.emit(VALUE_CHANGE, self._result(changed=False, source="programmatic"))

    # ------------------------------------------------------------------ queries

    @property
    def phase(self) -> EnginePhase:
        return self.state.phase

    def current_formatted(self) -> str:
        return self.state.canonical

    def current_numeric(self) -> Optional[float]:
        return self.state.numeric

    def current_raw(self) -> str:
        return unformat(self.state.canonical, self.config)

    def current_caret(self) -> int:
        return self.state.caret

    def subscribe(self, event: str, callback) -> None:
        self.bus.subscribe(event, callback)

    # ------------------------------------------------------------------ edits

    def apply(self, event: EditEvent, caret_before: int) -> EditResult:
        if isinstance(event, ExternalSet):
            return self.set_value(event.value)
        if isinstance(event, Step):
            return self._step(event, caret_before)
        if not isinstance(event, (Insert, Delete, Paste)):
            raise TypeError(f"Unsupported edit event {type(event).__name__}")

        event = self._normalize_event(event)
        hints = _hints_for(event)
        caret_before = max(0, min(caret_before, len(self.state.canonical)))

        with self._editing(event.kind, caret_before) as handle:
            prev = self.state.canonical
            raw = splice(prev, event, caret_before, self.config)
            canonical = canonicalize(raw.text, self.config, hints)
            numeric = parse_numeric(canonical, self.config)

            if clamp(numeric, self.config, phase=ClampPhase.EDIT).rejected:
                handle.add_metadata("status", "rejected")
                return self._reject(caret_before, attempted=canonical)

            caret = resolve_caret(prev, canonical, caret_before, event, config=self.config)
            changed = canonical != prev
            handle.add_metadata("status", "changed" if changed else "unchanged")
            self.state.last_hints = hints
            self.state.adopt(canonical, numeric, caret)
            result = self._result(changed=changed)

        if changed:
            self.bus.emit(VALUE_CHANGE, result)
        return result

    def set_value(self, raw: ExternalValue) -> EditResult:
        """Adopt a value pushed by an outside owner (a commit boundary)."""

        text = _coerce(raw, self.config)
        if text == self.state.canonical:
            return self._result(changed=False, source="programmatic")

        with self._editing("external_set", self.state.caret) as handle:
            prev = self.state.canonical
            canonical, numeric = self._settle(text)
            caret = resolve_caret(
                prev, canonical, self.state.caret, ExternalSet(raw), config=self.config
            )
            changed = canonical != prev
            handle.add_metadata("status", "changed" if changed else "unchanged")
            self.state.last_hints = COMMIT
            self.state.adopt(canonical, numeric, caret)
            result = self._result(changed=changed, source="programmatic")

        if changed:
            self.bus.emit(VALUE_CHANGE, result)
        return result

    def commit(self) -> EditResult:
        """Apply deferred formatting and commit clamping; always notifies."""

        with self._editing("commit", self.state.caret):
            prev = self.state.canonical
            canonical, numeric = self._settle(prev)
            caret = resolve_caret(prev, canonical, self.state.caret, None, config=self.config)
            self.state.last_hints = COMMIT
            self.state.adopt(canonical, numeric, caret)
            result = self._result(changed=canonical != prev, source="commit")

        telemetry.record_event(
            "engine.commit",
            level="debug",
            data={"engine": self.name, "formatted": canonical, "changed": result.changed},
            logger_name=LOGGER_NAME,
        )
        self.bus.emit(VALUE_COMMIT, result)
        return result

    def reconfigure(self, config: GrammarConfig) -> EditResult:
        """Switch grammar, re-deriving the display from the current number."""

        _check_scale(config, self.step_size)
        numeric = self.state.numeric
        self.config = config
        raw = "" if numeric is None else format_number(numeric, config)
        with self._editing("reconfigure", self.state.caret):
            prev = self.state.canonical
            canonical, numeric = self._settle(raw)
            self.state.adopt(canonical, numeric, editable_bounds(canonical, config)[1])
            result = self._result(changed=canonical != prev, source="programmatic")

        if result.changed:
            self.bus.emit(VALUE_CHANGE, result)
        return result

    # ------------------------------------------------------------------ internals

    def _step(self, event: Step, caret_before: int) -> EditResult:
        caret_before = max(0, min(caret_before, len(self.state.canonical)))
        with self._editing(event.kind, caret_before) as handle:
            handle.add_metadata("direction", event.direction.value)
            target = step(self.state.numeric, event.direction, self.step_size, self.config)
            if target is None:
                status = "empty" if self.state.numeric is None else "at_bound"
                handle.add_metadata("status", status)
                return EditResult(
                    formatted=self.state.canonical,
                    raw=self.current_raw(),
                    numeric=self.state.numeric,
                    caret=caret_before,
                    changed=False,
                    source="programmatic",
                )

            prev = self.state.canonical
            canonical = canonicalize(format_number(target, self.config), self.config, COMMIT)
            numeric = parse_numeric(canonical, self.config)

            if clamp(numeric, self.config, phase=ClampPhase.EDIT).rejected:
                handle.add_metadata("status", "rejected")
                return self._reject(caret_before, attempted=canonical)

            caret = resolve_caret(prev, canonical, caret_before, event, config=self.config)
            changed = canonical != prev
            handle.add_metadata("status", "changed" if changed else "unchanged")
            self.state.last_hints = COMMIT
            self.state.adopt(canonical, numeric, caret)
            result = self._result(changed=changed, hide_caret=True, source="programmatic")

        if changed:
            self.bus.emit(VALUE_CHANGE, result)
        return result

    def _settle(self, raw: str) -> tuple[str, Optional[float]]:
        """Commit-time formatting followed by commit-phase clamping."""

        canonical = canonicalize(raw, self.config, COMMIT)
        numeric = parse_numeric(canonical, self.config)
        outcome = clamp(numeric, self.config, phase=ClampPhase.COMMIT)
        if outcome.adjusted and outcome.value is not None:
            zeros = (
                count_leading_zeros(canonical, self.config)
                if self.config.allow_leading_zeros
                else 0
            )
            bounded = pad_leading_zeros(format_number(outcome.value, self.config), zeros)
            canonical = canonicalize(bounded, self.config, COMMIT)
            numeric = parse_numeric(canonical, self.config)
        return canonical, numeric

    def _normalize_event(self, event: EditEvent) -> EditEvent:
        if (
            isinstance(event, Insert)
            and event.text in self.config.allowed_decimal_separators
        ):
            return Insert(event.at_index, self.config.decimal_separator, event.replace_end)
        return event

    def _reject(self, caret_before: int, *, attempted: str) -> EditResult:
        result = EditResult(
            formatted=self.state.canonical,
            raw=self.current_raw(),
            numeric=self.state.numeric,
            caret=caret_before,
            changed=False,
            rejected=True,
        )
        telemetry.record_event(
            "edit.rejected",
            level="debug",
            data={"engine": self.name, "attempted": attempted},
            logger_name=LOGGER_NAME,
        )
        self.bus.emit(EDIT_REJECTED, result)
        return result

    def _result(
        self, *, changed: bool, hide_caret: bool = False, source: str = "event"
    ) -> EditResult:
        return EditResult(
            formatted=self.state.canonical,
            raw=self.current_raw(),
            numeric=self.state.numeric,
            caret=self.state.caret,
            changed=changed,
            hide_caret=hide_caret,
            source=source,
        )

    @contextmanager
    def _editing(self, kind: str, caret_before: int) -> Iterator[SpanHandle]:
        self.state.phase = EnginePhase.EDITING
        try:
            with telemetry.span(
                f"engine::{kind}",
                logger_name=LOGGER_NAME,
                component="engine",
                metadata={"engine": self.name, "caret": caret_before},
            ) as handle:
                yield handle
        finally:
            self.state.phase = EnginePhase.IDLE


def _hints_for(event: EditEvent) -> EditHints:
    if isinstance(event, Insert):
        return EditHints(sign_key=event.text == MINUS)
    return TYPING


def _check_scale(config: GrammarConfig, step_size: float) -> None:
    """Refuse steps and bounds the decimal scale cannot display."""

    scale = config.decimal_scale
    if scale is None:
        return
    if fraction_digits(step_size) > scale:
        raise GrammarConfigError(
            f"step_size {step_size} needs more than {scale} decimal places",
            field="step_size",
        )
    for field_name in ("min", "max"):
        bound = getattr(config, field_name)
        if bound is not None and fraction_digits(bound) > scale:
            raise GrammarConfigError(
                f"{field_name} {bound} needs more than {scale} decimal places",
                field=field_name,
            )


def _coerce(value: ExternalValue, config: GrammarConfig) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        raise TypeError("booleans are not numeric input")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return ""
        return format_number(float(value), config)
    return str(value)


__all__ = ["NumericEngine", "ExternalValue"]
