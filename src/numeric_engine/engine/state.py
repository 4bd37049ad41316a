"""Mutable per-input state owned by the engine facade."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from numeric_engine.grammar import TYPING, EditHints


class EnginePhase(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


@dataclass(slots=True)
class EngineState:
    """Last canonical text, its numeric value and the caret the host should show."""

    canonical: str = ""
    numeric: Optional[float] = None
    caret: int = 0
    phase: EnginePhase = EnginePhase.IDLE
    last_hints: EditHints = field(default=TYPING)

    def adopt(self, canonical: str, numeric: Optional[float], caret: int) -> None:
        self.canonical = canonical
        self.numeric = numeric
        self.caret = caret


@dataclass(frozen=True, slots=True)
class NumberValues:
    """The triple form owners receive: display text, cleaned text, float."""

    formatted_value: str
    value: str
    float_value: Optional[float]


@dataclass(frozen=True, slots=True)
class EditResult:
    formatted: str
    raw: str
    numeric: Optional[float]
    caret: int
    changed: bool
    rejected: bool = False
    hide_caret: bool = False
    source: str = "event"

    @property
    def values(self) -> NumberValues:
        return NumberValues(
            formatted_value=self.formatted, value=self.raw, float_value=self.numeric
        )


__all__ = ["EditResult", "EnginePhase", "EngineState", "NumberValues"]
