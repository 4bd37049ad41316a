"""Edit events submitted by host widgets and the raw splice they produce."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from numeric_engine.formatting.stepper import StepDirection
from numeric_engine.grammar import MINUS, GrammarConfig


class DeleteDirection(str, Enum):
    BACKWARD = "backward"
    FORWARD = "forward"


@dataclass(frozen=True, slots=True)
class Insert:
    """Typed text at ``at_index``, replacing ``[at_index, replace_end)`` if given."""

    at_index: int
    text: str
    replace_end: Optional[int] = None

    kind = "insert"


@dataclass(frozen=True, slots=True)
class Delete:
    """Removes ``[start, end)``; a collapsed range removes one character."""

    start: int
    end: int
    direction: DeleteDirection = DeleteDirection.BACKWARD

    kind = "delete"


@dataclass(frozen=True, slots=True)
class Paste:
    """Clipboard text replacing ``[start, end)``, defaulting to the caret."""

    text: str
    start: Optional[int] = None
    end: Optional[int] = None

    kind = "paste"


@dataclass(frozen=True, slots=True)
class Step:
    direction: StepDirection

    kind = "step"


@dataclass(frozen=True, slots=True)
class ExternalSet:
    value: Union[str, float, int, None]

    kind = "external_set"


EditEvent = Union[Insert, Delete, Paste, Step, ExternalSet]


@dataclass(frozen=True, slots=True)
class Splice:
    """Unformatted text after applying an edit, with the caret where it landed."""

    text: str
    caret: int


def _bounded(index: int, text: str) -> int:
    return max(0, min(index, len(text)))


def _span(text: str, start: int, end: int) -> tuple[int, int]:
    start, end = _bounded(start, text), _bounded(end, text)
    return (start, end) if start <= end else (end, start)


def splice(
    text: str, event: EditEvent, caret_before: int, config: GrammarConfig
) -> Splice:
    """Apply ``event`` to ``text`` without any formatting.

    Deleting only decoration (grouping separators, affixes) would be undone
    by re-formatting, so the range grows in the delete direction until it
    covers a digit, separator or sign.
    """

    caret_before = _bounded(caret_before, text)

    if isinstance(event, Insert):
        end = event.at_index if event.replace_end is None else event.replace_end
        start, end = _span(text, event.at_index, end)
        return Splice(text[:start] + event.text + text[end:], start + len(event.text))

    if isinstance(event, Paste):
        start = caret_before if event.start is None else event.start
        end = start if event.end is None else event.end
        start, end = _span(text, start, end)
        return Splice(text[:start] + event.text + text[end:], start + len(event.text))

    if isinstance(event, Delete):
        start, end = _span(text, event.start, event.end)
        backward = event.direction is DeleteDirection.BACKWARD
        if start == end:
            if backward:
                start = max(0, start - 1)
            else:
                end = min(len(text), end + 1)
        while not any(
            config.is_significant(ch) or ch == MINUS for ch in text[start:end]
        ):
            if backward and start > 0:
                start -= 1
            elif not backward and end < len(text):
                end += 1
            else:
                break
        return Splice(text[:start] + text[end:], start)

    raise TypeError(f"Cannot splice event of type {type(event).__name__}")


__all__ = [
    "Delete",
    "DeleteDirection",
    "EditEvent",
    "ExternalSet",
    "Insert",
    "Paste",
    "Splice",
    "Step",
    "splice",
]
