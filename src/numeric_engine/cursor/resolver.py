"""Caret placement across re-formatting.

Formatting inserts and removes characters (grouping separators, the
implicit leading zero, collapsed zeros, the sign), so a raw index is
meaningless once the text is canonical. The caret is instead anchored to
the number of significant characters (digits and the decimal separator)
to its left, and placed after that many significant characters in the new
text. Characters added ahead of the caret push it right by their count,
characters removed ahead of it pull it left, and edits past the caret leave
it alone.
"""

from __future__ import annotations

from typing import Optional, Tuple

from numeric_engine.events import EditEvent, ExternalSet, Step, splice
from numeric_engine.grammar import MINUS, GrammarConfig


def editable_bounds(text: str, config: GrammarConfig) -> Tuple[int, int]:
    """Return the ``[start, end]`` caret range between sign/prefix and suffix."""

    start = 1 if text.startswith(MINUS) else 0
    if config.prefix and text.startswith(config.prefix, start):
        start += len(config.prefix)
    end = len(text)
    if config.suffix and text.endswith(config.suffix):
        end = max(start, end - len(config.suffix))
    return start, end


def significant_anchor(text: str, caret: int, config: GrammarConfig) -> int:
    """Count the significant characters left of ``caret`` that survive formatting.

    Later decimal separators and collapsed leading zeros are discounted; the
    implicit zero that precedes a bare separator is counted.
    """

    separator = config.decimal_separator
    kept: list[tuple[int, str]] = []
    seen_separator = False
    for index, ch in enumerate(text):
        if ch == separator:
            if seen_separator:
                continue
            seen_separator = True
            kept.append((index, ch))
        elif config.is_significant(ch):
            kept.append((index, ch))

    anchor = sum(1 for index, _ in kept if index < caret)

    zeros = 0
    while zeros < len(kept) and kept[zeros][1] == "0":
        zeros += 1
    if zeros and not config.allow_leading_zeros:
        follows = kept[zeros][1] if zeros < len(kept) else None
        survivors = 1 if follows is None or follows == separator else 0
        anchor -= min(zeros - survivors, anchor)
        zeros = survivors

    if anchor > 0 and zeros == 0 and kept and kept[0][1] == separator:
        anchor += 1
    return anchor


def place_after(text: str, anchor: int, config: GrammarConfig) -> int:
    start, end = editable_bounds(text, config)
    if anchor <= 0:
        return start
    seen = 0
    for index in range(start, end):
        if config.is_significant(text[index]):
            seen += 1
            if seen == anchor:
                return index + 1
    return end


def resolve_caret(
    prev: str,
    next_text: str,
    caret_before: int,
    edit: Optional[EditEvent],
    *,
    config: GrammarConfig,
) -> int:
    """Return the caret index in ``next_text`` after ``edit`` turned ``prev`` into it.

    ``edit=None`` re-maps the caret for a pure re-format (commit, grammar
    change). Steps always land at the end of the number; an external push
    keeps the caret when nothing changed and otherwise moves to the end.
    """

    caret_before = max(0, min(caret_before, len(prev)))

    if isinstance(edit, Step):
        return editable_bounds(next_text, config)[1]
    if isinstance(edit, ExternalSet):
        if next_text == prev:
            return caret_before
        return editable_bounds(next_text, config)[1]

    if edit is None:
        anchor = significant_anchor(prev, caret_before, config)
    else:
        raw = splice(prev, edit, caret_before, config)
        anchor = significant_anchor(raw.text, raw.caret, config)
    return place_after(next_text, anchor, config)


__all__ = [
    "editable_bounds",
    "place_after",
    "resolve_caret",
    "significant_anchor",
]
