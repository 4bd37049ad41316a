"""Ordered formatting pipeline turning raw text into a canonical display string.

Each stage takes ``(text, config, hints)`` and returns text shaped the way
the next stage expects. After ``strip_foreign`` the text is an optional
``-`` followed by digits and decimal separators; ``decorate`` is the only
stage that adds characters the grammar treats as foreign.
"""

from __future__ import annotations

from typing import Callable, Tuple

from numeric_engine.grammar import MINUS, TYPING, EditHints, GrammarConfig

Stage = Callable[[str, GrammarConfig, EditHints], str]


def split_sign(text: str) -> Tuple[str, str]:
    if text.startswith(MINUS):
        return MINUS, text[1:]
    return "", text


def strip_foreign(text: str, config: GrammarConfig, hints: EditHints) -> str:
    kept = [ch for ch in text if config.is_significant(ch) or ch == MINUS]
    if hints.sign_key:
        # every minus is counted by normalize_sign
        return "".join(kept)
    return "".join(
        ch for index, ch in enumerate(kept) if ch != MINUS or index == 0
    )


def normalize_sign(text: str, config: GrammarConfig, hints: EditHints) -> str:
    minus_count = text.count(MINUS)
    body = text.replace(MINUS, "")
    if not config.allow_negative:
        return body
    if hints.sign_key:
        negative = minus_count % 2 == 1
    else:
        negative = minus_count > 0
    return (MINUS if negative else "") + body


def collapse_decimals(text: str, config: GrammarConfig, hints: EditHints) -> str:
    del hints
    sign, body = split_sign(text)
    separator = config.decimal_separator
    first = body.find(separator)
    if first < 0:
        return text
    tail = body[first + 1 :].replace(separator, "")
    return sign + body[: first + 1] + tail


def normalize_leading_zeros(
    text: str, config: GrammarConfig, hints: EditHints
) -> str:
    del hints
    if config.allow_leading_zeros:
        return text
    sign, body = split_sign(text)
    rest = body.lstrip("0")
    if len(rest) == len(body):
        return text
    if not rest or rest.startswith(config.decimal_separator):
        return sign + "0" + rest
    return sign + rest


def insert_implicit_zero(text: str, config: GrammarConfig, hints: EditHints) -> str:
    del hints
    sign, body = split_sign(text)
    if body.startswith(config.decimal_separator):
        return sign + "0" + body
    return text


def enforce_decimal_scale(
    text: str, config: GrammarConfig, hints: EditHints
) -> str:
    sign, body = split_sign(text)
    separator = config.decimal_separator
    scale = config.decimal_scale
    index = body.find(separator)

    if index >= 0:
        integer, fraction = body[:index], body[index + 1 :]
        if scale is not None:
            fraction = fraction[:scale]
        if scale == 0:
            body = integer
        elif hints.commit and config.fixed_decimal_scale and scale is not None:
            body = integer + separator + fraction.ljust(scale, "0")
        elif hints.commit and not fraction:
            body = integer
        else:
            body = integer + separator + fraction
    elif hints.commit and config.fixed_decimal_scale and scale and body:
        body = body + separator + "0" * scale

    if hints.commit and not body:
        return ""
    return sign + body


def group_digits(digits: str, separator: str) -> str:
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i : i + 3] for i in range(head, len(digits), 3))
    return separator.join(groups)


def group_thousands(text: str, config: GrammarConfig, hints: EditHints) -> str:
    del hints
    separator = config.thousands_separator
    if not separator:
        return text
    sign, body = split_sign(text)
    index = body.find(config.decimal_separator)
    if index < 0:
        integer, tail = body, ""
    else:
        integer, tail = body[:index], body[index:]
    if len(integer) <= 3:
        return text
    return sign + group_digits(integer, str(separator)) + tail


def decorate(text: str, config: GrammarConfig, hints: EditHints) -> str:
    del hints
    sign, body = split_sign(text)
    if not sign and not body:
        return ""
    return sign + config.prefix + body + config.suffix


PIPELINE: Tuple[Stage, ...] = (
    strip_foreign,
    normalize_sign,
    collapse_decimals,
    normalize_leading_zeros,
    insert_implicit_zero,
    enforce_decimal_scale,
    group_thousands,
    decorate,
)


def canonicalize(
    raw: str, config: GrammarConfig, hints: EditHints = TYPING
) -> str:
    """Return the canonical display string for ``raw``.

    Total and deterministic: anything unparseable collapses to a shorter
    valid string, in the worst case ``""``. Running it twice with the same
    config and hints gives the same result as running it once.
    """

    text = raw
    for stage in PIPELINE:
        text = stage(text, config, hints)
    return text


__all__ = [
    "PIPELINE",
    "canonicalize",
    "collapse_decimals",
    "decorate",
    "enforce_decimal_scale",
    "group_digits",
    "group_thousands",
    "insert_implicit_zero",
    "normalize_leading_zeros",
    "normalize_sign",
    "split_sign",
    "strip_foreign",
]
