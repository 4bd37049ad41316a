"""Conversions between canonical strings and floats."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

from numeric_engine.grammar import DIGITS, MINUS, GrammarConfig

from .canonicalizer import split_sign


def unformat(text: str, config: GrammarConfig) -> str:
    """Strip affixes and grouping, keeping sign, digits and a ``.`` decimal point.

    This is the "raw value" handed to form owners alongside the display.
    """

    kept = "".join(ch for ch in text if config.is_significant(ch) or ch == MINUS)
    sign, body = split_sign(kept)
    body = body.replace(MINUS, "")
    if config.decimal_separator != ".":
        body = body.replace(config.decimal_separator, ".")
    return sign + body


def parse_numeric(text: str, config: GrammarConfig) -> Optional[float]:
    cleaned = unformat(text, config)
    if not any(ch in DIGITS for ch in cleaned):
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_number(value: float, config: GrammarConfig) -> str:
    """Render ``value`` as plain digits (no exponent) using the configured separator."""

    if value == 0:
        return "0"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text.replace(".", config.decimal_separator)


def fraction_digits(value: float) -> int:
    text = format(Decimal(repr(float(value))), "f")
    if "." not in text:
        return 0
    return len(text.split(".", 1)[1].rstrip("0"))


def count_leading_zeros(text: str, config: GrammarConfig) -> int:
    """Count the zeros padding the integer part, ignoring a lone ``0`` or ``0.``."""

    body = split_sign(unformat(text, config))[1]
    if body == "0" or body.startswith("0."):
        return 0
    return len(body) - len(body.lstrip("0"))


def pad_leading_zeros(raw: str, count: int) -> str:
    if count <= 0:
        return raw
    sign, body = split_sign(raw)
    return f"{sign}{'0' * count}{body}"


__all__ = [
    "count_leading_zeros",
    "format_number",
    "fraction_digits",
    "pad_leading_zeros",
    "parse_numeric",
    "unformat",
]
