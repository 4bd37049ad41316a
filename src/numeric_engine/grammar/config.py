"""Validated grammar options for one numeric input."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

DIGITS = frozenset("0123456789")
MINUS = "-"


class ClampPolicy(str, Enum):
    """When out-of-range values are corrected."""

    NONE = "none"
    ON_COMMIT = "on_commit"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: "str | ClampPolicy") -> "ClampPolicy":
        if isinstance(value, ClampPolicy):
            return value
        key = value.strip().lower().replace("-", "_")
        aliases = {"oncommit": "on_commit", "blur": "on_commit", "commit": "on_commit"}
        try:
            return cls(aliases.get(key, key))
        except ValueError as exc:
            raise GrammarConfigError(
                f"Unknown clamp policy '{value}'", field="clamp_policy"
            ) from exc


class GrammarConfigError(ValueError):
    """Raised when a GrammarConfig combination can never be satisfied."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def _check_char(value: str, field: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise GrammarConfigError(f"{field} must be a single character", field=field)
    if value in DIGITS or value == MINUS:
        raise GrammarConfigError(f"{field} cannot be a digit or '-'", field=field)


def _check_bound(value: Optional[float], field: str) -> Optional[float]:
    if value is None:
        return None
    number = float(value)
    if not math.isfinite(number):
        raise GrammarConfigError(f"{field} must be finite", field=field)
    return number


@dataclass(frozen=True, slots=True)
class GrammarConfig:
    """Immutable numeric grammar.

    ``allow_negative=None`` is resolved from the bounds: negatives are allowed
    when ``min`` is unset or either bound is below zero. ``allow_decimal=False``
    pins ``decimal_scale`` to 0, and ``thousands_separator=True`` means ``","``.
    """

    decimal_separator: str = "."
    thousands_separator: Optional[str | bool] = None
    allow_negative: Optional[bool] = None
    allow_leading_zeros: bool = False
    decimal_scale: Optional[int] = None
    fixed_decimal_scale: bool = False
    allow_decimal: bool = True
    min: Optional[float] = None
    max: Optional[float] = None
    clamp_policy: ClampPolicy = ClampPolicy.ON_COMMIT
    prefix: str = ""
    suffix: str = ""
    allowed_decimal_separators: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _check_char(self.decimal_separator, "decimal_separator")

        thousands = self.thousands_separator
        if thousands is True:
            thousands = ","
        elif thousands is False or thousands == "":
            thousands = None
        if thousands is not None:
            _check_char(thousands, "thousands_separator")
            if thousands == self.decimal_separator:
                raise GrammarConfigError(
                    "decimal_separator and thousands_separator must differ",
                    field="thousands_separator",
                )
        object.__setattr__(self, "thousands_separator", thousands)

        scale = 0 if not self.allow_decimal else self.decimal_scale
        if scale is not None:
            scale = int(scale)
            if scale < 0:
                raise GrammarConfigError(
                    "decimal_scale cannot be negative", field="decimal_scale"
                )
        object.__setattr__(self, "decimal_scale", scale)
        if self.fixed_decimal_scale and scale is None:
            raise GrammarConfigError(
                "fixed_decimal_scale requires decimal_scale", field="fixed_decimal_scale"
            )

        low = _check_bound(self.min, "min")
        high = _check_bound(self.max, "max")
        if low is not None and high is not None and low > high:
            raise GrammarConfigError("min cannot exceed max", field="min")
        object.__setattr__(self, "min", low)
        object.__setattr__(self, "max", high)

        if self.allow_negative is None:
            inferred = low is None or low < 0 or (high is not None and high < 0)
            object.__setattr__(self, "allow_negative", inferred)

        object.__setattr__(self, "clamp_policy", ClampPolicy.parse(self.clamp_policy))

        for field_name in ("prefix", "suffix"):
            affix = getattr(self, field_name)
            if any(
                ch in DIGITS or ch == MINUS or ch == self.decimal_separator
                for ch in affix
            ):
                raise GrammarConfigError(
                    f"{field_name} cannot contain digits, '-' or the decimal separator",
                    field=field_name,
                )

        allowed = tuple(dict.fromkeys(self.allowed_decimal_separators))
        for candidate in allowed:
            _check_char(candidate, "allowed_decimal_separators")
            if candidate == thousands:
                raise GrammarConfigError(
                    "allowed_decimal_separators cannot include thousands_separator",
                    field="allowed_decimal_separators",
                )
        object.__setattr__(self, "allowed_decimal_separators", allowed)

    @property
    def has_bounds(self) -> bool:
        return self.min is not None or self.max is not None

    def is_out_of_range(self, value: Optional[float]) -> bool:
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return True
        if self.max is not None and value > self.max:
            return True
        return False

    def is_significant(self, ch: str) -> bool:
        """Digits and the decimal separator carry value; everything else is decoration."""

        return ch in DIGITS or ch == self.decimal_separator

    def evolve(self, **changes: object) -> "GrammarConfig":
        return replace(self, **changes)


__all__ = [
    "ClampPolicy",
    "DIGITS",
    "GrammarConfig",
    "GrammarConfigError",
    "MINUS",
]
