"""Bounds enforcement gated by the configured clamp policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from numeric_engine.grammar import ClampPolicy, GrammarConfig


class ClampPhase(str, Enum):
    """Where in the edit lifecycle a clamp is evaluated."""

    EDIT = "edit"
    COMMIT = "commit"


@dataclass(frozen=True, slots=True)
class ClampOutcome:
    status: Literal["unchanged", "adjusted", "rejected"]
    value: Optional[float] = None

    @property
    def rejected(self) -> bool:
        return self.status == "rejected"

    @property
    def adjusted(self) -> bool:
        return self.status == "adjusted"


UNCHANGED = ClampOutcome(status="unchanged")
REJECTED = ClampOutcome(status="rejected")


def nearest_bound(value: float, config: GrammarConfig) -> float:
    if config.min is not None and value < config.min:
        return config.min
    if config.max is not None and value > config.max:
        return config.max
    return value


def clamp(
    value: Optional[float],
    config: GrammarConfig,
    *,
    phase: ClampPhase = ClampPhase.EDIT,
) -> ClampOutcome:
    """Decide what happens to ``value`` under the config's bounds and policy.

    ``NONE`` never touches typed values. ``ON_COMMIT`` replaces an
    out-of-range value with the nearest bound at commit and ignores edits.
    ``STRICT`` refuses out-of-range edits and, at commit (initial value or an
    external push), adjusts like ``ON_COMMIT``.
    """

    policy = config.clamp_policy
    if value is None or policy is ClampPolicy.NONE:
        return UNCHANGED
    if not config.is_out_of_range(value):
        return UNCHANGED

    if phase is ClampPhase.EDIT:
        if policy is ClampPolicy.STRICT:
            return REJECTED
        return UNCHANGED

    return ClampOutcome(status="adjusted", value=nearest_bound(value, config))


__all__ = [
    "ClampOutcome",
    "ClampPhase",
    "REJECTED",
    "UNCHANGED",
    "clamp",
    "nearest_bound",
]
