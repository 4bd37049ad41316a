"""Arrow-key and spinner stepping."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from numeric_engine.grammar import GrammarConfig

from .numbers import fraction_digits


class StepDirection(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def sign(self) -> int:
        return 1 if self is StepDirection.UP else -1


def step(
    current: Optional[float],
    direction: StepDirection,
    step_size: float,
    config: GrammarConfig,
) -> Optional[float]:
    """Return ``current`` moved one step, or ``None`` when a bound would be crossed.

    An empty value has nothing to step from and also yields ``None``. The sum
    is rounded to the fraction digits its operands carry so that ``0.1 + 0.2``
    lands on ``0.3``.
    """

    if step_size <= 0:
        raise ValueError("step_size must be positive")
    if current is None:
        return None
    places = max(fraction_digits(current), fraction_digits(step_size))
    candidate = round(current + direction.sign * step_size, places)

    if direction is StepDirection.UP and config.max is not None:
        if candidate > config.max:
            return None
    if direction is StepDirection.DOWN and config.min is not None:
        if candidate < config.min:
            return None
    return candidate


__all__ = ["StepDirection", "step"]
