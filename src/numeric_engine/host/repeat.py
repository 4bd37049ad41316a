"""Press-and-hold stepping driven by a host timer."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from numeric_engine.formatting import StepDirection
from numeric_engine.runtime import telemetry

DEFAULT_HOLD_DELAY_MS = 500
DEFAULT_HOLD_INTERVAL_MS = 100


@dataclass
class PendingRepeat:
    direction: StepDirection
    deadline: float


class HoldRepeater:
    """Fires a step on press, again after ``delay_ms``, then every ``interval_ms``.

    The repeater never sleeps; the host calls :meth:`poll` from its own timer
    and at most one step fires per poll.
    """

    def __init__(
        self,
        fire: Callable[[StepDirection], object],
        *,
        delay_ms: int = DEFAULT_HOLD_DELAY_MS,
        interval_ms: int = DEFAULT_HOLD_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if delay_ms < 0 or interval_ms <= 0:
            raise ValueError("delay_ms must be >= 0 and interval_ms > 0")
        self._fire = fire
        self.delay_ms = delay_ms
        self.interval_ms = interval_ms
        self._clock = clock
        self._pending: Optional[PendingRepeat] = None

    @property
    def active(self) -> bool:
        return self._pending is not None

    @property
    def direction(self) -> Optional[StepDirection]:
        return self._pending.direction if self._pending else None

    def press(self, direction: StepDirection) -> object:
        self._pending = PendingRepeat(
            direction=direction,
            deadline=self._clock() + self.delay_ms / 1000.0,
        )
        telemetry.record_event(
            "step.hold",
            level="debug",
            data={"direction": direction.value},
            logger_name="numeric_engine.host",
        )
        return self._fire(direction)

    def release(self) -> None:
        self._pending = None

    def poll(self) -> bool:
        """Fire one step if the pending deadline has passed; return whether it fired."""

        pending = self._pending
        if pending is None:
            return False
        now = self._clock()
        if now < pending.deadline:
            return False
        pending.deadline = now + self.interval_ms / 1000.0
        self._fire(pending.direction)
        return True


__all__ = [
    "DEFAULT_HOLD_DELAY_MS",
    "DEFAULT_HOLD_INTERVAL_MS",
    "HoldRepeater",
    "PendingRepeat",
]
