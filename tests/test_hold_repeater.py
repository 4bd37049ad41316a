from __future__ import annotations

from typing import List

import pytest

from numeric_engine.formatting import StepDirection
from numeric_engine.host import HoldRepeater, HostMirror


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_repeater() -> tuple[HoldRepeater, FakeClock, List[StepDirection]]:
    clock = FakeClock()
    fired: List[StepDirection] = []
    repeater = HoldRepeater(fired.append, delay_ms=500, interval_ms=100, clock=clock)
    return repeater, clock, fired


def test_press_fires_immediately_then_after_delay() -> None:
    repeater, clock, fired = make_repeater()

    repeater.press(StepDirection.UP)
    assert fired == [StepDirection.UP]
    assert repeater.active
    assert repeater.direction is StepDirection.UP

    clock.now = 0.4
    assert repeater.poll() is False

    clock.now = 0.5
    assert repeater.poll() is True
    assert len(fired) == 2

    clock.now = 0.55
    assert repeater.poll() is False

    clock.now = 0.7
    assert repeater.poll() is True
    assert len(fired) == 3


def test_poll_fires_at_most_once_per_tick() -> None:
    repeater, clock, fired = make_repeater()
    repeater.press(StepDirection.DOWN)

    clock.now = 5.0
    assert repeater.poll() is True
    assert repeater.poll() is False
    assert fired == [StepDirection.DOWN, StepDirection.DOWN]


def test_release_stops_repeating() -> None:
    repeater, clock, fired = make_repeater()
    repeater.press(StepDirection.UP)
    repeater.release()

    clock.now = 1.0
    assert repeater.poll() is False
    assert not repeater.active
    assert repeater.direction is None
    assert fired == [StepDirection.UP]


def test_repeater_rejects_zero_interval() -> None:
    with pytest.raises(ValueError):
        HoldRepeater(lambda direction: None, interval_ms=0)


def test_host_mirror_selection_and_caret() -> None:
    mirror = HostMirror(text="1,234", caret=2, selection=(4, 1))

    assert mirror.edit_span() == (1, 4)
    mirror.set_caret(99)
    assert mirror.caret == 5
    assert mirror.selection is None
    assert mirror.edit_span() == (5, 5)
