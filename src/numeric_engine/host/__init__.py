"""Host-side capabilities: caret access and press-and-hold repetition."""

from .caret import CaretHost, HostMirror, Selection
from .repeat import DEFAULT_HOLD_DELAY_MS, DEFAULT_HOLD_INTERVAL_MS, HoldRepeater

__all__ = [
    "CaretHost",
    "DEFAULT_HOLD_DELAY_MS",
    "DEFAULT_HOLD_INTERVAL_MS",
    "HoldRepeater",
    "HostMirror",
    "Selection",
]
