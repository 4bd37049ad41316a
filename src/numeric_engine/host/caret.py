"""Capabilities a host text surface provides to the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

Selection = Tuple[int, int]


class CaretHost(Protocol):
    """Read and write the caret of a live text surface.

    The engine only ever produces and consumes plain indices; the host owns
    the rendering surface.
    """

    def get_caret(self) -> int:
        """Return the caret index in the displayed text."""
        ...

    def set_caret(self, index: int) -> None:
        """Move the caret to ``index``."""
        ...


@dataclass(slots=True)
class HostMirror:
    """Host-side snapshot of what the surface shows."""

    text: str = ""
    caret: int = 0
    selection: Optional[Selection] = None
    caret_visible: bool = True

    def get_caret(self) -> int:
        return self.caret

    def set_caret(self, index: int) -> None:
        self.caret = max(0, min(index, len(self.text)))
        self.selection = None

    def edit_span(self) -> Selection:
        """Return ``(start, end)`` of the selection, or the collapsed caret."""

        if self.selection is None:
            return (self.caret, self.caret)
        start, end = self.selection
        return (start, end) if start <= end else (end, start)


__all__ = ["CaretHost", "HostMirror", "Selection"]
