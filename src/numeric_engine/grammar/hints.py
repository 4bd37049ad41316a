"""Per-edit flags that influence grammar decisions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EditHints:
    """Facts about the current edit that the text alone cannot reveal.

    ``sign_key`` marks a press of the minus key, which toggles the sign
    instead of inserting a second ``-``. ``commit`` enables deferred
    formatting (fixed decimal padding, dangling separator cleanup).
    """

    sign_key: bool = False
    commit: bool = False


TYPING = EditHints()
COMMIT = EditHints(commit=True)

__all__ = ["EditHints", "TYPING", "COMMIT"]
