"""Caret resolution across re-formatting."""

from .resolver import editable_bounds, place_after, resolve_caret, significant_anchor

__all__ = [
    "editable_bounds",
    "place_after",
    "resolve_caret",
    "significant_anchor",
]
