"""Textual adapter for the numeric engine."""

from .controller import TextualNumericAdapter, TextualUIHooks

__all__ = ["TextualNumericAdapter", "TextualUIHooks"]
