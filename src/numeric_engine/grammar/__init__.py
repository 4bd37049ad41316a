"""Grammar configuration and edit hints."""

from .config import DIGITS, MINUS, ClampPolicy, GrammarConfig, GrammarConfigError
from .hints import COMMIT, TYPING, EditHints

__all__ = [
    "ClampPolicy",
    "COMMIT",
    "DIGITS",
    "EditHints",
    "GrammarConfig",
    "GrammarConfigError",
    "MINUS",
    "TYPING",
]
