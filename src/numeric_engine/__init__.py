"""UI-agnostic numeric text editing engine."""

__all__ = [
    "adapters",
    "cursor",
    "engine",
    "formatting",
    "grammar",
    "host",
    "runtime",
]

__version__ = "0.1.0"
