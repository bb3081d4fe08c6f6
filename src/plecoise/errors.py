"""Exceptions raised while converting a deck."""
from __future__ import annotations


class DeckError(RuntimeError):
    """Raised when a deck or its dictionary cannot be read, converted or written."""


__all__ = ["DeckError"]
