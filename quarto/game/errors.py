"""Exceptions raised by the game core."""

from __future__ import annotations


class QuartoError(Exception):
    """A rejected move. The caller may retry with different input."""


class CellOccupied(QuartoError):
    pass


class IllegalTransition(QuartoError):
    pass


class UnknownPiece(QuartoError):
    pass


class EmptyChoice(AssertionError):
    """Raised when asked to choose from an empty sequence (a programming error)."""
