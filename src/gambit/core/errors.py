"""Exceptions raised by the rules engine.

None of them is fatal: each one means "nothing changed, ask again".
"""

from __future__ import annotations


class GambitError(ValueError):
    """Base class for engine errors."""


class MalformedCoordinate(GambitError):
    """A coordinate outside the 8x8 board (or an unparseable square name)."""


class NoPieceAtSquare(GambitError):
    """Selection of an empty square or of a piece the side to move does not own."""


class InvalidMoveAttempt(GambitError):
    """The requested move is not among the legal moves of the position."""
