"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank delta of a pawn step (white moves toward rank 0)."""
        return -1 if self is Color.WHITE else 1

    @property
    def back_rank(self) -> int:
        return 7 if self is Color.WHITE else 0

    @property
    def pawn_rank(self) -> int:
        """Rank the pawns start on."""
        return 6 if self is Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
