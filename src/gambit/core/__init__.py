"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import MoveGenerator, Position
    from gambit.core.types import E2

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves_from(E2):
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from gambit.core.errors import (
    GambitError,
    InvalidMoveAttempt,
    MalformedCoordinate,
    NoPieceAtSquare,
)
from gambit.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import GameStatus, Rules
from gambit.core.types import (
    Square,
    coerce_square,
    is_on_board,
    make_square,
    parse_square,
    square_from_id,
    square_id,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "GambitError",
    "InvalidMoveAttempt",
    "MalformedCoordinate",
    "NoPieceAtSquare",
    # Types / helpers
    "Square",
    "coerce_square",
    "is_on_board",
    "make_square",
    "parse_square",
    "square_from_id",
    "square_id",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # FEN
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
