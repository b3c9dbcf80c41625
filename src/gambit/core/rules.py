"""High-level chess rules: check, checkmate, stalemate, game status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import Color, GameResult
from gambit.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Snapshot of the derived game status after a move."""

    side_to_move: Color
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    last_move: Move | None = None

    @property
    def is_terminal(self) -> bool:
        return self.is_checkmate or self.is_stalemate

    @property
    def result(self) -> GameResult:
        if self.is_checkmate:
            return (
                GameResult.BLACK_WINS
                if self.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if self.is_stalemate:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def status(position: Position, last_move: Move | None = None) -> GameStatus:
        """Derive check / checkmate / stalemate for the side to move."""
        gen = MoveGenerator(position)
        color = position.side_to_move
        in_check = gen.is_in_check(color)
        no_moves = not gen.has_legal_moves()
        return GameStatus(
            side_to_move=color,
            is_check=in_check,
            is_checkmate=in_check and no_moves,
            is_stalemate=no_moves and not in_check,
            last_move=last_move,
        )

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        return Rules.status(position).result
