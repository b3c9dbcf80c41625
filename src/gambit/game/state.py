"""Game state machine: tracks phase transitions and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gambit.core.enums import Color, GameResult
from gambit.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import GameStatus, Rules
from gambit.core.types import Square
from gambit.game.interfaces import GameEndReason, GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    piece: Piece
    status_after: GameStatus
    fen_after: str
    captured: Piece | None = None

    @property
    def was_check(self) -> bool:
        return self.status_after.is_check

    @property
    def was_capture(self) -> bool:
        return self.captured is not None


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, status, move history.

    This is a pure data/logic class: no threading, no UI.
    """

    position: Position = field(default_factory=Position, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    status: GameStatus = field(
        default_factory=lambda: GameStatus(side_to_move=Color.WHITE), init=False
    )
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game."""
        self.start_fen = fen or STARTING_FEN
        self.position = position_from_fen(self.start_fen)
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.move_history.clear()
        self.status = Rules.status(self.position)
        # A setup position may already be finished
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        board = self.position.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")
        captured = board[move.to_sq]
        if move.is_en_passant:
            captured = board[Square(move.from_sq.rank, move.to_sq.file)]

        self.position.make_move(move)
        self.status = Rules.status(self.position, last_move=move)

        record = MoveRecord(
            move=move,
            piece=piece,
            status_after=self.status,
            fen_after=position_to_fen(self.position),
            captured=captured,
        )
        self.move_history.append(record)
        _LOGGER.debug("Applied %s (%s %s)", move, piece.color, piece.piece_type)

        self._check_game_over()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.position.unmake_move(record.move)
        last_move = self.move_history[-1].move if self.move_history else None
        self.status = Rules.status(self.position, last_move=last_move)

        # Reset result if we un-did a game-ending move
        if self.result != GameResult.IN_PROGRESS:
            self.result = GameResult.IN_PROGRESS
            self.end_reason = GameEndReason.NONE
            self.phase = GamePhase.AWAITING_MOVE

        _LOGGER.debug("Undid %s", record.move)
        return record.move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def last_move(self) -> Move | None:
        return self.status.last_move

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self.position).generate_legal_moves()

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*."""
        return MoveGenerator(self.position).legal_moves_from(sq)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        if not self.status.is_terminal:
            return
        self.result = self.status.result
        self.end_reason = (
            GameEndReason.CHECKMATE
            if self.status.is_checkmate
            else GameEndReason.STALEMATE
        )
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info("Game over: %s by %s", self.result.name, self.end_reason.name)
