"""GameController: the boundary a presentation layer talks to.

Coordinates: GameState, MoveGenerator, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.enums import Color, GameResult
from gambit.core.errors import InvalidMoveAttempt, NoPieceAtSquare
from gambit.core.move import Move
from gambit.core.rules import GameStatus
from gambit.core.types import coerce_square
from gambit.game.interfaces import GamePhase, IGameController, SquareLike
from gambit.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameStatus], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


def status_message(status: GameStatus) -> str:
    """One-line text for an info display."""
    if status.is_checkmate:
        winner = status.side_to_move.opposite
        return f"Checkmate! {str(winner).capitalize()} wins!"
    if status.is_stalemate:
        return "Stalemate! Game is drawn."
    if status.is_check:
        return "Check!"
    return ""


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns one game: validates moves, applies them, notifies listeners.

    Every coordinate argument is validated before the state is touched, and
    a rejected move leaves the game exactly as it was. Methods are meant to
    be called from a single thread.
    """

    __slots__ = ("_state", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> GameStatus:
        self._state = GameState()
        self._state.setup(fen)
        _LOGGER.info("New game from %s", self._state.start_fen)

        self._emit_phase(self._state.phase)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
        return self._state.status

    def legal_moves(self, square: SquareLike) -> list[Move]:
        sq = coerce_square(square)
        if self._state.is_game_over:
            return []
        return self._state.legal_moves_from(sq)

    def select(self, square: SquareLike) -> list[Move]:
        sq = coerce_square(square)
        piece = self._state.position.board[sq]
        if piece is None or piece.color != self._state.side_to_move:
            raise NoPieceAtSquare(f"No {self._state.side_to_move} piece on {sq}")
        return self.legal_moves(sq)

    def is_legal(self, from_sq: SquareLike, to_sq: SquareLike) -> bool:
        return self._find_move(from_sq, to_sq) is not None

    def move(self, from_sq: SquareLike, to_sq: SquareLike) -> GameStatus:
        move = self._find_move(from_sq, to_sq)
        if move is None:
            raise InvalidMoveAttempt(
                f"Illegal move {coerce_square(from_sq)}{coerce_square(to_sq)}"
            )
        self._apply(move)
        return self._state.status

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            return False
        if move not in self.legal_moves(move.from_sq):
            _LOGGER.debug("Rejected move %s", move)
            return False
        self._apply(move)
        return True

    def status(self) -> GameStatus:
        return self._state.status

    def undo_move(self) -> bool:
        if not self._state.move_history:
            return False
        was_over = self._state.is_game_over
        self._state.undo_last_move()
        if was_over:
            self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _find_move(self, from_sq: SquareLike, to_sq: SquareLike) -> Move | None:
        origin = coerce_square(from_sq)
        target = coerce_square(to_sq)
        for move in self.legal_moves(origin):
            if move.to_sq == target:
                return move
        return None

    def _apply(self, move: Move) -> None:
        self._state.apply_move(move)
        self._emit_move(move, self._state.status)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)

    def _emit_move(self, move: Move, status: GameStatus) -> None:
        for cb in self.events.on_move:
            cb(move, status)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
