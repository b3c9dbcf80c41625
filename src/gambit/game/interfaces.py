"""Abstract interfaces for the game layer.

The presentation layer (board widget, drag-and-drop, highlighting) depends on
:class:`IGameController` only, never on the rules internals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING, TypeAlias

from gambit.core.types import Square

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.rules import GameStatus

SquareLike: TypeAlias = Square | tuple[int, int]


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> GameStatus:
        """Set up a new game from the initial position (or *fen*)."""

    @abstractmethod
    def legal_moves(self, square: SquareLike) -> list[Move]:
        """Legal moves of the piece on *square* (empty if none)."""

    @abstractmethod
    def select(self, square: SquareLike) -> list[Move]:
        """Pick up the piece on *square*; raises ``NoPieceAtSquare``."""

    @abstractmethod
    def is_legal(self, from_sq: SquareLike, to_sq: SquareLike) -> bool:
        """Whether moving from *from_sq* to *to_sq* is legal."""

    @abstractmethod
    def move(self, from_sq: SquareLike, to_sq: SquareLike) -> GameStatus:
        """Play a move; raises ``InvalidMoveAttempt`` and changes nothing if illegal."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def status(self) -> GameStatus:
        """Read-only snapshot of the current game status."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
