"""Qt bridge exposing a :class:`GameController` to a Qt board view."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.enums import GameResult
from gambit.core.errors import GambitError
from gambit.core.move import Move
from gambit.core.rules import GameStatus
from gambit.game.controller import GameController, status_message

_LOGGER = logging.getLogger(__name__)


class GameSession(QObject):
    """Signal/slot front for one game, living on the GUI thread.

    A view calls :meth:`request_move` with the ``(rank, file)`` pairs of a
    drag-and-drop or click-click gesture and repaints from the signals.
    """

    move_applied = pyqtSignal(object, object)  # Move, GameStatus
    move_rejected = pyqtSignal(str)
    status_changed = pyqtSignal(str)
    game_over = pyqtSignal(int)  # GameResult

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        self._controller.events.on_move.append(self._on_move)
        self._controller.events.on_game_over.append(self._on_game_over)

    @property
    def controller(self) -> GameController:
        return self._controller

    def legal_targets(self, square: object) -> list[tuple[int, int]]:
        """Destination squares to highlight for the piece on *square*."""
        try:
            moves = self._controller.legal_moves(square)  # type: ignore[arg-type]
        except GambitError:
            return []
        return [tuple(move.to_sq) for move in moves]

    @pyqtSlot()
    @pyqtSlot(str)
    def new_game(self, fen: str | None = None) -> None:
        """Start over from the initial position (or *fen*)."""
        try:
            status = self._controller.new_game(fen or None)
        except ValueError as exc:
            self.move_rejected.emit(str(exc))
            return
        self.status_changed.emit(status_message(status))

    @pyqtSlot(object, object)
    def request_move(self, from_sq: object, to_sq: object) -> None:
        """Try to play *from_sq* → *to_sq*; emits exactly one outcome signal."""
        try:
            self._controller.move(from_sq, to_sq)  # type: ignore[arg-type]
        except GambitError as exc:
            _LOGGER.debug("Move request rejected: %s", exc)
            self.move_rejected.emit(str(exc))

    @pyqtSlot()
    def undo(self) -> None:
        if self._controller.undo_move():
            self.status_changed.emit(status_message(self._controller.status()))

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_move(self, move: Move, status: GameStatus) -> None:
        self.move_applied.emit(move, status)
        self.status_changed.emit(status_message(status))

    def _on_game_over(self, result: GameResult) -> None:
        self.game_over.emit(int(result))
