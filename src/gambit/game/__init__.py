"""Game management layer: controller and state machine.

Quick start::

    from gambit.game import GameController
    from gambit.core.types import E2, E4

    ctrl = GameController()
    ctrl.new_game()
    status = ctrl.move(E2, E4)
"""

from gambit.game.controller import GameController, GameEvents, status_message
from gambit.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    SquareLike,
)
from gambit.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    "SquareLike",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
    "status_message",
]
