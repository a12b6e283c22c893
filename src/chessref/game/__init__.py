"""Game management layer — controller, outcomes, state machine.

Quick start::

    from chessref.core import parse_square
    from chessref.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.make_move(parse_square("e2"), parse_square("e4"))
"""

from chessref.game.controller import GameController, GameEvents
from chessref.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    MoveOutcome,
    OutcomeKind,
    Snapshot,
)
from chessref.game.state import GameState

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    "MoveOutcome",
    "OutcomeKind",
    "Snapshot",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
]
