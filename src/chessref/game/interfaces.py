"""Phases, outcomes and the abstract controller interface.

The presentation layer depends on :class:`IGameController`, not on the
concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessref.core.enums import Color, GameResult, PieceType

if TYPE_CHECKING:
    from chessref.core.board import Board
    from chessref.core.move import Move
    from chessref.core.position import Position
    from chessref.core.types import Square
    from chessref.game.state import GameState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # pawn on last rank, piece not chosen yet
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    CHECKMATE = auto()
    STALEMATE = auto()


# ── Outcomes ─────────────────────────────────────────────────────────────────


class OutcomeKind(IntEnum):
    CONTINUED = auto()
    PENDING_PROMOTION = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What happened after a move or a promotion choice."""

    kind: OutcomeKind
    square: Square | None = None  # pending promotion square
    winner: Color | None = None  # checkmate winner

    @classmethod
    def continued(cls) -> MoveOutcome:
        return cls(OutcomeKind.CONTINUED)

    @classmethod
    def pending_promotion(cls, square: Square) -> MoveOutcome:
        return cls(OutcomeKind.PENDING_PROMOTION, square=square)

    @classmethod
    def checkmate(cls, winner: Color) -> MoveOutcome:
        return cls(OutcomeKind.CHECKMATE, winner=winner)

    @classmethod
    def stalemate(cls) -> MoveOutcome:
        return cls(OutcomeKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (OutcomeKind.CHECKMATE, OutcomeKind.STALEMATE)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the game for display. The board is a copy."""

    board: Board
    side_to_move: Color
    in_check: bool
    pending_promotion: Square | None = None
    result: GameResult = GameResult.IN_PROGRESS


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, position: Position | None = None) -> GameState:
        """Set up a new game from the standard position (or *position*)."""

    @abstractmethod
    def select_square(self, sq: Square) -> list[Move]:
        """Legal candidates from *sq*; empty if not the mover's piece."""

    @abstractmethod
    def make_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Apply the legal move *from_sq* → *to_sq*."""

    @abstractmethod
    def resolve_promotion(self, sq: Square, piece_type: PieceType) -> MoveOutcome:
        """Complete a pending promotion with *piece_type*."""

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """Board, side to move and check status for display."""
