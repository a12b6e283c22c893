"""GameController — the single authoritative entry point into a game.

Validates every request before touching the state so a rejected call
leaves the game exactly as it was. Emits events via simple callbacks so
the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessref.core.board import Board
from chessref.core.enums import Color, GameResult, PieceType
from chessref.core.errors import (
    GameOverError,
    IllegalMoveError,
    NoPieceAtSquareError,
    NotSideToMoveError,
    PromotionMismatchError,
)
from chessref.core.move import Move
from chessref.core.position import Position
from chessref.core.types import Square, square_name
from chessref.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    MoveOutcome,
    OutcomeKind,
    Snapshot,
)
from chessref.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
PromotionCallback = Callable[[Square, Color], None]  # square, mover
GameOverCallback = Callable[[GameResult, GameEndReason], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a two-player game: validates moves, applies them,
    evaluates the position and notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).
    """

    __slots__ = ("_state", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, position: Position | None = None) -> GameState:
        state = GameState()
        state.setup(position)
        self._state = state
        _LOGGER.debug("New game, %s to move", self._state.side_to_move)
        if self._state.is_game_over:
            self._emit_game_over()
        return self._state

    def select_square(self, sq: Square) -> list[Move]:
        Board.validate_square(sq)
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return []
        piece = self._state.position.board[sq]
        if piece is None or piece.color != self._state.side_to_move:
            return []
        return self._state.legal_moves_from(sq)

    def make_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        move = self._validate_move(from_sq, to_sq)
        outcome = self._state.apply_move(move)
        _LOGGER.debug("Played %s (%s)", move, move.flag.name.lower())
        self._emit_move(move)
        self._emit_outcome(outcome)
        return outcome

    def resolve_promotion(self, sq: Square, piece_type: PieceType) -> MoveOutcome:
        Board.validate_square(sq)
        if self._state.phase != GamePhase.AWAITING_PROMOTION:
            raise PromotionMismatchError("No promotion is pending")
        outcome = self._state.resolve_promotion(sq, piece_type)
        _LOGGER.debug("Promoted on %s to %s", square_name(sq), piece_type.name)
        self._emit_outcome(outcome)
        return outcome

    def snapshot(self) -> Snapshot:
        state = self._state
        return Snapshot(
            board=state.position.board.copy(),
            side_to_move=state.side_to_move,
            in_check=state.is_in_check,
            pending_promotion=state.position.pending_promotion,
            result=state.result,
        )

    # ── Validation ───────────────────────────────────────────────────────

    def _validate_move(self, from_sq: Square, to_sq: Square) -> Move:
        """Return the legal candidate for *from_sq* → *to_sq* or raise."""
        Board.validate_square(from_sq)
        Board.validate_square(to_sq)

        state = self._state
        if state.is_game_over:
            raise GameOverError("The game is over")
        if state.phase == GamePhase.AWAITING_PROMOTION:
            raise PromotionMismatchError("Resolve the pending promotion first")

        piece = state.position.board[from_sq]
        if piece is None:
            raise NoPieceAtSquareError(f"No piece on {square_name(from_sq)}")
        if piece.color != state.side_to_move:
            raise NotSideToMoveError(
                f"{piece.name.capitalize()} on {square_name(from_sq)} cannot move:"
                f" {state.side_to_move.display_name} to play"
            )

        for move in state.legal_moves_from(from_sq):
            if move.to_sq == to_sq:
                return move

        _LOGGER.debug("Rejected %s%s", square_name(from_sq), square_name(to_sq))
        raise IllegalMoveError(
            f"Illegal move: {square_name(from_sq)} to {square_name(to_sq)}"
        )

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_outcome(self, outcome: MoveOutcome) -> None:
        if outcome.kind == OutcomeKind.PENDING_PROMOTION and outcome.square is not None:
            for promo_cb in self.events.on_promotion_required:
                promo_cb(outcome.square, self._state.side_to_move)
        elif outcome.is_terminal:
            self._emit_game_over()

    def _emit_game_over(self) -> None:
        state = self._state
        _LOGGER.info("Game over: %s", state.status_text())
        if state.end_reason is None:
            return
        for cb in self.events.on_game_over:
            cb(state.result, state.end_reason)
