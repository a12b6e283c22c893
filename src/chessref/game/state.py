"""Game state machine — tracks phase transitions, captures and the result."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessref.core.enums import Color, GameResult, PieceType
from chessref.core.move import Move
from chessref.core.move_generator import MoveGenerator
from chessref.core.piece import Piece
from chessref.core.position import Position
from chessref.core.rules import Rules
from chessref.core.types import Square
from chessref.game.interfaces import GameEndReason, GamePhase, MoveOutcome


def _empty_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameState:
    """Manages game lifecycle: phase, result and captured pieces.

    This is a pure data/logic class — no threading, no UI. Legality is the
    caller's responsibility.
    """

    position: Position = field(default_factory=Position.initial, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason | None = field(default=None, init=False)
    # Pieces each color has lost, in capture order.
    captured: dict[Color, list[Piece]] = field(
        default_factory=_empty_captures, init=False
    )
    last_move: Move | None = field(default=None, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game.

        Raises :class:`MissingKingError` before touching any field when either
        king is absent from *position*.
        """
        position = position if position is not None else Position.initial()
        for color in Color:
            position.board.king_square(color)
        self.position = position
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        self.captured = _empty_captures()
        self.last_move = None
        if self.position.pending_promotion is not None:
            self.phase = GamePhase.AWAITING_PROMOTION
        else:
            self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveOutcome:
        """Apply a validated move and report how the turn continues."""
        captured = self.position.apply_move(move)
        if captured is not None:
            self.captured[captured.color].append(captured)
        self.last_move = move

        if self.position.pending_promotion is not None:
            self.phase = GamePhase.AWAITING_PROMOTION
            return MoveOutcome.pending_promotion(self.position.pending_promotion)
        return self._finish_turn()

    def resolve_promotion(self, sq: Square, piece_type: PieceType) -> MoveOutcome:
        self.position.promote(sq, piece_type)
        self.phase = GamePhase.AWAITING_MOVE
        return self._finish_turn()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def is_in_check(self) -> bool:
        return Rules.is_in_check(self.position)

    @property
    def winner(self) -> Color | None:
        if self.result == GameResult.WHITE_WINS:
            return Color.WHITE
        if self.result == GameResult.BLACK_WINS:
            return Color.BLACK
        return None

    def legal_moves_from(self, sq: Square) -> list[Move]:
        return MoveGenerator(self.position).legal_moves(sq)

    def status_text(self) -> str:
        """One-line status for the side panel."""
        if self.end_reason == GameEndReason.CHECKMATE and self.winner is not None:
            return f"Checkmate: {self.winner.display_name} wins"
        if self.end_reason == GameEndReason.STALEMATE:
            return "Stalemate: draw"
        name = self.side_to_move.display_name
        if self.phase == GamePhase.AWAITING_PROMOTION:
            return f"{name} to choose a promotion piece"
        if self.is_in_check:
            return f"{name} is in check"
        return f"{name}'s turn"

    # ── Internal ─────────────────────────────────────────────────────────

    def _finish_turn(self) -> MoveOutcome:
        self._check_game_over()
        if self.end_reason == GameEndReason.CHECKMATE:
            return MoveOutcome.checkmate(self.side_to_move.opposite)
        if self.end_reason == GameEndReason.STALEMATE:
            return MoveOutcome.stalemate()
        return MoveOutcome.continued()

    def _check_game_over(self) -> None:
        result = Rules.game_result(self.position)
        if result == GameResult.IN_PROGRESS:
            return
        self.result = result
        if result == GameResult.DRAW:
            self.end_reason = GameEndReason.STALEMATE
        else:
            self.end_reason = GameEndReason.CHECKMATE
        self.phase = GamePhase.GAME_OVER
