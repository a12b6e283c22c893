"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessref.core.enums import GameResult
from chessref.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessref.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Draws by repetition, the 50-move rule or insufficient material are
    not detected; stalemate is the only draw.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return not gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the result for the side to move."""
        gen = MoveGenerator(position)
        if gen.has_legal_move():
            return GameResult.IN_PROGRESS

        if gen.is_in_check(position.side_to_move):
            return GameResult.win_for(position.side_to_move.opposite)
        return GameResult.DRAW  # stalemate
