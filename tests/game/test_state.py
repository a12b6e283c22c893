"""Tests for GameState — phase machine, captures and status text."""

import pytest

from chessref.core.board import Board
from chessref.core.enums import Color, GameResult, MoveFlag, PieceType
from chessref.core.errors import MissingKingError
from chessref.core.move import Move
from chessref.core.piece import Piece
from chessref.core.position import Position
from chessref.core.types import A7, A8, D5, E2, E4, parse_square
from chessref.game.interfaces import GameEndReason, GamePhase, OutcomeKind
from chessref.game.state import GameState

BACK_RANK_MATE = [
    ".......k",
    "P.....pp",
    "........",
    "........",
    "........",
    "........",
    "........",
    "....K...",
]


def _state(rows: list[str] | None = None, side: Color = Color.WHITE) -> GameState:
    state = GameState()
    position = Position(Board.from_rows(rows), side) if rows else None
    state.setup(position)
    return state


class TestSetup:
    def test_not_started_before_setup(self) -> None:
        assert GameState().phase == GamePhase.NOT_STARTED

    def test_initial(self) -> None:
        state = _state()
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.result == GameResult.IN_PROGRESS
        assert state.side_to_move == Color.WHITE
        assert state.captured == {Color.WHITE: [], Color.BLACK: []}
        assert state.last_move is None
        assert not state.is_game_over

    def test_setup_resets(self) -> None:
        state = _state()
        state.apply_move(Move(E2, E4))
        state.setup()
        assert state.position.board == Board.initial()
        assert state.last_move is None
        assert state.side_to_move == Color.WHITE

    def test_setup_on_finished_position(self) -> None:
        state = _state(
            [
                "....k...",
                "....Q...",
                "....K...",
                "........",
                "........",
                "........",
                "........",
                "........",
            ],
            Color.BLACK,
        )
        assert state.is_game_over
        assert state.result == GameResult.WHITE_WINS
        assert state.end_reason == GameEndReason.CHECKMATE

    def test_setup_rejects_missing_king(self) -> None:
        state = _state()
        state.apply_move(Move(E2, E4))
        rows = ["........"] * 7 + ["....K..."]
        with pytest.raises(MissingKingError):
            state.setup(Position(Board.from_rows(rows)))
        assert state.last_move == Move(E2, E4)
        assert state.side_to_move == Color.BLACK
        assert state.phase == GamePhase.AWAITING_MOVE

    def test_setup_with_pending_promotion(self) -> None:
        position = Position(Board.from_rows(BACK_RANK_MATE))
        position.apply_move(Move(A7, A8))
        state = GameState()
        state.setup(position)
        assert state.phase == GamePhase.AWAITING_PROMOTION


class TestApplyMove:
    def test_records_last_move_and_flips(self) -> None:
        state = _state()
        move = Move(E2, E4)
        outcome = state.apply_move(move)
        assert outcome.kind == OutcomeKind.CONTINUED
        assert state.last_move == move
        assert state.side_to_move == Color.BLACK

    def test_captures_tracked_by_loser(self) -> None:
        state = _state()
        state.apply_move(Move(E2, E4))
        state.apply_move(Move(parse_square("d7"), D5))
        state.apply_move(Move(E4, D5, MoveFlag.CAPTURE))
        assert state.captured[Color.BLACK] == [Piece(Color.BLACK, PieceType.PAWN)]
        assert state.captured[Color.WHITE] == []

    def test_promotion_suspends(self) -> None:
        state = _state(BACK_RANK_MATE)
        outcome = state.apply_move(Move(A7, A8))
        assert outcome.kind == OutcomeKind.PENDING_PROMOTION
        assert outcome.square == A8
        assert state.phase == GamePhase.AWAITING_PROMOTION
        assert state.side_to_move == Color.WHITE

    def test_promotion_to_queen_mates(self) -> None:
        state = _state(BACK_RANK_MATE)
        state.apply_move(Move(A7, A8))
        outcome = state.resolve_promotion(A8, PieceType.QUEEN)
        assert outcome.kind == OutcomeKind.CHECKMATE
        assert outcome.winner == Color.WHITE
        assert state.is_game_over
        assert state.winner == Color.WHITE

    def test_underpromotion_continues(self) -> None:
        state = _state(BACK_RANK_MATE)
        state.apply_move(Move(A7, A8))
        outcome = state.resolve_promotion(A8, PieceType.KNIGHT)
        assert outcome.kind == OutcomeKind.CONTINUED
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.side_to_move == Color.BLACK


class TestStatusText:
    def test_turns(self) -> None:
        state = _state()
        assert state.status_text() == "White's turn"
        state.apply_move(Move(E2, E4))
        assert state.status_text() == "Black's turn"

    def test_check(self) -> None:
        state = _state(
            [
                "....k...",
                "........",
                "........",
                "........",
                "........",
                "........",
                "........",
                "....K..R",
            ]
        )
        state.apply_move(Move(parse_square("h1"), parse_square("h8")))
        assert state.is_in_check
        assert state.status_text() == "Black is in check"

    def test_promotion_pending(self) -> None:
        state = _state(BACK_RANK_MATE)
        state.apply_move(Move(A7, A8))
        assert state.status_text() == "White to choose a promotion piece"

    def test_checkmate(self) -> None:
        state = _state(BACK_RANK_MATE)
        state.apply_move(Move(A7, A8))
        state.resolve_promotion(A8, PieceType.ROOK)
        assert state.status_text() == "Checkmate: White wins"

    def test_stalemate(self) -> None:
        state = _state(
            [
                ".......k",
                "........",
                "......Q.",
                "........",
                "........",
                "........",
                "........",
                "K.......",
            ],
            Color.BLACK,
        )
        assert state.end_reason == GameEndReason.STALEMATE
        assert state.result == GameResult.DRAW
        assert state.winner is None
        assert state.status_text() == "Stalemate: draw"
