"""Tests for Position: move execution and castling-rights bookkeeping."""

import pytest

from chessref.core.board import Board
from chessref.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessref.core.errors import (
    IllegalMoveError,
    NoPieceAtSquareError,
    PromotionMismatchError,
)
from chessref.core.move import Move
from chessref.core.piece import Piece
from chessref.core.position import Position
from chessref.core.types import (
    A1,
    A7,
    A8,
    B8,
    C1,
    D1,
    D5,
    D6,
    E1,
    E2,
    E4,
    E5,
    E7,
    E8,
    F1,
    G1,
    G2,
    H1,
    H8,
    parse_square,
)

CASTLE_ROWS = [
    "r...k..r",
    "........",
    "........",
    "........",
    "........",
    "........",
    "........",
    "R...K..R",
]


def _castle_position(side: Color = Color.WHITE) -> Position:
    return Position(Board.from_rows(CASTLE_ROWS), side, CastlingRights.ALL)


class TestInitial:
    def test_defaults(self) -> None:
        pos = Position.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.pending_promotion is None
        assert pos.board == Board.initial()


class TestApplyMove:
    def test_quiet_move_flips_side(self) -> None:
        pos = Position.initial()
        captured = pos.apply_move(Move(parse_square("g1"), parse_square("f3")))
        assert captured is None
        assert pos.board[parse_square("f3")] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert pos.board.is_empty(parse_square("g1"))
        assert pos.side_to_move == Color.BLACK

    def test_capture_returns_victim(self) -> None:
        pos = Position(
            Board.from_rows(
                [
                    "....k...",
                    "........",
                    "........",
                    "...p....",
                    "....P...",
                    "........",
                    "........",
                    "....K...",
                ]
            )
        )
        captured = pos.apply_move(Move(E4, D5, MoveFlag.CAPTURE))
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board[D5] == Piece(Color.WHITE, PieceType.PAWN)

    def test_empty_origin_raises(self) -> None:
        pos = Position.initial()
        with pytest.raises(NoPieceAtSquareError):
            pos.apply_move(Move(E4, parse_square("e5")))
        assert pos.board == Board.initial()
        assert pos.side_to_move == Color.WHITE


class TestEnPassantTarget:
    def test_double_step_sets_midpoint(self) -> None:
        pos = Position.initial()
        pos.apply_move(Move(E2, E4))
        assert pos.en_passant == parse_square("e3")

    def test_black_double_step_sets_midpoint(self) -> None:
        pos = Position.initial()
        pos.apply_move(Move(E2, E4))
        pos.apply_move(Move(E7, E5))
        assert pos.en_passant == parse_square("e6")

    def test_window_expires_after_one_move(self) -> None:
        pos = Position.initial()
        pos.apply_move(Move(E2, E4))
        pos.apply_move(Move(parse_square("g8"), parse_square("f6")))
        assert pos.en_passant is None

    def test_single_step_clears_target(self) -> None:
        pos = Position.initial()
        pos.apply_move(Move(E2, E4))
        pos.apply_move(Move(E7, parse_square("e6")))
        assert pos.en_passant is None

    def test_en_passant_removes_victim(self) -> None:
        pos = Position(
            Board.from_rows(
                [
                    "....k...",
                    "........",
                    "........",
                    "...pP...",
                    "........",
                    "........",
                    "........",
                    "....K...",
                ]
            ),
            en_passant=D6,
        )
        captured = pos.apply_move(Move(E5, D6, MoveFlag.EN_PASSANT))
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board.is_empty(D5)
        assert pos.board.is_empty(E5)
        assert pos.board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert pos.en_passant is None


class TestCastlingExecution:
    def test_white_kingside_relocates_rook(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board.is_empty(H1)
        assert pos.board.is_empty(E1)
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_white_queenside_relocates_rook(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board.is_empty(A1)

    def test_black_kingside_relocates_rook(self) -> None:
        pos = _castle_position(Color.BLACK)
        pos.apply_move(Move(E8, parse_square("g8"), MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[parse_square("f8")] == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.board.is_empty(H8)
        assert pos.castling == CastlingRights.WHITE_BOTH
        assert pos.side_to_move == Color.WHITE


class TestCastlingRights:
    def test_king_move_revokes_both(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(E1, E2))
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_revokes_its_wing(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(H1, parse_square("h4")))
        assert not pos.can_castle(Color.WHITE, kingside=True)
        assert pos.can_castle(Color.WHITE, kingside=False)

    def test_rights_never_return(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(H1, parse_square("h4")))
        pos.apply_move(Move(E8, E7))
        pos.apply_move(Move(parse_square("h4"), H1))
        assert not pos.can_castle(Color.WHITE, kingside=True)
        assert pos.castling == CastlingRights.WHITE_QUEENSIDE

    def test_capturing_corner_rook_revokes_victims_right(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(A1, A8, MoveFlag.CAPTURE))
        assert not pos.can_castle(Color.BLACK, kingside=False)
        assert pos.can_castle(Color.BLACK, kingside=True)
        # The capturing rook left its own corner too.
        assert not pos.can_castle(Color.WHITE, kingside=False)

    def test_rook_move_leaves_opponent_rights(self) -> None:
        pos = _castle_position()
        pos.apply_move(Move(A1, parse_square("a4")))
        assert pos.can_castle(Color.BLACK, kingside=False)


PROMOTION_ROWS = [
    ".r.....k",
    "P.......",
    "........",
    "........",
    "........",
    "........",
    "......p.",
    "....K...",
]


class TestPromotion:
    def test_push_suspends_turn(self) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        pos.apply_move(Move(A7, A8))
        assert pos.pending_promotion == A8
        assert pos.side_to_move == Color.WHITE
        assert pos.board[A8] == Piece(Color.WHITE, PieceType.PAWN)

    @pytest.mark.parametrize(
        "piece_type",
        [PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT],
    )
    def test_promote_replaces_pawn(self, piece_type: PieceType) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        pos.apply_move(Move(A7, A8))
        promoted = pos.promote(A8, piece_type)
        assert promoted == Piece(Color.WHITE, piece_type)
        assert pos.board[A8] == promoted
        assert pos.pending_promotion is None
        assert pos.side_to_move == Color.BLACK

    def test_capture_promotion(self) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        captured = pos.apply_move(Move(A7, B8, MoveFlag.CAPTURE))
        assert captured == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.pending_promotion == B8

    def test_black_promotes_on_first_rank(self) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS), Color.BLACK)
        pos.apply_move(Move(G2, G1))
        assert pos.pending_promotion == G1
        pos.promote(G1, PieceType.KNIGHT)
        assert pos.board[G1] == Piece(Color.BLACK, PieceType.KNIGHT)
        assert pos.side_to_move == Color.WHITE

    def test_promote_without_pending(self) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        with pytest.raises(PromotionMismatchError):
            pos.promote(A8, PieceType.QUEEN)

    def test_promote_wrong_square(self) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        pos.apply_move(Move(A7, A8))
        with pytest.raises(PromotionMismatchError):
            pos.promote(B8, PieceType.QUEEN)
        assert pos.pending_promotion == A8

    @pytest.mark.parametrize("piece_type", [PieceType.KING, PieceType.PAWN])
    def test_promote_to_invalid_type(self, piece_type: PieceType) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        pos.apply_move(Move(A7, A8))
        with pytest.raises(IllegalMoveError):
            pos.promote(A8, piece_type)
        assert pos.board[A8] == Piece(Color.WHITE, PieceType.PAWN)
        assert pos.pending_promotion == A8

    def test_promote_to_non_piece_type(self) -> None:
        pos = Position(Board.from_rows(PROMOTION_ROWS))
        pos.apply_move(Move(A7, A8))
        with pytest.raises(IllegalMoveError, match="'q'"):
            pos.promote(A8, "q")
        assert pos.pending_promotion == A8


class TestCopy:
    def test_copy_is_deep(self) -> None:
        pos = Position.initial()
        clone = pos.copy()
        clone.apply_move(Move(E2, E4))
        assert pos.board == Board.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant is None
