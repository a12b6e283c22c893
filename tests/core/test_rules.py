"""Tests for check, checkmate and stalemate detection."""

from chessref.core.board import Board
from chessref.core.enums import Color, GameResult
from chessref.core.move import Move
from chessref.core.position import Position
from chessref.core.rules import Rules
from chessref.core.types import parse_square

QUEEN_MATE = [
    "....k...",
    "....Q...",
    "....K...",
    "........",
    "........",
    "........",
    "........",
    "........",
]

CORNER_STALEMATE = [
    ".......k",
    "........",
    "......Q.",
    "........",
    "........",
    "........",
    "........",
    "K.......",
]


def _position(rows: list[str], side: Color) -> Position:
    return Position(Board.from_rows(rows), side)


class TestInitial:
    def test_in_progress(self) -> None:
        pos = Position.initial()
        assert not Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS


class TestCheckmate:
    def test_supported_queen_mates(self) -> None:
        pos = _position(QUEEN_MATE, Color.BLACK)
        assert Rules.is_in_check(pos)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_unsupported_queen_can_be_taken(self) -> None:
        rows = list(QUEEN_MATE)
        rows[2] = "........"
        rows[7] = "K......."
        pos = _position(rows, Color.BLACK)
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS

    def test_fools_mate(self) -> None:
        pos = Position.initial()
        for frm, to in (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")):
            pos.apply_move(Move(parse_square(frm), parse_square(to)))
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS


class TestStalemate:
    def test_cornered_king(self) -> None:
        pos = _position(CORNER_STALEMATE, Color.BLACK)
        assert not Rules.is_in_check(pos)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_same_position_other_side_to_move(self) -> None:
        pos = _position(CORNER_STALEMATE, Color.WHITE)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS
