"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessref.core import MoveGenerator, Position, parse_square

    pos = Position.initial()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves(parse_square("g1")):
        print(move)
"""

from chessref.core.attacks import is_king_in_check, is_square_attacked
from chessref.core.board import Board
from chessref.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
)
from chessref.core.errors import (
    ChessRulesError,
    GameOverError,
    IllegalMoveError,
    InvalidSquareError,
    MissingKingError,
    NoPieceAtSquareError,
    NotSideToMoveError,
    PromotionMismatchError,
)
from chessref.core.move import Move
from chessref.core.move_generator import MoveGenerator
from chessref.core.piece import Piece
from chessref.core.position import Position
from chessref.core.rules import Rules
from chessref.core.types import (
    Square,
    is_valid_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Oracle
    "is_king_in_check",
    "is_square_attacked",
    # Errors
    "ChessRulesError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidSquareError",
    "MissingKingError",
    "NoPieceAtSquareError",
    "NotSideToMoveError",
    "PromotionMismatchError",
]
