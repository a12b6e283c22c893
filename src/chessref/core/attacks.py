"""Attack detection and check status — pure functions of a board."""

from __future__ import annotations

from chessref.core.board import Board
from chessref.core.enums import Color, PieceType
from chessref.core.piece import Piece
from chessref.core.types import BOARD_SIZE, Square, all_squares, is_valid_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Row delta of a single pawn advance. White marches toward row 0.
PAWN_FORWARD: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}

_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in all_squares():
        targets[sq] = tuple(
            Square(sq.row + dr, sq.col + dc)
            for dr, dc in offsets
            if is_valid_square(sq.row + dr, sq.col + dc)
        )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in all_squares():
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r, c = sq.row + dr, sq.col + dc
            ray: list[Square] = []
            while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
                ray.append(Square(r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Oracle -----------------------------------------------------------------


def pawn_attacker_squares(sq: Square, attacker: Color) -> list[Square]:
    """Squares from which a pawn of *attacker* would hit *sq*.

    A pawn advancing by ``d`` rows attacks ``(row + d, col ± 1)``, so its
    attackers stand one advance *behind* the target: ``(row - d, col ± 1)``.
    """
    row = sq.row - PAWN_FORWARD[attacker]
    return [
        Square(row, col)
        for col in (sq.col - 1, sq.col + 1)
        if is_valid_square(row, col)
    ]


def is_square_attacked(board: Board, sq: Square, color: Color) -> bool:
    """Is *sq* attacked by the opponent of *color*?"""
    board.validate_square(sq)
    enemy = color.opposite

    pawn = Piece(enemy, PieceType.PAWN)
    if any(board[s] == pawn for s in pawn_attacker_squares(sq, enemy)):
        return True

    knight = Piece(enemy, PieceType.KNIGHT)
    if any(board[s] == knight for s in KNIGHT_TARGETS[sq]):
        return True

    king = Piece(enemy, PieceType.KING)
    if any(board[s] == king for s in KING_TARGETS[sq]):
        return True

    if _ray_hits(board, ROOK_RAYS[sq], enemy, _ORTHOGONAL_ATTACKERS):
        return True

    return _ray_hits(board, BISHOP_RAYS[sq], enemy, _DIAGONAL_ATTACKERS)


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    enemy: Color,
    attackers: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == enemy and piece.piece_type in attackers:
                return True
            break  # blocked
    return False


def is_king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked?

    Raises :class:`~chessref.core.errors.MissingKingError` when the king is
    absent: that is an invariant violation, not a "safe" position.
    """
    return is_square_attacked(board, board.king_square(color), color)
