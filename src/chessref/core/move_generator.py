"""Per-square pseudo-legal and legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessref.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    PAWN_FORWARD,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_king_in_check,
    is_square_attacked,
)
from chessref.core.castling import HOME_ROW, WINGS, king_home
from chessref.core.enums import Color, MoveFlag, PieceType
from chessref.core.move import Move
from chessref.core.piece import Piece
from chessref.core.types import Square, is_valid_square

if TYPE_CHECKING:
    from chessref.core.position import Position

# Row a pawn of each color starts on (and may double-step from).
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}

_SLIDER_RAYS = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    The legality filter mutates board cells in place for each candidate
    but always restores them before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def pseudo_moves(self, sq: Square) -> list[Move]:
        """Moves obeying piece geometry only; castling is not included."""
        piece = self._board[sq]
        if piece is None:
            return []
        return self._generate(sq, piece, include_castling=False)

    def legal_moves(self, sq: Square, filter_check: bool = True) -> list[Move]:
        """Moves from *sq* that do not leave the mover's king in check.

        With ``filter_check=False`` this is :meth:`pseudo_moves`.
        """
        piece = self._board[sq]
        if piece is None:
            return []
        candidates = self._generate(sq, piece, include_castling=filter_check)
        if not filter_check:
            return candidates
        return [m for m in candidates if self._is_safe(m, piece.color)]

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color* (default: side to move)."""
        color = self._pos.side_to_move if color is None else color
        moves: list[Move] = []
        for sq in self._board.pieces(color):
            moves.extend(self.legal_moves(sq))
        return moves

    def has_legal_move(self, color: Color | None = None) -> bool:
        """Whether *color* has at least one legal move; stops at the first."""
        color = self._pos.side_to_move if color is None else color
        return any(self.legal_moves(sq) for sq in self._board.pieces(color))

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return is_king_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, color: Color) -> bool:
        """Is *sq* attacked by the opponent of *color*?"""
        return is_square_attacked(self._board, sq, color)

    # -- Check-safety probe -------------------------------------------------

    def _is_safe(self, move: Move, color: Color) -> bool:
        """Apply *move* to the board cells, test for check, restore.

        Only the cells the move touches are saved; castling rights, the
        en-passant target and the side to move are never modified.
        """
        board = self._board
        touched = [move.from_sq, move.to_sq]
        if move.flag == MoveFlag.EN_PASSANT:
            touched.append(move.en_passant_victim)
        saved = [(sq, board[sq]) for sq in touched]

        try:
            if move.flag == MoveFlag.EN_PASSANT:
                board[move.en_passant_victim] = None
            board[move.to_sq] = board[move.from_sq]
            board[move.from_sq] = None
            return not is_king_in_check(board, color)
        finally:
            for sq, cell in saved:
                board[sq] = cell

    # -- Piece-specific generators (private) -------------------------------

    def _generate(self, sq: Square, piece: Piece, include_castling: bool) -> list[Move]:
        moves: list[Move] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, KNIGHT_TARGETS[sq], moves)
        elif pt == PieceType.KING:
            self._gen_steps(sq, piece.color, KING_TARGETS[sq], moves)
            if include_castling:
                self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[pt][sq], moves)
        return moves

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        forward = PAWN_FORWARD[color]
        enemy_pawn = Piece(color.opposite, PieceType.PAWN)

        one_row = sq.row + forward
        if not 0 <= one_row < 8:
            return

        one_step = Square(one_row, sq.col)
        if board.is_empty(one_step):
            moves.append(Move(sq, one_step))
            if sq.row == PAWN_HOME_ROW[color]:
                two_step = Square(sq.row + 2 * forward, sq.col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for col in (sq.col - 1, sq.col + 1):
            if not is_valid_square(one_row, col):
                continue
            cap_sq = Square(one_row, col)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(Move(sq, cap_sq, MoveFlag.CAPTURE))
            elif (
                cap_sq == self._pos.en_passant
                and board[Square(sq.row, col)] == enemy_pawn
            ):
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        if king_sq != king_home(color):
            return

        board = self._board
        row = HOME_ROW[color]
        rook = Piece(color, PieceType.ROOK)

        for wing in WINGS:
            if not self._pos.castling & wing.right(color):
                continue
            if board[wing.rook_from(color)] != rook:
                continue
            if not all(board.is_empty(Square(row, c)) for c in wing.empty_cols):
                continue
            if any(
                is_square_attacked(board, Square(row, c), color) for c in wing.safe_cols
            ):
                continue
            moves.append(Move(king_sq, wing.king_to(color), wing.flag))
