"""Position — board plus turn metadata, and the move executor."""

from __future__ import annotations

from chessref.core.board import Board
from chessref.core.castling import ROOK_CORNERS, WING_BY_FLAG
from chessref.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
)
from chessref.core.errors import (
    IllegalMoveError,
    NoPieceAtSquareError,
    PromotionMismatchError,
)
from chessref.core.move import Move
from chessref.core.piece import Piece
from chessref.core.types import Square, square_name

# Row a pawn of each color promotes on.
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


class Position:
    """Full rules state: board, side to move, castling, en passant and a
    possibly pending promotion.

    :meth:`apply_move` is the only way moves reach the board. A pawn that
    lands on the last row suspends the turn until :meth:`promote` is called.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "pending_promotion",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.pending_promotion: Square | None = None

    @classmethod
    def initial(cls) -> Position:
        return cls()

    # ── Core move operations ─────────────────────────────────────────────

    def apply_move(self, move: Move) -> Piece | None:
        """Execute a legal *move*; return the captured piece, if any.

        Caller is responsible for the legality check.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise NoPieceAtSquareError(f"No piece on {square_name(move.from_sq)}")

        captured = board[move.to_sq]
        captured_sq = move.to_sq

        # En passant: the captured pawn sits beside the mover, not on the target
        if move.flag == MoveFlag.EN_PASSANT:
            captured_sq = move.en_passant_victim
            captured = board[captured_sq]
            board[captured_sq] = None

        board[move.to_sq] = piece
        board[move.from_sq] = None

        wing = WING_BY_FLAG.get(move.flag)
        if wing is not None:
            rook_from = wing.rook_from(piece.color)
            board[wing.rook_to(piece.color)] = board[rook_from]
            board[rook_from] = None

        self._update_castling(move, piece, captured_sq if captured else None)

        self.en_passant = None
        if (
            piece.piece_type == PieceType.PAWN
            and abs(move.to_sq.row - move.from_sq.row) == 2
        ):
            self.en_passant = Square(
                (move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col
            )

        if (
            piece.piece_type == PieceType.PAWN
            and move.to_sq.row == PROMOTION_ROW[piece.color]
        ):
            self.pending_promotion = move.to_sq
        else:
            self.end_turn()
        return captured

    def promote(self, sq: Square, piece_type: PieceType) -> Piece:
        """Finish a suspended pawn move by replacing it with *piece_type*."""
        if self.pending_promotion is None:
            raise PromotionMismatchError("No promotion is pending")
        if sq != self.pending_promotion:
            raise PromotionMismatchError(
                f"Promotion is pending on {square_name(self.pending_promotion)},"
                f" not {square_name(sq)}"
            )
        if piece_type not in PROMOTION_TYPES:
            raise IllegalMoveError(f"Cannot promote to {piece_type!r}")

        promoted = Piece(self.side_to_move, piece_type)
        self.board[sq] = promoted
        self.pending_promotion = None
        self.end_turn()
        return promoted

    def end_turn(self) -> None:
        self.side_to_move = self.side_to_move.opposite

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(
        self, move: Move, piece: Piece, captured_sq: Square | None
    ) -> None:
        revoked = CastlingRights.NONE
        if piece.piece_type == PieceType.KING:
            revoked |= CastlingRights.both(piece.color)
        if piece.piece_type == PieceType.ROOK and move.from_sq in ROOK_CORNERS:
            revoked |= ROOK_CORNERS[move.from_sq]
        if captured_sq is not None and captured_sq in ROOK_CORNERS:
            revoked |= ROOK_CORNERS[captured_sq]
        self.castling &= ~revoked

    def can_castle(self, color: Color, kingside: bool) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, kingside))

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
        )
        pos.pending_promotion = self.pending_promotion
        return pos

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move!s}, "
            f"castling={self.castling!r}, en_passant={self.en_passant!r})\n"
            f"{self.board!r}"
        )
