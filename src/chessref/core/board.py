"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from chessref.core.enums import Color, PieceType
from chessref.core.errors import InvalidSquareError, MissingKingError
from chessref.core.piece import Piece
from chessref.core.types import BOARD_SIZE, Square, is_valid_square, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8×8 grid of optional pieces.

    Pure data: it knows nothing about legality. Indexing with a square
    outside the board raises :class:`InvalidSquareError` rather than
    wrapping around like a Python list would.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    @staticmethod
    def is_valid_square(sq: tuple[int, int]) -> bool:
        return is_valid_square(sq[0], sq[1])

    @staticmethod
    def validate_square(sq: tuple[int, int]) -> None:
        if not is_valid_square(sq[0], sq[1]):
            raise InvalidSquareError(f"Square out of bounds: {tuple(sq)!r}")

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        self.validate_square(sq)
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self.validate_square(sq)
        self._grid[sq[0]][sq[1]] = piece

    def get(self, sq: Square) -> Piece | None:
        return self[sq]

    def set(self, sq: Square, piece: Piece | None) -> None:
        self[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, a8 → h1."""
        for r, row in enumerate(self._grid):
            for c, piece in enumerate(row):
                if piece is not None:
                    yield Square(r, c), piece

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def find_king(self, color: Color) -> Square | None:
        target = Piece(color, PieceType.KING)
        for sq, piece in self.occupied():
            if piece == target:
                return sq
        return None

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self.find_king(color)
        if sq is None:
            raise MissingKingError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight 8-character rows, rank 8 first.

        ``.`` marks an empty square; letters are pieces (uppercase white)::

            Board.from_rows([
                "....k...",
                "........",
                ...
                "....K..R",
            ])
        """
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError("Board diagram must be 8 rows of 8 characters")
        b = cls()
        for r, row in enumerate(rows):
            for c, ch in enumerate(row):
                if ch != ".":
                    b[Square(r, c)] = Piece.from_char(ch)
        return b

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        b = cls()
        for sq, piece in placement.items():
            b[sq] = piece
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for r, row in enumerate(self._grid):
            cells = " ".join(str(p) if p else "." for p in row)
            rows.append(f"{square_name(Square(r, 0))[1]} {cells}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
