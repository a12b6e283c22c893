"""Square type and coordinate helpers.

Board layout (row-major, Black at the top):
    row 0 = rank 8 (a8 … h8), Black's back rank
    row 7 = rank 1 (a1 … h1), White's back rank
    col 0 = a-file, col 7 = h-file
"""

from __future__ import annotations

from typing import NamedTuple

from chessref.core.errors import InvalidSquareError

BOARD_SIZE = 8


class Square(NamedTuple):
    """A board coordinate ``(row, col)``."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return square_name(self)


def is_valid_square(row: int, col: int) -> bool:
    """Bounds check only, no knowledge of pieces."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(7, 4)`` → ``'e1'``."""
    return chr(ord("a") + sq.col) + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise InvalidSquareError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))


def all_squares() -> list[Square]:
    """Every square, row by row from a8 to h1."""
    return [Square(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, c) for c in range(8))
