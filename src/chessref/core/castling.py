"""Castling geometry shared by generation and execution."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import CastlingRights, Color, MoveFlag
from chessref.core.types import Square

HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
KING_HOME_COL = 4


@dataclass(frozen=True, slots=True)
class CastleWing:
    """Files involved in castling on one side of the board."""

    flag: MoveFlag
    kingside: bool
    rook_from_col: int
    rook_to_col: int
    king_to_col: int
    empty_cols: tuple[int, ...]  # between king and rook
    safe_cols: tuple[int, ...]  # king's start, transit and landing

    def right(self, color: Color) -> CastlingRights:
        return CastlingRights.for_side(color, self.kingside)

    def rook_from(self, color: Color) -> Square:
        return Square(HOME_ROW[color], self.rook_from_col)

    def rook_to(self, color: Color) -> Square:
        return Square(HOME_ROW[color], self.rook_to_col)

    def king_to(self, color: Color) -> Square:
        return Square(HOME_ROW[color], self.king_to_col)


KINGSIDE = CastleWing(
    flag=MoveFlag.CASTLE_KINGSIDE,
    kingside=True,
    rook_from_col=7,
    rook_to_col=5,
    king_to_col=6,
    empty_cols=(5, 6),
    safe_cols=(4, 5, 6),
)

# b-file must be empty for the rook to pass but the king never crosses it.
QUEENSIDE = CastleWing(
    flag=MoveFlag.CASTLE_QUEENSIDE,
    kingside=False,
    rook_from_col=0,
    rook_to_col=3,
    king_to_col=2,
    empty_cols=(1, 2, 3),
    safe_cols=(4, 3, 2),
)

WINGS: tuple[CastleWing, ...] = (KINGSIDE, QUEENSIDE)
WING_BY_FLAG: dict[MoveFlag, CastleWing] = {w.flag: w for w in WINGS}


def king_home(color: Color) -> Square:
    return Square(HOME_ROW[color], KING_HOME_COL)


def rook_corner_rights() -> dict[Square, CastlingRights]:
    """Rook home corner → the right that depends on a rook standing there."""
    return {
        wing.rook_from(color): wing.right(color)
        for color in Color
        for wing in WINGS
    }


ROOK_CORNERS: dict[Square, CastlingRights] = rook_corner_rights()
