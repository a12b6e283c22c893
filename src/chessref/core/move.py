"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import MoveFlag
from chessref.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable move candidate produced by generation, consumed by execution."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def is_capture(self) -> bool:
        return self.flag in (MoveFlag.CAPTURE, MoveFlag.EN_PASSANT)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def en_passant_victim(self) -> Square:
        """Square of the pawn taken en passant: mover's row, target's file."""
        return Square(self.from_sq.row, self.to_sq.col)
