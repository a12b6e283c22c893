"""Piece value object — the occupied state of a board cell."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

_GLYPHS: dict[Color, str] = {
    # Ordered as PieceType: pawn, knight, bishop, rook, queen, king
    Color.WHITE: "♙♘♗♖♕♔",
    Color.BLACK: "♟♞♝♜♛♚",
}

_TYPE_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable ``(color, piece type)`` pair."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Single letter, uppercase for white."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a letter, e.g. 'N' → white knight."""
        ptype = _TYPE_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _GLYPHS[self.color][int(self.piece_type) - 1]

    @property
    def name(self) -> str:
        return f"{self.color.display_name} {self.piece_type.name.lower()}"
