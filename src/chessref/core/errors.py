"""Exceptions raised by the rules engine.

Every error is local and recoverable: the operation that raises it leaves
the game untouched.
"""

from __future__ import annotations


class ChessRulesError(ValueError):
    """Base class for all rule violations reported by the engine."""


class InvalidSquareError(ChessRulesError):
    """Coordinates fall outside the 8×8 board."""


class NoPieceAtSquareError(ChessRulesError):
    """The origin square of a move is empty."""


class NotSideToMoveError(ChessRulesError):
    """The piece on the origin square belongs to the opponent."""


class IllegalMoveError(ChessRulesError):
    """The destination is not in the current legal-move set."""


class PromotionMismatchError(ChessRulesError):
    """A promotion is pending and a move was attempted, or vice versa."""


class MissingKingError(ChessRulesError):
    """A side has no king on the board."""


class GameOverError(ChessRulesError):
    """The game already ended in checkmate or stalemate."""
