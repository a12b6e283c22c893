"""User-configurable display settings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from chessref.ui.styles.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)

THEMES: dict[str, Callable[[], BoardTheme]] = {
    "Classic": BoardTheme.default,
    "Blue": BoardTheme.blue,
    "Green": BoardTheme.green,
}


@dataclass
class AppSettings:
    """All user-configurable settings."""

    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    flip_board: bool = False

    def theme(self) -> BoardTheme:
        """Resolve :attr:`board_theme`, falling back to the classic theme."""
        factory = THEMES.get(self.board_theme)
        if factory is None:
            _LOGGER.warning("Unknown board theme %r, using Classic", self.board_theme)
            return BoardTheme.default()
        return factory()
