"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)
_LOG_LEVEL_ENV = "CHESSREF_LOG_LEVEL"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging; the level defaults to ``$CHESSREF_LOG_LEVEL``."""
    name = (level or os.environ.get(_LOG_LEVEL_ENV) or "WARNING").upper()
    numeric = logging.getLevelName(name)
    known = isinstance(numeric, int)
    logging.basicConfig(
        level=numeric if known else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not known:
        _LOGGER.warning("Unknown log level %r, using WARNING", name)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from chessref.ui.styles.theme import APP_STYLE

    app.setApplicationName("Chess Referee")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chessref.ui.main_window import MainWindow

    configure_logging()
    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow()
    window.show()

    return app.exec()
