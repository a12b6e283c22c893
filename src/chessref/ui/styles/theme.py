"""Visual theme constants and QSS styles."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # selected piece origin
    highlight_to: QColor  # legal move targets
    highlight_capture: QColor  # legal capture targets
    highlight_check: QColor  # king in check
    last_move: QColor
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    white_piece: QColor
    black_piece: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            highlight_capture=QColor(200, 40, 40, 90),
            highlight_check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(0, 0, 0),
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            highlight_capture=QColor(200, 40, 40, 90),
            highlight_check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            coord_light=QColor(140, 162, 173),
            coord_dark=QColor(222, 227, 230),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(0, 0, 0),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(236, 238, 220),
            dark_square=QColor(112, 149, 120),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            highlight_capture=QColor(200, 40, 40, 90),
            highlight_check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            coord_light=QColor(112, 149, 120),
            coord_dark=QColor(236, 238, 220),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(0, 0, 0),
        )


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Helvetica Neue", sans-serif;
}

QLabel#capturedStrip {
    font-size: 22px;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}

QMenuBar {
    background: #2b2b2b;
    color: #e0e0e0;
}
QMenu {
    background: #2b2b2b;
    color: #e0e0e0;
    border: 1px solid #3c3c3c;
}
QMenu::item:selected {
    background: #264f78;
}
"""
