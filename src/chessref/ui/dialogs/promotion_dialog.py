"""Promotion dialog — lets user pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessref.core.enums import PROMOTION_TYPES, Color, PieceType
from chessref.core.piece import Piece


class PromotionDialog(QDialog):
    """Modal dialog to select promotion piece type."""

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Promotion")
        self.setFixedSize(340, 130)
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected: PieceType = PieceType.QUEEN
        self._buttons: dict[PieceType, QPushButton] = {}

        layout = QVBoxLayout(self)
        label = QLabel("Promote pawn to:")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        label.setFont(QFont("Helvetica Neue", 11))
        layout.addWidget(label)

        btn_row = QHBoxLayout()
        for pt in PROMOTION_TYPES:
            btn = QPushButton(Piece(color, pt).symbol)
            btn.setFont(QFont("DejaVu Sans", 32))
            btn.setFixedSize(68, 68)
            btn.setToolTip(pt.name.capitalize())
            btn.clicked.connect(lambda checked, p=pt: self._choose(p))
            btn_row.addWidget(btn)
            self._buttons[pt] = btn

        layout.addLayout(btn_row)

    def _choose(self, piece_type: PieceType) -> None:
        self._selected = piece_type
        self.accept()

    @property
    def selected(self) -> PieceType:
        return self._selected

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceType | None:
        """Show the dialog and return the chosen piece type, or ``None`` on cancel."""
        dlg = PromotionDialog(color, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None
