"""MainWindow — top-level window assembling the board and side panel."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessref.core.enums import Color, PieceType
from chessref.game.controller import GameController
from chessref.game.interfaces import MoveOutcome, OutcomeKind
from chessref.ui.board.board_view import BoardView
from chessref.ui.dialogs.promotion_dialog import PromotionDialog
from chessref.ui.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window: board, turn status, captured pieces."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Chess Referee")
        self.setMinimumSize(760, 560)

        self._controller = GameController()
        self._controller.new_game()
        self._settings = settings if settings is not None else AppSettings()

        self._setup_ui()
        self._setup_menu()
        self._apply_settings()
        self._update_side_panel()

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView(self._controller)
        self._board_view.move_made.connect(self._on_user_move)
        root.addWidget(self._board_view, stretch=3)

        right = QVBoxLayout()
        right.setSpacing(8)

        self._status_label = QLabel()
        right.addWidget(self._status_label)

        # Pieces lost by each side, shown next to the opponent's name
        self._captured_labels: dict[Color, QLabel] = {}
        for color in (Color.BLACK, Color.WHITE):
            right.addWidget(QLabel(f"{color.display_name} lost:"))
            strip = QLabel()
            strip.setObjectName("capturedStrip")
            strip.setWordWrap(True)
            right.addWidget(strip)
            self._captured_labels[color] = strip

        right.addStretch(1)

        self._new_game_btn = QPushButton("New Game")
        self._new_game_btn.clicked.connect(self.new_game)
        right.addWidget(self._new_game_btn)

        self._flip_btn = QPushButton("Flip Board")
        self._flip_btn.clicked.connect(self._on_flip)
        right.addWidget(self._flip_btn)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(240)
        root.addWidget(right_widget)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None
        menu_game = menu_bar.addMenu("&Game")
        assert menu_game is not None

        act_new = QAction("&New Game", self)
        act_new.setShortcut("Ctrl+N")
        act_new.triggered.connect(self.new_game)
        menu_game.addAction(act_new)

        act_flip = QAction("&Flip Board", self)
        act_flip.setShortcut("F")
        act_flip.triggered.connect(self._on_flip)
        menu_game.addAction(act_flip)

        menu_game.addSeparator()

        act_quit = QAction("&Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        menu_game.addAction(act_quit)

    def _apply_settings(self) -> None:
        s = self._settings
        scene = self._board_view.board_scene
        scene.set_theme(s.theme())
        scene.set_show_coordinates(s.show_coordinates)
        scene.set_show_legal_moves(s.show_legal_moves)
        scene.set_flipped(s.flip_board)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self) -> None:
        """Reset to the standard starting position."""
        self._controller.new_game()
        self._board_view.board_scene.set_interactive(True)
        self._board_view.board_scene.refresh()
        self._update_side_panel()

    def _on_flip(self) -> None:
        self._settings.flip_board = not self._settings.flip_board
        self._board_view.board_scene.set_flipped(self._settings.flip_board)

    def _on_user_move(self, outcome: MoveOutcome) -> None:
        if outcome.kind == OutcomeKind.PENDING_PROMOTION and outcome.square is not None:
            color = self._controller.state.side_to_move
            self._board_view.board_scene.refresh()
            choice = PromotionDialog.ask(color, self)
            if choice is None:
                # The promotion cannot be skipped; a dismissed dialog means queen.
                choice = PieceType.QUEEN
            outcome = self._controller.resolve_promotion(outcome.square, choice)

        self._board_view.board_scene.refresh()
        self._update_side_panel()

        if outcome.is_terminal:
            self._board_view.board_scene.set_interactive(False)
            self._announce_game_over(outcome)

    def _announce_game_over(self, outcome: MoveOutcome) -> None:
        if outcome.kind == OutcomeKind.CHECKMATE and outcome.winner is not None:
            title, text = "Checkmate", f"{outcome.winner.display_name} wins!"
        else:
            title, text = "Stalemate", "Draw"
        _LOGGER.info("%s: %s", title, text)
        QMessageBox.information(self, title, text)

    # ── Side panel ───────────────────────────────────────────────────────

    def _update_side_panel(self) -> None:
        state = self._controller.state
        self._status_label.setText(state.status_text())
        for color, label in self._captured_labels.items():
            label.setText(" ".join(p.symbol for p in state.captured[color]))
