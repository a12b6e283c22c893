"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessref.core.enums import Color
from chessref.core.move import Move
from chessref.core.types import BOARD_SIZE, Square, all_squares, square_name
from chessref.game.controller import GameController
from chessref.ui.styles.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece glyphs.

    The scene never touches the position directly: selections go through
    :meth:`GameController.select_square` and moves through
    :meth:`GameController.make_move`.

    Signals:
        move_made(MoveOutcome): Emitted after the user completes a legal move.
    """

    move_made = pyqtSignal(object)

    TILE = 80  # px per square

    def __init__(
        self, controller: GameController, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._theme = BoardTheme.default()
        self._flipped = False

        # Interaction state
        self._selected_sq: Square | None = None
        self._legal_moves: list[Move] = []
        self._interactive = True
        self._show_coordinates = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._state_highlights: list[QGraphicsRectItem] = []
        self._legal_dot_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, QGraphicsSimpleTextItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()
        self.refresh()

    # ── Public API ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Redraw pieces and state highlights from the controller."""
        self._clear_selection()
        self._sync_pieces()
        self._sync_state_highlights()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._draw_board()
        self.refresh()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self.refresh()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide legal-move dot highlights."""
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._legal_dot_items)

    @property
    def selected_square(self) -> Square | None:
        return self._selected_sq

    @property
    def legal_moves(self) -> list[Move]:
        return list(self._legal_moves)

    def click_square(self, sq: Square) -> None:
        """Select a piece or, with a piece selected, move it to *sq*."""
        if not self._interactive:
            return

        if self._selected_sq is not None:
            move = self._find_legal_move(sq)
            if move is not None:
                self._clear_selection()
                outcome = self._controller.make_move(move.from_sq, move.to_sq)
                self.move_made.emit(outcome)
                return

        moves = self._controller.select_square(sq)
        piece = self._controller.state.position.board[sq]
        if piece is not None and piece.color == self._controller.state.side_to_move:
            self._select_square(sq, moves)
        else:
            self._clear_selection()

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont("Helvetica Neue", max(9, t // 8))

        for sq in all_squares():
            vc, vr = self._visual_coords(sq)
            is_light = (sq.row + sq.col) % 2 == 0
            color = self._theme.light_square if is_light else self._theme.dark_square
            rect = QGraphicsRectItem(vc * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[sq] = rect

            coord_color = (
                self._theme.coord_dark if is_light else self._theme.coord_light
            )
            name = square_name(sq)
            # Rank numbers on the left edge, file letters on the bottom edge
            if vc == 0:
                self._add_coord(name[1], coord_color, font, vc * t + 2, vr * t + 1)
            if vr == BOARD_SIZE - 1:
                self._add_coord(
                    name[0], coord_color, font, vc * t + t - 12, vr * t + t - 16
                )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(
        self, label: str, color: QColor, font: QFont, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from a controller snapshot."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        board = self._controller.snapshot().board
        for sq, piece in board.occupied():
            item = QGraphicsSimpleTextItem(piece.symbol)
            item.setFont(font)
            fill = (
                self._theme.white_piece
                if piece.color == Color.WHITE
                else self._theme.black_piece
            )
            item.setBrush(QBrush(fill))
            item.setPen(QPen(QColor(0, 0, 0, 160)))
            bounds = item.boundingRect()
            vc, vr = self._visual_coords(sq)
            item.setPos(
                vc * t + (t - bounds.width()) / 2,
                vr * t + (t - bounds.height()) / 2,
            )
            item.setZValue(1)
            self.addItem(item)
            self._piece_items[sq] = item

    def _sync_state_highlights(self) -> None:
        """Highlight the last move and a king in check."""
        self._clear_items(self._state_highlights)
        state = self._controller.state
        last = state.last_move
        if last is not None:
            for sq in (last.from_sq, last.to_sq):
                rect = self._make_highlight(sq, self._theme.last_move)
                rect.setZValue(0.5)
                self._state_highlights.append(rect)

        snap = self._controller.snapshot()
        if snap.in_check:
            king_sq = snap.board.king_square(snap.side_to_move)
            rect = self._make_highlight(king_sq, self._theme.highlight_check)
            rect.setZValue(0.6)
            self._state_highlights.append(rect)

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None:
            return super().mousePressEvent(event)
        sq = self._pos_to_square(event.scenePos())
        if sq is None:
            self._clear_selection()
        else:
            self.click_square(sq)
        super().mousePressEvent(event)

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, sq: Square, moves: list[Move]) -> None:
        self._clear_selection()
        self._selected_sq = sq
        self._legal_moves = moves

        rect = self._make_highlight(sq, self._theme.highlight_from)
        self._highlight_items.append(rect)

        if self._show_legal_moves:
            for m in moves:
                color = (
                    self._theme.highlight_capture
                    if m.is_capture
                    else self._theme.highlight_to
                )
                self._legal_dot_items.append(self._make_highlight(m.to_sq, color))

    def _clear_selection(self) -> None:
        self._selected_sq = None
        self._legal_moves = []
        self._clear_items(self._highlight_items)
        self._clear_items(self._legal_dot_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    def _find_legal_move(self, to_sq: Square) -> Move | None:
        for move in self._legal_moves:
            if move.to_sq == to_sq:
                return move
        return None

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, sq: Square) -> tuple[int, int]:
        """Board square → visual (column, row). White sits at the bottom."""
        if self._flipped:
            return BOARD_SIZE - 1 - sq.col, BOARD_SIZE - 1 - sq.row
        return sq.col, sq.row

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            return None
        if self._flipped:
            return Square(BOARD_SIZE - 1 - row, BOARD_SIZE - 1 - col)
        return Square(row, col)

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vc, vr = self._visual_coords(sq)
        rect = QGraphicsRectItem(vc * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
