from __future__ import annotations

from typing import TYPE_CHECKING

from minefield.components.board import Board, BoardPhase
from minefield.rendering import palette
from minefield.systems.board_ops import CellMap, wrong_flags
from minefield.ui.layout import BoardGeometry, cell_rect

if TYPE_CHECKING:
    from minefield.components.cell import Cell


class BoardRenderer:
    def __init__(self, padding: int = 1):
        self._padding = padding

    def render(self, arcade, geometry: BoardGeometry, board: Board, cells: CellMap) -> None:
        wrong = set(wrong_flags(board, cells)) if board.phase == BoardPhase.LOST else set()
        for (row, col), cell in cells.items():
            rect = cell_rect(geometry, row, col)
            left = rect.left + self._padding
            bottom = rect.bottom + self._padding
            size = rect.width - 2 * self._padding
            cx, cy = rect.center
            if cell.is_revealed and cell.is_mine:
                fill = palette.MINE_BG_TRIGGER if board.trigger == (row, col) else palette.MINE_BG
            elif cell.is_revealed:
                fill = palette.TILE_REVEALED
            else:
                fill = palette.TILE_HIDDEN
            arcade.draw_lbwh_rectangle_filled(left, bottom, size, size, fill)
            arcade.draw_lbwh_rectangle_outline(left, bottom, size, size, palette.TILE_EDGE, 1)

            if cell.is_flagged:
                self._draw_flag(arcade, cx, cy, size)
                if (row, col) in wrong:
                    self._draw_cross(arcade, cx, cy, size)
            elif cell.is_revealed and cell.is_mine:
                self._draw_mine(arcade, cx, cy, size)
            elif cell.is_revealed and cell.neighbor_mines > 0:
                self._draw_count(arcade, cell, cx, cy, size)

    @staticmethod
    def _draw_flag(arcade, cx: float, cy: float, size: float) -> None:
        pole_x = cx - size * 0.15
        top = cy + size * 0.3
        base = cy - size * 0.3
        arcade.draw_line(pole_x, base, pole_x, top, palette.MINE, 2)
        arcade.draw_polygon_filled(
            [(pole_x, top), (pole_x + size * 0.35, top - size * 0.12), (pole_x, top - size * 0.25)],
            palette.FLAG,
        )
        arcade.draw_line(pole_x - size * 0.12, base, pole_x + size * 0.12, base, palette.MINE, 2)

    @staticmethod
    def _draw_cross(arcade, cx: float, cy: float, size: float) -> None:
        half = size * 0.35
        arcade.draw_line(cx - half, cy - half, cx + half, cy + half, palette.WRONG, 3)
        arcade.draw_line(cx - half, cy + half, cx + half, cy - half, palette.WRONG, 3)

    @staticmethod
    def _draw_mine(arcade, cx: float, cy: float, size: float) -> None:
        radius = size * 0.22
        arcade.draw_circle_filled(cx, cy, radius, palette.MINE)
        arcade.draw_line(cx - radius * 1.5, cy, cx + radius * 1.5, cy, palette.MINE, 2)
        arcade.draw_line(cx, cy - radius * 1.5, cx, cy + radius * 1.5, palette.MINE, 2)

    @staticmethod
    def _draw_count(arcade, cell: "Cell", cx: float, cy: float, size: float) -> None:
        arcade.draw_text(
            str(cell.neighbor_mines),
            cx,
            cy,
            palette.NUMBER_COLORS.get(cell.neighbor_mines, palette.MINE),
            max(10, int(size * 0.45)),
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
