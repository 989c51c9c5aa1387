from __future__ import annotations

from minefield.components.board import Board, BoardPhase
from minefield.components.game_timer import GameTimer
from minefield.rendering import palette
from minefield.ui.layout import BoardGeometry, Rect, hud_layout


def format_clock(timer: GameTimer) -> str:
    seconds = timer.final_time if timer.final_time is not None else timer.elapsed
    return f"{seconds:.2f}"


class HudRenderer:
    """Mine counter, reset button and timer above the board."""

    def render(self, arcade, geometry: BoardGeometry, board: Board, timer: GameTimer | None) -> None:
        layout = hud_layout(geometry)
        self._draw_box(arcade, layout["mine_counter"], str(board.mines_remaining))
        clock_text = format_clock(timer) if timer is not None else "0.00"
        self._draw_box(arcade, layout["timer"], clock_text)

        reset = layout["reset"]
        face = {
            BoardPhase.WON: (34, 197, 94),
            BoardPhase.LOST: (239, 68, 68),
        }.get(board.phase, (251, 191, 36))
        cx, cy = reset.center
        arcade.draw_circle_filled(cx, cy, reset.width / 2, face)
        arcade.draw_circle_outline(cx, cy, reset.width / 2, palette.PANEL_EDGE, 2)
        arcade.draw_circle_filled(cx - 6, cy + 5, 2.5, palette.MINE)
        arcade.draw_circle_filled(cx + 6, cy + 5, 2.5, palette.MINE)
        if board.phase == BoardPhase.LOST:
            arcade.draw_line(cx - 8, cy - 10, cx + 8, cy - 10, palette.MINE, 2)
        else:
            arcade.draw_arc_outline(cx, cy - 4, 16, 10, palette.MINE, 200, 340, 2)

    @staticmethod
    def _draw_box(arcade, rect: Rect, text: str) -> None:
        arcade.draw_lbwh_rectangle_filled(rect.left, rect.bottom, rect.width, rect.height, palette.COUNTER_BG)
        cx, cy = rect.center
        arcade.draw_text(
            text,
            cx,
            cy,
            palette.COUNTER_TEXT,
            20,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
