from __future__ import annotations

from minefield.components.all_scores_dialog import AllScoresDialog
from minefield.components.game_over_dialog import GameOverDialog
from minefield.leaderboard.views import Page
from minefield.rendering import palette
from minefield.rendering.panel_renderer import draw_button, draw_entries
from minefield.ui.layout import Rect, all_scores_dialog_layout, game_over_dialog_layout


def _draw_overlay(arcade, width: int, height: int, box: Rect) -> None:
    arcade.draw_lrbt_rectangle_filled(0, width, 0, height, palette.OVERLAY)
    arcade.draw_lbwh_rectangle_filled(box.left, box.bottom, box.width, box.height, palette.PANEL)
    arcade.draw_lbwh_rectangle_outline(box.left, box.bottom, box.width, box.height, palette.PANEL_EDGE, 3)


def _centered(arcade, text: str, x: float, y: float, color, size: int, bold: bool = False) -> None:
    arcade.draw_text(text, x, y, color, size, anchor_x="center", anchor_y="center", bold=bold)


class DialogRenderer:
    """Game-over dialog with the name field, and the paginated all-scores dialog."""

    def render_game_over(self, arcade, width: int, height: int, dialog: GameOverDialog) -> None:
        layout = game_over_dialog_layout(width, height)
        box = layout["dialog"]
        _draw_overlay(arcade, width, height, box)
        cx = box.left + box.width / 2
        title = "Victory!" if dialog.won else "Boom! You hit a mine."
        _centered(arcade, title, cx, box.top - 40, palette.TEXT, 22, bold=True)
        if not dialog.won:
            _centered(arcade, "Better luck next time!", cx, box.top - 90, palette.SUBTEXT, 14)
            draw_button(arcade, layout["close"], "Close")
            return

        _centered(arcade, f"Your Time: {dialog.final_time:.2f}s", cx, box.top - 80, palette.TEXT, 15)
        _centered(arcade, "Submit to Leaderboard", cx, box.top - 110, palette.SUBTEXT, 13)
        field = layout["name_field"]
        arcade.draw_lbwh_rectangle_filled(field.left, field.bottom, field.width, field.height, palette.COUNTER_BG)
        arcade.draw_lbwh_rectangle_outline(field.left, field.bottom, field.width, field.height, palette.PANEL_EDGE, 2)
        shown = dialog.name_text or "Enter your name"
        color = palette.TEXT if dialog.name_text else palette.SUBTEXT
        cursor = "_" if dialog.accepts_input and dialog.name_text else ""
        arcade.draw_text(shown + cursor, field.left + 10, field.bottom + field.height / 2, color, 14, anchor_y="center")
        if dialog.message:
            color = palette.MESSAGE_COLORS.get(dialog.message_kind, palette.INFO)
            _centered(arcade, dialog.message, cx, field.bottom - 25, color, 12)
        draw_button(arcade, layout["submit"], "Submit Score", enabled=dialog.accepts_input)
        draw_button(arcade, layout["close"], "Close")

    def render_all_scores(self, arcade, width: int, height: int, dialog: AllScoresDialog, page: Page | None) -> None:
        layout = all_scores_dialog_layout(width, height)
        box = layout["dialog"]
        _draw_overlay(arcade, width, height, box)
        cx = box.left + box.width / 2
        _centered(arcade, "All Scores", cx, box.top - 30, palette.TEXT, 20, bold=True)
        area = layout["list"]
        if page is None:
            color = palette.ERROR if dialog.status == "error" else palette.SUBTEXT
            _centered(arcade, dialog.message, cx, area.top - 30, color, 14)
        else:
            draw_entries(arcade, area, page.items, start_index=page.start_index, row_height=22)
            if page.total_pages > 1:
                draw_button(arcade, layout["prev"], "Previous", enabled=page.has_previous)
                draw_button(arcade, layout["next"], "Next", enabled=page.has_next)
                _, nav_cy = layout["prev"].center
                _centered(
                    arcade,
                    f"Page {page.page} of {page.total_pages}",
                    cx,
                    nav_cy,
                    palette.SUBTEXT,
                    12,
                )
        draw_button(arcade, layout["close"], "Close")
