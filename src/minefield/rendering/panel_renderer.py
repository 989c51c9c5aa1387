from __future__ import annotations

from typing import Sequence

from minefield.components.leaderboard_panel import LeaderboardPanel
from minefield.constants import PANEL_ROW_HEIGHT, VIEW_ALLTIME, VIEW_DAILY
from minefield.leaderboard.records import LeaderboardEntry
from minefield.leaderboard.views import format_time, format_timestamp, rank_label
from minefield.rendering import palette
from minefield.ui.layout import BoardGeometry, Rect, panel_layout

TAB_LABELS = {VIEW_DAILY: "Today", VIEW_ALLTIME: "All-Time"}


def draw_button(arcade, rect: Rect, label: str, *, active: bool = False, enabled: bool = True) -> None:
    if not enabled:
        fill = palette.BUTTON_DISABLED
    elif active:
        fill = palette.BUTTON_ACTIVE
    else:
        fill = palette.BUTTON
    arcade.draw_lbwh_rectangle_filled(rect.left, rect.bottom, rect.width, rect.height, fill)
    arcade.draw_lbwh_rectangle_outline(rect.left, rect.bottom, rect.width, rect.height, palette.PANEL_EDGE, 2)
    cx, cy = rect.center
    arcade.draw_text(
        label,
        cx,
        cy,
        palette.TEXT if enabled else palette.SUBTEXT,
        13,
        anchor_x="center",
        anchor_y="center",
        bold=True,
    )


def draw_entries(
    arcade,
    area: Rect,
    entries: Sequence[LeaderboardEntry],
    start_index: int = 0,
    row_height: float = PANEL_ROW_HEIGHT,
) -> None:
    """Ranked rows from the top of ``area`` downwards, medals for the podium."""
    y = area.top - row_height / 2
    for offset, entry in enumerate(entries):
        if y < area.bottom:
            break
        arcade.draw_text(rank_label(start_index + offset), area.left + 8, y, palette.TEXT, 12, anchor_y="center")
        arcade.draw_text(entry.name, area.left + 48, y + 5, palette.TEXT, 12, anchor_y="center", bold=True)
        stamp = format_timestamp(entry.timestamp)
        if stamp:
            arcade.draw_text(stamp, area.left + 48, y - 7, palette.SUBTEXT, 8, anchor_y="center")
        arcade.draw_text(
            format_time(entry.time),
            area.right - 8,
            y,
            palette.TEXT,
            12,
            anchor_x="right",
            anchor_y="center",
        )
        y -= row_height


class PanelRenderer:
    """Persistent leaderboard panel: tabs, top entries, refresh and view-all buttons."""

    def render(self, arcade, geometry: BoardGeometry, panel: LeaderboardPanel) -> None:
        layout = panel_layout(geometry)
        box = layout["panel"]
        arcade.draw_lbwh_rectangle_filled(box.left, box.bottom, box.width, box.height, palette.PANEL)
        arcade.draw_lbwh_rectangle_outline(box.left, box.bottom, box.width, box.height, palette.PANEL_EDGE, 2)
        arcade.draw_text(
            "Leaderboard",
            box.left + box.width / 2,
            box.top - 22,
            palette.TEXT,
            16,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        enabled = panel.status != "disabled"
        for view, label in TAB_LABELS.items():
            draw_button(arcade, layout[f"tab_{view}"], label, active=panel.view == view, enabled=enabled)
        draw_button(arcade, layout["refresh"], "Refresh", enabled=enabled)
        draw_button(arcade, layout["view_all"], "View All Scores", enabled=enabled)

        area = layout["list"]
        if panel.status == "ready":
            draw_entries(arcade, area, panel.entries)
        else:
            color = palette.ERROR if panel.status == "error" else palette.SUBTEXT
            arcade.draw_text(
                panel.message,
                area.left + area.width / 2,
                area.top - 30,
                color,
                13,
                anchor_x="center",
                anchor_y="center",
            )
