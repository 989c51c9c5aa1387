"""Screen geometry shared by the input and render systems (arcade's y-up coordinates)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple, Tuple

from minefield.constants import (
    ALL_SCORES_DIALOG_HEIGHT,
    ALL_SCORES_DIALOG_WIDTH,
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    DIALOG_BUTTON_HEIGHT,
    DIALOG_BUTTON_WIDTH,
    DIALOG_HEIGHT,
    DIALOG_WIDTH,
    HUD_GAP,
    HUD_HEIGHT,
    PANEL_BUTTON_HEIGHT,
    PANEL_GAP,
    PANEL_TAB_HEIGHT,
    PANEL_WIDTH,
    RESET_BUTTON_SIZE,
    VIEW_ALLTIME,
    VIEW_DAILY,
)


class Rect(NamedTuple):
    left: float
    bottom: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def top(self) -> float:
        return self.bottom + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.left + self.width / 2, self.bottom + self.height / 2

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.bottom <= y <= self.top


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    tile_size: int
    start_x: float
    start_y: float
    rows: int
    cols: int

    @property
    def width(self) -> float:
        return self.tile_size * self.cols

    @property
    def height(self) -> float:
        return self.tile_size * self.rows

    @property
    def top(self) -> float:
        return self.start_y + self.height


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int) -> BoardGeometry:
    """Size the board to fit beside the leaderboard panel and under the HUD strip."""
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT - HUD_GAP) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size + PANEL_GAP + PANEL_WIDTH
    start_x = max(10.0, (window_width - total_width) / 2)
    start_y = BOTTOM_MARGIN
    return BoardGeometry(tile_size=tile_size, start_x=start_x, start_y=start_y, rows=rows, cols=cols)


def cell_rect(geometry: BoardGeometry, row: int, col: int) -> Rect:
    """Row 0 is drawn at the top of the board."""
    size = geometry.tile_size
    left = geometry.start_x + col * size
    bottom = geometry.start_y + (geometry.rows - 1 - row) * size
    return Rect(left, bottom, size, size)


def cell_at(geometry: BoardGeometry, x: float, y: float) -> Tuple[int, int] | None:
    if x < geometry.start_x or x >= geometry.start_x + geometry.width:
        return None
    if y < geometry.start_y or y >= geometry.top:
        return None
    col = int((x - geometry.start_x) // geometry.tile_size)
    row = geometry.rows - 1 - int((y - geometry.start_y) // geometry.tile_size)
    if 0 <= row < geometry.rows and 0 <= col < geometry.cols:
        return row, col
    return None


def hud_layout(geometry: BoardGeometry) -> Dict[str, Rect]:
    """Mine counter on the left, reset button centred, timer on the right."""
    bottom = geometry.top + HUD_GAP
    reset_left = geometry.start_x + geometry.width / 2 - RESET_BUTTON_SIZE / 2
    box_width = max(72.0, geometry.width / 3 - 8)
    return {
        "mine_counter": Rect(geometry.start_x, bottom, box_width, HUD_HEIGHT),
        "reset": Rect(reset_left, bottom + (HUD_HEIGHT - RESET_BUTTON_SIZE) / 2, RESET_BUTTON_SIZE, RESET_BUTTON_SIZE),
        "timer": Rect(geometry.start_x + geometry.width - box_width, bottom, box_width, HUD_HEIGHT),
    }


def panel_layout(geometry: BoardGeometry) -> Dict[str, Rect]:
    """Tabs on top, entry list in the middle, refresh/view-all buttons at the bottom."""
    left = geometry.start_x + geometry.width + PANEL_GAP
    bottom = geometry.start_y
    top = geometry.top + HUD_GAP + HUD_HEIGHT
    half = (PANEL_WIDTH - 10) / 2
    tabs_bottom = top - 40 - PANEL_TAB_HEIGHT
    buttons_bottom = bottom + 10
    list_bottom = buttons_bottom + PANEL_BUTTON_HEIGHT + 10
    return {
        "panel": Rect(left, bottom, PANEL_WIDTH, top - bottom),
        f"tab_{VIEW_DAILY}": Rect(left, tabs_bottom, half, PANEL_TAB_HEIGHT),
        f"tab_{VIEW_ALLTIME}": Rect(left + half + 10, tabs_bottom, half, PANEL_TAB_HEIGHT),
        "list": Rect(left, list_bottom, PANEL_WIDTH, tabs_bottom - 10 - list_bottom),
        "refresh": Rect(left, buttons_bottom, half, PANEL_BUTTON_HEIGHT),
        "view_all": Rect(left + half + 10, buttons_bottom, half, PANEL_BUTTON_HEIGHT),
    }


def game_over_dialog_layout(window_width: int, window_height: int) -> Dict[str, Rect]:
    left = (window_width - DIALOG_WIDTH) / 2
    bottom = (window_height - DIALOG_HEIGHT) / 2
    button_y = bottom + 20
    return {
        "dialog": Rect(left, bottom, DIALOG_WIDTH, DIALOG_HEIGHT),
        "name_field": Rect(left + 30, bottom + 120, DIALOG_WIDTH - 60, 36),
        "submit": Rect(left + 30, button_y, DIALOG_BUTTON_WIDTH, DIALOG_BUTTON_HEIGHT),
        "close": Rect(left + DIALOG_WIDTH - 30 - DIALOG_BUTTON_WIDTH, button_y, DIALOG_BUTTON_WIDTH, DIALOG_BUTTON_HEIGHT),
    }


def all_scores_dialog_layout(window_width: int, window_height: int) -> Dict[str, Rect]:
    width = min(ALL_SCORES_DIALOG_WIDTH, window_width - 20)
    height = min(ALL_SCORES_DIALOG_HEIGHT, window_height - 20)
    left = (window_width - width) / 2
    bottom = (window_height - height) / 2
    nav_y = bottom + 70
    return {
        "dialog": Rect(left, bottom, width, height),
        "list": Rect(left + 20, nav_y + DIALOG_BUTTON_HEIGHT + 10, width - 40, height - 130 - DIALOG_BUTTON_HEIGHT),
        "prev": Rect(left + 20, nav_y, DIALOG_BUTTON_WIDTH, DIALOG_BUTTON_HEIGHT),
        "next": Rect(left + width - 20 - DIALOG_BUTTON_WIDTH, nav_y, DIALOG_BUTTON_WIDTH, DIALOG_BUTTON_HEIGHT),
        "close": Rect(left + (width - DIALOG_BUTTON_WIDTH) / 2, bottom + 15, DIALOG_BUTTON_WIDTH, DIALOG_BUTTON_HEIGHT),
    }
