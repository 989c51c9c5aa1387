from minefield.components.board import Board
from minefield.components.game_state import GameMode
from minefield.constants import GRID_COLS, GRID_ROWS, VIEW_ALLTIME, VIEW_DAILY
from minefield.events.bus import (
    EventBus,
    EVENT_ALL_SCORES_PAGE_REQUEST,
    EVENT_ALL_SCORES_REQUEST,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_CELL_FLAG_REQUEST,
    EVENT_CELL_REVEAL_REQUEST,
    EVENT_DIALOG_CLOSE_REQUEST,
    EVENT_LEADERBOARD_REFRESH_REQUEST,
    EVENT_LEADERBOARD_VIEW_SELECTED,
    EVENT_MOUSE_PRESS,
    EVENT_SCORE_SUBMIT_REQUEST,
)
from minefield.ui.layout import (
    all_scores_dialog_layout,
    cell_at,
    compute_board_geometry,
    game_over_dialog_layout,
    hud_layout,
    panel_layout,
)
from minefield.utils.game_state import current_mode

# arcade.MOUSE_BUTTON_LEFT / MOUSE_BUTTON_RIGHT
MOUSE_LEFT = 1
MOUSE_RIGHT = 4


class InputSystem:
    """Turns raw mouse presses into board, panel and dialog requests."""

    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or button is None:
            return
        x = float(x)
        y = float(y)
        mode = current_mode(self.world) if self.world is not None else GameMode.PLAYING
        if mode == GameMode.GAME_OVER_DIALOG:
            if button == MOUSE_LEFT:
                self._handle_game_over_dialog(x, y)
            return
        if mode == GameMode.ALL_SCORES_DIALOG:
            if button == MOUSE_LEFT:
                self._handle_all_scores_dialog(x, y)
            return
        self._handle_playing(x, y, button)

    def _handle_playing(self, x: float, y: float, button: int) -> None:
        rows, cols = self._board_size()
        geometry = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        cell = cell_at(geometry, x, y)
        if cell is not None:
            row, col = cell
            if button == MOUSE_LEFT:
                self.event_bus.emit(EVENT_CELL_REVEAL_REQUEST, row=row, col=col)
            elif button == MOUSE_RIGHT:
                self.event_bus.emit(EVENT_CELL_FLAG_REQUEST, row=row, col=col)
            return
        if button != MOUSE_LEFT:
            return
        if hud_layout(geometry)["reset"].contains(x, y):
            self.event_bus.emit(EVENT_BOARD_RESET_REQUEST)
            return
        panel = panel_layout(geometry)
        for view in (VIEW_DAILY, VIEW_ALLTIME):
            if panel[f"tab_{view}"].contains(x, y):
                self.event_bus.emit(EVENT_LEADERBOARD_VIEW_SELECTED, view=view)
                return
        if panel["refresh"].contains(x, y):
            self.event_bus.emit(EVENT_LEADERBOARD_REFRESH_REQUEST)
        elif panel["view_all"].contains(x, y):
            self.event_bus.emit(EVENT_ALL_SCORES_REQUEST)

    def _handle_game_over_dialog(self, x: float, y: float) -> None:
        layout = game_over_dialog_layout(self.window.width, self.window.height)
        if layout["submit"].contains(x, y):
            self.event_bus.emit(EVENT_SCORE_SUBMIT_REQUEST)
        elif layout["close"].contains(x, y):
            self.event_bus.emit(EVENT_DIALOG_CLOSE_REQUEST)

    def _handle_all_scores_dialog(self, x: float, y: float) -> None:
        layout = all_scores_dialog_layout(self.window.width, self.window.height)
        if layout["prev"].contains(x, y):
            self.event_bus.emit(EVENT_ALL_SCORES_PAGE_REQUEST, delta=-1)
        elif layout["next"].contains(x, y):
            self.event_bus.emit(EVENT_ALL_SCORES_PAGE_REQUEST, delta=1)
        elif layout["close"].contains(x, y):
            self.event_bus.emit(EVENT_DIALOG_CLOSE_REQUEST)

    def _board_size(self):
        if self.world is not None:
            for _, board in self.world.get_component(Board):
                return board.rows, board.cols
        return GRID_ROWS, GRID_COLS
