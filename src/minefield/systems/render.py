from esper import World

from minefield.components.game_state import GameMode
from minefield.components.game_timer import GameTimer
from minefield.components.leaderboard_panel import LeaderboardPanel
from minefield.events.bus import EventBus
from minefield.rendering.board_renderer import BoardRenderer
from minefield.rendering.dialog_renderer import DialogRenderer
from minefield.rendering.hud_renderer import HudRenderer
from minefield.rendering.panel_renderer import PanelRenderer
from minefield.systems.board_ops import cell_map, get_board
from minefield.ui.layout import compute_board_geometry
from minefield.utils.game_state import current_mode


class RenderSystem:
    """Draws the board, HUD, leaderboard panel and any open dialog. Read-only."""

    def __init__(self, world: World, event_bus: EventBus, window, *, score_system=None, all_scores_system=None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.score_system = score_system
        self.all_scores_system = all_scores_system
        self._board_renderer = BoardRenderer()
        self._hud_renderer = HudRenderer()
        self._panel_renderer = PanelRenderer()
        self._dialog_renderer = DialogRenderer()

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        try:
            arcade.get_window()
        except Exception:
            return
        board = get_board(self.world)
        if board is None:
            return
        width, height = self.window.width, self.window.height
        geometry = compute_board_geometry(width, height, board.rows, board.cols)
        self._board_renderer.render(arcade, geometry, board, cell_map(self.world))
        self._hud_renderer.render(arcade, geometry, board, self._timer())
        panel = self._panel()
        if panel is not None:
            self._panel_renderer.render(arcade, geometry, panel)

        mode = current_mode(self.world)
        if mode == GameMode.GAME_OVER_DIALOG and self.score_system is not None:
            dialog = self.score_system.dialog
            if dialog is not None:
                self._dialog_renderer.render_game_over(arcade, width, height, dialog)
        elif mode == GameMode.ALL_SCORES_DIALOG and self.all_scores_system is not None:
            dialog = self.all_scores_system.dialog
            if dialog is not None:
                page = self.all_scores_system.current_page()
                self._dialog_renderer.render_all_scores(arcade, width, height, dialog, page)

    def _timer(self) -> GameTimer | None:
        for _, timer in self.world.get_component(GameTimer):
            return timer
        return None

    def _panel(self) -> LeaderboardPanel | None:
        for _, panel in self.world.get_component(LeaderboardPanel):
            return panel
        return None
