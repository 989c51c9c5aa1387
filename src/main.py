"""Entry point for the Minefield minesweeper game.

Sets up the ECS world, event bus, systems, leaderboard client and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color

from minefield.config import load_settings
from minefield.constants import GRID_COLS, GRID_ROWS, MINE_COUNT
from minefield.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_TEXT_INPUT,
    EVENT_TICK,
    EventBus,
)
from minefield.leaderboard.client import LeaderboardClient
from minefield.rendering import palette
from minefield.systems.all_scores_system import AllScoresSystem
from minefield.systems.board import BoardSystem
from minefield.systems.game_timer_system import GameTimerSystem
from minefield.systems.input import InputSystem
from minefield.systems.leaderboard_panel_system import LeaderboardPanelSystem
from minefield.systems.render import RenderSystem
from minefield.systems.score_submission_system import ScoreSubmissionSystem
from minefield.world import create_world

logger = logging.getLogger(__name__)


class MinefieldWindow(Window):
    def __init__(self, settings):
        super().__init__(1000, 680, "Minefield", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)
        self.leaderboard_client = (
            LeaderboardClient(settings.leaderboard_url) if settings.leaderboard_enabled else None
        )
        if self.leaderboard_client is None:
            logger.info("no leaderboard endpoint configured; scores stay local to this session")

        # Timer first so it sees board events emitted during setup.
        self.game_timer_system = GameTimerSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus, rows=GRID_ROWS, cols=GRID_COLS, mines=MINE_COUNT)

        # Leaderboard systems
        self.leaderboard_panel_system = LeaderboardPanelSystem(self.world, self.event_bus, self.leaderboard_client)
        self.score_submission_system = ScoreSubmissionSystem(self.world, self.event_bus, self.leaderboard_client)
        self.all_scores_system = AllScoresSystem(self.world, self.event_bus, self.leaderboard_client)

        # Interface systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(
            self.world,
            self.event_bus,
            self,
            score_system=self.score_submission_system,
            all_scores_system=self.all_scores_system,
        )
        set_background_color(palette.BACKGROUND)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, modifiers=modifiers)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def on_text(self, text: str):
        self.event_bus.emit(EVENT_TEXT_INPUT, text=text)

    def on_close(self):
        if self.leaderboard_client is not None:
            self.leaderboard_client.close()
        super().on_close()


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    MinefieldWindow(settings)
    run()

if __name__ == "__main__":
    main()
