from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, List, Optional

from esper import World

from minefield.components.leaderboard_panel import LeaderboardPanel
from minefield.constants import (
    MIDNIGHT_CHECK_INTERVAL,
    PANEL_TOP_N,
    POST_SUBMIT_REFRESH_DELAY,
    REFRESH_INTERVAL,
    VIEW_ALLTIME,
    VIEW_DAILY,
)
from minefield.events.bus import (
    EVENT_LEADERBOARD_REFRESH_REQUEST,
    EVENT_LEADERBOARD_UPDATED,
    EVENT_LEADERBOARD_VIEW_SELECTED,
    EVENT_SCORE_SUBMITTED,
    EVENT_TICK,
    EventBus,
)
from minefield.leaderboard.client import LeaderboardClient
from minefield.leaderboard.records import LeaderboardEntry

logger = logging.getLogger(__name__)


class LeaderboardPanelSystem:
    """Keeps the persistent top-10 panel fresh.

    Also pumps the shared client once per tick, which is where every
    leaderboard callback in the game gets delivered.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        client: LeaderboardClient | None,
        *,
        today: Callable[[], date] | None = None,
        refresh_interval: float = REFRESH_INTERVAL,
        date_check_interval: float = MIDNIGHT_CHECK_INTERVAL,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.client = client
        self._today = today or date.today
        self._refresh_interval = refresh_interval
        self._date_check_interval = date_check_interval
        self._since_refresh = 0.0
        self._since_date_check = 0.0
        self._last_date = self._today()
        self._post_submit_countdown: float | None = None
        self.panel_entity = self.world.create_entity(LeaderboardPanel())
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_LEADERBOARD_VIEW_SELECTED, self._on_view_selected)
        self.event_bus.subscribe(EVENT_LEADERBOARD_REFRESH_REQUEST, self._on_refresh_request)
        self.event_bus.subscribe(EVENT_SCORE_SUBMITTED, self._on_score_submitted)
        if client is None:
            panel = self.panel
            panel.status = "disabled"
            panel.message = "Leaderboard unavailable"
        else:
            self.refresh()

    @property
    def panel(self) -> LeaderboardPanel:
        return self.world.component_for_entity(self.panel_entity, LeaderboardPanel)

    def refresh(self, *, show_loading: bool = True) -> None:
        """Fetch the active view; answers to superseded requests are dropped."""
        if self.client is None:
            return
        panel = self.panel
        panel.request_id += 1
        request_id = panel.request_id
        view = panel.view
        if show_loading:
            panel.status = "loading"
            panel.message = "Loading..."
        self._since_refresh = 0.0

        def on_loaded(error: Optional[BaseException], entries: Any) -> None:
            self._apply_result(request_id, view, error, entries)

        self.client.fetch_leaderboard(view, callback=on_loaded)

    def select_view(self, view: str) -> None:
        if view not in (VIEW_DAILY, VIEW_ALLTIME):
            return
        self.panel.view = view
        self.refresh()

    def _apply_result(
        self,
        request_id: int,
        view: str,
        error: Optional[BaseException],
        entries: List[LeaderboardEntry] | None,
    ) -> None:
        panel = self.panel
        if request_id != panel.request_id:
            return
        if error is not None:
            panel.status = "error"
            panel.message = "Failed to load"
            panel.entries = []
        elif not entries:
            panel.status = "empty"
            panel.message = "No scores today yet!" if view == VIEW_DAILY else "No scores yet!"
            panel.entries = []
        else:
            panel.status = "ready"
            panel.message = ""
            panel.entries = list(entries[:PANEL_TOP_N])
        self.event_bus.emit(EVENT_LEADERBOARD_UPDATED, view=view, status=panel.status, count=len(panel.entries))

    def _on_tick(self, sender: Any, **payload: Any) -> None:
        if self.client is None:
            return
        self.client.pump()
        try:
            dt = float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            dt = 0.0

        if self._post_submit_countdown is not None:
            self._post_submit_countdown -= dt
            if self._post_submit_countdown <= 0:
                self._post_submit_countdown = None
                self.refresh()

        self._since_refresh += dt
        if self._since_refresh >= self._refresh_interval:
            self.refresh(show_loading=False)

        self._since_date_check += dt
        if self._since_date_check >= self._date_check_interval:
            self._since_date_check = 0.0
            current = self._today()
            if current != self._last_date:
                self._last_date = current
                if self.panel.view == VIEW_DAILY:
                    logger.info("date changed to %s, reloading daily leaderboard", current)
                    self.refresh()

    def _on_view_selected(self, sender: Any, **payload: Any) -> None:
        view = payload.get("view")
        if isinstance(view, str):
            self.select_view(view)

    def _on_refresh_request(self, sender: Any, **payload: Any) -> None:
        self.refresh()

    def _on_score_submitted(self, sender: Any, **payload: Any) -> None:
        self._post_submit_countdown = POST_SUBMIT_REFRESH_DELAY
