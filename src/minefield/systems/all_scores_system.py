from __future__ import annotations

from typing import Any, List, Optional

from esper import World

from minefield.components.all_scores_dialog import AllScoresDialog
from minefield.components.game_state import GameMode
from minefield.constants import PAGE_SIZE
from minefield.events.bus import (
    EVENT_ALL_SCORES_PAGE_REQUEST,
    EVENT_ALL_SCORES_REQUEST,
    EVENT_DIALOG_CLOSE_REQUEST,
    EventBus,
)
from minefield.leaderboard.client import LeaderboardClient
from minefield.leaderboard.records import LeaderboardEntry
from minefield.leaderboard.views import Page, paginate, total_pages
from minefield.utils.game_state import current_mode, set_game_mode


class AllScoresSystem:
    """Modal listing every player's best time with previous/next paging."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        client: LeaderboardClient | None,
        *,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.client = client
        self.page_size = page_size
        self.dialog_entity: int | None = None
        self.event_bus.subscribe(EVENT_ALL_SCORES_REQUEST, self._on_open_request)
        self.event_bus.subscribe(EVENT_ALL_SCORES_PAGE_REQUEST, self._on_page_request)
        self.event_bus.subscribe(EVENT_DIALOG_CLOSE_REQUEST, self._on_close_request)

    @property
    def dialog(self) -> AllScoresDialog | None:
        if self.dialog_entity is None:
            return None
        try:
            return self.world.component_for_entity(self.dialog_entity, AllScoresDialog)
        except KeyError:
            return None

    def open(self) -> None:
        if current_mode(self.world) != GameMode.PLAYING or self.dialog is not None:
            return
        dialog = AllScoresDialog()
        self.dialog_entity = self.world.create_entity(dialog)
        set_game_mode(self.world, self.event_bus, GameMode.ALL_SCORES_DIALOG)
        if self.client is None:
            dialog.status = "error"
            dialog.message = "Leaderboard unavailable"
            return
        dialog_entity = self.dialog_entity

        def on_loaded(error: Optional[BaseException], entries: Any) -> None:
            self._apply_result(dialog_entity, error, entries)

        self.client.fetch_all_scores(callback=on_loaded)

    def _apply_result(
        self,
        dialog_entity: int | None,
        error: Optional[BaseException],
        entries: List[LeaderboardEntry] | None,
    ) -> None:
        if dialog_entity is None or dialog_entity != self.dialog_entity:
            return
        dialog = self.dialog
        if dialog is None:
            return
        if error is not None:
            dialog.status = "error"
            dialog.message = "Failed to load scores"
        elif not entries:
            dialog.status = "empty"
            dialog.message = "No scores yet!"
        else:
            dialog.status = "ready"
            dialog.message = ""
            dialog.entries = list(entries)
            dialog.page = 1

    def current_page(self) -> Page | None:
        dialog = self.dialog
        if dialog is None or dialog.status != "ready":
            return None
        return paginate(dialog.entries, dialog.page, self.page_size)

    def change_page(self, delta: int) -> None:
        dialog = self.dialog
        if dialog is None or dialog.status != "ready":
            return
        pages = total_pages(len(dialog.entries), self.page_size)
        dialog.page = max(1, min(pages, dialog.page + delta))

    def close(self) -> None:
        if self.dialog_entity is None:
            return
        entity, self.dialog_entity = self.dialog_entity, None
        try:
            self.world.delete_entity(entity, immediate=True)
        except KeyError:
            pass
        if current_mode(self.world) == GameMode.ALL_SCORES_DIALOG:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def _on_open_request(self, sender: Any, **payload: Any) -> None:
        self.open()

    def _on_page_request(self, sender: Any, **payload: Any) -> None:
        try:
            delta = int(payload.get("delta", 0))
        except (TypeError, ValueError):
            return
        self.change_page(delta)

    def _on_close_request(self, sender: Any, **payload: Any) -> None:
        if current_mode(self.world) == GameMode.ALL_SCORES_DIALOG:
            self.close()
