from __future__ import annotations

import logging
from typing import Any, Optional

from esper import World

from minefield.components.game_over_dialog import GameOverDialog
from minefield.components.game_state import GameMode
from minefield.constants import GAME_OVER_DIALOG_DELAY, NAME_MAX_LENGTH
from minefield.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_DIALOG_CLOSE_REQUEST,
    EVENT_GAME_OVER,
    EVENT_KEY_PRESS,
    EVENT_SCORE_SUBMIT_FAILED,
    EVENT_SCORE_SUBMIT_REQUEST,
    EVENT_SCORE_SUBMITTED,
    EVENT_TEXT_INPUT,
    EVENT_TICK,
    EventBus,
)
from minefield.leaderboard.client import LeaderboardClient
from minefield.leaderboard.records import ScoreRecord
from minefield.utils.game_state import current_mode, set_game_mode

logger = logging.getLogger(__name__)

# arcade.key values; kept numeric so the system stays importable without a window.
KEY_BACKSPACE = 65288
KEY_ENTER = 65293
KEY_NUM_ENTER = 65421
KEY_ESCAPE = 65307


class ScoreSubmissionSystem:
    """Shows the game-over dialog and sends a winning time to the leaderboard."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        client: LeaderboardClient | None,
        *,
        dialog_delay: float = GAME_OVER_DIALOG_DELAY,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.client = client
        self._dialog_delay = dialog_delay
        self._pending: dict[str, Any] | None = None
        self._pending_delay = 0.0
        self.dialog_entity: int | None = None
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_TEXT_INPUT, self._on_text_input)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self._on_key_press)
        self.event_bus.subscribe(EVENT_SCORE_SUBMIT_REQUEST, self._on_submit_request)
        self.event_bus.subscribe(EVENT_DIALOG_CLOSE_REQUEST, self._on_close_request)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self._on_board_reset)

    @property
    def dialog(self) -> GameOverDialog | None:
        if self.dialog_entity is None:
            return None
        try:
            return self.world.component_for_entity(self.dialog_entity, GameOverDialog)
        except KeyError:
            return None

    def _on_game_over(self, sender: Any, **payload: Any) -> None:
        self._pending = dict(payload)
        self._pending_delay = self._dialog_delay
        if self._pending_delay <= 0:
            self._open_pending()

    def _on_tick(self, sender: Any, **payload: Any) -> None:
        if self._pending is None:
            return
        try:
            self._pending_delay -= float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            return
        if self._pending_delay <= 0:
            self._open_pending()

    def _open_pending(self) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return
        self.close()
        dialog = GameOverDialog(
            won=bool(pending.get("won")),
            final_time=float(pending.get("final_time") or 0.0),
            finished_at=int(pending.get("finished_at") or 0),
            start_time=pending.get("start_time"),
            time_stamps=list(pending.get("time_stamps") or []),
            mines=[tuple(pos) for pos in pending.get("mines") or []],
        )
        self.dialog_entity = self.world.create_entity(dialog)
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER_DIALOG)

    def type_text(self, text: str) -> None:
        dialog = self.dialog
        if dialog is None or not dialog.accepts_input:
            return
        for char in text:
            if not char.isprintable() or len(dialog.name_text) >= NAME_MAX_LENGTH:
                continue
            dialog.name_text += char

    def backspace(self) -> None:
        dialog = self.dialog
        if dialog is None or not dialog.accepts_input:
            return
        dialog.name_text = dialog.name_text[:-1]

    def submit(self) -> None:
        """Send the pending score once; repeated triggers are ignored."""
        dialog = self.dialog
        if dialog is None or not dialog.won or dialog.submitted or dialog.submitting:
            return
        name = dialog.name_text.strip()
        if not name:
            self._set_message(dialog, "Please enter your name!", "error")
            return
        if self.client is None:
            self._set_message(dialog, "Leaderboard unavailable", "error")
            return
        record = ScoreRecord(
            name=name,
            time=dialog.final_time,
            timestamp=dialog.finished_at,
            start_time=dialog.start_time,
            time_stamps=tuple(dialog.time_stamps),
            mines=tuple(tuple(pos) for pos in dialog.mines),
        )
        dialog.submitting = True
        self._set_message(dialog, "Submitting...", "info")
        dialog_entity = self.dialog_entity

        def on_done(error: Optional[BaseException], result: Any) -> None:
            self._on_submit_done(dialog_entity, record, error)

        self.client.submit(record, on_done)

    def _on_submit_done(self, dialog_entity: int | None, record: ScoreRecord, error: Optional[BaseException]) -> None:
        if error is not None:
            self.event_bus.emit(EVENT_SCORE_SUBMIT_FAILED, message=str(error))
        else:
            self.event_bus.emit(EVENT_SCORE_SUBMITTED, record=record)
        if dialog_entity is None or dialog_entity != self.dialog_entity:
            return
        dialog = self.dialog
        if dialog is None:
            return
        dialog.submitting = False
        if error is not None:
            self._set_message(dialog, f"Failed: {error}", "error")
        else:
            dialog.submitted = True
            self._set_message(dialog, "Score submitted successfully!", "success")

    def close(self) -> None:
        if self.dialog_entity is None:
            return
        entity, self.dialog_entity = self.dialog_entity, None
        try:
            self.world.delete_entity(entity, immediate=True)
        except KeyError:
            pass
        if current_mode(self.world) == GameMode.GAME_OVER_DIALOG:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    @staticmethod
    def _set_message(dialog: GameOverDialog, message: str, kind: str) -> None:
        dialog.message = message
        dialog.message_kind = kind

    def _on_text_input(self, sender: Any, **payload: Any) -> None:
        text = payload.get("text")
        if isinstance(text, str):
            self.type_text(text)

    def _on_key_press(self, sender: Any, **payload: Any) -> None:
        if self.dialog is None:
            return
        symbol = payload.get("symbol")
        if symbol == KEY_BACKSPACE:
            self.backspace()
        elif symbol in (KEY_ENTER, KEY_NUM_ENTER):
            self.submit()
        elif symbol == KEY_ESCAPE:
            self.close()

    def _on_submit_request(self, sender: Any, **payload: Any) -> None:
        self.submit()

    def _on_close_request(self, sender: Any, **payload: Any) -> None:
        if current_mode(self.world) == GameMode.GAME_OVER_DIALOG:
            self.close()

    def _on_board_reset(self, sender: Any, **payload: Any) -> None:
        self._pending = None
        self.close()
