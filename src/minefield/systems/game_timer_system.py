from __future__ import annotations

import time
from typing import Any, Callable, List, Tuple

from esper import World

from minefield.components.game_timer import GameTimer
from minefield.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_CELL_FLAG_CHANGED,
    EVENT_CELL_REVEAL_ACCEPTED,
    EVENT_GAME_LOST,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_GAME_WON,
    EVENT_TICK,
    EventBus,
)


class GameTimerSystem:
    """Runs the per-game clock and collects the timing telemetry sent with scores.

    ``clock`` measures elapsed time (monotonic seconds); ``wall_clock`` stamps
    events in epoch seconds and is stored as epoch milliseconds.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        clock: Callable[[], float] | None = None,
        wall_clock: Callable[[], float] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._clock = clock or time.monotonic
        self._wall_clock = wall_clock or time.time
        self._mines: List[Tuple[int, int]] = []
        self.timer_entity = self._ensure_timer_entity()
        self.event_bus.subscribe(EVENT_GAME_STARTED, self._on_game_started)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_CELL_REVEAL_ACCEPTED, self._on_player_action)
        self.event_bus.subscribe(EVENT_CELL_FLAG_CHANGED, self._on_player_action)
        self.event_bus.subscribe(EVENT_GAME_WON, self._on_game_won)
        self.event_bus.subscribe(EVENT_GAME_LOST, self._on_game_lost)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self._on_board_reset)

    def _ensure_timer_entity(self) -> int:
        existing = list(self.world.get_component(GameTimer))
        if existing:
            return existing[0][0]
        return self.world.create_entity(GameTimer())

    @property
    def timer(self) -> GameTimer:
        return self.world.component_for_entity(self.timer_entity, GameTimer)

    def _now_ms(self) -> int:
        return int(self._wall_clock() * 1000)

    def _on_game_started(self, sender: Any, **payload: Any) -> None:
        timer = self.timer
        timer.running = True
        timer.started_at = self._clock()
        timer.elapsed = 0.0
        timer.final_time = None
        timer.start_time = self._now_ms()
        timer.time_stamps = []
        self._mines = [tuple(pos) for pos in payload.get("mines") or []]

    def _on_tick(self, sender: Any, **payload: Any) -> None:
        timer = self.timer
        if not timer.running or timer.started_at is None:
            return
        timer.elapsed = max(0.0, self._clock() - timer.started_at)

    def _on_player_action(self, sender: Any, **payload: Any) -> None:
        timer = self.timer
        if timer.running:
            timer.time_stamps.append(self._now_ms())

    def _on_game_won(self, sender: Any, **payload: Any) -> None:
        self._finish(won=True)

    def _on_game_lost(self, sender: Any, **payload: Any) -> None:
        self._finish(won=False)

    def _finish(self, *, won: bool) -> None:
        timer = self.timer
        if not timer.running or timer.started_at is None:
            return
        timer.running = False
        timer.elapsed = max(0.0, self._clock() - timer.started_at)
        timer.final_time = timer.elapsed
        self.event_bus.emit(
            EVENT_GAME_OVER,
            won=won,
            final_time=timer.final_time,
            finished_at=self._now_ms(),
            start_time=timer.start_time,
            time_stamps=list(timer.time_stamps),
            mines=list(self._mines),
        )

    def _on_board_reset(self, sender: Any, **payload: Any) -> None:
        timer = self.timer
        timer.running = False
        timer.started_at = None
        timer.elapsed = 0.0
        timer.final_time = None
        timer.start_time = None
        timer.time_stamps = []
        self._mines = []
