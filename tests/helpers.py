from __future__ import annotations

import random
from concurrent.futures import Future
from typing import Any, Callable, Dict, Iterable, List, Tuple

from esper import World

from minefield.components.board import BoardPhase
from minefield.events.bus import EventBus
from minefield.systems.board import BoardSystem
from minefield.systems.board_ops import apply_mines, cell_map
from minefield.world import create_world


class FakeClock:
    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


class FakeTransport:
    """Stands in for HttpTransport; records calls and replays canned responses."""

    def __init__(self, responses: Dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.responses = responses or {}
        self.error = error
        self.posts: List[Tuple[str, Dict[str, Any]]] = []
        self.gets: List[str] = []

    def post_json(self, url: str, payload: Dict[str, Any]) -> None:
        if self.error is not None:
            raise self.error
        self.posts.append((url, dict(payload)))

    def get_json(self, url: str) -> Dict[str, Any]:
        self.gets.append(url)
        if self.error is not None:
            raise self.error
        for suffix, response in self.responses.items():
            if url.endswith(suffix):
                return response
        return {}


class InlineDispatcher:
    """Runs jobs immediately but still holds callbacks until ``pump()``."""

    def __init__(self) -> None:
        self._queue: List[Tuple[Callable, Any, Any]] = []

    def submit(self, job, callback=None) -> Future:
        future: Future = Future()
        try:
            result = job()
        except Exception as exc:
            future.set_exception(exc)
            if callback is not None:
                self._queue.append((callback, exc, None))
            return future
        future.set_result(result)
        if callback is not None:
            self._queue.append((callback, None, result))
        return future

    def defer(self, callback, error, result=None) -> Future:
        future: Future = Future()
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)
        self._queue.append((callback, error, result))
        return future

    def pump(self) -> int:
        pending, self._queue = self._queue, []
        for callback, error, result in pending:
            callback(error, result)
        return len(pending)

    def shutdown(self) -> None:
        self._queue.clear()


def make_board(
    rows: int = 5,
    cols: int = 5,
    mines: Iterable[Tuple[int, int]] = (),
    *,
    bus: EventBus | None = None,
) -> Tuple[World, EventBus, BoardSystem]:
    """Board with hand-placed mines, already in the active phase."""
    bus = bus or EventBus()
    world = create_world(bus, rng=random.Random(7))
    mine_set = set(mines)
    system = BoardSystem(world, bus, rows=rows, cols=cols, mines=max(1, len(mine_set)))
    if mine_set:
        apply_mines(system.board, cell_map(world), mine_set)
        system.board.phase = BoardPhase.ACTIVE
    return world, bus, system
