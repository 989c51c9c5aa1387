import random

import pytest

from minefield.components.board import BoardPhase
from minefield.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_CELL_FLAG_CHANGED,
    EVENT_CELL_FLAG_REQUEST,
    EVENT_CELL_REVEAL_REQUEST,
    EVENT_GAME_LOST,
    EVENT_GAME_STARTED,
    EVENT_GAME_WON,
    EventBus,
)
from minefield.systems.board import BoardSystem
from minefield.systems.board_ops import cell_map, count_flagged, count_revealed, neighbors
from minefield.world import create_world
from tests.helpers import make_board


def _record(bus, name):
    seen = []
    bus.subscribe(name, lambda sender, **payload: seen.append(payload))
    return seen


def test_new_board_is_hidden_and_not_started():
    bus = EventBus()
    world = create_world(bus)
    system = BoardSystem(world, bus)
    cells = cell_map(world)

    assert len(cells) == 81
    assert system.board.phase == BoardPhase.NOT_STARTED
    assert not any(c.is_mine or c.is_revealed or c.is_flagged for c in cells.values())


@pytest.mark.parametrize("rows, cols, mines", [(0, 5, 1), (5, 5, 0), (3, 3, 9), (2, 2, 5)])
def test_invalid_board_config_is_rejected(rows, cols, mines):
    bus = EventBus()
    with pytest.raises(ValueError):
        BoardSystem(create_world(bus), bus, rows=rows, cols=cols, mines=mines)


def test_first_reveal_places_mines_away_from_click_and_starts_game():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(3))
    system = BoardSystem(world, bus)
    started = _record(bus, EVENT_GAME_STARTED)

    outcome = system.reveal(4, 4)

    board = system.board
    assert outcome.kind in ("reveal", "win")
    assert board.phase in (BoardPhase.ACTIVE, BoardPhase.WON)
    assert len(board.mine_positions) == 4
    assert board.mine_positions.isdisjoint({(4, 4)} | set(neighbors(board, 4, 4)))
    assert started and started[0]["mines"] == sorted(board.mine_positions)
    assert cell_map(world)[(4, 4)].neighbor_mines == 0


def test_reveal_request_event_drives_engine():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(5))
    system = BoardSystem(world, bus)
    bus.emit(EVENT_CELL_REVEAL_REQUEST, row=0, col=0)
    assert system.board.started
    assert cell_map(world)[(0, 0)].is_revealed


def test_revealing_every_safe_cell_wins():
    world, bus, system = make_board(3, 3, mines={(0, 0)})
    won = _record(bus, EVENT_GAME_WON)

    system.reveal(2, 2)

    assert system.board.phase == BoardPhase.WON
    assert won
    assert system.board.revealed_cells == 8
    assert count_revealed(cell_map(world)) == 8


def test_win_needs_last_numbered_cell():
    world, bus, system = make_board(2, 2, mines={(0, 0)})
    assert system.reveal(0, 1).kind == "reveal"
    assert system.reveal(1, 0).kind == "reveal"
    assert system.reveal(1, 1).kind == "win"


def test_revealing_a_mine_loses_and_shows_unflagged_mines():
    world, bus, system = make_board(4, 4, mines={(0, 0), (3, 3)})
    lost = _record(bus, EVENT_GAME_LOST)
    system.toggle_flag(3, 3)

    outcome = system.reveal(0, 0)

    cells = cell_map(world)
    assert outcome.kind == "boom"
    assert outcome.trigger == (0, 0)
    assert system.board.phase == BoardPhase.LOST
    assert lost and lost[0]["trigger"] == (0, 0)
    assert cells[(0, 0)].is_revealed
    assert cells[(3, 3)].is_flagged and not cells[(3, 3)].is_revealed


def test_actions_after_game_over_are_ignored():
    world, bus, system = make_board(3, 3, mines={(0, 0)})
    system.reveal(0, 0)
    before = system.board.revealed_cells

    assert system.reveal(2, 2).kind == "noop"
    assert not system.toggle_flag(1, 1)
    assert system.board.revealed_cells == before


def test_reveal_on_flagged_revealed_or_out_of_bounds_is_noop():
    world, bus, system = make_board(3, 3, mines={(0, 0)})
    system.toggle_flag(2, 2)
    assert system.reveal(2, 2).kind == "noop"
    assert system.reveal(0, 1).kind == "reveal"
    assert system.reveal(0, 1).kind == "noop"
    assert system.reveal(7, 7).kind == "noop"


def test_flag_toggle_tracks_count_and_remaining():
    world, bus, system = make_board(3, 3, mines={(0, 0)})
    changes = _record(bus, EVENT_CELL_FLAG_CHANGED)

    bus.emit(EVENT_CELL_FLAG_REQUEST, row=1, col=1)
    assert system.board.flagged_cells == 1
    assert changes[-1]["mines_remaining"] == 0

    bus.emit(EVENT_CELL_FLAG_REQUEST, row=1, col=1)
    assert system.board.flagged_cells == 0
    assert changes[-1]["flagged"] is False
    assert count_flagged(cell_map(world)) == 0


def test_flag_before_first_reveal_is_ignored():
    bus = EventBus()
    world = create_world(bus)
    system = BoardSystem(world, bus)
    assert not system.toggle_flag(0, 0)
    assert system.board.flagged_cells == 0


def test_flag_on_revealed_cell_is_ignored():
    world, bus, system = make_board(3, 3, mines={(0, 0)})
    system.reveal(0, 1)
    assert not system.toggle_flag(0, 1)


def test_reset_request_builds_fresh_board():
    world, bus, system = make_board(3, 3, mines={(0, 0)})
    resets = _record(bus, EVENT_BOARD_RESET)
    system.reveal(0, 0)

    bus.emit(EVENT_BOARD_RESET_REQUEST)

    board = system.board
    cells = cell_map(world)
    assert resets
    assert board.phase == BoardPhase.NOT_STARTED
    assert board.revealed_cells == 0 and board.flagged_cells == 0
    assert board.mine_positions == set()
    assert len(cells) == 9
    assert not any(c.is_revealed or c.is_mine for c in cells.values())


@pytest.mark.parametrize("seed", range(15))
def test_random_play_keeps_counters_consistent(seed):
    rng = random.Random(seed)
    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed))
    system = BoardSystem(world, bus)
    won = _record(bus, EVENT_GAME_WON)
    lost = _record(bus, EVENT_GAME_LOST)
    while not system.board.over:
        assert not won and not lost
        row, col = rng.randrange(9), rng.randrange(9)
        if rng.random() < 0.2:
            system.toggle_flag(row, col)
        else:
            system.reveal(row, col)
        cells = cell_map(world)
        board = system.board
        assert board.revealed_cells == count_revealed(cells)
        assert board.flagged_cells == count_flagged(cells)
        assert not any(c.is_revealed and c.is_flagged for c in cells.values())
        assert sum(1 for c in cells.values() if c.is_mine) == (4 if board.started else 0)
    assert len(won) + len(lost) == 1
    assert bool(won) == (system.board.phase == BoardPhase.WON)
