import random

import pytest

from minefield.components.board import Board
from minefield.components.cell import Cell
from minefield.systems.board_ops import (
    apply_mines,
    choose_mine_positions,
    flood_reveal,
    neighbors,
    wrong_flags,
)


def _cells(rows, cols):
    return {(r, c): Cell() for r in range(rows) for c in range(cols)}


def test_neighbors_corner_edge_and_interior():
    board = Board(rows=9, cols=9, mines=4)
    assert sorted(neighbors(board, 0, 0)) == [(0, 1), (1, 0), (1, 1)]
    assert len(list(neighbors(board, 0, 4))) == 5
    assert len(list(neighbors(board, 4, 4))) == 8


@pytest.mark.parametrize("seed", range(25))
@pytest.mark.parametrize("click", [(0, 0), (4, 4), (8, 3)])
def test_mine_placement_keeps_first_click_neighbourhood_clear(seed, click):
    board = Board(rows=9, cols=9, mines=4)
    positions = choose_mine_positions(board, click[0], click[1], random.Random(seed))
    assert len(positions) == 4
    forbidden = {click} | set(neighbors(board, *click))
    assert positions.isdisjoint(forbidden)
    assert all(0 <= r < 9 and 0 <= c < 9 for r, c in positions)


def test_mine_placement_falls_back_to_clicked_cell_on_tiny_board():
    board = Board(rows=2, cols=2, mines=3)
    positions = choose_mine_positions(board, 0, 0, random.Random(1))
    assert positions == {(0, 1), (1, 0), (1, 1)}


@pytest.mark.parametrize("seed", range(10))
def test_neighbor_counts_match_brute_force(seed):
    rng = random.Random(seed)
    board = Board(rows=9, cols=9, mines=10)
    cells = _cells(9, 9)
    mines = set(rng.sample([(r, c) for r in range(9) for c in range(9)], 10))
    apply_mines(board, cells, mines)
    for (r, c), cell in cells.items():
        assert cell.is_mine == ((r, c) in mines)
        if cell.is_mine:
            continue
        expected = sum(
            1
            for dr in (-1, 0, 1)
            for dc in (-1, 0, 1)
            if (dr or dc) and (r + dr, c + dc) in mines
        )
        assert cell.neighbor_mines == expected


def test_flood_reveal_opens_zero_region_and_border_only():
    board = Board(rows=5, cols=5, mines=1)
    cells = _cells(5, 5)
    apply_mines(board, cells, {(4, 4)})

    opened = flood_reveal(board, cells, 0, 0)

    assert len(opened) == 24
    assert (4, 4) not in opened
    assert board.revealed_cells == 24
    assert not cells[(4, 4)].is_revealed


def test_flood_reveal_stops_at_flags():
    board = Board(rows=3, cols=3, mines=1)
    cells = _cells(3, 3)
    apply_mines(board, cells, {(2, 2)})
    cells[(0, 2)].is_flagged = True

    opened = flood_reveal(board, cells, 0, 0)

    assert (0, 2) not in opened
    assert not cells[(0, 2)].is_revealed
    assert board.revealed_cells == len(opened)


def test_flood_reveal_on_numbered_cell_opens_only_that_cell():
    board = Board(rows=3, cols=3, mines=1)
    cells = _cells(3, 3)
    apply_mines(board, cells, {(0, 0)})

    assert flood_reveal(board, cells, 1, 1) == [(1, 1)]


def test_wrong_flags_lists_flags_without_mines():
    board = Board(rows=3, cols=3, mines=1)
    cells = _cells(3, 3)
    apply_mines(board, cells, {(0, 0)})
    cells[(0, 0)].is_flagged = True
    cells[(2, 2)].is_flagged = True
    assert wrong_flags(board, cells) == [(2, 2)]
