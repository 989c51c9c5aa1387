from __future__ import annotations

import random
from typing import Dict, Iterator, List, Set, Tuple

from esper import World

from minefield.components.board import Board
from minefield.components.board_position import BoardPosition
from minefield.components.cell import Cell

Position = Tuple[int, int]
CellMap = Dict[Position, Cell]


def get_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None


def in_bounds(board: Board, row: int, col: int) -> bool:
    return 0 <= row < board.rows and 0 <= col < board.cols


def neighbors(board: Board, row: int, col: int) -> Iterator[Position]:
    """Yield the up-to-8 Chebyshev neighbours of a cell that lie on the grid."""
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            nr, nc = row + dr, col + dc
            if in_bounds(board, nr, nc):
                yield nr, nc


def cell_map(world: World) -> CellMap:
    """Return a position keyed view of every cell component on the board."""
    mapping: CellMap = {}
    for entity, position in world.get_component(BoardPosition):
        try:
            cell = world.component_for_entity(entity, Cell)
        except KeyError:
            continue
        mapping[(position.row, position.col)] = cell
    return mapping


def choose_mine_positions(
    board: Board,
    exclude_row: int,
    exclude_col: int,
    rng: random.Random,
) -> Set[Position]:
    """Pick ``board.mines`` distinct cells outside the 3x3 block around the exclusion.

    Falls back to excluding only the clicked cell when the grid is too small to
    keep the whole neighbourhood clear.
    """
    forbidden = {(exclude_row, exclude_col)} | set(neighbors(board, exclude_row, exclude_col))
    candidates = [
        (r, c) for r in range(board.rows) for c in range(board.cols) if (r, c) not in forbidden
    ]
    if len(candidates) < board.mines:
        candidates = [
            (r, c)
            for r in range(board.rows)
            for c in range(board.cols)
            if (r, c) != (exclude_row, exclude_col)
        ]
    return set(rng.sample(candidates, board.mines))


def count_neighbor_mines(board: Board, cells: CellMap, row: int, col: int) -> int:
    return sum(1 for pos in neighbors(board, row, col) if cells[pos].is_mine)


def apply_mines(board: Board, cells: CellMap, mine_positions: Set[Position]) -> None:
    """Mark mines on the cells and fill in every neighbour count."""
    board.mine_positions = set(mine_positions)
    for pos, cell in cells.items():
        cell.is_mine = pos in mine_positions
    for (row, col), cell in cells.items():
        cell.neighbor_mines = 0 if cell.is_mine else count_neighbor_mines(board, cells, row, col)


def flood_reveal(board: Board, cells: CellMap, row: int, col: int) -> List[Position]:
    """Reveal from (row, col) outward through zero cells using an explicit stack.

    Revealed and flagged cells are never revisited, so the walk ends once the
    zero region and its numbered border are open. Mines are never opened here.
    Returns the newly revealed positions in reveal order.
    """
    revealed: List[Position] = []
    stack = [(row, col)]
    while stack:
        pos = stack.pop()
        cell = cells[pos]
        if cell.is_revealed or cell.is_flagged or cell.is_mine:
            continue
        cell.is_revealed = True
        board.revealed_cells += 1
        revealed.append(pos)
        if cell.neighbor_mines == 0:
            for npos in neighbors(board, *pos):
                neighbor = cells[npos]
                if not neighbor.is_revealed and not neighbor.is_flagged:
                    stack.append(npos)
    return revealed


def reveal_unflagged_mines(board: Board, cells: CellMap) -> List[Position]:
    """Open every mine the player did not flag (end-of-game display after a loss)."""
    opened: List[Position] = []
    for pos in sorted(board.mine_positions):
        cell = cells[pos]
        if cell.is_revealed or cell.is_flagged:
            continue
        cell.is_revealed = True
        board.revealed_cells += 1
        opened.append(pos)
    return opened


def count_revealed(cells: CellMap) -> int:
    return sum(1 for cell in cells.values() if cell.is_revealed)


def count_flagged(cells: CellMap) -> int:
    return sum(1 for cell in cells.values() if cell.is_flagged)


def wrong_flags(board: Board, cells: CellMap) -> List[Position]:
    """Flagged positions that do not hold a mine."""
    return sorted(pos for pos, cell in cells.items() if cell.is_flagged and pos not in board.mine_positions)
