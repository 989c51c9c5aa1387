from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from esper import World

from minefield.components.board import Board, BoardPhase
from minefield.components.board_position import BoardPosition
from minefield.components.cell import Cell
from minefield.constants import GRID_COLS, GRID_ROWS, MINE_COUNT
from minefield.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_CELL_FLAG_CHANGED,
    EVENT_CELL_FLAG_REQUEST,
    EVENT_CELL_REVEAL_ACCEPTED,
    EVENT_CELL_REVEAL_REQUEST,
    EVENT_CELLS_REVEALED,
    EVENT_GAME_LOST,
    EVENT_GAME_STARTED,
    EVENT_GAME_WON,
    EventBus,
)
from minefield.systems.board_ops import (
    apply_mines,
    cell_map,
    choose_mine_positions,
    flood_reveal,
    in_bounds,
    reveal_unflagged_mines,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(slots=True)
class RevealOutcome:
    """Result of a reveal request: ``noop``, ``reveal``, ``win`` or ``boom``."""
    kind: str
    positions: List[Position] = field(default_factory=list)
    trigger: Optional[Position] = None


class BoardSystem:
    """Owns the board entity and its cells; implements the minesweeper rules."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        mines: int = MINE_COUNT,
        *,
        rng: random.Random | None = None,
    ):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"board needs a positive size, got {rows}x{cols}")
        if mines <= 0 or mines >= rows * cols:
            raise ValueError(f"mine count {mines} does not fit a {rows}x{cols} board")
        self.world = world
        self.event_bus = event_bus
        self.rows = rows
        self.cols = cols
        self.mines = mines
        candidate_rng = rng or getattr(world, "random", None)
        self.rng = candidate_rng if isinstance(candidate_rng, random.Random) else random.Random()
        self.board_entity: int | None = None
        self._cell_entities: List[int] = []
        self.event_bus.subscribe(EVENT_CELL_REVEAL_REQUEST, self.on_reveal_request)
        self.event_bus.subscribe(EVENT_CELL_FLAG_REQUEST, self.on_flag_request)
        self.event_bus.subscribe(EVENT_BOARD_RESET_REQUEST, self.on_reset_request)
        self.reset()

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def reset(self) -> None:
        """Discard the current grid and start a fresh, not-yet-started game."""
        for entity in self._cell_entities:
            self.world.delete_entity(entity, immediate=True)
        if self.board_entity is not None:
            self.world.delete_entity(self.board_entity, immediate=True)
        self.board_entity = self.world.create_entity(Board(rows=self.rows, cols=self.cols, mines=self.mines))
        self._cell_entities = [
            self.world.create_entity(BoardPosition(row=r, col=c), Cell())
            for r in range(self.rows)
            for c in range(self.cols)
        ]
        logger.debug("board reset to %dx%d with %d mines", self.rows, self.cols, self.mines)
        self.event_bus.emit(EVENT_BOARD_RESET, rows=self.rows, cols=self.cols, mines=self.mines)

    def place_mines(self, exclude_row: int, exclude_col: int) -> None:
        board = self.board
        cells = cell_map(self.world)
        positions = choose_mine_positions(board, exclude_row, exclude_col, self.rng)
        apply_mines(board, cells, positions)

    def reveal(self, row: int, col: int) -> RevealOutcome:
        board = self.board
        if board.over or not in_bounds(board, row, col):
            return RevealOutcome("noop")
        cells = cell_map(self.world)
        cell = cells[(row, col)]
        if cell.is_revealed or cell.is_flagged:
            return RevealOutcome("noop")

        if board.phase == BoardPhase.NOT_STARTED:
            self.place_mines(row, col)
            board.phase = BoardPhase.ACTIVE
            logger.debug("game started at (%d, %d)", row, col)
            self.event_bus.emit(EVENT_GAME_STARTED, row=row, col=col, mines=sorted(board.mine_positions))
        self.event_bus.emit(EVENT_CELL_REVEAL_ACCEPTED, row=row, col=col)

        if cell.is_mine:
            cell.is_revealed = True
            board.revealed_cells += 1
            board.phase = BoardPhase.LOST
            board.trigger = (row, col)
            reveal_unflagged_mines(board, cells)
            logger.debug("mine hit at (%d, %d)", row, col)
            self.event_bus.emit(EVENT_GAME_LOST, trigger=(row, col), mines=sorted(board.mine_positions))
            return RevealOutcome("boom", positions=[(row, col)], trigger=(row, col))

        revealed = flood_reveal(board, cells, row, col)
        if board.revealed_cells == board.safe_cells:
            board.phase = BoardPhase.WON
            logger.debug("board cleared")
            self.event_bus.emit(EVENT_GAME_WON, positions=revealed)
            return RevealOutcome("win", positions=revealed)
        self.event_bus.emit(EVENT_CELLS_REVEALED, positions=revealed)
        return RevealOutcome("reveal", positions=revealed)

    def toggle_flag(self, row: int, col: int) -> bool:
        """Flip the flag on a hidden cell; only allowed while the game is active."""
        board = self.board
        if board.phase != BoardPhase.ACTIVE or not in_bounds(board, row, col):
            return False
        cell = cell_map(self.world)[(row, col)]
        if cell.is_revealed:
            return False
        cell.is_flagged = not cell.is_flagged
        board.flagged_cells += 1 if cell.is_flagged else -1
        self.event_bus.emit(
            EVENT_CELL_FLAG_CHANGED,
            row=row,
            col=col,
            flagged=cell.is_flagged,
            mines_remaining=board.mines_remaining,
        )
        return True

    def on_reveal_request(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.reveal(int(row), int(col))

    def on_flag_request(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.toggle_flag(int(row), int(col))

    def on_reset_request(self, sender, **kwargs):
        self.reset()
