from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Set, Tuple


class BoardPhase(Enum):
    """Lifecycle of a single game."""
    NOT_STARTED = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()


@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    mines: int
    mine_positions: Set[Tuple[int, int]] = field(default_factory=set)
    revealed_cells: int = 0
    flagged_cells: int = 0
    phase: BoardPhase = BoardPhase.NOT_STARTED
    trigger: Optional[Tuple[int, int]] = None

    @property
    def started(self) -> bool:
        return self.phase != BoardPhase.NOT_STARTED

    @property
    def over(self) -> bool:
        return self.phase in (BoardPhase.WON, BoardPhase.LOST)

    @property
    def safe_cells(self) -> int:
        return self.rows * self.cols - self.mines

    @property
    def mines_remaining(self) -> int:
        return self.mines - self.flagged_cells
