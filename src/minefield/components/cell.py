from dataclasses import dataclass

@dataclass(slots=True)
class Cell:
    """Per-square minesweeper state.

    Only the board engine mutates these fields. ``neighbor_mines`` stays 0 for
    mine cells and is meaningless until mines are placed.
    """
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    neighbor_mines: int = 0
