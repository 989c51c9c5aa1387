"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level modes that decide where input is routed."""
    PLAYING = auto()
    GAME_OVER_DIALOG = auto()
    ALL_SCORES_DIALOG = auto()


@dataclass
class GameState:
    """Singleton component storing the currently active game mode."""
    mode: GameMode = GameMode.PLAYING
