from dataclasses import dataclass, field
from typing import List

from minefield.leaderboard.records import LeaderboardEntry


@dataclass(slots=True)
class AllScoresDialog:
    """Modal listing every player's best time, one page at a time."""
    status: str = "loading"
    message: str = "Loading..."
    entries: List[LeaderboardEntry] = field(default_factory=list)
    page: int = 1
