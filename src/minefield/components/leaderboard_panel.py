from dataclasses import dataclass, field
from typing import List

from minefield.constants import VIEW_DAILY
from minefield.leaderboard.records import LeaderboardEntry


@dataclass(slots=True)
class LeaderboardPanel:
    """State of the persistent leaderboard panel beside the board."""
    view: str = VIEW_DAILY
    status: str = "loading"
    message: str = "Loading..."
    entries: List[LeaderboardEntry] = field(default_factory=list)
    request_id: int = 0
