from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class GameTimer:
    """Clock for the current game plus the telemetry sent with a score.

    ``started_at`` is a monotonic reading used for elapsed time; ``start_time``
    and ``time_stamps`` are wall-clock epoch milliseconds.
    """
    running: bool = False
    started_at: Optional[float] = None
    elapsed: float = 0.0
    final_time: Optional[float] = None
    start_time: Optional[int] = None
    time_stamps: List[int] = field(default_factory=list)
