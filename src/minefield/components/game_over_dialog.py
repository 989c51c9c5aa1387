from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(slots=True)
class GameOverDialog:
    """Modal shown after a game ends; carries the pending score on a win."""
    won: bool
    final_time: float
    finished_at: int
    start_time: Optional[int] = None
    time_stamps: List[int] = field(default_factory=list)
    mines: List[Tuple[int, int]] = field(default_factory=list)
    name_text: str = ""
    message: str = ""
    message_kind: str = "info"
    submitting: bool = False
    submitted: bool = False

    @property
    def accepts_input(self) -> bool:
        return self.won and not self.submitting and not self.submitted
