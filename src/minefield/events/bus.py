from typing import Any, Callable

from blinker import Namespace

Handler = Callable[..., Any]


class EventBus:
    """Named blinker signals shared by every system of one game.

    Handlers are called as ``handler(bus, **payload)`` and are held strongly,
    so a system stays wired for as long as the bus lives.
    """

    def __init__(self):
        self._signals = Namespace()

    def subscribe(self, name: str, fn: Handler) -> Handler:
        self._signals.signal(name).connect(fn, weak=False)
        return fn

    def emit(self, name: str, **payload) -> int:
        """Deliver ``payload`` to the handlers of ``name``; returns how many ran."""
        signal = self._signals.get(name)
        if signal is None:
            return 0
        return len(signal.send(self, **payload))


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button, modifiers
EVENT_TEXT_INPUT = "text_input"                    # payload: text=str
EVENT_KEY_PRESS = "key_press"                      # payload: symbol=int, modifiers=int


# ============================================================================
# BOARD
# ============================================================================
EVENT_CELL_REVEAL_REQUEST = "cell_reveal_request"  # payload: row, col
EVENT_CELL_FLAG_REQUEST = "cell_flag_request"      # payload: row, col
EVENT_BOARD_RESET_REQUEST = "board_reset_request"  # payload: None
EVENT_BOARD_RESET = "board_reset"                  # payload: rows, cols, mines
EVENT_GAME_STARTED = "game_started"                # payload: row, col, mines=list[(r,c)]
EVENT_CELL_REVEAL_ACCEPTED = "cell_reveal_accepted"  # payload: row, col
EVENT_CELLS_REVEALED = "cells_revealed"            # payload: positions=list[(r,c)]
EVENT_CELL_FLAG_CHANGED = "cell_flag_changed"      # payload: row, col, flagged=bool, mines_remaining=int
EVENT_GAME_WON = "game_won"                        # payload: positions=list[(r,c)]
EVENT_GAME_LOST = "game_lost"                      # payload: trigger=(r,c), mines=list[(r,c)]
EVENT_GAME_OVER = "game_over"                      # payload: won, final_time, finished_at, start_time, time_stamps, mines


# ============================================================================
# LEADERBOARD
# ============================================================================
EVENT_LEADERBOARD_VIEW_SELECTED = "leaderboard_view_selected"    # payload: view=str
EVENT_LEADERBOARD_REFRESH_REQUEST = "leaderboard_refresh_request"  # payload: None
EVENT_LEADERBOARD_UPDATED = "leaderboard_updated"                # payload: view=str, status=str, count=int
EVENT_SCORE_SUBMIT_REQUEST = "score_submit_request"              # payload: None
EVENT_SCORE_SUBMITTED = "score_submitted"                        # payload: record=ScoreRecord
EVENT_SCORE_SUBMIT_FAILED = "score_submit_failed"                # payload: message=str
EVENT_ALL_SCORES_REQUEST = "all_scores_request"                  # payload: None
EVENT_ALL_SCORES_PAGE_REQUEST = "all_scores_page_request"        # payload: delta=int


# ============================================================================
# GAME FLOW & DIALOGS
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_DIALOG_CLOSE_REQUEST = "dialog_close_request"  # payload: None
