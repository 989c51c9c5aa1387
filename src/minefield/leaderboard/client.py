from __future__ import annotations

import logging
from concurrent.futures import Future
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from minefield.constants import VIEW_ALLTIME, VIEW_DAILY
from minefield.leaderboard.dispatcher import Callback, CallbackDispatcher
from minefield.leaderboard.errors import ValidationError
from minefield.leaderboard.records import LeaderboardEntry, ScoreRecord
from minefield.leaderboard.transport import HttpTransport, build_url
from minefield.leaderboard.validation import SubmissionRateLimiter, ValidationResult, validate_submission
from minefield.leaderboard.views import best_per_player, filter_daily

logger = logging.getLogger(__name__)

PERIODS = (VIEW_DAILY, VIEW_ALLTIME)


def entries_from_response(data: Dict[str, Any], *keys: str) -> List[LeaderboardEntry]:
    """Parse the first present list under ``keys``; malformed rows are skipped."""
    rows: Any = []
    for key in keys:
        value = data.get(key)
        if value:
            rows = value
            break
    if not isinstance(rows, list):
        return []
    entries: List[LeaderboardEntry] = []
    for row in rows:
        entry = LeaderboardEntry.from_payload(row)
        if entry is not None:
            entries.append(entry)
    return entries


class LeaderboardClient:
    """Talks to the remote score endpoint.

    Every network call runs on the dispatcher's worker threads. Callbacks are
    invoked only from ``pump()``, which the UI calls once per frame.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        transport: HttpTransport | None = None,
        dispatcher: CallbackDispatcher | None = None,
        limiter: SubmissionRateLimiter | None = None,
        today: Callable[[], date] | None = None,
    ):
        self.endpoint = endpoint
        self.transport = transport or HttpTransport()
        self.dispatcher = dispatcher or CallbackDispatcher()
        self.limiter = limiter or SubmissionRateLimiter()
        self._today = today or date.today

    def validate(self, name: str | None, time: float) -> ValidationResult:
        return validate_submission(name, time, self.limiter)

    def submit(self, record: ScoreRecord, callback: Callback | None = None) -> Future:
        """Validate and send a score; success only means nothing failed in transit.

        The endpoint's response is never read, so a payload it silently
        rejects still reports success here.
        """
        result = self.validate(record.name, record.time)
        if not result.valid:
            logger.warning("score from %r refused: %s", record.name, result.reason)
            error = ValidationError(result.reason or "invalid", result.message or "Invalid submission")
            return self.dispatcher.defer(callback or _ignore, error)

        payload = record.to_payload()

        def job() -> Dict[str, str]:
            self.transport.post_json(self.endpoint, payload)
            logger.info("submitted %.2fs for %r", record.time, record.name)
            return {"status": "success"}

        return self.dispatcher.submit(job, _logged(callback, "submit score"))

    def fetch_leaderboard(self, period: str = VIEW_DAILY, callback: Callback | None = None) -> Future:
        if period not in PERIODS:
            raise ValueError(f"unknown leaderboard period {period!r}")
        daily = period == VIEW_DAILY
        url = build_url(self.endpoint, {"daily": "true"} if daily else None)
        today = self._today() if daily else None

        def job() -> List[LeaderboardEntry]:
            entries = entries_from_response(self.transport.get_json(url), "leaderboard", "scores")
            if today is not None:
                entries = filter_daily(entries, today)
            return entries

        return self.dispatcher.submit(job, _logged(callback, f"fetch {period} leaderboard"))

    def fetch_all_scores(self, callback: Callback | None = None) -> Future:
        url = build_url(self.endpoint, {"allScores": "true"})

        def job() -> List[LeaderboardEntry]:
            return best_per_player(entries_from_response(self.transport.get_json(url), "scores"))

        return self.dispatcher.submit(job, _logged(callback, "fetch all scores"))

    def pump(self) -> int:
        return self.dispatcher.pump()

    def close(self) -> None:
        self.dispatcher.shutdown()


def _ignore(error: Optional[BaseException], result: Any) -> None:
    return None


def _logged(callback: Callback | None, action: str) -> Callback:
    def deliver(error: Optional[BaseException], result: Any) -> None:
        if error is not None:
            logger.warning("%s failed: %s", action, error)
        if callback is not None:
            callback(error, result)

    return deliver
