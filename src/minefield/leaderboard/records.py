from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    """A finished game offered to the leaderboard. Never mutated once built."""

    name: str
    time: float
    timestamp: int
    start_time: Optional[int] = None
    time_stamps: Optional[Tuple[int, ...]] = None
    mines: Optional[Tuple[Tuple[int, int], ...]] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the endpoint; optional telemetry is left out when absent."""
        payload: Dict[str, Any] = {
            "name": self.name,
            "time": self.time,
            "timestamp": self.timestamp,
        }
        if self.start_time is not None:
            payload["startTime"] = self.start_time
        if self.time_stamps is not None:
            payload["timeStamps"] = list(self.time_stamps)
        if self.mines is not None:
            payload["mines"] = [list(pos) for pos in self.mines]
        return payload


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    """A score as read back from the endpoint."""

    name: str
    time: float
    timestamp: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> LeaderboardEntry | None:
        if not isinstance(data, Mapping):
            return None
        name = data.get("name")
        raw_time = data.get("time")
        if name is None or raw_time is None or isinstance(raw_time, bool):
            return None
        try:
            time_value = float(raw_time)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(time_value):
            return None
        raw_stamp = data.get("timestamp")
        if raw_stamp is None or raw_stamp == "":
            raw_stamp = data.get("date")
        return cls(name=str(name), time=time_value, timestamp=parse_timestamp(raw_stamp))

    def local_date(self) -> date | None:
        moment = local_datetime(self.timestamp)
        return moment.date() if moment is not None else None


def local_datetime(timestamp_ms: int | None) -> datetime | None:
    """Local wall-clock time for epoch milliseconds; None when the platform cannot represent it."""
    if timestamp_ms is None:
        return None
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000)
    except (ValueError, OverflowError, OSError):
        return None


def parse_timestamp(value: Any) -> int | None:
    """Turn an epoch-ms number or an ISO-8601 string into epoch milliseconds.

    Anything that is not a representable date (infinities, NaN, values far
    outside the calendar) comes back as None so one bad row never spoils a
    whole response.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _checked_ms(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return _checked_ms(float(text))
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    try:
        return _checked_ms(parsed.timestamp() * 1000)
    except (OverflowError, OSError):
        return None


def _checked_ms(value: float) -> int | None:
    if not math.isfinite(value):
        return None
    stamp = int(value)
    return stamp if local_datetime(stamp) is not None else None
