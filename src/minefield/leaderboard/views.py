"""Read-only projections of leaderboard entries: filtering, dedup, pages, labels."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Sequence

from minefield.constants import PAGE_SIZE
from minefield.leaderboard.records import LeaderboardEntry, local_datetime

MEDALS = ("\N{FIRST PLACE MEDAL}", "\N{SECOND PLACE MEDAL}", "\N{THIRD PLACE MEDAL}")


@dataclass(frozen=True, slots=True)
class Page:
    items: List[LeaderboardEntry]
    page: int
    total_pages: int
    start_index: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def filter_daily(entries: Iterable[LeaderboardEntry], today: date) -> List[LeaderboardEntry]:
    """Keep entries whose local calendar date is ``today``; undated entries drop out."""
    return [entry for entry in entries if entry.local_date() == today]


def best_per_player(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """One entry per player (case-insensitive, trimmed name), fastest first.

    The surviving entry keeps its own capitalization; on equal times the first
    one seen wins.
    """
    best: Dict[str, LeaderboardEntry] = {}
    for entry in entries:
        key = entry.name.strip().lower()
        current = best.get(key)
        if current is None or entry.time < current.time:
            best[key] = entry
    return sorted(best.values(), key=lambda entry: entry.time)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(count / page_size) if count > 0 else 0


def paginate(entries: Sequence[LeaderboardEntry], page: int, page_size: int = PAGE_SIZE) -> Page:
    """Slice ``[(page-1)*page_size, page*page_size)``; ``page`` is 1-indexed."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    pages = total_pages(len(entries), page_size)
    page = max(1, min(page, pages or 1))
    start = (page - 1) * page_size
    return Page(
        items=list(entries[start:start + page_size]),
        page=page,
        total_pages=pages,
        start_index=start,
    )


def rank_label(index: int) -> str:
    """Label for a 0-based rank: medals for the podium, ``"N."`` after that."""
    if 0 <= index < len(MEDALS):
        return MEDALS[index]
    return f"{index + 1}."


def format_time(seconds: float) -> str:
    return f"{seconds:.2f}s"


def format_timestamp(timestamp_ms: int | None) -> str:
    moment = local_datetime(timestamp_ms)
    return moment.strftime("%Y-%m-%d %H:%M") if moment is not None else ""
