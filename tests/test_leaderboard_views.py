from datetime import date, datetime

import pytest

from minefield.leaderboard.records import LeaderboardEntry
from minefield.leaderboard.views import (
    best_per_player,
    filter_daily,
    format_time,
    format_timestamp,
    paginate,
    rank_label,
    total_pages,
)


def _ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def test_best_per_player_merges_names_case_insensitively():
    entries = [
        LeaderboardEntry("Alice", 12.0),
        LeaderboardEntry("alice", 10.0),
        LeaderboardEntry("Bob", 15.0),
    ]
    assert best_per_player(entries) == [
        LeaderboardEntry("alice", 10.0),
        LeaderboardEntry("Bob", 15.0),
    ]


def test_best_per_player_trims_names_and_keeps_first_on_tie():
    entries = [
        LeaderboardEntry(" Cy ", 9.0),
        LeaderboardEntry("cy", 9.0),
        LeaderboardEntry("Dee", 4.0),
    ]
    result = best_per_player(entries)
    assert [e.name for e in result] == ["Dee", " Cy "]


def test_filter_daily_keeps_only_todays_local_entries():
    today = date(2024, 5, 10)
    entries = [
        LeaderboardEntry("a", 1.0, _ms(datetime(2024, 5, 10, 0, 5))),
        LeaderboardEntry("b", 2.0, _ms(datetime(2024, 5, 9, 23, 55))),
        LeaderboardEntry("c", 3.0, None),
        LeaderboardEntry("d", 4.0, _ms(datetime(2024, 5, 10, 23, 59))),
    ]
    assert [e.name for e in filter_daily(entries, today)] == ["a", "d"]


def test_pagination_of_45_entries():
    entries = [LeaderboardEntry(f"p{i}", float(i)) for i in range(45)]
    assert total_pages(len(entries)) == 3

    first = paginate(entries, 1)
    assert [e.name for e in first.items] == [f"p{i}" for i in range(20)]
    assert not first.has_previous and first.has_next

    last = paginate(entries, 3)
    assert [e.name for e in last.items] == [f"p{i}" for i in range(40, 45)]
    assert last.start_index == 40
    assert last.has_previous and not last.has_next


def test_pagination_clamps_out_of_range_pages():
    entries = [LeaderboardEntry(f"p{i}", float(i)) for i in range(45)]
    assert paginate(entries, 0).page == 1
    assert paginate(entries, 9).page == 3


def test_pagination_of_empty_list():
    page = paginate([], 1)
    assert page.items == []
    assert page.total_pages == 0
    assert not page.has_next and not page.has_previous


def test_pagination_rejects_bad_page_size():
    with pytest.raises(ValueError):
        paginate([], 1, page_size=0)


def test_rank_labels():
    assert [rank_label(i) for i in range(5)] == ["\U0001F947", "\U0001F948", "\U0001F949", "4.", "5."]
    assert rank_label(20) == "21."


def test_format_time_uses_two_decimals():
    assert format_time(12.5) == "12.50s"
    assert format_time(3) == "3.00s"


def test_best_per_player_documented_example():
    entries = [LeaderboardEntry("Bob", 12.3), LeaderboardEntry("bob", 9.9), LeaderboardEntry("Alice", 20.0)]
    assert [(e.name, e.time) for e in best_per_player(entries)] == [("bob", 9.9), ("Alice", 20.0)]


def test_format_timestamp_handles_missing_and_out_of_range_values():
    assert format_timestamp(None) == ""
    assert format_timestamp(10**20) == ""
    assert format_timestamp(-(10**20)) == ""
    assert format_timestamp(_ms(datetime(2024, 5, 10, 9, 30))) == "2024-05-10 09:30"


def test_filter_daily_drops_out_of_range_entries():
    entries = [LeaderboardEntry("a", 1.0, 10**20), LeaderboardEntry("b", 2.0, _ms(datetime(2024, 5, 10, 8)))]
    assert [e.name for e in filter_daily(entries, date(2024, 5, 10))] == ["b"]
