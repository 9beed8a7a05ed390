from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pinyin_ruby.timefmt import format_time

NOW = datetime(2024, 3, 20, 12, 0, 0)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=0), "Just now"),
        (timedelta(seconds=59), "Just now"),
        (timedelta(seconds=60), "1m ago"),
        (timedelta(minutes=59, seconds=59), "59m ago"),
        (timedelta(hours=1), "1h ago"),
        (timedelta(hours=23, minutes=59), "23h ago"),
        (timedelta(days=1), "1d ago"),
        (timedelta(days=6, hours=23), "6d ago"),
    ],
)
def test_relative_buckets(delta: timedelta, expected: str) -> None:
    assert format_time(NOW - delta, now=NOW) == expected


def test_older_than_a_week_shows_short_date() -> None:
    assert format_time(datetime(2024, 1, 5, 9, 0), now=NOW) == "Jan 5"
    assert format_time(NOW - timedelta(days=7), now=NOW) == "Mar 13"


def test_aware_timestamps_without_explicit_now() -> None:
    assert format_time(datetime.now(timezone.utc)) == "Just now"
