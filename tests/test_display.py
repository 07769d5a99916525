from __future__ import annotations

from datetime import timedelta

import pytest

from fakes import START
from taskquest.services.display import TIME_UP, format_time_left


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(hours=1, minutes=2, seconds=5), "1h 2m 5s"),
        (timedelta(hours=2), "2h"),
        (timedelta(minutes=3, seconds=1), "3m 1s"),
        (timedelta(seconds=59), "59s"),
        (timedelta(days=1, minutes=1), "24h 1m"),
        (timedelta(0), TIME_UP),
        (timedelta(seconds=-5), TIME_UP),
    ],
)
def test_format_time_left(delta: timedelta, expected: str) -> None:
    assert format_time_left(START + delta, START) == expected
