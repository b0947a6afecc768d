from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import pytest

from livesports_feed.feed import RawMatch

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def feed_time(value: datetime) -> str:
    """Render a kickoff the way the feed does (space separated, UTC)."""

    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def make_raw(match_id: str, kickoff: Any, **overrides: Any) -> RawMatch:
    if isinstance(kickoff, datetime):
        kickoff = feed_time(kickoff)
    fields: Dict[str, Any] = {
        "id": match_id,
        "home_team": f"Home {match_id}",
        "away_team": f"Away {match_id}",
        "competition": "Premier League",
        "time": kickoff,
        "event_url": f"https://example.com/events/{match_id}",
    }
    fields.update(overrides)
    return RawMatch(**fields)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def mixed_feed() -> List[RawMatch]:
    return [
        make_raw("A", NOW - timedelta(minutes=10)),
        make_raw("B", NOW + timedelta(hours=3)),
        make_raw("C", NOW - timedelta(hours=5)),
    ]


class FakeFetcher:
    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls = 0

    def __call__(self) -> List[RawMatch]:
        self.calls += 1
        response = self.responses[min(self.calls, len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return list(response)


@pytest.fixture
def fake_fetcher_factory():
    return FakeFetcher


class FixedClock:
    def __init__(self, value: datetime) -> None:
        self.value = value

    def __call__(self) -> datetime:
        return self.value

    def advance(self, delta: timedelta) -> None:
        self.value = self.value + delta


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)
