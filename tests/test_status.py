from __future__ import annotations

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from livesports_feed.status import (
    FINISHED_LABEL,
    LIVE_LABEL,
    LIVE_WINDOW_MINUTES,
    Classification,
    MatchStatus,
    classify,
    elapsed_minutes,
)


class TestClassifyBoundaries:

    def test_one_millisecond_before_kickoff_is_scheduled(self, now):
        kickoff = now + timedelta(milliseconds=1)
        assert classify(kickoff, now).status is MatchStatus.SCHEDULED

    def test_kickoff_instant_is_live(self, now):
        assert classify(now, now).status is MatchStatus.LIVE

    def test_end_of_live_window_is_still_live(self, now):
        kickoff = now - timedelta(minutes=LIVE_WINDOW_MINUTES)
        assert classify(kickoff, now).status is MatchStatus.LIVE

    def test_last_second_of_window_is_live(self, now):
        kickoff = now - timedelta(minutes=120, seconds=59)
        assert classify(kickoff, now).status is MatchStatus.LIVE

    def test_after_live_window_is_finished(self, now):
        kickoff = now - timedelta(minutes=121)
        assert classify(kickoff, now).status is MatchStatus.FINISHED


class TestClassifyDisplay:

    def test_scheduled_shows_kickoff_clock(self, now):
        result = classify(now + timedelta(hours=3, minutes=5), now)
        assert result == Classification(MatchStatus.SCHEDULED, "15:05")

    def test_scheduled_clock_uses_viewer_timezone(self, now):
        result = classify(now + timedelta(hours=3), now, tz=ZoneInfo("Europe/Berlin"))
        assert result.display == "16:00"

    def test_scheduled_clock_is_zero_padded(self, now):
        result = classify(now + timedelta(hours=20, minutes=7), now)
        assert result.display == "08:07"

    def test_live_label(self, now):
        result = classify(now - timedelta(minutes=10), now)
        assert result.display == LIVE_LABEL == "Live"
        assert result.is_live

    def test_finished_label(self, now):
        result = classify(now - timedelta(hours=5), now)
        assert result.display == FINISHED_LABEL == "FINISHED"
        assert not result.is_live


class TestClassifyPurity:

    @pytest.mark.parametrize("offset_minutes", [-300, -1, 0, 45, 120, 121, 600])
    def test_repeated_calls_agree(self, now, offset_minutes):
        kickoff = now + timedelta(minutes=offset_minutes)
        assert classify(kickoff, now) == classify(kickoff, now)

    def test_result_follows_reference_time(self, now):
        kickoff = now + timedelta(minutes=30)
        assert classify(kickoff, now).status is MatchStatus.SCHEDULED
        assert classify(kickoff, now + timedelta(minutes=30)).status is MatchStatus.LIVE
        assert classify(kickoff, now + timedelta(hours=3)).status is MatchStatus.FINISHED

    def test_naive_reference_is_treated_as_utc(self, now):
        naive_now = now.replace(tzinfo=None)
        assert classify(now, naive_now).status is MatchStatus.LIVE


class TestElapsedMinutes:

    def test_rounds_down(self, now):
        assert elapsed_minutes(now - timedelta(minutes=5, seconds=59), now) == 5

    def test_negative_before_kickoff(self, now):
        assert elapsed_minutes(now + timedelta(milliseconds=1), now) == -1

    def test_status_string_value(self):
        assert str(MatchStatus.FINISHED) == "Finished"
        assert MatchStatus("Live") is MatchStatus.LIVE
