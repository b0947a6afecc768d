"""Lifecycle status of a match relative to a reference time."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum

from .timeparse import UTC, ensure_aware, format_clock

LIVE_WINDOW_MINUTES = 120
LIVE_LABEL = "Live"
FINISHED_LABEL = "FINISHED"


class MatchStatus(str, Enum):
    LIVE = "Live"
    SCHEDULED = "Scheduled"
    FINISHED = "Finished"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Classification:
    status: MatchStatus
    display: str

    @property
    def is_live(self) -> bool:
        return self.status is MatchStatus.LIVE


def elapsed_minutes(kickoff: datetime, now: datetime) -> int:
    """Whole minutes since kickoff, negative while the match is still ahead."""

    delta = ensure_aware(now) - ensure_aware(kickoff)
    return math.floor(delta.total_seconds() / 60)


def classify(kickoff: datetime, now: datetime, *, tz: tzinfo = UTC) -> Classification:
    """Label a kickoff relative to ``now``.

    A match counts as live for a fixed window of :data:`LIVE_WINDOW_MINUTES`
    starting with the kickoff minute; stoppage and extra time are ignored.
    """

    minutes = elapsed_minutes(kickoff, now)
    if minutes < 0:
        return Classification(MatchStatus.SCHEDULED, format_clock(kickoff, tz))
    if minutes <= LIVE_WINDOW_MINUTES:
        return Classification(MatchStatus.LIVE, LIVE_LABEL)
    return Classification(MatchStatus.FINISHED, FINISHED_LABEL)


__all__ = [
    "Classification",
    "FINISHED_LABEL",
    "LIVE_LABEL",
    "LIVE_WINDOW_MINUTES",
    "MatchStatus",
    "classify",
    "elapsed_minutes",
]
