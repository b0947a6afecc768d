"""In-memory match board driven by a status timer and a feed refresh timer."""
from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, tzinfo
from functools import partial
from typing import Callable, List, Optional, Sequence

import requests

from .config import AppConfig
from .feed import (
    FEATURED_LIMIT,
    RELATED_LIMIT,
    FeedPartition,
    Match,
    RawMatch,
    partition,
    reclassify,
    related_matches,
)
from .sources import FeedError, fetch_matches
from .timeparse import UTC, ensure_aware, utc_now

LOGGER = logging.getLogger(__name__)

REFRESH_SUCCESS_MESSAGE = "Events refresh success"
REFRESH_FAILURE_MESSAGE = "Failed to update events"
FEED_REFRESH_SECONDS = 300

Fetcher = Callable[[], Sequence[RawMatch]]
Notifier = Callable[[str, str], None]


class MatchBoard:
    """Holds the last good partition of a feed and keeps it current.

    ``refresh`` is the expensive pass (fetch, sort, bucket) and ``tick`` the
    cheap one (status and display only). A failed refresh leaves the previous
    partition in place.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        tz: tzinfo = UTC,
        featured_limit: int = FEATURED_LIMIT,
        related_limit: int = RELATED_LIMIT,
        refresh_interval: float = FEED_REFRESH_SECONDS,
        notify: Optional[Notifier] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._fetcher = fetcher
        self.tz = tz
        self.featured_limit = featured_limit
        self.related_limit = related_limit
        self.refresh_interval = refresh_interval
        self._notify = notify
        self._clock = clock
        self.partition: FeedPartition = FeedPartition.empty()
        self.last_refreshed: Optional[datetime] = None
        self.last_attempted: Optional[datetime] = None
        self.last_error: Optional[str] = None
        self.closed = False

    @classmethod
    def from_config(cls, config: AppConfig, *, notify: Optional[Notifier] = None) -> "MatchBoard":
        return cls(
            partial(fetch_matches, config.feed),
            tz=config.tzinfo,
            featured_limit=config.featured_limit,
            related_limit=config.related_limit,
            refresh_interval=config.refresh.feed_interval,
            notify=notify,
        )

    def _now(self, now: Optional[datetime]) -> datetime:
        return ensure_aware(now) if now is not None else self._clock()

    def _emit(self, level: str, message: str) -> None:
        if self._notify is not None:
            self._notify(level, message)

    @property
    def has_data(self) -> bool:
        return self.last_refreshed is not None

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        """True when no fetch was tried within ``refresh_interval`` seconds."""

        if self.last_attempted is None:
            return True
        age = self._now(now) - self.last_attempted
        return age >= timedelta(seconds=self.refresh_interval)

    def refresh(self, now: Optional[datetime] = None) -> bool:
        if self.closed:
            return False
        self.last_attempted = self._now(now)
        try:
            raw_matches = list(self._fetcher())
        except (FeedError, requests.RequestException) as exc:
            self.last_error = str(exc)
            LOGGER.warning("Keeping previous matches, feed refresh failed: %s", exc)
            if not self.closed:
                self._emit("error", REFRESH_FAILURE_MESSAGE)
            return False
        if self.closed:
            LOGGER.debug("Board closed while fetching, discarding %d matches", len(raw_matches))
            return False

        reference = self._now(now)
        self.partition = partition(
            raw_matches,
            reference,
            tz=self.tz,
            featured_limit=self.featured_limit,
        )
        self.last_refreshed = reference
        self.last_error = None
        LOGGER.info("Feed refreshed with %d matches", len(self.partition))
        self._emit("success", REFRESH_SUCCESS_MESSAGE)
        return True

    def tick(self, now: Optional[datetime] = None) -> FeedPartition:
        if not self.closed:
            self.partition = reclassify(self.partition, self._now(now), tz=self.tz)
        return self.partition

    def find(self, match_id: str) -> Optional[Match]:
        return self.partition.find(match_id)

    def related(self, match_id: str, now: Optional[datetime] = None, *, limit: Optional[int] = None) -> List[Match]:
        return related_matches(
            self.partition.matches,
            match_id,
            self._now(now),
            tz=self.tz,
            limit=self.related_limit if limit is None else limit,
        )

    def close(self) -> None:
        self.closed = True

    def run(
        self,
        *,
        status_interval: float = 60,
        refresh_interval: float = 300,
        max_cycles: Optional[int] = None,
        initial_refresh: bool = True,
        on_update: Optional[Callable[[FeedPartition], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Refresh and re-classify on two independent schedules until closed.

        Every iteration runs whichever pass is due (the refresh wins when both
        are) and then sleeps until the next one. ``max_cycles`` bounds the
        number of passes.
        """

        start = monotonic()
        next_refresh = start if initial_refresh else start + refresh_interval
        next_status = start + status_interval
        cycles = 0
        while not self.closed and (max_cycles is None or cycles < max_cycles):
            current = monotonic()
            if current >= next_refresh:
                self.refresh()
                next_refresh = current + refresh_interval
                next_status = current + status_interval
            elif current >= next_status:
                self.tick()
                next_status = current + status_interval
            else:
                sleep(min(next_refresh, next_status) - current)
                continue
            cycles += 1
            if on_update is not None:
                on_update(self.partition)
