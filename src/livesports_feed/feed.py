"""Classify raw feed matches and split them into display buckets."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .status import MatchStatus, classify
from .timeparse import UTC, RawTime, ensure_aware, is_same_local_day, local_date_key, parse_kickoff

LOGGER = logging.getLogger(__name__)

FEATURED_LIMIT = 10
RELATED_LIMIT = 12
WATCH_PATH_PREFIX = "/watch/"


def watch_path(match_id: str) -> str:
    return f"{WATCH_PATH_PREFIX}{match_id}"


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _text_tuple(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Sequence):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


@dataclass(frozen=True)
class RawMatch:
    id: str
    home_team: str = ""
    away_team: str = ""
    competition: str = ""
    time: RawTime = None
    event_url: str = ""
    home_team_logo: str = ""
    away_team_logo: str = ""
    urls: Tuple[str, ...] = ()
    commentator: Optional[str] = None
    channel: Optional[str] = None
    event_banner: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "RawMatch":
        raw_id = mapping.get("id")
        # Routing builds /watch/{id} from this value, so it is kept verbatim.
        match_id = raw_id if isinstance(raw_id, str) else _text(raw_id)
        raw_time = mapping.get("time")
        if not isinstance(raw_time, (str, datetime)):
            raw_time = None
        return cls(
            id=match_id,
            home_team=_text(mapping.get("homeTeam")),
            away_team=_text(mapping.get("awayTeam")),
            competition=_text(mapping.get("competition") or mapping.get("tournament")),
            time=raw_time,
            event_url=_text(mapping.get("eventUrl")),
            home_team_logo=_text(mapping.get("homeTeamLogo")),
            away_team_logo=_text(mapping.get("awayTeamLogo")),
            urls=_text_tuple(mapping.get("urls")),
            commentator=_text(mapping.get("commentator")) or None,
            channel=_text(mapping.get("channel")) or None,
            event_banner=_text(mapping.get("eventBanner")) or None,
        )


@dataclass(frozen=True)
class Match:
    id: str
    home_team: str
    away_team: str
    tournament: str
    time: datetime
    status: MatchStatus
    display: str
    event_url: str = ""
    home_team_logo: str = ""
    away_team_logo: str = ""
    urls: Tuple[str, ...] = ()
    commentator: Optional[str] = None
    channel: Optional[str] = None
    event_banner: Optional[str] = None

    @property
    def competition(self) -> str:
        return self.tournament

    @property
    def is_live(self) -> bool:
        return self.status is MatchStatus.LIVE

    @property
    def is_finished(self) -> bool:
        return self.status is MatchStatus.FINISHED

    @property
    def watch_path(self) -> str:
        return watch_path(self.id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "tournament": self.tournament,
            "status": self.status.value,
            "display": self.display,
            "time": self.time.astimezone(UTC).isoformat().replace("+00:00", "Z"),
            "eventUrl": self.event_url,
            "homeTeamLogo": self.home_team_logo,
            "awayTeamLogo": self.away_team_logo,
            "urls": list(self.urls),
            "commentator": self.commentator,
            "channel": self.channel,
            "eventBanner": self.event_banner,
        }


@dataclass(frozen=True)
class FeedPartition:
    live: Tuple[Match, ...] = ()
    scheduled: Tuple[Match, ...] = ()
    finished: Tuple[Match, ...] = ()
    by_date: Mapping[str, Tuple[Match, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    live_games: Tuple[Match, ...] = ()

    @classmethod
    def empty(cls) -> "FeedPartition":
        return cls()

    @property
    def matches(self) -> List[Match]:
        """Every held match in kickoff order."""

        combined = [*self.live, *self.scheduled, *self.finished]
        return sorted(combined, key=lambda match: match.time)

    def __len__(self) -> int:
        return len(self.live) + len(self.scheduled) + len(self.finished)

    def find(self, match_id: str) -> Optional[Match]:
        for match in (*self.live, *self.scheduled, *self.finished):
            if match.id == match_id:
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "live": [match.to_dict() for match in self.live],
            "scheduled": [match.to_dict() for match in self.scheduled],
            "finished": [match.to_dict() for match in self.finished],
            "byDate": {
                key: [match.to_dict() for match in bucket]
                for key, bucket in self.by_date.items()
            },
            "liveGames": [match.to_dict() for match in self.live_games],
        }


def canonicalize(raw: RawMatch, now: datetime, *, tz: tzinfo = UTC) -> Match:
    now = ensure_aware(now)
    kickoff = parse_kickoff(raw.time)
    if kickoff is None:
        LOGGER.warning(
            "Unparseable kickoff %r for match %r, using current time instead",
            raw.time,
            raw.id,
        )
        kickoff = now
    classification = classify(kickoff, now, tz=tz)
    return Match(
        id=raw.id,
        home_team=raw.home_team,
        away_team=raw.away_team,
        tournament=raw.competition,
        time=kickoff,
        status=classification.status,
        display=classification.display,
        event_url=raw.event_url,
        home_team_logo=raw.home_team_logo,
        away_team_logo=raw.away_team_logo,
        urls=raw.urls,
        commentator=raw.commentator,
        channel=raw.channel,
        event_banner=raw.event_banner,
    )


def _unique_by_id(matches: Iterable[Match], limit: int) -> Tuple[Match, ...]:
    seen: set[str] = set()
    unique: List[Match] = []
    for match in matches:
        if len(unique) >= limit:
            break
        if match.id in seen:
            continue
        seen.add(match.id)
        unique.append(match)
    return tuple(unique)


def partition(
    raw_matches: Iterable[RawMatch],
    now: datetime,
    *,
    tz: tzinfo = UTC,
    featured_limit: int = FEATURED_LIMIT,
) -> FeedPartition:
    """Classify ``raw_matches`` at ``now`` and bucket them.

    ``byDate`` only holds scheduled matches of other days; today's matches
    surface through ``live``/``scheduled`` and the featured ``liveGames``.
    Day boundaries are taken in ``tz``.
    """

    now = ensure_aware(now)
    canonical = [canonicalize(raw, now, tz=tz) for raw in raw_matches]
    # sorted() is stable, equal kickoffs keep their feed order.
    ordered = sorted(canonical, key=lambda match: match.time)

    live = tuple(match for match in ordered if match.status is MatchStatus.LIVE)
    scheduled = tuple(match for match in ordered if match.status is MatchStatus.SCHEDULED)
    finished = tuple(match for match in ordered if match.status is MatchStatus.FINISHED)

    by_date: Dict[str, List[Match]] = {}
    scheduled_today: List[Match] = []
    for match in scheduled:
        if is_same_local_day(match.time, now, tz):
            scheduled_today.append(match)
            continue
        by_date.setdefault(local_date_key(match.time, tz), []).append(match)

    live_games = _unique_by_id([*live, *scheduled_today], max(featured_limit, 0))
    LOGGER.debug(
        "Partitioned %d matches: %d live, %d scheduled, %d finished",
        len(ordered),
        len(live),
        len(scheduled),
        len(finished),
    )
    return FeedPartition(
        live=live,
        scheduled=scheduled,
        finished=finished,
        by_date=MappingProxyType({key: tuple(bucket) for key, bucket in by_date.items()}),
        live_games=live_games,
    )


def _reclassify_match(match: Match, now: datetime, tz: tzinfo) -> Match:
    classification = classify(match.time, now, tz=tz)
    if classification.status is match.status and classification.display == match.display:
        return match
    return replace(match, status=classification.status, display=classification.display)


def reclassify(current: FeedPartition, now: datetime, *, tz: tzinfo = UTC) -> FeedPartition:
    """Refresh ``status``/``display`` of every held match.

    Bucket membership and order are left untouched until the next
    :func:`partition` run.
    """

    now = ensure_aware(now)

    def refresh(bucket: Sequence[Match]) -> Tuple[Match, ...]:
        return tuple(_reclassify_match(match, now, tz) for match in bucket)

    return FeedPartition(
        live=refresh(current.live),
        scheduled=refresh(current.scheduled),
        finished=refresh(current.finished),
        by_date=MappingProxyType(
            {key: refresh(bucket) for key, bucket in current.by_date.items()}
        ),
        live_games=refresh(current.live_games),
    )


def related_matches(
    matches: Iterable[Match],
    exclude_id: str,
    now: datetime,
    *,
    tz: tzinfo = UTC,
    limit: int = RELATED_LIMIT,
) -> List[Match]:
    """Other matches worth offering next to ``exclude_id``: live ones first."""

    now = ensure_aware(now)
    candidates = [
        _reclassify_match(match, now, tz)
        for match in matches
        if match.id != exclude_id
    ]
    candidates = [match for match in candidates if not match.is_finished]
    candidates.sort(key=lambda match: (not match.is_live, match.time))
    return candidates[: max(limit, 0)]


__all__ = [
    "FEATURED_LIMIT",
    "FeedPartition",
    "Match",
    "RELATED_LIMIT",
    "RawMatch",
    "canonicalize",
    "partition",
    "reclassify",
    "related_matches",
    "watch_path",
]
