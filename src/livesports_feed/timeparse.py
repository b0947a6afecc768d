"""Kickoff timestamp normalisation.

Feeds deliver kickoff times in a handful of shapes. Every shape is turned into
a timezone-aware UTC ``datetime``:

* ``datetime`` values are used as they are (naive values are taken as UTC),
* ISO-8601 strings with ``T`` and ``Z`` are parsed directly,
* ``"YYYY-MM-DD HH:MM:SS"`` strings are implicitly UTC,
* anything else gets a best-effort parse.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from dateutil import parser

RawTime = Union[str, datetime, None]

UTC = timezone.utc

# UTC offsets stay below a day, so this margin keeps every local conversion valid.
_EARLIEST = datetime.min.replace(tzinfo=UTC) + timedelta(days=1)
_LATEST = datetime.max.replace(tzinfo=UTC) - timedelta(days=1)


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=UTC)
    return value


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _within_range(value: datetime) -> Optional[datetime]:
    value = ensure_aware(value)
    try:
        inside = _EARLIEST <= value <= _LATEST
    except OverflowError:
        return None
    return value if inside else None


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        return _within_range(parser.isoparse(value))
    except (ValueError, OverflowError):
        return None


def parse_kickoff(raw: RawTime) -> Optional[datetime]:
    """Return the kickoff instant for ``raw`` or ``None`` if it is unusable."""

    if isinstance(raw, datetime):
        return _within_range(raw)
    if not isinstance(raw, str):
        return None

    value = raw.strip()
    if not value:
        return None
    if "T" in value and "Z" in value:
        return _parse_iso(value)
    if " " in value:
        date_part, time_part = value.split(" ", 1)
        return _parse_iso(f"{date_part}T{time_part.strip()}Z")

    try:
        parsed = parser.parse(value)
    except (ValueError, OverflowError):
        return None
    return _within_range(parsed)


def normalize(raw: RawTime, *, now: Optional[datetime] = None) -> datetime:
    """Like :func:`parse_kickoff` but falls back to ``now`` instead of ``None``."""

    kickoff = parse_kickoff(raw)
    if kickoff is not None:
        return kickoff
    return ensure_aware(now) if now is not None else utc_now()


def to_local(instant: datetime, tz: tzinfo) -> datetime:
    return ensure_aware(instant).astimezone(tz)


def format_clock(instant: datetime, tz: tzinfo) -> str:
    return to_local(instant, tz).strftime("%H:%M")


def local_date_key(instant: datetime, tz: tzinfo) -> str:
    local = to_local(instant, tz)
    return f"{local.day:02d}-{local.month:02d}-{local.year}"


def is_same_local_day(first: datetime, second: datetime, tz: tzinfo) -> bool:
    return to_local(first, tz).date() == to_local(second, tz).date()


__all__ = [
    "RawTime",
    "UTC",
    "ensure_aware",
    "format_clock",
    "is_same_local_day",
    "local_date_key",
    "normalize",
    "parse_kickoff",
    "to_local",
    "utc_now",
]
