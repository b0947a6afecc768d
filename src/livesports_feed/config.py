"""Configuration helpers for the livesports_feed toolkit."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Mapping, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

DEFAULT_PRIMARY_URL = "https://api.livesports808.top/"
DEFAULT_FALLBACK_URL = (
    "https://raw.githubusercontent.com/rotich-brian/LiveSports/refs/heads/main/sportsprog3.json"
)
DEFAULT_TIMEZONE_NAME = "UTC"


def _positive_int(value: object, default: int) -> int:
    try:
        number = int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _positive_float(value: object, default: float) -> float:
    try:
        number = float(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc


@dataclass(slots=True)
class FeedConfig:
    """Where the match feed lives and which sections to read."""

    primary_url: str = DEFAULT_PRIMARY_URL
    fallback_url: Optional[str] = DEFAULT_FALLBACK_URL
    sections: Sequence[str] = ("today",)
    timeout: float = 30.0

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "FeedConfig":
        primary_url = str(mapping.get("primary_url") or "").strip() or DEFAULT_PRIMARY_URL
        fallback_raw = mapping.get("fallback_url", DEFAULT_FALLBACK_URL)
        fallback_url = str(fallback_raw).strip() if fallback_raw else None
        sections_value = mapping.get("sections")
        if isinstance(sections_value, Sequence) and not isinstance(sections_value, (str, bytes)):
            sections = tuple(str(item).strip() for item in sections_value if str(item).strip())
        elif isinstance(sections_value, str) and sections_value.strip():
            sections = (sections_value.strip(),)
        else:
            sections = ()
        return cls(
            primary_url=primary_url,
            fallback_url=fallback_url or None,
            sections=sections or ("today",),
            timeout=_positive_float(mapping.get("timeout"), 30.0),
        )


@dataclass(slots=True)
class RefreshConfig:
    """Intervals (seconds) of the status pass and the full feed refresh."""

    status_interval: int = 60
    feed_interval: int = 300

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "RefreshConfig":
        return cls(
            status_interval=_positive_int(mapping.get("status_interval"), 60),
            feed_interval=_positive_int(mapping.get("feed_interval"), 300),
        )


@dataclass(slots=True)
class AppConfig:
    """Root configuration model."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    timezone: str = DEFAULT_TIMEZONE_NAME
    featured_limit: int = 10
    related_limit: int = 12

    @property
    def tzinfo(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "AppConfig":
        feed_section = mapping.get("feed")
        refresh_section = mapping.get("refresh")
        timezone = str(mapping.get("timezone") or DEFAULT_TIMEZONE_NAME).strip()
        resolve_timezone(timezone)
        return cls(
            feed=FeedConfig.from_mapping(feed_section) if isinstance(feed_section, Mapping) else FeedConfig(),
            refresh=(
                RefreshConfig.from_mapping(refresh_section)
                if isinstance(refresh_section, Mapping)
                else RefreshConfig()
            ),
            timezone=timezone,
            featured_limit=_positive_int(mapping.get("featured_limit"), 10),
            related_limit=_positive_int(mapping.get("related_limit"), 12),
        )


def load_config(path: Path) -> AppConfig:
    """Load a configuration file from YAML."""

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Configuration file must contain a mapping at the root.")
    return AppConfig.from_mapping(data)
