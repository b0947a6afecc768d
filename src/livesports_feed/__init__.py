"""Classify live sports feed matches and group them for display."""

from .board import MatchBoard
from .config import AppConfig, FeedConfig, RefreshConfig, load_config
from .feed import (
    FeedPartition,
    Match,
    RawMatch,
    canonicalize,
    partition,
    reclassify,
    related_matches,
    watch_path,
)
from .sources import (
    FeedError,
    FeedUnavailableError,
    fetch_feed_document,
    fetch_matches,
    parse_feed_document,
)
from .status import Classification, MatchStatus, classify
from .timeparse import normalize, parse_kickoff

__all__ = [
    "AppConfig",
    "Classification",
    "FeedConfig",
    "FeedError",
    "FeedPartition",
    "FeedUnavailableError",
    "Match",
    "MatchBoard",
    "MatchStatus",
    "RawMatch",
    "RefreshConfig",
    "canonicalize",
    "classify",
    "fetch_feed_document",
    "fetch_matches",
    "load_config",
    "normalize",
    "parse_feed_document",
    "parse_kickoff",
    "partition",
    "reclassify",
    "related_matches",
    "watch_path",
]
