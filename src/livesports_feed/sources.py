"""Download the match feed from the primary API or its fallback mirror."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

import requests

from .config import FeedConfig
from .feed import RawMatch

LOGGER = logging.getLogger(__name__)

DEFAULT_SECTIONS: Sequence[str] = ("today",)
ALL_SECTIONS: Sequence[str] = ("yesterday", "today", "upcoming")

REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; livesports-feed/1.0)",
    "Accept": "application/json",
}


class FeedError(RuntimeError):
    """Raised when the match feed cannot be retrieved."""


class FeedUnavailableError(FeedError):
    """Neither the primary endpoint nor the fallback returned usable data."""

    def __init__(self, failures: Mapping[str, str]) -> None:
        self.failures = dict(failures)
        details = "; ".join(f"{url}: {reason}" for url, reason in self.failures.items())
        super().__init__(f"Both primary and fallback feed requests failed ({details})")


def _http_get_json(
    session: requests.Session,
    url: str,
    *,
    timeout: float = 30,
    retries: int = 1,
    delay_seconds: float = 2.0,
) -> Any:
    attempts = max(retries, 1)
    for attempt in range(attempts):
        try:
            response = session.get(url, timeout=timeout, headers=REQUEST_HEADERS)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError):
            if attempt == attempts - 1:
                raise
            time.sleep(delay_seconds * (2 ** attempt))
    raise RuntimeError(f"No request was made to {url}.")  # pragma: no cover


def fetch_feed_document(
    primary_url: str,
    fallback_url: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
    retries: int = 1,
    delay_seconds: float = 2.0,
) -> Any:
    """Return the decoded JSON feed.

    The fallback is only contacted after the primary endpoint failed; the two
    requests never run at the same time.
    """

    http = session or requests.Session()
    failures: Dict[str, str] = {}
    for url in (primary_url, fallback_url):
        if not url or url in failures:
            continue
        try:
            payload = _http_get_json(
                http,
                url,
                timeout=timeout,
                retries=retries,
                delay_seconds=delay_seconds,
            )
        except (requests.RequestException, ValueError) as exc:
            LOGGER.warning("Feed request to %s failed: %s", url, exc)
            failures[url] = str(exc) or exc.__class__.__name__
            continue
        LOGGER.debug("Fetched match feed from %s", url)
        return payload
    raise FeedUnavailableError(failures)


def parse_feed_document(
    payload: Any,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> List[RawMatch]:
    """Collect the raw matches of the requested feed sections in order.

    Missing sections and entries that are not objects are skipped, so an odd
    document yields fewer (or no) matches instead of an error.
    """

    if not isinstance(payload, Mapping):
        LOGGER.warning("Feed document is not an object, treating it as empty")
        return []

    matches: List[RawMatch] = []
    for section in sections:
        entries = payload.get(section)
        if entries is None:
            continue
        if not isinstance(entries, list):
            LOGGER.warning("Feed section %r is not a list, skipping it", section)
            continue
        for entry in entries:
            if not isinstance(entry, Mapping):
                LOGGER.debug("Skipping non-object entry in section %r", section)
                continue
            matches.append(RawMatch.from_mapping(entry))
    return matches


def fetch_matches(
    config: FeedConfig,
    *,
    session: Optional[requests.Session] = None,
) -> List[RawMatch]:
    payload = fetch_feed_document(
        config.primary_url,
        config.fallback_url,
        session=session,
        timeout=config.timeout,
    )
    return parse_feed_document(payload, config.sections)


__all__ = [
    "ALL_SECTIONS",
    "DEFAULT_SECTIONS",
    "FeedError",
    "FeedUnavailableError",
    "fetch_feed_document",
    "fetch_matches",
    "parse_feed_document",
]
