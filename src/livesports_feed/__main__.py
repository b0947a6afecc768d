from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .board import MatchBoard
from .config import AppConfig, load_config, resolve_timezone
from .feed import FeedPartition

DEFAULT_OUTPUT_PATH = Path("docs/data/matches.json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch the live sports feed and bucket its matches")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (feed URLs, timezone, refresh intervals).",
    )
    parser.add_argument(
        "--primary-url",
        default=None,
        help="Override for the primary feed endpoint.",
    )
    parser.add_argument(
        "--fallback-url",
        default=None,
        help="Override for the fallback feed endpoint.",
    )
    parser.add_argument(
        "--section",
        action="append",
        dest="sections",
        default=None,
        help="Feed section to read, repeatable (default: today).",
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="Viewer timezone used for kickoff clocks and day grouping (default: UTC).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help="Target JSON file path (default: docs/data/matches.json).",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and rewrite the output on every status and feed refresh.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config) if args.config else AppConfig()
    if args.primary_url:
        config.feed.primary_url = args.primary_url
    if args.fallback_url:
        config.feed.fallback_url = args.fallback_url
    if args.sections:
        config.feed.sections = tuple(args.sections)
    if args.timezone:
        resolve_timezone(args.timezone)
        config.timezone = args.timezone
    return config


def write_partition(partition: FeedPartition, destination: Path) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(partition.to_dict(), ensure_ascii=False, indent=2)
    destination.write_text(payload + "\n", encoding="utf-8")
    return destination


def _print_notice(level: str, message: str) -> None:
    stream = sys.stderr if level == "error" else sys.stdout
    print(message, file=stream)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 2

    board = MatchBoard.from_config(config, notify=_print_notice if args.watch else None)
    if not board.refresh():
        print(f"Error: match feed could not be loaded: {board.last_error}", file=sys.stderr)
        return 1
    write_partition(board.partition, args.output)
    partition = board.partition
    print(
        "Feed updated:",
        f"{len(partition.live)} live,",
        f"{len(partition.scheduled)} scheduled,",
        f"{len(partition.finished)} finished",
        f"-> {args.output}",
    )

    if args.watch:
        try:
            board.run(
                status_interval=config.refresh.status_interval,
                refresh_interval=config.refresh.feed_interval,
                initial_refresh=False,
                on_update=lambda current: write_partition(current, args.output),
            )
        except KeyboardInterrupt:  # pragma: no cover - manual stop
            board.close()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    raise SystemExit(main())
