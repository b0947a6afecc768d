#!/usr/bin/env python3
"""Helper to refresh the bucketed match feed JSON once."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _add_src_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Loads the match feed (primary endpoint, then fallback) and writes the "
            "live/scheduled/finished/byDate buckets as JSON."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML configuration file.",
    )
    parser.add_argument(
        "--all-sections",
        action="store_true",
        help="Read yesterday, today and upcoming instead of only today.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path of the generated JSON file (default: docs/data/matches.json).",
    )
    return parser


def main() -> int:
    _add_src_to_path()
    from livesports_feed import AppConfig, MatchBoard, load_config
    from livesports_feed.__main__ import DEFAULT_OUTPUT_PATH, write_partition
    from livesports_feed.sources import ALL_SECTIONS

    parser = build_parser()
    args = parser.parse_args()

    config = load_config(args.config) if args.config else AppConfig()
    if args.all_sections:
        config.feed.sections = tuple(ALL_SECTIONS)

    board = MatchBoard.from_config(config)
    if not board.refresh():
        print(f"Feed could not be loaded: {board.last_error}", file=sys.stderr)
        return 1

    output = write_partition(board.partition, args.output or DEFAULT_OUTPUT_PATH)
    print(
        "Feed updated:",
        f"{len(board.partition)} matches,",
        f"{len(board.partition.live_games)} featured",
        f"-> {output}",
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
