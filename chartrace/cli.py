"""CLI entry point for chartrace."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from chartrace.config import Config, FrameSettings, load_config
from chartrace.frames import generate_frames
from chartrace.leaderboard import artist_leaderboard, concentration
from chartrace.models import NormalizedRecord
from chartrace.normalize import normalize_rows
from chartrace.output.frames_json import write_frames_json, write_leaderboard_json
from chartrace.sources import CsvRowSource, SourceError
from chartrace.timeline import missing_weeks

logger = logging.getLogger(__name__)


def _load_records(csv_path: str | None, config: Config) -> tuple[int, list[NormalizedRecord]]:
    path = csv_path or config.source.path
    if not path:
        raise SourceError("No input CSV given and source.path is not configured")
    source = CsvRowSource(Path(path), column_aliases=config.source.column_aliases)
    rows = source.read()
    return len(rows), normalize_rows(rows, chart_size=config.source.chart_size)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weekly chart race frame builder")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command")

    # frames command
    frames_parser = sub.add_parser("frames", help="Build ranked frames for a bar chart race")
    frames_parser.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging",
    )
    frames_parser.add_argument("csv", nargs="?", help="Chart CSV (defaults to source.path)")
    frames_parser.add_argument("-o", "--output", type=Path, default=None, help="Output JSON path")
    frames_parser.add_argument("--top-n", type=int, default=None, help="Entries per frame")
    frames_parser.add_argument(
        "--metric", choices=["ytd", "window", "lifetime"], default=None,
        help="Metric used for ranking and bar length",
    )
    frames_parser.add_argument(
        "--pool", choices=["current_year", "full_history"], default=None,
        help="Which entities compete in each frame",
    )
    frames_parser.add_argument("--start-year", type=int, default=None, help="First year shown")
    frames_parser.add_argument(
        "--carry-in-weeks", type=int, default=None,
        help="Weeks before the start year counted into the window metric (0 disables)",
    )

    # leaderboard command
    board_parser = sub.add_parser("leaderboard", help="Rank artists by total weeks on chart")
    board_parser.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging",
    )
    board_parser.add_argument("csv", nargs="?", help="Chart CSV (defaults to source.path)")
    board_parser.add_argument("-o", "--output", type=Path, default=None, help="Output JSON path")
    board_parser.add_argument("--limit", type=int, default=None, help="Number of artists")

    # stats command
    stats_parser = sub.add_parser("stats", help="Show dataset stats")
    stats_parser.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging",
    )
    stats_parser.add_argument("csv", nargs="?", help="Chart CSV (defaults to source.path)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    config = load_config(args.config)

    try:
        total_rows, records = _load_records(args.csv, config)

        if args.command == "frames":
            overrides = {
                "top_n": args.top_n,
                "metric_mode": args.metric,
                "pool_mode": args.pool,
                "start_year": args.start_year,
                "carry_in_weeks": args.carry_in_weeks,
            }
            settings = FrameSettings.model_validate({
                **config.frames.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            })
            sequence = generate_frames(records, settings)
            if sequence.is_empty:
                print("No valid chart weeks found; nothing to animate.")
                return 0
            output = args.output or config.resolved_output_dir / "frames.json"
            write_frames_json(sequence, settings, output)
            print(sequence.result)
            print(f"Output: {output}")

        elif args.command == "leaderboard":
            limit = args.limit or config.leaderboard.limit
            board = artist_leaderboard(records, limit=limit)
            output = args.output or config.resolved_output_dir / "leaderboard.json"
            write_leaderboard_json(board, output)
            for i, a in enumerate(board[:10], start=1):
                print(f"  {i:>2}. {a.artist}: {a.weeks} weeks")
            print(f"\nTop 10 share of top {len(board)}: {concentration(board):.1%}")
            print(f"Output: {output}")

        elif args.command == "stats":
            weeks = sorted({r.week for r in records if r.week is not None})
            undated = sum(1 for r in records if r.week is None)
            print(f"  rows: {total_rows} ({total_rows - len(records)} dropped, {undated} undated)")
            print(f"  entities: {len({r.entity_id for r in records})}")
            if weeks:
                print(f"  weeks: {len(weeks)} observed, {weeks[0]} to {weeks[-1]}")
                print(f"  gaps filled: {len(missing_weeks(weeks))}")
            else:
                print("  weeks: none")

    except SourceError as e:
        logger.error("%s", e)
        return 1
    except ValidationError as e:
        logger.error("Invalid settings: %s", e)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
