from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Dict, Optional, Sequence, Tuple

from .calculator import Config, DateRangeError, analyze_trips, calculate_status
from .dates import SUPPORTED_FORMATS, parse_date, utc_today
from .log import configure_logging
from .report import build_json_document, render_text_report
from .trips import parse_trips_from_text

log = logging.getLogger(__name__)

# (window months, absence limit)
PRESETS: Dict[str, Tuple[int, int]] = {
    "uk": (12, 180),
    "schengen": (6, 90),
    "us": (12, 182),
}
DEFAULT_PRESET = "uk"


# ---------- IO Helpers ----------

def read_trip_text(path: str) -> str:
    """Read trip rows from a file, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read().lstrip("\ufeff")
    if not os.path.isfile(path):
        raise SystemExit(f"Error: File '{path}' not found.")
    # utf-8-sig drops the BOM spreadsheet exports tend to add
    with open(path, newline="", encoding="utf-8-sig") as f:
        return f.read()


def resolve_config(args: argparse.Namespace) -> Config:
    window, limit = PRESETS[args.preset or DEFAULT_PRESET]
    if args.window is not None:
        window = args.window
    if args.limit is not None:
        limit = args.limit

    if window <= 0:
        raise SystemExit("Error: --window must be a positive number of months.")
    if limit <= 0:
        raise SystemExit("Error: --limit must be a positive number of days.")

    evaluation_date = None
    if args.date:
        evaluation_date = parse_date(args.date)
        if evaluation_date is None:
            raise SystemExit(
                f"Error: Invalid date format for --date parameter: {args.date!r}. Use format: dd.mm.yyyy"
            )
    return Config(window_months=window, absence_limit=limit, evaluation_date=evaluation_date)


# ---------- CLI ----------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stay-within",
        description=(
            "Check that total days spent abroad within a rolling window of months "
            "stay under an absence limit (default: 180 days in any 12 months)."
        ),
    )
    parser.add_argument(
        "csv_file",
        help="Trips file: one 'start,end[,notes]' row per trip (comma or tab separated), or '-' for stdin",
    )
    parser.add_argument(
        "--date",
        dest="date",
        help="Evaluate as of this date instead of today (e.g. 01.01.2026)",
    )
    parser.add_argument(
        "--window",
        dest="window",
        type=int,
        help="Rolling window period in months. Default: 12",
    )
    parser.add_argument(
        "--limit",
        dest="limit",
        type=int,
        help="Maximum allowed absence days in the window. Default: 180",
    )
    parser.add_argument(
        "--preset",
        dest="preset",
        choices=sorted(PRESETS),
        help="Window/limit preset: uk (12/180), schengen (6/90), us (12/182). --window/--limit override it",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Output results as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Log skipped rows and other details to stderr",
    )
    parser.add_argument(
        "--log-json",
        dest="log_json",
        action="store_true",
        help="Emit logs as single-line JSON",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, json_format=args.log_json)

    config = resolve_config(args)
    trips = parse_trips_from_text(read_trip_text(args.csv_file))
    if not trips:
        raise SystemExit(
            f"Error: No valid trip data found in '{args.csv_file}'.\n"
            "Expected format: Start date, End date (with or without header)\n"
            f"Supported date formats: {', '.join(SUPPORTED_FORMATS)}"
        )
    log.info(
        "Evaluating trips",
        extra={"trips": len(trips), "window_months": config.window_months, "absence_limit": config.absence_limit},
    )

    try:
        rows = analyze_trips(trips, config)
        status = calculate_status(trips, config, today=utc_today())
    except DateRangeError as exc:
        raise SystemExit(f"Error: {exc}. Check --window and the trip dates.")

    if args.json_output:
        print(json.dumps(build_json_document(rows, status, config), indent=2))
    else:
        print(render_text_report(rows, status, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
