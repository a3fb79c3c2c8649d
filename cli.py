#!/usr/bin/env python3
"""
Daily time calculation
CLI: calculate one employee-day from a booking file and a day schedule.
"""
import argparse
import logging
import sys
from pathlib import Path

from daily_time_calc import config
from daily_time_calc.run import run


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Daily time calculation: pair bookings, apply tolerance/rounding, total the day.",
    )
    parser.add_argument(
        "bookings",
        type=Path,
        help="Booking file (CSV or Excel) with id, time, direction, category[, pair_id]",
    )
    parser.add_argument(
        "--schedule",
        type=Path,
        default=config.DEFAULT_SCHEDULE_PATH,
        help="Day schedule JSON (windows, core hours, tolerance, rounding, breaks)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=config.OUTPUT_DIR,
        help="Output directory for calculated_times.csv",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL,
        help="Logging level. Default from DAILY_CALC_LOG_LEVEL",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT)

    if not args.bookings.exists():
        print(f"Error: booking file not found: {args.bookings}", file=sys.stderr)
        return 1
    if args.schedule is not None and not args.schedule.exists():
        print(f"Error: schedule file not found: {args.schedule}", file=sys.stderr)
        return 1

    try:
        result = run(
            bookings_path=args.bookings,
            schedule_path=args.schedule,
            out_dir=args.out_dir,
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.summary_text)
    print()
    print(result.result_text)

    if result.calculated_times_path:
        print()
        print(f"Calculated times: {result.calculated_times_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
