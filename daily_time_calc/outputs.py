"""
Outputs: human-readable day summary and calculated-times CSV.
"""
import csv
from pathlib import Path
from typing import List, Sequence

from . import time_utils
from .bookings import Booking, Category
from .calculator import CalculationResult
from .config import CALCULATED_TIMES_HEADERS


def _booking_status(b: Booking, result: CalculationResult) -> str:
    if b.id in result.unpaired_in_ids or b.id in result.unpaired_out_ids:
        return "unpaired"
    calculated = result.calculated_times.get(b.id, b.time)
    return "adjusted" if calculated != b.time else "ok"


def format_result(result: CalculationResult, bookings: Sequence[Booking]) -> str:
    """Day summary for the operator: bookings, pairs, totals, codes."""
    lines = []
    lines.append("BOOKINGS:")
    for b in sorted(bookings, key=lambda x: x.time):
        calculated = result.calculated_times.get(b.id, b.time)
        shown = time_utils.format_time(b.time)
        if calculated != b.time:
            shown += f" -> {time_utils.format_time(calculated)}"
        lines.append(f"  {b.id}  {b.category.value:<5} {b.direction.value:<3}  {shown}  [{_booking_status(b, result)}]")
    lines.append("")

    lines.append("PAIRS:")
    if not result.pairs:
        lines.append("  (none)")
    for p in result.pairs:
        flag = "  (crosses midnight)" if p.crosses_midnight else ""
        lines.append(
            f"  {p.category.value:<5} {time_utils.format_time(p.start)} → "
            f"{time_utils.format_time(p.end)}  {time_utils.format_duration(p.duration)}{flag}"
        )
    lines.append("")

    lines.append(f"Gross: {time_utils.format_duration(result.gross_minutes)}")
    if result.break_minutes != result.recorded_break_minutes:
        lines.append(
            f"Break: {time_utils.format_duration(result.break_minutes)} "
            f"(booked {time_utils.format_duration(result.recorded_break_minutes)})"
        )
    else:
        lines.append(f"Break: {time_utils.format_duration(result.break_minutes)}")
    lines.append(f"Net:   {time_utils.format_duration(result.net_minutes)} "
                 f"({time_utils.minutes_to_decimal_hours(result.net_minutes):.2f} h)")
    lines.append(f"Target: {time_utils.format_duration(result.target_minutes)}   "
                 f"Balance: {time_utils.format_duration(result.balance)}")
    if result.capped_minutes:
        lines.append(f"Capped: {time_utils.format_duration(result.capped_minutes)}")
    lines.append("")

    if result.errors:
        lines.append("ERRORS: " + ", ".join(e.value for e in result.errors))
    if result.warnings:
        lines.append("WARNINGS: " + ", ".join(w.value for w in result.warnings))
    if not result.errors and not result.warnings:
        lines.append("No errors or warnings.")
    return "\n".join(lines).rstrip()


def calculated_time_rows(result: CalculationResult, bookings: Sequence[Booking]) -> List[list]:
    rows = []
    paired_ids = set()
    for p in result.pairs:
        paired_ids.add(p.in_booking.id)
        paired_ids.add(p.out_booking.id)
    for b in bookings:
        calculated = result.calculated_times.get(b.id, b.time)
        rows.append([
            b.id, b.direction.value, b.category.value,
            time_utils.format_time(b.time), time_utils.format_time(calculated),
            "yes" if b.id in paired_ids else "no",
            _booking_status(b, result),
        ])
    return rows


def write_calculated_times_csv(path: Path, result: CalculationResult, bookings: Sequence[Booking]) -> None:
    """One row per booking: booked vs calculated time, pairing status."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(CALCULATED_TIMES_HEADERS)
        for row in calculated_time_rows(result, bookings):
            w.writerow(row)


def format_run_summary(booking_count: int, pair_count: int, errors: int, warnings: int) -> str:
    return (
        f"Bookings: {booking_count}\n"
        f"Pairs: {pair_count}\n"
        f"Errors: {errors}\n"
        f"Warnings: {warnings}"
    )
