"""
Time handling: minutes from midnight, HH:MM 24-hour format, midnight crossover.
"""
import re
from typing import Optional

MINUTES_PER_DAY = 24 * 60

# Time format: HH:MM 24-hour, zero-padded
TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(s: str) -> Optional[int]:
    """Parse HH:MM or H:MM to minutes since midnight. Returns None if invalid."""
    if not s or not isinstance(s, str):
        return None
    s = s.strip()
    m = TIME_RE.match(s)
    if not m:
        return None
    h, mn = int(m.group(1)), int(m.group(2))
    if h < 0 or h > 23 or mn < 0 or mn > 59:
        return None
    return h * 60 + mn


def format_time(minutes: int) -> str:
    """Minutes since midnight to HH:MM 24-hour. Handles next-day (e.g. 24*60+30 -> 00:30)."""
    if minutes < 0:
        minutes = 0
    minutes = minutes % MINUTES_PER_DAY
    h, mn = divmod(minutes, 60)
    return f"{h:02d}:{mn:02d}"


def format_duration(minutes: int) -> str:
    """Duration in minutes to H:MM (no day wrap, negative values keep their sign)."""
    sign = "-" if minutes < 0 else ""
    h, m = divmod(abs(minutes), 60)
    return f"{sign}{h}:{m:02d}"


def minutes_to_decimal_hours(minutes: int) -> float:
    return round(minutes / 60, 2)


def normalize_cross_midnight(start_min: int, end_min: int) -> int:
    """
    End time on the same timeline as start. If end < start the interval runs into
    the next day and end is shifted by one day, so end - start is never negative.
    """
    if end_min < start_min:
        return end_min + MINUTES_PER_DAY
    return end_min


def is_cross_midnight(start_min: int, end_min: int) -> bool:
    return end_min < start_min


def interval_minutes(start_min: int, end_min: int) -> int:
    """Length of start -> end, treating end < start as next-day end."""
    return normalize_cross_midnight(start_min, end_min) - start_min


def calculate_overlap(start1: int, end1: int, start2: int, end2: int) -> int:
    """Overlap in minutes between [start1, end1) and [start2, end2). 0 when disjoint or adjacent."""
    overlap_start = max(start1, start2)
    overlap_end = min(end1, end2)
    if overlap_end > overlap_start:
        return overlap_end - overlap_start
    return 0


def parse_minutes(value) -> Optional[int]:
    """
    Accept HH:MM text, integer minutes, or numeric text ("480"). Returns None for
    empty values and raises ValueError for anything else.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    s = str(value).strip()
    if not s:
        return None
    if s.isdigit():
        return int(s)
    parsed = parse_time(s)
    if parsed is None:
        raise ValueError(f"Invalid time value: {value!r} (expected HH:MM or minutes)")
    return parsed
