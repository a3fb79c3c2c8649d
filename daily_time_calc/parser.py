"""
Booking file loader. Maps CSV / Excel rows to Booking values for one employee-day.

Columns (header match is case-insensitive): id, time, direction, category, pair_id.
time is HH:MM or minutes from midnight; category defaults to work.
"""
import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import time_utils
from .bookings import Booking, Category, Direction

_logger = logging.getLogger(__name__)

DIRECTION_ALIASES = {
    "in": Direction.IN,
    "come": Direction.IN,
    "arrive": Direction.IN,
    "out": Direction.OUT,
    "go": Direction.OUT,
    "leave": Direction.OUT,
}

CATEGORY_ALIASES = {
    "work": Category.WORK,
    "": Category.WORK,
    "break": Category.BREAK,
    "pause": Category.BREAK,
}


def _raw(row: Dict[str, Any], *keys: str) -> Any:
    """First matching cell value (exact, case-insensitive header match), or None."""
    for k in keys:
        for h, v in row.items():
            if h and str(h).strip().lower() == k and v is not None:
                return v
    return None


def _col(row: Dict[str, Any], *keys: str) -> str:
    v = _raw(row, *keys)
    return "" if v is None else str(v).strip()


def _cell_minutes(value: Any) -> Optional[int]:
    # Excel hands back datetime.time / datetime for time-formatted cells
    if hasattr(value, "hour") and hasattr(value, "minute"):
        return value.hour * 60 + value.minute
    return time_utils.parse_minutes(value)


def row_to_booking(row: Dict[str, Any], row_number: int) -> Booking:
    """Build one Booking from a row mapping. Raises ValueError naming the row."""
    booking_id = _col(row, "id", "booking_id")
    if not booking_id:
        raise ValueError(f"Row {row_number}: missing id")
    try:
        minutes = _cell_minutes(_raw(row, "time"))
    except ValueError as e:
        raise ValueError(f"Row {row_number}: {e}")
    if minutes is None:
        raise ValueError(f"Row {row_number}: missing time")
    if minutes < 0 or minutes >= time_utils.MINUTES_PER_DAY:
        raise ValueError(f"Row {row_number}: time {minutes} outside 0-1439")

    direction = DIRECTION_ALIASES.get(str(_col(row, "direction")).lower())
    if direction is None:
        raise ValueError(f"Row {row_number}: direction must be in or out")
    category = CATEGORY_ALIASES.get(str(_col(row, "category")).lower())
    if category is None:
        raise ValueError(f"Row {row_number}: category must be work or break")

    pair_id = _col(row, "pair_id", "pair") or None
    return Booking(
        id=booking_id,
        time=minutes,
        direction=direction,
        category=category,
        pair_id=pair_id,
    )


def load_bookings_csv(path: Path) -> List[Booking]:
    bookings = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            return bookings
        # header is line 1, first data row is line 2
        for i, row in enumerate(reader, start=2):
            if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                continue
            bookings.append(row_to_booking(row, i))
    return bookings


def load_bookings_xlsx(path: Path, sheet_name: Optional[str] = None) -> List[Booking]:
    """Load bookings from the active sheet (or sheet_name) of an Excel workbook."""
    try:
        import openpyxl
    except ImportError:
        raise RuntimeError("openpyxl required for Excel. pip install openpyxl")
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    ws = wb.active
    if sheet_name:
        ws = wb[sheet_name]
    rows = list(ws.iter_rows(values_only=True))
    wb.close()
    if not rows:
        return []
    header = [str(c).strip() if c is not None else "" for c in rows[0]]
    bookings = []
    for i, row in enumerate(rows[1:], start=2):
        if not row or all(c is None or str(c).strip() == "" for c in row):
            continue
        bookings.append(row_to_booking(dict(zip(header, row)), i))
    return bookings


def load_bookings(path: Path) -> List[Booking]:
    """Load from .csv or .xlsx."""
    path = Path(path)
    suf = path.suffix.lower()
    if suf == ".csv":
        bookings = load_bookings_csv(path)
    elif suf in (".xlsx", ".xlsm"):
        bookings = load_bookings_xlsx(path)
    else:
        raise ValueError(f"Unsupported booking file type: {path.suffix} (use .csv or .xlsx)")
    _logger.debug("Loaded %d bookings from %s", len(bookings), path)
    return bookings
