"""
Orchestrate: load bookings and schedule, calculate the day, write outputs.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .calculator import CalculationResult, calculate
from .config import CALCULATED_TIMES_FILENAME
from .outputs import format_result, format_run_summary, write_calculated_times_csv
from .parser import load_bookings
from .schedule import DaySchedule, load_schedule

_logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    result: CalculationResult
    result_text: str
    summary_text: str
    calculated_times_path: Optional[Path]


def run(
    bookings_path: Path,
    schedule_path: Optional[Path] = None,
    out_dir: Optional[Path] = None,
) -> RunResult:
    """
    Load bookings (CSV/Excel) and an optional schedule (JSON), calculate the day.
    Writes calculated_times.csv to out_dir if set.
    """
    bookings = load_bookings(bookings_path)
    schedule = load_schedule(schedule_path) if schedule_path else DaySchedule()

    result = calculate(schedule, bookings, label=Path(bookings_path).stem)
    result_text = format_result(result, bookings)
    summary_text = format_run_summary(
        booking_count=result.booking_count,
        pair_count=len(result.pairs),
        errors=len(result.errors),
        warnings=len(result.warnings),
    )

    out_dir = Path(out_dir) if out_dir else None
    calculated_times_path = None
    if out_dir:
        out_dir.mkdir(parents=True, exist_ok=True)
        calculated_times_path = out_dir / CALCULATED_TIMES_FILENAME
        write_calculated_times_csv(calculated_times_path, result, bookings)
        _logger.info("Wrote %s", calculated_times_path)

    return RunResult(
        result=result,
        result_text=result_text,
        summary_text=summary_text,
        calculated_times_path=calculated_times_path,
    )
