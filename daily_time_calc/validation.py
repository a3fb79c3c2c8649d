"""
Allowed time windows and core-hour coverage. Absent bounds are always satisfied.
"""
from typing import List, Optional

from .codes import ErrorCode, WarningCode


def validate_time_window(
    actual: int,
    window_from: Optional[int],
    window_to: Optional[int],
    early_code: ErrorCode,
    late_code: ErrorCode,
) -> List[ErrorCode]:
    """early_code if actual < window_from, late_code if actual > window_to."""
    codes = []
    if window_from is not None and actual < window_from:
        codes.append(early_code)
    if window_to is not None and actual > window_to:
        codes.append(late_code)
    return codes


def validate_core_hours(
    first_come: Optional[int],
    last_go: Optional[int],
    core_start: Optional[int],
    core_end: Optional[int],
) -> List[WarningCode]:
    """
    Core hours are covered when the first arrival is at or before core_start and
    the last departure at or after core_end. Without both core bounds there is
    nothing to check (flextime without core hours).
    """
    if core_start is None or core_end is None:
        return []
    if first_come is None or last_go is None:
        return [WarningCode.CORE_HOURS_NOT_COVERED]
    if first_come > core_start or last_go < core_end:
        return [WarningCode.CORE_HOURS_NOT_COVERED]
    return []
