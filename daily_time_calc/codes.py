"""
Error and warning codes reported in a day's calculation result.
The enum value is the external code string.
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Conditions that make a day unpayable without manual review."""
    NO_BOOKINGS = "NO_BOOKINGS"
    MISSING_COME = "MISSING_COME"    # work out without a matching in
    MISSING_GO = "MISSING_GO"        # work in without a matching out
    UNPAIRED_BOOKING = "UNPAIRED_BOOKING"  # break booking without counterpart
    EARLY_COME = "EARLY_COME"
    LATE_COME = "LATE_COME"
    EARLY_GO = "EARLY_GO"
    LATE_GO = "LATE_GO"
    BELOW_MIN_WORK_TIME = "BELOW_MIN_WORK_TIME"


class WarningCode(str, Enum):
    """Informational findings; they never block downstream aggregation."""
    CROSS_MIDNIGHT = "CROSS_MIDNIGHT"
    CORE_HOURS_NOT_COVERED = "CORE_HOURS_NOT_COVERED"
    MAX_TIME_REACHED = "MAX_TIME_REACHED"
    MANUAL_BREAK = "MANUAL_BREAK"
    NO_BREAK_RECORDED = "NO_BREAK_RECORDED"
    AUTO_BREAK_APPLIED = "AUTO_BREAK_APPLIED"
