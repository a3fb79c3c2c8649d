"""
Daily calculation: bookings + day schedule -> calculated times, pairs, totals,
errors and warnings. Pure per call; domain problems are reported in the result,
never raised.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from . import pairing, rounding, tolerance
from .bookings import Booking, BookingPair, Category, Direction
from .breaks import calculate_break_deduction, calculate_net_time, calculate_overtime_undertime
from .capping import (
    CappedTime,
    CappingResult,
    aggregate_capping,
    cap_arrival,
    cap_departure,
    max_net_time_capping,
)
from .codes import ErrorCode, WarningCode
from .schedule import DaySchedule
from .validation import validate_core_hours, validate_time_window

_logger = logging.getLogger(__name__)


@dataclass
class DayInput:
    """One employee-day to calculate."""
    schedule: DaySchedule
    bookings: List[Booking]
    label: str = ""  # e.g. "emp 1042 2026-01-15", used in log lines only


@dataclass
class CalculationResult:
    calculated_times: Dict[Hashable, int] = field(default_factory=dict)
    gross_minutes: int = 0
    recorded_break_minutes: int = 0
    break_minutes: int = 0
    net_minutes: int = 0
    target_minutes: int = 0
    overtime: int = 0
    undertime: int = 0
    first_come: Optional[int] = None
    last_go: Optional[int] = None
    booking_count: int = 0
    pairs: List[BookingPair] = field(default_factory=list)
    unpaired_in_ids: List[Hashable] = field(default_factory=list)
    unpaired_out_ids: List[Hashable] = field(default_factory=list)
    capping: CappingResult = field(default_factory=CappingResult)
    errors: List[ErrorCode] = field(default_factory=list)
    warnings: List[WarningCode] = field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return bool(self.errors)

    @property
    def balance(self) -> int:
        """Net minus target; positive is overtime."""
        return self.net_minutes - self.target_minutes

    @property
    def capped_minutes(self) -> int:
        return self.capping.total_capped


def _rounding_scope(bookings: Sequence[Booking]) -> Tuple[Optional[Hashable], Optional[Hashable]]:
    """IDs of the chronologically first work arrival and last work departure."""
    first_in: Optional[Booking] = None
    last_out: Optional[Booking] = None
    for b in bookings:
        if b.category != Category.WORK:
            continue
        if b.direction == Direction.IN:
            if first_in is None or b.time < first_in.time:
                first_in = b
        elif last_out is None or b.time >= last_out.time:
            last_out = b
    return (
        first_in.id if first_in is not None else None,
        last_out.id if last_out is not None else None,
    )


def apply_schedule_adjustments(bookings: Sequence[Booking], schedule: DaySchedule) -> List[Booking]:
    """
    Tolerance then rounding for each work booking, in input order. Break bookings
    pass through unchanged.
    """
    first_in_id, last_out_id = _rounding_scope(bookings)
    adjusted = []
    for b in bookings:
        if b.category != Category.WORK:
            adjusted.append(b)
            continue
        if b.direction == Direction.IN:
            t = tolerance.apply_come_tolerance(b.time, schedule.come_target, schedule.tolerance)
            if schedule.round_all_bookings or b.id == first_in_id:
                t = rounding.round_come_time(t, schedule.rounding_come)
        else:
            t = tolerance.apply_go_tolerance(b.time, schedule.go_target, schedule.tolerance)
            if schedule.round_all_bookings or b.id == last_out_id:
                t = rounding.round_go_time(t, schedule.rounding_go)
        if t != b.time:
            _logger.debug("Booking %s adjusted %d -> %d", b.id, b.time, t)
        adjusted.append(b.with_time(t))
    return adjusted


def _cap_to_window(bookings: Sequence[Booking], schedule: DaySchedule) -> Tuple[List[Booking], List[CappedTime]]:
    capped_bookings = []
    items = []
    for b in bookings:
        if b.category != Category.WORK:
            capped_bookings.append(b)
            continue
        if b.direction == Direction.IN:
            t, item = cap_arrival(
                b.time, schedule.come_from, schedule.tolerance.come_minus, schedule.variable_work_time,
            )
        else:
            t, item = cap_departure(b.time, schedule.go_to, schedule.tolerance.go_plus)
        if item is not None:
            items.append(item)
        capped_bookings.append(b.with_time(t) if t != b.time else b)
    return capped_bookings, items


def _add_once(codes: list, code) -> None:
    if code not in codes:
        codes.append(code)


def _pairing_errors(
    unpaired_in_ids: List[Hashable],
    unpaired_out_ids: List[Hashable],
    by_id: Dict[Hashable, Booking],
) -> List[ErrorCode]:
    errors: List[ErrorCode] = []
    for bid in unpaired_in_ids:
        if by_id[bid].category == Category.WORK:
            _add_once(errors, ErrorCode.MISSING_GO)
        else:
            _add_once(errors, ErrorCode.UNPAIRED_BOOKING)
    for bid in unpaired_out_ids:
        if by_id[bid].category == Category.WORK:
            _add_once(errors, ErrorCode.MISSING_COME)
        else:
            _add_once(errors, ErrorCode.UNPAIRED_BOOKING)
    return errors


def _window_errors(result: CalculationResult, schedule: DaySchedule) -> List[ErrorCode]:
    errors: List[ErrorCode] = []
    if result.first_come is not None:
        errors.extend(validate_time_window(
            result.first_come, schedule.come_from, schedule.come_to,
            ErrorCode.EARLY_COME, ErrorCode.LATE_COME,
        ))
    if result.last_go is not None:
        errors.extend(validate_time_window(
            result.last_go, schedule.go_from, schedule.go_to,
            ErrorCode.EARLY_GO, ErrorCode.LATE_GO,
        ))
    return errors


def calculate(schedule: DaySchedule, bookings: Sequence[Booking], label: str = "") -> CalculationResult:
    """Calculate one employee-day. Never raises for domain irregularities."""
    result = CalculationResult(
        target_minutes=schedule.target_minutes,
        booking_count=len(bookings),
    )
    if not bookings:
        result.errors.append(ErrorCode.NO_BOOKINGS)
        result.overtime, result.undertime = calculate_overtime_undertime(0, schedule.target_minutes)
        _logger.info("Day %s: no bookings", label or "-")
        return result

    # Step 1: structure from raw times, then tolerance and rounding per booking
    raw_pairing = pairing.pair_bookings(bookings)
    adjusted = apply_schedule_adjustments(bookings, schedule)
    window_items: List[CappedTime] = []
    effective = adjusted
    if schedule.cap_to_evaluation_window:
        effective, window_items = _cap_to_window(adjusted, schedule)
    result.calculated_times = {b.id: b.time for b in effective}

    # Step 2: pair again on calculated times
    final = pairing.pair_bookings(effective)
    if final.topology() != raw_pairing.topology():
        _logger.debug("Day %s: adjustments changed pairing topology", label or "-")
    result.pairs = final.pairs
    result.unpaired_in_ids = final.unpaired_in_ids
    result.unpaired_out_ids = final.unpaired_out_ids
    result.warnings.extend(final.warnings)

    by_id = {b.id: b for b in effective}
    result.errors.extend(_pairing_errors(final.unpaired_in_ids, final.unpaired_out_ids, by_id))

    # Step 3: totals
    result.gross_minutes = pairing.calculate_gross_time(final.pairs)
    result.recorded_break_minutes = pairing.calculate_break_time(final.pairs)
    deduction = calculate_break_deduction(
        final.pairs, result.recorded_break_minutes, result.gross_minutes, schedule.breaks,
    )
    result.break_minutes = deduction.deducted_minutes
    result.warnings.extend(deduction.warnings)

    uncapped_net = max(0, result.gross_minutes - result.break_minutes)
    result.net_minutes, net_warnings = calculate_net_time(
        result.gross_minutes, result.break_minutes, schedule.max_net_work_time,
    )
    result.warnings.extend(net_warnings)
    result.capping = aggregate_capping(
        *window_items, max_net_time_capping(uncapped_net, schedule.max_net_work_time),
    )

    # Step 4: windows and core hours, on calculated times before window capping
    result.first_come = pairing.find_first_come(adjusted)
    result.last_go = pairing.find_last_go(adjusted)
    result.errors.extend(_window_errors(result, schedule))
    result.warnings.extend(validate_core_hours(
        result.first_come, result.last_go, schedule.core_start, schedule.core_end,
    ))

    if schedule.min_work_time is not None and result.net_minutes < schedule.min_work_time:
        result.errors.append(ErrorCode.BELOW_MIN_WORK_TIME)

    result.overtime, result.undertime = calculate_overtime_undertime(
        result.net_minutes, schedule.target_minutes,
    )

    _logger.info(
        "Day %s: gross=%d break=%d net=%d errors=%s warnings=%s",
        label or "-", result.gross_minutes, result.break_minutes, result.net_minutes,
        [e.value for e in result.errors], [w.value for w in result.warnings],
    )
    return result


def calculate_day(day: DayInput) -> CalculationResult:
    return calculate(day.schedule, day.bookings, label=day.label)


def calculate_many(days: Iterable[DayInput]) -> List[CalculationResult]:
    """One independent result per day; an error-bearing day does not stop the rest."""
    return [calculate_day(d) for d in days]
