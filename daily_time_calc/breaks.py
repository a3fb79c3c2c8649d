"""
Break deduction from the day's break configuration.

Booked breaks always count. Fixed breaks are deducted by their overlap with
worked intervals, variable breaks only when nothing was booked, minimum breaks
once worked time reaches a threshold. Paid breaks are never deducted.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from . import time_utils
from .bookings import BookingPair, Category
from .codes import WarningCode
from .schedule import BreakConfig, BreakType


@dataclass
class BreakDeductionResult:
    deducted_minutes: int
    warnings: List[WarningCode] = field(default_factory=list)


def deduct_fixed_break(pairs: Iterable[BookingPair], config: BreakConfig) -> int:
    """Overlap of work pairs with the fixed break window, capped at the break duration."""
    if config.start is None or config.end is None:
        return 0
    overlap = 0
    for p in pairs:
        if p.category != Category.WORK:
            continue
        overlap += time_utils.calculate_overlap(p.start, p.end, config.start, config.end)
    return min(overlap, config.duration)


def calculate_minimum_break(gross_minutes: int, config: BreakConfig) -> int:
    threshold = config.after_work_minutes
    if threshold is None or gross_minutes < threshold:
        return 0
    if config.minutes_difference:
        return min(gross_minutes - threshold, config.duration)
    return config.duration


def _variable_break(recorded: int, gross_minutes: int, config: BreakConfig) -> int:
    if recorded > 0 or not config.auto_deduct:
        return 0
    if config.after_work_minutes is not None and gross_minutes < config.after_work_minutes:
        return 0
    return config.duration


def calculate_break_deduction(
    pairs: Optional[Sequence[BookingPair]],
    recorded_break: int,
    gross_minutes: int,
    configs: Optional[Sequence[BreakConfig]],
) -> BreakDeductionResult:
    """Total break minutes to deduct from gross time, with break warnings."""
    if not configs:
        return BreakDeductionResult(deducted_minutes=recorded_break)

    pairs = pairs or []
    warnings: List[WarningCode] = []
    if recorded_break > 0:
        warnings.append(WarningCode.MANUAL_BREAK)
    else:
        warnings.append(WarningCode.NO_BREAK_RECORDED)

    total = recorded_break
    auto_applied = False
    for cfg in configs:
        if cfg.is_paid:
            # paid breaks count as working time
            continue
        if cfg.type == BreakType.FIXED:
            total += deduct_fixed_break(pairs, cfg)
        elif cfg.type == BreakType.VARIABLE:
            minutes = _variable_break(recorded_break, gross_minutes, cfg)
            if minutes:
                total += minutes
                auto_applied = True
        elif cfg.type == BreakType.MINIMUM:
            if not cfg.auto_deduct:
                continue
            minutes = calculate_minimum_break(gross_minutes, cfg)
            if minutes:
                total += minutes
                auto_applied = True

    if auto_applied:
        warnings.append(WarningCode.AUTO_BREAK_APPLIED)
    return BreakDeductionResult(deducted_minutes=total, warnings=warnings)


def calculate_net_time(
    gross_minutes: int,
    break_minutes: int,
    max_net_work_time: Optional[int],
) -> Tuple[int, List[WarningCode]]:
    """Net = gross - break (never negative), capped at max_net_work_time."""
    net = max(0, gross_minutes - break_minutes)
    if max_net_work_time is not None and net > max_net_work_time:
        return max_net_work_time, [WarningCode.MAX_TIME_REACHED]
    return net, []


def calculate_overtime_undertime(net_minutes: int, target_minutes: int) -> Tuple[int, int]:
    diff = net_minutes - target_minutes
    if diff > 0:
        return diff, 0
    return 0, -diff
