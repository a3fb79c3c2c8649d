"""
Capped time: minutes cut off by the evaluation window or the maximum net work time.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class CappingSource(str, Enum):
    EARLY_ARRIVAL = "early_arrival"
    LATE_LEAVE = "late_leave"
    MAX_NET_TIME = "max_net_time"


@dataclass(frozen=True)
class CappedTime:
    minutes: int
    source: CappingSource
    reason: str


@dataclass
class CappingResult:
    total_capped: int = 0
    items: List[CappedTime] = field(default_factory=list)


def cap_arrival(
    arrival: int,
    window_start: Optional[int],
    tolerance_minus: int = 0,
    variable_work_time: bool = False,
) -> Tuple[int, Optional[CappedTime]]:
    """Move an arrival before the window start onto it. The window opens come_minus earlier with variable work time."""
    if window_start is None:
        return arrival, None
    effective_start = window_start
    if variable_work_time and tolerance_minus > 0:
        effective_start = window_start - tolerance_minus
    if arrival < effective_start:
        return effective_start, CappedTime(
            minutes=effective_start - arrival,
            source=CappingSource.EARLY_ARRIVAL,
            reason="Arrival before evaluation window",
        )
    return arrival, None


def cap_departure(
    departure: int,
    window_end: Optional[int],
    tolerance_plus: int = 0,
) -> Tuple[int, Optional[CappedTime]]:
    """Move a departure after window end (+ go_plus) back onto it."""
    if window_end is None:
        return departure, None
    effective_end = window_end + tolerance_plus
    if departure > effective_end:
        return effective_end, CappedTime(
            minutes=departure - effective_end,
            source=CappingSource.LATE_LEAVE,
            reason="Departure after evaluation window",
        )
    return departure, None


def max_net_time_capping(net_minutes: int, max_net_work_time: Optional[int]) -> Optional[CappedTime]:
    if max_net_work_time is None or net_minutes <= max_net_work_time:
        return None
    return CappedTime(
        minutes=net_minutes - max_net_work_time,
        source=CappingSource.MAX_NET_TIME,
        reason="Exceeded maximum net work time",
    )


def aggregate_capping(*items: Optional[CappedTime]) -> CappingResult:
    """Combine capping items; None and zero-minute items are skipped."""
    result = CappingResult()
    for item in items:
        if item is not None and item.minutes > 0:
            result.items.append(item)
            result.total_capped += item.minutes
    return result
