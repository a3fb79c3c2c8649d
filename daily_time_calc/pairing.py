"""
Pair bookings into work intervals (in -> out) and break intervals (out -> in).

Each category is paired on its own in three passes:
  1. pre-established links (pair_id), regardless of time order
  2. chronological: each open start takes the next open end at or after it
  3. cross-midnight: a start still open takes an earlier end (end is next day)
Whatever is left goes to the unpaired lists by direction.
"""
import logging
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Set, Tuple

from .bookings import Booking, BookingPair, Category, Direction, PairingResult
from .codes import WarningCode

_logger = logging.getLogger(__name__)


def pair_bookings(bookings: Sequence[Booking]) -> PairingResult:
    """Pair work and break bookings. Does not modify the input."""
    result = PairingResult()
    for category in (Category.WORK, Category.BREAK):
        subset = [b for b in bookings if b.category == category]
        if not subset:
            continue
        pairs, unpaired_in, unpaired_out, warnings = _pair_category(subset, category)
        result.pairs.extend(pairs)
        result.unpaired_in_ids.extend(unpaired_in)
        result.unpaired_out_ids.extend(unpaired_out)
        result.warnings.extend(warnings)
    return result


def _chronological(bookings: Iterable[Booking]) -> List[Booking]:
    # sorted() is stable: equal times keep their input order
    return sorted(bookings, key=lambda b: b.time)


def _make_pair(a: Booking, b: Booking, category: Category) -> BookingPair:
    if a.direction == Direction.IN:
        return BookingPair(in_booking=a, out_booking=b, category=category)
    return BookingPair(in_booking=b, out_booking=a, category=category)


def _pair_category(
    bookings: List[Booking],
    category: Category,
) -> Tuple[List[BookingPair], List[Hashable], List[Hashable], List[WarningCode]]:
    ordered = _chronological(bookings)
    by_id: Dict[Hashable, Booking] = {b.id: b for b in ordered}
    ins = [b for b in ordered if b.direction == Direction.IN]
    outs = [b for b in ordered if b.direction == Direction.OUT]

    # Work intervals start on IN, break intervals start on OUT (leaving work)
    if category == Category.WORK:
        starts, ends = ins, outs
    else:
        starts, ends = outs, ins

    paired: Set[Hashable] = set()
    pairs: List[BookingPair] = []
    warnings: List[WarningCode] = []

    def take(a: Booking, b: Booking, how: str) -> BookingPair:
        pair = _make_pair(a, b, category)
        pairs.append(pair)
        paired.add(a.id)
        paired.add(b.id)
        _logger.debug(
            "%s pair %s -> %s (%s, %d min)",
            category.value, pair.start_booking.id, pair.end_booking.id, how, pair.duration,
        )
        return pair

    # Pass 1: pre-established links
    for b in ordered:
        if b.pair_id is None or b.id in paired:
            continue
        other: Optional[Booking] = by_id.get(b.pair_id)
        if other is None or other.id in paired or other.direction == b.direction or other.id == b.id:
            _logger.debug("Ignoring dangling pair_id %s on booking %s", b.pair_id, b.id)
            continue
        pair = take(b, other, "linked")
        if pair.crosses_midnight:
            warnings.append(WarningCode.CROSS_MIDNIGHT)

    # Pass 2: chronological, earliest open start with earliest eligible end
    end_idx = 0
    for start in starts:
        if start.id in paired:
            continue
        while end_idx < len(ends) and (ends[end_idx].id in paired or ends[end_idx].time < start.time):
            end_idx += 1
        if end_idx < len(ends):
            take(start, ends[end_idx], "chronological")
            end_idx += 1

    # Pass 3: an open start pairs with an earlier open end on the next day
    for start in starts:
        if start.id in paired:
            continue
        for end in ends:
            if end.id in paired:
                continue
            if end.time < start.time:
                take(start, end, "cross-midnight")
                warnings.append(WarningCode.CROSS_MIDNIGHT)
                break

    unpaired_in = [b.id for b in ins if b.id not in paired]
    unpaired_out = [b.id for b in outs if b.id not in paired]
    pairs.sort(key=lambda p: p.start)
    return pairs, unpaired_in, unpaired_out, warnings


def calculate_gross_time(pairs: Iterable[BookingPair]) -> int:
    """Sum of work pair durations."""
    return sum(p.duration for p in pairs if p.category == Category.WORK)


def calculate_break_time(pairs: Iterable[BookingPair]) -> int:
    """Sum of break pair durations."""
    return sum(p.duration for p in pairs if p.category == Category.BREAK)


def find_first_come(bookings: Iterable[Booking]) -> Optional[int]:
    """Earliest work arrival time, or None if there is none."""
    times = [b.time for b in bookings if b.category == Category.WORK and b.direction == Direction.IN]
    return min(times) if times else None


def find_last_go(bookings: Iterable[Booking]) -> Optional[int]:
    """Latest work departure time, or None if there is none."""
    times = [b.time for b in bookings if b.category == Category.WORK and b.direction == Direction.OUT]
    return max(times) if times else None
