"""
Booking values for one employee-day: raw clock events, formed pairs, pairing result.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Hashable, List, Optional

from . import time_utils
from .codes import WarningCode


class Direction(str, Enum):
    IN = "in"
    OUT = "out"


class Category(str, Enum):
    WORK = "work"
    BREAK = "break"


@dataclass(frozen=True)
class Booking:
    """One clock event. time is minutes from midnight (0-1439 for raw input)."""
    id: Hashable
    time: int
    direction: Direction
    category: Category = Category.WORK
    pair_id: Optional[Hashable] = None  # link to another booking set by an editing workflow

    @property
    def is_work(self) -> bool:
        return self.category == Category.WORK

    def with_time(self, minutes: int) -> "Booking":
        """Same booking with a calculated time; the original stays untouched."""
        return replace(self, time=minutes)


@dataclass(frozen=True)
class BookingPair:
    """
    One matched interval. Work pairs run in -> out (arrive to leave), break pairs
    run out -> in (start break to end break).
    """
    in_booking: Booking
    out_booking: Booking
    category: Category

    @property
    def start_booking(self) -> Booking:
        return self.in_booking if self.category == Category.WORK else self.out_booking

    @property
    def end_booking(self) -> Booking:
        return self.out_booking if self.category == Category.WORK else self.in_booking

    @property
    def start(self) -> int:
        return self.start_booking.time

    @property
    def end(self) -> int:
        """End on the start's timeline (may exceed 1439 for cross-midnight pairs)."""
        return time_utils.normalize_cross_midnight(self.start, self.end_booking.time)

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def crosses_midnight(self) -> bool:
        return time_utils.is_cross_midnight(self.start, self.end_booking.time)


@dataclass
class PairingResult:
    pairs: List[BookingPair] = field(default_factory=list)
    unpaired_in_ids: List[Hashable] = field(default_factory=list)
    unpaired_out_ids: List[Hashable] = field(default_factory=list)
    warnings: List[WarningCode] = field(default_factory=list)

    def pairs_for(self, category: Category) -> List[BookingPair]:
        return [p for p in self.pairs if p.category == category]

    def topology(self) -> List[tuple]:
        """(in id, out id) per pair, order-independent comparison key."""
        return sorted(((p.in_booking.id, p.out_booking.id) for p in self.pairs), key=repr)
