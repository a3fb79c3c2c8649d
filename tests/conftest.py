"""
Pytest configuration and shared fixtures.
"""

import pytest

from daily_time_calc.bookings import Booking, Category, Direction
from daily_time_calc.schedule import DaySchedule, ToleranceConfig


@pytest.fixture
def booking():
    """Factory: booking("c1", 480) is a work arrival; direction/category as strings."""

    def _make(bid, time, direction="in", category="work", pair_id=None):
        return Booking(
            id=bid,
            time=time,
            direction=Direction(direction),
            category=Category(category),
            pair_id=pair_id,
        )

    return _make


@pytest.fixture
def office_day(booking):
    """08:00-17:00 with a 12:00-12:30 break."""
    return [
        booking("come", 480, "in"),
        booking("break_start", 720, "out", "break"),
        booking("break_end", 750, "in", "break"),
        booking("go", 1020, "out"),
    ]


@pytest.fixture
def flextime_schedule():
    """07:30-09:00 arrival, 16:00-18:00 departure, core 09:00-16:00, 5 min grace each way."""
    return DaySchedule(
        come_from=450,
        come_to=540,
        go_from=960,
        go_to=1080,
        core_start=540,
        core_end=960,
        tolerance=ToleranceConfig(come_plus=5, come_minus=5, go_plus=5, go_minus=5),
        target_minutes=480,
    )
