import logging
from dataclasses import replace

import pytest

from daily_time_calc.calculator import (
    DayInput,
    apply_schedule_adjustments,
    calculate,
    calculate_day,
    calculate_many,
)
from daily_time_calc.codes import ErrorCode, WarningCode
from daily_time_calc.schedule import (
    BreakConfig,
    BreakType,
    DaySchedule,
    RoundingConfig,
    RoundingType,
    ToleranceConfig,
)

UP_15 = RoundingConfig(type=RoundingType.UP, interval=15)
DOWN_15 = RoundingConfig(type=RoundingType.DOWN, interval=15)


def test_simple_day_without_schedule(booking):
    result = calculate(DaySchedule(), [booking("c", 480, "in"), booking("g", 1020, "out")])

    assert result.gross_minutes == 540
    assert result.net_minutes == 540
    assert result.errors == []
    assert result.warnings == []
    assert result.calculated_times == {"c": 480, "g": 1020}
    assert result.booking_count == 2
    assert result.first_come == 480
    assert result.last_go == 1020


def test_day_with_booked_break(office_day):
    result = calculate(DaySchedule(target_minutes=480), office_day)

    assert result.gross_minutes == 540
    assert result.recorded_break_minutes == 30
    assert result.break_minutes == 30
    assert result.net_minutes == 510
    assert result.overtime == 30
    assert result.undertime == 0
    assert result.balance == 30
    assert not result.has_error


def test_missing_go_after_tolerance(booking):
    schedule = DaySchedule(come_from=480, tolerance=ToleranceConfig(come_minus=10))
    result = calculate(schedule, [booking("c", 475, "in")])

    assert result.calculated_times == {"c": 480}
    assert result.errors == [ErrorCode.MISSING_GO]
    assert result.unpaired_in_ids == ["c"]
    assert result.gross_minutes == 0
    assert result.has_error


def test_missing_come(booking):
    result = calculate(DaySchedule(), [booking("g", 1020, "out")])

    assert result.errors == [ErrorCode.MISSING_COME]
    assert result.unpaired_out_ids == ["g"]


def test_missing_go_reported_once(booking):
    result = calculate(DaySchedule(), [
        booking("c1", 480, "in"),
        booking("c2", 490, "in"),
        booking("c3", 500, "in"),
        booking("g", 1020, "out"),
    ])

    assert result.errors == [ErrorCode.MISSING_GO]
    assert result.unpaired_in_ids == ["c2", "c3"]
    assert result.gross_minutes == 540


def test_unpaired_break_booking(booking):
    result = calculate(DaySchedule(), [
        booking("c", 480, "in"),
        booking("bs", 720, "out", "break"),
        booking("g", 1020, "out"),
    ])

    assert result.errors == [ErrorCode.UNPAIRED_BOOKING]
    assert result.gross_minutes == 540
    assert result.recorded_break_minutes == 0


def test_no_bookings():
    result = calculate(DaySchedule(target_minutes=480), [])

    assert result.errors == [ErrorCode.NO_BOOKINGS]
    assert result.gross_minutes == 0
    assert result.net_minutes == 0
    assert result.undertime == 480
    assert result.calculated_times == {}


def test_rounding_come_up_go_down(booking):
    schedule = DaySchedule(rounding_come=UP_15, rounding_go=DOWN_15)
    result = calculate(schedule, [booking("c", 483, "in"), booking("g", 1017, "out")])

    assert result.calculated_times == {"c": 495, "g": 1005}
    assert result.gross_minutes == 510


def test_break_bookings_are_not_rounded(booking):
    schedule = DaySchedule(rounding_come=UP_15, rounding_go=DOWN_15)
    result = calculate(schedule, [
        booking("c", 480, "in"),
        booking("bs", 722, "out", "break"),
        booking("be", 751, "in", "break"),
        booking("g", 1020, "out"),
    ])

    assert result.calculated_times["bs"] == 722
    assert result.calculated_times["be"] == 751
    assert result.recorded_break_minutes == 29


def _split_day(booking):
    return [
        booking("c1", 483, "in"),
        booking("g1", 723, "out"),
        booking("c2", 753, "in"),
        booking("g2", 1017, "out"),
    ]


def test_round_all_bookings(booking):
    schedule = DaySchedule(rounding_come=UP_15, rounding_go=DOWN_15)
    result = calculate(schedule, _split_day(booking))

    assert result.calculated_times == {"c1": 495, "g1": 720, "c2": 765, "g2": 1005}
    assert result.gross_minutes == 465


def test_round_only_first_come_and_last_go(booking):
    schedule = DaySchedule(rounding_come=UP_15, rounding_go=DOWN_15, round_all_bookings=False)
    result = calculate(schedule, _split_day(booking))

    assert result.calculated_times == {"c1": 495, "g1": 723, "c2": 753, "g2": 1005}
    assert result.gross_minutes == 480


def test_tolerance_then_rounding(booking):
    # 08:09 forgiven to 08:00, which is already on the grid
    schedule = DaySchedule(
        come_from=480,
        tolerance=ToleranceConfig(come_plus=10),
        rounding_come=UP_15,
    )
    result = calculate(schedule, [booking("c", 489, "in"), booking("g", 1020, "out")])

    assert result.calculated_times["c"] == 480


def test_go_tolerance_falls_back_to_go_from(booking):
    schedule = DaySchedule(go_from=1020, tolerance=ToleranceConfig(go_minus=10))
    result = calculate(schedule, [booking("c", 480, "in"), booking("g", 1012, "out")])

    assert result.calculated_times["g"] == 1020
    assert result.gross_minutes == 540


def test_apply_schedule_adjustments_keeps_input(booking):
    bookings = [booking("c", 483, "in"), booking("g", 1017, "out")]
    adjusted = apply_schedule_adjustments(bookings, DaySchedule(rounding_come=UP_15))

    assert [b.time for b in adjusted] == [495, 1017]
    assert [b.time for b in bookings] == [483, 1017]


def test_full_flextime_day(booking, flextime_schedule):
    schedule = replace(
        flextime_schedule,
        rounding_come=RoundingConfig(type=RoundingType.NEAREST, interval=5),
        rounding_go=RoundingConfig(type=RoundingType.NEAREST, interval=5),
        breaks=[BreakConfig(type=BreakType.MINIMUM, duration=30, after_work_minutes=360, auto_deduct=True)],
    )
    result = calculate(schedule, [
        booking("c", 478, "in"),
        booking("bs", 720, "out", "break"),
        booking("be", 765, "in", "break"),
        booking("g", 1022, "out"),
    ])

    assert result.calculated_times["c"] == 480
    assert result.calculated_times["g"] == 1020
    assert result.gross_minutes == 540
    assert result.recorded_break_minutes == 45
    assert result.break_minutes == 75
    assert result.net_minutes == 465
    assert result.undertime == 15
    assert result.errors == []
    assert WarningCode.MANUAL_BREAK in result.warnings
    assert WarningCode.AUTO_BREAK_APPLIED in result.warnings


def test_fixed_break_deducted(booking):
    schedule = DaySchedule(breaks=[BreakConfig(type=BreakType.FIXED, duration=30, start=720, end=750)])
    result = calculate(schedule, [booking("c", 480, "in"), booking("g", 1020, "out")])

    assert result.break_minutes == 30
    assert result.net_minutes == 510
    assert result.warnings == [WarningCode.NO_BREAK_RECORDED]


def test_early_come(booking, flextime_schedule):
    result = calculate(flextime_schedule, [booking("c", 420, "in"), booking("g", 1020, "out")])

    assert result.errors == [ErrorCode.EARLY_COME]


def test_late_come(booking, flextime_schedule):
    result = calculate(flextime_schedule, [booking("c", 600, "in"), booking("g", 1020, "out")])

    assert ErrorCode.LATE_COME in result.errors
    assert WarningCode.CORE_HOURS_NOT_COVERED in result.warnings


def test_early_and_late_go(booking, flextime_schedule):
    early = calculate(flextime_schedule, [booking("c", 480, "in"), booking("g", 900, "out")])
    late = calculate(flextime_schedule, [booking("c", 480, "in"), booking("g", 1100, "out")])

    assert ErrorCode.EARLY_GO in early.errors
    assert late.errors == [ErrorCode.LATE_GO]


def test_core_hours_gap_is_a_warning(booking):
    schedule = DaySchedule(core_start=540, core_end=960)
    result = calculate(schedule, [booking("c", 600, "in"), booking("g", 1020, "out")])

    assert result.errors == []
    assert result.warnings == [WarningCode.CORE_HOURS_NOT_COVERED]


def test_max_net_work_time(booking):
    schedule = DaySchedule(max_net_work_time=480)
    result = calculate(schedule, [booking("c", 420, "in"), booking("g", 1080, "out")])

    assert result.gross_minutes == 660
    assert result.net_minutes == 480
    assert WarningCode.MAX_TIME_REACHED in result.warnings
    assert result.capped_minutes == 180


def test_below_min_work_time(booking):
    schedule = DaySchedule(min_work_time=240)
    result = calculate(schedule, [booking("c", 480, "in"), booking("g", 600, "out")])

    assert result.errors == [ErrorCode.BELOW_MIN_WORK_TIME]


def test_cross_midnight_shift(booking):
    result = calculate(DaySchedule(), [booking("c", 1320, "in"), booking("g", 120, "out")])

    assert result.gross_minutes == 240
    assert result.errors == []
    assert WarningCode.CROSS_MIDNIGHT in result.warnings


def test_rounding_past_departure_reads_as_cross_midnight(booking):
    # 08:03 rounds up to 08:15, 08:10 rounds down to 08:00
    schedule = DaySchedule(rounding_come=UP_15, rounding_go=DOWN_15)
    result = calculate(schedule, [booking("c", 483, "in"), booking("g", 490, "out")])

    assert result.calculated_times == {"c": 495, "g": 480}
    assert result.gross_minutes == 1425
    assert result.warnings == [WarningCode.CROSS_MIDNIGHT]
    assert result.errors == []


def test_time_past_midnight_does_not_raise(booking):
    result = calculate(DaySchedule(), [booking("c", 480, "in"), booking("g", 1500, "out")])
    assert result.gross_minutes == 1020


def test_window_capping_is_opt_in(booking):
    bookings = [booking("c", 405, "in"), booking("g", 1050, "out")]

    plain = calculate(DaySchedule(come_from=420, go_to=1020), bookings)
    assert plain.gross_minutes == 645
    assert plain.capped_minutes == 0
    assert plain.calculated_times == {"c": 405, "g": 1050}

    capped = calculate(DaySchedule(come_from=420, go_to=1020, cap_to_evaluation_window=True), bookings)
    assert capped.gross_minutes == 600
    assert capped.capped_minutes == 45
    assert capped.calculated_times == {"c": 420, "g": 1020}
    # window checks see the time before capping
    assert capped.errors == [ErrorCode.EARLY_COME, ErrorCode.LATE_GO]


def test_calculation_is_deterministic(office_day, flextime_schedule):
    assert calculate(flextime_schedule, office_day) == calculate(flextime_schedule, office_day)


def test_input_bookings_untouched(booking):
    bookings = [booking("c", 483, "in"), booking("g", 1017, "out")]
    before = list(bookings)
    calculate(DaySchedule(rounding_come=UP_15, rounding_go=DOWN_15), bookings)
    assert bookings == before


def test_calculate_day(office_day):
    result = calculate_day(DayInput(schedule=DaySchedule(), bookings=office_day, label="emp 7"))
    assert result.net_minutes == 510


def test_calculate_many_days_are_independent(booking, office_day):
    days = [
        DayInput(schedule=DaySchedule(), bookings=[booking("c", 480, "in")], label="mon"),
        DayInput(schedule=DaySchedule(), bookings=office_day, label="tue"),
        DayInput(schedule=DaySchedule(target_minutes=480), bookings=[], label="wed"),
    ]
    results = calculate_many(days)

    assert [r.errors for r in results] == [[ErrorCode.MISSING_GO], [], [ErrorCode.NO_BOOKINGS]]
    assert results[1].net_minutes == 510


def test_summary_is_logged(office_day, caplog):
    with caplog.at_level(logging.INFO, logger="daily_time_calc.calculator"):
        calculate(DaySchedule(), office_day, label="emp 7")

    assert "Day emp 7" in caplog.text
    assert "net=510" in caplog.text


@pytest.mark.parametrize("target,overtime,undertime", [(480, 30, 0), (540, 0, 30), (510, 0, 0)])
def test_overtime_and_undertime(office_day, target, overtime, undertime):
    result = calculate(DaySchedule(target_minutes=target), office_day)
    assert (result.overtime, result.undertime) == (overtime, undertime)
