"""
Day schedule configuration: time windows, core hours, tolerance, rounding, breaks.
Loaded from JSON for the CLI; built directly by callers that embed the engine.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import time_utils


class RoundingType(str, Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"
    NEAREST = "nearest"
    ADD = "add"
    SUBTRACT = "subtract"


class BreakType(str, Enum):
    FIXED = "fixed"        # deducted by overlap with a fixed clock window
    VARIABLE = "variable"  # deducted only when no break was booked
    MINIMUM = "minimum"    # deducted once worked time passes a threshold


@dataclass(frozen=True)
class ToleranceConfig:
    """Grace minutes, relative to the expected come/go time."""
    come_plus: int = 0   # late arrival
    come_minus: int = 0  # early arrival
    go_plus: int = 0     # late departure
    go_minus: int = 0    # early departure

    def __post_init__(self):
        for name in ("come_plus", "come_minus", "go_plus", "go_minus"):
            if getattr(self, name) < 0:
                raise ValueError(f"Tolerance {name} must be >= 0")


@dataclass(frozen=True)
class RoundingConfig:
    type: RoundingType = RoundingType.NONE
    interval: int = 0
    add_value: int = 0
    anchor: Optional[int] = None  # lay the interval grid relative to this minute of day


@dataclass(frozen=True)
class BreakConfig:
    type: BreakType
    duration: int
    start: Optional[int] = None
    end: Optional[int] = None
    after_work_minutes: Optional[int] = None
    auto_deduct: bool = False
    is_paid: bool = False  # paid breaks stay in net time and are skipped by deduction
    minutes_difference: bool = False  # minimum break: deduct only the minutes past the threshold


@dataclass
class DaySchedule:
    """
    One employee-day's plan. Every bound is optional: None means no constraint,
    never zero.
    """
    come_from: Optional[int] = None
    come_to: Optional[int] = None
    go_from: Optional[int] = None
    go_to: Optional[int] = None
    core_start: Optional[int] = None
    core_end: Optional[int] = None
    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    rounding_come: Optional[RoundingConfig] = None
    rounding_go: Optional[RoundingConfig] = None
    round_all_bookings: bool = True
    breaks: List[BreakConfig] = field(default_factory=list)
    target_minutes: int = 0
    min_work_time: Optional[int] = None
    max_net_work_time: Optional[int] = None
    variable_work_time: bool = False
    cap_to_evaluation_window: bool = False

    @property
    def come_target(self) -> Optional[int]:
        """Expected arrival used for come tolerance."""
        return self.come_from

    @property
    def go_target(self) -> Optional[int]:
        """Expected departure used for go tolerance: go_to, falling back to go_from."""
        return self.go_to if self.go_to is not None else self.go_from


_TIME_FIELDS = ("come_from", "come_to", "go_from", "go_to", "core_start", "core_end")
_MINUTE_FIELDS = ("target_minutes", "min_work_time", "max_net_work_time")
_FLAG_FIELDS = ("round_all_bookings", "variable_work_time", "cap_to_evaluation_window")


def _flag(data: Dict[str, Any], key: str, label: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"{label}: expected true/false, got {value!r}")
    return value


def _int(data: Dict[str, Any], key: str, label: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{label}: expected whole minutes, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label}: expected whole minutes, got {value!r}")


def _minutes(data: Dict[str, Any], key: str, label: str) -> Optional[int]:
    try:
        return time_utils.parse_minutes(data.get(key))
    except ValueError as e:
        raise ValueError(f"{label}: {e}")


def _rounding_from_dict(data: Optional[Dict[str, Any]], label: str) -> Optional[RoundingConfig]:
    if not data:
        return None
    try:
        rtype = RoundingType(str(data.get("type", "none")).lower())
    except ValueError:
        raise ValueError(f"{label}: unknown rounding type {data.get('type')!r}")
    return RoundingConfig(
        type=rtype,
        interval=_int(data, "interval", f"{label}.interval"),
        add_value=_int(data, "add_value", f"{label}.add_value"),
        anchor=_minutes(data, "anchor", f"{label}.anchor"),
    )


def _break_from_dict(data: Dict[str, Any], index: int) -> BreakConfig:
    label = f"breaks[{index}]"
    try:
        btype = BreakType(str(data.get("type", "")).lower())
    except ValueError:
        raise ValueError(f"{label}: unknown break type {data.get('type')!r}")
    if "duration" not in data:
        raise ValueError(f"{label}: duration is required")
    return BreakConfig(
        type=btype,
        duration=_int(data, "duration", f"{label}.duration"),
        start=_minutes(data, "start", f"{label}.start"),
        end=_minutes(data, "end", f"{label}.end"),
        after_work_minutes=_minutes(data, "after_work_minutes", f"{label}.after_work_minutes"),
        auto_deduct=_flag(data, "auto_deduct", f"{label}.auto_deduct"),
        is_paid=_flag(data, "is_paid", f"{label}.is_paid"),
        minutes_difference=_flag(data, "minutes_difference", f"{label}.minutes_difference"),
    )


def schedule_from_dict(data: Dict[str, Any]) -> DaySchedule:
    """
    Build a DaySchedule from a plain mapping. Times as HH:MM text or minutes,
    flags as real booleans. Raises ValueError naming the offending field.
    """
    kwargs: Dict[str, Any] = {}
    for name in _TIME_FIELDS:
        kwargs[name] = _minutes(data, name, name)
    for name in _MINUTE_FIELDS:
        value = _minutes(data, name, name)
        if value is not None:
            kwargs[name] = value
    if kwargs.get("target_minutes") is None:
        kwargs["target_minutes"] = 0
    for name in _FLAG_FIELDS:
        if name in data:
            kwargs[name] = _flag(data, name, name)

    tol = data.get("tolerance") or {}
    kwargs["tolerance"] = ToleranceConfig(
        come_plus=_int(tol, "come_plus", "tolerance.come_plus"),
        come_minus=_int(tol, "come_minus", "tolerance.come_minus"),
        go_plus=_int(tol, "go_plus", "tolerance.go_plus"),
        go_minus=_int(tol, "go_minus", "tolerance.go_minus"),
    )
    kwargs["rounding_come"] = _rounding_from_dict(data.get("rounding_come"), "rounding_come")
    kwargs["rounding_go"] = _rounding_from_dict(data.get("rounding_go"), "rounding_go")
    kwargs["breaks"] = [_break_from_dict(b, i) for i, b in enumerate(data.get("breaks") or [])]
    return DaySchedule(**kwargs)


def load_schedule(path: Path) -> DaySchedule:
    """Load a DaySchedule from a JSON file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Schedule {path.name} is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Schedule {path.name} must be a JSON object")
    return schedule_from_dict(data)
