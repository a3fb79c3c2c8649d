"""
Rounding of come/go times to interval boundaries, or by a fixed add/subtract value.
Runs after tolerance normalization.
"""
from typing import Optional

from .schedule import RoundingConfig, RoundingType


def _round_to_interval(t: int, interval: int, rtype: RoundingType, anchor: int) -> int:
    offset = t - anchor
    remainder = offset % interval
    if remainder == 0:
        return t
    down = t - remainder
    if rtype == RoundingType.DOWN:
        return down
    if rtype == RoundingType.UP:
        return down + interval
    # NEAREST: halves round up
    if remainder * 2 >= interval:
        return down + interval
    return down


def round_time(t: int, config: Optional[RoundingConfig]) -> int:
    """Round t by config. No config, type none, or a non-positive interval leaves t unchanged."""
    if config is None or config.type == RoundingType.NONE:
        return t
    if config.type == RoundingType.ADD:
        return t + config.add_value
    if config.type == RoundingType.SUBTRACT:
        return max(0, t - config.add_value)
    if config.interval <= 0:
        return t
    anchor = config.anchor if config.anchor is not None else 0
    return _round_to_interval(t, config.interval, config.type, anchor)


def round_come_time(t: int, config: Optional[RoundingConfig]) -> int:
    return round_time(t, config)


def round_go_time(t: int, config: Optional[RoundingConfig]) -> int:
    return round_time(t, config)
