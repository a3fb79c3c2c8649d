"""
Tolerance (grace period) normalization. An actual time close enough to the
expected come/go time is snapped onto it; boundaries count as within tolerance.
"""
from typing import Optional

from .schedule import ToleranceConfig


def _snap(actual: int, expected: Optional[int], late_grace: int, early_grace: int) -> int:
    if expected is None:
        return actual
    if actual > expected and actual - expected <= late_grace:
        return expected
    if actual < expected and expected - actual <= early_grace:
        return expected
    return actual


def apply_come_tolerance(actual: int, expected: Optional[int], config: ToleranceConfig) -> int:
    """Arrival: come_plus forgives lateness, come_minus forgives earliness."""
    return _snap(actual, expected, config.come_plus, config.come_minus)


def apply_go_tolerance(actual: int, expected: Optional[int], config: ToleranceConfig) -> int:
    """Departure: go_minus forgives leaving early, go_plus forgives leaving late."""
    return _snap(actual, expected, config.go_plus, config.go_minus)
