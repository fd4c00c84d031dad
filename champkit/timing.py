"""Time source and linear range mapping."""

from __future__ import annotations

import time

SECONDS_TO_MICROS = 1_000_000


def map_float(x: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map x linearly from [in_min, in_max] onto [out_min, out_max]."""
    return (x - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def time_us() -> int:
    """Return the current wall-clock time in microseconds."""
    return time.time_ns() // 1000