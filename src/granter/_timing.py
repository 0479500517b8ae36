"""Monotonic clock used for explain durations."""

from __future__ import annotations

import time

__all__ = ["elapsed_ms", "now"]


def now() -> float:
    """Current monotonic time in milliseconds."""
    return time.perf_counter() * 1000.0


def elapsed_ms(start: float, precision: int) -> float:
    return round(now() - start, precision)
