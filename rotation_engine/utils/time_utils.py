"""
Utility functions for time handling in the Sideline Rotation Engine.

All engine timestamps are epoch milliseconds supplied by the host clock.
"""
import math
import time
from typing import Optional

from .constants import MS_PER_SECOND


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_ms() -> int:
    """
    Get current timestamp in epoch milliseconds.

    Returns:
        Current wall-clock time as integer epoch milliseconds
    """
    return int(time.time() * MS_PER_SECOND)


def elapsed_seconds(start_ms: Optional[float], end_ms: Optional[float]) -> int:
    """
    Whole seconds between two epoch-millisecond timestamps.

    An unset or non-positive start, an unset end, or an end before the start
    all yield 0 so callers never accrue negative or NaN time.

    Args:
        start_ms: Stint start in epoch milliseconds
        end_ms: Current time in epoch milliseconds

    Returns:
        Floored number of elapsed seconds, never negative
    """
    if not start_ms or start_ms <= 0 or end_ms is None:
        return 0
    if isinstance(start_ms, float) and math.isnan(start_ms):
        return 0
    if isinstance(end_ms, float) and math.isnan(end_ms):
        return 0
    if end_ms <= start_ms:
        return 0
    return int((end_ms - start_ms) // MS_PER_SECOND)
