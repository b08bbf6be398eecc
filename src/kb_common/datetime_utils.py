"""Wall-clock and monotonic time helpers."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def monotonic_ms() -> int:
    """Monotonic milliseconds, unaffected by wall-clock adjustments."""
    return time.monotonic_ns() // 1_000_000


def format_clock(minutes: int, seconds: int) -> str:
    """Zero-padded countdown display: (0, 7) -> '00:07'."""
    return f"{minutes:02d}:{seconds:02d}"
