"""
Time and identifier helpers for the Futsal Roster application.
"""
import time
from datetime import datetime, timezone

_last_id = 0


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def new_id() -> int:
    """
    Generate a record identifier from the current time in milliseconds.

    Two calls within the same millisecond still get distinct values, the
    second one is bumped past the first.

    Returns:
        Monotonically increasing integer identifier
    """
    global _last_id
    candidate = int(now_ts() * 1000)
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return candidate
