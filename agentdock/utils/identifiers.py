"""ID generation and timestamp utilities."""

import time
import uuid
from datetime import datetime, timezone


def generate_log_id() -> str:
    """Generate a query log ID.

    Millisecond wall-clock time first so IDs sort by creation time,
    plus a short random suffix so concurrent requests never collide.
    """
    millis = time.time_ns() // 1_000_000
    return f"{millis}-{uuid.uuid4().hex[:8]}"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return utc_now().isoformat()


def utc_day(timestamp: str | None = None) -> str:
    """Calendar day (YYYY-MM-DD, UTC) of an ISO timestamp, or of now."""
    if timestamp is None:
        return utc_now().date().isoformat()
    return datetime.fromisoformat(timestamp).astimezone(timezone.utc).date().isoformat()
