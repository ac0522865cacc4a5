"""
Time helpers.

All instants are stored as epoch milliseconds (UTC). The clock is injected
into services so tests can pin "now".
"""

import time
from datetime import datetime, timezone
from typing import Callable

from app.core.errors import ValidationError

Clock = Callable[[], int]


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def get_clock() -> Clock:
    """FastAPI dependency - the clock used by services."""
    return now_millis


def parse_utc_to_millis(value: str) -> int:
    """
    Parse an ISO-8601 datetime string to epoch millis.

    Strings without an explicit offset are taken as UTC, so
    "2025-03-01T09:00" and "2025-03-01T09:00:00Z" are the same instant.
    """
    if not value or not value.strip():
        raise ValidationError("Date string is required")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date string: {value}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return int(parsed.timestamp() * 1000)
