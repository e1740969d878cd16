"""
Clock type used wherever "now" decides an outcome (hold expiry, booking window).

Use cases take a Clock instead of calling datetime.now() so expiry can be
exercised by moving the clock rather than sleeping.
"""

from datetime import datetime, timezone
from typing import Callable


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back naive; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
