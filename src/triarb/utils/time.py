"""
Timestamp utilities.

Currencies and rates carry aware UTC datetimes; the store serializes them
as ISO-8601 strings.
"""

import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def get_timestamp_ms() -> int:
    """
    Get current timestamp in milliseconds.

    Used when generating currency identifiers.

    Returns:
        Current Unix timestamp in milliseconds.
    """
    return time.time_ns() // 1_000_000
