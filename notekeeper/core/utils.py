"""
Core Utilities.

Shared helpers used across the backend.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    Timestamps are stored without tzinfo and are always UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
