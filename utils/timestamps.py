"""
Timestamp Utility

Helpers for the timestamps stored on user records. Timestamps are kept as
naive UTC datetimes in the database and rendered in the same ISO-8601 form
browsers produce (e.g., "2025-03-16T14:05:09.123Z").
"""

import time
from datetime import datetime, timezone
from dateutil import parser


def utc_now():
    """
    Get the current time in UTC as a naive datetime.

    Returns:
        datetime: Current UTC time without tzinfo
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_user_id():
    """
    Generate a timestamp-derived user identifier (milliseconds since epoch).

    Returns:
        str: Identifier such as "1742133909123"
    """
    return str(time.time_ns() // 1_000_000)


def to_iso(value):
    """
    Convert a naive UTC datetime to ISO-8601 with millisecond precision.

    Args:
        value (datetime or None): Timestamp to format

    Returns:
        str or None: Timestamp such as "2025-03-16T14:05:09.123Z"
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{value.microsecond // 1000:03d}Z"


def from_iso(value):
    """
    Parse an ISO-8601 timestamp into a naive UTC datetime.

    Args:
        value (str or None): Timestamp such as "2025-03-16T14:05:09.123Z"

    Returns:
        datetime or None: Parsed timestamp

    Raises:
        ValueError: If value is not a valid ISO-8601 timestamp
    """
    if value is None:
        return None
    try:
        parsed = parser.isoparse(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid timestamp '{value}'. Expected ISO-8601") from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
