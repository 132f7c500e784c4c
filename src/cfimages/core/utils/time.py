"""
Time-related utilities.

The remote API serializes upload timestamps as ISO-8601 strings, usually
with a trailing ``Z`` and millisecond precision.
"""

from datetime import datetime, timezone


def parse_iso8601(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Example:
        "2025-01-01T00:00:00.000Z" -> datetime(2025, 1, 1, tzinfo=timezone.utc)

    Returns None when the value cannot be parsed.
    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)
