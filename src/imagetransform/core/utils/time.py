"""
Time-related utilities.

Record timestamps are generated in UTC and serialized as ISO-8601 strings
with timezone information, so that the `created_at` range keys on the owner
and parent indexes sort chronologically as plain strings.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()
