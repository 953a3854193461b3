"""
Timezone-aware datetime utilities.

Stored rows carry naive UTC timestamps (SQLite) or offset-aware strings
(Supabase); these helpers normalize both to aware UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc


def now_utc() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(UTC)


def naive_utc_now() -> datetime:
    """Current UTC time without tzinfo, for naive DateTime columns."""
    return now_utc().replace(tzinfo=None)


def parse_iso_to_utc(iso_string: str) -> datetime:
    """
    Parse a stored created_at string ("...Z", "+HH:MM" offset or naive) to aware UTC.

    Raises:
        ValueError: If the string cannot be parsed
    """
    normalized = iso_string.strip().replace("Z", "+00:00")

    dt = datetime.fromisoformat(normalized)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Naive values are assumed to already be UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
