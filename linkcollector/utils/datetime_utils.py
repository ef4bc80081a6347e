from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso_z(value: Optional[datetime]) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision and a `Z` suffix.

    Naive datetimes are assumed to already be UTC. Returns an empty string for None.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        dt = value.replace(tzinfo=timezone.utc)
    else:
        dt = value.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
