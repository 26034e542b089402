"""UTC datetime helpers.

Search dates (created_at, start_date_time, searched_at) are compared and
sorted as timezone-aware UTC. Postgres returns aware values, but query
parameters and test fixtures may be naive, so normalize at the edges.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as aware UTC: naive values are taken to be UTC, aware ones converted.

    None passes through unchanged.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
