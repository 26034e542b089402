"""DTOs for search analytics records (append-only; no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class SearchQueryCreate:
    """Input for appending one executed search to the analytics store."""

    query: str
    search_type: str
    result_count: int
    search_duration: timedelta
    searched_at: datetime
    user_id: str | None = None


@dataclass(frozen=True)
class SearchQueryRecord:
    """Stored analytics row (result of append and list_since)."""

    id: str
    query: str
    search_type: str
    result_count: int
    search_duration: timedelta
    searched_at: datetime
    user_id: str | None = None
