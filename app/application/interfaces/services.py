"""Service interfaces (ports) for the application layer.

Protocols for services implemented in application or infrastructure (DIP).
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class ISearchAnalytics(Protocol):
    """Records executed searches and aggregates them into popular terms."""

    def record(
        self,
        query: str,
        search_type: str,
        result_count: int,
        duration: timedelta,
        user_id: str | None = None,
    ) -> None:
        """Record one search without blocking or raising."""

    async def get_popular_search_terms(self, count: int = 10) -> list[str]:
        """Return up to count normalized terms, most frequent first."""

    async def get_query_frequencies(
        self, containing: str, limit: int
    ) -> list[tuple[str, int]]:
        """Return (normalized query, frequency) pairs whose text contains the fragment."""
