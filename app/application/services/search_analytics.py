"""Search analytics: best-effort query logging and popular-term aggregation.

Writes run as background tasks, each in its own store scope with a bounded
timeout, so recording never blocks or fails a search. Reads take a
point-in-time snapshot of recent history and aggregate in memory.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.application.dtos.search_query import SearchQueryCreate
from app.application.services.relevance_scorer import normalize_query
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.application.dtos.search_query import SearchQueryRecord
    from app.application.interfaces.repositories import ISearchQueryStore

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 2

StoreScope = Callable[[], AbstractAsyncContextManager["ISearchQueryStore"]]


@dataclass(frozen=True)
class TermFrequency:
    """Aggregated usage of one normalized query."""

    term: str
    count: int
    last_used: datetime


def aggregate_terms(rows: list[SearchQueryRecord]) -> list[TermFrequency]:
    """Group rows by normalized query; most frequent first, then most recently used.

    Terms shorter than MIN_TERM_LENGTH are ignored. Equal frequency and
    recency fall back to alphabetical order so the ranking is deterministic.
    """
    counts: dict[str, int] = {}
    last_used: dict[str, datetime] = {}
    for row in rows:
        term = normalize_query(row.query)
        if len(term) < MIN_TERM_LENGTH:
            continue
        searched_at = ensure_utc(row.searched_at)
        counts[term] = counts.get(term, 0) + 1
        if term not in last_used or searched_at > last_used[term]:
            last_used[term] = searched_at
    by_term = sorted(counts)
    by_recency = sorted(by_term, key=lambda t: last_used[t], reverse=True)
    ranked = sorted(by_recency, key=lambda t: counts[t], reverse=True)
    return [TermFrequency(term=t, count=counts[t], last_used=last_used[t]) for t in ranked]


class SearchAnalyticsRecorder:
    """Process-wide analytics handle shared by every search request.

    store_scope opens a short-lived store (its own session and transaction)
    for each write or read.
    """

    def __init__(
        self,
        store_scope: StoreScope,
        *,
        write_timeout: float = 2.0,
        lookback_days: int = 30,
        history_limit: int = 5000,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store_scope = store_scope
        self.write_timeout = write_timeout
        self.lookback_days = lookback_days
        self.history_limit = history_limit
        self._clock = clock
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def record(
        self,
        query: str,
        search_type: str,
        result_count: int,
        duration: timedelta,
        user_id: str | None = None,
    ) -> None:
        """Schedule one append. Returns immediately and never raises."""
        if not query or not query.strip():
            return
        entry = SearchQueryCreate(
            query=query.strip(),
            search_type=search_type,
            result_count=result_count,
            search_duration=duration,
            searched_at=self._clock(),
            user_id=user_id,
        )
        try:
            task = asyncio.get_running_loop().create_task(self._append(entry))
        except RuntimeError:
            logger.warning("No running event loop; search analytics entry dropped")
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _append(self, entry: SearchQueryCreate) -> None:
        try:
            async with asyncio.timeout(self.write_timeout):
                async with self._store_scope() as store:
                    await store.append(entry)
        except TimeoutError:
            logger.warning(
                "Search analytics write timed out after %.1fs (type=%s)",
                self.write_timeout,
                entry.search_type,
            )
        except Exception as e:
            logger.warning(
                "Search analytics write failed (type=%s): %s",
                entry.search_type,
                e,
                exc_info=True,
            )

    async def aclose(self, grace: float = 5.0) -> None:
        """Wait up to grace seconds for pending writes, then cancel the rest."""
        if not self._pending:
            return
        _, still_pending = await asyncio.wait(set(self._pending), timeout=grace)
        for task in still_pending:
            task.cancel()
        if still_pending:
            logger.warning(
                "Cancelled %d pending search analytics writes on shutdown",
                len(still_pending),
            )

    async def _recent_history(self) -> list[SearchQueryRecord]:
        since = self._clock() - timedelta(days=self.lookback_days)
        async with self._store_scope() as store:
            return await store.list_since(since, self.history_limit)

    async def get_popular_search_terms(self, count: int = 10) -> list[str]:
        if count <= 0:
            return []
        ranked = aggregate_terms(await self._recent_history())
        return [tf.term for tf in ranked[:count]]

    async def get_query_frequencies(
        self, containing: str, limit: int
    ) -> list[tuple[str, int]]:
        """Historical (term, frequency) pairs whose normalized text contains the fragment."""
        fragment = normalize_query(containing)
        if not fragment or limit <= 0:
            return []
        ranked = aggregate_terms(await self._recent_history())
        matches = [(tf.term, tf.count) for tf in ranked if fragment in tf.term]
        return matches[:limit]
