"""Cross-entity search use case: global search, typed search, suggestions, popular terms.

Per-type fetches fan out concurrently through ISearchGateway ports; results
are normalized, scored, merged, sorted and paginated here. Expected failures
(partial outage, timeout, cancellation) come back as Result values.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections import Counter
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from app.application.dtos.result import Result
from app.application.dtos.search import (
    CommentSearchResult,
    MatchCriteria,
    MeetingSearchResult,
    PostSearchResult,
    SearchFilters,
    SearchResult,
    SearchResultsPage,
    SearchSuggestion,
    UserSearchResult,
)
from app.application.services.relevance_scorer import RelevanceScorer, split_terms
from app.application.services.result_normalizer import (
    comment_to_result,
    meeting_to_result,
    post_to_result,
    to_candidate,
    user_to_result,
)
from app.application.services.suggestion_engine import SuggestionEngine
from app.domain.enums import GLOBAL_SEARCH_TYPE, SearchType, SortBy, SortDirection
from app.domain.exceptions import (
    SearchCancelledException,
    SearchFailedException,
    SearchTimeoutException,
)
from app.shared.telemetry.tracing import TracedOperation, add_span_attributes, traced
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.application.dtos.comment import CommentRecord
    from app.application.dtos.meeting import MeetingRecord
    from app.application.dtos.post import PostRecord
    from app.application.dtos.user import UserRecord
    from app.application.interfaces.repositories import ISearchGateway
    from app.application.interfaces.services import ISearchAnalytics

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (gateway record, scored result) pairs; typed search maps the record, global keeps the result.
Scored = list[tuple[Any, SearchResult]]


def sort_results(
    results: Iterable[SearchResult],
    sort_by: SortBy,
    direction: SortDirection,
    date_of: Callable[[SearchResult], datetime] | None = None,
) -> list[SearchResult]:
    """Stable sort; equal keys keep their incoming (per-type fetch) order.

    Date sorts use date_of (created date by default). Relevance ties break
    by created date, newest first.
    """
    reverse = direction is SortDirection.DESC
    if sort_by is SortBy.DATE:
        key_date = date_of or (lambda r: r.created_date)
        return sorted(results, key=lambda r: ensure_utc(key_date(r)), reverse=reverse)
    if sort_by is SortBy.TITLE:
        return sorted(results, key=lambda r: r.title.casefold(), reverse=reverse)
    newest_first = sorted(results, key=lambda r: ensure_utc(r.created_date), reverse=True)
    return sorted(newest_first, key=lambda r: r.relevance_score, reverse=reverse)


def _meeting_start(result: SearchResult) -> datetime:
    return result.metadata["start_date_time"]


# Typed searches sort these types by their own date rather than created date.
_TYPED_DATE_KEYS: dict[SearchType, Callable[[SearchResult], datetime]] = {
    SearchType.MEETING: _meeting_start,
}


def _check_paging(page: int, page_size: int) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")


def _elapsed(started: float) -> timedelta:
    return timedelta(seconds=time.perf_counter() - started)


class SearchService:
    """Search across meetings, posts, comments and users.

    Gateways must tolerate concurrent calls (each opens its own session).
    The analytics handle is process-wide and outlives any single request.
    """

    def __init__(
        self,
        meeting_gateway: ISearchGateway[MeetingRecord],
        post_gateway: ISearchGateway[PostRecord],
        comment_gateway: ISearchGateway[CommentRecord],
        user_gateway: ISearchGateway[UserRecord],
        analytics: ISearchAnalytics,
        *,
        scorer: RelevanceScorer | None = None,
        timeout_seconds: float = 10.0,
        max_candidates_per_type: int = 1000,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.gateways: dict[SearchType, ISearchGateway[Any]] = {
            SearchType.MEETING: meeting_gateway,
            SearchType.POST: post_gateway,
            SearchType.COMMENT: comment_gateway,
            SearchType.USER: user_gateway,
        }
        self.analytics = analytics
        self.scorer = scorer or RelevanceScorer()
        self.timeout_seconds = timeout_seconds
        self.max_candidates_per_type = max_candidates_per_type
        self._clock = clock
        self.suggestions = SuggestionEngine(
            meeting_gateway, post_gateway, user_gateway, analytics
        )

    # ---- pipeline ----

    def _criteria(self, query: str, filters: SearchFilters) -> MatchCriteria:
        phrase = " ".join(query.split())
        return MatchCriteria(
            phrase=phrase,
            terms=split_terms(phrase),
            active_only=filters.active_only,
            from_date=filters.from_date,
            to_date=filters.to_date,
            authors=filters.authors,
            limit=self.max_candidates_per_type,
        )

    async def _fetch_scored(
        self,
        search_type: SearchType,
        query: str,
        criteria: MatchCriteria,
        now: datetime,
    ) -> Scored:
        """Fetch one type, normalize, score, and drop non-matching candidates."""
        async with TracedOperation(
            "search.fetch", {"search.type": search_type.value}
        ) as op:
            records = await self.gateways[search_type].find_matching(criteria)
            scored: Scored = []
            for record in records:
                candidate = to_candidate(search_type, record)
                score = self.scorer.score(query, candidate, now)
                if score is not None:
                    scored.append((record, SearchResult.from_candidate(candidate, score)))
            if op.span is not None:
                op.span.set_attribute("search.fetched", len(records))
                op.span.set_attribute("search.matched", len(scored))
            return scored

    async def _fan_out(
        self,
        fetches: dict[SearchType, Awaitable[Scored]],
        cancel_event: asyncio.Event | None,
    ) -> dict[SearchType, Scored | BaseException]:
        """Run fetches concurrently under the timeout and optional cancel signal.

        Raises SearchTimeoutException or SearchCancelledException after
        cancelling outstanding fetches. Failures of individual fetches are
        returned as exception values.
        """
        gathered = asyncio.gather(*fetches.values(), return_exceptions=True)
        waiters: set[asyncio.Future[Any]] = {gathered}
        cancel_waiter: asyncio.Future[Any] | None = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)
        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=self.timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if gathered not in done:
                gathered.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await gathered
                if cancel_waiter is not None and cancel_waiter in done:
                    raise SearchCancelledException()
                raise SearchTimeoutException(self.timeout_seconds)
        except asyncio.CancelledError:
            gathered.cancel()
            raise
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
        return dict(zip(fetches, gathered.result(), strict=True))

    def _record_search(
        self,
        query: str,
        search_type: str,
        result_count: int,
        duration: timedelta,
        user_id: str | None,
    ) -> None:
        try:
            self.analytics.record(query, search_type, result_count, duration, user_id)
        except Exception as e:
            logger.warning("Search analytics record failed: %s", e, exc_info=True)

    # ---- global search ----

    @traced("search.global")
    async def global_search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        page: int = 1,
        page_size: int = 20,
        *,
        user_id: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Result[SearchResultsPage]:
        """Search every requested type, merge, sort, and return one page.

        type_counts and total_count are computed before pagination. A failing
        type is logged and listed in failed_types; if every type fails the
        result is a SEARCH_FAILED failure.
        """
        _check_paging(page, page_size)
        filters = filters or SearchFilters()
        started = time.perf_counter()

        if not query or not query.strip():
            return Result.success(
                SearchResultsPage(
                    results=(),
                    total_count=0,
                    page=page,
                    page_size=page_size,
                    query=query,
                    search_duration=_elapsed(started),
                )
            )

        types = filters.active_types()
        criteria = self._criteria(query, filters)
        now = self._clock()
        try:
            outcomes = await self._fan_out(
                {t: self._fetch_scored(t, query, criteria, now) for t in types},
                cancel_event,
            )
        except (SearchTimeoutException, SearchCancelledException) as e:
            logger.warning("Global search aborted: %s", e.message)
            return Result.failure(e.message, e.error_code)

        merged: list[SearchResult] = []
        failed: list[str] = []
        for search_type, outcome in outcomes.items():
            if isinstance(outcome, BaseException):
                logger.error(
                    "%s search failed: %s", search_type.value, outcome, exc_info=outcome
                )
                failed.append(search_type.value)
                continue
            merged.extend(result for _, result in outcome)

        if len(failed) == len(types):
            return Result.failure(
                f"Search failed for all requested types: {', '.join(failed)}",
                "SEARCH_FAILED",
            )

        ordered = sort_results(merged, filters.sort_by, filters.sort_direction)
        type_counts = dict(Counter(r.type.value for r in ordered))
        total = len(ordered)
        skip = (page - 1) * page_size
        duration = _elapsed(started)

        self._record_search(query, GLOBAL_SEARCH_TYPE, total, duration, user_id)
        add_span_attributes(
            **{"search.total_count": total, "search.failed_types": len(failed)}
        )
        logger.debug(
            "Global search matched %d results in %.1fms (counts=%s, failed=%s)",
            total,
            duration.total_seconds() * 1000,
            type_counts,
            failed,
        )
        return Result.success(
            SearchResultsPage(
                results=tuple(ordered[skip : skip + page_size]),
                total_count=total,
                page=page,
                page_size=page_size,
                query=query,
                search_duration=duration,
                type_counts=type_counts,
                failed_types=tuple(failed),
            )
        )

    # ---- typed search ----

    async def _typed_search(
        self,
        search_type: SearchType,
        to_result: Callable[[Any, float], T],
        query: str,
        filters: SearchFilters | None,
        page: int,
        page_size: int,
        user_id: str | None,
        cancel_event: asyncio.Event | None,
    ) -> Result[list[T]]:
        _check_paging(page, page_size)
        filters = filters or SearchFilters()
        started = time.perf_counter()
        if not query or not query.strip():
            return Result.success([])

        criteria = self._criteria(query, filters)
        try:
            outcomes = await self._fan_out(
                {search_type: self._fetch_scored(search_type, query, criteria, self._clock())},
                cancel_event,
            )
        except (SearchTimeoutException, SearchCancelledException) as e:
            logger.warning("%s search aborted: %s", search_type.value, e.message)
            return Result.failure(e.message, e.error_code)

        outcome = outcomes[search_type]
        if isinstance(outcome, BaseException):
            logger.error(
                "%s search failed: %s", search_type.value, outcome, exc_info=outcome
            )
            return Result.failure(
                f"{search_type.value} search failed: {outcome}", "SEARCH_FAILED"
            )

        records = {id(result): record for record, result in outcome}
        ordered = sort_results(
            (result for _, result in outcome),
            filters.sort_by,
            filters.sort_direction,
            _TYPED_DATE_KEYS.get(search_type),
        )
        skip = (page - 1) * page_size
        self._record_search(
            query, search_type.value, len(ordered), _elapsed(started), user_id
        )
        return Result.success(
            [
                to_result(records[id(result)], result.relevance_score)
                for result in ordered[skip : skip + page_size]
            ]
        )

    @traced("search.meetings")
    async def search_meetings(
        self,
        query: str,
        filters: SearchFilters | None = None,
        page: int = 1,
        page_size: int = 20,
        *,
        user_id: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Result[list[MeetingSearchResult]]:
        return await self._typed_search(
            SearchType.MEETING, meeting_to_result, query, filters, page, page_size,
            user_id, cancel_event,
        )

    @traced("search.posts")
    async def search_posts(
        self,
        query: str,
        filters: SearchFilters | None = None,
        page: int = 1,
        page_size: int = 20,
        *,
        user_id: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Result[list[PostSearchResult]]:
        return await self._typed_search(
            SearchType.POST, post_to_result, query, filters, page, page_size,
            user_id, cancel_event,
        )

    @traced("search.comments")
    async def search_comments(
        self,
        query: str,
        filters: SearchFilters | None = None,
        page: int = 1,
        page_size: int = 20,
        *,
        user_id: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Result[list[CommentSearchResult]]:
        return await self._typed_search(
            SearchType.COMMENT, comment_to_result, query, filters, page, page_size,
            user_id, cancel_event,
        )

    @traced("search.users")
    async def search_users(
        self,
        query: str,
        filters: SearchFilters | None = None,
        page: int = 1,
        page_size: int = 20,
        *,
        user_id: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Result[list[UserSearchResult]]:
        return await self._typed_search(
            SearchType.USER, user_to_result, query, filters, page, page_size,
            user_id, cancel_event,
        )

    # ---- suggestions and popular terms ----

    @traced("search.suggestions")
    async def get_search_suggestions(
        self, query: str, max_suggestions: int = 10
    ) -> Result[list[SearchSuggestion]]:
        try:
            return Result.success(
                await self.suggestions.get_suggestions(query, max_suggestions)
            )
        except SearchFailedException as e:
            logger.error("Search suggestions failed: %s", e.message)
            return Result.failure(e.message, e.error_code)

    async def get_popular_search_terms(self, count: int = 10) -> Result[list[str]]:
        if count <= 0:
            return Result.success([])
        try:
            return Result.success(await self.analytics.get_popular_search_terms(count))
        except Exception as e:
            logger.error("Popular search terms lookup failed: %s", e, exc_info=True)
            return Result.failure(
                f"Popular search terms are unavailable: {e}", "SEARCH_FAILED"
            )
