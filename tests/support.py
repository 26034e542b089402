"""Test doubles and record builders shared by unit and API tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

from app.application.dtos.comment import CommentRecord
from app.application.dtos.meeting import MeetingRecord
from app.application.dtos.post import PostRecord
from app.application.dtos.search import MatchCriteria
from app.application.dtos.search_query import SearchQueryCreate, SearchQueryRecord
from app.application.dtos.user import UserRecord

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)

_counter = 0


def _next_id(prefix: str) -> str:
    global _counter
    _counter += 1
    return f"{prefix}{_counter}"


def make_meeting(
    title: str,
    description: str = "",
    *,
    location: str = "Room 1",
    created_at: datetime = NOW - timedelta(days=10),
    is_active: bool = True,
    organizer_name: str = "Alice Nakato",
    attendee_count: int = 0,
    start_date_time: datetime | None = None,
    id: str | None = None,
) -> MeetingRecord:
    start = start_date_time or created_at + timedelta(days=7)
    return MeetingRecord(
        id=id or _next_id("m"),
        title=title,
        description=description,
        location=location,
        start_date_time=start,
        end_date_time=start + timedelta(hours=1),
        organizer_id="u-alice",
        organizer_name=organizer_name,
        attendee_count=attendee_count,
        is_active=is_active,
        created_at=created_at,
    )


def make_post(
    title: str,
    content: str = "",
    *,
    created_at: datetime = NOW - timedelta(days=10),
    is_active: bool = True,
    author_name: str = "Brian Okello",
    comment_count: int = 0,
    id: str | None = None,
) -> PostRecord:
    return PostRecord(
        id=id or _next_id("p"),
        title=title,
        content=content,
        author_id="u-brian",
        author_name=author_name,
        meeting_id="m-any",
        meeting_title="Any Meeting",
        comment_count=comment_count,
        is_active=is_active,
        created_at=created_at,
    )


def make_comment(
    content: str,
    *,
    created_at: datetime = NOW - timedelta(days=10),
    is_active: bool = True,
    parent_comment_id: str | None = None,
    id: str | None = None,
) -> CommentRecord:
    return CommentRecord(
        id=id or _next_id("c"),
        content=content,
        author_id="u-carol",
        author_name="Carol Team",
        post_id="p-any",
        post_title="Any Post",
        parent_comment_id=parent_comment_id,
        is_active=is_active,
        created_at=created_at,
    )


def make_user(
    first_name: str,
    last_name: str,
    email: str | None = None,
    *,
    created_at: datetime = NOW - timedelta(days=10),
    is_active: bool = True,
    id: str | None = None,
) -> UserRecord:
    return UserRecord(
        id=id or _next_id("u"),
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name.lower()}@example.com",
        is_active=is_active,
        created_at=created_at,
    )


class FakeGateway:
    """In-memory ISearchGateway. Applies active_only and limit like the SQL repositories.

    Text matching is left to the scorer, which drops non-matching candidates.
    """

    def __init__(
        self,
        records: list[Any] | None = None,
        *,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.records = list(records or [])
        self.error = error
        self.delay = delay
        self.calls: list[MatchCriteria] = []
        self.cancelled = False

    async def find_matching(self, criteria: MatchCriteria) -> list[Any]:
        self.calls.append(criteria)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        rows = [r for r in self.records if r.is_active or not criteria.active_only]
        return rows[: criteria.limit]


class FakeAnalytics:
    """In-memory ISearchAnalytics that records calls synchronously."""

    def __init__(
        self,
        *,
        popular: list[str] | None = None,
        frequencies: list[tuple[str, int]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.recorded: list[dict[str, Any]] = []
        self.popular = popular or []
        self.frequencies = frequencies or []
        self.error = error

    def record(
        self,
        query: str,
        search_type: str,
        result_count: int,
        duration: timedelta,
        user_id: str | None = None,
    ) -> None:
        self.recorded.append(
            {
                "query": query,
                "search_type": search_type,
                "result_count": result_count,
                "duration": duration,
                "user_id": user_id,
            }
        )

    async def get_popular_search_terms(self, count: int = 10) -> list[str]:
        if self.error is not None:
            raise self.error
        return self.popular[:count]

    async def get_query_frequencies(
        self, containing: str, limit: int
    ) -> list[tuple[str, int]]:
        if self.error is not None:
            raise self.error
        return [(t, c) for t, c in self.frequencies if containing.lower() in t][:limit]


class InMemorySearchQueryStore:
    """ISearchQueryStore backed by a list; store_scope() mimics the per-write session scope."""

    def __init__(self, *, fail_appends: bool = False, append_delay: float = 0.0) -> None:
        self.rows: list[SearchQueryRecord] = []
        self.fail_appends = fail_appends
        self.append_delay = append_delay

    async def append(self, entry: SearchQueryCreate) -> SearchQueryRecord:
        if self.append_delay:
            await asyncio.sleep(self.append_delay)
        if self.fail_appends:
            raise ConnectionError("analytics store unavailable")
        row = SearchQueryRecord(
            id=_next_id("q"),
            query=entry.query,
            search_type=entry.search_type,
            result_count=entry.result_count,
            search_duration=entry.search_duration,
            searched_at=entry.searched_at,
            user_id=entry.user_id,
        )
        self.rows.append(row)
        return row

    async def list_since(
        self, since: datetime | None, limit: int
    ) -> list[SearchQueryRecord]:
        rows = [r for r in self.rows if since is None or r.searched_at >= since]
        rows.sort(key=lambda r: r.searched_at, reverse=True)
        return rows[:limit]

    @asynccontextmanager
    async def scope(self) -> AsyncIterator[InMemorySearchQueryStore]:
        yield self
