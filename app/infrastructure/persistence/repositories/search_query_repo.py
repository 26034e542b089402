"""Search query repository. Append-only; implements ISearchQueryStore."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.search_query import SearchQueryCreate, SearchQueryRecord
from app.infrastructure.persistence.database import transactional_session
from app.infrastructure.persistence.models.search_query import SearchQuery
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.generators import generate_cuid


def _orm_to_record(row: SearchQuery) -> SearchQueryRecord:
    """Map ORM to application DTO."""
    return SearchQueryRecord(
        id=row.id,
        query=row.query,
        search_type=row.search_type,
        result_count=row.result_count,
        search_duration=row.search_duration,
        searched_at=ensure_utc(row.searched_at),
        user_id=row.user_id,
    )


class SearchQueryRepository:
    """Append-only analytics repository. No update/delete.

    Runs inside the caller's session; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def append(self, entry: SearchQueryCreate) -> SearchQueryRecord:
        """Append one executed search; return the stored record."""
        row = SearchQuery(
            id=generate_cuid(),
            query=entry.query,
            search_type=entry.search_type,
            result_count=entry.result_count,
            search_duration=entry.search_duration,
            searched_at=entry.searched_at,
            user_id=entry.user_id,
        )
        self.db.add(row)
        await self.db.flush()
        return _orm_to_record(row)

    async def list_since(
        self, since: datetime | None, limit: int
    ) -> list[SearchQueryRecord]:
        """Rows searched at or after since, newest first (point-in-time snapshot)."""
        stmt = select(SearchQuery)
        if since is not None:
            stmt = stmt.where(SearchQuery.searched_at >= since)
        stmt = stmt.order_by(SearchQuery.searched_at.desc(), SearchQuery.id.desc()).limit(
            limit
        )
        result = await self.db.execute(stmt)
        return [_orm_to_record(r) for r in result.scalars().all()]


@asynccontextmanager
async def search_query_store_scope() -> AsyncIterator[SearchQueryRepository]:
    """Yield a repository bound to its own session and transaction.

    Used by the analytics recorder so background writes never share the
    request's session.
    """
    async with transactional_session() as session:
        yield SearchQueryRepository(session)
