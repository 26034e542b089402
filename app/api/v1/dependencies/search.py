"""Search dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.services import ISearchAnalytics
from app.application.services.relevance_scorer import RelevanceScorer
from app.application.use_cases.search import SearchService
from app.core.config import get_settings
from app.domain.exceptions import MeetMeException
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories import (
    CommentSearchRepository,
    MeetingSearchRepository,
    PostSearchRepository,
    UserSearchRepository,
)


def get_search_analytics(request: Request) -> ISearchAnalytics:
    """Process-wide analytics recorder created in the lifespan."""
    analytics = getattr(request.app.state, "search_analytics", None)
    if analytics is None:
        raise MeetMeException(
            "Search analytics is not initialized", "SERVICE_UNAVAILABLE"
        )
    return analytics


async def get_search_service(
    analytics: Annotated[ISearchAnalytics, Depends(get_search_analytics)],
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> SearchService:
    """Search use case over the four read repositories (one session per fetch)."""
    settings = get_settings()
    return SearchService(
        meeting_gateway=MeetingSearchRepository(session_factory),
        post_gateway=PostSearchRepository(session_factory),
        comment_gateway=CommentSearchRepository(session_factory),
        user_gateway=UserSearchRepository(session_factory),
        analytics=analytics,
        scorer=RelevanceScorer(
            recency_window_days=settings.recency_window_days,
            recency_max_bonus=settings.recency_max_bonus,
        ),
        timeout_seconds=settings.search_timeout_seconds,
        max_candidates_per_type=settings.search_max_candidates_per_type,
    )
