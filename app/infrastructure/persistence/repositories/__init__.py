"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseSearchRepository
from app.infrastructure.persistence.repositories.meeting_repo import (
    MeetingSearchRepository,
)
from app.infrastructure.persistence.repositories.post_repo import (
    CommentSearchRepository,
    PostSearchRepository,
)
from app.infrastructure.persistence.repositories.search_query_repo import (
    SearchQueryRepository,
    search_query_store_scope,
)
from app.infrastructure.persistence.repositories.user_repo import UserSearchRepository

__all__ = [
    "BaseSearchRepository",
    "CommentSearchRepository",
    "MeetingSearchRepository",
    "PostSearchRepository",
    "SearchQueryRepository",
    "UserSearchRepository",
    "search_query_store_scope",
]
