"""Pydantic request/response schemas for the API."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.search import (
    CommentSearchResultResponse,
    MeetingSearchResultResponse,
    PopularTermsResponse,
    PostSearchResultResponse,
    SearchResultResponse,
    SearchResultsResponse,
    SearchSuggestionResponse,
    UserSearchResultResponse,
)

__all__ = [
    "CommentSearchResultResponse",
    "HealthResponse",
    "MeetingSearchResultResponse",
    "PopularTermsResponse",
    "PostSearchResultResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SearchResultResponse",
    "SearchResultsResponse",
    "SearchSuggestionResponse",
    "UserSearchResultResponse",
]
