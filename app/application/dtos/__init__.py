"""Application DTOs (no ORM dependency)."""

from app.application.dtos.comment import CommentRecord
from app.application.dtos.meeting import MeetingRecord
from app.application.dtos.post import PostRecord
from app.application.dtos.result import Result
from app.application.dtos.search import (
    CommentSearchResult,
    MatchCriteria,
    MeetingSearchResult,
    PostSearchResult,
    SearchCandidate,
    SearchFilters,
    SearchResult,
    SearchResultsPage,
    SearchSuggestion,
    UserSearchResult,
)
from app.application.dtos.search_query import SearchQueryCreate, SearchQueryRecord
from app.application.dtos.user import UserRecord

__all__ = [
    "CommentRecord",
    "CommentSearchResult",
    "MatchCriteria",
    "MeetingRecord",
    "MeetingSearchResult",
    "PostRecord",
    "PostSearchResult",
    "Result",
    "SearchCandidate",
    "SearchFilters",
    "SearchQueryCreate",
    "SearchQueryRecord",
    "SearchResult",
    "SearchResultsPage",
    "SearchSuggestion",
    "UserRecord",
    "UserSearchResult",
]
