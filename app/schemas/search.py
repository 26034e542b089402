"""Search API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.search import SearchResult, SearchResultsPage


class SearchResultResponse(BaseModel):
    """One global search hit (meeting, post, comment or user)."""

    id: str
    title: str
    content: str
    type: str = Field(..., description="Meeting | Post | Comment | User")
    author_name: str
    created_date: datetime
    last_modified_date: datetime | None = None
    relevance_score: float
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, r: SearchResult) -> "SearchResultResponse":
        return cls(
            id=r.id,
            title=r.title,
            content=r.content,
            type=r.type.value,
            author_name=r.author_name,
            created_date=r.created_date,
            last_modified_date=r.last_modified_date,
            relevance_score=r.relevance_score,
            metadata=r.metadata,
        )


class SearchResultsResponse(BaseModel):
    """One page of global search results with totals computed before pagination."""

    results: list[SearchResultResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    query: str
    search_duration_ms: float
    type_counts: dict[str, int] = Field(
        default_factory=dict, description="Matches per type (types with no match omitted)"
    )
    failed_types: list[str] = Field(
        default_factory=list, description="Types whose fetch failed and contributed nothing"
    )

    @classmethod
    def from_page(cls, page: SearchResultsPage) -> "SearchResultsResponse":
        return cls(
            results=[SearchResultResponse.from_result(r) for r in page.results],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
            query=page.query,
            search_duration_ms=round(page.search_duration.total_seconds() * 1000, 3),
            type_counts=page.type_counts,
            failed_types=list(page.failed_types),
        )


class MeetingSearchResultResponse(BaseModel):
    """Meeting search hit."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    start_date_time: datetime
    end_date_time: datetime
    location: str
    organizer_name: str
    attendee_count: int
    is_active: bool
    created_date: datetime
    relevance_score: float


class PostSearchResultResponse(BaseModel):
    """Post search hit."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    author_name: str
    meeting_id: str
    meeting_title: str
    comment_count: int
    is_active: bool
    created_date: datetime
    relevance_score: float


class CommentSearchResultResponse(BaseModel):
    """Comment search hit. is_reply is true when the comment answers another comment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    author_name: str
    post_id: str
    post_title: str
    parent_comment_id: str | None = None
    is_reply: bool
    is_active: bool
    created_date: datetime
    relevance_score: float


class UserSearchResultResponse(BaseModel):
    """User search hit."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    is_active: bool
    created_date: datetime
    relevance_score: float


class SearchSuggestionResponse(BaseModel):
    """Autocomplete entry."""

    model_config = ConfigDict(from_attributes=True)

    text: str
    type: str = Field(..., description="Meeting | Post | User | Location | Query")
    count: int


class PopularTermsResponse(BaseModel):
    """Most frequent recent search terms, most popular first."""

    terms: list[str]
