"""DTOs for cross-entity search (no dependency on ORM or presentation schemas)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from app.domain.enums import SearchType, SortBy, SortDirection


@dataclass(frozen=True)
class SearchFilters:
    """Per-request search filters. Empty types means all four entity types.

    from_date <= to_date is checked at the API boundary, not here.
    """

    types: frozenset[SearchType] = frozenset()
    from_date: datetime | None = None
    to_date: datetime | None = None
    authors: frozenset[str] = frozenset()
    active_only: bool = True
    sort_by: SortBy = SortBy.RELEVANCE
    sort_direction: SortDirection = SortDirection.DESC

    def active_types(self) -> list[SearchType]:
        """Requested types in canonical order (all types when none requested)."""
        return [t for t in SearchType if not self.types or t in self.types]


@dataclass(frozen=True)
class MatchCriteria:
    """Typed filter value handed to a search gateway.

    A row matches when the phrase or any term occurs (case-insensitive
    substring) in one of the type's text fields, and it passes the
    active/date/author filters.
    """

    phrase: str
    terms: tuple[str, ...] = ()
    active_only: bool = True
    from_date: datetime | None = None
    to_date: datetime | None = None
    authors: frozenset[str] = frozenset()
    limit: int = 1000
    # Match only name-like fields (titles, locations, user names), not bodies.
    names_only: bool = False

    @property
    def patterns(self) -> tuple[str, ...]:
        """Distinct lowercase fragments to match: the phrase first, then each term."""
        seen: list[str] = []
        for fragment in (self.phrase, *self.terms):
            lowered = fragment.lower()
            if lowered and lowered not in seen:
                seen.append(lowered)
        return tuple(seen)


@dataclass(frozen=True)
class SearchCandidate:
    """Uniform projection of one matched entity, before scoring."""

    id: str
    title: str
    content: str
    type: SearchType
    author_name: str
    created_date: datetime
    last_modified_date: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResult:
    """Scored candidate; relevance_score orders global search results."""

    id: str
    title: str
    content: str
    type: SearchType
    author_name: str
    created_date: datetime
    relevance_score: float
    last_modified_date: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_candidate(cls, candidate: SearchCandidate, score: float) -> SearchResult:
        return cls(
            id=candidate.id,
            title=candidate.title,
            content=candidate.content,
            type=candidate.type,
            author_name=candidate.author_name,
            created_date=candidate.created_date,
            relevance_score=score,
            last_modified_date=candidate.last_modified_date,
            metadata=candidate.metadata,
        )


@dataclass(frozen=True)
class SearchResultsPage:
    """One page of merged global search results.

    total_count and type_counts are computed before pagination. failed_types
    lists entity types whose fetch failed and contributed nothing.
    """

    results: tuple[SearchResult, ...]
    total_count: int
    page: int
    page_size: int
    query: str
    search_duration: timedelta
    type_counts: dict[str, int] = field(default_factory=dict)
    failed_types: tuple[str, ...] = ()

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class MeetingSearchResult:
    """Meeting-only search hit with meeting fields."""

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


@dataclass(frozen=True)
class PostSearchResult:
    """Post-only search hit with post fields."""

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


@dataclass(frozen=True)
class CommentSearchResult:
    """Comment-only search hit with comment fields."""

    id: str
    content: str
    author_name: str
    post_id: str
    post_title: str
    parent_comment_id: str | None
    is_reply: bool
    is_active: bool
    created_date: datetime
    relevance_score: float


@dataclass(frozen=True)
class UserSearchResult:
    """User-only search hit with profile fields."""

    id: str
    first_name: str
    last_name: str
    email: str
    is_active: bool
    created_date: datetime
    relevance_score: float

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class SearchSuggestion:
    """Autocomplete entry. type is an entity type, "Location" or "Query"."""

    text: str
    type: str
    count: int
