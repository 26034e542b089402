"""Search API: global and typed search, suggestions, popular terms."""

from datetime import datetime
from enum import Enum
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_search_service
from app.application.dtos.result import Result
from app.application.dtos.search import SearchFilters
from app.application.use_cases.search import SearchService
from app.core.limiter import limit_search, limit_suggestions
from app.domain.enums import SearchType, SortBy, SortDirection
from app.domain.exceptions import SearchFailedException, ValidationException
from app.schemas.search import (
    CommentSearchResultResponse,
    MeetingSearchResultResponse,
    PopularTermsResponse,
    PostSearchResultResponse,
    SearchResultsResponse,
    SearchSuggestionResponse,
    UserSearchResultResponse,
)
from app.shared.utils.datetime import ensure_utc

router = APIRouter()

E = TypeVar("E", bound=Enum)
T = TypeVar("T")

QueryText = Annotated[str, Query(min_length=2, max_length=200)]
Page = Annotated[int, Query(ge=1)]
PageSize = Annotated[int, Query(ge=1, le=100)]
CsvList = Annotated[str | None, Query(description="Comma-separated list")]


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_enum(enum_cls: type[E], value: str, field: str) -> E:
    """Case-insensitive lookup by value; unknown values are a 400, not a 422."""
    for member in enum_cls:
        if str(member.value).lower() == value.strip().lower():
            return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    raise ValidationException(f"Invalid {field} '{value}'. Must be one of: {allowed}", field)


def _build_filters(
    *,
    types: str | None = None,
    from_date: datetime | None,
    to_date: datetime | None,
    authors: str | None,
    active_only: bool,
    sort_by: str,
    sort_direction: str,
) -> SearchFilters:
    from_date = ensure_utc(from_date)
    to_date = ensure_utc(to_date)
    if from_date is not None and to_date is not None and from_date > to_date:
        raise ValidationException("from_date must be on or before to_date", "from_date")
    return SearchFilters(
        types=frozenset(_parse_enum(SearchType, t, "types") for t in _split_csv(types)),
        from_date=from_date,
        to_date=to_date,
        authors=frozenset(_split_csv(authors)),
        active_only=active_only,
        sort_by=_parse_enum(SortBy, sort_by, "sort_by"),
        sort_direction=_parse_enum(SortDirection, sort_direction, "sort_direction"),
    )


def _unwrap(result: Result[T]) -> T:
    """Return the value of a successful result; raise SearchFailedException otherwise."""
    if result.is_failure:
        raise SearchFailedException(
            result.error or "Search failed", result.error_code or "SEARCH_FAILED"
        )
    return result.unwrap()


@router.get("/global", response_model=SearchResultsResponse)
@limit_search
async def global_search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    query: QueryText,
    types: CsvList = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    authors: CsvList = None,
    active_only: bool = True,
    sort_by: str = SortBy.RELEVANCE.value,
    sort_direction: str = SortDirection.DESC.value,
    page: Page = 1,
    page_size: PageSize = 20,
):
    """Search meetings, posts, comments and users; merged, ranked and paginated."""
    filters = _build_filters(
        types=types,
        from_date=from_date,
        to_date=to_date,
        authors=authors,
        active_only=active_only,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    result = await search_svc.global_search(query, filters, page, page_size)
    return SearchResultsResponse.from_page(_unwrap(result))


@router.get("/meetings", response_model=list[MeetingSearchResultResponse])
@limit_search
async def search_meetings(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    query: QueryText,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    authors: CsvList = None,
    active_only: bool = True,
    sort_by: str = SortBy.DATE.value,
    sort_direction: str = SortDirection.DESC.value,
    page: Page = 1,
    page_size: PageSize = 20,
):
    """Search meetings by title, description and location."""
    filters = _build_filters(
        from_date=from_date,
        to_date=to_date,
        authors=authors,
        active_only=active_only,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    items = _unwrap(await search_svc.search_meetings(query, filters, page, page_size))
    return [MeetingSearchResultResponse.model_validate(i) for i in items]


@router.get("/posts", response_model=list[PostSearchResultResponse])
@limit_search
async def search_posts(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    query: QueryText,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    authors: CsvList = None,
    active_only: bool = True,
    sort_by: str = SortBy.DATE.value,
    sort_direction: str = SortDirection.DESC.value,
    page: Page = 1,
    page_size: PageSize = 20,
):
    """Search posts by title and content."""
    filters = _build_filters(
        from_date=from_date,
        to_date=to_date,
        authors=authors,
        active_only=active_only,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    items = _unwrap(await search_svc.search_posts(query, filters, page, page_size))
    return [PostSearchResultResponse.model_validate(i) for i in items]


@router.get("/comments", response_model=list[CommentSearchResultResponse])
@limit_search
async def search_comments(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    query: QueryText,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    authors: CsvList = None,
    active_only: bool = True,
    sort_by: str = SortBy.DATE.value,
    sort_direction: str = SortDirection.DESC.value,
    page: Page = 1,
    page_size: PageSize = 20,
):
    """Search comments by content."""
    filters = _build_filters(
        from_date=from_date,
        to_date=to_date,
        authors=authors,
        active_only=active_only,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    items = _unwrap(await search_svc.search_comments(query, filters, page, page_size))
    return [CommentSearchResultResponse.model_validate(i) for i in items]


@router.get("/users", response_model=list[UserSearchResultResponse])
@limit_search
async def search_users(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    query: QueryText,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    active_only: bool = True,
    sort_by: str = SortBy.TITLE.value,
    sort_direction: str = SortDirection.ASC.value,
    page: Page = 1,
    page_size: PageSize = 20,
):
    """Search users by name and email."""
    filters = _build_filters(
        from_date=from_date,
        to_date=to_date,
        authors=None,
        active_only=active_only,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    items = _unwrap(await search_svc.search_users(query, filters, page, page_size))
    return [UserSearchResultResponse.model_validate(i) for i in items]


@router.get("/suggestions", response_model=list[SearchSuggestionResponse])
@limit_suggestions
async def get_search_suggestions(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    query: Annotated[str, Query(min_length=1, max_length=100)],
    max_suggestions: Annotated[int, Query(ge=1, le=50)] = 10,
):
    """Autocomplete from titles, names, locations and past searches."""
    items = _unwrap(await search_svc.get_search_suggestions(query, max_suggestions))
    return [SearchSuggestionResponse.model_validate(i) for i in items]


@router.get("/popular-terms", response_model=PopularTermsResponse)
@limit_suggestions
async def get_popular_search_terms(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    count: Annotated[int, Query(ge=0, le=100)] = 10,
):
    """Most frequent search terms of the recent past, most popular first."""
    terms = _unwrap(await search_svc.get_popular_search_terms(count))
    return PopularTermsResponse(terms=terms)
