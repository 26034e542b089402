"""SearchResultsPage paging properties, SearchFilters and Result."""

from datetime import timedelta

import pytest

from app.application.dtos.result import Result
from app.application.dtos.search import MatchCriteria, SearchFilters, SearchResultsPage
from app.domain.enums import SearchType


def _page(total: int, page: int, page_size: int) -> SearchResultsPage:
    return SearchResultsPage(
        results=(),
        total_count=total,
        page=page,
        page_size=page_size,
        query="q",
        search_duration=timedelta(0),
    )


def test_total_pages_rounds_up() -> None:
    assert _page(0, 1, 20).total_pages == 0
    assert _page(20, 1, 20).total_pages == 1
    assert _page(21, 1, 20).total_pages == 2


def test_next_and_previous_page_flags() -> None:
    first = _page(45, 1, 20)
    assert first.has_next_page and not first.has_previous_page
    last = _page(45, 3, 20)
    assert not last.has_next_page and last.has_previous_page


def test_active_types_defaults_to_all_in_canonical_order() -> None:
    assert SearchFilters().active_types() == list(SearchType)
    filters = SearchFilters(types=frozenset({SearchType.USER, SearchType.MEETING}))
    assert filters.active_types() == [SearchType.MEETING, SearchType.USER]


def test_match_criteria_patterns_are_distinct_and_lowercase() -> None:
    criteria = MatchCriteria(phrase="Team Standup", terms=("team", "standup"))
    assert criteria.patterns == ("team standup", "team", "standup")
    assert MatchCriteria(phrase="Team", terms=("team",)).patterns == ("team",)


def test_result_success_and_failure() -> None:
    ok = Result.success([1, 2])
    assert ok.is_success and ok.unwrap() == [1, 2]
    failed: Result[list[int]] = Result.failure("boom", "SEARCH_TIMEOUT")
    assert failed.is_failure
    assert failed.error_code == "SEARCH_TIMEOUT"
    with pytest.raises(ValueError, match="boom"):
        failed.unwrap()
