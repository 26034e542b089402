"""Autocomplete suggestions from entity titles, names, locations and past queries."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.application.dtos.search import MatchCriteria, SearchSuggestion
from app.application.services.relevance_scorer import normalize_query
from app.domain.enums import SearchType
from app.domain.exceptions import SearchFailedException

if TYPE_CHECKING:
    from app.application.dtos.meeting import MeetingRecord
    from app.application.dtos.post import PostRecord
    from app.application.dtos.user import UserRecord
    from app.application.interfaces.repositories import ISearchGateway
    from app.application.interfaces.services import ISearchAnalytics

logger = logging.getLogger(__name__)

LOCATION_SUGGESTION_TYPE = "Location"
QUERY_SUGGESTION_TYPE = "Query"


@dataclass
class _Entry:
    text: str
    type: str
    count: int


def rank_suggestions(
    fragment: str, entries: list[SearchSuggestion]
) -> list[SearchSuggestion]:
    """Merge case-insensitive duplicates and rank them.

    Order: prefix matches first, then higher count, then shorter text,
    then alphabetical. Entries not containing the fragment are dropped.
    The first source to produce a text decides its displayed form and type.
    """
    needle = normalize_query(fragment)
    merged: dict[str, _Entry] = {}
    for s in entries:
        text = " ".join(s.text.split())
        key = text.casefold()
        if not key or needle not in key:
            continue
        if key in merged:
            merged[key].count += s.count
        else:
            merged[key] = _Entry(text=text, type=s.type, count=s.count)

    def sort_key(item: tuple[str, _Entry]) -> tuple[bool, int, int, str]:
        key, entry = item
        return (not key.startswith(needle), -entry.count, len(key), key)

    return [
        SearchSuggestion(text=e.text, type=e.type, count=e.count)
        for _, e in sorted(merged.items(), key=sort_key)
    ]


class SuggestionEngine:
    """Collects suggestion candidates from all sources concurrently.

    A failing source is logged and skipped; only when every source fails
    does get_suggestions raise SearchFailedException (SUGGESTIONS_FAILED).
    """

    def __init__(
        self,
        meeting_gateway: ISearchGateway[MeetingRecord],
        post_gateway: ISearchGateway[PostRecord],
        user_gateway: ISearchGateway[UserRecord],
        analytics: ISearchAnalytics,
        *,
        candidate_limit: int = 200,
    ) -> None:
        self.meeting_gateway = meeting_gateway
        self.post_gateway = post_gateway
        self.user_gateway = user_gateway
        self.analytics = analytics
        self.candidate_limit = candidate_limit

    async def _meeting_entries(self, criteria: MatchCriteria) -> list[SearchSuggestion]:
        meetings = await self.meeting_gateway.find_matching(criteria)
        entries = [SearchSuggestion(m.title, SearchType.MEETING.value, 1) for m in meetings]
        entries.extend(
            SearchSuggestion(m.location, LOCATION_SUGGESTION_TYPE, 1)
            for m in meetings
            if m.location
        )
        return entries

    async def _post_entries(self, criteria: MatchCriteria) -> list[SearchSuggestion]:
        posts = await self.post_gateway.find_matching(criteria)
        return [SearchSuggestion(p.title, SearchType.POST.value, 1) for p in posts]

    async def _user_entries(self, criteria: MatchCriteria) -> list[SearchSuggestion]:
        users = await self.user_gateway.find_matching(criteria)
        return [SearchSuggestion(u.full_name, SearchType.USER.value, 1) for u in users]

    async def _query_entries(self, fragment: str) -> list[SearchSuggestion]:
        frequencies = await self.analytics.get_query_frequencies(
            fragment, self.candidate_limit
        )
        return [
            SearchSuggestion(term, QUERY_SUGGESTION_TYPE, count)
            for term, count in frequencies
        ]

    async def get_suggestions(
        self, query: str, max_suggestions: int = 10
    ) -> list[SearchSuggestion]:
        fragment = " ".join(query.split()) if query else ""
        if not fragment or max_suggestions <= 0:
            return []

        criteria = MatchCriteria(
            phrase=fragment,
            active_only=True,
            limit=self.candidate_limit,
            names_only=True,
        )
        sources = {
            "meetings": self._meeting_entries(criteria),
            "posts": self._post_entries(criteria),
            "users": self._user_entries(criteria),
            "queries": self._query_entries(fragment),
        }
        outcomes = await asyncio.gather(*sources.values(), return_exceptions=True)

        entries: list[SearchSuggestion] = []
        failed: list[str] = []
        for name, outcome in zip(sources, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Suggestion source %s failed: %s", name, outcome, exc_info=outcome
                )
                failed.append(name)
                continue
            entries.extend(outcome)

        if len(failed) == len(sources):
            raise SearchFailedException(
                "All suggestion sources failed", error_code="SUGGESTIONS_FAILED"
            )
        return rank_suggestions(fragment, entries)[:max_suggestions]
