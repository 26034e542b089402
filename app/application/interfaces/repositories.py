"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from app.application.dtos.search import MatchCriteria
    from app.application.dtos.search_query import SearchQueryCreate, SearchQueryRecord

RecordT = TypeVar("RecordT")


class ISearchGateway(Protocol[RecordT]):
    """Read-only gateway for one searchable entity type (meetings, posts, comments, users).

    Implementations must be safe to call concurrently with other gateways.
    """

    async def find_matching(self, criteria: MatchCriteria) -> list[RecordT]:
        """Return rows matching criteria (newest first), at most criteria.limit."""


class ISearchQueryStore(Protocol):
    """Append-only store of executed searches (analytics)."""

    async def append(self, entry: SearchQueryCreate) -> SearchQueryRecord:
        """Append one executed search; never updates existing rows."""

    async def list_since(
        self, since: datetime | None, limit: int
    ) -> list[SearchQueryRecord]:
        """Return rows searched at or after since (newest first), at most limit."""
