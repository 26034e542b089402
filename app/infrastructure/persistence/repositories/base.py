"""Base search repository: shared matching, filtering and session handling.

Each concrete repository builds one SELECT for its entity type and maps rows
to an application read model. Every find_matching call opens its own session
from the factory, so repositories can be awaited concurrently.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, and_, false, func, or_, true
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import MatchCriteria
from app.infrastructure.persistence.models.mixins import SearchableModel

ModelType = TypeVar("ModelType", bound=SearchableModel)
RecordT = TypeVar("RecordT")

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape ILIKE wildcards % and _ so the value matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def full_name(user: Any) -> ColumnElement[str]:
    """SQL expression for "first last" of a User (or aliased User)."""
    return func.trim(func.concat(user.first_name, " ", user.last_name))


def text_match(
    names: list[Any], criteria: MatchCriteria, body: list[Any] | None = None
) -> ColumnElement[bool]:
    """True when any pattern (phrase or term) occurs in any column, case-insensitively.

    body columns are skipped when criteria.names_only is set.
    """
    if not criteria.patterns:
        return true()
    columns = names if criteria.names_only else [*names, *(body or [])]
    if not columns:
        return false()
    clauses = [
        column.ilike(f"%{escape_like(pattern)}%", escape=LIKE_ESCAPE)
        for pattern in criteria.patterns
        for column in columns
    ]
    return or_(*clauses)


def author_match(
    author_id: Any, author_name: ColumnElement[str], authors: frozenset[str]
) -> ColumnElement[bool]:
    """Allow-list on author id or display name (case-insensitive). Empty means no filter."""
    wanted = sorted({a.strip().lower() for a in authors if a.strip()})
    if not wanted:
        return true()
    return or_(func.lower(author_id).in_(wanted), func.lower(author_name).in_(wanted))


class BaseSearchRepository(Generic[ModelType, RecordT]):
    """Read-only gateway for one searchable entity type.

    Subclasses implement _statement (text columns, joins, counts) and
    _to_record. Soft-deleted rows are always excluded; inactive rows when
    criteria.active_only is set.
    """

    model: type[ModelType]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def _date_column(self) -> Any:
        """Column the from/to date range applies to."""
        return self.model.created_at

    def _base_filters(self, criteria: MatchCriteria) -> ColumnElement[bool]:
        model: Any = self.model
        conditions: list[ColumnElement[bool]] = [model.deleted_at.is_(None)]
        if criteria.active_only:
            conditions.append(model.is_active.is_(True))
        date_column = self._date_column()
        if criteria.from_date is not None:
            conditions.append(date_column >= criteria.from_date)
        if criteria.to_date is not None:
            conditions.append(date_column <= criteria.to_date)
        return and_(*conditions)

    def _statement(self, criteria: MatchCriteria) -> Select[Any]:
        raise NotImplementedError

    def _to_record(self, row: Any) -> RecordT:
        raise NotImplementedError

    async def find_matching(self, criteria: MatchCriteria) -> list[RecordT]:
        """Return matching rows, newest first (id breaks ties), at most criteria.limit."""
        model: Any = self.model
        stmt = (
            self._statement(criteria)
            .where(self._base_filters(criteria))
            .order_by(model.created_at.desc(), model.id.asc())
            .limit(criteria.limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_record(row) for row in result.all()]
