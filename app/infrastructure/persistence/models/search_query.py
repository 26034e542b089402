"""Search query ORM model. Append-only log of executed searches (analytics)."""

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import (
    Connection,
    DateTime,
    ForeignKey,
    Integer,
    Interval,
    String,
    event,
    text,
)
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class SearchQuery(Base):
    """One executed search: query text, type, result count, duration. No update/delete."""

    __tablename__ = "search_query"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    query: Mapped[str] = mapped_column(String(200), nullable=False)
    search_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    result_count: Mapped[int] = mapped_column(Integer, nullable=False)
    search_duration: Mapped[timedelta] = mapped_column(Interval, nullable=False)
    searched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False, index=True
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )


@event.listens_for(SearchQuery, "before_update")
def _prevent_search_query_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: SearchQuery
) -> None:
    """Search query rows are append-only; updates are forbidden."""
    raise ValueError("Search query entries are immutable and cannot be updated.")


@event.listens_for(SearchQuery, "before_delete")
def _prevent_search_query_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: SearchQuery
) -> None:
    """Search query rows cannot be deleted."""
    raise ValueError("Search query entries cannot be deleted.")
