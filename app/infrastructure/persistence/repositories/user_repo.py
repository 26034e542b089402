"""User search repository. Implements ISearchGateway[UserRecord]."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, select

from app.application.dtos.search import MatchCriteria
from app.application.dtos.user import UserRecord
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import (
    BaseSearchRepository,
    author_match,
    full_name,
    text_match,
)
from app.shared.utils.datetime import ensure_utc


def _user_to_record(u: User) -> UserRecord:
    """Map ORM User to application UserRecord."""
    return UserRecord(
        id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        is_active=u.is_active,
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
    )


class UserSearchRepository(BaseSearchRepository[User, UserRecord]):
    """Matches first name, last name, full name and email. A user is their own author."""

    model = User

    def _statement(self, criteria: MatchCriteria) -> Select[Any]:
        name = full_name(User)
        return select(User).where(
            text_match([User.first_name, User.last_name, name], criteria, [User.email]),
            author_match(User.id, name, criteria.authors),
        )

    def _to_record(self, row: Any) -> UserRecord:
        return _user_to_record(row[0])
