"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.meeting import Attendance, Meeting
from app.infrastructure.persistence.models.mixins import (
    ActiveMixin,
    CuidMixin,
    SearchableModel,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.post import Comment, Post
from app.infrastructure.persistence.models.search_query import SearchQuery
from app.infrastructure.persistence.models.user import User

__all__ = [
    "Attendance",
    "Comment",
    "Meeting",
    "Post",
    "SearchQuery",
    "User",
    "ActiveMixin",
    "CuidMixin",
    "SearchableModel",
    "SoftDeleteMixin",
    "TimestampMixin",
]
