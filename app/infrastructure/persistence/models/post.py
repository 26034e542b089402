"""Post and comment ORM models."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import SearchableModel


class Post(SearchableModel, Base):
    """Post written by a user in a meeting. Searched by title and content."""

    __tablename__ = "post"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    meeting_id: Mapped[str] = mapped_column(
        String, ForeignKey("meeting.id", ondelete="CASCADE"), nullable=False, index=True
    )


class Comment(SearchableModel, Base):
    """Comment on a post; parent_comment_id is set for replies. Searched by content."""

    __tablename__ = "comment"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id: Mapped[str] = mapped_column(
        String, ForeignKey("post.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_comment_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("comment.id", ondelete="CASCADE"), nullable=True, index=True
    )
