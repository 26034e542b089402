"""Post and comment search repositories. Implement ISearchGateway for posts and comments."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import aliased

from app.application.dtos.comment import CommentRecord
from app.application.dtos.post import PostRecord
from app.application.dtos.search import MatchCriteria
from app.infrastructure.persistence.models.meeting import Meeting
from app.infrastructure.persistence.models.post import Comment, Post
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import (
    BaseSearchRepository,
    author_match,
    full_name,
    text_match,
)
from app.shared.utils.datetime import ensure_utc


class PostSearchRepository(BaseSearchRepository[Post, PostRecord]):
    """Matches title and content. comment_count counts active, non-deleted comments."""

    model = Post

    def _statement(self, criteria: MatchCriteria) -> Select[Any]:
        author = aliased(User)
        author_name = full_name(author)
        counted = aliased(Comment)
        comment_count = (
            select(func.count(counted.id))
            .where(
                counted.post_id == Post.id,
                counted.deleted_at.is_(None),
                counted.is_active.is_(True),
            )
            .correlate(Post)
            .scalar_subquery()
        )
        return (
            select(
                Post,
                author_name.label("author_name"),
                Meeting.title.label("meeting_title"),
                comment_count.label("comment_count"),
            )
            .join(author, author.id == Post.author_id)
            .join(Meeting, Meeting.id == Post.meeting_id)
            .where(
                text_match([Post.title], criteria, [Post.content]),
                author_match(Post.author_id, author_name, criteria.authors),
            )
        )

    def _to_record(self, row: Any) -> PostRecord:
        p: Post = row[0]
        return PostRecord(
            id=p.id,
            title=p.title,
            content=p.content,
            author_id=p.author_id,
            author_name=row.author_name or "",
            meeting_id=p.meeting_id,
            meeting_title=row.meeting_title or "",
            comment_count=row.comment_count or 0,
            is_active=p.is_active,
            created_at=ensure_utc(p.created_at),
            updated_at=ensure_utc(p.updated_at),
        )


class CommentSearchRepository(BaseSearchRepository[Comment, CommentRecord]):
    """Matches comment content only."""

    model = Comment

    def _statement(self, criteria: MatchCriteria) -> Select[Any]:
        author = aliased(User)
        author_name = full_name(author)
        return (
            select(
                Comment,
                author_name.label("author_name"),
                Post.title.label("post_title"),
            )
            .join(author, author.id == Comment.author_id)
            .join(Post, Post.id == Comment.post_id)
            .where(
                text_match([], criteria, [Comment.content]),
                author_match(Comment.author_id, author_name, criteria.authors),
            )
        )

    def _to_record(self, row: Any) -> CommentRecord:
        c: Comment = row[0]
        return CommentRecord(
            id=c.id,
            content=c.content,
            author_id=c.author_id,
            author_name=row.author_name or "",
            post_id=c.post_id,
            post_title=row.post_title or "",
            parent_comment_id=c.parent_comment_id,
            is_active=c.is_active,
            created_at=ensure_utc(c.created_at),
            updated_at=ensure_utc(c.updated_at),
        )
