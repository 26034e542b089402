"""DTOs for comment read-models (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CommentRecord:
    """Comment read-model returned by the comment search gateway."""

    id: str
    content: str
    author_id: str
    author_name: str
    post_id: str
    post_title: str
    parent_comment_id: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def is_reply(self) -> bool:
        return self.parent_comment_id is not None
