"""DTOs for post read-models (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PostRecord:
    """Post read-model returned by the post search gateway. comment_count counts active comments."""

    id: str
    title: str
    content: str
    author_id: str
    author_name: str
    meeting_id: str
    meeting_title: str
    comment_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None
