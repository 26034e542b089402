"""DTOs for meeting read-models (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MeetingRecord:
    """Meeting read-model returned by the meeting search gateway.

    organizer_name is the creator's full name; attendee_count counts confirmed
    attendances only.
    """

    id: str
    title: str
    description: str
    location: str
    start_date_time: datetime
    end_date_time: datetime
    organizer_id: str
    organizer_name: str
    attendee_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None
