"""Meeting search repository. Implements ISearchGateway[MeetingRecord]."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import aliased

from app.application.dtos.meeting import MeetingRecord
from app.application.dtos.search import MatchCriteria
from app.domain.enums import AttendanceStatus
from app.infrastructure.persistence.models.meeting import Attendance, Meeting
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import (
    BaseSearchRepository,
    author_match,
    full_name,
    text_match,
)
from app.shared.utils.datetime import ensure_utc


class MeetingSearchRepository(BaseSearchRepository[Meeting, MeetingRecord]):
    """Matches title, description and location. Date range applies to start_date_time."""

    model = Meeting

    def _date_column(self) -> Any:
        return Meeting.start_date_time

    def _statement(self, criteria: MatchCriteria) -> Select[Any]:
        organizer = aliased(User)
        organizer_name = full_name(organizer)
        attendee_count = (
            select(func.count(Attendance.id))
            .where(
                Attendance.meeting_id == Meeting.id,
                Attendance.status == AttendanceStatus.CONFIRMED.value,
            )
            .correlate(Meeting)
            .scalar_subquery()
        )
        return (
            select(
                Meeting,
                organizer_name.label("organizer_name"),
                attendee_count.label("attendee_count"),
            )
            .join(organizer, organizer.id == Meeting.organizer_id)
            .where(
                text_match(
                    [Meeting.title, Meeting.location], criteria, [Meeting.description]
                ),
                author_match(Meeting.organizer_id, organizer_name, criteria.authors),
            )
        )

    def _to_record(self, row: Any) -> MeetingRecord:
        m: Meeting = row[0]
        return MeetingRecord(
            id=m.id,
            title=m.title,
            description=m.description or "",
            location=m.location or "",
            start_date_time=ensure_utc(m.start_date_time),
            end_date_time=ensure_utc(m.end_date_time),
            organizer_id=m.organizer_id,
            organizer_name=row.organizer_name or "",
            attendee_count=row.attendee_count or 0,
            is_active=m.is_active,
            created_at=ensure_utc(m.created_at),
            updated_at=ensure_utc(m.updated_at),
        )
