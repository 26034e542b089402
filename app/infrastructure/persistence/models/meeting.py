"""Meeting and attendance ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import AttendanceStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, SearchableModel


class Meeting(SearchableModel, Base):
    """Meeting organized by a user. Searched by title, description and location."""

    __tablename__ = "meeting"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("''")
    )
    location: Mapped[str] = mapped_column(
        String(200), nullable=False, server_default=text("''")
    )
    start_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    end_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    organizer_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )


class Attendance(CuidMixin, Base):
    """A user's registration for a meeting. Only confirmed rows count as attendees."""

    __tablename__ = "attendance"

    meeting_id: Mapped[str] = mapped_column(
        String, ForeignKey("meeting.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AttendanceStatus.PENDING.value
    )
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("meeting_id", "user_id", name="uq_attendance_meeting_user"),
    )
