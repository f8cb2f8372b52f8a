from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from app.models.timestamps import AwareDateTime, utcnow


class MeetingParticipant(SQLModel, table=True):
    """User invited to a meeting."""

    __tablename__ = "meeting_participants"

    meeting_id: UUID = Field(
        foreign_key="meetings.id", primary_key=True, nullable=False
    )
    user_id: UUID = Field(foreign_key="users.id", primary_key=True, nullable=False)
    added_at: datetime = Field(default_factory=utcnow, sa_type=AwareDateTime, nullable=False)
