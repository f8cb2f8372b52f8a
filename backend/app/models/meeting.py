from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.timestamps import AwareDateTime, utcnow

MEETING_STATUSES = ("proposed", "accepted", "declined")


class Meeting(SQLModel, table=True):
    """Meeting record, either booked through a public link or proposed by a user."""

    __tablename__ = "meetings"
    # No two meetings may share (date, time, organizer)
    __table_args__ = (
        UniqueConstraint("date", "time", "organizer_id", name="uq_meetings_slot"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=2000)
    date: dt.date = Field(nullable=False, index=True)
    time: str = Field(max_length=5)
    organizer_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    # Requester details for anonymous bookings
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    status: str = Field(default="proposed", max_length=32)
    created_at: dt.datetime = Field(default_factory=utcnow, sa_type=AwareDateTime, nullable=False)
    updated_at: dt.datetime = Field(default_factory=utcnow, sa_type=AwareDateTime, nullable=False)

    def touch(self) -> None:
        self.updated_at = utcnow()
