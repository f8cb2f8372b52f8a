from __future__ import annotations

import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel


class MeetingCreate(CamelModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    date: str
    time: str


class MeetingUpdate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    date: Optional[str] = None
    time: Optional[str] = None


class MeetingPropose(MeetingCreate):
    participant_id: UUID


class BookingRequest(CamelModel):
    """Public booking form. Presence of the fields is checked by the booking service."""

    title: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    user_id: Optional[str] = None


class MeetingRead(CamelModel):
    id: UUID
    title: str
    description: Optional[str] = None
    notes: Optional[str] = None
    date: dt.date
    time: str
    organizer_id: UUID
    participants: List[UUID] = []
    name: Optional[str] = None
    email: Optional[str] = None
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime


class MeetingWithAdjustedDate(MeetingRead):
    adjusted_date: str


class MeetingResponse(CamelModel):
    message: str
    meeting: MeetingRead


class BookingResponse(CamelModel):
    message: str
    meeting: MeetingRead
    link: str


class MessageResponse(CamelModel):
    message: str
