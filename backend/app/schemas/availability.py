from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.base import CamelModel
from app.services.time_slots import is_valid_hhmm
from app.services.weekdays import canonical_days


class AvailabilityUpdate(CamelModel):
    """Body of ``POST /availability``; replaces the whole window."""

    start_time: str = Field(..., description="Start time in HH:MM format")
    end_time: str = Field(..., description="End time in HH:MM format")
    days: list[str] = Field(default_factory=list, description="Weekday names, e.g. Monday")

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_format(cls, value: str) -> str:
        if not is_valid_hhmm(value):
            raise ValueError("time must be in HH:MM format")
        return value

    @field_validator("days")
    @classmethod
    def check_days(cls, value: list[str]) -> list[str]:
        return canonical_days(value)


class DurationUpdate(CamelModel):
    duration: int = Field(..., gt=0, le=24 * 60, description="Meeting length in minutes")


class AvailabilityRead(CamelModel):
    id: UUID
    user_id: UUID
    start_time: str
    end_time: str
    days: list[str]
    duration: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class AvailabilityResponse(CamelModel):
    message: str
    availability: AvailabilityRead


class DaySlotsRead(CamelModel):
    start_time: str
    end_time: str
    time_slots: list[str]


class TimeSlotsRead(CamelModel):
    time_slots: list[str]


class BookingLinkRead(CamelModel):
    booking_link: str
