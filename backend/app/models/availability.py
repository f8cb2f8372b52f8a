from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel

from app.models.timestamps import AwareDateTime, utcnow


class Availability(SQLModel, table=True):
    """Recurring weekly availability window, one per user."""

    __tablename__ = "availabilities"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True, unique=True)

    # "HH:MM", 24h
    start_time: str = Field(max_length=5)
    end_time: str = Field(max_length=5)

    # Canonical weekday names, e.g. ["Monday", "Wednesday"]
    days: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Meeting length in minutes; slot granularity falls back to the default when unset
    duration: Optional[int] = Field(default=None, nullable=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=AwareDateTime, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=AwareDateTime, nullable=False)

    def touch(self) -> None:
        self.updated_at = utcnow()
