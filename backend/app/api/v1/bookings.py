"""Public booking endpoints, reachable without a token."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.core.errors import operation_guard
from app.db import SessionDep
from app.schemas import BookingRequest, BookingResponse, MeetingRead, TimeSlotsRead
from app.services.booking import BookingService

router = APIRouter()


@router.get(
    "/availability/{date}",
    response_model=TimeSlotsRead,
    summary="Open time slots for a date",
)
def get_available_slots(
    date: str,
    session: SessionDep,
    user_id: Optional[UUID] = Query(default=None, alias="userId", description="Organizer to book with"),
) -> TimeSlotsRead:
    with operation_guard("Failed to fetch available slots"):
        slots = BookingService(session).available_slots_for_date(date, organizer_id=user_id)
    return TimeSlotsRead(time_slots=slots)


@router.post(
    "/book",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a meeting into an organizer's availability",
)
def book_meeting(payload: BookingRequest, session: SessionDep) -> BookingResponse:
    service = BookingService(session)
    with operation_guard("Failed to book meeting"):
        meeting, link = service.book_meeting(
            title=payload.title,
            date=payload.date,
            time=payload.time,
            requester_name=payload.name,
            requester_email=payload.email,
            notes=payload.notes,
            organizer_id=payload.user_id,
        )
        meeting_read = service.describe(meeting)
    return BookingResponse(message="Meeting booked successfully", meeting=meeting_read, link=link)


@router.get("/meeting/{meeting_id}", response_model=MeetingRead, summary="Meeting details")
def get_meeting_details(meeting_id: UUID, session: SessionDep) -> MeetingRead:
    service = BookingService(session)
    with operation_guard("Failed to fetch meeting details"):
        return service.describe(service.get_meeting(meeting_id))
