from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import CurrentUser
from app.api.v1.bookings import book_meeting
from app.core.errors import operation_guard
from app.db import SessionDep
from app.schemas import (
    BookingResponse,
    MeetingCreate,
    MeetingPropose,
    MeetingRead,
    MeetingResponse,
    MeetingUpdate,
    MeetingWithAdjustedDate,
    MessageResponse,
)
from app.services.booking import BookingService

router = APIRouter()


@router.get(
    "",
    response_model=List[MeetingWithAdjustedDate],
    summary="List meetings for the current user",
)
def list_meetings(session: SessionDep, current_user: CurrentUser) -> List[MeetingWithAdjustedDate]:
    """Meetings the user organizes or participates in, with times in the user's zone."""
    with operation_guard("Failed to fetch meetings"):
        return BookingService(session).list_meetings(current_user)


@router.post(
    "",
    response_model=MeetingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create meeting",
)
def create_meeting(
    payload: MeetingCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> MeetingRead:
    service = BookingService(session)
    with operation_guard("Failed to create meeting"):
        meeting = service.create_meeting(
            current_user,
            title=payload.title,
            description=payload.description,
            date=payload.date,
            time=payload.time,
        )
        return service.describe(meeting)


@router.post(
    "/propose",
    response_model=MeetingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Propose a meeting to another user",
)
def propose_meeting(
    payload: MeetingPropose,
    session: SessionDep,
    current_user: CurrentUser,
) -> MeetingResponse:
    service = BookingService(session)
    with operation_guard("Failed to propose meeting"):
        meeting = service.propose_meeting(
            current_user,
            title=payload.title,
            description=payload.description,
            date=payload.date,
            time=payload.time,
            participant_id=payload.participant_id,
        )
        return MeetingResponse(message="Meeting proposed successfully", meeting=service.describe(meeting))


router.add_api_route(
    "/book",
    book_meeting,
    methods=["POST"],
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a meeting (alias of /bookings/book)",
)


@router.put("/{meeting_id}", response_model=MeetingRead, summary="Update meeting")
def update_meeting(
    meeting_id: UUID,
    payload: MeetingUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> MeetingRead:
    service = BookingService(session)
    with operation_guard("Failed to update meeting"):
        meeting = service.update_meeting(
            current_user,
            meeting_id,
            title=payload.title,
            description=payload.description,
            date=payload.date,
            time=payload.time,
        )
        return service.describe(meeting)


@router.delete("/{meeting_id}", response_model=MessageResponse, summary="Delete meeting")
def delete_meeting(
    meeting_id: UUID,
    session: SessionDep,
    current_user: CurrentUser,
) -> MessageResponse:
    with operation_guard("Failed to delete meeting"):
        BookingService(session).delete_meeting(current_user, meeting_id)
    return MessageResponse(message="Meeting deleted successfully")


@router.put("/{meeting_id}/accept", response_model=MeetingResponse, summary="Accept meeting")
def accept_meeting(
    meeting_id: UUID,
    session: SessionDep,
    current_user: CurrentUser,
) -> MeetingResponse:
    service = BookingService(session)
    with operation_guard("Failed to accept meeting"):
        meeting = service.accept_meeting(meeting_id)
        return MeetingResponse(message="Meeting accepted successfully", meeting=service.describe(meeting))


@router.put("/{meeting_id}/decline", response_model=MeetingResponse, summary="Decline meeting")
def decline_meeting(
    meeting_id: UUID,
    session: SessionDep,
    current_user: CurrentUser,
) -> MeetingResponse:
    service = BookingService(session)
    with operation_guard("Failed to decline meeting"):
        meeting = service.decline_meeting(meeting_id)
        return MeetingResponse(message="Meeting declined successfully", meeting=service.describe(meeting))
