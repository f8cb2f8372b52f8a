from __future__ import annotations

from fastapi import APIRouter

from app.api.deps import CurrentUser
from app.core.errors import operation_guard
from app.db import SessionDep
from app.schemas import (
    AvailabilityRead,
    AvailabilityResponse,
    AvailabilityUpdate,
    BookingLinkRead,
    DaySlotsRead,
    DurationUpdate,
)
from app.services.availability import AvailabilityService
from app.services.links import booking_link

router = APIRouter()


@router.post("", response_model=AvailabilityResponse, summary="Set weekly availability")
def set_availability(
    payload: AvailabilityUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> AvailabilityResponse:
    with operation_guard("Failed to set availability"):
        availability = AvailabilityService(session).set_availability(
            current_user,
            start_time=payload.start_time,
            end_time=payload.end_time,
            days=payload.days,
        )
    return AvailabilityResponse(
        message="Availability updated successfully",
        availability=AvailabilityRead.model_validate(availability),
    )


@router.get("", response_model=AvailabilityRead, summary="Get current user availability")
def get_availability(session: SessionDep, current_user: CurrentUser) -> AvailabilityRead:
    with operation_guard("Failed to fetch availability"):
        availability = AvailabilityService(session).get_availability(current_user)
    return AvailabilityRead.model_validate(availability)


@router.put("/duration", response_model=AvailabilityResponse, summary="Set meeting duration")
def set_meeting_duration(
    payload: DurationUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> AvailabilityResponse:
    with operation_guard("Failed to set meeting duration"):
        availability = AvailabilityService(session).set_meeting_duration(
            current_user, payload.duration
        )
    return AvailabilityResponse(
        message="Meeting duration updated successfully",
        availability=AvailabilityRead.model_validate(availability),
    )


# Must stay above the dynamic "/{day}" route
@router.get("/booking-link", response_model=BookingLinkRead, summary="Public booking link")
def get_booking_link(current_user: CurrentUser) -> BookingLinkRead:
    return BookingLinkRead(booking_link=booking_link(current_user.id))


@router.get("/{day}", response_model=DaySlotsRead, summary="Time slots for a weekday")
def get_day_slots(day: str, session: SessionDep, current_user: CurrentUser) -> DaySlotsRead:
    with operation_guard("Failed to fetch available slots"):
        availability, slots = AvailabilityService(session).day_slots(current_user, day)
    return DaySlotsRead(
        start_time=availability.start_time,
        end_time=availability.end_time,
        time_slots=slots,
    )
