"""Validation of booking requests against existing meetings and availability."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from app.core.errors import AppError, ConflictError, NotFoundError, ValidationError
from app.models import Availability
from app.services.stores import AvailabilityStore, MeetingStore
from app.services.time_slots import is_valid_hhmm, within_window
from app.services.weekdays import Weekday


class BookingRejection(str, Enum):
    INVALID_FORMAT = "InvalidFormat"
    MISSING_FIELD = "MissingField"
    SLOT_TAKEN = "SlotTaken"
    NO_AVAILABILITY = "NoAvailability"
    OUTSIDE_AVAILABILITY = "OutsideAvailability"


_REJECTION_ERRORS: dict[BookingRejection, type[AppError]] = {
    BookingRejection.INVALID_FORMAT: ValidationError,
    BookingRejection.MISSING_FIELD: ValidationError,
    BookingRejection.SLOT_TAKEN: ConflictError,
    BookingRejection.NO_AVAILABILITY: NotFoundError,
    BookingRejection.OUTSIDE_AVAILABILITY: ValidationError,
}


def rejection_error(reason: BookingRejection, message: str) -> AppError:
    """Error to raise for a rejected booking, keeping the reason as its code."""
    return _REJECTION_ERRORS[reason](message, code=reason.value)


@dataclass(frozen=True)
class BookingDecision:
    reason: Optional[BookingRejection] = None
    message: str = ""
    meeting_date: Optional[date] = None
    availability: Optional[Availability] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def raise_for_rejection(self) -> None:
        if self.reason is not None:
            raise rejection_error(self.reason, self.message)


def parse_meeting_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` or an ISO datetime (its date part is used).

    Raises ``ValueError`` for anything else.
    """
    value = value.strip()
    if "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return date.fromisoformat(value)


def _rejected(reason: BookingRejection, message: str) -> BookingDecision:
    return BookingDecision(reason=reason, message=message)


class ConflictValidator:
    """Checks a requested (date, time, organizer) before a booking is written.

    Checks run in order and stop at the first failure: format, double booking,
    availability for the weekday, containment in [start, end). Nothing is
    written here.
    """

    def __init__(self, meetings: MeetingStore, availabilities: AvailabilityStore) -> None:
        self.meetings = meetings
        self.availabilities = availabilities

    def validate(
        self, requested_date: str, requested_time: str, organizer_id: UUID
    ) -> BookingDecision:
        try:
            meeting_date = parse_meeting_date(requested_date)
        except ValueError:
            return _rejected(BookingRejection.INVALID_FORMAT, "Invalid date format")
        if not is_valid_hhmm(requested_time):
            return _rejected(BookingRejection.INVALID_FORMAT, "Invalid time format")

        weekday = Weekday.from_date(meeting_date)

        if self.meetings.find_booking(meeting_date, requested_time, organizer_id):
            return _rejected(BookingRejection.SLOT_TAKEN, "This time slot is already booked")

        availability = self.availabilities.find_for_weekday(weekday, owner_id=organizer_id)
        if availability is None:
            return _rejected(
                BookingRejection.NO_AVAILABILITY, "No availability found for this day"
            )

        if not within_window(requested_time, availability.start_time, availability.end_time):
            return _rejected(
                BookingRejection.OUTSIDE_AVAILABILITY,
                "Requested time is outside of availability",
            )

        return BookingDecision(meeting_date=meeting_date, availability=availability)
