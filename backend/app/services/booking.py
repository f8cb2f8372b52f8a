"""Meeting booking and the proposal / accept / decline lifecycle."""

from __future__ import annotations

import logging
from datetime import date as date_type, datetime, timezone
from typing import Optional, Tuple
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlmodel import Session

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.models import Meeting, User
from app.schemas.meeting import MeetingRead, MeetingWithAdjustedDate
from app.services.booking_validator import (
    BookingRejection,
    ConflictValidator,
    parse_meeting_date,
    rejection_error,
)
from app.services.links import meeting_link
from app.services.stores import AvailabilityStore, MeetingStore, SlotTakenError
from app.services.time_slots import compute_slots, is_valid_hhmm, parse_hhmm
from app.services.weekdays import Weekday

logger = logging.getLogger(__name__)

# Status given to meetings booked through the public link
DIRECT_BOOKING_STATUS = "proposed"


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def resolve_time_zone(name: Optional[str]) -> ZoneInfo:
    """Zone for ``name``, or UTC when it is missing or unknown."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("Unknown time zone %r, falling back to UTC", name)
    return ZoneInfo("UTC")


def adjusted_date(meeting: Meeting, time_zone: Optional[str]) -> str:
    """Meeting start (stored as UTC) rendered like ``1/15/2025, 3:30:00 PM``.

    A stored time that is not a valid ``HH:MM`` is rendered as is after the date.
    """
    day = meeting.date
    if not is_valid_hhmm(meeting.time):
        logger.warning("Meeting %s has an invalid stored time %r", meeting.id, meeting.time)
        return f"{day.month}/{day.day}/{day.year}, {meeting.time}"
    hour, minute = parse_hhmm(meeting.time)
    starts_at = datetime(
        day.year, day.month, day.day, hour, minute,
        tzinfo=timezone.utc,
    )
    local = starts_at.astimezone(resolve_time_zone(time_zone))
    hour12 = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour12}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def _parse_date_or_400(value: str) -> date_type:
    try:
        return parse_meeting_date(value)
    except ValueError:
        raise ValidationError("Invalid date format", code=BookingRejection.INVALID_FORMAT.value) from None


def _check_time_or_400(value: str) -> str:
    if not is_valid_hhmm(value):
        raise ValidationError("Invalid time format", code=BookingRejection.INVALID_FORMAT.value)
    return value


class BookingService:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.meetings = MeetingStore(session)
        self.availabilities = AvailabilityStore(session)
        self.validator = ConflictValidator(self.meetings, self.availabilities)

    def describe(self, meeting: Meeting) -> MeetingRead:
        return MeetingRead.model_validate(meeting).model_copy(
            update={"participants": self.meetings.participant_ids(meeting.id)}
        )

    def book_meeting(
        self,
        *,
        title: Optional[str],
        date: Optional[str],
        time: Optional[str],
        requester_name: Optional[str],
        requester_email: Optional[str],
        organizer_id: Optional[str],
        notes: Optional[str] = None,
    ) -> Tuple[Meeting, str]:
        """Book a slot in the organizer's availability.

        Returns the stored meeting and its shareable link. Rejections are
        raised as ``AppError`` subclasses whose ``code`` is the rejection
        reason.
        """
        required = (title, date, time, requester_name, requester_email, organizer_id)
        if any(_blank(value) for value in required):
            raise rejection_error(
                BookingRejection.MISSING_FIELD,
                "Title, date, time, name, email, and userId are required",
            )

        try:
            organizer = UUID(str(organizer_id))
        except ValueError:
            raise rejection_error(BookingRejection.INVALID_FORMAT, "Invalid userId") from None

        decision = self.validator.validate(date, time, organizer)
        if not decision.ok:
            logger.info(
                "Booking rejected (%s) for organizer=%s date=%s time=%s",
                decision.reason.value, organizer, date, time,
            )
        decision.raise_for_rejection()

        meeting = Meeting(
            title=title.strip(),
            date=decision.meeting_date,
            time=time,
            name=requester_name.strip(),
            email=requester_email.strip(),
            notes=notes,
            organizer_id=organizer,
            status=DIRECT_BOOKING_STATUS,
        )
        try:
            meeting = self.meetings.add(meeting)
        except SlotTakenError:
            # Another request wrote the same slot after our check
            logger.warning("Concurrent booking for organizer=%s date=%s time=%s", organizer, date, time)
            raise rejection_error(
                BookingRejection.SLOT_TAKEN, "This time slot is already booked"
            ) from None

        logger.info("Booked meeting id=%s for organizer=%s", meeting.id, organizer)
        return meeting, meeting_link(meeting.id)

    def available_slots_for_date(
        self, requested_date: str, organizer_id: Optional[UUID] = None
    ) -> list[str]:
        """Open start times on ``requested_date``.

        Scoped to an organizer, already booked times are left out. Without one,
        the first availability covering that weekday is used as is.
        """
        meeting_date = _parse_date_or_400(requested_date)
        weekday = Weekday.from_date(meeting_date)
        availability = self.availabilities.find_for_weekday(weekday, owner_id=organizer_id)
        if availability is None:
            raise NotFoundError("No availability found for this date")

        slots = compute_slots(
            availability.start_time,
            availability.end_time,
            availability.duration or settings.DEFAULT_SLOT_MINUTES,
        )
        if organizer_id is not None:
            booked = self.meetings.booked_times(meeting_date, organizer_id)
            slots = [slot for slot in slots if slot not in booked]
        return slots

    def get_meeting(self, meeting_id: UUID) -> Meeting:
        meeting = self.meetings.get(meeting_id)
        if meeting is None:
            raise NotFoundError("Meeting not found")
        return meeting

    def list_meetings(self, user: User) -> list[MeetingWithAdjustedDate]:
        return [
            MeetingWithAdjustedDate(
                **self.describe(meeting).model_dump(),
                adjusted_date=adjusted_date(meeting, user.time_zone),
            )
            for meeting in self.meetings.list_for_user(user.id)
        ]

    def create_meeting(
        self,
        organizer: User,
        *,
        title: str,
        date: str,
        time: str,
        description: Optional[str] = None,
        participant_ids: tuple[UUID, ...] = (),
        status: str = "proposed",
    ) -> Meeting:
        if _blank(title) or _blank(date) or _blank(time):
            raise ValidationError(
                "Title, date, and time are required",
                code=BookingRejection.MISSING_FIELD.value,
            )
        meeting = Meeting(
            title=title.strip(),
            description=description,
            date=_parse_date_or_400(date),
            time=_check_time_or_400(time),
            organizer_id=organizer.id,
            status=status,
        )
        try:
            return self.meetings.add(meeting, participant_ids)
        except SlotTakenError:
            raise rejection_error(
                BookingRejection.SLOT_TAKEN, "This time slot is already booked"
            ) from None

    def propose_meeting(
        self,
        organizer: User,
        *,
        title: str,
        date: str,
        time: str,
        participant_id: UUID,
        description: Optional[str] = None,
    ) -> Meeting:
        if self.session.get(User, participant_id) is None:
            raise NotFoundError("Participant not found")
        meeting = self.create_meeting(
            organizer,
            title=title,
            date=date,
            time=time,
            description=description,
            participant_ids=(participant_id,),
            status="proposed",
        )
        logger.info("Meeting %s proposed to participant %s", meeting.id, participant_id)
        return meeting

    def _owned_meeting(self, organizer: User, meeting_id: UUID) -> Meeting:
        meeting = self.meetings.get(meeting_id)
        if meeting is None or meeting.organizer_id != organizer.id:
            raise NotFoundError("Meeting not found")
        return meeting

    def update_meeting(
        self,
        organizer: User,
        meeting_id: UUID,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        date: Optional[str] = None,
        time: Optional[str] = None,
    ) -> Meeting:
        meeting = self._owned_meeting(organizer, meeting_id)
        if title is not None:
            if _blank(title):
                raise ValidationError("Title must not be empty")
            meeting.title = title.strip()
        if description is not None:
            meeting.description = description
        if date is not None:
            meeting.date = _parse_date_or_400(date)
        if time is not None:
            meeting.time = _check_time_or_400(time)
        try:
            return self.meetings.save(meeting)
        except SlotTakenError:
            raise rejection_error(
                BookingRejection.SLOT_TAKEN, "This time slot is already booked"
            ) from None

    def delete_meeting(self, organizer: User, meeting_id: UUID) -> None:
        meeting = self._owned_meeting(organizer, meeting_id)
        self.meetings.delete(meeting)
        logger.info("Deleted meeting %s", meeting_id)

    def accept_meeting(self, meeting_id: UUID) -> Meeting:
        return self._transition(meeting_id, "accepted")

    def decline_meeting(self, meeting_id: UUID) -> Meeting:
        return self._transition(meeting_id, "declined")

    def _transition(self, meeting_id: UUID, status: str) -> Meeting:
        # Pure status change: availability is not re-checked and an already
        # accepted or declined meeting can still be moved to the other state.
        meeting = self.meetings.set_status(meeting_id, status)
        if meeting is None:
            raise NotFoundError("Meeting not found")
        logger.info("Meeting %s %s", meeting_id, status)
        return meeting
