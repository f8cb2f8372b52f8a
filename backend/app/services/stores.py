"""SQLModel-backed stores for availability windows and meetings.

The booking logic only talks to these two classes, so it stays independent of
how records are actually persisted.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, delete, or_, select

from app.models import MEETING_STATUSES, Availability, Meeting, MeetingParticipant
from app.services.weekdays import Weekday

logger = logging.getLogger(__name__)


class SlotTakenError(Exception):
    """Raised when the storage layer rejects a duplicate (date, time, organizer)."""


class AvailabilityStore:
    """At most one availability record per owner."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, owner_id: UUID) -> Optional[Availability]:
        return self.session.exec(
            select(Availability).where(Availability.user_id == owner_id)
        ).first()

    def find_for_weekday(
        self, weekday: Weekday, owner_id: Optional[UUID] = None
    ) -> Optional[Availability]:
        """Availability whose active days contain ``weekday``.

        Without an owner the first matching record of any user is returned.
        """
        if owner_id is not None:
            availability = self.get(owner_id)
            if availability and weekday.label in availability.days:
                return availability
            return None

        statement = select(Availability).order_by(Availability.created_at)
        for availability in self.session.exec(statement):
            if weekday.label in availability.days:
                return availability
        return None

    def replace(
        self,
        owner_id: UUID,
        *,
        start_time: str,
        end_time: str,
        days: List[str],
    ) -> Availability:
        """Replace the owner's window, creating the record on first use."""
        availability = self.get(owner_id)
        if availability is None:
            availability = Availability(
                user_id=owner_id,
                start_time=start_time,
                end_time=end_time,
                days=days,
            )
            logger.info("Creating availability for user %s", owner_id)
        else:
            availability.start_time = start_time
            availability.end_time = end_time
            availability.days = days
            availability.touch()
        self.session.add(availability)
        self.session.commit()
        self.session.refresh(availability)
        return availability

    def set_duration(self, availability: Availability, duration: int) -> Availability:
        availability.duration = duration
        availability.touch()
        self.session.add(availability)
        self.session.commit()
        self.session.refresh(availability)
        return availability


class MeetingStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, meeting_id: UUID) -> Optional[Meeting]:
        return self.session.get(Meeting, meeting_id)

    def find_booking(
        self, meeting_date: date, meeting_time: str, organizer_id: UUID
    ) -> Optional[Meeting]:
        return self.session.exec(
            select(Meeting).where(
                Meeting.date == meeting_date,
                Meeting.time == meeting_time,
                Meeting.organizer_id == organizer_id,
            )
        ).first()

    def booked_times(self, meeting_date: date, organizer_id: UUID) -> set[str]:
        return set(
            self.session.exec(
                select(Meeting.time).where(
                    Meeting.date == meeting_date,
                    Meeting.organizer_id == organizer_id,
                )
            ).all()
        )

    def list_for_user(self, user_id: UUID) -> List[Meeting]:
        """Meetings the user organizes or is invited to."""
        participant_meetings = select(MeetingParticipant.meeting_id).where(
            MeetingParticipant.user_id == user_id
        )
        statement = (
            select(Meeting)
            .where(
                or_(
                    Meeting.organizer_id == user_id,
                    Meeting.id.in_(participant_meetings),
                )
            )
            .order_by(Meeting.date, Meeting.time)
        )
        return list(self.session.exec(statement).all())

    def participant_ids(self, meeting_id: UUID) -> List[UUID]:
        return list(
            self.session.exec(
                select(MeetingParticipant.user_id).where(
                    MeetingParticipant.meeting_id == meeting_id
                )
            ).all()
        )

    def add(self, meeting: Meeting, participant_ids: Iterable[UUID] = ()) -> Meeting:
        """Persist a new meeting.

        Raises ``SlotTakenError`` when the unique (date, time, organizer)
        constraint rejects the insert.
        """
        _check_status(meeting.status)
        self.session.add(meeting)
        try:
            self.session.flush()
            for user_id in dict.fromkeys(participant_ids):
                self.session.add(MeetingParticipant(meeting_id=meeting.id, user_id=user_id))
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if _is_slot_violation(exc):
                raise SlotTakenError(str(exc.orig)) from exc
            raise
        self.session.refresh(meeting)
        return meeting

    def save(self, meeting: Meeting) -> Meeting:
        meeting.touch()
        self.session.add(meeting)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if _is_slot_violation(exc):
                raise SlotTakenError(str(exc.orig)) from exc
            raise
        self.session.refresh(meeting)
        return meeting

    def set_status(self, meeting_id: UUID, status: str) -> Optional[Meeting]:
        _check_status(status)
        meeting = self.get(meeting_id)
        if meeting is None:
            return None
        meeting.status = status
        return self.save(meeting)

    def delete(self, meeting: Meeting) -> None:
        self.session.exec(
            delete(MeetingParticipant).where(MeetingParticipant.meeting_id == meeting.id)
        )
        self.session.delete(meeting)
        self.session.commit()


def _check_status(status: str) -> None:
    if status not in MEETING_STATUSES:
        raise ValueError(f"Unknown meeting status: {status}")


def _is_slot_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig).lower()
    # SQLite reports the columns, PostgreSQL the constraint name
    return "uq_meetings_slot" in text or (
        "unique" in text and "meetings.date" in text and "meetings.organizer_id" in text
    )
