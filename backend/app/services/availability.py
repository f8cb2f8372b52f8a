from __future__ import annotations

import logging

from sqlmodel import Session

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.models import Availability, User
from app.services.stores import AvailabilityStore
from app.services.time_slots import compute_slots, is_before
from app.services.weekdays import Weekday, canonical_days

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Owner-scoped operations on the weekly availability window."""

    def __init__(self, session: Session) -> None:
        self.store = AvailabilityStore(session)

    def set_availability(
        self, owner: User, *, start_time: str, end_time: str, days: list[str]
    ) -> Availability:
        if not is_before(start_time, end_time):
            raise ValidationError("Start time must be earlier than end time")
        try:
            days = canonical_days(days)
        except ValueError as exc:
            raise ValidationError(str(exc)) from None
        availability = self.store.replace(
            owner.id, start_time=start_time, end_time=end_time, days=days
        )
        logger.info(
            "Availability for user %s set to %s-%s on %s",
            owner.id, start_time, end_time, ",".join(days) or "no days",
        )
        return availability

    def get_availability(self, owner: User) -> Availability:
        availability = self.store.get(owner.id)
        if availability is None:
            raise NotFoundError("No availability found")
        return availability

    def set_meeting_duration(self, owner: User, duration: int) -> Availability:
        if duration <= 0:
            raise ValidationError("Duration must be a positive number of minutes")
        availability = self.store.get(owner.id)
        if availability is None:
            raise NotFoundError("Set your availability before the meeting duration")
        return self.store.set_duration(availability, duration)

    def day_slots(self, owner: User, day: str) -> tuple[Availability, list[str]]:
        """Availability covering ``day`` and its bookable start times."""
        try:
            weekday = Weekday.parse(day)
        except ValueError:
            raise ValidationError("Invalid day of the week") from None

        availability = self.store.find_for_weekday(weekday, owner_id=owner.id)
        if availability is None:
            logger.info("No availability for user %s on %s", owner.id, weekday.label)
            raise NotFoundError("No availability found for this day")

        slots = compute_slots(
            availability.start_time,
            availability.end_time,
            availability.duration or settings.DEFAULT_SLOT_MINUTES,
        )
        return availability, slots
