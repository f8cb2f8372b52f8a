from datetime import date, timezone
from uuid import uuid4

import pytest
from sqlmodel import select

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models import Meeting
from app.services.booking import BookingService, adjusted_date, resolve_time_zone
from app.services.stores import MeetingStore

from conftest import MONDAY, SATURDAY, TUESDAY


@pytest.fixture
def service(session):
    return BookingService(session)


def _book(service, organizer, **overrides):
    payload = dict(
        title="Intro call",
        date=MONDAY,
        time="10:00",
        requester_name="Bob",
        requester_email="bob@example.com",
        organizer_id=str(organizer.id),
    )
    payload.update(overrides)
    return service.book_meeting(**payload)


class TestBookMeeting:
    def test_books_slot_and_returns_link(self, service, organizer, weekday_availability):
        meeting, link = _book(service, organizer)

        assert meeting.id is not None
        assert meeting.date == date(2025, 1, 6)
        assert meeting.time == "10:00"
        assert meeting.organizer_id == organizer.id
        assert meeting.name == "Bob"
        assert meeting.email == "bob@example.com"
        assert meeting.status == "proposed"
        assert link == f"http://frontend.test/meeting/{meeting.id}"

    @pytest.mark.parametrize("field", ["title", "date", "time", "requester_name", "requester_email", "organizer_id"])
    def test_missing_field(self, service, organizer, weekday_availability, field):
        with pytest.raises(ValidationError) as exc_info:
            _book(service, organizer, **{field: None})
        assert exc_info.value.code == "MissingField"

    def test_blank_field_counts_as_missing(self, service, organizer, weekday_availability):
        with pytest.raises(ValidationError) as exc_info:
            _book(service, organizer, title="   ")
        assert exc_info.value.code == "MissingField"

    def test_invalid_organizer_id(self, service, organizer, weekday_availability):
        with pytest.raises(ValidationError) as exc_info:
            _book(service, organizer, organizer_id="not-a-uuid")
        assert exc_info.value.code == "InvalidFormat"
        assert exc_info.value.message == "Invalid userId"

    def test_second_booking_of_same_slot_is_rejected(self, service, session, organizer, weekday_availability):
        _book(service, organizer)

        with pytest.raises(ConflictError) as exc_info:
            _book(service, organizer, requester_name="Carol", requester_email="carol@example.com")

        assert exc_info.value.code == "SlotTaken"
        assert exc_info.value.status_code == 400
        assert len(session.exec(select(Meeting)).all()) == 1

    def test_no_availability_on_weekend(self, service, organizer, weekday_availability):
        with pytest.raises(NotFoundError) as exc_info:
            _book(service, organizer, date=SATURDAY)
        assert exc_info.value.code == "NoAvailability"

    def test_outside_availability(self, service, organizer, weekday_availability):
        with pytest.raises(ValidationError) as exc_info:
            _book(service, organizer, time="18:00")
        assert exc_info.value.code == "OutsideAvailability"

    def test_rejected_booking_writes_nothing(self, service, session, organizer, weekday_availability):
        with pytest.raises(ValidationError):
            _book(service, organizer, time="07:00")
        assert session.exec(select(Meeting)).all() == []


class TestAvailableSlots:
    def test_slots_for_weekday(self, service, weekday_availability):
        slots = service.available_slots_for_date(MONDAY)
        assert slots[0] == "09:00"
        assert slots[-1] == "16:30"
        assert len(slots) == 16

    def test_uses_configured_duration(self, service, session, weekday_availability):
        weekday_availability.duration = 60
        session.add(weekday_availability)
        session.commit()
        assert service.available_slots_for_date(TUESDAY)[:3] == ["09:00", "10:00", "11:00"]

    def test_booked_times_are_filtered_for_organizer(self, service, organizer, weekday_availability):
        _book(service, organizer, time="09:30")
        slots = service.available_slots_for_date(MONDAY, organizer.id)
        assert "09:30" not in slots
        assert "09:00" in slots

    def test_no_availability(self, service, weekday_availability):
        with pytest.raises(NotFoundError):
            service.available_slots_for_date(SATURDAY)

    def test_invalid_date(self, service, weekday_availability):
        with pytest.raises(ValidationError):
            service.available_slots_for_date("06/01/2025")


class TestLifecycle:
    def test_accept_then_decline(self, service, organizer, weekday_availability):
        meeting, _ = _book(service, organizer)

        assert service.accept_meeting(meeting.id).status == "accepted"
        assert service.decline_meeting(meeting.id).status == "declined"

    def test_transition_of_unknown_meeting(self, service):
        with pytest.raises(NotFoundError):
            service.accept_meeting(uuid4())

    def test_propose_records_participant(self, service, organizer, make_user):
        guest = make_user(email="guest@example.com", name="Guest")
        meeting = service.propose_meeting(
            organizer, title="Sync", date=TUESDAY, time="11:00", participant_id=guest.id
        )

        assert meeting.status == "proposed"
        assert service.describe(meeting).participants == [guest.id]
        assert [m.id for m in service.list_meetings(guest)] == [meeting.id]

    def test_propose_to_unknown_participant(self, service, organizer):
        with pytest.raises(NotFoundError):
            service.propose_meeting(
                organizer, title="Sync", date=TUESDAY, time="11:00", participant_id=uuid4()
            )

    def test_only_organizer_can_delete(self, service, organizer, make_user):
        other = make_user(email="other@example.com")
        meeting = service.create_meeting(organizer, title="Plan", date=TUESDAY, time="14:00")

        with pytest.raises(NotFoundError):
            service.delete_meeting(other, meeting.id)

        service.delete_meeting(organizer, meeting.id)
        with pytest.raises(NotFoundError):
            service.get_meeting(meeting.id)

    def test_update_moves_meeting(self, service, organizer):
        meeting = service.create_meeting(organizer, title="Plan", date=TUESDAY, time="14:00")
        updated = service.update_meeting(organizer, meeting.id, time="15:30", title="Plan v2")
        assert updated.time == "15:30"
        assert updated.title == "Plan v2"


class TestAdjustedDate:
    def _meeting(self):
        return Meeting(title="t", date=date(2025, 1, 15), time="15:30", organizer_id=uuid4())

    def test_utc(self):
        assert adjusted_date(self._meeting(), "UTC") == "1/15/2025, 3:30:00 PM"

    def test_converts_to_zone(self):
        assert adjusted_date(self._meeting(), "America/New_York") == "1/15/2025, 10:30:00 AM"

    def test_midnight_is_twelve_am(self):
        meeting = Meeting(title="t", date=date(2025, 1, 15), time="00:05", organizer_id=uuid4())
        assert adjusted_date(meeting, "UTC") == "1/15/2025, 12:05:00 AM"

    @pytest.mark.parametrize("name", [None, "", "Mars/Olympus"])
    def test_unknown_zone_falls_back_to_utc(self, name):
        assert resolve_time_zone(name).key == "UTC"

    def test_invalid_stored_time_is_rendered_as_is(self):
        meeting = Meeting(title="t", date=date(2025, 1, 15), time="09:75", organizer_id=uuid4())
        assert adjusted_date(meeting, "UTC") == "1/15/2025, 09:75"


class TestMeetingStore:
    def test_unknown_status_is_rejected(self, session, organizer):
        store = MeetingStore(session)
        meeting = store.add(Meeting(title="t", date=date(2025, 1, 6), time="10:00", organizer_id=organizer.id))

        with pytest.raises(ValueError):
            store.set_status(meeting.id, "cancelled")
        assert store.get(meeting.id).status == "proposed"

    def test_add_rejects_unknown_status(self, session, organizer):
        meeting = Meeting(title="t", date=date(2025, 1, 6), time="10:00", organizer_id=organizer.id, status="maybe")
        with pytest.raises(ValueError):
            MeetingStore(session).add(meeting)

    def test_new_records_use_aware_utc_timestamps(self):
        meeting = Meeting(title="t", date=date(2025, 1, 6), time="10:00", organizer_id=uuid4())
        assert meeting.created_at.tzinfo is timezone.utc
        meeting.touch()
        assert meeting.updated_at.tzinfo is timezone.utc
