from .availability import Availability
from .meeting import MEETING_STATUSES, Meeting
from .meeting_participant import MeetingParticipant
from .user import User

__all__ = [
    "Availability",
    "MEETING_STATUSES",
    "Meeting",
    "MeetingParticipant",
    "User",
]
