from .availability import (
    AvailabilityRead,
    AvailabilityResponse,
    AvailabilityUpdate,
    BookingLinkRead,
    DaySlotsRead,
    DurationUpdate,
    TimeSlotsRead,
)
from .meeting import (
    BookingRequest,
    BookingResponse,
    MeetingCreate,
    MeetingPropose,
    MeetingRead,
    MeetingResponse,
    MeetingUpdate,
    MeetingWithAdjustedDate,
    MessageResponse,
)
from .user import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserRead,
)

__all__ = [
    "AuthResponse",
    "AvailabilityRead",
    "AvailabilityResponse",
    "AvailabilityUpdate",
    "BookingLinkRead",
    "BookingRequest",
    "BookingResponse",
    "DaySlotsRead",
    "DurationUpdate",
    "MeetingCreate",
    "MeetingPropose",
    "MeetingRead",
    "MeetingResponse",
    "MeetingUpdate",
    "MeetingWithAdjustedDate",
    "MessageResponse",
    "ProfileResponse",
    "TimeSlotsRead",
    "UserCreate",
    "UserLogin",
    "UserRead",
]
