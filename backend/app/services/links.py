from __future__ import annotations

from uuid import UUID

from app.core.config import settings


def booking_link(user_id: UUID) -> str:
    """Public page where visitors book into ``user_id``'s availability."""
    return f"{settings.FRONTEND_URL}/book/{user_id}"


def meeting_link(meeting_id: UUID) -> str:
    return f"{settings.FRONTEND_URL}/meeting/{meeting_id}"
