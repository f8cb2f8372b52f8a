from datetime import datetime, timezone

from sqlalchemy import DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Column type for timezone-aware timestamps
AwareDateTime = DateTime(timezone=True)
