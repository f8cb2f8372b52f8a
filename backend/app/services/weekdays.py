"""Canonical weekday type shared by availability storage and booking checks."""

from __future__ import annotations

from datetime import date
from enum import IntEnum
from typing import Iterable


class Weekday(IntEnum):
    """Day of week numbered like ``date.weekday()`` (Monday == 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        """Stored / displayed name, e.g. ``"Monday"``."""
        return self.name.capitalize()

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        """Locale independent weekday of a calendar date."""
        return cls(value.weekday())

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse a weekday name case-insensitively. Raises ``ValueError``."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid day of the week: {value}") from None


def canonical_days(values: Iterable[str]) -> list[str]:
    """Validate day names and return them de-duplicated, Monday first."""
    days = {Weekday.parse(value) for value in values}
    return [day.label for day in sorted(days)]
