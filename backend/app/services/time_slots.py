"""Slot arithmetic on "HH:MM" strings.

All comparisons are done on (hour, minute) pairs within a single day.
"""

from __future__ import annotations

import re
from typing import List, Tuple

HHMM_RE = re.compile(r"(?:[01]\d|2[0-3]):[0-5]\d", re.ASCII)


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Split an "HH:MM" string into (hour, minute)."""
    hour, minute = value.split(":")
    return int(hour), int(minute)


def format_hhmm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def to_minutes(value: str) -> int:
    hour, minute = parse_hhmm(value)
    return hour * 60 + minute


def is_valid_hhmm(value: str) -> bool:
    return bool(HHMM_RE.fullmatch(value))


def is_before(first: str, second: str) -> bool:
    """True if ``first`` is strictly earlier than ``second`` on the same day."""
    return parse_hhmm(first) < parse_hhmm(second)


def within_window(value: str, start_time: str, end_time: str) -> bool:
    """Half-open containment: ``start_time <= value < end_time``."""
    return parse_hhmm(start_time) <= parse_hhmm(value) < parse_hhmm(end_time)


def compute_slots(start_time: str, end_time: str, step_minutes: int = 30) -> List[str]:
    """Bookable start times from ``start_time`` up to, but excluding, ``end_time``.

    A partial final slot is still emitted as long as its start is before
    ``end_time``. A degenerate window (start >= end) yields an empty list.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be greater than 0")

    hour, minute = parse_hhmm(start_time)
    end = parse_hhmm(end_time)
    slots: List[str] = []
    while (hour, minute) < end:
        slots.append(format_hhmm(hour, minute))
        minute += step_minutes
        hour += minute // 60
        minute %= 60
    return slots
