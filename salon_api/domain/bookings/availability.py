"""
Slot arithmetic for the booking engine.

Times are minutes since midnight; an appointment occupies the half-open
interval [start, start + duration).
"""

from datetime import date
from typing import Iterable, Optional

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    return f"{value // 60:02d}:{value % 60:02d}"


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """True when [start1, end1) and [start2, end2) share any instant"""
    return (
        (start2 <= start1 < end2)
        or (start2 < end1 <= end2)
        or (start1 <= start2 and end1 >= end2)
    )


def conflicts_with_any(start: int, end: int, occupied: Iterable[tuple[int, int]]) -> bool:
    return any(intervals_overlap(start, end, busy_start, busy_end) for busy_start, busy_end in occupied)


def generate_slots(
    window_start: int,
    window_end: int,
    duration: int,
    step: int,
    occupied: Iterable[tuple[int, int]] = (),
) -> list[str]:
    """Start times from window_start in `step` increments whose appointment fits
    before window_end and does not collide with an occupied interval"""
    if duration <= 0 or step <= 0:
        raise ValueError("Duration and step must be positive")

    occupied = list(occupied)
    slots = []
    current = window_start
    while current + duration <= window_end:
        if not conflicts_with_any(current, current + duration, occupied):
            slots.append(minutes_to_time(current))
        current += step
    return slots


def working_window(
    working_hours: Optional[dict], day: date, default_start: str, default_end: str
) -> Optional[tuple[int, int]]:
    """Opening window for `day` in minutes, or None when the salon is closed.

    Salons without configured hours for that weekday use the default window.
    """
    entry = (working_hours or {}).get(WEEKDAYS[day.weekday()])
    if not entry:
        return time_to_minutes(default_start), time_to_minutes(default_end)
    if entry.get("closed"):
        return None
    return time_to_minutes(entry["open"]), time_to_minutes(entry["close"])
