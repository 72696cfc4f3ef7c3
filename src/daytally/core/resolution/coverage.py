"""Pure-function helpers for schedule activation and slot coverage.

No DB access, no side effects. Operates on normalized DailySchedule values.

Minutes are day-relative in [0, 1440]. A schedule whose start equals its end
covers the whole day; a schedule whose start is after its end wraps past
midnight and is split into [start, 1440) and [0, end).
"""

from __future__ import annotations

from datetime import date

from ...config.defaults import DAY_MINUTES
from ...domain.records import DailySchedule


def weekday_of(date_str: str) -> int:
    """Weekday of an ISO date with 0 = Sunday ... 6 = Saturday."""
    # date.weekday() is 0 = Monday
    return (date.fromisoformat(date_str).weekday() + 1) % 7


def is_schedule_active(schedule: DailySchedule, date_str: str) -> bool:
    """True if the schedule applies on date_str.

    ISO dates sort lexicographically, so the starts_on bound is a plain
    string comparison.
    """
    if date_str < schedule.starts_on:
        return False
    return weekday_of(date_str) in schedule.weekdays


def slot_overlaps_range(slot_start: int, slot_end: int, range_start: int, range_end: int) -> bool:
    """Half-open overlap of [slot_start, slot_end) and [range_start, range_end)."""
    return slot_start < range_end and slot_end > range_start


def schedule_intervals(schedule: DailySchedule) -> list[tuple[int, int]]:
    """Split a schedule's range into non-wrapping [start, end) intervals."""
    start, end = schedule.start_minute, schedule.end_minute
    if start == end:
        return [(0, DAY_MINUTES)]
    if start < end:
        return [(start, end)]
    # Wraps around midnight
    intervals: list[tuple[int, int]] = []
    if start < DAY_MINUTES:
        intervals.append((start, DAY_MINUTES))
    if end > 0:
        intervals.append((0, end))
    return intervals


def is_slot_covered(slot: int, interval: int, schedule: DailySchedule) -> bool:
    """True if the schedule's time range overlaps the slot.

    slot covers [slot * interval, slot * interval + interval).
    """
    if schedule.is_full_day:
        return True

    slot_start = slot * interval
    slot_end = slot_start + interval
    return any(
        slot_overlaps_range(slot_start, slot_end, range_start, range_end)
        for range_start, range_end in schedule_intervals(schedule)
    )


__all__ = [
    "weekday_of",
    "is_schedule_active",
    "slot_overlaps_range",
    "schedule_intervals",
    "is_slot_covered",
]
