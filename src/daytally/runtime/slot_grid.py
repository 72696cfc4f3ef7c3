"""
Slot grid math: boundaries and labels defined once, centrally.

Pure functions over a day split into fixed slots (15 or 30 minutes).
Slot n covers [n * interval, (n + 1) * interval) minutes after local midnight.
"""

from __future__ import annotations

from datetime import datetime

from ..config.defaults import DAY_MINUTES
from ..shared.types import SlotInterval


def validate_interval(interval: int) -> int:
    """Return interval if it is a supported slot length, else raise ValueError."""
    try:
        return SlotInterval(interval).value
    except ValueError:
        raise ValueError(
            f"Invalid interval {interval!r}. Valid values: {[i.value for i in SlotInterval]}"
        ) from None


def total_slots(interval: int) -> int:
    """Number of slots in a day."""
    return DAY_MINUTES // interval


def current_slot(now: datetime, interval: int) -> int:
    """Slot containing the wall-clock time `now` (local time of `now`)."""
    minutes = now.hour * 60 + now.minute
    return minutes // interval


def format_slot_time(slot: int, interval: int, clock_format: int = 24) -> str:
    """Start label of a slot, e.g. "06:30" or "6:30 AM".

    slot == total_slots gives the end of the day ("24:00" / "12:00 AM").
    """
    total_minutes = slot * interval
    hours24, minutes = divmod(total_minutes, 60)

    if clock_format == 12:
        period = "PM" if hours24 % 24 >= 12 else "AM"
        hours12 = hours24 % 12 or 12
        return f"{hours12}:{minutes:02d} {period}"

    return f"{hours24:02d}:{minutes:02d}"


def format_slot_range(slot: int, interval: int, clock_format: int = 24) -> str:
    """Label for a slot's span, e.g. "06:00-06:30"."""
    start = format_slot_time(slot, interval, clock_format)
    end = format_slot_time(slot + 1, interval, clock_format)
    return f"{start}-{end}"


def format_minute_time(minute: int, clock_format: int = 24) -> str:
    """Label for a minute of the day, rounded down to the quarter hour.

    1440 is the end of the day.
    """
    if minute == DAY_MINUTES:
        return "24:00" if clock_format == 24 else "12:00 AM"

    clamped = max(0, min(DAY_MINUTES - 1, minute))
    return format_slot_time(clamped // 15, 15, clock_format)


def parse_clock_time(value: str) -> int:
    """Parse HH:MM (24h, 24:00 allowed) into minutes after midnight.

    Raises ValueError if the format is invalid.
    """
    value = value.strip()
    if value in ("24:00", "24:00:00"):
        return DAY_MINUTES

    parts = value.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time format '{value}'. Use HH:MM")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid time format '{value}'. Use HH:MM") from None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time format '{value}'. Use HH:MM")
    return hours * 60 + minutes
