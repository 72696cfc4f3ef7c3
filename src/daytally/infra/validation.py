"""
Operator input validation shared by use cases.

The resolution engine itself never validates; these checks guard the CLI and
HTTP boundaries and raise ValidationError (a ValueError) on bad input.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from ..runtime.slot_grid import parse_clock_time, total_slots, validate_interval
from ..shared.types import ClockFormat, NotificationMode
from .exceptions import ValidationError

# 0 = Sunday ... 6 = Saturday
WEEKDAY_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")

# Schedule boundaries must fall on the finest slot length
QUARTER_HOUR = 15


def validate_date(date_str: str) -> str:
    """Validate a YYYY-MM-DD string and return it in canonical form."""
    try:
        return date.fromisoformat(date_str.strip()).isoformat()
    except (AttributeError, ValueError) as e:
        raise ValidationError(f"Invalid date format. Use YYYY-MM-DD: {e}") from None


def validate_slot(slot: int, interval: int) -> int:
    """Validate a slot index against the day's slot count."""
    limit = total_slots(interval)
    if not 0 <= slot < limit:
        raise ValidationError(f"Slot {slot} out of range. Valid slots: 0..{limit - 1}")
    return slot


def validate_slots(slots: Iterable[int], interval: int) -> list[int]:
    return [validate_slot(s, interval) for s in slots]


def validate_tag_id(tag_id: str | None) -> str | None:
    """Strip a tag id to assign. None means clear; a blank id is rejected."""
    if tag_id is None:
        return None
    if not tag_id.strip():
        raise ValidationError("Tag id cannot be empty. Use a clear to empty a slot")
    return tag_id.strip()


def validate_minute(value: str | int) -> int:
    """Accept minutes after midnight or an HH:MM clock time on a quarter hour."""
    if isinstance(value, int):
        minute = value
    elif value.strip().isdigit():
        minute = int(value.strip())
    else:
        try:
            minute = parse_clock_time(value)
        except ValueError as e:
            raise ValidationError(str(e)) from None
    if not 0 <= minute <= 1440:
        raise ValidationError(f"Minute {minute} out of range. Use 0..1440")
    if minute % QUARTER_HOUR:
        raise ValidationError(f"Minute {minute} is not on a quarter hour. Use multiples of {QUARTER_HOUR}")
    return minute


def validate_weekdays(days: Iterable[str | int] | None) -> list[int] | None:
    """Validate weekday filters given as numbers (0 = Sunday) or names (SUN, MON, ...)."""
    if days is None:
        return None

    validated: list[int] = []
    for day in days:
        if isinstance(day, int):
            number = day
        elif day.strip().isdigit():
            number = int(day.strip())
        elif day.strip().upper() in WEEKDAY_NAMES:
            number = WEEKDAY_NAMES.index(day.strip().upper())
        else:
            raise ValidationError(f"Invalid weekday '{day}'. Valid values: {list(WEEKDAY_NAMES)} or 0-6")
        if not 0 <= number <= 6:
            raise ValidationError(f"Invalid weekday '{day}'. Valid values: {list(WEEKDAY_NAMES)} or 0-6")
        if number not in validated:
            validated.append(number)
    return sorted(validated)


def validate_interval_setting(interval: int) -> int:
    try:
        return validate_interval(interval)
    except ValueError as e:
        raise ValidationError(str(e)) from None


def validate_clock_format(clock_format: int) -> int:
    try:
        return ClockFormat(clock_format).value
    except ValueError:
        raise ValidationError(
            f"Invalid clock format {clock_format!r}. Valid values: {[c.value for c in ClockFormat]}"
        ) from None


def validate_notification_mode(mode: str) -> NotificationMode:
    try:
        return NotificationMode(mode.strip().lower())
    except (AttributeError, ValueError):
        raise ValidationError(
            f"Invalid notification mode '{mode}'. Valid values: {[m.value for m in NotificationMode]}"
        ) from None
