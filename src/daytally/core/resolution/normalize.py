"""Schedule normalization.

Stored schedule records may be partial, hand-edited or written by older
versions. normalize_schedule() fills every field independently and never
raises, so downstream resolution can assume a complete DailySchedule.
"""

from __future__ import annotations

import uuid as uuid_module
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from ...config.defaults import ALL_WEEKDAYS, DAY_MINUTES
from ...domain.records import DailySchedule

# Accepted spellings per field: snake_case first, then the legacy camelCase keys
_FIELD_KEYS = {
    "id": ("id",),
    "tag_id": ("tag_id", "tagId"),
    "start_minute": ("start_minute", "startMinute"),
    "end_minute": ("end_minute", "endMinute"),
    "weekdays": ("weekdays",),
    "starts_on": ("starts_on", "startsOn"),
}


def new_schedule_id() -> str:
    """Fresh unique schedule identifier."""
    return f"schedule-{uuid_module.uuid4().hex}"


def today_str() -> str:
    """Today's local calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def _lookup(raw: Mapping[str, Any], name: str) -> Any:
    for key in _FIELD_KEYS[name]:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _minute(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        minute = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(DAY_MINUTES, minute))


def _weekdays(value: Any) -> frozenset[int]:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        return ALL_WEEKDAYS
    days = frozenset(
        d for d in value if isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 6
    )
    return days or ALL_WEEKDAYS


def _starts_on(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            pass
    return today_str()


def normalize_schedule(raw: Mapping[str, Any] | DailySchedule) -> DailySchedule:
    """Return a fully populated DailySchedule built from a possibly partial record.

    - missing id -> fresh ``schedule-<hex>`` token
    - missing tag id -> "" (resolves to no tag)
    - missing or garbled minutes -> 0, present values clamped to [0, 1440]
    - missing, empty or malformed weekdays -> all seven days
    - missing or unparseable starts_on -> today
    """
    if isinstance(raw, DailySchedule):
        raw = raw.to_dict()
    elif not isinstance(raw, Mapping):
        raw = {}

    schedule_id = _lookup(raw, "id")
    tag_id = _lookup(raw, "tag_id")

    return DailySchedule(
        id=str(schedule_id) if schedule_id not in (None, "") else new_schedule_id(),
        tag_id=str(tag_id) if tag_id is not None else "",
        start_minute=_minute(_lookup(raw, "start_minute")),
        end_minute=_minute(_lookup(raw, "end_minute")),
        weekdays=_weekdays(_lookup(raw, "weekdays")),
        starts_on=_starts_on(_lookup(raw, "starts_on")),
    )


def normalize_schedules(raws: list[Mapping[str, Any] | DailySchedule]) -> list[DailySchedule]:
    """Normalize a stored collection, preserving its order."""
    return [normalize_schedule(raw) for raw in raws]
