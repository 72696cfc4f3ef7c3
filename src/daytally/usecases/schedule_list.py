from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..domain.records import DailySchedule
from ..infra.exceptions import NotFoundError
from ..infra.validation import WEEKDAY_NAMES
from ..runtime.slot_grid import format_minute_time
from .snapshot import load_schedules, load_settings


def _find_schedule(schedules, schedule_id: str) -> int:
    """Index of the schedule with the given id.

    Raises NotFoundError if no schedule has that id.
    """
    for index, schedule in enumerate(schedules):
        if schedule.id == schedule_id:
            return index
    raise NotFoundError(f"Schedule '{schedule_id}' not found")


def _schedule_to_dict(schedule: DailySchedule, clock_format: int = 24) -> dict[str, Any]:
    payload = schedule.to_dict()
    payload["start"] = format_minute_time(schedule.start_minute, clock_format)
    payload["end"] = format_minute_time(schedule.end_minute, clock_format)
    payload["days"] = [WEEKDAY_NAMES[d] for d in sorted(schedule.weekdays)]
    payload["full_day"] = schedule.is_full_day
    payload["overnight"] = schedule.is_overnight
    return payload


def list_schedules(db: Session, *, tag_id: str | None = None) -> dict[str, Any]:
    """List schedules in precedence order (later entries win on overlap)."""
    clock_format = load_settings(db).clock_format
    schedules = [s for s in load_schedules(db) if tag_id is None or s.tag_id == tag_id]
    return {
        "schedules": [_schedule_to_dict(s, clock_format) for s in schedules],
        "count": len(schedules),
    }


def get_schedule(db: Session, *, schedule_id: str) -> dict[str, Any]:
    schedules = load_schedules(db)
    schedule = schedules[_find_schedule(schedules, schedule_id)]
    return _schedule_to_dict(schedule, load_settings(db).clock_format)


__all__ = ["list_schedules", "get_schedule"]
