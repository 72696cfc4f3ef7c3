from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.resolution import normalize_schedule
from ..infra.exceptions import ValidationError
from ..infra.logging import get_logger
from ..infra.validation import validate_date, validate_minute, validate_weekdays
from .schedule_list import _schedule_to_dict
from .snapshot import load_schedules, load_settings, replace_schedules

_log = get_logger(__name__)


def add_schedule(
    db: Session,
    *,
    tag_id: str,
    start: str | int,
    end: str | int,
    weekdays: list[str | int] | None = None,
    starts_on: str | None = None,
) -> dict[str, Any]:
    """Append a recurring schedule. It takes precedence over every existing one.

    Args:
        db: Database session
        tag_id: Tag the schedule assigns (not checked against the tag list)
        start: Start as HH:MM or minutes after midnight
        end: End as HH:MM (24:00 allowed) or minutes; equal to start means all day,
            earlier than start wraps past midnight
        weekdays: Days the schedule applies (names or 0 = Sunday); all days when omitted
        starts_on: First date the schedule applies (YYYY-MM-DD); today when omitted

    Raises:
        ValueError: If any value is malformed
    """
    if not tag_id or not tag_id.strip():
        raise ValidationError("Schedule tag id cannot be empty")

    schedule = normalize_schedule(
        {
            "tag_id": tag_id.strip(),
            "start_minute": validate_minute(start),
            "end_minute": validate_minute(end),
            "weekdays": validate_weekdays(weekdays),
            "starts_on": validate_date(starts_on) if starts_on else None,
        }
    )

    schedules = list(load_schedules(db))
    schedules.append(schedule)
    replace_schedules(db, schedules)
    _log.info("schedule_added", schedule_id=schedule.id, tag_id=schedule.tag_id)

    return _schedule_to_dict(schedule, load_settings(db).clock_format)


__all__ = ["add_schedule"]
