from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.resolution import normalize_schedule
from ..infra.exceptions import ValidationError
from ..infra.logging import get_logger
from ..infra.validation import validate_date, validate_minute, validate_weekdays
from .schedule_list import _find_schedule, _schedule_to_dict
from .snapshot import load_schedules, load_settings, replace_schedules

_log = get_logger(__name__)


def update_schedule(
    db: Session,
    *,
    schedule_id: str,
    tag_id: str | None = None,
    start: str | int | None = None,
    end: str | int | None = None,
    weekdays: list[str | int] | None = None,
    starts_on: str | None = None,
) -> dict[str, Any]:
    """Merge new values into a schedule. Its id and position are kept.

    Raises:
        ValueError: If the schedule is not found or a value is malformed
    """
    schedules = list(load_schedules(db))
    index = _find_schedule(schedules, schedule_id)

    merged = schedules[index].to_dict()
    if tag_id is not None:
        if not tag_id.strip():
            raise ValidationError("Schedule tag id cannot be empty")
        merged["tag_id"] = tag_id.strip()
    if start is not None:
        merged["start_minute"] = validate_minute(start)
    if end is not None:
        merged["end_minute"] = validate_minute(end)
    if weekdays is not None:
        merged["weekdays"] = validate_weekdays(weekdays)
    if starts_on is not None:
        merged["starts_on"] = validate_date(starts_on)
    merged["id"] = schedule_id

    schedules[index] = normalize_schedule(merged)
    replace_schedules(db, schedules)
    _log.info("schedule_updated", schedule_id=schedule_id)

    return _schedule_to_dict(schedules[index], load_settings(db).clock_format)


__all__ = ["update_schedule"]
