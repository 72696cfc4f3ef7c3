from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..infra.logging import get_logger
from .schedule_list import _find_schedule
from .snapshot import load_schedules, replace_schedules

_log = get_logger(__name__)


def delete_schedule(db: Session, *, schedule_id: str) -> dict[str, Any]:
    """Delete a schedule. Manual entries on the slots it covered are kept.

    Raises:
        ValueError: If the schedule is not found
    """
    schedules = list(load_schedules(db))
    removed = schedules.pop(_find_schedule(schedules, schedule_id))
    replace_schedules(db, schedules)
    _log.info("schedule_deleted", schedule_id=removed.id)

    return {"id": removed.id, "tag_id": removed.tag_id, "remaining": len(schedules)}


__all__ = ["delete_schedule"]
