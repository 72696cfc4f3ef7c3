from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from ..config.defaults import UNKNOWN_TAG_COLOR, UNKNOWN_TAG_NAME
from ..core.resolution import materialize_day, resolve_effective_tag
from ..infra.validation import validate_date
from ..runtime.slot_grid import current_slot, format_slot_range
from .snapshot import Snapshot, load_snapshot


def materialize_snapshot_day(snapshot: Snapshot, date_str: str):
    """Materialize one day from a snapshot."""
    interval = snapshot.settings.interval
    return materialize_day(
        date_str,
        snapshot.settings.total_slots,
        interval,
        snapshot.schedules,
        snapshot.overrides_for(date_str),
    )


def show_day(db: Session, *, date: str) -> dict[str, Any]:
    """Resolved tag for every logged slot of a day.

    Slots with no tag are omitted. Unknown tag ids are kept and labelled
    with a placeholder name.

    Raises:
        ValueError: If the date is invalid
    """
    date_str = validate_date(date)
    snapshot = load_snapshot(db)
    settings = snapshot.settings
    tags = snapshot.tag_by_id()

    slots = []
    for assignment in materialize_snapshot_day(snapshot, date_str):
        tag = tags.get(assignment.tag_id)
        slots.append(
            {
                "slot": assignment.slot,
                "label": format_slot_range(assignment.slot, settings.interval, settings.clock_format),
                "tag_id": assignment.tag_id,
                "tag_name": tag.name if tag else UNKNOWN_TAG_NAME,
                "color": tag.color if tag else UNKNOWN_TAG_COLOR,
            }
        )

    return {
        "date": date_str,
        "interval": settings.interval,
        "total_slots": settings.total_slots,
        "slots": slots,
        "count": len(slots),
    }


def is_previous_slot_logged(snapshot: Snapshot, now: datetime) -> bool:
    """Whether the slot that ended most recently today has a tag.

    At the first slot of the day there is nothing to check.
    """
    interval = snapshot.settings.interval
    slot = current_slot(now, interval)
    if slot == 0:
        return True
    today = now.date().isoformat()
    tag_id = resolve_effective_tag(
        today,
        slot - 1,
        interval,
        snapshot.schedules,
        snapshot.overrides_for(today),
    )
    return tag_id is not None


def previous_slot_status(db: Session, *, now: datetime) -> dict[str, Any]:
    snapshot = load_snapshot(db)
    interval = snapshot.settings.interval
    slot = current_slot(now, interval)
    return {
        "date": now.date().isoformat(),
        "current_slot": slot,
        "previous_slot": slot - 1 if slot > 0 else None,
        "previous_slot_logged": is_previous_slot_logged(snapshot, now),
        "notification_mode": snapshot.settings.notification_mode.value,
    }


__all__ = ["show_day", "materialize_snapshot_day", "is_previous_slot_logged", "previous_slot_status"]
