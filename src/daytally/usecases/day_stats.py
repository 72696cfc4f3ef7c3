from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from ..config.defaults import DAY_MINUTES, UNKNOWN_TAG_COLOR, UNKNOWN_TAG_NAME
from ..domain.records import SlotAssignment, Tag
from ..infra.validation import validate_date
from .day_show import materialize_snapshot_day
from .snapshot import load_snapshot


@dataclass(frozen=True)
class TagMinutes:
    tag_id: str
    name: str
    color: str
    minutes: int


def summarize_day(
    assignments: Sequence[SlotAssignment],
    interval: int,
    tags: Mapping[str, Tag],
) -> list[TagMinutes]:
    """Minutes per tag, largest first. Tag ids with no tag are named "Unknown"."""
    minutes_by_tag: dict[str, int] = {}
    for assignment in assignments:
        minutes_by_tag[assignment.tag_id] = minutes_by_tag.get(assignment.tag_id, 0) + interval

    stats = []
    for tag_id, minutes in minutes_by_tag.items():
        tag = tags.get(tag_id)
        stats.append(
            TagMinutes(
                tag_id=tag_id,
                name=tag.name if tag else UNKNOWN_TAG_NAME,
                color=tag.color if tag else UNKNOWN_TAG_COLOR,
                minutes=minutes,
            )
        )
    # sorted() is stable, so ties keep first-logged order
    return sorted(stats, key=lambda s: s.minutes, reverse=True)


def format_duration(minutes: int) -> str:
    """Compact duration label: 45m, 2h, 1h 30m."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def day_stats(db: Session, *, date: str) -> dict[str, Any]:
    """Logged minutes per tag for one day.

    Raises:
        ValueError: If the date is invalid
    """
    date_str = validate_date(date)
    snapshot = load_snapshot(db)
    assignments = materialize_snapshot_day(snapshot, date_str)
    stats = summarize_day(assignments, snapshot.settings.interval, snapshot.tag_by_id())
    logged = sum(s.minutes for s in stats)

    return {
        "date": date_str,
        "stats": [
            {
                "tag_id": s.tag_id,
                "name": s.name,
                "color": s.color,
                "minutes": s.minutes,
                "duration": format_duration(s.minutes),
            }
            for s in stats
        ],
        "logged_minutes": logged,
        "unlogged_minutes": max(DAY_MINUTES - logged, 0),
        "total_minutes": DAY_MINUTES,
    }


__all__ = ["TagMinutes", "summarize_day", "format_duration", "day_stats"]
