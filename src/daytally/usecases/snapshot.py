from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config.defaults import (
    DEFAULT_CLOCK_FORMAT,
    DEFAULT_INTERVAL,
    DEFAULT_NOTIFICATION_MODE,
    DEFAULT_TAGS,
)
from ..core.resolution import index_entries_by_date, normalize_schedule
from ..core.resolution.resolver import EntryIndex
from ..domain.entities import EntryRow, ScheduleRow, SettingsRow, TagRow
from ..domain.records import (
    DailySchedule,
    Override,
    Tag,
    TimeEntry,
    UserSettings,
    override_from_tag_id,
    override_to_tag_id,
)
from ..infra.exceptions import StoreError
from ..infra.logging import get_logger
from ..shared.types import NotificationMode

_log = get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of every collection the engine reads, taken in one session."""

    tags: tuple[Tag, ...]
    schedules: tuple[DailySchedule, ...]
    entries: tuple[TimeEntry, ...]
    settings: UserSettings

    def entries_by_date(self) -> EntryIndex:
        return index_entries_by_date(self.entries)

    def overrides_for(self, date_str: str) -> dict[int, Override]:
        return self.entries_by_date().get(date_str, {})

    def tag_by_id(self) -> dict[str, Tag]:
        return {t.id: t for t in self.tags}


# ---------------------------------------------------------------------------
# Row <-> record conversion
# ---------------------------------------------------------------------------


def _schedule_from_row(row: ScheduleRow) -> DailySchedule:
    return normalize_schedule(
        {
            "id": row.id,
            "tag_id": row.tag_id,
            "start_minute": row.start_minute,
            "end_minute": row.end_minute,
            "weekdays": row.weekdays,
            "starts_on": row.starts_on,
        }
    )


def _apply_schedule(row: ScheduleRow, schedule: DailySchedule, position: int) -> None:
    row.position = position
    row.tag_id = schedule.tag_id
    row.start_minute = schedule.start_minute
    row.end_minute = schedule.end_minute
    row.weekdays = sorted(schedule.weekdays)
    row.starts_on = schedule.starts_on


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def load_tags(db: Session) -> tuple[Tag, ...]:
    rows = db.scalars(select(TagRow).order_by(TagRow.position, TagRow.created_at)).all()
    return tuple(Tag(id=r.id, name=r.name, color=r.color) for r in rows)


def load_schedules(db: Session) -> tuple[DailySchedule, ...]:
    """Schedules in insertion order, normalized."""
    rows = db.scalars(select(ScheduleRow).order_by(ScheduleRow.position)).all()
    return tuple(_schedule_from_row(r) for r in rows)


def load_entries(db: Session, date_str: str | None = None) -> tuple[TimeEntry, ...]:
    query = select(EntryRow).order_by(EntryRow.id)
    if date_str is not None:
        query = query.where(EntryRow.date == date_str)
    rows = db.scalars(query).all()
    return tuple(
        TimeEntry(date=r.date, slot=r.slot, override=override_from_tag_id(r.tag_id)) for r in rows
    )


def load_settings(db: Session) -> UserSettings:
    row = db.get(SettingsRow, 1)
    if row is None:
        return UserSettings()
    try:
        mode = NotificationMode(row.notification_mode)
    except ValueError:
        mode = NotificationMode(DEFAULT_NOTIFICATION_MODE)
    return UserSettings(
        interval=row.interval,
        clock_format=row.clock_format,
        notification_mode=mode,
    )


def load_snapshot(db: Session) -> Snapshot:
    return Snapshot(
        tags=load_tags(db),
        schedules=load_schedules(db),
        entries=load_entries(db),
        settings=load_settings(db),
    )


# ---------------------------------------------------------------------------
# Writes (whole-collection replacement)
# ---------------------------------------------------------------------------


def replace_entries(db: Session, entries: Iterable[TimeEntry]) -> int:
    """Replace the entire entry collection. Returns the new entry count.

    Rows are matched on (date, slot): matching rows are updated in place, rows
    absent from ``entries`` are deleted and the rest inserted, all in one flush.
    """
    existing = {(r.date, r.slot): r for r in db.scalars(select(EntryRow))}
    count = 0
    for entry in entries:
        tag_id = override_to_tag_id(entry.override)
        row = existing.pop((entry.date, entry.slot), None)
        if row is None:
            db.add(EntryRow(date=entry.date, slot=entry.slot, tag_id=tag_id))
        else:
            row.tag_id = tag_id
        count += 1
    for row in existing.values():
        db.delete(row)
    try:
        db.flush()
    except IntegrityError as e:
        raise StoreError(f"Entry collection rejected by store: {e.orig}") from e
    _log.info("entries_replaced", count=count, deleted=len(existing))
    return count


def replace_schedules(db: Session, schedules: Iterable[DailySchedule]) -> int:
    """Replace the entire schedule collection, keeping the given order."""
    existing = {r.id: r for r in db.scalars(select(ScheduleRow))}
    count = 0
    for position, schedule in enumerate(schedules):
        row = existing.pop(schedule.id, None)
        if row is None:
            row = ScheduleRow(id=schedule.id)
            db.add(row)
        _apply_schedule(row, schedule, position)
        count += 1
    for row in existing.values():
        db.delete(row)
    try:
        db.flush()
    except IntegrityError as e:
        raise StoreError(f"Schedule collection rejected by store: {e.orig}") from e
    _log.info("schedules_replaced", count=count, deleted=len(existing))
    return count


def save_settings(db: Session, user_settings: UserSettings) -> UserSettings:
    row = db.get(SettingsRow, 1)
    if row is None:
        row = SettingsRow(id=1)
        db.add(row)
    row.interval = user_settings.interval
    row.clock_format = user_settings.clock_format
    row.notification_mode = user_settings.notification_mode.value
    db.flush()
    return user_settings


def seed_defaults(db: Session) -> bool:
    """Seed default tags and settings into a store that has never been initialized.

    The settings row doubles as the initialization marker, so deleting every
    tag later does not bring the defaults back. Returns True if seeding ran.
    """
    if db.get(SettingsRow, 1) is not None:
        return False

    db.add(
        SettingsRow(
            id=1,
            interval=DEFAULT_INTERVAL,
            clock_format=DEFAULT_CLOCK_FORMAT,
            notification_mode=DEFAULT_NOTIFICATION_MODE,
        )
    )
    if db.scalars(select(TagRow.id).limit(1)).first() is None:
        db.add_all(
            TagRow(id=tag_id, name=name, color=color, position=position)
            for position, (tag_id, name, color) in enumerate(DEFAULT_TAGS)
        )
    db.flush()
    _log.info("store_seeded", tags=len(DEFAULT_TAGS))
    return True
