"""Effective tag resolution and day materialization.

Precedence for one (date, slot):

  1. A manual override for the slot wins outright. Clear resolves to no tag.
  2. Otherwise schedules are scanned in stored order and the LAST active
     schedule covering the slot wins, so the most recently added rule takes
     precedence over older overlapping ones.

Nothing here is cached. Callers re-materialize whenever the date, the
interval, the schedule set or the override set changes; the cost is
O(total_slots * schedules).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ...domain.records import (
    Assigned,
    Clear,
    DailySchedule,
    Override,
    SlotAssignment,
    TimeEntry,
)
from .coverage import is_schedule_active, is_slot_covered

# date -> slot -> override
EntryIndex = dict[str, dict[int, Override]]


def index_entries_by_date(entries: Iterable[TimeEntry]) -> EntryIndex:
    """Index a flat entry collection as date -> (slot -> override).

    If the collection holds two entries for the same (date, slot), the later
    one wins.
    """
    index: EntryIndex = {}
    for entry in entries:
        index.setdefault(entry.date, {})[entry.slot] = entry.override
    return index


def resolve_scheduled_tag(
    date_str: str,
    slot: int,
    interval: int,
    schedules: Sequence[DailySchedule],
) -> str | None:
    """Tag the schedules alone would give the slot, ignoring manual overrides."""
    tag_id: str | None = None
    for schedule in schedules:
        if not is_schedule_active(schedule, date_str):
            continue
        if is_slot_covered(slot, interval, schedule):
            # Keep scanning; a later schedule overrides this one
            tag_id = schedule.tag_id
    return tag_id or None


def resolve_effective_tag(
    date_str: str,
    slot: int,
    interval: int,
    schedules: Sequence[DailySchedule],
    overrides_for_date: Mapping[int, Override] | None = None,
) -> str | None:
    """Authoritative tag for one slot, or None if the slot is unlogged."""
    override = overrides_for_date.get(slot) if overrides_for_date else None
    if isinstance(override, Clear):
        return None
    if isinstance(override, Assigned):
        return override.tag_id or None
    return resolve_scheduled_tag(date_str, slot, interval, schedules)


def materialize_day(
    date_str: str,
    total_slots: int,
    interval: int,
    schedules: Sequence[DailySchedule],
    overrides_for_date: Mapping[int, Override] | None = None,
) -> list[SlotAssignment]:
    """Resolve every slot of a day, omitting slots that resolve to no tag."""
    assignments: list[SlotAssignment] = []
    for slot in range(total_slots):
        tag_id = resolve_effective_tag(date_str, slot, interval, schedules, overrides_for_date)
        if tag_id is None:
            continue
        assignments.append(SlotAssignment(slot=slot, tag_id=tag_id))
    return assignments


__all__ = [
    "EntryIndex",
    "index_entries_by_date",
    "resolve_scheduled_tag",
    "resolve_effective_tag",
    "materialize_day",
]
