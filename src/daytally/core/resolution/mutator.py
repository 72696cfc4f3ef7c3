"""Override mutation.

Turns user edits into a new manual-entry collection. The prior collection is
never modified; callers hand the returned tuple to the store, which replaces
the whole collection in one write.

Per (date, slot) the stored state is one of:

  no entry            - schedules decide
  Clear entry         - explicit "no tag" over a schedule default
  Assigned(tag) entry - explicit tag

Clearing a slot no schedule covers leaves no entry at all, so repeating the
clear is a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ...domain.records import CLEAR, Assigned, DailySchedule, TimeEntry
from .resolver import resolve_scheduled_tag


def _override_for(
    date_str: str,
    slot: int,
    tag_id: str | None,
    interval: int,
    schedules: Sequence[DailySchedule],
) -> TimeEntry | None:
    """Entry to store for one slot, or None when nothing needs recording.

    An empty tag id is treated as a clear; there is no Assigned("").
    """
    if tag_id:
        return TimeEntry(date=date_str, slot=slot, override=Assigned(tag_id))
    if resolve_scheduled_tag(date_str, slot, interval, schedules) is None:
        return None
    return TimeEntry(date=date_str, slot=slot, override=CLEAR)


def set_entry(
    entries: Iterable[TimeEntry],
    date_str: str,
    slot: int,
    tag_id: str | None,
    *,
    interval: int,
    schedules: Sequence[DailySchedule],
) -> tuple[TimeEntry, ...]:
    """Record a single-slot edit. tag_id=None (or "") clears the slot."""
    kept = [e for e in entries if not (e.date == date_str and e.slot == slot)]
    entry = _override_for(date_str, slot, tag_id, interval, schedules)
    if entry is not None:
        kept.append(entry)
    return tuple(kept)


def set_entries_for_slots(
    entries: Iterable[TimeEntry],
    date_str: str,
    slots: Iterable[int],
    tag_id: str | None,
    *,
    interval: int,
    schedules: Sequence[DailySchedule],
) -> tuple[TimeEntry, ...]:
    """Record one edit across many slots of a date as a single replacement.

    Duplicate slots collapse to one. Each slot's clear decision depends only on
    the schedule set, never on other slots in the batch. An empty batch returns
    the collection unchanged.
    """
    entries = tuple(entries)
    unique_slots = list(dict.fromkeys(slots))
    if not unique_slots:
        return entries

    slot_set = set(unique_slots)
    kept = [e for e in entries if not (e.date == date_str and e.slot in slot_set)]
    for slot in unique_slots:
        entry = _override_for(date_str, slot, tag_id, interval, schedules)
        if entry is not None:
            kept.append(entry)
    return tuple(kept)


__all__ = ["set_entry", "set_entries_for_slots"]
