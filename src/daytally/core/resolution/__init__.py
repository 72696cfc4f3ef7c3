"""
Slot resolution engine.

Given a day split into fixed-length slots, decides which tag applies to each
slot by merging recurring schedules with per-slot manual overrides:

- normalize_schedule: fill defaults on stored schedule records
- is_schedule_active / is_slot_covered: schedule applicability
- resolve_effective_tag / materialize_day: read side
- set_entry / set_entries_for_slots: write side (pure reducers)
"""

from .coverage import (
    is_schedule_active,
    is_slot_covered,
    schedule_intervals,
    slot_overlaps_range,
    weekday_of,
)
from .mutator import set_entries_for_slots, set_entry
from .normalize import new_schedule_id, normalize_schedule, normalize_schedules, today_str
from .resolver import (
    EntryIndex,
    index_entries_by_date,
    materialize_day,
    resolve_effective_tag,
    resolve_scheduled_tag,
)

__all__ = [
    # Normalization
    "normalize_schedule",
    "normalize_schedules",
    "new_schedule_id",
    "today_str",
    # Applicability
    "weekday_of",
    "is_schedule_active",
    "slot_overlaps_range",
    "schedule_intervals",
    "is_slot_covered",
    # Resolution
    "EntryIndex",
    "index_entries_by_date",
    "resolve_scheduled_tag",
    "resolve_effective_tag",
    "materialize_day",
    # Mutation
    "set_entry",
    "set_entries_for_slots",
]
