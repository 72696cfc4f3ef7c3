"""
Override mutation: set_entry and set_entries_for_slots return new collections
and decide between Assigned, Clear and no entry per slot.
"""

from __future__ import annotations

from daytally.core.resolution import materialize_day, set_entries_for_slots, set_entry
from daytally.domain.records import CLEAR, Assigned, DailySchedule, TimeEntry

MONDAY = "2024-03-04"
TUESDAY = "2024-03-05"

WORK = DailySchedule(
    id="s-work",
    tag_id="work",
    start_minute=540,
    end_minute=1020,
    weekdays=frozenset({1, 2, 3, 4, 5}),
    starts_on="2024-01-01",
)
SCHEDULES = (WORK,)


def _overrides(entries, date_str):
    return {e.slot: e.override for e in entries if e.date == date_str}


def test_assign_adds_entry():
    entries = set_entry((), MONDAY, 5, "exercise", interval=30, schedules=SCHEDULES)
    assert entries == (TimeEntry(MONDAY, 5, Assigned("exercise")),)


def test_assign_replaces_existing_entry():
    start = (TimeEntry(MONDAY, 5, Assigned("exercise")),)
    entries = set_entry(start, MONDAY, 5, "break", interval=30, schedules=SCHEDULES)
    assert entries == (TimeEntry(MONDAY, 5, Assigned("break")),)


def test_assign_does_not_mutate_input():
    start = [TimeEntry(MONDAY, 5, Assigned("exercise"))]
    set_entry(start, MONDAY, 5, "break", interval=30, schedules=SCHEDULES)
    assert start == [TimeEntry(MONDAY, 5, Assigned("exercise"))]


def test_assign_keeps_other_dates_and_slots():
    start = (TimeEntry(TUESDAY, 5, Assigned("sleep")), TimeEntry(MONDAY, 6, CLEAR))
    entries = set_entry(start, MONDAY, 5, "work", interval=30, schedules=SCHEDULES)
    assert set(entries) == {
        TimeEntry(TUESDAY, 5, Assigned("sleep")),
        TimeEntry(MONDAY, 6, CLEAR),
        TimeEntry(MONDAY, 5, Assigned("work")),
    }


def test_clear_uncovered_slot_stores_nothing():
    entries = set_entry((), MONDAY, 2, None, interval=30, schedules=SCHEDULES)
    assert entries == ()


def test_clear_uncovered_slot_removes_manual_entry():
    start = (TimeEntry(MONDAY, 2, Assigned("personal")),)
    entries = set_entry(start, MONDAY, 2, None, interval=30, schedules=SCHEDULES)
    assert entries == ()


def test_clear_uncovered_slot_twice_is_noop():
    once = set_entry((), MONDAY, 2, None, interval=30, schedules=SCHEDULES)
    twice = set_entry(once, MONDAY, 2, None, interval=30, schedules=SCHEDULES)
    assert once == twice == ()


def test_clear_covered_slot_stores_one_clear_entry():
    entries = set_entry((), MONDAY, 20, None, interval=30, schedules=SCHEDULES)
    assert entries == (TimeEntry(MONDAY, 20, CLEAR),)

    assignments = materialize_day(MONDAY, 48, 30, SCHEDULES, _overrides(entries, MONDAY))
    assert 20 not in {a.slot for a in assignments}


def test_clear_covered_slot_twice_keeps_one_entry():
    once = set_entry((), MONDAY, 20, None, interval=30, schedules=SCHEDULES)
    twice = set_entry(once, MONDAY, 20, None, interval=30, schedules=SCHEDULES)
    assert twice == (TimeEntry(MONDAY, 20, CLEAR),)


def test_clear_depends_on_weekday_activity():
    # The work schedule is off on Sunday, so nothing needs recording
    entries = set_entry((), "2024-03-03", 20, None, interval=30, schedules=SCHEDULES)
    assert entries == ()


def test_batch_assign_collapses_duplicate_slots():
    entries = set_entries_for_slots((), MONDAY, [4, 5, 4, 5, 6], "exercise", interval=30, schedules=SCHEDULES)
    assert sorted(e.slot for e in entries) == [4, 5, 6]
    assert all(e.override == Assigned("exercise") for e in entries)


def test_batch_clear_mixed_coverage():
    start = (
        TimeEntry(MONDAY, 16, Assigned("personal")),
        TimeEntry(MONDAY, 18, Assigned("break")),
    )
    entries = set_entries_for_slots(start, MONDAY, [16, 17, 18, 19], None, interval=30, schedules=SCHEDULES)
    assert set(entries) == {TimeEntry(MONDAY, 18, CLEAR), TimeEntry(MONDAY, 19, CLEAR)}


def test_batch_empty_returns_collection_unchanged():
    start = (TimeEntry(MONDAY, 1, Assigned("sleep")),)
    assert set_entries_for_slots(start, MONDAY, [], "work", interval=30, schedules=SCHEDULES) == start


def test_batch_matches_repeated_single_edits():
    slots = [17, 18, 30, 40]
    batch = set_entries_for_slots((), MONDAY, slots, None, interval=30, schedules=SCHEDULES)
    single = ()
    for slot in slots:
        single = set_entry(single, MONDAY, slot, None, interval=30, schedules=SCHEDULES)
    assert set(batch) == set(single)


def test_empty_tag_id_clears_instead_of_assigning():
    assert set_entry((), MONDAY, 3, "", interval=30, schedules=SCHEDULES) == ()
    assert set_entry((), MONDAY, 20, "", interval=30, schedules=SCHEDULES) == (TimeEntry(MONDAY, 20, CLEAR),)
    batch = set_entries_for_slots((), MONDAY, [3, 20], "", interval=30, schedules=SCHEDULES)
    assert batch == (TimeEntry(MONDAY, 20, CLEAR),)
