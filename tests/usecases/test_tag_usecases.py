from __future__ import annotations

import pytest

from daytally.domain.records import Assigned, TimeEntry
from daytally.usecases import entry_set, schedule_add, schedule_list, tag_add, tag_delete, tag_list, tag_update
from daytally.usecases.snapshot import load_entries

MONDAY = "2024-03-04"


def test_list_seeded_tags(db):
    result = tag_list.list_tags(db)
    assert result["count"] == 5
    assert result["tags"][0] == {"id": "work", "name": "Work", "color": "#4A90D9"}


def test_add_tag_generates_id_and_color(db):
    result = tag_add.add_tag(db, name="Deep Reading")
    assert result["id"].startswith("deep-reading-")
    assert result["color"].startswith("#")
    assert tag_list.list_tags(db)["tags"][-1]["id"] == result["id"]


def test_add_tag_explicit_id_and_color(db):
    result = tag_add.add_tag(db, name="Commute", color="#8b8b8b", tag_id="commute")
    assert result == {"id": "commute", "name": "Commute", "color": "#8B8B8B"}


def test_add_tag_duplicate_id(db):
    with pytest.raises(ValueError, match="already exists"):
        tag_add.add_tag(db, name="Work again", tag_id="work")


def test_add_tag_reserved_id(db):
    with pytest.raises(ValueError, match="reserved"):
        tag_add.add_tag(db, name="Sneaky", tag_id="__tt_clear__")


@pytest.mark.parametrize("color", ["red", "#12345", "#GGGGGG"])
def test_add_tag_bad_color(db, color):
    with pytest.raises(ValueError, match="Invalid color"):
        tag_add.add_tag(db, name="Bad", color=color)


def test_add_tag_empty_name(db):
    with pytest.raises(ValueError, match="cannot be empty"):
        tag_add.add_tag(db, name="  ")


def test_get_tag_by_name_case_insensitive(db):
    assert tag_list.get_tag(db, tag_identifier="EXERCISE")["id"] == "exercise"


def test_update_tag_keeps_id(db):
    result = tag_update.update_tag(db, tag_identifier="break", name="Coffee", color="#123abc")
    assert result == {"id": "break", "name": "Coffee", "color": "#123ABC"}


def test_update_unknown_tag(db):
    with pytest.raises(ValueError, match="not found"):
        tag_update.update_tag(db, tag_identifier="nope", name="x")


def test_delete_tag_cascades(db):
    schedule_add.add_schedule(db, tag_id="work", start="09:00", end="17:00", starts_on="2024-01-01")
    schedule_add.add_schedule(db, tag_id="sleep", start="22:00", end="06:00", starts_on="2024-01-01")
    entry_set.set_slots(db, date=MONDAY, slots=[1, 2], tag_id="work")
    entry_set.set_slot(db, date=MONDAY, slot=40, tag_id="personal")

    result = tag_delete.delete_tag(db, tag_identifier="Work")

    assert result == {"id": "work", "name": "Work", "schedules_removed": 1, "entries_removed": 2}
    assert [s["tag_id"] for s in schedule_list.list_schedules(db)["schedules"]] == ["sleep"]
    assert load_entries(db) == (TimeEntry(MONDAY, 40, Assigned("personal")),)
    assert "work" not in {t["id"] for t in tag_list.list_tags(db)["tags"]}


def test_delete_unknown_tag(db):
    with pytest.raises(ValueError, match="not found"):
        tag_delete.delete_tag(db, tag_identifier="nope")


@pytest.mark.parametrize("tag_id", ["", "   "])
def test_add_tag_blank_id_is_generated(db, tag_id):
    result = tag_add.add_tag(db, name="Reading", tag_id=tag_id)
    assert result["id"].startswith("reading-")


def test_add_tag_id_is_stripped(db):
    assert tag_add.add_tag(db, name="Reading", tag_id="  reading ")["id"] == "reading"
