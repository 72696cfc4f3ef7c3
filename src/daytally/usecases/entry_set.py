from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.resolution import set_entries_for_slots, set_entry
from ..infra.logging import get_logger
from ..infra.validation import validate_date, validate_slot, validate_slots, validate_tag_id
from .snapshot import load_snapshot, replace_entries

_log = get_logger(__name__)


def _slot_states(entries, date_str: str, slots: list[int]) -> list[dict[str, Any]]:
    by_slot = {e.slot: e for e in entries if e.date == date_str}
    states = []
    for slot in slots:
        entry = by_slot.get(slot)
        if entry is None:
            state = "none"
        elif entry.is_clear:
            state = "cleared"
        else:
            state = "assigned"
        states.append({"slot": slot, "override": state, "tag_id": entry.tag_id if entry else None})
    return states


def set_slot(
    db: Session,
    *,
    date: str,
    slot: int,
    tag_id: str | None,
) -> dict[str, Any]:
    """Assign a tag to one slot, or clear it when tag_id is None.

    The tag id is not checked against the tag list.

    Returns:
        Dictionary with the date and the resulting override state of the slot

    Raises:
        ValueError: If the date, slot or tag id is invalid
    """
    date_str = validate_date(date)
    tag_id = validate_tag_id(tag_id)
    snapshot = load_snapshot(db)
    interval = snapshot.settings.interval
    validate_slot(slot, interval)

    entries = set_entry(
        snapshot.entries,
        date_str,
        slot,
        tag_id,
        interval=interval,
        schedules=snapshot.schedules,
    )
    count = replace_entries(db, entries)
    _log.info("slot_set", date=date_str, slot=slot, tag_id=tag_id, entries=count)

    return {
        "date": date_str,
        "slots": _slot_states(entries, date_str, [slot]),
        "entry_count": count,
    }


def set_slots(
    db: Session,
    *,
    date: str,
    slots: list[int],
    tag_id: str | None,
) -> dict[str, Any]:
    """Assign or clear a batch of slots on one date in a single write.

    An empty batch changes nothing.

    Raises:
        ValueError: If the date, any slot or the tag id is invalid
    """
    date_str = validate_date(date)
    tag_id = validate_tag_id(tag_id)
    snapshot = load_snapshot(db)
    interval = snapshot.settings.interval
    unique_slots = list(dict.fromkeys(validate_slots(slots, interval)))

    if not unique_slots:
        return {"date": date_str, "slots": [], "entry_count": len(snapshot.entries)}

    entries = set_entries_for_slots(
        snapshot.entries,
        date_str,
        unique_slots,
        tag_id,
        interval=interval,
        schedules=snapshot.schedules,
    )
    count = replace_entries(db, entries)
    _log.info("slots_set", date=date_str, slots=len(unique_slots), tag_id=tag_id, entries=count)

    return {
        "date": date_str,
        "slots": _slot_states(entries, date_str, unique_slots),
        "entry_count": count,
    }


__all__ = ["set_slot", "set_slots"]
