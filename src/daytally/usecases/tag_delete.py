from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..infra.logging import get_logger
from .snapshot import load_entries, load_schedules, replace_entries, replace_schedules
from .tag_list import _resolve_tag

_log = get_logger(__name__)


def delete_tag(db: Session, *, tag_identifier: str) -> dict[str, Any]:
    """Delete a tag together with the schedules and entries that assign it.

    Clear overrides are not tied to a tag and are left in place, even on
    slots that were only covered by a schedule removed here.

    Raises:
        ValueError: If the tag is not found
    """
    tag = _resolve_tag(db, tag_identifier)
    tag_id = tag.id

    schedules = load_schedules(db)
    kept_schedules = [s for s in schedules if s.tag_id != tag_id]
    entries = load_entries(db)
    kept_entries = [e for e in entries if e.tag_id != tag_id]

    db.delete(tag)
    replace_schedules(db, kept_schedules)
    replace_entries(db, kept_entries)

    result = {
        "id": tag_id,
        "name": tag.name,
        "schedules_removed": len(schedules) - len(kept_schedules),
        "entries_removed": len(entries) - len(kept_entries),
    }
    _log.info("tag_deleted", **result)
    return result


__all__ = ["delete_tag"]
