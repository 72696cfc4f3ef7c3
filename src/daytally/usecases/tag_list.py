from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..domain.entities import TagRow
from ..infra.exceptions import NotFoundError


def _resolve_tag(db: Session, identifier: str) -> TagRow:
    """Resolve tag by id, then by name (case-insensitive).

    Raises NotFoundError if tag not found.
    """
    tag = db.get(TagRow, identifier)
    if tag is None:
        for row in db.scalars(select(TagRow)):
            if row.name.strip().lower() == identifier.strip().lower():
                tag = row
                break

    if tag is None:
        raise NotFoundError(f"Tag '{identifier}' not found")

    return tag


def _tag_to_dict(tag: TagRow) -> dict[str, Any]:
    return {"id": tag.id, "name": tag.name, "color": tag.color}


def list_tags(db: Session) -> dict[str, Any]:
    """List tags in display order."""
    rows = db.scalars(select(TagRow).order_by(TagRow.position, TagRow.created_at)).all()
    return {"tags": [_tag_to_dict(t) for t in rows], "count": len(rows)}


def get_tag(db: Session, *, tag_identifier: str) -> dict[str, Any]:
    return _tag_to_dict(_resolve_tag(db, tag_identifier))


__all__ = ["list_tags", "get_tag"]
