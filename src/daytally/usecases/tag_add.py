from __future__ import annotations

import re
import uuid as uuid_module
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..config.defaults import CLEAR_OVERRIDE_TAG_ID, TAG_COLORS
from ..domain.entities import TagRow
from ..infra.exceptions import ValidationError
from ..infra.logging import get_logger
from .tag_list import _tag_to_dict

_log = get_logger(__name__)

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

RESERVED_TAG_IDS = {CLEAR_OVERRIDE_TAG_ID}


def _validate_color(color: str) -> str:
    if not _COLOR_RE.match(color.strip()):
        raise ValidationError(f"Invalid color '{color}'. Use #RRGGBB")
    return color.strip().upper()


def _new_tag_id(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-") or "tag"
    return f"{slug}-{uuid_module.uuid4().hex[:8]}"


def add_tag(
    db: Session,
    *,
    name: str,
    color: str | None = None,
    tag_id: str | None = None,
) -> dict[str, Any]:
    """Create a tag and return it as a dict.

    Args:
        db: Database session
        name: Display name
        color: #RRGGBB; defaults to the next palette color
        tag_id: Explicit id; generated from the name when omitted

    Raises:
        ValueError: If the name is empty, the color is malformed or the id is taken
    """
    if not name or not name.strip():
        raise ValidationError("Tag name cannot be empty")

    tag_id = (tag_id or "").strip() or _new_tag_id(name)
    if tag_id in RESERVED_TAG_IDS:
        raise ValidationError(f"Tag id '{tag_id}' is reserved")
    if db.get(TagRow, tag_id) is not None:
        raise ValidationError(f"Tag id '{tag_id}' already exists")

    count = db.scalar(select(func.count()).select_from(TagRow)) or 0
    max_position = db.scalar(select(func.max(TagRow.position)))
    resolved_color = _validate_color(color) if color else TAG_COLORS[count % len(TAG_COLORS)]

    tag = TagRow(
        id=tag_id,
        name=name.strip(),
        color=resolved_color,
        position=(max_position + 1) if max_position is not None else 0,
    )
    db.add(tag)
    db.flush()
    _log.info("tag_added", tag_id=tag.id)

    return _tag_to_dict(tag)


__all__ = ["add_tag"]
