from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..infra.exceptions import ValidationError
from .tag_add import _validate_color
from .tag_list import _resolve_tag, _tag_to_dict


def update_tag(
    db: Session,
    *,
    tag_identifier: str,
    name: str | None = None,
    color: str | None = None,
) -> dict[str, Any]:
    """Rename or recolor a tag. The id never changes.

    Raises:
        ValueError: If the tag is not found or a new value is invalid
    """
    tag = _resolve_tag(db, tag_identifier)

    if name is not None:
        if not name.strip():
            raise ValidationError("Tag name cannot be empty")
        tag.name = name.strip()
    if color is not None:
        tag.color = _validate_color(color)

    db.flush()
    return _tag_to_dict(tag)


__all__ = ["update_tag"]
