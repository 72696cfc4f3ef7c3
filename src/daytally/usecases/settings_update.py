from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from ..infra.logging import get_logger
from ..infra.validation import (
    validate_clock_format,
    validate_interval_setting,
    validate_notification_mode,
)
from .snapshot import load_settings, save_settings

_log = get_logger(__name__)


def show_settings(db: Session) -> dict[str, Any]:
    user_settings = load_settings(db)
    payload = user_settings.to_dict()
    payload["total_slots"] = user_settings.total_slots
    return payload


def update_settings(
    db: Session,
    *,
    interval: int | None = None,
    clock_format: int | None = None,
    notification_mode: str | None = None,
) -> dict[str, Any]:
    """Merge new values into the tracker settings.

    Changing the interval does not rewrite stored entries; slot indexes are
    read against whatever interval is current.

    Raises:
        ValueError: If a value is not one of the supported choices
    """
    current = load_settings(db)
    updated = current
    if interval is not None:
        updated = replace(updated, interval=validate_interval_setting(interval))
    if clock_format is not None:
        updated = replace(updated, clock_format=validate_clock_format(clock_format))
    if notification_mode is not None:
        updated = replace(updated, notification_mode=validate_notification_mode(notification_mode))

    save_settings(db, updated)
    _log.info("settings_updated", **updated.to_dict())
    payload = updated.to_dict()
    payload["total_slots"] = updated.total_slots
    return payload


__all__ = ["show_settings", "update_settings"]
