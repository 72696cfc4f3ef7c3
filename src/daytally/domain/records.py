"""
Immutable records consumed and produced by the slot resolution engine.

These types are the authoritative in-memory shapes. The store converts its
rows to and from them; the engine never sees an ORM object.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config.defaults import (
    ALL_WEEKDAYS,
    CLEAR_OVERRIDE_TAG_ID,
    DAY_MINUTES,
    DEFAULT_CLOCK_FORMAT,
    DEFAULT_INTERVAL,
    DEFAULT_NOTIFICATION_MODE,
)
from ..shared.types import NotificationMode


@dataclass(frozen=True)
class Tag:
    """A category a slot can be logged under."""

    id: str
    name: str
    color: str


@dataclass(frozen=True)
class DailySchedule:
    """
    Recurring rule assigning a tag to a time-of-day range on some weekdays.

    start_minute == end_minute covers the whole day; start_minute > end_minute
    wraps past midnight and covers [start, 1440) and [0, end).
    """

    id: str
    tag_id: str
    start_minute: int
    end_minute: int
    weekdays: frozenset[int] = ALL_WEEKDAYS
    starts_on: str = ""  # YYYY-MM-DD

    @property
    def is_full_day(self) -> bool:
        return self.start_minute == self.end_minute

    @property
    def is_overnight(self) -> bool:
        return self.start_minute > self.end_minute

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tag_id": self.tag_id,
            "start_minute": self.start_minute,
            "end_minute": self.end_minute,
            "weekdays": sorted(self.weekdays),
            "starts_on": self.starts_on,
        }


# ---------------------------------------------------------------------------
# Manual override union
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Inherit:
    """No manual decision recorded; schedules decide the slot."""


@dataclass(frozen=True)
class Clear:
    """Explicit "no tag" for the slot, even where a schedule applies."""


@dataclass(frozen=True)
class Assigned:
    """Explicit tag for the slot."""

    tag_id: str


Override = Inherit | Clear | Assigned

INHERIT = Inherit()
CLEAR = Clear()


def override_from_tag_id(tag_id: str) -> Clear | Assigned:
    """Decode a stored tag id into an override."""
    if tag_id == CLEAR_OVERRIDE_TAG_ID:
        return CLEAR
    return Assigned(tag_id)


def override_to_tag_id(override: Clear | Assigned) -> str:
    """Encode an override as the tag id the store persists."""
    if isinstance(override, Clear):
        return CLEAR_OVERRIDE_TAG_ID
    return override.tag_id


@dataclass(frozen=True)
class TimeEntry:
    """One manual decision for a (date, slot) pair."""

    date: str
    slot: int
    override: Clear | Assigned

    @property
    def tag_id(self) -> str | None:
        """Tag the entry assigns, or None for a clear override."""
        if isinstance(self.override, Assigned):
            return self.override.tag_id
        return None

    @property
    def is_clear(self) -> bool:
        return isinstance(self.override, Clear)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "slot": self.slot,
            "tag_id": self.tag_id,
            "cleared": self.is_clear,
        }


@dataclass(frozen=True)
class SlotAssignment:
    """A resolved (slot, tag) pair in a materialized day."""

    slot: int
    tag_id: str


@dataclass(frozen=True)
class UserSettings:
    """Tracker preferences. interval must divide a day evenly."""

    interval: int = DEFAULT_INTERVAL
    clock_format: int = DEFAULT_CLOCK_FORMAT
    notification_mode: NotificationMode = NotificationMode(DEFAULT_NOTIFICATION_MODE)

    @property
    def total_slots(self) -> int:
        return DAY_MINUTES // self.interval

    def to_dict(self) -> dict:
        return {
            "interval": self.interval,
            "clock_format": self.clock_format,
            "notification_mode": self.notification_mode.value,
        }
