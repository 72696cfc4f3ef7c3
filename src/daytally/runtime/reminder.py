"""
Reminder decisions for unlogged slots.

The tracker polls; ReminderTracker decides on each poll whether a reminder
should fire. It fires at most once per slot and only when a new slot begins:

- off:     never
- sound:   on every slot transition
- browser: on a slot transition within waking hours, and only if the slot
           that just ended is unlogged

Delivering the reminder (sound, desktop notification) is the caller's job.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from ..config.defaults import NOTIFICATION_END_HOUR, NOTIFICATION_START_HOUR
from ..shared.types import NotificationMode
from .slot_grid import current_slot


def is_within_waking_hours(now: datetime) -> bool:
    return NOTIFICATION_START_HOUR <= now.hour < NOTIFICATION_END_HOUR


class ReminderTracker:
    """Slot-transition reminder state for one tracker session.

    Not thread-safe; drive it from a single polling loop.
    """

    def __init__(self, mode: NotificationMode, interval: int, started_at: datetime) -> None:
        self.mode = NotificationMode(mode)
        self.interval = interval
        self._prev_slot = current_slot(started_at, interval)
        self._last_notified_slot = -1

    def poll(self, now: datetime, is_previous_slot_logged: Callable[[], bool]) -> bool:
        """Return True if a reminder should fire at `now`."""
        if self.mode is NotificationMode.OFF:
            return False

        slot = current_slot(now, self.interval)
        if slot == self._prev_slot:
            return False
        self._prev_slot = slot

        if self._last_notified_slot == slot:
            return False

        if self.mode is NotificationMode.SOUND:
            self._last_notified_slot = slot
            return True

        if is_within_waking_hours(now) and not is_previous_slot_logged():
            self._last_notified_slot = slot
            return True
        return False
