"""
Shared types and enums for DayTally.

This module contains common types and enums that are used across
the domain, API, CLI, and other layers.
"""

from __future__ import annotations

from enum import Enum


class NotificationMode(str, Enum):
    """How the tracker reminds the user to log a finished slot."""

    OFF = "off"
    BROWSER = "browser"
    SOUND = "sound"


class ClockFormat(int, Enum):
    """Clock used for slot labels."""

    H12 = 12
    H24 = 24


class SlotInterval(int, Enum):
    """Supported slot lengths in minutes. Both divide a day evenly."""

    QUARTER_HOUR = 15
    HALF_HOUR = 30
