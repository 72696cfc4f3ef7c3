"""DayTally - slot-based daily time tracking with recurring schedules."""

__version__ = "0.3.0"
