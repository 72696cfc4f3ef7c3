"""
Persistence entities for DayTally.

SQLAlchemy tables backing the tag, schedule, entry and settings collections.
Schedule columns are deliberately permissive: rows are normalized on read, so
partially populated or hand-edited rows still load.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ..infra.db import Base


class TagRow(Base):
    """A tag (category) slots can be logged under."""

    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_tags_position", "position"),)

    def __repr__(self) -> str:
        return f"<TagRow(id={self.id}, name={self.name}, color={self.color})>"


class ScheduleRow(Base):
    """
    A recurring daily schedule.

    ``position`` records insertion order. Resolution lets the schedule with the
    highest position win when several cover the same slot, so it must never be
    renumbered out of order.
    """

    __tablename__ = "daily_schedules"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    tag_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_minute: Mapped[int | None] = mapped_column(Integer, nullable=True)
    end_minute: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weekdays: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    starts_on: Mapped[str | None] = mapped_column(String(10), nullable=True, comment="YYYY-MM-DD")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_daily_schedules_position", "position"),
        Index("ix_daily_schedules_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ScheduleRow(id={self.id}, tag_id={self.tag_id}, "
            f"start_minute={self.start_minute}, end_minute={self.end_minute})>"
        )


class EntryRow(Base):
    """A manual override for one (date, slot). tag_id may be the clear sentinel."""

    __tablename__ = "time_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, comment="YYYY-MM-DD")
    slot: Mapped[int] = mapped_column(Integer, nullable=False)
    tag_id: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("date", "slot", name="uq_time_entries_date_slot"),
        CheckConstraint("slot >= 0", name="slot_non_negative"),
        Index("ix_time_entries_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<EntryRow(date={self.date}, slot={self.slot}, tag_id={self.tag_id})>"


class SettingsRow(Base):
    """Single-row table holding the tracker preferences."""

    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    interval: Mapped[int] = mapped_column("slot_interval", Integer, nullable=False)
    clock_format: Mapped[int] = mapped_column(Integer, nullable=False)
    notification_mode: Mapped[str] = mapped_column(String(16), nullable=False)

    __table_args__ = (
        CheckConstraint("slot_interval IN (15, 30)", name="interval_divides_day"),
        CheckConstraint("clock_format IN (12, 24)", name="clock_format_valid"),
    )

    def __repr__(self) -> str:
        return f"<SettingsRow(interval={self.interval}, clock_format={self.clock_format})>"
