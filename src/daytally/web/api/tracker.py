"""
REST API endpoints for the time tracker.

Provides a frontend-agnostic JSON API over the same use cases the CLI calls:
resolved days, manual slot entries, schedules, tags and settings.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ...infra.uow import get_db
from ...usecases import day_show, day_stats, entry_set
from ...usecases import schedule_add, schedule_delete, schedule_list, schedule_update
from ...usecases import settings_update
from ...usecases import tag_add, tag_delete, tag_list, tag_update

router = APIRouter(prefix="/api/tracker", tags=["tracker"])


def _raise_http(e: ValueError) -> None:
    error_msg = str(e)
    if "not found" in error_msg:
        raise HTTPException(status_code=404, detail=error_msg)
    raise HTTPException(status_code=400, detail=error_msg)


# ============================================================================
# Pydantic Models for Request/Response
# ============================================================================


class SlotSet(BaseModel):
    """Request model for setting one slot. A null tag clears the slot."""
    tag_id: str | None = Field(None, description="Tag id to assign, or null to clear")


class SlotBatchSet(BaseModel):
    """Request model for setting several slots of one day."""
    slots: list[int] = Field(..., description="Slot indexes")
    tag_id: str | None = Field(None, description="Tag id to assign, or null to clear")


class ScheduleCreate(BaseModel):
    """Request model for creating a schedule."""
    tag_id: str = Field(..., description="Tag the schedule assigns")
    start_time: str = Field(..., description="Start time in HH:MM format")
    end_time: str = Field(..., description="End time in HH:MM format (use 24:00 for end of day)")
    weekdays: list[str | int] | None = Field(None, description="Weekdays (SUN..SAT or 0-6, 0 = Sunday)")
    starts_on: str | None = Field(None, description="First date (YYYY-MM-DD)")


class ScheduleUpdate(BaseModel):
    """Request model for updating a schedule."""
    tag_id: str | None = Field(None, description="New tag id")
    start_time: str | None = Field(None, description="New start time")
    end_time: str | None = Field(None, description="New end time")
    weekdays: list[str | int] | None = Field(None, description="New weekdays")
    starts_on: str | None = Field(None, description="New first date")


class TagCreate(BaseModel):
    """Request model for creating a tag."""
    name: str = Field(..., description="Tag name")
    color: str | None = Field(None, description="Color as #RRGGBB")
    id: str | None = Field(None, description="Explicit tag id")


class TagUpdate(BaseModel):
    name: str | None = Field(None, description="New tag name")
    color: str | None = Field(None, description="New color as #RRGGBB")


class SettingsUpdate(BaseModel):
    """Request model for updating tracker settings."""
    interval: int | None = Field(None, description="Slot length in minutes (15 or 30)")
    clock_format: int | None = Field(None, description="12 or 24")
    notification_mode: str | None = Field(None, description="off, browser or sound")


# ============================================================================
# Day Endpoints
# ============================================================================


@router.get("/days/{date}")
async def get_day(date: str, db: Session = Depends(get_db)) -> dict[str, Any]:
    """Resolved tag for every logged slot of a day."""
    try:
        result = day_show.show_day(db, date=date)
        return {"status": "ok", **result}
    except ValueError as e:
        _raise_http(e)


@router.get("/days/{date}/stats")
async def get_day_stats(date: str, db: Session = Depends(get_db)) -> dict[str, Any]:
    """Minutes per tag for a day."""
    try:
        result = day_stats.day_stats(db, date=date)
        return {"status": "ok", **result}
    except ValueError as e:
        _raise_http(e)


@router.put("/days/{date}/slots")
async def set_slots(
    date: str,
    body: SlotBatchSet,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Assign or clear several slots in one write."""
    try:
        result = entry_set.set_slots(db, date=date, slots=body.slots, tag_id=body.tag_id)
        return {"status": "ok", **result}
    except ValueError as e:
        _raise_http(e)


@router.put("/days/{date}/slots/{slot}")
async def set_slot(
    date: str,
    slot: int,
    body: SlotSet,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Assign or clear one slot."""
    try:
        result = entry_set.set_slot(db, date=date, slot=slot, tag_id=body.tag_id)
        return {"status": "ok", **result}
    except ValueError as e:
        _raise_http(e)


# ============================================================================
# Schedule Endpoints
# ============================================================================


@router.get("/schedules")
async def list_schedules(
    tag_id: str | None = None,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """List schedules in precedence order."""
    result = schedule_list.list_schedules(db, tag_id=tag_id)
    return {"status": "ok", "total": result["count"], "schedules": result["schedules"]}


@router.post("/schedules", status_code=201)
async def create_schedule(
    schedule: ScheduleCreate,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Append a schedule; it wins over existing ones where they overlap."""
    try:
        result = schedule_add.add_schedule(
            db,
            tag_id=schedule.tag_id,
            start=schedule.start_time,
            end=schedule.end_time,
            weekdays=schedule.weekdays,
            starts_on=schedule.starts_on,
        )
        return {"status": "ok", "schedule": result}
    except ValueError as e:
        _raise_http(e)


@router.put("/schedules/{schedule_id}")
async def update_schedule(
    schedule_id: str,
    schedule: ScheduleUpdate,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    try:
        result = schedule_update.update_schedule(
            db,
            schedule_id=schedule_id,
            tag_id=schedule.tag_id,
            start=schedule.start_time,
            end=schedule.end_time,
            weekdays=schedule.weekdays,
            starts_on=schedule.starts_on,
        )
        return {"status": "ok", "schedule": result}
    except ValueError as e:
        _raise_http(e)


@router.delete("/schedules/{schedule_id}")
async def delete_schedule(schedule_id: str, db: Session = Depends(get_db)) -> dict[str, Any]:
    try:
        result = schedule_delete.delete_schedule(db, schedule_id=schedule_id)
        return {"status": "ok", "deleted": result}
    except ValueError as e:
        _raise_http(e)


# ============================================================================
# Tag Endpoints
# ============================================================================


@router.get("/tags")
async def list_tags(db: Session = Depends(get_db)) -> dict[str, Any]:
    result = tag_list.list_tags(db)
    return {"status": "ok", "total": result["count"], "tags": result["tags"]}


@router.post("/tags", status_code=201)
async def create_tag(tag: TagCreate, db: Session = Depends(get_db)) -> dict[str, Any]:
    try:
        result = tag_add.add_tag(db, name=tag.name, color=tag.color, tag_id=tag.id)
        return {"status": "ok", "tag": result}
    except ValueError as e:
        _raise_http(e)


@router.put("/tags/{tag_id}")
async def update_tag(tag_id: str, tag: TagUpdate, db: Session = Depends(get_db)) -> dict[str, Any]:
    try:
        result = tag_update.update_tag(db, tag_identifier=tag_id, name=tag.name, color=tag.color)
        return {"status": "ok", "tag": result}
    except ValueError as e:
        _raise_http(e)


@router.delete("/tags/{tag_id}")
async def delete_tag(tag_id: str, db: Session = Depends(get_db)) -> dict[str, Any]:
    """Delete a tag with its schedules and entries."""
    try:
        result = tag_delete.delete_tag(db, tag_identifier=tag_id)
        return {"status": "ok", "deleted": result}
    except ValueError as e:
        _raise_http(e)


# ============================================================================
# Settings Endpoints
# ============================================================================


@router.get("/settings")
async def get_settings(db: Session = Depends(get_db)) -> dict[str, Any]:
    return {"status": "ok", "settings": settings_update.show_settings(db)}


@router.put("/settings")
async def put_settings(body: SettingsUpdate, db: Session = Depends(get_db)) -> dict[str, Any]:
    """Merge new values into the tracker settings."""
    try:
        result = settings_update.update_settings(
            db,
            interval=body.interval,
            clock_format=body.clock_format,
            notification_mode=body.notification_mode,
        )
        return {"status": "ok", "settings": result}
    except ValueError as e:
        _raise_http(e)
