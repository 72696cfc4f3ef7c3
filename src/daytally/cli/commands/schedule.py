"""
Schedule command group.

Schedules assign a tag to a recurring time window. Later schedules take
precedence where windows overlap, so `list` shows them in precedence order.
"""

from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import schedule_add as _uc_schedule_add
from ...usecases import schedule_delete as _uc_schedule_delete
from ...usecases import schedule_list as _uc_schedule_list
from ...usecases import schedule_update as _uc_schedule_update
from ._output import emit_json, error_code, fail, split_csv

app = typer.Typer(name="schedule", help="Recurring daily schedule operations")


def _echo_schedule(heading: str, schedule: dict) -> None:
    typer.echo(heading)
    typer.echo(f"  ID: {schedule['id']}")
    typer.echo(f"  Tag: {schedule['tag_id']}")
    if schedule["full_day"]:
        typer.echo("  Window: all day")
    else:
        suffix = " (overnight)" if schedule["overnight"] else ""
        typer.echo(f"  Window: {schedule['start']}-{schedule['end']}{suffix}")
    typer.echo(f"  Days: {', '.join(schedule['days'])}")
    typer.echo(f"  Starts on: {schedule['starts_on']}")


@app.command("add")
def add_schedule(
    tag: str = typer.Option(..., "--tag", help="Tag id the schedule assigns"),
    start: str = typer.Option(..., "--start", help="Start time (HH:MM)"),
    end: str = typer.Option(..., "--end", help="End time (HH:MM, 24:00 allowed)"),
    days: str | None = typer.Option(
        None, "--days", help="Comma-separated weekdays (MON,TUE or 0-6, 0 = Sunday); default all"
    ),
    starts_on: str | None = typer.Option(
        None, "--starts-on", help="First date the schedule applies (YYYY-MM-DD); default today"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Add a recurring schedule.

    A window whose end is before its start runs past midnight. Equal start
    and end cover the whole day.

    Examples:
        daytally schedule add --tag work --start 09:00 --end 17:00 --days MON,TUE,WED,THU,FRI
        daytally schedule add --tag sleep --start 22:00 --end 06:00
    """
    with session() as db:
        try:
            result = _uc_schedule_add.add_schedule(
                db,
                tag_id=tag,
                start=start,
                end=end,
                weekdays=split_csv(days),
                starts_on=starts_on,
            )
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "schedule": result})
        else:
            _echo_schedule("Schedule created:", result)


@app.command("list")
def list_schedules(
    tag: str | None = typer.Option(None, "--tag", help="Only schedules for this tag id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List schedules in precedence order."""
    with session() as db:
        result = _uc_schedule_list.list_schedules(db, tag_id=tag)

    if json_output:
        emit_json({"status": "ok", "total": result["count"], "schedules": result["schedules"]})
        return
    if not result["schedules"]:
        typer.echo("No schedules found")
        return
    typer.echo("Schedules (later entries win on overlap):")
    for s in result["schedules"]:
        window = "all day" if s["full_day"] else f"{s['start']}-{s['end']}"
        typer.echo(f"  {s['id']}: {s['tag_id']} {window} [{','.join(s['days'])}] from {s['starts_on']}")
    typer.echo(f"\nTotal: {result['count']} schedules")


@app.command("update")
def update_schedule(
    schedule_id: str = typer.Argument(..., help="Schedule id"),
    tag: str | None = typer.Option(None, "--tag", help="New tag id"),
    start: str | None = typer.Option(None, "--start", help="New start time (HH:MM)"),
    end: str | None = typer.Option(None, "--end", help="New end time (HH:MM)"),
    days: str | None = typer.Option(None, "--days", help="New comma-separated weekdays"),
    starts_on: str | None = typer.Option(None, "--starts-on", help="New first date (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Update a schedule in place, keeping its precedence."""
    with session() as db:
        try:
            result = _uc_schedule_update.update_schedule(
                db,
                schedule_id=schedule_id,
                tag_id=tag,
                start=start,
                end=end,
                weekdays=split_csv(days),
                starts_on=starts_on,
            )
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "schedule": result})
        else:
            _echo_schedule("Schedule updated:", result)


@app.command("delete")
def delete_schedule(
    schedule_id: str = typer.Argument(..., help="Schedule id"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Delete a schedule. Entries logged against it are kept."""
    with session() as db:
        try:
            result = _uc_schedule_delete.delete_schedule(db, schedule_id=schedule_id)
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "deleted": result})
        else:
            typer.echo(f"Schedule deleted: {result['id']} ({result['tag_id']})")
            typer.echo(f"  Remaining schedules: {result['remaining']}")
