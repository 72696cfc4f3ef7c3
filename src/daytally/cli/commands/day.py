from __future__ import annotations

from datetime import date as _date

import typer

from ...infra.uow import session
from ...usecases import day_show as _uc_day_show
from ...usecases import day_stats as _uc_day_stats
from ._output import emit_json, error_code, fail

app = typer.Typer(name="day", help="Resolved day views")


@app.command("show")
def show_day(
    date: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD); default today"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show the resolved tag of every logged slot.

    Examples:
        daytally day show --date 2024-03-04
    """
    with session() as db:
        try:
            result = _uc_day_show.show_day(db, date=date or _date.today().isoformat())
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

    if json_output:
        emit_json({"status": "ok", **result})
        return
    typer.echo(f"{result['date']} ({result['interval']}-minute slots)")
    if not result["slots"]:
        typer.echo("  Nothing logged")
        return
    for s in result["slots"]:
        typer.echo(f"  {s['label']:<24} {s['tag_name']}")
    typer.echo(f"\nLogged: {result['count']} of {result['total_slots']} slots")


@app.command("stats")
def day_stats(
    date: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD); default today"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show time spent per tag for a day."""
    with session() as db:
        try:
            result = _uc_day_stats.day_stats(db, date=date or _date.today().isoformat())
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

    if json_output:
        emit_json({"status": "ok", **result})
        return
    typer.echo(f"{result['date']}")
    if not result["stats"]:
        typer.echo("  Nothing logged")
        return
    for s in result["stats"]:
        typer.echo(f"  {s['name']:<20} {s['duration']}")
    typer.echo(f"\nUnlogged: {_uc_day_stats.format_duration(result['unlogged_minutes'])}")
