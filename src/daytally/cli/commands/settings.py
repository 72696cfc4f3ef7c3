from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import settings_update as _uc_settings
from ._output import emit_json, error_code, fail

app = typer.Typer(name="settings", help="Tracker settings")


def _echo_settings(result: dict) -> None:
    typer.echo(f"  Slot interval: {result['interval']} minutes ({result['total_slots']} slots/day)")
    typer.echo(f"  Clock format: {result['clock_format']}h")
    typer.echo(f"  Notifications: {result['notification_mode']}")


@app.command("show")
def show_settings(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show the current settings."""
    with session() as db:
        result = _uc_settings.show_settings(db)

    if json_output:
        emit_json({"status": "ok", "settings": result})
    else:
        typer.echo("Settings:")
        _echo_settings(result)


@app.command("update")
def update_settings(
    interval: int | None = typer.Option(None, "--interval", help="Slot length in minutes (15 or 30)"),
    clock_format: int | None = typer.Option(None, "--clock-format", help="12 or 24"),
    notifications: str | None = typer.Option(
        None, "--notifications", help="Reminder mode: off, browser or sound"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Update settings. Options left out keep their value.

    Examples:
        daytally settings update --interval 15
        daytally settings update --clock-format 12 --notifications sound
    """
    with session() as db:
        try:
            result = _uc_settings.update_settings(
                db,
                interval=interval,
                clock_format=clock_format,
                notification_mode=notifications,
            )
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "settings": result})
        else:
            typer.echo("Settings updated:")
            _echo_settings(result)
