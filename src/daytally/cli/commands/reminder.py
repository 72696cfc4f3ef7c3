from __future__ import annotations

import time
from datetime import datetime

import typer

from ...infra.logging import get_logger
from ...infra.uow import session
from ...runtime.reminder import ReminderTracker
from ...shared.types import NotificationMode
from ...usecases import day_show as _uc_day_show
from ...usecases import settings_update as _uc_settings
from ...usecases.snapshot import load_snapshot
from ._output import emit_json

app = typer.Typer(name="reminder", help="Reminders for unlogged slots")

_log = get_logger(__name__)


def _load_reminder_settings() -> tuple[str, int]:
    with session() as db:
        current = _uc_settings.show_settings(db)
    return current["notification_mode"], current["interval"]


def _previous_slot_logged() -> bool:
    with session() as db:
        return _uc_day_show.is_previous_slot_logged(load_snapshot(db), datetime.now())


@app.command("check")
def check(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Report whether the slot that just ended has been logged.

    Exits with status 2 when it has not, so the command can gate scripts.
    """
    with session() as db:
        result = _uc_day_show.previous_slot_status(db, now=datetime.now())

    if json_output:
        emit_json({"status": "ok", **result})
    elif result["previous_slot"] is None:
        typer.echo("First slot of the day; nothing to check")
    elif result["previous_slot_logged"]:
        typer.echo(f"Slot {result['previous_slot']} is logged")
    else:
        typer.echo(f"Slot {result['previous_slot']} is not logged")

    if not result["previous_slot_logged"]:
        raise typer.Exit(2)


@app.command("watch")
def watch(
    poll_seconds: float = typer.Option(30.0, "--poll-seconds", help="Seconds between checks"),
    polls: int | None = typer.Option(None, "--polls", help="Stop after this many checks"),
):
    """Poll the clock and remind at slot transitions.

    Uses the notification mode from settings, re-read on every check. A
    settings change starts a fresh tracker. The sound mode rings the
    terminal bell on every new slot.
    """
    current = _load_reminder_settings()
    tracker = ReminderTracker(current[0], current[1], datetime.now())
    typer.echo(f"Watching {current[1]}-minute slots (mode: {current[0]})")

    count = 0
    while polls is None or count < polls:
        time.sleep(poll_seconds)
        count += 1
        now = datetime.now()
        latest = _load_reminder_settings()
        if latest != current:
            current = latest
            tracker = ReminderTracker(current[0], current[1], now)
            _log.info("reminder_settings_changed", mode=current[0], interval=current[1])
            typer.echo(f"Watching {current[1]}-minute slots (mode: {current[0]})")
            continue
        if tracker.poll(now, _previous_slot_logged):
            _log.info("reminder_fired", at=now.isoformat(), mode=tracker.mode.value)
            bell = "\a" if tracker.mode is NotificationMode.SOUND else ""
            typer.echo(f"{bell}[{now:%H:%M}] Time to log what you did")
