"""
Main CLI application using Typer with router-based command dispatch.

This module provides the command-line interface for DayTally, calling the
use cases and outputting JSON when requested.

All command groups are registered through the centralized CliRouter.
"""

from __future__ import annotations

import typer

from ..infra.db import init_db
from ..infra.logging import configure_logging
from ..infra.uow import session
from ..usecases.snapshot import seed_defaults
from .commands import day, entry, reminder, schedule, tag
from .commands import settings as settings_cmd
from .commands._output import emit_json
from .router import get_router

app = typer.Typer(help="DayTally slot-based time tracker")

# Initialize router and register all command groups
router = get_router(app)

router.register("tag", tag.app, help_text="Tag (category) management operations")
router.register("schedule", schedule.app, help_text="Recurring daily schedule operations")
router.register("entry", entry.app, help_text="Manual slot entry operations")
router.register("day", day.app, help_text="Resolved day views and statistics")
router.register("settings", settings_cmd.app, help_text="Tracker settings")
router.register("reminder", reminder.app, help_text="Reminders for unlogged slots")


@app.command("init")
def init(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Create the tables and seed default tags and settings.

    Safe to run more than once; an initialized store is left untouched.
    """
    init_db()
    with session() as db:
        seeded = seed_defaults(db)

    if json_output:
        emit_json({"status": "ok", "seeded": seeded})
    elif seeded:
        typer.echo("Store initialized with default tags")
    else:
        typer.echo("Store already initialized")


@app.command("serve")
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default: API_HOST)"),
    port: int = typer.Option(None, "--port", help="Port (default: API_PORT)"),
):
    """Serve the HTTP API."""
    from ..web.server import run_server

    run_server(host=host, port=port)


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for structured logs"),
):
    """DayTally - log your day in 15 or 30 minute slots."""
    configure_logging(log_level)


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
