from __future__ import annotations

from datetime import date as _date

import typer

from ...infra.uow import session
from ...usecases import entry_set as _uc_entry_set
from ._output import emit_json, error_code, fail, split_csv

app = typer.Typer(name="entry", help="Manual slot entry operations")


def _parse_slots(values: list[str]) -> list[int]:
    slots: list[int] = []
    for value in values:
        for part in split_csv(value) or []:
            try:
                slots.append(int(part))
            except ValueError:
                raise ValueError(f"Invalid slot '{part}'. Slots are integers") from None
    return slots


@app.command("set")
def set_entry(
    slot: list[str] = typer.Option(
        ..., "--slot", "-s", help="Slot index; repeat or pass a comma-separated list"
    ),
    tag: str | None = typer.Option(None, "--tag", help="Tag id to assign"),
    clear: bool = typer.Option(False, "--clear", help="Mark the slots as explicitly empty"),
    date: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD); default today"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Assign a tag to slots, or clear them.

    Clearing a scheduled slot records an explicit clear so the schedule no
    longer shows through. Clearing an unscheduled slot just drops its entry.

    Examples:
        daytally entry set --date 2024-03-04 --slot 18 --slot 19 --tag work
        daytally entry set --slot 10,11,12 --clear
    """
    if (tag is None) == (not clear):
        fail("Provide exactly one of --tag or --clear", code="VALIDATION_ERROR", json_output=json_output)

    with session() as db:
        try:
            slots = _parse_slots(slot)
            result = _uc_entry_set.set_slots(
                db,
                date=date or _date.today().isoformat(),
                slots=slots,
                tag_id=None if clear else tag,
            )
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", **result})
        else:
            typer.echo(f"Updated {len(result['slots'])} slot(s) on {result['date']}:")
            for s in result["slots"]:
                detail = s["tag_id"] if s["override"] == "assigned" else s["override"]
                typer.echo(f"  {s['slot']}: {detail}")
