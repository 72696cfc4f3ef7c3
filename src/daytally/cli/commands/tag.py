from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import tag_add as _uc_tag_add
from ...usecases import tag_delete as _uc_tag_delete
from ...usecases import tag_list as _uc_tag_list
from ...usecases import tag_update as _uc_tag_update
from ._output import emit_json, error_code, fail

app = typer.Typer(name="tag", help="Tag (category) management operations")


@app.command("add")
def add_tag(
    name: str = typer.Option(..., "--name", help="Tag name (e.g., 'Reading')"),
    color: str | None = typer.Option(None, "--color", help="Color as #RRGGBB (default: next palette color)"),
    tag_id: str | None = typer.Option(None, "--id", help="Explicit tag id (default: derived from name)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Create a new tag.

    Examples:
        daytally tag add --name Reading
        daytally tag add --name Commute --color "#8B8B8B" --id commute
    """
    with session() as db:
        try:
            result = _uc_tag_add.add_tag(db, name=name, color=color, tag_id=tag_id)
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "tag": result})
        else:
            typer.echo("Tag created:")
            typer.echo(f"  ID: {result['id']}")
            typer.echo(f"  Name: {result['name']}")
            typer.echo(f"  Color: {result['color']}")


@app.command("list")
def list_tags(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List tags."""
    with session() as db:
        result = _uc_tag_list.list_tags(db)

    if json_output:
        emit_json({"status": "ok", "total": result["count"], "tags": result["tags"]})
        return
    if not result["tags"]:
        typer.echo("No tags found")
        return
    typer.echo("Tags:")
    for t in result["tags"]:
        typer.echo(f"  {t['id']}: {t['name']} ({t['color']})")
    typer.echo(f"\nTotal: {result['count']} tags")


@app.command("update")
def update_tag(
    selector: str = typer.Argument(..., help="Tag id or name"),
    name: str | None = typer.Option(None, "--name", help="New tag name"),
    color: str | None = typer.Option(None, "--color", help="New color as #RRGGBB"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Rename or recolor a tag."""
    with session() as db:
        try:
            result = _uc_tag_update.update_tag(db, tag_identifier=selector, name=name, color=color)
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "tag": result})
        else:
            typer.echo("Tag updated:")
            typer.echo(f"  ID: {result['id']}")
            typer.echo(f"  Name: {result['name']}")
            typer.echo(f"  Color: {result['color']}")


@app.command("delete")
def delete_tag(
    selector: str = typer.Argument(..., help="Tag id or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Delete a tag and every schedule and entry that assigns it.

    Examples:
        daytally tag delete exercise --yes
    """
    if not yes and not json_output:
        typer.confirm(
            f"Delete tag '{selector}' with its schedules and entries?",
            abort=True,
        )

    with session() as db:
        try:
            result = _uc_tag_delete.delete_tag(db, tag_identifier=selector)
        except ValueError as e:
            fail(str(e), code=error_code(str(e)), json_output=json_output)

        if json_output:
            emit_json({"status": "ok", "deleted": result})
        else:
            typer.echo(f"Tag deleted: {result['id']} ({result['name']})")
            typer.echo(f"  Schedules removed: {result['schedules_removed']}")
            typer.echo(f"  Entries removed: {result['entries_removed']}")
