"""Shared output helpers for CLI command groups."""

from __future__ import annotations

import json
from typing import Any

import typer


def emit_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def fail(message: str, *, code: str, json_output: bool) -> None:
    """Report an error in the requested format and exit with status 1."""
    if json_output:
        emit_json({"status": "error", "code": code, "message": message})
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def error_code(message: str, default: str = "VALIDATION_ERROR") -> str:
    """Map a use-case error message to a stable error code."""
    if "not found" in message:
        return "NOT_FOUND"
    if "already exists" in message:
        return "DUPLICATE"
    if "Invalid date format" in message:
        return "INVALID_DATE_FORMAT"
    if "Invalid time format" in message:
        return "INVALID_TIME_FORMAT"
    if "out of range" in message:
        return "OUT_OF_RANGE"
    return default


def split_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]
