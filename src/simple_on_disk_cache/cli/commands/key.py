# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache key derivation command."""

from __future__ import annotations

import json
from typing import Annotated

import typer


def derive_key_command(
    name: Annotated[str, typer.Argument(help="Procedure name")],
    input_json: Annotated[str, typer.Argument(help="Procedure input as JSON")],
    version: Annotated[
        str | None, typer.Option("--version", "-v", help="Procedure version")
    ] = None,
) -> None:
    """Derive a safe cache key for one execution of a procedure."""
    from simple_on_disk_cache.key.derive import cast_to_safe_on_disk_cache_key

    try:
        parsed = json.loads(input_json)
    except ValueError as exc:
        typer.echo(f"Error: INPUT_JSON is not valid JSON: {exc}", err=True)
        raise typer.Exit(2) from exc
    typer.echo(cast_to_safe_on_disk_cache_key(name, version, parsed))
