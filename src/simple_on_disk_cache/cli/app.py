# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Annotated

import typer

from simple_on_disk_cache.cli.commands.key import derive_key_command
from simple_on_disk_cache.core.exceptions import OnDiskCacheError

app = typer.Typer(
    name="simple-on-disk-cache",
    help="TTL key-value cache persisted to a mounted directory or S3",
    no_args_is_help=True,
)

app.command(name="derive-key")(derive_key_command)


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override the configured log level")
    ] = None,
) -> None:
    from simple_on_disk_cache.core.config import get_settings
    from simple_on_disk_cache.core.logging import setup_logging

    settings = get_settings()
    setup_logging(level=log_level or settings.log_level, fmt=settings.log_format)


def _load_cache():
    from simple_on_disk_cache.cache.manager import create_cache_from_settings

    try:
        return create_cache_from_settings()
    except OnDiskCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


@app.command()
def get(key: Annotated[str, typer.Argument(help="Cache key to read")]) -> None:
    """Print the cached value for KEY."""
    value = asyncio.run(_async_get(key))
    if value is None:
        typer.echo(f"'{key}' is not cached.", err=True)
        raise typer.Exit(1)
    typer.echo(value)


async def _async_get(key: str) -> str | None:
    cache = _load_cache()
    try:
        return await cache.get(key)
    except OnDiskCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


@app.command(name="set")
def set_(
    key: Annotated[str, typer.Argument(help="Cache key to write")],
    value: Annotated[str, typer.Argument(help="Value to cache")],
    expiration_seconds: Annotated[
        int | None,
        typer.Option("--expiration-seconds", "-e", help="Seconds until the entry expires"),
    ] = None,
    never_expires: Annotated[
        bool, typer.Option("--never-expires", help="Keep the entry until invalidated")
    ] = False,
) -> None:
    """Cache VALUE under KEY."""
    asyncio.run(_async_set(key, value, expiration_seconds, never_expires))
    typer.echo(f"Cached '{key}'.")


async def _async_set(
    key: str, value: str, expiration_seconds: int | None, never_expires: bool
) -> None:
    cache = _load_cache()
    try:
        if never_expires:
            await cache.set(key, value, expiration=None)
        elif expiration_seconds is not None:
            await cache.set(key, value, expiration=expiration_seconds)
        else:
            await cache.set(key, value)
    except OnDiskCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


@app.command()
def invalidate(key: Annotated[str, typer.Argument(help="Cache key to invalidate")]) -> None:
    """Remove KEY from the cache."""
    asyncio.run(_async_invalidate(key))
    typer.echo(f"Invalidated '{key}'.")


async def _async_invalidate(key: str) -> None:
    cache = _load_cache()
    try:
        await cache.invalidate(key)
    except OnDiskCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


@app.command()
def keys() -> None:
    """List every currently valid key."""
    asyncio.run(_async_keys())


async def _async_keys() -> None:
    from rich.console import Console
    from rich.table import Table

    cache = _load_cache()
    backend = await cache.backend()
    entries = await cache.entries()

    console = Console()
    if not entries:
        console.print(f"No valid keys in {backend.describe()}.")
        return

    table = Table(title=f"Valid keys in {backend.describe()}")
    table.add_column("Key", style="bold")
    table.add_column("Expires At")
    for entry in entries:
        if entry.expires_at_ms is None:
            expires = "never"
        else:
            expires = datetime.fromtimestamp(entry.expires_at_ms / 1000, tz=UTC).isoformat(
                timespec="seconds"
            )
        table.add_row(entry.key, expires)
    console.print(table)
