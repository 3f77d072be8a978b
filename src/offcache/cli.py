"""Click CLI for offcache — drive the engine from a terminal."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from offcache.config.hierarchy import load_config_hierarchy
from offcache.config.loader import build_engine_config
from offcache.core import OfflineEngine
from offcache.errors.exceptions import ConfigError
from offcache.types import RequestDescriptor, Response, Signal

console = Console()
error_console = Console(stderr=True)

T = TypeVar("T")

_BODY_PREVIEW_CHARS = 500


def _setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _build_engine(backend: str | None, db_path: str | None) -> OfflineEngine:
    # Disk by default so regions survive between invocations
    try:
        config = build_engine_config(
            load_config_hierarchy(cache_backend=backend or "disk", cache_db_path=db_path)
        )
    except ConfigError as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    return OfflineEngine(config=config)


def _run(engine: OfflineEngine, fn: Callable[[OfflineEngine], Awaitable[T]]) -> T:
    async def _main() -> T:
        try:
            return await fn(engine)
        finally:
            await engine.close()

    return asyncio.run(_main())


_backend_option = click.option(
    "--backend", type=click.Choice(["memory", "disk"]), default=None, help="Cache backend."
)
_db_option = click.option("--db", "db_path", type=click.Path(), help="SQLite cache file.")
_verbose_option = click.option(
    "-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)."
)


@click.group()
@click.version_option(package_name="offcache")
def cli() -> None:
    """offcache — offline-capable resource caching proxy."""


@cli.command()
@click.argument("url")
@click.option("--method", default="GET", show_default=True, help="HTTP method.")
@click.option("--destination", default="", help='Destination hint, e.g. "image".')
@_backend_option
@_db_option
@_verbose_option
def fetch(
    url: str,
    method: str,
    destination: str,
    backend: str | None,
    db_path: str | None,
    verbose: int,
) -> None:
    """Resolve one request through the engine and print the result."""
    _setup_logging(verbose)
    engine = _build_engine(backend, db_path)
    request = RequestDescriptor(url=url, method=method, destination=destination)

    result = _run(engine, lambda e: e.handle(request))

    if result is Signal.PASS_THROUGH:
        console.print(f"[yellow]Pass-through:[/yellow] {method.upper()} requests are not handled")
        return
    _print_response(result)


@cli.command()
@_backend_option
@_db_option
@_verbose_option
def install(backend: str | None, db_path: str | None, verbose: int) -> None:
    """Pre-populate the seed region from the manifest."""
    _setup_logging(verbose)
    engine = _build_engine(backend, db_path)
    if _run(engine, lambda e: e.on_install()):
        console.print("[green]Seed resources cached.[/green]")
    else:
        console.print("[yellow]Seed caching failed; startup continues without it.[/yellow]")


@cli.command()
@_backend_option
@_db_option
@_verbose_option
def activate(backend: str | None, db_path: str | None, verbose: int) -> None:
    """Delete regions the current version does not recognize."""
    _setup_logging(verbose)
    engine = _build_engine(backend, db_path)
    deleted = _run(engine, lambda e: e.on_activate())
    if not deleted:
        console.print("No stale regions.")
        return
    for name in deleted:
        console.print(f"[green]Deleted[/green] {name}")


@cli.command()
@click.argument("tag")
@_backend_option
@_db_option
@_verbose_option
def sync(tag: str, backend: str | None, db_path: str | None, verbose: int) -> None:
    """Run the background refresh for TAG."""
    _setup_logging(verbose)
    engine = _build_engine(backend, db_path)
    if _run(engine, lambda e: e.on_sync_tag(tag)):
        console.print(f"[green]Refreshed[/green] {engine.config.refresh.url}")
    else:
        console.print(f"[yellow]Nothing refreshed for tag '{tag}'.[/yellow]")


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@_db_option
def cache_stats(db_path: str | None) -> None:
    """Show cache statistics."""
    engine = _build_engine("disk", db_path)
    stats = _run(engine, lambda e: e.cache.stats())

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Regions", str(stats.regions))
    table.add_row("Entries", str(stats.entries))
    table.add_row("Size (MB)", f"{stats.size_mb:.2f}")

    console.print(table)


@cache.command("regions")
@_db_option
def cache_regions(db_path: str | None) -> None:
    """List regions and whether the current version recognizes them."""
    engine = _build_engine("disk", db_path)
    known = engine.config.regions.known

    async def _collect(e: OfflineEngine) -> list[tuple[str, int]]:
        return [(name, len(await e.cache.keys(name))) for name in await e.cache.regions()]

    rows = _run(engine, _collect)

    table = Table(title="Cache Regions", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Entries")
    table.add_column("Status")
    for name, count in rows:
        status = "current" if name in known else "[yellow]stale[/yellow]"
        table.add_row(name, str(count), status)

    console.print(table)


@cache.command("clear")
@_db_option
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(db_path: str | None) -> None:
    """Delete every region and entry."""
    engine = _build_engine("disk", db_path)
    _run(engine, lambda e: e.cache.clear())
    console.print("[green]Cache cleared.[/green]")


def _print_response(response: Response) -> None:
    colour = "green" if response.ok else "red"
    console.print(f"[{colour}]{response.status} {response.status_text}[/{colour}]")

    table = Table(show_header=True)
    table.add_column("Header", style="cyan")
    table.add_column("Value")
    for key, value in response.headers.items():
        table.add_row(key, value)
    console.print(table)

    text = response.text
    if len(text) > _BODY_PREVIEW_CHARS:
        text = text[:_BODY_PREVIEW_CHARS] + f"… ({len(response.body)} bytes)"
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def main() -> None:
    """Entry point for the CLI."""
    cli()
