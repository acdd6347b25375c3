"""
forumsync CLI - run and preview commands.
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from forumsync.cli.errors import ExitCode, print_configuration_error, print_error
from forumsync.core.config import load_config
from forumsync.core.errors import ConfigurationError
from forumsync.core.factory import AppFactory
from forumsync.core.snapshot.models import ProjectSnapshot
from forumsync.core.sync.models import SyncResult

logger = logging.getLogger(__name__)
console = Console()


async def _run_cycle(cursor: int, limit: int | None) -> SyncResult:
    async with AppFactory(load_config()) as factory:
        return await factory.create_orchestrator().run(cursor=cursor, limit=limit)


async def _build_snapshots(cursor: int, limit: int | None) -> list[ProjectSnapshot]:
    async with AppFactory(load_config()) as factory:
        source = factory.create_source()
        parents = await source.fetch_parent_rows(cursor=cursor, limit=limit)
        builder = factory.create_snapshot_builder()
        return [await builder.build(parent) for parent in parents]


def render_result(result: SyncResult) -> None:
    """Print a cycle result as a summary line plus an error table."""
    style = "green" if result.ok else "yellow"
    console.print(f"[{style}]Sync finished:[/{style}] {result.summary()}")

    if not result.errors:
        return

    table = Table(title="Failed projects")
    table.add_column("Project", style="cyan")
    table.add_column("Type")
    table.add_column("Thread")
    table.add_column("Message")
    for error in result.errors:
        table.add_row(error.project_id, error.error_type.value, error.thread_id or "-", error.message)
    console.print(table)


def render_snapshots(snapshots: list[ProjectSnapshot]) -> None:
    """Print snapshots as a table."""
    table = Table(title="Projects")
    table.add_column("Project", style="cyan")
    table.add_column("Title")
    table.add_column("Done", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Status")
    table.add_column("Active", justify="right")
    table.add_column("Invalid", justify="right")
    table.add_column("Thread")

    for snapshot in snapshots:
        delayed = snapshot.progress_status.value == "delayed"
        table.add_row(
            snapshot.project_id,
            snapshot.title,
            f"{snapshot.completion.done}/{snapshot.completion.total}",
            str(snapshot.completion.percentage),
            f"[red]{snapshot.progress_status.label}[/red]" if delayed else snapshot.progress_status.label,
            str(len(snapshot.in_progress_children)),
            str(len(snapshot.invalid_children)),
            snapshot.thread_id or "[dim]new[/dim]",
        )
    console.print(table)


def run(
    cursor: int = typer.Option(0, "--cursor", min=0, help="Skip the first N projects"),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Process at most N projects"),
) -> None:
    """
    Run one sync cycle against the configured sheet and forum.

    Examples:
        forumsync run                  # Sync every project
        forumsync run --limit 10       # Sync the first 10 projects
        forumsync run --cursor 10 --limit 10
    """
    try:
        result = asyncio.run(_run_cycle(cursor, limit))
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")
        raise typer.Exit(ExitCode.SIGINT)
    except ConfigurationError as e:
        print_configuration_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)
    except Exception as e:
        logger.debug("Sync cycle failed", exc_info=True)
        print_error("Sync cycle could not run", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    render_result(result)
    if not result.ok:
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def preview(
    cursor: int = typer.Option(0, "--cursor", min=0, help="Skip the first N projects"),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Show at most N projects"),
) -> None:
    """
    Build snapshots and show them without contacting the forum.

    Examples:
        forumsync preview
        forumsync preview --limit 5
    """
    try:
        snapshots = asyncio.run(_build_snapshots(cursor, limit))
    except KeyboardInterrupt:
        raise typer.Exit(ExitCode.SIGINT)
    except ConfigurationError as e:
        print_configuration_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)
    except Exception as e:
        logger.debug("Preview failed", exc_info=True)
        print_error("Could not read projects", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not snapshots:
        console.print("[dim]No projects found[/dim]")
        return
    render_snapshots(snapshots)
