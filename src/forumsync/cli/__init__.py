"""
forumsync CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer

from forumsync import __version__
from forumsync.cli import serve, sync
from forumsync.core.config.env import load_layered_env

app = typer.Typer(
    name="forumsync",
    help="Sync a project/task sheet to forum threads",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)


def configure_logging(debug: bool) -> None:
    """Configure root logging on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"forumsync {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    forumsync - keep one forum thread per project in sync with the sheet.

    Settings come from the environment (DISCORD_BOT_TOKEN,
    DISCORD_FORUM_CHANNEL_ID, SPREADSHEET_ID, GOOGLE_ACCESS_TOKEN, ...),
    .env files and .forumsync.json.
    """
    # Precedence: OS env > project .env.local > project .env > user .env
    load_layered_env()
    configure_logging(debug)
    ctx.obj = {"debug": debug}


app.command(name="run")(sync.run)
app.command(name="preview")(sync.preview)
app.command(name="serve")(serve.serve)


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main"]
