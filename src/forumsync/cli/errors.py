"""
Standardized error handling and exit codes for the forumsync CLI.
"""

from enum import IntEnum

from rich.console import Console

from forumsync.core.errors import ConfigurationError

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for forumsync CLI operations."""

    SUCCESS = 0
    """Cycle ran and every project synced."""

    GENERAL_ERROR = 1
    """Cycle could not run, or at least one project failed."""

    USER_ERROR = 2
    """Configuration error (actionable by the user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Example:
        >>> print_error(
        ...     "Sheet not reachable",
        ...     reason="The Sheets API returned 403",
        ...     solution="Share the sheet with the service account",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_configuration_error(error: ConfigurationError) -> None:
    """Print error for a missing or invalid setting."""
    print_error(
        str(error),
        reason="forumsync reads settings from the environment, .env files and .forumsync.json",
        solution=f"export {error.setting}=...  # or add it to .env",
    )
