"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from agentshelf.resources.models import ResourceModel, ScanDiagnostic

# Global console instances; logs and errors go to stderr so stdout stays clean
console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_json_entries(entries: Sequence[ResourceModel]) -> None:
    """Print entries as a JSON array in wire format."""
    console.print_json(data=[entry.to_wire() for entry in entries])


def print_diagnostics(diagnostics: Sequence[ScanDiagnostic]) -> None:
    """Print what a scan skipped."""
    for diagnostic in diagnostics:
        print_warning(
            f"Skipped {escape(str(diagnostic.path))} ({diagnostic.kind.value}): "
            f"{escape(diagnostic.reason)}"
        )


def truncate(text: str | None, width: int = 50) -> str:
    """Shorten text for a table cell."""
    if not text:
        return ""
    return text[:width] + "..." if len(text) > width else text


def configure_logging(level: str = "WARNING", show_path: bool = False) -> None:
    """Send agentshelf logs to stderr through rich."""
    logger = logging.getLogger("agentshelf")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(console=err_console, show_path=show_path, rich_tracebacks=True)
    )
    logger.setLevel(level)
    logger.propagate = False
