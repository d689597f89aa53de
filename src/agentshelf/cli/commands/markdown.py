"""
agentshelf commands / agentshelf agents - Single-file resource queries.

Usage:
    agentshelf commands list
    agentshelf commands search deploy
    agentshelf agents show reviewer
"""

import asyncio
from collections.abc import Callable
from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from agentshelf.catalog import Catalog
from agentshelf.cli.output import (
    console,
    print_diagnostics,
    print_error,
    print_json_entries,
    print_warning,
    truncate,
)
from agentshelf.cli.state import get_state
from agentshelf.resources.index import MarkdownIndex
from agentshelf.resources.models import MarkdownEntry


def _print_entries(entries: list[MarkdownEntry], title: str, label: str, verbose: bool) -> None:
    if not entries:
        print_warning(f"No {label}s found.")
        return

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("README", style="dim")
    if verbose:
        table.add_column("Path", style="dim")

    for entry in entries:
        row = [
            escape(entry.name),
            escape(truncate(entry.description)),
            "yes" if entry.has_readme else "no",
        ]
        if verbose:
            row.append(escape(str(entry.path)))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n[dim]Total: {len(entries)} {label}(s)[/dim]")


def create_markdown_app(
    name: str,
    label: str,
    select: Callable[[Catalog], MarkdownIndex],
) -> typer.Typer:
    """Build the list/search/show command group for commands or agents.

    Args:
        name: Command group name ("commands" or "agents").
        label: Singular noun for messages.
        select: Picks the index from the catalog.
    """
    app = typer.Typer(name=name, help=f"{label.capitalize()}s from the user directory.")

    @app.command("list")
    def list_entries(
        ctx: typer.Context,
        reload: Annotated[
            bool,
            typer.Option("--reload", "-r", help="Rescan instead of using the cache."),
        ] = False,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Show detailed information."),
        ] = False,
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print JSON instead of a table."),
        ] = False,
    ) -> None:
        """List discovered entries."""
        index = select(get_state(ctx).catalog)
        entries = asyncio.run(index.load(reload))

        if as_json:
            print_json_entries(entries)
            return

        _print_entries(entries, name.capitalize(), label, verbose)
        if verbose:
            print_diagnostics(index.diagnostics)

    @app.command()
    def search(
        ctx: typer.Context,
        query: Annotated[str, typer.Argument(help="Text to look for in name or description.")],
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print JSON instead of a table."),
        ] = False,
    ) -> None:
        """Search by name or description."""
        results = asyncio.run(select(get_state(ctx).catalog).search(query))

        if as_json:
            print_json_entries(results)
            return

        if not results:
            print_warning(f"No {label}s found matching '{escape(query)}'")
            return

        _print_entries(results, f"Search Results for '{escape(query)}'", label, verbose=False)

    @app.command()
    def show(
        ctx: typer.Context,
        entry_name: Annotated[str, typer.Argument(metavar="NAME", help="Name without .md.")],
    ) -> None:
        """Show the markdown content and README."""
        details = asyncio.run(select(get_state(ctx).catalog).get_details(entry_name))
        if details is None:
            print_error(f"{label.capitalize()} not found: {escape(entry_name)}")
            raise typer.Exit(1)

        description = (
            escape(details.description) if details.description else "[dim]No description[/dim]"
        )
        console.print(
            Panel(
                f"[bold]{escape(details.name)}[/bold]\n{description}\n"
                f"[dim]{escape(str(details.path))}[/dim]",
                title=label.capitalize(),
            )
        )
        if details.content:
            console.print(Panel(Markdown(details.content), title=escape(details.path.name)))
        if details.readme_content:
            console.print(Panel(Markdown(details.readme_content), title="README.md"))

    return app


commands_app = create_markdown_app("commands", "command", lambda catalog: catalog.commands)
agents_app = create_markdown_app("agents", "agent", lambda catalog: catalog.agents)
