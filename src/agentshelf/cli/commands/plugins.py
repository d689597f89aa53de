"""
agentshelf plugins - Installed plugin queries.

Usage:
    agentshelf plugins list
    agentshelf plugins show code-tools@my-marketplace
    agentshelf plugins status code-tools@my-marketplace
"""

import asyncio
from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from agentshelf.cli.output import console, print_error, print_json_entries, print_warning, truncate
from agentshelf.cli.state import get_state
from agentshelf.resources.index import PluginIndex
from agentshelf.resources.models import PluginDetails


class PluginNotFoundError(Exception):
    """Plugin not found error."""

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        super().__init__(f"Plugin not found: {plugin_id}")


async def _require_details(index: PluginIndex, name_or_id: str) -> PluginDetails:
    details = await index.get_details(name_or_id)
    if details is None:
        raise PluginNotFoundError(name_or_id)
    return details


async def _require_installed(index: PluginIndex, plugin_id: str) -> None:
    plugins = await index.load()
    if not any(p.id == plugin_id for p in plugins):
        raise PluginNotFoundError(plugin_id)


app = typer.Typer(
    name="plugins",
    help="Installed plugins.",
)


@app.command("list")
def list_plugins(
    ctx: typer.Context,
    search: Annotated[
        str | None,
        typer.Option("--search", "-s", help="Filter by name, description or marketplace."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print JSON instead of a table."),
    ] = False,
) -> None:
    """List installed plugins with their enable state."""
    index = get_state(ctx).catalog.plugins

    async def _list():
        plugins = await index.list_with_status()
        if search:
            matching = {p.id for p in await index.search(search)}
            plugins = [p for p in plugins if p.id in matching]
        return plugins

    plugins = asyncio.run(_list())

    if as_json:
        print_json_entries(plugins)
        return

    if not plugins:
        print_warning("No plugins installed.")
        return

    table = Table(title="Installed Plugins")
    table.add_column("ID", style="cyan")
    table.add_column("Version", style="dim")
    table.add_column("Description")
    table.add_column("Enabled")

    for plugin in plugins:
        table.add_row(
            escape(plugin.id),
            escape(plugin.version or ""),
            escape(truncate(plugin.description)),
            "[green]yes[/green]" if plugin.enabled else "[red]no[/red]",
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(plugins)} plugin(s)[/dim]")


@app.command()
def show(
    ctx: typer.Context,
    plugin: Annotated[str, typer.Argument(help="Plugin id (plugin@marketplace) or name.")],
) -> None:
    """Show a plugin's manifest and README."""
    try:
        details = asyncio.run(_require_details(get_state(ctx).catalog.plugins, plugin))
    except PluginNotFoundError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    description = (
        escape(details.description) if details.description else "[dim]No description[/dim]"
    )
    console.print(
        Panel(
            f"[bold]{escape(details.id)}[/bold] {escape(details.version or '')}\n{description}\n"
            f"[dim]{escape(str(details.path))}[/dim]",
            title="Plugin",
        )
    )
    if details.manifest:
        console.print_json(data=details.manifest)
    if details.readme_content:
        console.print(Panel(Markdown(details.readme_content), title="README.md"))


@app.command()
def status(
    ctx: typer.Context,
    plugin_id: Annotated[str, typer.Argument(metavar="PLUGIN_ID", help="plugin@marketplace")],
) -> None:
    """Show whether a plugin is enabled."""
    index = get_state(ctx).catalog.plugins

    try:
        asyncio.run(_require_installed(index, plugin_id))
    except PluginNotFoundError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    state = "[green]enabled[/green]" if index.is_enabled(plugin_id) else "[red]disabled[/red]"
    console.print(f"{escape(plugin_id)}: {state}")
