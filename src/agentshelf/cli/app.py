"""
Main Typer application for agentshelf CLI.

This module defines the root CLI application and registers all command groups.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from agentshelf import __version__
from agentshelf.catalog import create_catalog
from agentshelf.cli.commands import bridge, markdown, plugins, skills
from agentshelf.cli.output import configure_logging, print_error, print_info
from agentshelf.cli.state import CliState
from agentshelf.config import ConfigurationError, load_config

# Create the main Typer app
app = typer.Typer(
    name="agentshelf",
    help="Browse Claude skills, commands, agents and plugins.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"agentshelf version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Extra config file merged over the global one.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Log at DEBUG level.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]agentshelf[/bold blue] - Claude resource browser

    Lists and searches skills, slash commands, subagents and marketplace
    plugins, and serves the same queries to a UI over [bold]agentshelf bridge[/bold].
    """
    try:
        config = load_config(config_path=config_path)
    except ConfigurationError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    configure_logging(
        "DEBUG" if verbose else config.logging.level,
        show_path=config.logging.show_path,
    )
    ctx.obj = CliState(config=config, catalog=create_catalog(config))


# Register command groups
app.add_typer(skills.app, name="skills")
app.add_typer(markdown.commands_app, name="commands")
app.add_typer(markdown.agents_app, name="agents")
app.add_typer(plugins.app, name="plugins")
app.command("bridge")(bridge.bridge)


if __name__ == "__main__":
    app()
