"""
agentshelf skills - Skill queries.

Usage:
    agentshelf skills list
    agentshelf skills list --location project --verbose
    agentshelf skills search review
    agentshelf skills show code-review --location user
"""

import asyncio
from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from agentshelf.cli.output import (
    console,
    print_diagnostics,
    print_error,
    print_json_entries,
    print_warning,
    truncate,
)
from agentshelf.cli.state import get_state
from agentshelf.resources.models import SkillEntry, SkillLocation

app = typer.Typer(
    name="skills",
    help="Skills from the user, project and plugin locations.",
)

LocationOption = Annotated[
    SkillLocation | None,
    typer.Option(
        "--location",
        "-l",
        help="Only this location (user, project, managed).",
    ),
]


def _print_skills(skills: list[SkillEntry], title: str, verbose: bool) -> None:
    if not skills:
        print_warning("No skills found.")
        return

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Location", style="dim")
    table.add_column("Description")
    table.add_column("Plugin", style="dim")

    if verbose:
        table.add_column("README", style="dim")
        table.add_column("Prompt", style="dim")
        table.add_column("Path", style="dim")

    for skill in skills:
        row = [
            escape(skill.name),
            skill.location.value,
            escape(truncate(skill.description)),
            escape(skill.source_plugin or ""),
        ]
        if verbose:
            row.append("yes" if skill.has_readme else "no")
            row.append("yes" if skill.has_prompt else "no")
            row.append(escape(str(skill.path)))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n[dim]Total: {len(skills)} skill(s)[/dim]")


@app.command("list")
def list_skills(
    ctx: typer.Context,
    location: LocationOption = None,
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
    """List discovered skills."""
    index = get_state(ctx).catalog.skills
    skills = asyncio.run(index.load(reload))
    if location is not None:
        skills = [s for s in skills if s.location == location]

    if as_json:
        print_json_entries(skills)
        return

    _print_skills(skills, "Skills", verbose)
    if verbose:
        print_diagnostics(index.diagnostics)


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Text to look for in name, description or plugin.")],
    location: LocationOption = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print JSON instead of a table."),
    ] = False,
) -> None:
    """Search skills by name, description or plugin."""
    results = asyncio.run(get_state(ctx).catalog.skills.search(query, location))

    if as_json:
        print_json_entries(results)
        return

    if not results:
        print_warning(f"No skills found matching '{escape(query)}'")
        return

    _print_skills(results, f"Search Results for '{escape(query)}'", verbose=False)


@app.command()
def show(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Skill name.")],
    location: LocationOption = None,
) -> None:
    """Show a skill's descriptor, README and prompt."""
    index = get_state(ctx).catalog.skills

    async def _details():
        if location is not None:
            return await index.get_details(name, location)
        skills = await index.load()
        match = next((s for s in skills if s.name == name), None)
        return await index.get_details(name, match.location) if match else None

    details = asyncio.run(_details())
    if details is None:
        print_error(f"Skill not found: {escape(name)}")
        raise typer.Exit(1)

    header = [
        f"[bold]{escape(details.name)}[/bold] ({details.location.value})",
        escape(details.description) if details.description else "[dim]No description[/dim]",
        f"[dim]{escape(str(details.path))}[/dim]",
    ]
    if details.source_plugin:
        header.append(f"Plugin: {escape(details.source_plugin)}")
    console.print(Panel("\n".join(header), title="Skill"))

    if details.skill_json:
        console.print_json(data=details.skill_json)
    if details.prompt_content:
        console.print(Panel(Markdown(details.prompt_content), title="prompt.md"))
    if details.readme_content:
        console.print(Panel(Markdown(details.readme_content), title="README.md"))
