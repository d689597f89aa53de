"""Composition root: one index per resource kind, built from configuration."""

from dataclasses import dataclass

from agentshelf.config.schema import Config
from agentshelf.resources.index import AgentIndex, CommandIndex, PluginIndex, SkillIndex
from agentshelf.resources.plugins import MarketplacePluginRegistry, PluginRegistry
from agentshelf.storage.paths import (
    get_agents_dir,
    get_commands_dir,
    get_marketplaces_dir,
    get_project_skills_dir,
    get_user_skills_dir,
)


@dataclass
class Catalog:
    """The four resource indexes that the CLI and the bridge share."""

    skills: SkillIndex
    commands: CommandIndex
    agents: AgentIndex
    plugins: PluginIndex

    def clear_caches(self) -> None:
        for index in (self.skills, self.commands, self.agents, self.plugins):
            index.clear_cache()


def create_catalog(config: Config | None = None, registry: PluginRegistry | None = None) -> Catalog:
    """Build fresh indexes.

    Args:
        config: Configuration (default: built-in defaults).
        registry: Plugin registry; defaults to the marketplaces directory.

    Returns:
        A Catalog with nothing loaded yet.
    """
    config = config or Config()
    claude_home = config.paths.claude_home

    if registry is None:
        registry = MarketplacePluginRegistry(
            get_marketplaces_dir(claude_home),
            disabled=config.plugins.disabled,
        )

    return Catalog(
        skills=SkillIndex(
            user_dir=get_user_skills_dir(claude_home),
            project_dir=get_project_skills_dir(config.paths.project_dir),
            marketplaces_dir=get_marketplaces_dir(claude_home),
        ),
        commands=CommandIndex(get_commands_dir(claude_home)),
        agents=AgentIndex(get_agents_dir(claude_home)),
        plugins=PluginIndex(registry),
    )
