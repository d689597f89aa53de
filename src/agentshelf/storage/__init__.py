"""Storage utilities for agentshelf."""

from agentshelf.storage.paths import (
    expand_path,
    get_agents_dir,
    get_agentshelf_home,
    get_claude_home,
    get_commands_dir,
    get_global_config_path,
    get_marketplaces_dir,
    get_project_skills_dir,
    get_user_skills_dir,
)

__all__ = [
    "expand_path",
    "get_agents_dir",
    "get_agentshelf_home",
    "get_claude_home",
    "get_commands_dir",
    "get_global_config_path",
    "get_marketplaces_dir",
    "get_project_skills_dir",
    "get_user_skills_dir",
]
