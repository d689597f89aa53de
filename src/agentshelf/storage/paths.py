"""
Path utilities for agentshelf.

Resolves the Claude resource directories that get indexed and the
agentshelf configuration directory.
"""

import os
from pathlib import Path


def get_agentshelf_home() -> Path:
    """
    Get the agentshelf home directory.

    Resolution order:
    1. AGENTSHELF_HOME environment variable
    2. Default: ~/.agentshelf

    Returns:
        Path to the agentshelf home directory.
    """
    env_home = os.environ.get("AGENTSHELF_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".agentshelf"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.agentshelf/config.yaml
    """
    return get_agentshelf_home() / "config.yaml"


def get_claude_home(claude_home: Path | None = None) -> Path:
    """
    Get the Claude home directory that holds user-level resources.

    Args:
        claude_home: Explicit override, typically from configuration.

    Returns:
        Path to ~/.claude unless overridden.
    """
    if claude_home is not None:
        return expand_path(claude_home)
    return Path.home() / ".claude"


def get_user_skills_dir(claude_home: Path | None = None) -> Path:
    """
    Get the user-level skills directory.

    Returns:
        Path to ~/.claude/skills/
    """
    return get_claude_home(claude_home) / "skills"


def get_project_skills_dir(project_dir: Path | None = None) -> Path:
    """
    Get the project-level skills directory.

    Args:
        project_dir: Project root. Defaults to cwd.

    Returns:
        Path to <project>/.claude/skills/
    """
    root = expand_path(project_dir) if project_dir is not None else Path.cwd()
    return root / ".claude" / "skills"


def get_marketplaces_dir(claude_home: Path | None = None) -> Path:
    """
    Get the plugin marketplaces directory.

    Returns:
        Path to ~/.claude/plugins/marketplaces/
    """
    return get_claude_home(claude_home) / "plugins" / "marketplaces"


def get_agents_dir(claude_home: Path | None = None) -> Path:
    """
    Get the user-level agents directory.

    Returns:
        Path to ~/.claude/agents/
    """
    return get_claude_home(claude_home) / "agents"


def get_commands_dir(claude_home: Path | None = None) -> Path:
    """
    Get the user-level commands directory.

    Returns:
        Path to ~/.claude/commands/
    """
    return get_claude_home(claude_home) / "commands"


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded and resolved Path.
    """
    if isinstance(path, str):
        # Expand environment variables
        path = os.path.expandvars(path)
    return Path(path).expanduser().resolve()
