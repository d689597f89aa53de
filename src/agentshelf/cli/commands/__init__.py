"""CLI command modules."""

from agentshelf.cli.commands import bridge, markdown, plugins, skills

__all__ = ["bridge", "markdown", "plugins", "skills"]
