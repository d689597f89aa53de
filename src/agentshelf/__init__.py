"""
agentshelf - Local index for Claude skills, commands, agents and plugins

Scans the skill, command, agent and plugin directories under ~/.claude and
the project's .claude directory, caches what it finds, and answers search
and detail queries from a CLI or a JSON request bridge.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("agentshelf")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
]
