"""
agentshelf resource indexing.

Resources are discovered on disk and cached per kind:
- Skills: <root>/<name>/skill.json (+ README.md, prompt.md) in the user,
  project and managed (plugin-provided) locations
- Commands: ~/.claude/commands/<name>.md
- Agents: ~/.claude/agents/<name>.md
- Plugins: ~/.claude/plugins/marketplaces/<marketplace>/plugins/<plugin>/

Usage:
    from agentshelf.resources import SkillIndex, SkillLocation

    index = SkillIndex(user_dir, project_dir, marketplaces_dir)
    skills = await index.load()
    results = await index.search("review", SkillLocation.PROJECT)
    details = await index.get_details("code-review", SkillLocation.PROJECT)
"""

# Models
from agentshelf.resources.models import (
    AgentDetails,
    AgentEntry,
    CommandDetails,
    CommandEntry,
    DiagnosticKind,
    MarkdownDetails,
    MarkdownEntry,
    PluginDetails,
    PluginEntry,
    PluginStatusEntry,
    ScanDiagnostic,
    ScanResult,
    SkillDetails,
    SkillEntry,
    SkillLocation,
)

# Parser
from agentshelf.resources.parser import (
    InvalidDescriptorError,
    ResourceParseError,
    extract_description,
    split_frontmatter,
)

# Scanner
from agentshelf.resources.scanner import (
    scan_managed_skills,
    scan_markdown_directory,
    scan_skill_directory,
)

# Cache
from agentshelf.resources.cache import CacheState, Loaded, Unloaded

# Plugins
from agentshelf.resources.plugins import (
    MarketplacePluginRegistry,
    PluginRegistry,
    make_plugin_id,
)

# Indexes
from agentshelf.resources.index import (
    AgentIndex,
    CommandIndex,
    MarkdownIndex,
    PluginIndex,
    ResourceIndex,
    SkillIndex,
)

__all__ = [
    # Models
    "AgentDetails",
    "AgentEntry",
    "CommandDetails",
    "CommandEntry",
    "DiagnosticKind",
    "MarkdownDetails",
    "MarkdownEntry",
    "PluginDetails",
    "PluginEntry",
    "PluginStatusEntry",
    "ScanDiagnostic",
    "ScanResult",
    "SkillDetails",
    "SkillEntry",
    "SkillLocation",
    # Parser
    "InvalidDescriptorError",
    "ResourceParseError",
    "extract_description",
    "split_frontmatter",
    # Scanner
    "scan_managed_skills",
    "scan_markdown_directory",
    "scan_skill_directory",
    # Cache
    "CacheState",
    "Loaded",
    "Unloaded",
    # Plugins
    "MarketplacePluginRegistry",
    "PluginRegistry",
    "make_plugin_id",
    # Indexes
    "AgentIndex",
    "CommandIndex",
    "MarkdownIndex",
    "PluginIndex",
    "ResourceIndex",
    "SkillIndex",
]
