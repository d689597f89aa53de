"""
Resource indexes for agentshelf.

Each index owns an in-memory snapshot of one resource kind. The snapshot is
trusted until a forced reload or clear_cache(); nothing expires on its own.
Filesystem work runs in worker threads so the event loop only suspends on I/O.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Generic

from agentshelf.resources.cache import CacheState, Loaded, Unloaded
from agentshelf.resources.models import (
    AgentDetails,
    AgentEntry,
    CommandDetails,
    CommandEntry,
    EntryT,
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
from agentshelf.resources.parser import ResourceParseError, read_json_object, read_text_file
from agentshelf.resources.plugins import MANIFEST_PATH, PluginRegistry
from agentshelf.resources.scanner import (
    PROMPT_FILE,
    README_FILE,
    SKILL_DESCRIPTOR,
    scan_managed_skills,
    scan_markdown_directory,
    scan_skill_directory,
)

logger = logging.getLogger(__name__)


def _read_optional(path: Path) -> str | None:
    """Read a file if it exists; read failures still raise."""
    if not path.exists():
        return None
    return read_text_file(path)


class ResourceIndex(ABC, Generic[EntryT]):
    """Cached, searchable list of one resource kind.

    Subclasses provide the scan and the fields that search matches against.
    """

    kind = "resources"

    def __init__(self) -> None:
        self._state: CacheState[EntryT] = Unloaded()
        self._diagnostics: list[ScanDiagnostic] = []

    @abstractmethod
    async def _scan(self) -> ScanResult[EntryT]:
        """Produce a complete, fresh result."""
        ...

    @abstractmethod
    def _search_fields(self, entry: EntryT) -> Iterable[str | None]:
        """Text fields of an entry that search matches against."""
        ...

    async def load(self, force_reload: bool = False) -> list[EntryT]:
        """Load all entries, from cache unless forced.

        Args:
            force_reload: Rescan even if a snapshot is cached.

        Returns:
            The cached list itself when served from cache. Callers must not
            mutate it. A failed scan yields (and caches) an empty list.
        """
        state = self._state
        if isinstance(state, Loaded) and not force_reload:
            logger.debug(f"Returning cached {self.kind}")
            return state.entries

        logger.debug(f"Loading {self.kind}")

        try:
            result = await self._scan()
        except Exception as e:
            logger.error(f"Failed to load {self.kind}: {e}", exc_info=True)
            empty: Loaded[EntryT] = Loaded(entries=[], loaded_at=state.loaded_at)
            self._state = empty
            self._diagnostics = []
            return empty.entries

        self._state = Loaded(entries=result.entries, loaded_at=time.time())
        self._diagnostics = result.diagnostics
        logger.info(
            f"Loaded {len(result.entries)} {self.kind}"
            + (f" ({len(result.diagnostics)} skipped)" if result.diagnostics else "")
        )
        return result.entries

    def _matches(self, entry: EntryT, query_lower: str) -> bool:
        return any(
            query_lower in value.lower() for value in self._search_fields(entry) if value
        )

    async def search(self, query: str) -> list[EntryT]:
        """Case-insensitive substring search. An empty query matches everything."""
        entries = await self.load()
        query_lower = query.lower()
        return [entry for entry in entries if self._matches(entry, query_lower)]

    def clear_cache(self) -> None:
        """Forget the snapshot; the next load rescans."""
        self._state = Unloaded()
        self._diagnostics = []
        logger.debug(f"Cleared {self.kind} cache")

    @property
    def is_loaded(self) -> bool:
        return isinstance(self._state, Loaded)

    @property
    def loaded_at(self) -> float:
        """Time of the last successful scan (0.0 if never loaded)."""
        return self._state.loaded_at

    @property
    def cached_entries(self) -> list[EntryT]:
        """The cached entries, or [] if not loaded. Never triggers a scan."""
        state = self._state
        return state.entries if isinstance(state, Loaded) else []

    @property
    def diagnostics(self) -> list[ScanDiagnostic]:
        """What the last scan skipped and why."""
        return list(self._diagnostics)


# =============================================================================
# Skills
# =============================================================================


class SkillIndex(ResourceIndex[SkillEntry]):
    """Skills from the user, project and managed (plugin) locations."""

    kind = "skills"

    def __init__(self, user_dir: Path, project_dir: Path, marketplaces_dir: Path):
        """Initialize the skill index.

        Args:
            user_dir: ~/.claude/skills
            project_dir: <project>/.claude/skills
            marketplaces_dir: ~/.claude/plugins/marketplaces
        """
        super().__init__()
        self.user_dir = Path(user_dir)
        self.project_dir = Path(project_dir)
        self.marketplaces_dir = Path(marketplaces_dir)

    async def _scan(self) -> ScanResult[SkillEntry]:
        # Precedence order: user, project, managed.
        result: ScanResult[SkillEntry] = ScanResult()
        result.extend(
            await asyncio.to_thread(scan_skill_directory, self.user_dir, SkillLocation.USER)
        )
        result.extend(
            await asyncio.to_thread(scan_skill_directory, self.project_dir, SkillLocation.PROJECT)
        )
        result.extend(await asyncio.to_thread(scan_managed_skills, self.marketplaces_dir))
        return result

    def _search_fields(self, entry: SkillEntry) -> Iterable[str | None]:
        return (entry.name, entry.description, entry.source_plugin)

    async def search(
        self, query: str, location_filter: SkillLocation | str | None = None
    ) -> list[SkillEntry]:
        """Search skills, optionally restricted to one location."""
        entries = await self.load()
        query_lower = query.lower()
        location = SkillLocation(location_filter) if location_filter else None
        return [
            entry
            for entry in entries
            if (location is None or entry.location == location)
            and self._matches(entry, query_lower)
        ]

    async def get_details(self, name: str, location: SkillLocation | str) -> SkillDetails | None:
        """Get a skill with its skill.json, README.md and prompt.md contents.

        Only the cached snapshot is consulted; a skill added on disk after
        the last load is not found until a forced reload.

        Returns:
            The details, or None if no skill matches name and location, or
            if any of its files fails to read.
        """
        try:
            location = SkillLocation(location)
        except ValueError:
            logger.warning(f"Unknown skill location: {location}")
            return None

        skills = await self.load()
        skill = next((s for s in skills if s.name == name and s.location == location), None)
        if skill is None:
            logger.warning(f"Skill not found: {name} ({location.value})")
            return None

        return await asyncio.to_thread(self._read_details, skill)

    @staticmethod
    def _read_details(skill: SkillEntry) -> SkillDetails | None:
        try:
            skill_json = read_json_object(skill.path / SKILL_DESCRIPTOR)
            readme = _read_optional(skill.path / README_FILE)
            prompt = _read_optional(skill.path / PROMPT_FILE)
        except ResourceParseError as e:
            logger.error(f"Failed to get skill details for {skill.name}: {e}")
            return None

        return SkillDetails(
            **skill.model_dump(),
            skill_json=skill_json,
            readme_content=readme,
            prompt_content=prompt,
        )


# =============================================================================
# Commands & Agents
# =============================================================================


class MarkdownIndex(ResourceIndex[EntryT], Generic[EntryT]):
    """Index of <name>.md files directly inside one root."""

    entry_type: type[MarkdownEntry] = MarkdownEntry
    details_type: type[MarkdownDetails] = MarkdownDetails

    def __init__(self, root: Path):
        super().__init__()
        self.root = Path(root)

    async def _scan(self) -> ScanResult[EntryT]:
        return await asyncio.to_thread(scan_markdown_directory, self.root, self.entry_type)

    def _search_fields(self, entry: EntryT) -> Iterable[str | None]:
        return (entry.name, entry.description)

    async def get_details(self, name: str) -> MarkdownDetails | None:
        """Get an entry with its markdown content and optional README.

        Returns:
            The details, or None if not found or unreadable.
        """
        entries = await self.load()
        entry = next((e for e in entries if e.name == name), None)
        if entry is None:
            logger.warning(f"{self.entry_type.__name__} not found: {name}")
            return None

        return await asyncio.to_thread(self._read_details, entry)

    def _read_details(self, entry: EntryT) -> MarkdownDetails | None:
        try:
            content = read_text_file(entry.path)
            readme = _read_optional(self.root / entry.name / README_FILE)
        except ResourceParseError as e:
            logger.error(f"Failed to get details for {entry.name}: {e}")
            return None

        return self.details_type(**entry.model_dump(), content=content, readme_content=readme)


class CommandIndex(MarkdownIndex[CommandEntry]):
    """Slash commands from ~/.claude/commands."""

    kind = "commands"
    entry_type = CommandEntry
    details_type = CommandDetails


class AgentIndex(MarkdownIndex[AgentEntry]):
    """Sub-agents from ~/.claude/agents."""

    kind = "agents"
    entry_type = AgentEntry
    details_type = AgentDetails


# =============================================================================
# Plugins
# =============================================================================


class PluginIndex(ResourceIndex[PluginEntry]):
    """Installed plugins, as reported by a PluginRegistry.

    The plugin list is cached like any other index; enable state is always
    read live from the registry.
    """

    kind = "plugins"

    def __init__(self, registry: PluginRegistry):
        super().__init__()
        self.registry = registry

    async def _scan(self) -> ScanResult[PluginEntry]:
        return ScanResult(entries=await self.registry.list_installed())

    def _search_fields(self, entry: PluginEntry) -> Iterable[str | None]:
        return (entry.name, entry.description, entry.marketplace)

    async def list_with_status(self, force_reload: bool = False) -> list[PluginStatusEntry]:
        """All plugins, each paired with its current enabled flag."""
        plugins = await self.load(force_reload)
        return [
            PluginStatusEntry(**plugin.model_dump(), enabled=self.registry.is_enabled(plugin.id))
            for plugin in plugins
        ]

    async def enable(self, plugin_id: str) -> bool:
        return await self.registry.enable(plugin_id)

    async def disable(self, plugin_id: str) -> bool:
        return await self.registry.disable(plugin_id)

    def is_enabled(self, plugin_id: str) -> bool:
        return self.registry.is_enabled(plugin_id)

    async def get_details(self, name_or_id: str) -> PluginDetails | None:
        """Get a plugin with its manifest and README.

        Args:
            name_or_id: plugin@marketplace id, or a bare plugin name (first match).
        """
        plugins = await self.load()
        plugin = next(
            (p for p in plugins if p.id == name_or_id or p.name == name_or_id),
            None,
        )
        if plugin is None:
            logger.warning(f"Plugin not found: {name_or_id}")
            return None

        return await asyncio.to_thread(self._read_details, plugin)

    @staticmethod
    def _read_details(plugin: PluginEntry) -> PluginDetails | None:
        manifest_path = plugin.path / MANIFEST_PATH
        try:
            manifest = read_json_object(manifest_path) if manifest_path.exists() else None
            readme = _read_optional(plugin.path / README_FILE)
        except ResourceParseError as e:
            logger.error(f"Failed to get plugin details for {plugin.id}: {e}")
            return None

        return PluginDetails(**plugin.model_dump(), manifest=manifest, readme_content=readme)
