"""
Installed plugin registry for agentshelf.

The registry is the source of truth for which plugins are installed and
whether each is enabled. PluginIndex caches what it reports.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from agentshelf.resources.models import PluginEntry
from agentshelf.resources.parser import (
    ResourceParseError,
    descriptor_description,
    read_json_object,
)
from agentshelf.resources.scanner import list_plugin_dirs

logger = logging.getLogger(__name__)

MANIFEST_PATH = Path(".claude-plugin") / "plugin.json"


def make_plugin_id(name: str, marketplace: str) -> str:
    """Build the plugin@marketplace identifier."""
    return f"{name}@{marketplace}"


class PluginRegistry(ABC):
    """Abstract installed-plugin registry."""

    @abstractmethod
    async def list_installed(self) -> list[PluginEntry]:
        """List every installed plugin."""
        ...

    @abstractmethod
    async def enable(self, plugin_id: str) -> bool:
        """Enable a plugin.

        Returns:
            True on success, False if the plugin is unknown.
        """
        ...

    @abstractmethod
    async def disable(self, plugin_id: str) -> bool:
        """Disable a plugin.

        Returns:
            True on success, False if the plugin is unknown.
        """
        ...

    @abstractmethod
    def is_enabled(self, plugin_id: str) -> bool:
        """Check whether a plugin is enabled."""
        ...


class MarketplacePluginRegistry(PluginRegistry):
    """Registry backed by the marketplaces directory.

    Plugins are discovered under <root>/<marketplace>/plugins/<plugin>/.
    Enable state lives in memory only: every plugin is enabled unless its
    id is in the disabled set.
    """

    def __init__(self, marketplaces_root: Path, disabled: Iterable[str] = ()):
        """Initialize the registry.

        Args:
            marketplaces_root: ~/.claude/plugins/marketplaces or equivalent.
            disabled: Plugin ids disabled at startup.
        """
        self.marketplaces_root = Path(marketplaces_root)
        self._disabled: set[str] = set(disabled)
        self._known: set[str] | None = None

    def _discover(self) -> list[PluginEntry]:
        plugins: list[PluginEntry] = []

        for marketplace, name, plugin_dir in list_plugin_dirs(self.marketplaces_root).entries:
            manifest: dict = {}
            manifest_path = plugin_dir / MANIFEST_PATH
            if manifest_path.is_file():
                try:
                    manifest = read_json_object(manifest_path)
                except ResourceParseError as e:
                    logger.warning(f"Ignoring manifest of plugin {name}: {e}")

            version = manifest.get("version")
            plugins.append(
                PluginEntry(
                    id=make_plugin_id(name, marketplace),
                    name=name,
                    marketplace=marketplace,
                    path=plugin_dir,
                    version=str(version) if version else None,
                    description=descriptor_description(manifest),
                )
            )

        return plugins

    async def list_installed(self) -> list[PluginEntry]:
        plugins = await asyncio.to_thread(self._discover)
        self._known = {plugin.id for plugin in plugins}
        return plugins

    async def _is_known(self, plugin_id: str) -> bool:
        if self._known is None:
            await self.list_installed()
        return plugin_id in (self._known or set())

    async def enable(self, plugin_id: str) -> bool:
        if not await self._is_known(plugin_id):
            logger.warning(f"Cannot enable unknown plugin: {plugin_id}")
            return False
        self._disabled.discard(plugin_id)
        logger.info(f"Enabled plugin: {plugin_id}")
        return True

    async def disable(self, plugin_id: str) -> bool:
        if not await self._is_known(plugin_id):
            logger.warning(f"Cannot disable unknown plugin: {plugin_id}")
            return False
        self._disabled.add(plugin_id)
        logger.info(f"Disabled plugin: {plugin_id}")
        return True

    def is_enabled(self, plugin_id: str) -> bool:
        return plugin_id not in self._disabled
