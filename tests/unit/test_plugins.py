"""
Unit tests for the plugin registry and plugin index.
"""

from pathlib import Path

import pytest

from agentshelf.resources.index import PluginIndex
from agentshelf.resources.models import PluginEntry
from agentshelf.resources.plugins import (
    MarketplacePluginRegistry,
    PluginRegistry,
    make_plugin_id,
)


@pytest.fixture
def marketplaces(claude_home: Path) -> Path:
    return claude_home / "plugins" / "marketplaces"


@pytest.fixture
def installed(make_plugin):
    make_plugin(
        "acme",
        "code-tools",
        {"name": "code-tools", "version": "1.2.0", "description": "Linting and formatting"},
        readme="# Code Tools",
    )
    make_plugin("acme", "bare")
    make_plugin("community", "docs-helper", {"description": "Writes docs"})


class InMemoryRegistry(PluginRegistry):
    """Registry with fixed plugins for testing."""

    def __init__(self, plugins: list[PluginEntry]):
        self.plugins = plugins
        self.enabled = {p.id for p in plugins}
        self.list_calls = 0

    async def list_installed(self) -> list[PluginEntry]:
        self.list_calls += 1
        return list(self.plugins)

    async def enable(self, plugin_id: str) -> bool:
        self.enabled.add(plugin_id)
        return True

    async def disable(self, plugin_id: str) -> bool:
        self.enabled.discard(plugin_id)
        return True

    def is_enabled(self, plugin_id: str) -> bool:
        return plugin_id in self.enabled


def test_make_plugin_id():
    """Test plugin ids are name@marketplace."""
    assert make_plugin_id("code-tools", "acme") == "code-tools@acme"


class TestMarketplacePluginRegistry:
    """Tests for MarketplacePluginRegistry."""

    @pytest.mark.asyncio
    async def test_list_installed(self, marketplaces: Path, installed):
        """Test plugins are discovered with manifest metadata."""
        registry = MarketplacePluginRegistry(marketplaces)

        plugins = await registry.list_installed()

        assert [p.id for p in plugins] == ["bare@acme", "code-tools@acme", "docs-helper@community"]
        code_tools = plugins[1]
        assert code_tools.version == "1.2.0"
        assert code_tools.description == "Linting and formatting"
        assert code_tools.marketplace == "acme"
        assert plugins[0].version is None
        assert plugins[0].description is None

    @pytest.mark.asyncio
    async def test_bad_manifest_still_listed(self, marketplaces: Path, make_plugin):
        """Test a plugin with a broken manifest is listed without metadata."""
        make_plugin("acme", "broken", "{nope")

        plugins = await MarketplacePluginRegistry(marketplaces).list_installed()

        assert [p.id for p in plugins] == ["broken@acme"]
        assert plugins[0].description is None

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path: Path):
        registry = MarketplacePluginRegistry(tmp_path / "missing")
        assert await registry.list_installed() == []

    @pytest.mark.asyncio
    async def test_enabled_by_default(self, marketplaces: Path, installed):
        registry = MarketplacePluginRegistry(marketplaces)
        assert registry.is_enabled("code-tools@acme") is True

    @pytest.mark.asyncio
    async def test_disable_and_enable(self, marketplaces: Path, installed):
        """Test enable state toggles in memory."""
        registry = MarketplacePluginRegistry(marketplaces)

        assert await registry.disable("code-tools@acme") is True
        assert registry.is_enabled("code-tools@acme") is False
        assert registry.is_enabled("bare@acme") is True

        assert await registry.enable("code-tools@acme") is True
        assert registry.is_enabled("code-tools@acme") is True

    @pytest.mark.asyncio
    async def test_unknown_plugin(self, marketplaces: Path, installed):
        """Test toggling an unknown plugin fails."""
        registry = MarketplacePluginRegistry(marketplaces)
        assert await registry.enable("ghost@acme") is False
        assert await registry.disable("ghost@acme") is False

    @pytest.mark.asyncio
    async def test_initially_disabled(self, marketplaces: Path, installed):
        """Test ids from configuration start disabled."""
        registry = MarketplacePluginRegistry(marketplaces, disabled=["bare@acme"])
        assert registry.is_enabled("bare@acme") is False
        assert registry.is_enabled("code-tools@acme") is True


class TestPluginIndex:
    """Tests for PluginIndex."""

    @pytest.mark.asyncio
    async def test_list_is_cached(self, tmp_path: Path):
        """Test the registry is only asked once until a forced reload."""
        registry = InMemoryRegistry(
            [PluginEntry(id="a@m", name="a", marketplace="m", path=tmp_path)]
        )
        index = PluginIndex(registry)

        first = await index.load()
        assert await index.load() is first
        assert registry.list_calls == 1

        await index.load(True)
        assert registry.list_calls == 2

    @pytest.mark.asyncio
    async def test_list_with_status(self, marketplaces: Path, installed):
        """Test each plugin carries its live enabled flag."""
        index = PluginIndex(MarketplacePluginRegistry(marketplaces))

        await index.disable("bare@acme")
        statuses = await index.list_with_status()

        assert {p.id: p.enabled for p in statuses} == {
            "bare@acme": False,
            "code-tools@acme": True,
            "docs-helper@community": True,
        }
        assert statuses[0].to_wire()["enabled"] is False

    @pytest.mark.asyncio
    async def test_status_is_live(self, marketplaces: Path, installed):
        """Test toggling does not need a reload to be visible."""
        index = PluginIndex(MarketplacePluginRegistry(marketplaces))
        await index.load()

        assert await index.disable("docs-helper@community") is True
        assert index.is_enabled("docs-helper@community") is False
        assert await index.enable("docs-helper@community") is True
        assert index.is_enabled("docs-helper@community") is True

    @pytest.mark.asyncio
    async def test_search(self, marketplaces: Path, installed):
        """Test search over name, description and marketplace."""
        index = PluginIndex(MarketplacePluginRegistry(marketplaces))

        assert [p.id for p in await index.search("LINT")] == ["code-tools@acme"]
        assert [p.id for p in await index.search("community")] == ["docs-helper@community"]
        assert len(await index.search("")) == 3

    @pytest.mark.asyncio
    async def test_details_by_id_and_name(self, marketplaces: Path, installed):
        """Test details can be looked up by id or bare name."""
        index = PluginIndex(MarketplacePluginRegistry(marketplaces))

        by_id = await index.get_details("code-tools@acme")
        by_name = await index.get_details("code-tools")

        assert by_id is not None
        assert by_id == by_name
        assert by_id.manifest["version"] == "1.2.0"
        assert by_id.readme_content == "# Code Tools"

    @pytest.mark.asyncio
    async def test_details_without_manifest(self, marketplaces: Path, installed):
        index = PluginIndex(MarketplacePluginRegistry(marketplaces))

        details = await index.get_details("bare@acme")

        assert details is not None
        assert details.manifest is None
        assert details.readme_content is None

    @pytest.mark.asyncio
    async def test_details_miss(self, marketplaces: Path, installed):
        index = PluginIndex(MarketplacePluginRegistry(marketplaces))
        assert await index.get_details("ghost") is None
