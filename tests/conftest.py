"""
Pytest configuration and fixtures for agentshelf tests.
"""

import json
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from agentshelf.catalog import Catalog, create_catalog
from agentshelf.config import Config, PathsConfig


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Keep the real ~/.agentshelf and AGENTSHELF_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("AGENTSHELF_"):
            monkeypatch.delenv(key)

    agentshelf_home = tmp_path / ".agentshelf"
    agentshelf_home.mkdir()
    monkeypatch.setenv("AGENTSHELF_HOME", str(agentshelf_home))
    yield agentshelf_home


@pytest.fixture
def claude_home(tmp_path: Path) -> Path:
    """Provide an empty mock ~/.claude directory."""
    home = tmp_path / "home" / ".claude"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Provide a project root (its .claude/skills is created on demand)."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def make_skill() -> Callable[..., Path]:
    """Create a skill directory.

    descriptor may be a dict (written as JSON), a raw string, or None for
    no skill.json at all.
    """

    def _make(
        root: Path,
        name: str,
        descriptor: dict[str, Any] | str | None = None,
        readme: str | None = None,
        prompt: str | None = None,
    ) -> Path:
        skill_dir = root / name
        skill_dir.mkdir(parents=True)
        if descriptor is not None:
            content = descriptor if isinstance(descriptor, str) else json.dumps(descriptor)
            (skill_dir / "skill.json").write_text(content, encoding="utf-8")
        if readme is not None:
            (skill_dir / "README.md").write_text(readme, encoding="utf-8")
        if prompt is not None:
            (skill_dir / "prompt.md").write_text(prompt, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def make_plugin(claude_home: Path) -> Callable[..., Path]:
    """Create an installed plugin under the marketplaces directory."""

    def _make(
        marketplace: str,
        name: str,
        manifest: dict[str, Any] | str | None = None,
        readme: str | None = None,
    ) -> Path:
        plugin_dir = claude_home / "plugins" / "marketplaces" / marketplace / "plugins" / name
        plugin_dir.mkdir(parents=True)
        if manifest is not None:
            manifest_dir = plugin_dir / ".claude-plugin"
            manifest_dir.mkdir()
            content = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (manifest_dir / "plugin.json").write_text(content, encoding="utf-8")
        if readme is not None:
            (plugin_dir / "README.md").write_text(readme, encoding="utf-8")
        return plugin_dir

    return _make


@pytest.fixture
def user_skills(claude_home: Path) -> Path:
    return claude_home / "skills"


@pytest.fixture
def project_skills(project_dir: Path) -> Path:
    return project_dir / ".claude" / "skills"


@pytest.fixture
def config(claude_home: Path, project_dir: Path) -> Config:
    """Provide a config pointing at the mock directories."""
    return Config(paths=PathsConfig(claude_home=claude_home, project_dir=project_dir))


@pytest.fixture
def catalog(config: Config) -> Catalog:
    """Provide fresh indexes over the mock directories."""
    return create_catalog(config)
