"""
Unit tests for CLI commands.
"""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from agentshelf import __version__
from agentshelf.cli.app import app
from agentshelf.cli.output import print_error


@pytest.fixture
def shelf(
    isolated_env: Path,
    claude_home: Path,
    project_dir: Path,
    user_skills: Path,
    project_skills: Path,
    make_skill,
    make_plugin,
) -> Path:
    """A populated .claude tree wired in through the global config file."""
    make_skill(user_skills, "foo", {"description": "does foo"}, prompt="Do foo.")
    make_skill(project_skills, "bar", {}, readme="# Bar readme")
    plugin_dir = make_plugin(
        "acme", "code-tools", {"version": "2.0.0", "description": "Tools"}, readme="# Tools"
    )
    make_skill(plugin_dir / "skills", "lint", {"description": "Lints"})

    commands = claude_home / "commands"
    commands.mkdir()
    (commands / "deploy.md").write_text("---\ndescription: Ship it\n---\nBody", encoding="utf-8")

    agents = claude_home / "agents"
    agents.mkdir()
    (agents / "reviewer.md").write_text("# Code Reviewer", encoding="utf-8")

    config_path = isolated_env / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "paths": {"claude_home": str(claude_home), "project_dir": str(project_dir)},
                "plugins": {"disabled": ["code-tools@acme"]},
            }
        ),
        encoding="utf-8",
    )
    return claude_home


def test_version(cli_runner: CliRunner) -> None:
    """Test --version flag."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help(cli_runner: CliRunner) -> None:
    """Test --help flag."""
    result = cli_runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for group in ["skills", "commands", "agents", "plugins", "bridge"]:
        assert group in result.stdout


def test_bad_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    """Test a missing --config file exits with an error."""
    result = cli_runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "skills", "list"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_errors_go_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """Test errors stay off stdout, which carries bridge responses."""
    print_error("boom")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "boom" in captured.err


class TestSkillsCommands:
    """Tests for agentshelf skills."""

    def test_list(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "list"])
        assert result.exit_code == 0
        for name in ["foo", "bar", "lint"]:
            assert name in result.stdout
        assert "Total: 3 skill(s)" in result.stdout

    def test_list_json_in_precedence_order(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "list", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert [(s["name"], s["location"]) for s in data] == [
            ("foo", "user"),
            ("bar", "project"),
            ("lint", "managed"),
        ]
        assert data[2]["sourcePlugin"] == "code-tools"

    def test_list_location(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "list", "--location", "project", "--json"])
        assert result.exit_code == 0
        assert [s["name"] for s in json.loads(result.stdout)] == ["bar"]

    def test_list_empty(self, cli_runner: CliRunner, claude_home: Path, isolated_env: Path) -> None:
        (isolated_env / "config.yaml").write_text(
            yaml.safe_dump({"paths": {"claude_home": str(claude_home)}}), encoding="utf-8"
        )
        result = cli_runner.invoke(app, ["skills", "list", "--location", "user"])
        assert result.exit_code == 0
        assert "No skills found" in result.stdout

    def test_search(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "search", "FOO", "--json"])
        assert result.exit_code == 0
        assert [s["name"] for s in json.loads(result.stdout)] == ["foo"]

    def test_search_no_results(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "search", "zzz"])
        assert result.exit_code == 0
        assert "No skills found matching 'zzz'" in result.stdout

    def test_show(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "show", "foo"])
        assert result.exit_code == 0
        assert "does foo" in result.stdout
        assert "Do foo." in result.stdout

    def test_show_with_location(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "show", "bar", "--location", "project"])
        assert result.exit_code == 0
        assert "Bar readme" in result.stdout

    def test_show_missing(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "show", "foo", "--location", "managed"])
        assert result.exit_code == 1
        assert "Skill not found: foo" in result.output


class TestMarkdownCommands:
    """Tests for agentshelf commands / agentshelf agents."""

    def test_commands_list(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["commands", "list", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["description"] == "Ship it"

    def test_commands_show(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["commands", "show", "deploy"])
        assert result.exit_code == 0
        assert "Ship it" in result.stdout

    def test_agents_search(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["agents", "search", "review"])
        assert result.exit_code == 0
        assert "reviewer" in result.stdout

    def test_agents_show_missing(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["agents", "show", "nobody"])
        assert result.exit_code == 1
        assert "Agent not found: nobody" in result.output


class TestPluginCommands:
    """Tests for agentshelf plugins."""

    def test_list_shows_enable_state(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["plugins", "list", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert [(p["id"], p["enabled"]) for p in data] == [("code-tools@acme", False)]

    def test_list_search(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["plugins", "list", "--search", "nothing"])
        assert result.exit_code == 0
        assert "No plugins installed" in result.stdout

    def test_show(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["plugins", "show", "code-tools"])
        assert result.exit_code == 0
        assert "code-tools@acme" in result.stdout
        assert "2.0.0" in result.stdout

    def test_status(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["plugins", "status", "code-tools@acme"])
        assert result.exit_code == 0
        assert "disabled" in result.stdout

    def test_status_unknown(self, cli_runner: CliRunner, shelf: Path) -> None:
        result = cli_runner.invoke(app, ["plugins", "status", "ghost@acme"])
        assert result.exit_code == 1
        assert "Plugin not found: ghost@acme" in result.output


class TestBridgeCommand:
    """Tests for agentshelf bridge."""

    def test_serves_stdin(self, cli_runner: CliRunner, shelf: Path) -> None:
        """Test requests on stdin are answered on stdout, one line each."""
        requests = "\n".join(
            [
                json.dumps({"type": "get-skills", "requestId": "a"}),
                json.dumps({"type": "get-plugin-status", "requestId": "c", "pluginId": "code-tools@acme"}),
            ]
        )

        result = cli_runner.invoke(app, ["bridge"], input=requests + "\n")

        assert result.exit_code == 0
        responses = {r["requestId"]: r for r in map(json.loads, result.stdout.splitlines())}
        assert set(responses) == {"a", "c"}
        assert [s["name"] for s in responses["a"]["data"]] == ["foo", "bar", "lint"]
        assert responses["c"]["data"] == {"pluginId": "code-tools@acme", "enabled": False}

    def test_config_error_exits(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "bridge"], input="")
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestBracketsInContent:
    """Tests that names and descriptions read from disk print literally."""

    @pytest.fixture
    def bracketed(self, isolated_env: Path, claude_home: Path, user_skills: Path, make_skill) -> Path:
        make_skill(user_skills, "paths", {"description": "Rewrite [/tmp] paths"})
        make_skill(user_skills, "todo", {"description": "Toggle [x] and [/x] marks"})

        commands = claude_home / "commands"
        commands.mkdir()
        (commands / "deploy.md").write_text("# Deploy to [staging] now\n", encoding="utf-8")

        (isolated_env / "config.yaml").write_text(
            yaml.safe_dump({"paths": {"claude_home": str(claude_home)}}), encoding="utf-8"
        )
        return claude_home

    def test_skills_list(self, cli_runner: CliRunner, bracketed: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "list", "--location", "user"])
        assert result.exit_code == 0
        assert "Rewrite [/tmp] paths" in result.stdout
        assert "Toggle [x] and [/x] marks" in result.stdout

    def test_skills_show(self, cli_runner: CliRunner, bracketed: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "show", "todo"])
        assert result.exit_code == 0
        assert "Toggle [x] and [/x] marks" in result.stdout

    def test_commands_show(self, cli_runner: CliRunner, bracketed: Path) -> None:
        result = cli_runner.invoke(app, ["commands", "show", "deploy"])
        assert result.exit_code == 0
        assert "Deploy to [staging] now" in result.stdout

    def test_search_query(self, cli_runner: CliRunner, bracketed: Path) -> None:
        result = cli_runner.invoke(app, ["skills", "search", "[/nothing]"])
        assert result.exit_code == 0
        assert "No skills found matching '[/nothing]'" in result.stdout
