"""
Directory scanning for agentshelf.

Walks resource roots one level deep and turns each candidate into an entry.
A missing root yields an empty result. A bad entry is logged, recorded as a
diagnostic and skipped, so no exception leaves a scan call.
"""

import logging
from pathlib import Path
from typing import TypeVar

from agentshelf.resources.models import (
    DiagnosticKind,
    MarkdownEntry,
    ScanDiagnostic,
    ScanResult,
    SkillEntry,
    SkillLocation,
)
from agentshelf.resources.parser import (
    InvalidDescriptorError,
    ResourceParseError,
    descriptor_description,
    extract_description,
    read_json_object,
    read_text_file,
)

logger = logging.getLogger(__name__)

SKILL_DESCRIPTOR = "skill.json"
README_FILE = "README.md"
PROMPT_FILE = "prompt.md"
MARKDOWN_SUFFIX = ".md"

MarkdownT = TypeVar("MarkdownT", bound=MarkdownEntry)


def _list_children(root: Path, result: ScanResult) -> list[Path]:
    """List a directory's children sorted by name.

    Returns [] when root is missing; an unreadable root is recorded on
    the result instead of raised.
    """
    if not root.is_dir():
        return []
    try:
        return sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.error(f"Error reading directory {root}: {e}")
        result.diagnostics.append(ScanDiagnostic(root, DiagnosticKind.DIRECTORY_ERROR, str(e)))
        return []


def _diagnostic_kind(error: ResourceParseError) -> DiagnosticKind:
    if isinstance(error, InvalidDescriptorError):
        return DiagnosticKind.INVALID_DESCRIPTOR
    if isinstance(error.__cause__, (OSError, UnicodeDecodeError)):
        return DiagnosticKind.READ_ERROR
    return DiagnosticKind.PARSE_ERROR


def scan_skill_directory(
    root: Path,
    location: SkillLocation,
    owner_plugin: str | None = None,
) -> ScanResult[SkillEntry]:
    """Scan a skills root: one skill per subdirectory holding skill.json.

    Subdirectories without skill.json are skipped without a diagnostic.

    Args:
        root: Directory containing skill directories.
        location: Location tag for every entry found.
        owner_plugin: Plugin name for managed skills.

    Returns:
        Skills in name order, plus diagnostics for malformed descriptors.
    """
    result: ScanResult[SkillEntry] = ScanResult()
    root = Path(root).absolute()

    for skill_dir in _list_children(root, result):
        if not skill_dir.is_dir():
            continue

        descriptor_path = skill_dir / SKILL_DESCRIPTOR
        if not descriptor_path.is_file():
            continue

        try:
            descriptor = read_json_object(descriptor_path)
        except ResourceParseError as e:
            logger.warning(f"Skipping skill {skill_dir.name}: {e}")
            result.diagnostics.append(ScanDiagnostic(descriptor_path, _diagnostic_kind(e), str(e)))
            continue

        result.entries.append(
            SkillEntry(
                name=skill_dir.name,
                location=location,
                path=skill_dir,
                description=descriptor_description(descriptor),
                source_plugin=owner_plugin,
                has_readme=(skill_dir / README_FILE).exists(),
                has_prompt=(skill_dir / PROMPT_FILE).exists(),
            )
        )

    return result


def list_plugin_dirs(marketplaces_root: Path) -> ScanResult:
    """Find installed plugin directories.

    Layout: <root>/<marketplace>/plugins/<plugin>/. Hidden directories are
    ignored.

    Returns:
        A result whose entries are (marketplace, plugin name, plugin path)
        tuples in marketplace then plugin name order.
    """
    result: ScanResult = ScanResult()
    marketplaces_root = Path(marketplaces_root).absolute()

    for marketplace_dir in _list_children(marketplaces_root, result):
        if not marketplace_dir.is_dir() or marketplace_dir.name.startswith("."):
            continue

        for plugin_dir in _list_children(marketplace_dir / "plugins", result):
            if plugin_dir.is_dir() and not plugin_dir.name.startswith("."):
                result.entries.append((marketplace_dir.name, plugin_dir.name, plugin_dir))

    return result


def scan_managed_skills(marketplaces_root: Path) -> ScanResult[SkillEntry]:
    """Scan the skills contributed by every installed plugin.

    Returns:
        Managed skills, each tagged with its plugin directory name.
    """
    plugins = list_plugin_dirs(marketplaces_root)
    result: ScanResult[SkillEntry] = ScanResult(diagnostics=list(plugins.diagnostics))

    for _, plugin_name, plugin_dir in plugins.entries:
        skills_dir = plugin_dir / "skills"
        if skills_dir.is_dir():
            result.extend(scan_skill_directory(skills_dir, SkillLocation.MANAGED, plugin_name))

    return result


def scan_markdown_directory(root: Path, entry_type: type[MarkdownT]) -> ScanResult[MarkdownT]:
    """Scan a commands or agents root: one entry per <name>.md file.

    Only files directly inside root are considered. A README for <name>
    lives at <root>/<name>/README.md.

    Args:
        root: Directory to scan.
        entry_type: CommandEntry or AgentEntry.

    Returns:
        Entries in file name order, plus diagnostics for unreadable files.
    """
    result: ScanResult[MarkdownT] = ScanResult()
    root = Path(root).absolute()

    for file_path in _list_children(root, result):
        if file_path.suffix != MARKDOWN_SUFFIX or not file_path.is_file():
            continue

        name = file_path.stem
        try:
            content = read_text_file(file_path)
        except ResourceParseError as e:
            logger.warning(f"Skipping {entry_type.__name__} {name}: {e}")
            result.diagnostics.append(ScanDiagnostic(file_path, _diagnostic_kind(e), str(e)))
            continue

        result.entries.append(
            entry_type(
                name=name,
                path=file_path,
                description=extract_description(content),
                has_readme=(root / name / README_FILE).exists(),
            )
        )

    return result
