"""
Descriptor parsing for agentshelf.

Reads skill.json descriptors and plugin manifests, and extracts short
descriptions from command/agent markdown.
"""

import json
import re
from pathlib import Path
from typing import Any

FRONTMATTER_MARKER = "---"

_DESCRIPTION_LINE = re.compile(r"^description:[ \t]*(.*)$")
_HEADING_LINE = re.compile(r"^#[ \t]+(\S.*)$", re.MULTILINE)


class ResourceParseError(Exception):
    """Error reading or parsing a resource file."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (at {path})" if path else ""))


class InvalidDescriptorError(ResourceParseError):
    """The file parsed, but is not a usable descriptor."""

    pass


def split_frontmatter(content: str) -> tuple[list[str] | None, str]:
    """Split a leading --- delimited block from markdown content.

    The block must open on the first line and close on a later line that
    is exactly the marker (surrounding whitespace ignored).

    Args:
        content: The full markdown content.

    Returns:
        Tuple of (block lines or None, remaining content).
    """
    lines = content.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_MARKER:
        return None, content

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_MARKER:
            return lines[1:i], "\n".join(lines[i + 1 :])

    return None, content


def extract_description(content: str) -> str | None:
    """Extract a short description from command or agent markdown.

    Frontmatter ``description:`` wins, then the first level-1 heading.

    Args:
        content: Markdown file content.

    Returns:
        The description, or None if neither pattern is present.
    """
    block, _ = split_frontmatter(content)
    if block is not None:
        for line in block:
            match = _DESCRIPTION_LINE.match(line.strip())
            if match and match.group(1).strip():
                return match.group(1).strip()

    heading = _HEADING_LINE.search(content)
    if heading:
        return heading.group(1).strip()

    return None


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        ResourceParseError: If the file cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceParseError(f"Failed to read {path.name}: {e}", path) from e


def parse_json_object(content: str, path: Path | None = None) -> dict[str, Any]:
    """Parse a JSON document that must be an object.

    Raises:
        ResourceParseError: If the content is not valid JSON.
        InvalidDescriptorError: If the top level is not an object.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ResourceParseError(f"Invalid JSON: {e}", path) from e

    if not isinstance(data, dict):
        raise InvalidDescriptorError("Descriptor must be a JSON object", path)
    return data


def read_json_object(path: Path) -> dict[str, Any]:
    """Read and parse a JSON object file (skill.json, plugin.json)."""
    return parse_json_object(read_text_file(path), path)


def descriptor_description(data: dict[str, Any]) -> str | None:
    """Get the description field of a descriptor; empty values count as absent."""
    value = data.get("description")
    if not value:
        return None
    return value if isinstance(value, str) else str(value)
