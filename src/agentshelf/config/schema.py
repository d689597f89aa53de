"""
Pydantic configuration schema for agentshelf.

This module defines all configuration models with validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Paths Configuration
# =============================================================================


class PathsConfig(BaseModel):
    """Where resources are discovered."""

    claude_home: Path | None = Field(
        default=None,
        description="Claude home directory (default: ~/.claude)",
    )
    project_dir: Path | None = Field(
        default=None,
        description="Project root whose .claude/skills is indexed (default: cwd)",
    )


# =============================================================================
# Plugins Configuration
# =============================================================================


class PluginsConfig(BaseModel):
    """Initial plugin enable state."""

    model_config = ConfigDict(extra="allow")

    disabled: list[str] = Field(
        default_factory=list,
        description="Plugin ids (plugin@marketplace) disabled at startup",
    )


# =============================================================================
# Bridge Configuration
# =============================================================================


class BridgeConfig(BaseModel):
    """Request bridge configuration."""

    max_concurrent_requests: int = Field(default=100, ge=1, le=1000)


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    show_path: bool = False


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for agentshelf.

    Loaded from YAML files and environment variables, merged in order of
    priority by the config loader.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
