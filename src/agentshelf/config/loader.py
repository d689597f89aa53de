"""
Configuration loader for agentshelf.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config (~/.agentshelf/config.yaml)
3. Explicit config file (--config)
4. Environment variables (AGENTSHELF_*)
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agentshelf.config.merger import get_nested_value, merge_layers, set_nested_value
from agentshelf.config.schema import Config
from agentshelf.storage.paths import get_global_config_path

ENV_PREFIX = "AGENTSHELF_"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary ({} if the file is missing or empty).

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Top level of {path} must be a mapping")
    return content


def apply_env_overrides(
    config: dict[str, Any], environ: dict[str, str] | None = None
) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    AGENTSHELF_<SECTION>_<KEY>=<value> sets config[section][key]; the key
    keeps its underscores, so AGENTSHELF_PATHS_CLAUDE_HOME sets
    paths.claude_home.

    Args:
        config: Configuration dictionary to modify.
        environ: Environment mapping (default: os.environ).

    Returns:
        Configuration with environment overrides applied.
    """
    environ = os.environ if environ is None else environ

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX) or key == "AGENTSHELF_HOME":
            continue

        parts = key[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not parts[1]:
            continue

        key_path = ".".join(parts)
        as_list = isinstance(get_nested_value(config, key_path), list)
        config = set_nested_value(config, key_path, _parse_env_value(value, as_list))

    return config


def _parse_env_value(value: str, as_list: bool = False) -> Any:
    """
    Parse an environment variable value to the appropriate type.

    Args:
        value: String value from environment.
        as_list: The target setting is a list; split on commas.

    Returns:
        Parsed value (list, bool, int, float, or string).
    """
    if as_list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    if re.match(r"^-?\d+$", value):
        return int(value)

    if re.match(r"^-?\d+\.\d+$", value):
        return float(value)

    return value


def load_config(
    config_path: Path | None = None,
    skip_global: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Loading order (later overrides earlier):
    1. Default values from Config model
    2. Global config (~/.agentshelf/config.yaml)
    3. config_path, if given
    4. Environment variables (AGENTSHELF_*)

    Args:
        config_path: Extra YAML file to merge on top of the global config.
        skip_global: Skip the global config file.
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    layers = [Config().model_dump()]

    if not skip_global:
        layers.append(load_yaml_file(get_global_config_path()))

    if config_path is not None:
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        layers.append(load_yaml_file(config_path))

    config_dict = merge_layers(*layers)

    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
