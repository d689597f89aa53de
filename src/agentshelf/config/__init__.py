"""Configuration system for agentshelf."""

from agentshelf.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    load_config,
    load_yaml_file,
)
from agentshelf.config.merger import deep_merge, get_nested_value, merge_layers, set_nested_value
from agentshelf.config.schema import (
    BridgeConfig,
    Config,
    LoggingConfig,
    PathsConfig,
    PluginsConfig,
)

__all__ = [
    "BridgeConfig",
    "Config",
    "ConfigurationError",
    "LoggingConfig",
    "PathsConfig",
    "PluginsConfig",
    "apply_env_overrides",
    "deep_merge",
    "get_nested_value",
    "load_config",
    "load_yaml_file",
    "merge_layers",
    "set_nested_value",
]
