"""Configuration loader module."""

import os
import shlex
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from export_builder.config.settings import Settings
from export_builder.exceptions import ConfigurationError

ENV_PREFIX = "EXPORT_BUILDER_"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary (values take precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    return content


def _convert_env_value(original_value: Any, value: str) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if isinstance(original_value, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original_value, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(original_value, float):
        try:
            return float(value)
        except ValueError:
            return value
    if isinstance(original_value, list):
        return shlex.split(value)
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to configuration.

    Environment variables are prefixed with EXPORT_BUILDER_ and use a double
    underscore (__) to separate nested keys.

    Example:
        EXPORT_BUILDER_SCHEDULER__POLL_INTERVAL=0.25
        EXPORT_BUILDER_PROCESSOR__COMMAND="/usr/local/bin/process-png.sh"
    """
    result = config.copy()

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        config_key = key[len(ENV_PREFIX) :].lower()
        if config_key == "config":
            continue

        parts = config_key.split("__")

        current = result
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            elif not isinstance(current[part], dict):
                break
            current = current[part]
        else:
            final_key = parts[-1]
            if final_key in current and current[final_key] is not None:
                current[final_key] = _convert_env_value(current[final_key], value)
            else:
                current[final_key] = value

    return result


def load_config(config_path: str | Path | None = None) -> Settings:
    """Load configuration from file with defaults and environment overrides.

    Loading order (later overrides earlier):
    1. Default configuration
    2. Configuration file (if provided)
    3. Environment variables

    Args:
        config_path: Optional path to configuration file

    Returns:
        Validated Settings object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Settings().model_dump()

    if config_path:
        file_config = _load_yaml_file(Path(config_path))
        config = _deep_merge(config, file_config)

    config = _apply_env_overrides(config)

    try:
        return Settings.model_validate(config)
    except Exception as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    The first call loads from EXPORT_BUILDER_CONFIG or the first existing
    default location.
    """
    config_path = os.environ.get(f"{ENV_PREFIX}CONFIG")

    if not config_path:
        default_locations = [
            Path("export_builder.yaml"),
            Path("config/export_builder.yaml"),
            Path.home() / ".export_builder" / "config.yaml",
        ]
        for location in default_locations:
            if location.exists():
                config_path = str(location)
                break

    return load_config(config_path)


def reset_settings() -> None:
    """Reset cached settings."""
    get_settings.cache_clear()
