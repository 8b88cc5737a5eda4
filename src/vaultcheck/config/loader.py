"""
Configuration loading utilities.

Supports environment variable interpolation and overriding the defaults
with a partial YAML file.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from vaultcheck.config.settings import EngineConfig


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping, got {type(data).__name__}: {path}"
        raise ValueError(msg)
    return _process_config_values(data)


def load_config(config_path: Path | None = None) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    Keys may live at the top level or under a ``rules`` mapping; any key
    not given keeps its default.

    Args:
        config_path: Path to the configuration file. None returns defaults.

    Returns:
        Fully validated EngineConfig instance.
    """
    if config_path is None:
        return EngineConfig()

    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    data = load_yaml(config_path)
    rules = data.pop("rules", {}) or {}
    if not isinstance(rules, dict):
        msg = "Config key 'rules' must be a mapping"
        raise ValueError(msg)

    merged = _deep_merge(EngineConfig().model_dump(), _deep_merge(data, rules))
    return EngineConfig(**merged)
