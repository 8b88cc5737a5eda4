"""
Configuration management with typed Pydantic models.

Provides the immutable rule thresholds and YAML-based overrides.
"""

from vaultcheck.config.loader import load_config
from vaultcheck.config.settings import DEFAULT_CONFIG, EngineConfig

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "load_config",
]
