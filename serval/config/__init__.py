"""
Configuration management for Serval.

Handles loading and validation of configuration files.
"""

from serval.config.settings import (
    AdapterConfig,
    LoggingConfig,
    ServalConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "AdapterConfig",
    "LoggingConfig",
    "ServalConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
