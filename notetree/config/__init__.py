"""
Configuration management for NoteTree.

Handles loading and validation of configuration files.
"""

from notetree.config.settings import (
    CodecConfig,
    DigestConfig,
    LoggingConfig,
    NoteTreeConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "CodecConfig",
    "DigestConfig",
    "LoggingConfig",
    "NoteTreeConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
