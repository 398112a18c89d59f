"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Configuration management for NoteTree.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from notetree.core.digest import (
    DEFAULT_DIGEST_ALGORITHM,
    DEFAULT_DIGEST_LENGTH,
    available_algorithms,
    validate_digest_length,
)
from notetree.exceptions import DigestError, InvalidConfigurationError
from notetree.logging_config import get_logger

logger = get_logger(__name__)


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${NOTETREE_DIGEST}" -> value of NOTETREE_DIGEST env var
        "${NOTETREE_DIGEST:blake2b}" -> value of NOTETREE_DIGEST or "blake2b" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class DigestConfig:
    """Digest primitive used for Merkle root computation."""

    algorithm: str = DEFAULT_DIGEST_ALGORITHM  # "blake2b", "shake_256" or "sha256"
    length: int = DEFAULT_DIGEST_LENGTH  # Output length in bytes


@dataclass
class CodecConfig:
    """Tree codec configuration."""

    validate_order: bool = True  # Reject decoded trees that are not valid BSTs


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "console"  # "json" or "console"


@dataclass
class NoteTreeConfig:
    """Main NoteTree configuration."""

    digest: DigestConfig = field(default_factory=DigestConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.notetree/config.yaml")


def get_default_config() -> NoteTreeConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        NoteTreeConfig: Default configuration object
    """
    return NoteTreeConfig()


def load_config(config_path: Optional[str] = None) -> NoteTreeConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        NoteTreeConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)
    logger.debug("Expanded environment variables in configuration")

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "1", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "0", "off"):
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _build_config_from_dict(config_data: Dict[str, Any]) -> NoteTreeConfig:
    """
    Build NoteTreeConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        NoteTreeConfig: Configuration object

    Raises:
        InvalidConfigurationError: If a field has the wrong type
    """
    default_config = get_default_config()

    digest_data = _section(config_data, 'digest')
    digest = DigestConfig(
        algorithm=str(digest_data.get('algorithm', default_config.digest.algorithm)).lower(),
        length=_parse_int(digest_data.get('length', default_config.digest.length), "digest.length"),
    )

    codec_data = _section(config_data, 'codec')
    codec = CodecConfig(
        validate_order=_parse_bool(
            codec_data.get('validate_order', default_config.codec.validate_order),
            "codec.validate_order",
        ),
    )

    logging_data = _section(config_data, 'logging')
    logging = LoggingConfig(
        level=str(logging_data.get('level', default_config.logging.level)),
        file=os.path.expanduser(str(logging_data.get('file', default_config.logging.file))),
        format=str(logging_data.get('format', default_config.logging.format)),
    )

    return NoteTreeConfig(
        digest=digest,
        codec=codec,
        logging=logging,
    )


def _validate_config(config: NoteTreeConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if config.digest.algorithm not in available_algorithms():
        raise InvalidConfigurationError(
            f"digest algorithm must be one of {available_algorithms()}, "
            f"got '{config.digest.algorithm}'"
        )

    try:
        validate_digest_length(config.digest.algorithm, config.digest.length)
    except DigestError as e:
        raise InvalidConfigurationError(f"Invalid digest length: {e}") from e

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )

    valid_formats = ["json", "console"]
    if config.logging.format not in valid_formats:
        raise InvalidConfigurationError(
            f"logging format must be one of {valid_formats}, "
            f"got '{config.logging.format}'"
        )
