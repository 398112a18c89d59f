"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Unit tests for configuration management.

Tests configuration loading, environment variable expansion and validation.
"""

from pathlib import Path

import pytest

from notetree.config.settings import (
    CodecConfig,
    DigestConfig,
    LoggingConfig,
    NoteTreeConfig,
    _expand_env_vars,
    _validate_config,
    get_default_config,
    get_default_config_path,
    load_config,
)
from notetree.exceptions import InvalidConfigurationError


class TestConfigurationDataclasses:
    """Test configuration dataclass structures."""
    
    def test_digest_config_defaults(self):
        config = DigestConfig()
        assert config.algorithm == "blake2b"
        assert config.length == 32
    
    def test_codec_config_defaults(self):
        assert CodecConfig().validate_order is True
    
    def test_logging_config_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file == ""
        assert config.format == "console"
    
    def test_default_config(self):
        config = get_default_config()
        assert isinstance(config, NoteTreeConfig)
        assert config.digest == DigestConfig()
    
    def test_default_config_path(self):
        assert get_default_config_path().endswith(str(Path(".notetree") / "config.yaml"))


class TestLoadConfig:
    """Test loading configuration files."""
    
    def test_load_sample_config(self, sample_config_path: Path, temp_dir: Path):
        config = load_config(str(sample_config_path))
        
        assert config.digest.algorithm == "blake2b"
        assert config.digest.length == 32
        assert config.codec.validate_order is True
        assert config.logging.level == "WARNING"
        assert config.logging.file == f"{temp_dir}/notetree.log"
    
    def test_missing_file_returns_defaults(self, temp_dir: Path):
        config = load_config(str(temp_dir / "missing.yaml"))
        
        assert config == get_default_config()
    
    def test_empty_file_returns_defaults(self, temp_dir: Path):
        path = temp_dir / "empty.yaml"
        path.write_text("")
        
        assert load_config(str(path)) == get_default_config()
    
    def test_partial_file_merges_defaults(self, temp_dir: Path):
        path = temp_dir / "partial.yaml"
        path.write_text("digest:\n  algorithm: SHAKE_256\n  length: 48\n")
        
        config = load_config(str(path))
        
        assert config.digest.algorithm == "shake_256"
        assert config.digest.length == 48
        assert config.codec.validate_order is True
        assert config.logging.level == "INFO"
    
    def test_accepts_path_object(self, sample_config_path: Path):
        assert load_config(sample_config_path).logging.format == "console"
    
    def test_malformed_yaml(self, temp_dir: Path):
        path = temp_dir / "bad.yaml"
        path.write_text("digest: [unclosed\n")
        
        with pytest.raises(InvalidConfigurationError, match="Failed to parse YAML"):
            load_config(str(path))
    
    def test_top_level_must_be_mapping(self, temp_dir: Path):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        
        with pytest.raises(InvalidConfigurationError, match="mapping"):
            load_config(str(path))
    
    def test_section_must_be_mapping(self, temp_dir: Path):
        path = temp_dir / "section.yaml"
        path.write_text("digest: blake2b\n")
        
        with pytest.raises(InvalidConfigurationError, match="'digest' section"):
            load_config(str(path))
    
    @pytest.mark.parametrize("yaml_text,message", [
        ("digest:\n  algorithm: md5\n", "digest algorithm"),
        ("digest:\n  algorithm: sha256\n  length: 16\n", "digest length"),
        ("digest:\n  length: 65\n", "digest length"),
        ("digest:\n  length: many\n", "digest.length"),
        ("codec:\n  validate_order: sometimes\n", "validate_order"),
        ("logging:\n  level: LOUD\n", "logging level"),
        ("logging:\n  format: xml\n", "logging format"),
    ])
    def test_invalid_values(self, temp_dir: Path, yaml_text, message):
        path = temp_dir / "invalid.yaml"
        path.write_text(yaml_text)
        
        with pytest.raises(InvalidConfigurationError, match=message):
            load_config(str(path))
    
    def test_string_booleans(self, temp_dir: Path):
        path = temp_dir / "bool.yaml"
        path.write_text("codec:\n  validate_order: 'off'\n")
        
        assert load_config(str(path)).codec.validate_order is False


class TestEnvironmentExpansion:
    """Test ${VAR} and ${VAR:default} substitution."""
    
    def test_expand_set_variable(self, monkeypatch):
        monkeypatch.setenv("NOTETREE_TEST_ALGO", "sha256")
        
        assert _expand_env_vars("${NOTETREE_TEST_ALGO}") == "sha256"
    
    def test_expand_default(self, monkeypatch):
        monkeypatch.delenv("NOTETREE_TEST_ALGO", raising=False)
        
        assert _expand_env_vars("${NOTETREE_TEST_ALGO:blake2b}") == "blake2b"
        assert _expand_env_vars("${NOTETREE_TEST_ALGO}") == ""
    
    def test_expand_nested(self, monkeypatch):
        monkeypatch.setenv("NOTETREE_TEST_LEVEL", "DEBUG")
        
        value = {"logging": {"level": "${NOTETREE_TEST_LEVEL}"}, "list": ["${NOTETREE_TEST_LEVEL}", 3]}
        
        assert _expand_env_vars(value) == {"logging": {"level": "DEBUG"}, "list": ["DEBUG", 3]}
    
    def test_load_config_expands_variables(self, temp_dir: Path, monkeypatch):
        monkeypatch.setenv("NOTETREE_TEST_LENGTH", "16")
        path = temp_dir / "env.yaml"
        path.write_text(
            "digest:\n"
            "  algorithm: ${NOTETREE_TEST_ALGO:blake2b}\n"
            "  length: ${NOTETREE_TEST_LENGTH}\n"
        )
        
        config = load_config(str(path))
        
        assert config.digest.algorithm == "blake2b"
        assert config.digest.length == 16


class TestValidateConfig:
    """Test direct validation of configuration objects."""
    
    def test_default_config_is_valid(self):
        _validate_config(get_default_config())
    
    def test_lowercase_level_accepted(self):
        config = NoteTreeConfig(logging=LoggingConfig(level="debug"))
        _validate_config(config)
    
    def test_unknown_algorithm(self):
        config = NoteTreeConfig(digest=DigestConfig(algorithm="whirlpool"))
        
        with pytest.raises(InvalidConfigurationError):
            _validate_config(config)
