"""
Unit tests for structured logging configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from notetree.logging_config import (
    get_logger,
    log_root_digest_update,
    log_tree_decode,
    log_tree_verification,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """Return to quiet stderr logging after each test."""
    yield
    setup_logging(level="WARNING", json_format=False)


def read_json_lines(log_file: Path):
    return [json.loads(line) for line in log_file.read_text().splitlines() if line.strip()]


class TestLoggingConfiguration:
    """Test structured logging configuration functionality."""
    
    def test_setup_logging_default(self):
        """Test setup_logging with default parameters."""
        setup_logging()
        
        logger = get_logger("test")
        assert hasattr(logger, 'info') and hasattr(logger, 'warning') and hasattr(logger, 'error')
        assert logging.getLogger().level == logging.INFO
    
    def test_setup_logging_with_level(self):
        """Test setup_logging with custom log level."""
        setup_logging(level="DEBUG")
        
        assert logging.getLogger().level == logging.DEBUG
    
    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="CHATTY")
        
        assert logging.getLogger().level == logging.INFO
    
    def test_no_duplicate_handlers(self):
        """Test that repeated setup replaces handlers."""
        setup_logging()
        setup_logging()
        
        assert len(logging.getLogger().handlers) == 1
    
    def test_setup_logging_with_file(self, temp_dir: Path):
        """Test setup_logging with a log file in a directory that does not exist yet."""
        log_file = temp_dir / "logs" / "test.log"
        setup_logging(level="INFO", log_file=log_file)
        
        get_logger("test").info("test_message", key="value")
        
        assert log_file.exists()
        assert "test_message" in log_file.read_text()
    
    def test_setup_logging_json_format(self, temp_dir: Path):
        """Test setup_logging with JSON format."""
        log_file = temp_dir / "test.log"
        setup_logging(level="INFO", log_file=log_file, json_format=True)
        
        get_logger("test").info("test_message", key="value")
        
        log_entry = read_json_lines(log_file)[0]
        assert log_entry["event"] == "test_message"
        assert log_entry["key"] == "value"
        assert log_entry["level"] == "info"
        assert log_entry["logger"] == "notetree.test"
        assert "timestamp" in log_entry
    
    def test_setup_logging_human_format(self, temp_dir: Path):
        """Test setup_logging with human-readable format."""
        log_file = temp_dir / "test.log"
        setup_logging(level="INFO", log_file=log_file, json_format=False)
        
        get_logger("test").info("test_message", key="value")
        
        content = log_file.read_text()
        assert "test_message" in content
        assert "key=value" in content
        with pytest.raises(json.JSONDecodeError):
            json.loads(content.splitlines()[0])
    
    def test_level_filters_messages(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="WARNING", log_file=log_file, json_format=True)
        
        logger = get_logger("test")
        logger.info("hidden")
        logger.warning("shown")
        
        assert [e["event"] for e in read_json_lines(log_file)] == ["shown"]


class TestGetLogger:
    """Test logger naming."""
    
    def test_prefixes_name(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="INFO", log_file=log_file, json_format=True)
        
        get_logger("codec").info("a")
        get_logger("notetree.merkle.tree").info("b")
        
        assert [e["logger"] for e in read_json_lines(log_file)] == ["notetree.codec", "notetree.merkle.tree"]


class TestLoggingHelpers:
    """Test convenience logging functions."""
    
    def test_log_root_digest_update(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="DEBUG", log_file=log_file, json_format=True)
        
        log_root_digest_update(get_logger("test"), "insert", 3, "ab" * 32, 0.5, extra="x")
        
        entry = read_json_lines(log_file)[0]
        assert entry["event"] == "root_digest_update"
        assert entry["level"] == "debug"
        assert entry["operation"] == "insert"
        assert entry["entry_count"] == 3
        assert entry["extra"] == "x"
    
    def test_root_digest_update_hidden_at_info(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="INFO", log_file=log_file, json_format=True)
        
        log_root_digest_update(get_logger("test"), "remove", 0, "00" * 32, 0.1)
        
        assert read_json_lines(log_file) == []
    
    def test_log_tree_decode(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="DEBUG", log_file=log_file, json_format=True)
        
        log_tree_decode(get_logger("test"), byte_length=30, entry_count=3, duration_ms=0.2)
        
        entry = read_json_lines(log_file)[0]
        assert entry["event"] == "tree_decode"
        assert entry["byte_length"] == 30
    
    def test_log_tree_verification_success(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="INFO", log_file=log_file, json_format=True)
        
        log_tree_verification(get_logger("test"), True, "aa", "aa", 1.0)
        
        entry = read_json_lines(log_file)[0]
        assert entry["event"] == "tree_verification"
        assert entry["level"] == "info"
        assert entry["success"] is True
        assert "failure_reason" not in entry
    
    def test_log_tree_verification_failure(self, temp_dir: Path):
        log_file = temp_dir / "test.log"
        setup_logging(level="INFO", log_file=log_file, json_format=True)
        
        log_tree_verification(get_logger("test"), False, "aa", None, 1.0, failure_reason="Root digest mismatch")
        
        entry = read_json_lines(log_file)[0]
        assert entry["event"] == "tree_verification_failed"
        assert entry["level"] == "error"
        assert entry["computed_root"] is None
        assert entry["failure_reason"] == "Root digest mismatch"
