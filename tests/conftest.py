"""
Pytest configuration and shared fixtures for NoteTree tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from notetree.core.entry import Entry
from notetree.logging_config import setup_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging() -> None:
    """Send structured logs to stderr at WARNING so debug events stay out of test output."""
    setup_logging(level="WARNING", json_format=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.
    
    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def abc_entries() -> List[Entry]:
    """Entries "B", "A", "C" in the insertion order that yields a balanced tree."""
    return [Entry.from_str("B"), Entry.from_str("A"), Entry.from_str("C")]


@pytest.fixture
def sample_config_path(temp_dir: Path) -> Path:
    """
    Create a sample configuration file for testing.
    
    Args:
        temp_dir: Temporary directory fixture.
        
    Returns:
        Path to sample config file.
    """
    config_path = temp_dir / "config.yaml"
    config_path.write_text(
        f"""
digest:
  algorithm: blake2b
  length: 32

codec:
  validate_order: true

logging:
  level: WARNING
  file: {temp_dir}/notetree.log
  format: console
"""
    )
    return config_path


# Hypothesis settings for property-based tests
from hypothesis import settings, Verbosity

# Register custom profile for NoteTree tests
settings.register_profile("notetree", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("notetree-ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("notetree-dev", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "notetree"))
