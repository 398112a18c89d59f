"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Version lookup for NoteTree.

A source checkout carries VERSION next to the package; an installed
distribution carries the same value in its metadata.
"""

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "notetree"
VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"


def get_version() -> str:
    """Version from the checkout's VERSION file, else from installed metadata."""
    if VERSION_FILE.is_file():
        return VERSION_FILE.read_text().strip()
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0+unknown"


__version__ = get_version()
