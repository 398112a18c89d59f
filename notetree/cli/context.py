"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Shared state handed from the `notetree` group to its commands.
"""

from typing import Optional

import click

from notetree.config.settings import NoteTreeConfig, get_default_config


class CLIContext:
    """Configuration loaded by the command group."""

    def __init__(self):
        self.config: Optional[NoteTreeConfig] = None

    def tree_config(self) -> NoteTreeConfig:
        """Loaded configuration, or defaults when a command runs without the group."""
        return self.config if self.config is not None else get_default_config()


pass_context = click.make_pass_decorator(CLIContext, ensure=True)
