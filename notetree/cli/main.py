"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

CLI entry point for NoteTree.

Provides command-line interface for building, inspecting and verifying
encoded trees.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from notetree._version import __version__
from notetree.config.settings import get_default_config_path, load_config
from notetree.exceptions import InvalidConfigurationError
from notetree.logging_config import setup_logging
from notetree.cli.context import CLIContext, pass_context


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (default: from configuration)',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='notetree')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    NoteTree - Content-addressable ordered set of binary records.

    Builds, inspects and verifies Merkle-hashed binary search trees in
    their flat binary encoding.
    """
    config_path = str(config) if config else None

    # Route log output to stderr before configuration is read
    setup_logging(level=(log_level or "WARNING").upper(), json_format=False)

    # Load configuration
    try:
        ctx.config = load_config(config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    # Set up logging
    try:
        effective_log_level = log_level.upper() if log_level else ctx.config.logging.level.upper()
        log_file = Path(ctx.config.logging.file) if ctx.config.logging.file else None
        setup_logging(
            level=effective_log_level,
            log_file=log_file,
            json_format=ctx.config.logging.format == "json",
        )

        if verbose:
            logger = logging.getLogger("notetree")
            logger.info(f"Loaded configuration from: {config_path or 'defaults'}")
            logger.info(f"Log level: {effective_log_level}")
    except OSError as e:
        click.echo(f"Error: Failed to set up logging: {e}", err=True)
        sys.exit(1)


# Import and register tree commands
from notetree.cli.tree import build, inspect, verify
cli.add_command(build)
cli.add_command(inspect)
cli.add_command(verify)


if __name__ == '__main__':
    cli()
