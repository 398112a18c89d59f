"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

CLI commands for tree operations.

Provides commands for:
- Building an encoded tree from entries
- Inspecting the entries and root digest of an encoded tree
- Verifying an encoded tree against an expected root digest
"""

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from notetree.core.digest import get_digest_function
from notetree.core.entry import Entry, EntryType
from notetree.exceptions import NoteTreeError
from notetree.logging_config import get_logger
from notetree.merkle.tree import MerkleByteTree
from notetree.merkle.verifier import MerkleVerifier
from notetree.cli.context import CLIContext, pass_context

logger = get_logger(__name__)


def validate_type_tag(ctx, param, value):
    """
    Validate an entry type given as a known type name or a 0-255 integer.

    Accepts names such as "STRING" or "raw_bytes" and integers in decimal
    or 0x-prefixed hex.

    Raises:
        click.BadParameter: If the value is neither
    """
    if value is None:
        return value

    name = value.strip().upper()
    if name in EntryType.__members__:
        return int(EntryType[name])

    try:
        tag = int(value, 0)
    except ValueError:
        raise click.BadParameter(
            f"must be a type name ({', '.join(EntryType.__members__)}) or an integer"
        )

    if not 0 <= tag <= 0xFF:
        raise click.BadParameter(f"type tag must be in range [0, 255], got {tag}")

    return tag


def validate_hex(ctx, param, value):
    """
    Validate and decode a hex string (an optional 0x prefix is allowed).

    Raises:
        click.BadParameter: If value is not valid hex
    """
    if value is None:
        return value

    text = value.strip()
    if text.lower().startswith("0x"):
        text = text[2:]

    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise click.BadParameter(f"invalid hex string: {e}")


def handle_notetree_error(func):
    """
    Decorator to handle NoteTreeError exceptions in CLI commands.

    Catches NoteTreeError exceptions and displays user-friendly error messages.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NoteTreeError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            if logging.getLogger("notetree").isEnabledFor(logging.DEBUG):
                import traceback
                traceback.print_exc()
            sys.exit(1)

    return wrapper


def _read_encoded(hex_data: Optional[bytes], input_file: Optional[Path]) -> bytes:
    if (hex_data is None) == (input_file is None):
        raise click.UsageError("Provide exactly one of --hex or --input")
    if hex_data is not None:
        return hex_data
    return input_file.read_bytes()


def _format_content(entry: Entry) -> str:
    try:
        text = entry.as_str()
    except UnicodeDecodeError:
        return f"0x{entry.data.hex()}"
    if text.isprintable():
        return text
    return f"0x{entry.data.hex()}"


def _type_name(type_tag: int) -> str:
    try:
        return EntryType(type_tag).name
    except ValueError:
        return f"0x{type_tag:02x}"


@click.command("build")
@click.argument("entries", nargs=-1, required=True)
@click.option(
    "--type",
    "-t",
    "type_tag",
    default="STRING",
    callback=validate_type_tag,
    help="Entry type name or tag (default: STRING)",
)
@click.option(
    "--hex-entries",
    is_flag=True,
    help="Treat ENTRIES as hex-encoded content instead of UTF-8 text",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the encoded tree to this file instead of printing hex",
)
@pass_context
@handle_notetree_error
def build(ctx: CLIContext, entries, type_tag, hex_entries, output):
    """
    Build a tree by inserting ENTRIES in the given order.

    Prints the root digest and the encoded tree. Insertion order determines
    the tree's shape and therefore its root digest.

    Examples:

        notetree build B A C

        notetree build --hex-entries --type RAW_BYTES 00ff 0102 -o tree.bin
    """
    config = ctx.tree_config()
    tree = MerkleByteTree(get_digest_function(config.digest.algorithm), config.digest.length)

    for value in entries:
        if hex_entries:
            try:
                content = bytes.fromhex(value)
            except ValueError as e:
                raise click.BadParameter(f"invalid hex entry {value!r}: {e}", param_hint="ENTRIES")
        else:
            content = value.encode("utf-8")
        tree.insert(Entry(type_tag, content))

    encoded = tree.to_bytes()

    click.echo(f"Entries: {tree.size()}")
    click.echo(f"Root digest: {tree.root_digest_hex()}")

    if output is not None:
        output.write_bytes(encoded)
        click.echo(f"Wrote {len(encoded)} bytes to {output}")
    else:
        click.echo(f"Encoded: {encoded.hex()}")


@click.command("inspect")
@click.option(
    "--hex",
    "hex_data",
    default=None,
    callback=validate_hex,
    help="Encoded tree as a hex string",
)
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File holding the encoded tree",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the tree as JSON",
)
@pass_context
@handle_notetree_error
def inspect(ctx: CLIContext, hex_data, input_file, as_json):
    """
    Decode a tree and show its ordered entries and root digest.

    Examples:

        notetree inspect --input tree.bin

        notetree inspect --hex 01410000000142000000 --json
    """
    config = ctx.tree_config()
    data = _read_encoded(hex_data, input_file)
    tree = MerkleByteTree.from_config(config, data)

    if as_json:
        click.echo(json.dumps(tree.to_dict(), indent=2))
        return

    click.echo(f"Entries: {tree.size()}")
    click.echo(f"Height: {tree.height()}")
    click.echo(f"Digest: {tree.digest_algorithm} ({tree.digest_length} bytes)")
    click.echo(f"Root digest: {tree.root_digest_hex()}")

    if tree.is_empty():
        return

    click.echo()
    click.echo(f"{'Index':<6}  {'Type':<20}  {'Length':<8}  Content")
    click.echo("-" * 70)
    for index, entry in tree.as_indexed_pairs():
        click.echo(
            f"{index:<6}  "
            f"{_type_name(entry.type_tag):<20}  "
            f"{len(entry):<8}  "
            f"{_format_content(entry)}"
        )


@click.command("verify")
@click.option(
    "--hex",
    "hex_data",
    default=None,
    callback=validate_hex,
    help="Encoded tree as a hex string",
)
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File holding the encoded tree",
)
@click.option(
    "--root",
    "-r",
    "expected_root",
    required=True,
    callback=validate_hex,
    help="Expected root digest as a hex string",
)
@pass_context
@handle_notetree_error
def verify(ctx: CLIContext, hex_data, input_file, expected_root):
    """
    Verify that an encoded tree has the expected root digest.

    Exits with status 0 when the digests match and 1 otherwise.

    Examples:

        notetree verify --input tree.bin --root 6a09e667...
    """
    config = ctx.tree_config()
    data = _read_encoded(hex_data, input_file)

    verifier = MerkleVerifier(
        digest_fn=get_digest_function(config.digest.algorithm),
        digest_length=config.digest.length,
        validate_order=config.codec.validate_order,
    )
    result = verifier.verify_encoded(data, expected_root)

    if result.verified:
        click.echo(f"✓ Root digest verified ({result.entry_count} entries)")
        return

    click.echo(f"✗ Verification failed: {result.error_message}", err=True)
    click.echo(f"  Expected: {result.expected_root.hex()}", err=True)
    if result.computed_root is not None:
        click.echo(f"  Computed: {result.computed_root.hex()}", err=True)
    sys.exit(1)
