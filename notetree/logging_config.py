"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
NoteTree, a product of Garudex Labs

Logging configuration for NoteTree.

Provides centralized structured logging setup with JSON output for machine
consumption and human-readable output for interactive use.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for NoteTree.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(stderr_handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if name.startswith("notetree"):
        return structlog.get_logger(name)
    return structlog.get_logger(f"notetree.{name}")


# Convenience functions for common logging patterns

def log_root_digest_update(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    entry_count: int,
    root_digest: str,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log a root digest recomputation after a tree mutation.

    Args:
        logger: Logger instance
        operation: Mutation that triggered the update ("insert", "remove", "decode", "clear")
        entry_count: Number of entries in the tree after the mutation
        root_digest: New root digest (hex encoded)
        duration_ms: Recomputation duration in milliseconds
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "root_digest_update",
        "operation": operation,
        "entry_count": entry_count,
        "root_digest": root_digest,
        "duration_ms": duration_ms,
    }

    log_data.update(kwargs)

    logger.debug("root_digest_update", **log_data)


def log_tree_decode(
    logger: structlog.stdlib.BoundLogger,
    byte_length: int,
    entry_count: int,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log decoding of an encoded tree.

    Args:
        logger: Logger instance
        byte_length: Size of the encoded input in bytes
        entry_count: Number of entries reconstructed
        duration_ms: Decode duration in milliseconds
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "tree_decode",
        "byte_length": byte_length,
        "entry_count": entry_count,
        "duration_ms": duration_ms,
    }

    log_data.update(kwargs)

    logger.debug("tree_decode", **log_data)


def log_tree_verification(
    logger: structlog.stdlib.BoundLogger,
    success: bool,
    expected_root: str,
    computed_root: Optional[str],
    duration_ms: float,
    failure_reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log a root digest verification of an encoded tree.

    Args:
        logger: Logger instance
        success: Whether verification succeeded
        expected_root: Root digest the caller expected (hex encoded)
        computed_root: Root digest recomputed from the input, if decoding succeeded
        duration_ms: Verification duration in milliseconds
        failure_reason: Reason for failure if not successful
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "tree_verification",
        "success": success,
        "expected_root": expected_root,
        "computed_root": computed_root,
        "duration_ms": duration_ms,
    }

    if failure_reason is not None:
        log_data["failure_reason"] = failure_reason

    log_data.update(kwargs)

    if success:
        logger.info("tree_verification", **log_data)
    else:
        logger.error("tree_verification_failed", **log_data)
