"""Logging configuration for memory-kb.

This module provides consistent logging across the codebase.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

The log level can be configured via the MEMORY_LOG_LEVEL environment variable:
    - DEBUG: Store mutations and link graph repairs
    - INFO: Load/save and editor sessions
    - WARNING: Unexpected but handled situations (default)
    - ERROR: Errors that prevented an operation
"""

import logging
import os
import sys

LOGGER_NAME = "memory_kb"


def configure_logging() -> None:
    """Configure logging for the memory_kb package.

    Call this once at application startup (cli.py does it for every command).
    Subsequent calls are no-ops.
    """
    root_logger = logging.getLogger(LOGGER_NAME)

    # Skip if already configured (has handlers)
    if root_logger.handlers:
        return

    level_name = os.environ.get("MEMORY_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Prevent propagation to root logger (avoids duplicate messages)
    root_logger.propagate = False


def set_quiet_mode(quiet: bool) -> None:
    """Only let errors through when quiet, restore the configured level otherwise."""
    root_logger = logging.getLogger(LOGGER_NAME)
    if quiet:
        level = logging.ERROR
    else:
        level_name = os.environ.get("MEMORY_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
