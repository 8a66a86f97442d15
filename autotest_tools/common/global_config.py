"""
================================================================================
Global Logging Configuration for Automation Tools
================================================================================

Centralized Loguru setup shared by the test runner and the pytest harness.

Features:
    - One-time logger initialization
    - Level from argument, then LOG_LEVEL, then INFO
    - Optional rotating file sink

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_str: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL or INFO.
        log_file: Optional file path; adds a rotating file sink.
        format_str: Custom log format string.
        force: Re-initialize even if already configured.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = format_str or DEFAULT_FORMAT

    # Remove default logger and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            colorize=False,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def reset_logger() -> None:
    """Allow the next ``init_logger`` call to reconfigure sinks."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_FORMAT",
    "init_logger",
    "reset_logger",
]
