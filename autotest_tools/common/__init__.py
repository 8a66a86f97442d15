"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared logging setup for the runner and the pytest harness.

Usage:
    from autotest_tools.common import init_logger

    init_logger(level="DEBUG", log_file="test-results/logs/e2e.log")

================================================================================
"""

from .global_config import init_logger, reset_logger

__all__ = [
    "init_logger",
    "reset_logger",
]
