"""
================================================================================
Autotest Tools
================================================================================

Infrastructure utilities used around the E2E harness.

Modules:
    - common: Loguru logging bootstrap
    - report_tools: Allure attachment helpers

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
