"""
================================================================================
Allure Report Utilities
================================================================================

This module provides attachment helpers used by the E2E harness to put
failure evidence and run summaries into Allure reports.

Features:
- Evidence files (PNG screenshot, HTML DOM snapshot) attached from disk
- Plain-text attachments (failure reasons)

================================================================================
"""

from pathlib import Path

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_file(path: Path, name: str = None) -> bool:
    """
    Attach an evidence file from disk, picking the type from its suffix.

    Returns:
        True if the file was attached
    """
    types = {
        ".png": allure.attachment_type.PNG,
        ".html": allure.attachment_type.HTML,
        ".json": allure.attachment_type.JSON,
        ".txt": allure.attachment_type.TEXT,
    }
    attachment_type = types.get(path.suffix.lower())
    if attachment_type is None:
        logger.debug(f"No Allure attachment type for: {path}")
        return False

    allure.attach.file(
        str(path),
        name=name or path.name,
        attachment_type=attachment_type
    )
    return True
