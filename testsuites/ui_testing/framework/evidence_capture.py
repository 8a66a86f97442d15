"""
================================================================================
Evidence Capture
================================================================================

Persists a screenshot and a DOM snapshot when a test fails.

Layout:
    {evidence_dir}/{test_name}_{yyyyMMdd_HHmmss}.png
    {evidence_dir}/{test_name}_{yyyyMMdd_HHmmss}.html

Capture is best-effort: I/O or driver errors are logged and leave the
corresponding artifact part empty. ``capture`` never raises.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from autotest_tools.report_tools.allure_utils import attach_file

from .driver_factory import BrowserSession


TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class EvidenceCaptureError(Exception):
    """Raised internally when one evidence part cannot be persisted."""
    pass


@dataclass(frozen=True)
class EvidenceArtifact:
    """
    Screenshot + DOM snapshot written for one failed test.

    Attributes:
        stem: Shared path stem (no suffix)
        screenshot_path: PNG path, or None if the screenshot was not written
        dom_path: HTML path, or None if the DOM snapshot was not written
    """

    stem: Path
    screenshot_path: Optional[Path] = None
    dom_path: Optional[Path] = None

    @property
    def is_complete(self) -> bool:
        return self.screenshot_path is not None and self.dom_path is not None

    @property
    def primary_path(self) -> Optional[Path]:
        """Path worth reporting: the screenshot, else the DOM snapshot."""
        return self.screenshot_path or self.dom_path


def safe_test_name(test_name: str) -> str:
    """Reduce a test id (``test_x[chrome-1]``) to a filename-safe token."""
    cleaned = _UNSAFE_CHARS.sub("_", test_name).strip("_")
    return cleaned or "unnamed_test"


class EvidenceCapture:
    """
    Writes failure evidence under a fixed directory.

    Usage:
        capture = EvidenceCapture("test-results/screenshots")
        artifact = capture.capture(session, "test_start_free_trial_from_home")
    """

    def __init__(
        self,
        evidence_dir: Union[str, Path] = "test-results/screenshots",
        now: Callable[[], datetime] = datetime.now,
        attach_to_allure: bool = True,
    ):
        self.evidence_dir = Path(evidence_dir)
        self._now = now
        self.attach_to_allure = attach_to_allure

    def build_stem(self, test_name: str) -> Path:
        """
        Return a stem that no existing evidence file uses.

        A numeric suffix is appended when two failures of the same test land
        in the same second.
        """
        base = f"{safe_test_name(test_name)}_{self._now().strftime(TIMESTAMP_FORMAT)}"
        stem = self.evidence_dir / base
        counter = 0
        while stem.with_suffix(".png").exists() or stem.with_suffix(".html").exists():
            counter += 1
            stem = self.evidence_dir / f"{base}_{counter}"
        return stem

    def capture(self, session: BrowserSession, test_name: str) -> EvidenceArtifact:
        """
        Capture screenshot and DOM snapshot for ``test_name``.

        Never raises; a part that could not be written is left as None.
        """
        try:
            self.evidence_dir.mkdir(parents=True, exist_ok=True)
            stem = self.build_stem(test_name)
        except Exception as e:
            logger.error(f"Evidence directory unavailable ({self.evidence_dir}): {e}")
            return EvidenceArtifact(stem=self.evidence_dir / safe_test_name(test_name))

        screenshot_path = self._persist(
            stem.with_suffix(".png"), session.screenshot, "screenshot"
        )
        dom_path = self._persist(
            stem.with_suffix(".html"),
            lambda: session.page_source().encode("utf-8"),
            "DOM snapshot",
        )

        artifact = EvidenceArtifact(stem=stem, screenshot_path=screenshot_path, dom_path=dom_path)
        if artifact.is_complete:
            logger.info(f"Failure evidence saved: {stem}.png/.html")
        else:
            logger.warning(f"Failure evidence incomplete for {test_name}: {artifact}")
        return artifact

    def _persist(self, path: Path, produce: Callable[[], bytes], label: str) -> Optional[Path]:
        try:
            self._write_once(path, produce)
        except Exception as e:
            logger.error(f"Failed to capture {label} for {path.stem}: {e}")
            return None

        if self.attach_to_allure:
            try:
                attach_file(path, name=f"failure_{label.replace(' ', '_').lower()}")
            except Exception as e:
                logger.warning(f"Failed to attach {label} to Allure: {e}")
        return path

    @staticmethod
    def _write_once(path: Path, produce: Callable[[], bytes]) -> None:
        try:
            data = produce()
        except Exception as e:
            raise EvidenceCaptureError(f"Driver could not produce {path.suffix} data: {e}") from e

        # "xb" keeps evidence write-once
        with open(path, "xb") as f:
            f.write(data)


__all__ = [
    "EvidenceArtifact",
    "EvidenceCapture",
    "EvidenceCaptureError",
    "safe_test_name",
]
