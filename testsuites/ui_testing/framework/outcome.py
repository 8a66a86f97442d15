"""
Test outcome model shared by the session lifecycle and the run reporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TestOutcome:
    """
    Terminal classification of one test execution.

    Attributes:
        status: Passed, Failed or Skipped
        reason: Failure message or skip reason (empty for passes)
    """

    # Keep pytest from collecting this class
    __test__ = False

    status: OutcomeStatus
    reason: str = ""

    @classmethod
    def passed(cls) -> "TestOutcome":
        return cls(OutcomeStatus.PASSED)

    @classmethod
    def failed(cls, reason: str) -> "TestOutcome":
        return cls(OutcomeStatus.FAILED, reason)

    @classmethod
    def skipped(cls, reason: str = "") -> "TestOutcome":
        return cls(OutcomeStatus.SKIPPED, reason)

    @property
    def is_failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


__all__ = [
    "OutcomeStatus",
    "TestOutcome",
]
