"""
================================================================================
Run Listener / Reporter
================================================================================

Observes a whole test run and accumulates pass/fail/skip counts.

Components:
    - RunListener: run-scoped aggregator receiving start/pass/fail/skip/finish
      events in chronological order
    - RunSummary: counts plus failure details, rendered at run end
    - RunReporterPlugin: pytest plugin translating test reports into
      listener events (exactly one outcome per test)

The listener is owned by whoever orchestrates the run (the pytest config in
this repository); there is no process-wide state.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from .outcome import OutcomeStatus, TestOutcome


# user_properties key carrying the evidence path on teardown reports
EVIDENCE_PROPERTY = "evidence_artifact"

NO_OUTCOME_REASON = "No outcome recorded before the run finished"


class RunListenerError(Exception):
    """Raised when listener events arrive out of order."""
    pass


class _RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class FailureRecord:
    test_name: str
    reason: str
    evidence_path: Optional[str] = None


@dataclass
class RunSummary:
    """Aggregate result of one run."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    failures: List[FailureRecord] = field(default_factory=list)
    duration: float = 0.0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def successful(self) -> bool:
        return self.failed == 0

    def counts(self) -> Dict[str, int]:
        return {"passed": self.passed, "failed": self.failed, "skipped": self.skipped}

    def format_lines(self) -> List[str]:
        """Render the summary as console lines."""
        lines = [
            "=" * 60,
            "E2E RUN SUMMARY",
            "=" * 60,
            f"Total Tests: {self.total}",
            f"Passed: {self.passed}",
            f"Failed: {self.failed}",
            f"Skipped: {self.skipped}",
            f"Duration: {self.duration:.1f}s",
        ]
        if self.failures:
            lines.extend(["", "FAILED TESTS:"])
            for failure in self.failures:
                lines.append(f"  {failure.test_name}")
                lines.append(f"    Reason: {failure.reason}")
                if failure.evidence_path:
                    lines.append(f"    Evidence: {failure.evidence_path}")
        lines.append("=" * 60)
        return lines


class RunListener:
    """
    Run-scoped outcome aggregator.

    Events must arrive in order: ``on_start``, then per test
    ``on_test_start`` followed by exactly one of pass/fail/skip, then
    ``on_finish``. Tests that started but never received an outcome are
    counted as failed at ``on_finish`` so no observed test is dropped.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._state = _RunState.IDLE
        self._reset()

    def _reset(self) -> None:
        self._summary = RunSummary()
        self._in_flight: Dict[str, None] = {}
        self._started_at = 0.0

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on_start(self) -> None:
        if self._state is _RunState.RUNNING:
            raise RunListenerError("Run already started")
        self._reset()
        self._started_at = self._clock()
        self._state = _RunState.RUNNING
        logger.debug("Run started")

    def on_test_start(self, test_name: str) -> None:
        self._require_running("on_test_start")
        if test_name in self._in_flight:
            raise RunListenerError(f"Test already started: {test_name}")
        self._in_flight[test_name] = None
        logger.debug(f"Test started: {test_name}")

    def on_test_pass(self, test_name: str) -> None:
        self._finish_test(test_name, "on_test_pass")
        self._summary.passed += 1
        logger.info(f"PASSED: {test_name}")

    def on_test_fail(
        self,
        test_name: str,
        reason: str,
        evidence_path: Optional[str] = None,
    ) -> None:
        self._finish_test(test_name, "on_test_fail")
        self._summary.failed += 1
        self._summary.failures.append(FailureRecord(test_name, reason, evidence_path))
        logger.error(f"FAILED: {test_name} - {reason}")

    def on_test_skip(self, test_name: str, reason: str = "") -> None:
        self._finish_test(test_name, "on_test_skip")
        self._summary.skipped += 1
        logger.info(f"SKIPPED: {test_name} {reason}".rstrip())

    def on_outcome(
        self,
        test_name: str,
        outcome: TestOutcome,
        evidence_path: Optional[str] = None,
    ) -> None:
        """Dispatch a ``TestOutcome`` to the matching event."""
        if outcome.status is OutcomeStatus.PASSED:
            self.on_test_pass(test_name)
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.on_test_skip(test_name, outcome.reason)
        else:
            self.on_test_fail(test_name, outcome.reason, evidence_path)

    def on_finish(self) -> RunSummary:
        self._require_running("on_finish")
        for test_name in list(self._in_flight):
            logger.warning(f"Test {test_name} has no outcome; counting as failed")
            self.on_test_fail(test_name, NO_OUTCOME_REASON)
        self._summary.duration = self._clock() - self._started_at
        self._state = _RunState.FINISHED
        logger.debug(f"Run finished: {self._summary.counts()}")
        return self._summary

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def summary(self) -> RunSummary:
        """Final summary; only readable after ``on_finish``."""
        if self._state is not _RunState.FINISHED:
            raise RunListenerError("Summary is only available after on_finish")
        return self._summary

    def _require_running(self, event: str) -> None:
        if self._state is not _RunState.RUNNING:
            raise RunListenerError(f"{event} received while run is {self._state.value}")

    def _finish_test(self, test_name: str, event: str) -> None:
        self._require_running(event)
        if test_name not in self._in_flight:
            raise RunListenerError(f"{event} for a test that was not started: {test_name}")
        del self._in_flight[test_name]


# =============================================================================
# pytest integration
# =============================================================================

def failure_reason(report) -> str:
    """Short failure message from a pytest report."""
    crash = getattr(report.longrepr, "reprcrash", None)
    if crash is not None and getattr(crash, "message", None):
        return crash.message
    text = (getattr(report, "longreprtext", "") or "").strip()
    return text.splitlines()[-1] if text else "Test failed"


def skip_reason(report) -> str:
    if hasattr(report, "wasxfail"):
        return f"xfail: {report.wasxfail}" if report.wasxfail else "xfail"
    longrepr = report.longrepr
    if isinstance(longrepr, tuple) and len(longrepr) == 3:
        return str(longrepr[2])
    return str(longrepr or "")


def outcome_from_report(report) -> TestOutcome:
    """Map one phase report to a ``TestOutcome``."""
    if report.failed:
        return TestOutcome.failed(failure_reason(report))
    if report.skipped:
        return TestOutcome.skipped(skip_reason(report))
    return TestOutcome.passed()


class RunReporterPlugin:
    """
    pytest plugin feeding a ``RunListener``.

    Outcome per test across its phases:
        - setup failed or skipped -> that outcome
        - otherwise the call outcome
        - a teardown failure turns a pass into a failure
    """

    def __init__(self, listener: RunListener):
        self.listener = listener
        self.summary: Optional[RunSummary] = None
        self._pending: Dict[str, Optional[TestOutcome]] = {}
        self._evidence: Dict[str, Optional[str]] = {}

    def pytest_sessionstart(self, session) -> None:
        self.listener.on_start()

    def pytest_runtest_logstart(self, nodeid, location) -> None:
        self.listener.on_test_start(nodeid)
        self._pending[nodeid] = None
        self._evidence[nodeid] = None

    def pytest_runtest_logreport(self, report) -> None:
        nodeid = report.nodeid
        for name, value in getattr(report, "user_properties", []):
            if name == EVIDENCE_PROPERTY:
                self._evidence[nodeid] = str(value)

        current = self._pending.get(nodeid)
        if report.when == "setup":
            if not report.passed:
                self._pending[nodeid] = outcome_from_report(report)
        elif report.when == "call":
            self._pending[nodeid] = outcome_from_report(report)
        elif report.failed and (current is None or current.status is OutcomeStatus.PASSED):
            self._pending[nodeid] = TestOutcome.failed(
                f"Teardown error: {failure_reason(report)}"
            )

    def pytest_runtest_logfinish(self, nodeid, location) -> None:
        outcome = self._pending.pop(nodeid, None)
        evidence = self._evidence.pop(nodeid, None)
        if outcome is None:
            # Left in flight; on_finish counts it as failed
            return
        self.listener.on_outcome(nodeid, outcome, evidence)

    def pytest_sessionfinish(self, session, exitstatus) -> None:
        self.summary = self.listener.on_finish()

    def pytest_terminal_summary(self, terminalreporter) -> None:
        if self.summary is None or self.summary.total == 0:
            return
        for line in self.summary.format_lines():
            terminalreporter.write_line(line)


__all__ = [
    "EVIDENCE_PROPERTY",
    "FailureRecord",
    "RunListener",
    "RunListenerError",
    "RunReporterPlugin",
    "RunSummary",
    "outcome_from_report",
]
