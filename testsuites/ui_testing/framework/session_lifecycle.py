"""
================================================================================
Session Lifecycle Manager
================================================================================

Owns one browser session per test invocation.

State machine:
    UNINITIALIZED -> ACTIVE -> (CAPTURING) -> CLOSED

    - begin_session: obtain a handle from the driver factory, apply implicit
      wait and page-load timeout, maximize the viewport
    - end_session: capture evidence for failed outcomes *before* releasing
      the handle, then always release it; release errors are logged only

CLOSED is terminal. Sessions are never reused across tests.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import unittest
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

import pytest
from loguru import logger

from .config_provider import HarnessConfig
from .driver_factory import BrowserSession, DriverFactory, SessionAcquisitionError
from .evidence_capture import EvidenceArtifact, EvidenceCapture
from .outcome import TestOutcome


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CAPTURING = "capturing"
    CLOSED = "closed"


@dataclass
class ManagedSession:
    """
    One live browser session owned by the lifecycle manager.

    Attributes:
        handle: Driver session handle
        test_name: Test the session was opened for
        implicit_wait: Applied implicit wait in seconds
        page_load_timeout: Applied page-load timeout in seconds
        maximized: Whether the viewport was maximized
        state: Current lifecycle state
        evidence: Artifact captured at teardown, if any
    """

    handle: BrowserSession
    test_name: str
    implicit_wait: float
    page_load_timeout: float
    maximized: bool = False
    state: SessionState = SessionState.UNINITIALIZED
    evidence: Optional[EvidenceArtifact] = None

    @property
    def session_id(self) -> str:
        return getattr(self.handle, "session_id", "unknown")

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE


def outcome_from_exception(error: BaseException) -> TestOutcome:
    """Classify an exception that ended a test body."""
    if isinstance(error, (pytest.skip.Exception, unittest.SkipTest)):
        return TestOutcome.skipped(str(error))
    return TestOutcome.failed(f"{type(error).__name__}: {error}")


class SessionLifecycleManager:
    """
    Opens and closes browser sessions and decides when evidence is captured.

    Usage:
        manager = SessionLifecycleManager(config)
        with manager.session_scope("test_pricing_contact_sales") as session:
            session.handle.navigate(config.base_url)
    """

    def __init__(
        self,
        config: HarnessConfig,
        driver_factory: Optional[DriverFactory] = None,
        evidence_capture: Optional[EvidenceCapture] = None,
    ):
        self.config = config
        self.driver_factory = driver_factory or DriverFactory()
        self.evidence_capture = evidence_capture or EvidenceCapture(config.evidence_dir)

    def begin_session(self, test_name: str) -> ManagedSession:
        """
        Open a configured session for ``test_name``.

        Raises:
            SessionAcquisitionError: No usable session could be obtained
            ConfigurationError: A timeout or browser setting is invalid
        """
        browser = self.config.browser
        headless = self.config.headless
        implicit_wait = self.config.implicit_wait
        page_load_timeout = self.config.page_load_timeout

        try:
            handle = self.driver_factory.create(browser, headless=headless)
        except SessionAcquisitionError:
            raise
        except Exception as e:
            raise SessionAcquisitionError(f"Could not create {browser} session: {e}") from e

        session = ManagedSession(
            handle=handle,
            test_name=test_name,
            implicit_wait=implicit_wait,
            page_load_timeout=page_load_timeout,
        )

        try:
            handle.set_implicit_wait(implicit_wait)
            handle.set_page_load_timeout(page_load_timeout)
            handle.maximize_window()
            session.maximized = True
        except Exception as e:
            self._release(session)
            raise SessionAcquisitionError(
                f"Could not configure {browser} session: {e}"
            ) from e

        session.state = SessionState.ACTIVE
        logger.info(
            f"Session {session.session_id} opened for {test_name} "
            f"({browser}, headless={headless}, implicit_wait={implicit_wait}s, "
            f"page_load_timeout={page_load_timeout}s)"
        )
        return session

    def end_session(
        self,
        session: ManagedSession,
        outcome: TestOutcome,
    ) -> Optional[EvidenceArtifact]:
        """
        Close ``session``, capturing evidence first when ``outcome`` failed.

        Never raises: evidence and release errors are logged so the test's
        own outcome is preserved.

        Returns:
            The evidence artifact for failed outcomes, else None
        """
        if session.state is SessionState.CLOSED:
            logger.warning(f"Session {session.session_id} already closed; skipping teardown")
            return session.evidence

        try:
            if outcome.is_failed:
                session.state = SessionState.CAPTURING
                logger.info(f"Capturing evidence for failed test: {session.test_name}")
                session.evidence = self.evidence_capture.capture(
                    session.handle, session.test_name
                )
        except Exception as e:
            logger.error(f"Evidence capture failed for {session.test_name}: {e}")
        finally:
            self._release(session)

        return session.evidence

    @contextmanager
    def session_scope(self, test_name: str) -> Iterator[ManagedSession]:
        """
        Scoped acquisition with guaranteed release on every exit path.

        The outcome is derived from how the block exits and the original
        exception is re-raised after teardown.
        """
        session = self.begin_session(test_name)
        outcome = TestOutcome.passed()
        try:
            yield session
        except BaseException as e:
            outcome = outcome_from_exception(e)
            raise
        finally:
            self.end_session(session, outcome)

    @staticmethod
    def _release(session: ManagedSession) -> None:
        try:
            session.handle.quit()
        except Exception as e:
            logger.error(f"Failed to quit session {session.session_id}: {e}")
        finally:
            session.state = SessionState.CLOSED
        logger.debug(f"Session {session.session_id} closed")


__all__ = [
    "ManagedSession",
    "SessionLifecycleManager",
    "SessionState",
    "outcome_from_exception",
]
