"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based E2E harness for the marketing site and app flows.

Components:
    - config_provider: flat YAML configuration with typed accessors
    - driver_factory: browser bootstrap behind a narrow session protocol
    - element_actions: explicit-wait interaction layer
    - page_base: base page object
    - session_lifecycle: one browser session per test, evidence on failure
    - evidence_capture: screenshot + DOM snapshot persistence
    - run_listener: run-scoped outcome aggregation and summary

Author: Automation Team
License: MIT
================================================================================
"""

from .config_provider import (
    ConfigProvider,
    ConfigurationError,
    ConfigurationMissingError,
    HarnessConfig,
    require_env,
)
from .driver_factory import BrowserSession, DriverFactory, SessionAcquisitionError
from .element_actions import (
    ElementActions,
    ElementNotFoundError,
    ElementNotInteractableError,
    InteractionTimeoutError,
)
from .evidence_capture import EvidenceArtifact, EvidenceCapture
from .locator import ABSENT, By, Found, Locator
from .outcome import OutcomeStatus, TestOutcome
from .page_base import BasePage
from .run_listener import RunListener, RunReporterPlugin, RunSummary
from .session_lifecycle import ManagedSession, SessionLifecycleManager, SessionState

__all__ = [
    "ABSENT",
    "BasePage",
    "BrowserSession",
    "By",
    "ConfigProvider",
    "ConfigurationError",
    "ConfigurationMissingError",
    "DriverFactory",
    "ElementActions",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "EvidenceArtifact",
    "EvidenceCapture",
    "Found",
    "HarnessConfig",
    "InteractionTimeoutError",
    "Locator",
    "ManagedSession",
    "OutcomeStatus",
    "RunListener",
    "RunReporterPlugin",
    "RunSummary",
    "SessionAcquisitionError",
    "SessionLifecycleManager",
    "SessionState",
    "TestOutcome",
    "require_env",
]
