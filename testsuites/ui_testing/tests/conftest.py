"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for live browser tests, providing fixtures for
session lifecycle management, page objects and failure evidence.

Key Features:
- One browser session per test, opened and closed by SessionLifecycleManager
- Outcome-aware teardown: screenshot + DOM snapshot only for failed tests
- Page Object fixtures for every covered page
- Evidence path attached to the teardown report for the run summary

================================================================================
"""

import os
from typing import Generator

import pytest

from autotest_tools.common import init_logger
from autotest_tools.report_tools import attach_text
from testsuites.ui_testing.framework.config_provider import ConfigProvider, HarnessConfig, require_env
from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.outcome import TestOutcome
from testsuites.ui_testing.framework.run_listener import EVIDENCE_PROPERTY, outcome_from_report
from testsuites.ui_testing.framework.session_lifecycle import (
    ManagedSession,
    SessionLifecycleManager,
)
from testsuites.ui_testing.pages import (
    AcceptInvitePage,
    ContactPage,
    HomePage,
    IndustriesPage,
    PricingPage,
    ProductPage,
    SecurityPage,
    SignupPage,
)


# ================================================================================
# Harness Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def harness_config(pytestconfig) -> HarnessConfig:
    """
    Session-scoped configuration, resolved once per run.
    """
    config_path = pytestconfig.getoption("--e2e-config") or os.getenv("E2E_CONFIG")
    config = ConfigProvider(config_path).load()
    init_logger(level=config.log_level, log_file=config.log_file, force=True)
    return config


@pytest.fixture(scope="session")
def lifecycle_manager(harness_config: HarnessConfig) -> SessionLifecycleManager:
    return SessionLifecycleManager(harness_config)


@pytest.fixture(scope="function")
def browser_session(
    request,
    lifecycle_manager: SessionLifecycleManager,
) -> Generator[ManagedSession, None, None]:
    """
    Function-scoped browser session.

    Teardown always runs; it reads the test outcome recorded by
    ``pytest_runtest_makereport`` and captures evidence for failures.
    """
    session = lifecycle_manager.begin_session(request.node.name)
    try:
        yield session
    finally:
        outcome = item_outcome(request.node)
        if outcome.is_failed:
            attach_text(outcome.reason, name="Failure reason")
        request.node.evidence_artifact = lifecycle_manager.end_session(session, outcome)


@pytest.fixture(scope="function")
def actions(browser_session: ManagedSession, harness_config: HarnessConfig) -> ElementActions:
    return ElementActions(
        browser_session.handle,
        explicit_wait=harness_config.explicit_wait,
        poll_interval=harness_config.poll_interval,
    )


INVITE_TOKEN_ENV = "E2E_INVITE_TOKEN"


@pytest.fixture
def invite_token() -> str:
    """
    Out-of-band invitation token.

    List it before any page fixture so a missing token fails setup before a
    browser is launched.
    """
    return require_env(INVITE_TOKEN_ENV)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(actions: ElementActions, harness_config: HarnessConfig) -> HomePage:
    return HomePage(actions, harness_config.base_url)


@pytest.fixture
def pricing_page(actions: ElementActions, harness_config: HarnessConfig) -> PricingPage:
    return PricingPage(actions, harness_config.base_url)


@pytest.fixture
def product_page(actions: ElementActions, harness_config: HarnessConfig) -> ProductPage:
    return ProductPage(actions, harness_config.base_url)


@pytest.fixture
def industries_page(actions: ElementActions, harness_config: HarnessConfig) -> IndustriesPage:
    return IndustriesPage(actions, harness_config.base_url)


@pytest.fixture
def security_page(actions: ElementActions, harness_config: HarnessConfig) -> SecurityPage:
    return SecurityPage(actions, harness_config.base_url)


@pytest.fixture
def signup_page(actions: ElementActions, harness_config: HarnessConfig) -> SignupPage:
    return SignupPage(actions, harness_config.base_url)


@pytest.fixture
def contact_page(actions: ElementActions, harness_config: HarnessConfig) -> ContactPage:
    return ContactPage(actions, harness_config.base_url)


@pytest.fixture
def accept_invite_page(actions: ElementActions, harness_config: HarnessConfig) -> AcceptInvitePage:
    return AcceptInvitePage(actions, harness_config.base_url)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

def item_outcome(item) -> TestOutcome:
    """
    Outcome of a test as seen from fixture teardown.

    The call report decides; without one (setup failed or skipped after the
    session was opened) the setup report does.
    """
    call_report = getattr(item, "rep_call", None)
    if call_report is not None:
        return outcome_from_report(call_report)
    setup_report = getattr(item, "rep_setup", None)
    if setup_report is not None and not setup_report.passed:
        return outcome_from_report(setup_report)
    return TestOutcome.failed("Test ended without a call phase")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Record phase reports on the item and publish the evidence path.

    The browser_session fixture reads ``rep_call`` during teardown; the
    teardown report then carries the evidence location for the run summary.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)

    if report.when == "teardown":
        artifact = getattr(item, "evidence_artifact", None)
        if artifact is not None and artifact.primary_path is not None:
            report.user_properties.append((EVIDENCE_PROPERTY, str(artifact.primary_path)))
            report.sections.append(
                ("Failure evidence", f"{artifact.screenshot_path}\n{artifact.dom_path}")
            )
