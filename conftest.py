"""
Repository-level pytest configuration.

Why this exists:
  - Register command-line options for the E2E harness (--run-e2e, --e2e-config)
  - Initialize Loguru once per run
  - Own the run-scoped outcome aggregator and its reporter plugin

Secrets (invite tokens, ...) are never defaulted here; they must come from
the environment or CI secret store.
"""

from __future__ import annotations

import os

import pytest

from autotest_tools.common import init_logger
from testsuites.ui_testing.framework.run_listener import RunListener, RunReporterPlugin


pytest_plugins = ["pytester"]

RUN_REPORTER_PLUGIN = "e2e-run-reporter"


def pytest_addoption(parser):
    group = parser.getgroup("e2e", "Browser E2E harness")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run tests marked 'e2e' against the deployed application "
             "(also enabled by RUN_E2E=1)",
    )
    group.addoption(
        "--e2e-config",
        action="store",
        default=None,
        help="Path to the flat YAML harness configuration "
             "(default: E2E_CONFIG or config/e2e.yaml)",
    )


def pytest_configure(config):
    """Initialize logging and register the run reporter."""
    init_logger(level=os.getenv("LOG_LEVEL"), log_file=os.getenv("LOG_FILE"))

    if not config.pluginmanager.has_plugin(RUN_REPORTER_PLUGIN):
        config.pluginmanager.register(
            RunReporterPlugin(RunListener()),
            RUN_REPORTER_PLUGIN,
        )


def e2e_enabled(config) -> bool:
    """Whether live browser tests should run in this session."""
    if config.getoption("--run-e2e"):
        return True
    return os.getenv("RUN_E2E", "").strip().lower() in ("1", "true", "yes", "on")


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by directory and keep live browser tests opt-in.
    """
    run_e2e = e2e_enabled(config)
    skip_e2e = pytest.mark.skip(reason="live browser test; use --run-e2e or RUN_E2E=1")

    for item in items:
        path = str(item.fspath)

        # Auto-add 'ui' and 'e2e' markers to tests in ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        if f"testsuites{os.sep}unit" in path:
            item.add_marker(pytest.mark.unit)

        if not run_e2e and item.get_closest_marker("e2e"):
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Browser E2E Harness",
        f"Live browser tests: {'enabled' if e2e_enabled(config) else 'disabled'}",
        "=" * 60,
        "",
    ]
