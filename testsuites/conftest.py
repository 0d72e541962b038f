"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project's markers, tags tests by location and skips browser
scenarios unless `--run-e2e` (or RUN_E2E=1) was given.

================================================================================
"""

import os

import pytest


def e2e_enabled(config) -> bool:
    """True when browser scenarios were requested on the command line or via env."""
    if config.getoption("--run-e2e", default=False):
        return True
    return os.getenv("RUN_E2E", "").strip().lower() in ("1", "true", "yes", "on")


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests driving a real browser against the store"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that need no browser"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "responsive: Tests run across device viewports"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )
    config.addinivalue_line(
        "markers", "cart: Tests related to the shopping cart"
    )
    config.addinivalue_line(
        "markers", "catalogue: Tests related to product filtering and sorting"
    )
    config.addinivalue_line(
        "markers", "checkout: Tests related to order checkout"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by directory, then skip browser scenarios unless requested."""
    run_e2e = e2e_enabled(config)
    skip_e2e = pytest.mark.skip(reason="needs --run-e2e (or RUN_E2E=1)")

    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
        elif f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)

        if not run_e2e and item.get_closest_marker("e2e"):
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "StackDemo UI Automation Suite",
        f"e2e scenarios: {'enabled' if e2e_enabled(config) else 'skipped'}",
        "=" * 60,
        "",
    ]
