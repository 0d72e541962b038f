"""Unit test fixtures: no browser, no network."""

import pytest

from testsuites.ui_testing.framework import page_base


@pytest.fixture(autouse=True)
def fast_polling(monkeypatch):
    """Poll quickly so timeout paths finish in milliseconds."""
    monkeypatch.setattr(page_base, "POLL_INTERVAL", 0.01)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides that would shadow config file values."""
    for name in (
        "BASE_URL",
        "BROWSER_NAME",
        "BROWSER_HEADLESS",
        "BROWSER_WINDOW_WIDTH",
        "BROWSER_WINDOW_HEIGHT",
        "TIMEOUTS_IMPLICIT_WAIT",
        "TIMEOUTS_EXPLICIT_WAIT",
        "TIMEOUTS_PAGE_LOAD",
        "REPORT_DIR",
        "LOGGING_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
