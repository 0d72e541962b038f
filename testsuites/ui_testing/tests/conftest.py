"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, page objects and scenario reporting.

Key Features:
- One SuiteContext (config + run report) per process, flushed at session end
- One browser per process, one isolated session per test
- Page Object fixtures, including a signed-in home page
- Scenario factory writing steps into the run report
- Screenshot capture on failure

================================================================================
"""

from typing import Callable, Generator

import allure
import pytest
from loguru import logger

from testsuites.ui_testing.data import DemoUser
from testsuites.ui_testing.framework import (
    BrowserManager,
    BrowserSession,
    Scenario,
    SuiteContext,
    setup_guard,
)
from testsuites.ui_testing.pages import CheckoutPage, HomePage, LoginPage


# ================================================================================
# Suite Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def suite_context() -> Generator[SuiteContext, None, None]:
    """
    Session-scoped suite context.

    Loads configuration, initialises logging and opens the run report;
    the report is flushed once when the session ends.
    """
    context = SuiteContext().start()
    logger.info("=== Test Suite Started ===")
    yield context
    context.close()
    logger.info("=== Test Suite Completed ===")


@pytest.fixture(scope="session")
def browser_manager(suite_context: SuiteContext) -> Generator[BrowserManager, None, None]:
    """
    Session-scoped browser manager.

    The browser process is launched on the first session request and shared
    by all tests of this worker.
    """
    manager = BrowserManager(suite_context.browser_settings)
    yield manager
    manager.close()


@pytest.fixture(scope="function")
def browser_session(browser_manager: BrowserManager) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browser session.

    Each test gets a fresh context (cookies, storage) and page.
    """
    logger.info("Setting up test environment")
    session = browser_manager.new_session()
    yield session
    logger.info("Closing browser session and cleaning up")
    session.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(browser_session: BrowserSession, suite_context: SuiteContext) -> LoginPage:
    return LoginPage(
        browser_session,
        base_url=suite_context.base_url,
        timeout=suite_context.timeout,
    )


@pytest.fixture
def home_page(browser_session: BrowserSession, suite_context: SuiteContext) -> HomePage:
    return HomePage(
        browser_session,
        base_url=suite_context.base_url,
        timeout=suite_context.timeout,
    )


@pytest.fixture
def checkout_page(browser_session: BrowserSession, suite_context: SuiteContext) -> CheckoutPage:
    return CheckoutPage(
        browser_session,
        base_url=suite_context.base_url,
        timeout=suite_context.timeout,
    )


@pytest.fixture
def logged_in_home(
    request: pytest.FixtureRequest,
    login_page: LoginPage,
    suite_context: SuiteContext,
    new_scenario: Callable[..., Scenario],
) -> HomePage:
    """
    Home page after signing in as the configured default user.

    A failed sign-in is written to the run report (with a screenshot) under
    the test's name before the setup error propagates.
    """
    username = suite_context.config.default_username

    def report_failure() -> Scenario:
        return new_scenario(
            request.node.name,
            f"Sign in as {username} before the scenario",
            "Setup",
        )

    with allure.step(f"Login as {username}"), setup_guard(report_failure, "Login"):
        user = DemoUser.parse(username)
        home = login_page.open().login(user)
        assert home.is_logged_in(), "User should be logged in"
    return home


# ================================================================================
# Reporting Fixtures
# ================================================================================

@pytest.fixture
def new_scenario(
    suite_context: SuiteContext,
    browser_session: BrowserSession,
) -> Callable[..., Scenario]:
    """
    Factory creating the report section for the running test.

        scenario = new_scenario("Test Logout", "Verify user can logout", "Authentication")
    """

    def _create(name: str, description: str = "", category: str = "") -> Scenario:
        section = suite_context.report.create_test(name, description, category)
        return Scenario(section, browser_session)

    return _create


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture a screenshot when a UI test or its setup fails and attach it to Allure.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when not in ("setup", "call") or not report.failed:
        return

    session = getattr(item, "funcargs", {}).get("browser_session")
    if session is None or session.is_closed:
        return

    screenshot = session.screenshot(full_page=True)
    if screenshot:
        allure.attach(
            screenshot,
            name="failure_screenshot",
            attachment_type=allure.attachment_type.PNG,
        )
    else:
        logger.warning(f"No failure screenshot available for {item.nodeid}")
