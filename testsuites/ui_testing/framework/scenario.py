"""
================================================================================
Scenario Logging
================================================================================

Step/pass/fail bookkeeping for a single UI scenario.

Every message goes to three places: the loguru log, the run report section,
and (through the report manager) the Allure step tree. On failure a screenshot
of the live session is embedded next to the failure message.

Usage:
    with scenario.guard():
        scenario.step("Open login page")
        login_page.open()
        ...
        scenario.passed("User logged in")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from loguru import logger

from stackdemo_tools.report_tools import ReportTest

from .browser_manager import BrowserSession


class Scenario:
    """Logs the progress of one test into its report section."""

    def __init__(self, report: ReportTest, session: Optional[BrowserSession] = None):
        self.report = report
        self.session = session
        self._failed = False

    @property
    def name(self) -> str:
        return self.report.name

    @property
    def has_failed(self) -> bool:
        return self._failed

    def step(self, message: str) -> None:
        logger.info(f"[{self.name}] {message}")
        self.report.info(message)

    def passed(self, message: str) -> None:
        logger.success(f"[{self.name}] {message}")
        self.report.passed(message)

    def warning(self, message: str) -> None:
        logger.warning(f"[{self.name}] {message}")
        self.report.warning(message)

    def failed(self, message: str) -> None:
        """Record a failure and embed a screenshot of the current page."""
        self._failed = True
        logger.error(f"[{self.name}] {message}")
        self.report.fail(message)
        if self.session is not None:
            self.report.add_screenshot(
                self.session.screenshot(),
                title=f"Failure screenshot: {self.name}",
            )

    @contextmanager
    def guard(self) -> Iterator["Scenario"]:
        """Record any exception raised in the block as a failure, then re-raise."""
        try:
            yield self
        except Exception as e:
            self.failed(f"Test failed with exception: {type(e).__name__}: {e}")
            raise


@contextmanager
def setup_guard(create: Callable[[], Scenario], action: str) -> Iterator[None]:
    """
    Record a failure of fixture work (e.g. signing in) in the run report.

    The report section is only created by `create` when the block raises,
    so a passing setup leaves no extra section behind.
    """
    try:
        yield
    except Exception as e:
        create().failed(f"{action} failed with exception: {type(e).__name__}: {e}")
        raise


__all__ = ["Scenario", "setup_guard"]
