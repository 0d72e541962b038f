"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based Page Object Model framework for the StackDemo store.

Components:
    - browser_manager: Browser lifecycle and per-test sessions
    - page_base: Base page object (waits, actions, probes)
    - scenario: Step/pass/fail logging into the run report
    - suite_context: Process-scoped config and report
    - exceptions: Error taxonomy

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserKind, BrowserManager, BrowserSession, BrowserSettings
from .exceptions import InteractionError, InvalidFixtureError, StackDemoError, WaitTimeoutError
from .page_base import BasePage
from .scenario import Scenario, setup_guard
from .suite_context import SuiteContext

__all__ = [
    "BasePage",
    "BrowserKind",
    "BrowserManager",
    "BrowserSession",
    "BrowserSettings",
    "Scenario",
    "setup_guard",
    "SuiteContext",
    "StackDemoError",
    "WaitTimeoutError",
    "InteractionError",
    "InvalidFixtureError",
]
