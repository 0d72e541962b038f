"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser process per worker, launched lazily
    - One isolated context + page (a BrowserSession) per test
    - Browser selection (chromium, chrome, edge, firefox, webkit)
    - Headless flag, default timeouts and viewport from configuration

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .exceptions import InvalidFixtureError


class BrowserKind(str, Enum):
    """Supported browsers (value is the configuration name)."""
    CHROMIUM = "chromium"
    CHROME = "chrome"
    EDGE = "edge"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def parse(cls, value: str) -> "BrowserKind":
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "msedge":
            name = "edge"
        for member in cls:
            if member.value == name:
                return member
        logger.error(f"Unsupported browser: {value}")
        raise InvalidFixtureError("browser", value, [m.value for m in cls])

    @property
    def engine(self) -> str:
        """Playwright browser type attribute used to launch this browser."""
        if self in (BrowserKind.FIREFOX, BrowserKind.WEBKIT):
            return self.value
        return "chromium"

    @property
    def channel(self) -> Optional[str]:
        """Branded Chromium channel, if any."""
        return {BrowserKind.CHROME: "chrome", BrowserKind.EDGE: "msedge"}.get(self)


@dataclass(frozen=True)
class BrowserSettings:
    """
    Launch and session settings.

    Attributes:
        kind: Browser to launch
        headless: Run without a visible window
        viewport: (width, height) of each page
        action_timeout: Default element/action timeout in seconds
        page_load_timeout: Default navigation timeout in seconds
    """
    kind: BrowserKind = BrowserKind.CHROMIUM
    headless: bool = True
    viewport: Tuple[int, int] = (1920, 1080)
    action_timeout: float = 10
    page_load_timeout: float = 30

    @classmethod
    def from_config(cls, config: Any) -> "BrowserSettings":
        """Build settings from a ConfigReader."""
        return cls(
            kind=BrowserKind.parse(config.browser),
            headless=config.headless,
            viewport=config.window_size,
            action_timeout=config.implicit_wait,
            page_load_timeout=config.page_load_timeout,
        )


class BrowserSession:
    """
    One live browser connection used for the duration of a test.

    Wraps an isolated BrowserContext and its single Page. Page objects hold a
    reference to the session and must not be used after `close()`.
    """

    def __init__(
        self,
        context: BrowserContext,
        page: Page,
        settings: BrowserSettings,
    ):
        self.context = context
        self.page = page
        self.settings = settings
        self._closed = False

    @property
    def kind(self) -> BrowserKind:
        return self.settings.kind

    @property
    def headless(self) -> bool:
        return self.settings.headless

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def url(self) -> str:
        return self.page.url

    def screenshot(self, full_page: bool = False) -> bytes:
        """
        Capture a PNG of the current page.

        Returns:
            PNG bytes, or b"" when the page cannot be captured
        """
        if self._closed:
            return b""
        try:
            return self.page.screenshot(full_page=full_page)
        except PlaywrightError as e:
            logger.error(f"Failed to take screenshot: {e}")
            return b""

    def set_viewport(self, width: int, height: int) -> None:
        self.page.set_viewport_size({"width": width, "height": height})
        logger.debug(f"Viewport set to {width}x{height}")

    def close(self) -> None:
        """Close the context (and its page). Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self.context.close()
            logger.info("Browser session closed")
        except PlaywrightError as e:
            logger.warning(f"Error while closing browser session: {e}")

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class BrowserManager:
    """
    Manages the browser process and per-test sessions.

    Usage:
        with BrowserManager(BrowserSettings(headless=True)) as manager:
            session = manager.new_session()
            session.page.goto("https://bstackdemo.com/")
            session.close()
    """

    # Chromium-only launch flags
    CHROMIUM_ARGS: List[str] = [
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
    ]

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(self, settings: Optional[BrowserSettings] = None):
        self.settings = settings or BrowserSettings()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._sessions: List[BrowserSession] = []

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    @property
    def is_started(self) -> bool:
        return self._browser is not None

    def launch_options(self) -> Dict[str, Any]:
        """Keyword arguments passed to `BrowserType.launch()`."""
        options: Dict[str, Any] = {"headless": self.settings.headless}
        if self.settings.kind.engine == "chromium":
            options["args"] = list(self.CHROMIUM_ARGS)
        if self.settings.kind.channel:
            options["channel"] = self.settings.kind.channel
        return options

    def context_options(self, **overrides: Any) -> Dict[str, Any]:
        """Keyword arguments passed to `Browser.new_context()`."""
        width, height = self.settings.viewport
        return {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": {"width": width, "height": height},
            **overrides,
        }

    def start(self) -> None:
        """Start Playwright and launch the configured browser."""
        if self._browser is not None:
            return

        kind = self.settings.kind
        logger.info(f"Initializing {kind.value} browser")
        self._playwright = sync_playwright().start()
        launcher = getattr(self._playwright, kind.engine)
        try:
            self._browser = launcher.launch(**self.launch_options())
        except PlaywrightError:
            logger.exception(f"Failed to launch {kind.value} browser")
            self._playwright.stop()
            self._playwright = None
            raise
        logger.info(f"{kind.value} browser started (headless={self.settings.headless})")

    def new_session(self, **context_options: Any) -> BrowserSession:
        """
        Create an isolated session (new context + page) for one test.

        Args:
            **context_options: Overrides for `Browser.new_context()`

        Returns:
            New BrowserSession
        """
        if self._browser is None:
            self.start()

        context = self._browser.new_context(**self.context_options(**context_options))
        page = context.new_page()
        page.set_default_timeout(self.settings.action_timeout * 1000)
        page.set_default_navigation_timeout(self.settings.page_load_timeout * 1000)

        session = BrowserSession(context, page, self.settings)
        self._sessions = [s for s in self._sessions if not s.is_closed]
        self._sessions.append(session)
        logger.info(
            f"Browser session created: {self.settings.kind.value}, "
            f"viewport={self.settings.viewport}, "
            f"timeout={self.settings.action_timeout}s, "
            f"page_load_timeout={self.settings.page_load_timeout}s"
        )
        return session

    def close(self) -> None:
        """Close all sessions, the browser and Playwright."""
        for session in self._sessions:
            session.close()
        self._sessions.clear()

        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Error while closing browser: {e}")
            self._browser = None

        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")


__all__ = [
    "BrowserManager",
    "BrowserSession",
    "BrowserSettings",
    "BrowserKind",
]
