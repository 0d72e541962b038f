"""In-memory stand-ins for Playwright page/locator/context used by unit tests."""

from typing import Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.browser_manager import BrowserSession, BrowserSettings


class FakeLocator:
    def __init__(
        self,
        visible: bool = True,
        enabled: bool = True,
        text: str = "",
        texts: Optional[List[str]] = None,
        count: int = 1,
        click_error: Optional[str] = None,
    ):
        self.visible = visible
        self.enabled = enabled
        self.text = text
        self._texts = texts
        self._count = count
        self.click_error = click_error
        self.clicks = 0
        self.value: Optional[str] = None
        self.selected: Optional[str] = None
        self.on_click = None
        self.wait_timeouts: List[float] = []

    @property
    def first(self) -> "FakeLocator":
        return self

    def wait_for(self, state: str = "visible", timeout: float = 0) -> None:
        self.wait_timeouts.append(timeout)
        if state == "visible" and not self.visible:
            raise PlaywrightError(f"Timeout {timeout}ms exceeded")

    def is_visible(self) -> bool:
        return self.visible

    def is_enabled(self) -> bool:
        return self.enabled

    def click(self, timeout: float = 0) -> None:
        if self.click_error:
            raise PlaywrightError(self.click_error)
        self.clicks += 1
        if self.on_click is not None:
            self.on_click()

    def clear(self) -> None:
        self.value = ""

    def fill(self, text: str) -> None:
        self.value = text

    def select_option(self, label: str) -> None:
        self.selected = label

    def inner_text(self) -> str:
        return self.text

    def all_inner_texts(self) -> List[str]:
        return list(self._texts if self._texts is not None else [self.text])

    def count(self) -> int:
        return self._count if self.visible else 0

    def scroll_into_view_if_needed(self) -> None:
        pass


MISSING = FakeLocator(visible=False, count=0)


class FakePage:
    def __init__(self, locators: Optional[Dict[str, FakeLocator]] = None, url: str = "about:blank"):
        self.locators = dict(locators or {})
        self.url = url
        self.requested: List[str] = []
        self.visited: List[str] = []
        self.ready_state = "complete"
        self.goto_error: Optional[str] = None
        self.viewport = None

    def locator(self, selector: str) -> FakeLocator:
        self.requested.append(selector)
        return self.locators.get(selector, MISSING)

    def goto(self, url: str) -> None:
        if self.goto_error:
            raise PlaywrightError(self.goto_error)
        self.visited.append(url)
        self.url = url

    def evaluate(self, expression: str) -> str:
        return self.ready_state

    def title(self) -> str:
        return "StackDemo"

    def screenshot(self, full_page: bool = False) -> bytes:
        return b"\x89PNG fake"

    def set_viewport_size(self, size) -> None:
        self.viewport = size


class FakeContext:
    def __init__(self):
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


def make_session(page: FakePage) -> BrowserSession:
    return BrowserSession(FakeContext(), page, BrowserSettings())
