"""
Rendering collaborator.

Interfaces the scraper needs from a browser (a session and the element
handles it returns) and their Playwright implementation.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import config.settings as settings

logger = logging.getLogger(__name__)


class ElementHandle(ABC):
    """Opaque reference to one rendered DOM subtree."""

    @abstractmethod
    def locate(self, descriptor: str) -> List["ElementHandle"]:
        """Return descendants matching a selector (possibly none)."""

    @abstractmethod
    def read_visible_text(self) -> str:
        """Return the rendered text of this element."""

    @abstractmethod
    def read_attribute(self, name: str) -> Optional[str]:
        """Return an attribute value, or None if absent."""

    @abstractmethod
    def is_visible(self) -> bool:
        """True if the element is rendered and visible."""

    @abstractmethod
    def click(self) -> None:
        """Click the element."""

    @abstractmethod
    def scroll(self, delta_y: int) -> None:
        """Scroll this element's content vertically by delta_y pixels."""

    def first(self, descriptor: str) -> Optional["ElementHandle"]:
        matches = self.locate(descriptor)
        return matches[0] if matches else None


class RenderingSession(ABC):
    """
    One browser page, owned by a single scrape call.

    Sessions are created per call by a factory and must be closed by the
    caller on every exit path.
    """

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Load url and wait for network idleness."""

    @abstractmethod
    def locate(self, descriptor: str) -> List[ElementHandle]:
        """Return page elements matching a selector (possibly none)."""

    @abstractmethod
    def wait(self, duration_ms: int) -> None:
        """Pause for a fixed delay."""

    @abstractmethod
    def close(self) -> None:
        """Release the page and browser."""

    def screenshot(self, path: str) -> None:
        """Save a debug screenshot. Sessions without a screen ignore this."""
        logger.debug(f"Screenshot not supported by {type(self).__name__}, skipping {path}")


class PlaywrightElement(ElementHandle):
    """ElementHandle backed by a Playwright sync ElementHandle."""

    def __init__(self, handle):
        self._handle = handle

    def locate(self, descriptor: str) -> List[ElementHandle]:
        return [PlaywrightElement(h) for h in self._handle.query_selector_all(descriptor)]

    def read_visible_text(self) -> str:
        return self._handle.inner_text()

    def read_attribute(self, name: str) -> Optional[str]:
        return self._handle.get_attribute(name)

    def is_visible(self) -> bool:
        return self._handle.is_visible()

    def click(self) -> None:
        self._handle.click()

    def scroll(self, delta_y: int) -> None:
        self._handle.evaluate("(el, dy) => el.scrollBy(0, dy)", delta_y)


class PlaywrightSession(RenderingSession):
    """
    Headless Chromium page driven through the Playwright sync API.

    Use PlaywrightSession.launch() to start one; close() stops the browser
    and the Playwright driver.
    """

    def __init__(self, playwright, browser, page, navigation_timeout_ms: int):
        self._playwright = playwright
        self._browser = browser
        self._page = page
        self._navigation_timeout_ms = navigation_timeout_ms

    @classmethod
    def launch(
        cls,
        headless: bool = settings.HEADLESS,
        user_agent: str = settings.USER_AGENT,
        navigation_timeout_ms: int = settings.NAVIGATION_TIMEOUT_MS
    ) -> "PlaywrightSession":
        """
        Start Playwright, launch Chromium and open a blank page.

        Args:
            headless: Run without a visible window
            user_agent: User-Agent header for the browser context
            navigation_timeout_ms: Timeout for page.goto

        Returns:
            A ready session
        """
        from playwright.sync_api import sync_playwright

        playwright = sync_playwright().start()
        try:
            browser = playwright.chromium.launch(headless=headless)
            context = browser.new_context(
                viewport={"width": 1366, "height": 900},
                user_agent=user_agent
            )
            page = context.new_page()
        except Exception:
            playwright.stop()
            raise

        logger.info(f"Launched Chromium (headless={headless})")
        return cls(playwright, browser, page, navigation_timeout_ms)

    def navigate(self, url: str) -> None:
        self._page.goto(url, wait_until="networkidle", timeout=self._navigation_timeout_ms)

    def locate(self, descriptor: str) -> List[ElementHandle]:
        return [PlaywrightElement(h) for h in self._page.query_selector_all(descriptor)]

    def wait(self, duration_ms: int) -> None:
        self._page.wait_for_timeout(duration_ms)

    def screenshot(self, path: str) -> None:
        self._page.screenshot(path=path, full_page=True)
        logger.info(f"Screenshot saved: {path}")

    def close(self) -> None:
        try:
            self._browser.close()
        finally:
            self._playwright.stop()
