"""
In-memory stand-ins for the rendering collaborator.

FakeElement / FakeSession implement the renderer interfaces over plain
dicts of selector -> elements, so scraping and extraction can be tested
without a browser.
"""

from typing import Callable, Dict, List, Optional

from src.utils.renderer import ElementHandle, RenderingSession

TEST_LEXICON = {
    "great": 3,
    "good": 2,
    "love": 3,
    "amazing": 4,
    "excellent": 3,
    "friendly": 2,
    "nice": 2,
    "bad": -3,
    "terrible": -3,
    "awful": -3,
    "rude": -2,
    "slow": -2,
    "cold": -1,
    "worst": -3,
}


class FakeElement(ElementHandle):
    def __init__(
        self,
        text: str = "",
        children: Optional[Dict[str, List["FakeElement"]]] = None,
        attributes: Optional[Dict[str, str]] = None,
        visible: bool = True,
        text_error: Optional[Exception] = None,
        click_error: Optional[Exception] = None,
        on_scroll: Optional[Callable[[int], None]] = None
    ):
        self.text = text
        self.children = children or {}
        self.attributes = attributes or {}
        self.visible = visible
        self.text_error = text_error
        self.click_error = click_error
        self.on_scroll = on_scroll
        self.clicks = 0
        self.scrolls: List[int] = []

    def locate(self, descriptor):
        return list(self.children.get(descriptor, []))

    def read_visible_text(self):
        if self.text_error:
            raise self.text_error
        return self.text

    def read_attribute(self, name):
        return self.attributes.get(name)

    def is_visible(self):
        return self.visible

    def click(self):
        if self.click_error:
            raise self.click_error
        self.clicks += 1

    def scroll(self, delta_y):
        self.scrolls.append(delta_y)
        if self.on_scroll:
            self.on_scroll(len(self.scrolls))


class FakeSession(RenderingSession):
    def __init__(
        self,
        elements: Optional[Dict[str, List[FakeElement]]] = None,
        navigate_error: Optional[Exception] = None,
        close_error: Optional[Exception] = None
    ):
        self.elements = elements or {}
        self.navigate_error = navigate_error
        self.close_error = close_error
        self.visited: List[str] = []
        self.waits: List[int] = []
        self.screenshots: List[str] = []
        self.closed = False

    def navigate(self, url):
        self.visited.append(url)
        if self.navigate_error:
            raise self.navigate_error

    def locate(self, descriptor):
        return list(self.elements.get(descriptor, []))

    def wait(self, duration_ms):
        self.waits.append(duration_ms)

    def screenshot(self, path):
        self.screenshots.append(path)

    def close(self):
        self.closed = True
        if self.close_error:
            raise self.close_error
