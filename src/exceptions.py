"""
Exception taxonomy for ReviewScout.

Only NavigationError is surfaced to scrape callers. ExtractionSkip and
StorageError are raised per item / per record and absorbed by the scraper.
"""


class ReviewScoutError(Exception):
    """Base class for all ReviewScout errors."""


class NavigationError(ReviewScoutError):
    """The target page could not be loaded."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to load {url}: {message}")


class ExtractionSkip(ReviewScoutError):
    """A candidate review item produced nothing usable."""

    def __init__(self, reason: str, raw_text: str = ""):
        self.reason = reason
        self.raw_text = raw_text
        super().__init__(reason)


class StorageError(ReviewScoutError):
    """A review store failed to read or write."""
