"""
Review Scraper.

Drives one scrape of a competitor's review page: load the page, clear
consent dialogs, open the reviews tab, locate review items, parse up to
max_reviews of them and persist the results.
"""

import logging
import os
from typing import Callable, List, Optional

import config.settings as settings
from src.agents.consent import ConsentDismisser
from src.agents.item_parser import ReviewItemParser
from src.exceptions import ExtractionSkip, NavigationError
from src.models.review import ReviewRecord
from src.models.scrape import ScrapeReport, ScrapeState
from src.utils.renderer import ElementHandle, PlaywrightSession, RenderingSession
from src.utils.storage import ReviewStore

logger = logging.getLogger(__name__)

PRIMARY_ITEM_DESCRIPTOR = 'div[aria-label="Google review"]'
SECONDARY_ITEM_DESCRIPTOR = "div[data-review-id]"
SCROLL_CONTAINER_DESCRIPTOR = 'div[aria-label*="Google reviews"], div[role="feed"], div[jsaction*="scroll"]'
REVIEWS_TAB_DESCRIPTOR = 'button:has-text("Reviews"), button[data-value="Reviews"], button[aria-label*="Reviews"]'


class ReviewScraper:
    """
    Scrapes review records from one page into a ReviewStore.

    A fresh rendering session is created for every call and always closed
    before the call returns. Per-item and per-record failures are logged
    and skipped; only a failure to load the page is raised.
    """

    def __init__(
        self,
        store: ReviewStore,
        session_factory: Callable[[], RenderingSession] = PlaywrightSession.launch,
        parser: Optional[ReviewItemParser] = None,
        consent: Optional[ConsentDismisser] = None,
        default_max_reviews: int = settings.DEFAULT_MAX_REVIEWS,
        settle_delay_ms: int = settings.SETTLE_DELAY_MS,
        click_settle_ms: int = settings.CLICK_SETTLE_MS,
        scroll_max_iterations: int = settings.SCROLL_MAX_ITERATIONS,
        scroll_delta_y: int = settings.SCROLL_DELTA_Y,
        scroll_delay_ms: int = settings.SCROLL_DELAY_MS,
        debug_screenshot_dir: str = settings.DEBUG_SCREENSHOT_DIR
    ):
        """
        Initialize review scraper.

        Args:
            store: Where accepted records are persisted
            session_factory: Zero-arg callable returning a new RenderingSession
            parser: Item parser (default: ReviewItemParser())
            consent: Consent dismisser (default: ConsentDismisser())
            default_max_reviews: Cap used when scrape() gets max_reviews=None
            settle_delay_ms: Extra wait after network idle
            click_settle_ms: Wait after clicking the reviews tab
            scroll_max_iterations: Upper bound on scroll-to-load rounds
            scroll_delta_y: Pixels per scroll
            scroll_delay_ms: Wait between scrolls
            debug_screenshot_dir: If set, a screenshot is saved when no items are found
        """
        self.store = store
        self.session_factory = session_factory
        self.parser = parser or ReviewItemParser()
        self.consent = consent or ConsentDismisser()
        self.default_max_reviews = default_max_reviews
        self.settle_delay_ms = settle_delay_ms
        self.click_settle_ms = click_settle_ms
        self.scroll_max_iterations = scroll_max_iterations
        self.scroll_delta_y = scroll_delta_y
        self.scroll_delay_ms = scroll_delay_ms
        self.debug_screenshot_dir = debug_screenshot_dir

    def scrape(self, competitor_id: str, target_url: str, max_reviews: Optional[int] = None) -> int:
        """
        Scrape reviews and persist them.

        Args:
            competitor_id: Key the records are stored under
            target_url: Public review page to scrape
            max_reviews: Maximum items to process (default: default_max_reviews)

        Returns:
            Number of records actually persisted

        Raises:
            NavigationError: If the page could not be loaded
        """
        return self.scrape_with_report(competitor_id, target_url, max_reviews).inserted

    def scrape_with_report(
        self,
        competitor_id: str,
        target_url: str,
        max_reviews: Optional[int] = None
    ) -> ScrapeReport:
        """Same as scrape(), returning the full ScrapeReport."""
        limit = self.default_max_reviews if max_reviews is None else max(0, max_reviews)
        report = ScrapeReport(competitor_id=competitor_id, target_url=target_url)

        session = self._open_session(target_url, report)
        try:
            self._load_page(session, target_url, report)

            report.consent_dismissed = self._resolve_consent(session)
            report.transition(ScrapeState.CONSENT_RESOLVED)

            report.reviews_tab_clicked = self._ensure_reviews_tab(session)
            report.transition(ScrapeState.REVIEWS_TAB_ENSURED)

            items = self._locate_items(session)
            report.items_found = len(items)
            report.transition(ScrapeState.ITEMS_LOCATED)
            logger.info(f"Found {len(items)} raw review elements")
            if not items:
                self._save_debug_screenshot(session, competitor_id)

            report.transition(ScrapeState.ITERATING)
            records = self._parse_items(items[:limit], report)
            report.parsed = len(records)
            logger.info(f"Scraped {len(records)} reviews, persisting...")

            self._persist(competitor_id, records, report)
            report.transition(ScrapeState.PERSISTED)
            logger.info(
                f"Successfully inserted {report.inserted} out of {len(records)} reviews "
                f"for {competitor_id}"
            )
            return report
        finally:
            self._release(session, report)

    def _open_session(self, target_url: str, report: ScrapeReport) -> RenderingSession:
        try:
            return self.session_factory()
        except Exception as e:
            logger.error(f"Failed to start rendering session: {e}")
            report.transition(ScrapeState.FAILED)
            raise NavigationError(target_url, f"could not start rendering session: {e}") from e

    def _load_page(self, session: RenderingSession, target_url: str, report: ScrapeReport) -> None:
        logger.info(f"Opening review page: {target_url}")
        try:
            session.navigate(target_url)
            session.wait(self.settle_delay_ms)
        except Exception as e:
            logger.error(f"Failed to load {target_url}: {e}")
            report.transition(ScrapeState.FAILED)
            raise NavigationError(target_url, str(e)) from e
        report.transition(ScrapeState.PAGE_LOADED)

    def _resolve_consent(self, session: RenderingSession) -> bool:
        try:
            return self.consent.dismiss(session)
        except Exception as e:
            logger.warning(f"Error handling cookie consent: {e}")
            return False

    def _ensure_reviews_tab(self, session: RenderingSession) -> bool:
        tabs = self._safe_locate(session, REVIEWS_TAB_DESCRIPTOR)
        if not tabs:
            logger.debug("No Reviews tab found, continuing")
            return False
        try:
            tabs[0].click()
            session.wait(self.click_settle_ms)
        except Exception as e:
            logger.info(f"Could not click Reviews tab, continuing: {e}")
            return False
        logger.info("Opened Reviews tab")
        return True

    def _safe_locate(self, session: RenderingSession, descriptor: str) -> List[ElementHandle]:
        try:
            return session.locate(descriptor)
        except Exception as e:
            logger.warning(f"Locating {descriptor!r} failed: {e}")
            return []

    def _find_items(self, session: RenderingSession) -> List[ElementHandle]:
        items = self._safe_locate(session, PRIMARY_ITEM_DESCRIPTOR)
        if not items:
            items = self._safe_locate(session, SECONDARY_ITEM_DESCRIPTOR)
        return items

    def _locate_items(self, session: RenderingSession) -> List[ElementHandle]:
        """Find review items, scrolling the results feed to load them if needed."""
        items = self._find_items(session)
        if items:
            return items

        containers = self._safe_locate(session, SCROLL_CONTAINER_DESCRIPTOR)
        if not containers:
            logger.info("No review items and no scrollable container found")
            return []

        container = containers[0]
        logger.info("Scrolling to load reviews...")
        for round_number in range(1, self.scroll_max_iterations + 1):
            try:
                container.scroll(self.scroll_delta_y)
                session.wait(self.scroll_delay_ms)
            except Exception as e:
                logger.warning(f"Scroll round {round_number} failed, giving up: {e}")
                break

            items = self._find_items(session)
            if items:
                logger.debug(f"Reviews appeared after {round_number} scroll(s)")
                return items

        return []

    def _parse_items(self, items: List[ElementHandle], report: ScrapeReport) -> List[ReviewRecord]:
        records = []
        for index, item in enumerate(items, start=1):
            try:
                record = self.parser.parse(item)
            except ExtractionSkip as e:
                logger.info(f"Skipping review {index}: {e.reason}")
                report.add_diagnostic("extraction_skip", index, e.reason)
                continue
            except Exception as e:
                logger.error(f"Error processing review {index}: {e}")
                report.add_diagnostic("extraction_error", index, str(e))
                continue

            records.append(record)
            logger.debug(f"Added review {index} to scraped list")
        return records

    def _persist(self, competitor_id: str, records: List[ReviewRecord], report: ScrapeReport) -> None:
        for index, record in enumerate(records, start=1):
            try:
                self.store.insert_review(competitor_id, record)
            except Exception as e:
                logger.error(f"Error inserting review {index}/{len(records)}: {e}")
                report.add_diagnostic("persistence_failure", index, str(e))
                continue
            report.inserted += 1

    def _save_debug_screenshot(self, session: RenderingSession, competitor_id: str) -> None:
        if not self.debug_screenshot_dir:
            return
        try:
            os.makedirs(self.debug_screenshot_dir, exist_ok=True)
            path = os.path.join(self.debug_screenshot_dir, f"{competitor_id}-no-reviews.png")
            session.screenshot(path)
        except Exception as e:
            logger.warning(f"Could not take screenshot: {e}")

    def _release(self, session: RenderingSession, report: ScrapeReport) -> None:
        try:
            session.close()
        except Exception as e:
            logger.warning(f"Error closing rendering session (ignored): {e}")
        report.transition(ScrapeState.CLOSED)
