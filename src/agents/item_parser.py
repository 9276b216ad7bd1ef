"""
Review Item Parser.

Turns one rendered review item into a ReviewRecord using the field
extractors, or rejects it with ExtractionSkip.
"""

import logging

import config.settings as settings
from src.agents.extraction import (
    extract_rating,
    extract_review_date,
    extract_review_text,
    extract_reviewer_name,
)
from src.exceptions import ExtractionSkip
from src.models.review import ReviewRecord
from src.utils.renderer import ElementHandle
from src.utils.text_cleaning import clean_review_text

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100


class ReviewItemParser:
    """
    Extracts rating, reviewer name, review text and relative date from a
    single review item handle.
    """

    def __init__(self, source: str = settings.SOURCE_TAG):
        """
        Args:
            source: Origin tag stamped on every record
        """
        self.source = source

    def parse(self, item: ElementHandle) -> ReviewRecord:
        """
        Parse one review item.

        The item's visible text is read exactly once; a failure of that read
        propagates to the caller.

        Args:
            item: Handle to one rendered review

        Returns:
            ReviewRecord with at least one extracted field

        Raises:
            ExtractionSkip: If the item has no text or no field could be extracted
        """
        raw_text = item.read_visible_text() or ""
        if not raw_text.strip():
            raise ExtractionSkip("review item has no visible text")

        reviewer_name = extract_reviewer_name(item, raw_text)
        rating = extract_rating(item, raw_text)
        review_text = extract_review_text(item, raw_text, reviewer_name=reviewer_name)
        review_date = extract_review_date(item, raw_text)

        cleaned_text = clean_review_text(review_text) or None

        record = ReviewRecord(
            rating=rating,
            reviewer_name=reviewer_name,
            review_text=cleaned_text,
            review_date=review_date,
            source=self.source,
            raw_capture={
                "all_text": raw_text,
                "rating": rating,
                "reviewer_name": reviewer_name,
                "review_text": review_text,
                "review_date": review_date
            }
        )

        if not record.has_content():
            raise ExtractionSkip(
                f"no fields extracted from: {raw_text[:PREVIEW_CHARS]!r}",
                raw_text=raw_text
            )

        logger.debug(
            f"Extracted - Rating: {rating}, Name: {(reviewer_name or 'N/A')[:30]}, "
            f"Date: {review_date or 'N/A'}, Text: {(cleaned_text or 'N/A')[:50]}"
        )
        return record
