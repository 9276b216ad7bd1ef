"""
Field Extractors.

One extractor per review field (rating, reviewer name, review text,
relative date). Each runs an ordered list of strategies against a review
item handle plus its flattened text; the first strategy that produces a
value wins and later ones are never consulted.
"""

import logging
import re
from functools import partial
from typing import Callable, List, Optional

import config.settings as settings
from src.models.review import Rating, coerce_rating
from src.utils.renderer import ElementHandle
from src.utils.text_cleaning import (
    DATE_SUFFIX_PATTERN,
    RATING_LABEL_PATTERN,
    RATING_TEXT_PATTERN,
    RELATIVE_DATE_PATTERN,
    collapse_whitespace,
    is_date_line,
    is_rating_line,
    split_lines,
    strip_ratings_and_dates,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[ElementHandle, str], Optional[object]]

# Selectors for the markup-based tiers; each lists every known markup variant.
RATING_DESCRIPTOR = 'span[aria-label*="star"], [role="img"][aria-label*="star"], img[aria-label*="star"]'
REVIEWER_NAME_DESCRIPTOR = "a[href*='contrib'], button[aria-label*='Profile'], div.d4r55"
REVIEW_TEXT_DESCRIPTOR = "span[jsname='bN97Pc'], span.wiI7pd, span[class*='review-text'], div[class*='review-text']"
REVIEW_DATE_DESCRIPTOR = "span[jsname='T3Jpef'], span.rsqaWe, span[class*='date'], span[aria-label*='ago']"


def first_success(strategies: List[Strategy], item: ElementHandle, text: str, field: str):
    """
    Run strategies in order and return the first non-empty result.

    A strategy that raises counts as a miss; extraction failure is data,
    not an error.
    """
    for strategy in strategies:
        name = getattr(getattr(strategy, "func", strategy), "__name__", repr(strategy))
        try:
            value = strategy(item, text)
        except Exception as e:
            logger.debug(f"{field}: strategy {name} failed: {e}")
            continue

        if value is None or (isinstance(value, str) and not value.strip()):
            continue

        logger.debug(f"{field}: resolved by {name}")
        return value

    return None


def parse_rating(source: Optional[str], pattern: re.Pattern = RATING_TEXT_PATTERN) -> Optional[Rating]:
    """
    Parse a 1-5 star value out of a label or text.

    Returns None when nothing matches or the value is outside (0, 5].
    """
    if not source:
        return None

    match = pattern.search(source)
    if not match:
        return None

    value = float(match.group(1) or match.group(2))
    if value <= 0 or value > 5:
        return None
    return coerce_rating(value)


def _element_text(item: ElementHandle, descriptor: str) -> Optional[str]:
    element = item.first(descriptor)
    if element is None:
        return None
    return element.read_visible_text().strip() or None


# --- rating -------------------------------------------------------------

def rating_from_label(item: ElementHandle, text: str) -> Optional[Rating]:
    for element in item.locate(RATING_DESCRIPTOR):
        rating = parse_rating(element.read_attribute("aria-label"), RATING_LABEL_PATTERN)
        if rating is not None:
            return rating
    return None


def rating_from_text(item: ElementHandle, text: str) -> Optional[Rating]:
    return parse_rating(text, RATING_TEXT_PATTERN)


RATING_STRATEGIES: List[Strategy] = [rating_from_label, rating_from_text]


def extract_rating(item: ElementHandle, text: str) -> Optional[Rating]:
    return first_success(RATING_STRATEGIES, item, text, "rating")


# --- reviewer name ------------------------------------------------------

def name_from_profile_link(item: ElementHandle, text: str) -> Optional[str]:
    return _element_text(item, REVIEWER_NAME_DESCRIPTOR)


def name_from_first_line(item: ElementHandle, text: str) -> Optional[str]:
    lines = split_lines(text)
    if not lines:
        return None
    return DATE_SUFFIX_PATTERN.sub("", lines[0]).strip() or None


REVIEWER_NAME_STRATEGIES: List[Strategy] = [name_from_profile_link, name_from_first_line]


def extract_reviewer_name(item: ElementHandle, text: str) -> Optional[str]:
    return first_success(REVIEWER_NAME_STRATEGIES, item, text, "reviewer_name")


# --- review text --------------------------------------------------------

def text_from_element(item: ElementHandle, text: str) -> Optional[str]:
    return _element_text(item, REVIEW_TEXT_DESCRIPTOR)


def text_from_lines(item: ElementHandle, text: str, reviewer_name: Optional[str] = None) -> Optional[str]:
    """Everything after the name line, minus rating, date and repeated-name lines."""
    name = reviewer_name.strip() if reviewer_name else None
    kept = [
        line for line in split_lines(text)[1:]
        if not is_rating_line(line)
        and not is_date_line(line)
        and line != name
    ]
    return " ".join(kept).strip() or None


def text_from_residue(
    item: ElementHandle,
    text: str,
    reviewer_name: Optional[str] = None,
    min_length: int = settings.MIN_RESIDUE_TEXT_LENGTH
) -> Optional[str]:
    """Whole flattened text with name, ratings and dates cut out."""
    residue = text
    if reviewer_name:
        residue = re.sub(re.escape(reviewer_name), " ", residue, flags=re.IGNORECASE)
    residue = collapse_whitespace(strip_ratings_and_dates(residue))
    return residue if len(residue) > min_length else None


def extract_review_text(item: ElementHandle, text: str, reviewer_name: Optional[str] = None) -> Optional[str]:
    strategies = [
        text_from_element,
        partial(text_from_lines, reviewer_name=reviewer_name),
        partial(text_from_residue, reviewer_name=reviewer_name),
    ]
    return first_success(strategies, item, text, "review_text")


# --- relative date ------------------------------------------------------

def date_from_element(item: ElementHandle, text: str) -> Optional[str]:
    return _element_text(item, REVIEW_DATE_DESCRIPTOR)


def date_from_lines(item: ElementHandle, text: str) -> Optional[str]:
    for line in reversed(split_lines(text)):
        match = RELATIVE_DATE_PATTERN.search(line)
        if match:
            return match.group(0)
    return None


REVIEW_DATE_STRATEGIES: List[Strategy] = [date_from_element, date_from_lines]


def extract_review_date(item: ElementHandle, text: str) -> Optional[str]:
    return first_success(REVIEW_DATE_STRATEGIES, item, text, "review_date")
