"""
Text cleaning utility.

Patterns and helpers shared by the field extractors and the analysis engine:
UI-noise stripping, rating/date recognition, line splitting and keyword
tokenization.
"""

import re
from typing import List, Optional

# "Rated 4 out of 5" / "4 stars" as found in aria-labels
RATING_LABEL_PATTERN = re.compile(
    r"Rated\s+(\d+(?:\.\d+)?)\s+out of 5|(\d+(?:\.\d+)?)\s*stars?",
    re.IGNORECASE
)

# "4 out of 5" / "4/5" / "4 stars" anywhere in flattened text
RATING_TEXT_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:out of|/)\s*5|(\d+(?:\.\d+)?)\s*stars?",
    re.IGNORECASE
)

_TIME_UNITS = r"(?:minute|hour|day|week|month|year)s?"

# "3 months ago", "a week ago"
RELATIVE_DATE_PATTERN = re.compile(
    rf"(?:\d+|\ban?\b)\s*{_TIME_UNITS}\s*ago\b",
    re.IGNORECASE
)

# A name line that swallowed the date, e.g. "Jane Doe 2 months ago"
DATE_SUFFIX_PATTERN = re.compile(
    rf"\s*(?:\d+|\ban?\b)\s*{_TIME_UNITS}\s*ago.*$",
    re.IGNORECASE
)

_LOCAL_GUIDE = re.compile(r"Local Guide(?:\s*[·•]\s*\d[\d.,]*\s+[^\s·•]+)*", re.IGNORECASE)
_COUNTERS = re.compile(r"\b\d[\d.,]*\s+(?:reviews?|photos?|foto'?s?)\b", re.IGNORECASE)
_BOILERPLATE = re.compile(
    r"\b(?:Meer|More|Like|Delen|Share|reviews?|photos?|foto'?s?)\b",
    re.IGNORECASE
)
# Private-use-area icon glyphs plus separators and star characters
_GLYPHS = re.compile("[\ue000-\uf8ff\u00b7\u2022\u2605\u2606]")
_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

STOPWORDS = frozenset([
    "the", "a", "an", "and", "or", "to", "of", "in", "on", "for", "with",
    "is", "it", "this", "that", "was", "were", "are", "at", "as", "but",
    "be", "have", "has", "had", "they", "them", "you", "your", "we", "our",
    "i", "he", "she", "their", "from", "so", "if", "not", "very", "just",
    "my", "me", "us",
])

MIN_KEYWORD_LENGTH = 3


def clean_review_text(raw: Optional[str]) -> str:
    """
    Strip UI boilerplate from review text.

    Removes "Local Guide · N reviews · N photos" prefixes, review/photo
    counters, localized button words (More/Meer, Like, Share/Delen),
    decorative glyphs, then collapses whitespace.

    Args:
        raw: Text as captured from the page or read back from storage

    Returns:
        Cleaned text, possibly empty
    """
    if not raw:
        return ""

    text = _LOCAL_GUIDE.sub(" ", raw)
    text = _COUNTERS.sub(" ", text)
    text = _BOILERPLATE.sub(" ", text)
    text = _GLYPHS.sub(" ", text)
    return collapse_whitespace(text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def split_lines(text: str) -> List[str]:
    """Split flattened text into stripped, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def is_rating_line(line: str) -> bool:
    return RATING_TEXT_PATTERN.search(line) is not None


def is_date_line(line: str) -> bool:
    return RELATIVE_DATE_PATTERN.search(line) is not None


def strip_ratings_and_dates(text: str) -> str:
    text = RATING_TEXT_PATTERN.sub(" ", text)
    return RELATIVE_DATE_PATTERN.sub(" ", text)


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase keyword tokens.

    Anything outside [a-z0-9] separates tokens. Tokens shorter than
    MIN_KEYWORD_LENGTH and stopwords are dropped.
    """
    tokens = _NON_ALNUM.sub(" ", text.lower()).split()
    return [t for t in tokens if len(t) >= MIN_KEYWORD_LENGTH and t not in STOPWORDS]
