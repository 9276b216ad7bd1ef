"""
Review data models.

ReviewRecord is what the scraper extracts and the store persists.
ScoredReview is an analysis-only view of a record with its sentiment score.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

Rating = Union[int, float]


def coerce_rating(value) -> Optional[Rating]:
    """
    Turn a stored rating into a number, or None if it isn't one.

    Integral values come back as int so "4" and 4.0 both read as 4.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    if number.is_integer():
        return int(number)
    return number


@dataclass(frozen=True)
class ReviewRecord:
    """
    One review scraped from a competitor's public review page.

    Every field except source may be missing; a record is only worth keeping
    if has_content() is True.
    """
    rating: Optional[Rating] = None  # 1-5 stars, None if unrecoverable
    reviewer_name: Optional[str] = None
    review_text: Optional[str] = None  # cleaned of UI noise
    review_date: Optional[str] = None  # relative string, e.g. "3 months ago"
    source: str = "google_maps"
    raw_capture: dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.source:
            raise ValueError("ReviewRecord.source must be a non-empty tag")

    def has_content(self) -> bool:
        """True if at least one extracted field is present."""
        return any(
            value is not None
            for value in (self.rating, self.review_text, self.reviewer_name, self.review_date)
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewRecord":
        """Create ReviewRecord from JSON dict."""
        return cls(
            rating=coerce_rating(data.get("rating")),
            reviewer_name=data.get("reviewer_name"),
            review_text=data.get("review_text"),
            review_date=data.get("review_date"),
            source=data.get("source") or "google_maps",
            raw_capture=data.get("raw_capture") or {}
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "rating": self.rating,
            "reviewer_name": self.reviewer_name,
            "review_text": self.review_text,
            "review_date": self.review_date,
            "source": self.source,
            "raw_capture": self.raw_capture
        }


@dataclass
class ScoredReview:
    """Cleaned review text with its lexicon sentiment score."""
    text: str
    score: int
    rating: Rating  # 0 when the record had no rating
